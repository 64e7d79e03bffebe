"""Direct (brute-force) Discrete Fourier Transform with a centered frequency axis.

The forward transform reads spatial samples n = 0..N-1 and writes frequencies
k = -(N//2) .. N - N//2 - 1 to positions k + N//2, so the DC term lands at
index N//2 (the fftshift layout) without an fftshift step. The inverse
reads that centered layout back and writes spatial samples 0..N-1.

Every call evaluates the full N x N kernel: O(N^2) per axis, O(N^3) for an
N x N image. This is meant for small and medium images only.
"""

import logging

import numpy as np
from tqdm import tqdm

from image_fourier.errors import DimensionError
from image_fourier.grid import as_complex_grid

logger = logging.getLogger(__name__)

__all__ = ['centered_frequencies', 'dft_kernel', 'dft', 'dft2']

# Grids with a side above this log a warning about the cubic cost
LARGE_GRID_WARNING = 512


def centered_frequencies(n: int) -> np.ndarray:
    """
    Frequency indices for a sequence of length n, centered on zero.

    Args:
        n: Sequence length

    Returns:
        Integer array [-(n//2), ..., n - n//2 - 1], zero at index n//2
    """
    return np.arange(-(n // 2), n - n // 2)


def dft_kernel(n: int, inverse: bool = False) -> np.ndarray:
    """
    Build the n x n transform matrix.

    Rows are output positions, columns are input positions. The forward
    kernel maps spatial input to centered frequencies; the inverse kernel maps
    centered frequencies back to spatial positions (without the 1/n factor).
    """
    if n <= 0:
        raise DimensionError(f"Sequence length must be positive, got {n}")

    spatial = np.arange(n)
    centered = centered_frequencies(n)
    if inverse:
        outputs, inputs, sign = spatial, centered, 1.0
    else:
        outputs, inputs, sign = centered, spatial, -1.0

    return np.exp(sign * 2j * np.pi * np.outer(outputs, inputs) / n)


def dft(sequence, inverse: bool = False) -> np.ndarray:
    """
    Compute the 1D DFT (or inverse DFT) of a single sequence.

    Args:
        sequence: 1D array-like of real or complex values
        inverse: If True, treat the input as centered frequency data and
            return spatial samples divided by the sequence length

    Returns:
        complex128 array with the same length as the input

    Raises:
        DimensionError: If the sequence is empty or not 1D
    """
    values = np.asarray(sequence, dtype=np.complex128)
    if values.ndim != 1:
        raise DimensionError(f"Expected 1D sequence, got {values.ndim}D array with shape {values.shape}")
    if values.size == 0:
        raise DimensionError("Sequence is empty")

    n = values.size
    output = dft_kernel(n, inverse) @ values
    if inverse:
        output /= n
    return output


def dft2(grid, inverse: bool = False, show_progress: bool = False) -> np.ndarray:
    """
    Compute the separable 2D DFT: every row first, then every column.

    Args:
        grid: 2D array-like (H, W), real or complex. Not modified.
        inverse: Direction of the transform, used for both passes
        show_progress: Show tqdm progress bars for the row and column passes

    Returns:
        New complex128 array of shape (H, W)

    Raises:
        DimensionError: If the grid is empty or not 2D
    """
    data = as_complex_grid(grid)
    rows, cols = data.shape

    if max(rows, cols) > LARGE_GRID_WARNING:
        logger.warning(
            f"Direct DFT on a {rows}x{cols} grid costs O(N^3); expect a long computation"
        )
    logger.debug(f"Computing {'inverse' if inverse else 'forward'} 2D DFT for grid shape: {data.shape}")

    output = np.empty_like(data)
    for i in tqdm(range(rows), desc="Computing rows", disable=not show_progress, leave=False):
        output[i, :] = dft(data[i, :], inverse)

    for j in tqdm(range(cols), desc="Computing columns", disable=not show_progress, leave=False):
        output[:, j] = dft(output[:, j], inverse)

    return output
