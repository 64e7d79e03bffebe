"""Grid helpers shared by the transform, filter and image modules."""

import logging
from typing import Tuple

import numpy as np

from image_fourier.errors import DimensionError

logger = logging.getLogger(__name__)

__all__ = ['as_complex_grid', 'normalize', 'get_center_coords', 'radial_distance']


def _check_grid(array: np.ndarray, name: str) -> None:
    if array.size == 0:
        raise DimensionError(f"{name} is empty")
    if array.ndim != 2:
        raise DimensionError(
            f"Expected 2D {name.lower()}, got {array.ndim}D array with shape {array.shape}"
        )


def as_complex_grid(grid) -> np.ndarray:
    """
    Promote a 2D grid to a complex128 copy.

    Args:
        grid: Real or complex 2D array-like (H, W)

    Returns:
        New complex128 array, never a view of the input

    Raises:
        DimensionError: If the grid is empty or not 2D
    """
    array = np.array(grid, dtype=np.complex128, copy=True)
    _check_grid(array, "Grid")
    return array


def normalize(grid) -> np.ndarray:
    """
    Min-max rescale a real grid to [0, 1].

    A constant grid has no range to stretch and maps to all zeros.

    Args:
        grid: Real 2D array-like

    Returns:
        float64 array with values in [0, 1]
    """
    array = np.array(grid, dtype=np.float64, copy=True)
    _check_grid(array, "Grid")

    lo = array.min()
    hi = array.max()
    if hi == lo:
        logger.debug(f"Constant grid (value {lo}), normalizing to zeros")
        return np.zeros_like(array)
    return (array - lo) / (hi - lo)


def get_center_coords(shape: Tuple[int, int]) -> Tuple[int, int]:
    """Get the integer frequency center ((rows - 1) // 2, (cols - 1) // 2) for a shape."""
    return (shape[0] - 1) // 2, (shape[1] - 1) // 2


def radial_distance(shape: Tuple[int, int]) -> np.ndarray:
    """
    Distance of every grid position from the frequency center.

    Args:
        shape: (rows, cols) of the transform grid

    Returns:
        float64 array of shape (rows, cols)
    """
    rows, cols = shape
    if rows <= 0 or cols <= 0:
        raise DimensionError(f"Grid shape must be positive, got {shape}")

    center_i, center_j = get_center_coords(shape)
    i_coords, j_coords = np.ogrid[:rows, :cols]
    return np.sqrt((i_coords - center_i) ** 2 + (j_coords - center_j) ** 2)
