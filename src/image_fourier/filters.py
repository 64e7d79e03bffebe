"""Radial frequency-domain filters for centered transform grids.

The filters zero coefficients in place. Distances are measured from the
integer center ((rows - 1) // 2, (cols - 1) // 2). For odd sizes that is the
DC term; for even sizes it sits one sample above and left of DC. Cutoffs are
given relative to half of the smaller grid side, so a cutoff of 1.0 is the
largest circle that fits in the grid.

Both single-edge filters zero the ring lying exactly on the cutoff radius:
low-pass removes distance >= radius, high-pass removes distance <= radius.
"""

import logging
from typing import Tuple

import numpy as np

from image_fourier.errors import DimensionError, ValidationError
from image_fourier.grid import radial_distance

logger = logging.getLogger(__name__)

__all__ = [
    'cutoff_radius',
    'low_pass_mask',
    'high_pass_mask',
    'apply_low_pass',
    'apply_high_pass',
    'apply_band_pass',
]


def _validate_cutoff(cutoff: float) -> None:
    if not cutoff >= 0:
        raise ValidationError(f"Cutoff must be non-negative, got {cutoff}")


def _check_transform(transform: np.ndarray) -> None:
    if not isinstance(transform, np.ndarray):
        raise TypeError(f"Filters work in place on numpy arrays, got {type(transform).__name__}")
    if transform.size == 0:
        raise DimensionError("Transform array is empty")
    if transform.ndim != 2:
        raise DimensionError(
            f"Expected 2D transform, got {transform.ndim}D array with shape {transform.shape}"
        )


def cutoff_radius(shape: Tuple[int, int], cutoff: float) -> float:
    """Convert a relative cutoff to a radius in grid units."""
    return cutoff * min(shape) / 2


def low_pass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """
    Boolean mask of the coefficients a low-pass filter keeps.

    Args:
        shape: (rows, cols) of the transform grid
        cutoff: Relative radius of the kept disc (>= 0)

    Returns:
        Boolean array, True strictly inside the cutoff radius
    """
    _validate_cutoff(cutoff)
    return radial_distance(shape) < cutoff_radius(shape, cutoff)


def high_pass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """
    Boolean mask of the coefficients a high-pass filter keeps.

    Args:
        shape: (rows, cols) of the transform grid
        cutoff: Relative radius of the removed disc (>= 0)

    Returns:
        Boolean array, True strictly outside the cutoff radius
    """
    _validate_cutoff(cutoff)
    return radial_distance(shape) > cutoff_radius(shape, cutoff)


def apply_low_pass(transform: np.ndarray, cutoff: float) -> np.ndarray:
    """
    Zero every coefficient at or beyond the cutoff radius, in place.

    Args:
        transform: Centered complex transform grid (modified)
        cutoff: Relative radius of the kept disc (>= 0)

    Returns:
        The same array, for chaining

    Raises:
        ValidationError: If cutoff is negative or NaN
        DimensionError: If the transform is empty or not 2D
    """
    _check_transform(transform)
    keep = low_pass_mask(transform.shape, cutoff)
    transform[~keep] = 0

    logger.debug(
        f"Low-pass cutoff {cutoff}: kept {keep.sum()} of {keep.size} coefficients"
    )
    return transform


def apply_high_pass(transform: np.ndarray, cutoff: float) -> np.ndarray:
    """
    Zero every coefficient at or inside the cutoff radius, in place.

    Args:
        transform: Centered complex transform grid (modified)
        cutoff: Relative radius of the removed disc (>= 0)

    Returns:
        The same array, for chaining

    Raises:
        ValidationError: If cutoff is negative or NaN
        DimensionError: If the transform is empty or not 2D
    """
    _check_transform(transform)
    keep = high_pass_mask(transform.shape, cutoff)
    transform[~keep] = 0

    logger.debug(
        f"High-pass cutoff {cutoff}: kept {keep.sum()} of {keep.size} coefficients"
    )
    return transform


def apply_band_pass(transform: np.ndarray, low_cutoff: float, high_cutoff: float) -> np.ndarray:
    """
    High-pass at low_cutoff, then low-pass at high_cutoff, in place.

    Equal cutoffs remove everything.

    Raises:
        ValidationError: If low_cutoff > high_cutoff or either cutoff is negative or NaN
    """
    if low_cutoff > high_cutoff:
        raise ValidationError(
            f"Lower cutoff must not exceed upper cutoff, got {low_cutoff} > {high_cutoff}"
        )
    if not (low_cutoff >= 0 and high_cutoff >= 0):
        raise ValidationError(
            f"Cutoffs must be non-negative, got ({low_cutoff}, {high_cutoff})"
        )

    apply_high_pass(transform, low_cutoff)
    return apply_low_pass(transform, high_cutoff)
