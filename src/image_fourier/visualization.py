"""Matplotlib rendering of spatial images and their Fourier transforms."""

import logging
from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import numpy as np

from image_fourier.fourier_image import FourierImage
from image_fourier.grid import normalize
from image_fourier.image import Image

logger = logging.getLogger(__name__)

__all__ = ['show_grid', 'save_grid', 'plot_fourier_overview']


def _as_display_grid(data: Union[Image, np.ndarray]) -> np.ndarray:
    if isinstance(data, Image):
        data = data.reduce_channels().get_data(0)
    return normalize(data)


def _finish(fig, output_path: Optional[Path]) -> Optional[Path]:
    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        logger.info(f"Figure saved to: {output_path}")
    else:
        plt.show()
    plt.close(fig)
    return output_path


def show_grid(data: Union[Image, np.ndarray], title: str = "window") -> None:
    """Display a grid (normalized to [0, 1]) in a grayscale window."""
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(_as_display_grid(data), cmap="gray", vmin=0.0, vmax=1.0)
    ax.set_title(title, fontweight="bold")
    ax.axis("off")
    _finish(fig, None)


def save_grid(data: Union[Image, np.ndarray], output_path: Union[str, Path], title: str = "") -> Path:
    """Render a grid (normalized to [0, 1]) to an image file with matplotlib."""
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(_as_display_grid(data), cmap="gray", vmin=0.0, vmax=1.0)
    if title:
        ax.set_title(title, fontweight="bold")
    ax.axis("off")
    return _finish(fig, Path(output_path))


def plot_fourier_overview(
    original: FourierImage,
    inverse: FourierImage,
    output_path: Optional[Union[str, Path]] = None,
    title: str = "Fourier Filtering",
) -> Optional[Path]:
    """
    Plot original image, log magnitude, phase and the inverse transform side by side.

    Magnitude and phase are taken from the inverse result, which carries the
    filtered transform that produced it.

    Args:
        original: Source image (transform not required)
        inverse: Result of apply_inverse_transform()
        output_path: Optional path to save the figure; shown interactively if None
        title: Figure title

    Returns:
        The saved path, or None when shown interactively
    """
    fig, axes = plt.subplots(1, 4, figsize=(20, 5.5))
    fig.suptitle(title, fontsize=16, fontweight="bold")

    panels = [
        ("Original Image (Grayscale)", _as_display_grid(original.image), "gray"),
        ("Magnitude (log)", inverse.magnitude_image(log=True).get_data(0), "hot"),
        ("Phase", inverse.phase_image().get_data(0), "twilight"),
        ("Inverse Transform", inverse.get_data(0), "gray"),
    ]
    for ax, (panel_title, grid, cmap) in zip(axes, panels):
        ax.imshow(grid, cmap=cmap, vmin=0.0, vmax=1.0)
        ax.set_title(panel_title, fontsize=12, fontweight="bold")
        ax.axis("off")

    plt.tight_layout()
    return _finish(fig, output_path)
