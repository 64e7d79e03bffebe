"""Basic usage example for the Fourier filtering toolkit."""

import logging
from pathlib import Path

import numpy as np

from image_fourier import FourierImage
from image_fourier.visualization import plot_fourier_overview

# Configure logging
logging.basicConfig(level=logging.INFO)


def make_test_pattern(size: int = 64) -> np.ndarray:
    """Smooth blob plus a fine stripe pattern, values in [0, 1]."""
    y, x = np.mgrid[:size, :size] / size
    blob = np.exp(-((x - 0.5) ** 2 + (y - 0.5) ** 2) / 0.05)
    stripes = 0.5 + 0.5 * np.sin(2 * np.pi * 12 * x)
    return 0.7 * blob + 0.3 * stripes


# Example: separate coarse and fine structure
def filter_test_pattern():
    """Low-pass and high-pass the same pattern and compare."""
    image = FourierImage(make_test_pattern())
    image.apply_transform(show_progress=True)

    print(f"\nTransform of {image.width}x{image.height} pattern")
    print(f"DC magnitude: {image.get_magnitude().max():.4f}")

    low = image.copy()
    low.apply_low_pass_filter(0.2)
    blurred = low.apply_inverse_transform()

    high = image.copy()
    high.apply_high_pass_filter(0.2)
    stripes = high.apply_inverse_transform()

    output_dir = Path("output")
    plot_fourier_overview(image, blurred, output_dir / "low_pass.png", title="Low-pass (0.2)")
    plot_fourier_overview(image, stripes, output_dir / "high_pass.png", title="High-pass (0.2)")
    print(f"Saved figures to {output_dir}/")


# Example: filter an image file
def filter_image_file():
    """Band-pass an image from disk."""
    image_path = Path("images/teapot.png")

    if not image_path.exists():
        print(f"Image not found: {image_path}")
        print("Please provide a valid image path")
        return

    image = FourierImage.load(image_path)
    image.apply_transform(show_progress=True)
    image.apply_band_pass_filter(0.1, 0.6)
    result = image.apply_inverse_transform(show_progress=True)
    result.save("output/teapot_band.png")


if __name__ == "__main__":
    print("=" * 60)
    print("Fourier Filtering - Basic Usage Example")
    print("=" * 60)

    filter_test_pattern()

    print("\n" + "=" * 60)
    print("\n")

    filter_image_file()
