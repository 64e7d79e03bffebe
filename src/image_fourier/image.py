"""Multi-channel image container with Pillow-backed loading and saving."""

import logging
from pathlib import Path
from typing import List, Union

import numpy as np
from PIL import Image as PILImage

from image_fourier.errors import DimensionError

logger = logging.getLogger(__name__)

__all__ = ['Image', 'SUPPORTED_FORMATS', 'GRAYSCALE_WEIGHTS']

SUPPORTED_FORMATS = [".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff"]

# Rec. 709 luma coefficients, used for 3-channel (RGB) images
GRAYSCALE_WEIGHTS = (0.2126, 0.7152, 0.0722)


class Image:
    """
    Image stored as a list of float64 channel grids with values in [0, 1].

    Instances own copies of their data; nothing returned by the accessors
    aliases the internal arrays.
    """

    def __init__(self, data: Union[np.ndarray, List[np.ndarray]]):
        """
        Build an image from pixel data.

        Args:
            data: 2D array (single channel), 3D array shaped (H, W, C), or a
                list of equally shaped 2D arrays (one per channel)

        Raises:
            DimensionError: If the data is empty, has the wrong number of
                dimensions, or the channels differ in shape
        """
        if isinstance(data, (list, tuple)):
            channels = [np.array(channel, dtype=np.float64, copy=True) for channel in data]
        else:
            array = np.array(data, dtype=np.float64, copy=True)
            if array.ndim == 2:
                channels = [array]
            elif array.ndim == 3:
                channels = [array[:, :, c].copy() for c in range(array.shape[2])]
            else:
                raise DimensionError(
                    f"Expected 2D or 3D array, got {array.ndim}D array with shape {array.shape}"
                )

        if not channels:
            raise DimensionError("Image has no channels")
        shape = channels[0].shape
        for channel in channels:
            if channel.ndim != 2:
                raise DimensionError(f"Channels must be 2D, got shape {channel.shape}")
            if channel.size == 0:
                raise DimensionError("Image array is empty")
            if channel.shape != shape:
                raise DimensionError(
                    f"All channels must share one shape, got {shape} and {channel.shape}"
                )

        self._data = channels

    @classmethod
    def load(cls, image_path: Union[str, Path]) -> "Image":
        """
        Load an image from disk, scaling pixel values to [0, 1].

        Grayscale files give a single channel; anything else is converted to RGB.

        Args:
            image_path: Path to the image file

        Returns:
            Loaded Image
        """
        path = Path(image_path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        if path.suffix.lower() not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported image format: {path.suffix}")

        logger.debug(f"Loading image: {image_path}")
        try:
            img = PILImage.open(path)
            # verify() leaves the file unusable, so reopen afterwards
            img.verify()
            img = PILImage.open(path)
        except Exception as e:
            raise ValueError(f"Failed to load or verify image {image_path}: {e}")

        if img.mode not in ("L", "RGB"):
            original_mode = img.mode
            img = img.convert("RGB")
            logger.debug(f"Converted image from {original_mode} to RGB")

        img_array = np.array(img, dtype=np.float64) / 255.0
        return cls(img_array)

    def save(self, image_path: Union[str, Path]) -> Path:
        """
        Write the image to disk as 8-bit data, clipping values to [0, 1].

        Returns:
            The path written
        """
        path = Path(image_path)
        if path.suffix.lower() not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported image format: {path.suffix}")
        path.parent.mkdir(parents=True, exist_ok=True)

        if self.channels not in (1, 3):
            logger.warning(
                f"Cannot save {self.channels}-channel image directly, saving grayscale reduction"
            )
            return self.reduce_channels().save(path)

        pixels = np.round(np.clip(self.to_array(), 0.0, 1.0) * 255.0).astype(np.uint8)
        PILImage.fromarray(pixels).save(path)
        logger.info(f"Saved image to {path}")
        return path

    @property
    def height(self) -> int:
        return self._data[0].shape[0]

    @property
    def width(self) -> int:
        return self._data[0].shape[1]

    @property
    def channels(self) -> int:
        return len(self._data)

    @property
    def shape(self):
        return self.height, self.width

    def get_data(self, channel: int = 0) -> np.ndarray:
        """Return a copy of one channel grid."""
        if not 0 <= channel < self.channels:
            raise IndexError(f"Channel {channel} out of range for {self.channels}-channel image")
        return self._data[channel].copy()

    def to_array(self) -> np.ndarray:
        """Return the pixel data as (H, W) for one channel, else (H, W, C)."""
        if self.channels == 1:
            return self._data[0].copy()
        return np.stack(self._data, axis=-1)

    def reduce_channels(self) -> "Image":
        """
        Convert to a single grayscale channel.

        Three channels use perceptual (Rec. 709) weights; any other count is
        averaged. A single-channel image is returned as a copy.
        """
        if self.channels == 1:
            return self.copy()

        if self.channels == 3:
            gray = sum(weight * channel for weight, channel in zip(GRAYSCALE_WEIGHTS, self._data))
        else:
            logger.warning(
                f"Perceptual grayscale conversion needs 3 channels; "
                f"averaging {self.channels} channels instead"
            )
            gray = np.mean(self._data, axis=0)
        return Image(gray)

    def copy(self) -> "Image":
        return Image(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self.channels == other.channels and all(
            np.array_equal(a, b) for a, b in zip(self._data, other._data)
        )

    def __repr__(self) -> str:
        return f"Image(height={self.height}, width={self.width}, channels={self.channels})"
