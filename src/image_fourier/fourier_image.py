"""Image wrapper that owns a Fourier transform and filters it in the frequency domain."""

import logging
from typing import List, Optional, Union

import numpy as np

from image_fourier import filters
from image_fourier.dft import dft2
from image_fourier.errors import StateError, ValidationError
from image_fourier.grid import normalize
from image_fourier.image import Image

logger = logging.getLogger(__name__)

__all__ = ['FourierImage', 'FILTER_TYPES', 'LOG_EPSILON']

FILTER_TYPES = ("low", "high", "band")

# Added to the magnitude before taking the log, avoids log(0)
LOG_EPSILON = 1e-8


class FourierImage:
    """
    Image plus an optional centered 2D Fourier transform.

    The instance starts without a transform. apply_transform() computes it
    from the (grayscale-reduced) image; filters then edit it in place, and
    apply_inverse_transform() turns it back into a new FourierImage.
    """

    def __init__(self, image: Union[Image, np.ndarray, List[np.ndarray]]):
        """
        Args:
            image: Image instance, or pixel data accepted by Image
                (2D array, (H, W, C) array, or list of channel arrays)
        """
        self._image = image.copy() if isinstance(image, Image) else Image(image)
        self._transform: Optional[np.ndarray] = None

    @classmethod
    def load(cls, image_path) -> "FourierImage":
        """Load an image file (see Image.load) without transforming it."""
        return cls(Image.load(image_path))

    # Image delegation

    @property
    def image(self) -> Image:
        return self._image.copy()

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def channels(self) -> int:
        return self._image.channels

    def get_data(self, channel: int = 0) -> np.ndarray:
        return self._image.get_data(channel)

    def reduce_channels(self) -> Image:
        return self._image.reduce_channels()

    def save(self, image_path):
        return self._image.save(image_path)

    # Transforms

    @property
    def has_transform(self) -> bool:
        return self._transform is not None

    def _require_transform(self) -> np.ndarray:
        if self._transform is None:
            raise StateError("No transform has been applied to the image.")
        return self._transform

    def apply_transform(self, show_progress: bool = False) -> None:
        """
        Compute and store the forward transform of the image.

        Multi-channel images are reduced to grayscale first. Calling this again
        recomputes the transform and discards any filtering applied to it.

        Args:
            show_progress: Show progress bars for the row and column passes
        """
        if self.channels > 1:
            logger.info(f"Converting {self.channels}-channel image to grayscale before transform")
            source = self._image.reduce_channels().get_data(0)
        else:
            source = self._image.get_data(0)

        self._transform = dft2(source, inverse=False, show_progress=show_progress)
        logger.debug(f"Stored forward transform with shape {self._transform.shape}")

    def apply_inverse_transform(self, show_progress: bool = False) -> "FourierImage":
        """
        Invert the stored (possibly filtered) transform.

        The stored transform is left untouched. The result is a new
        FourierImage whose pixels are the min-max normalized real part of the
        inverse, and which carries a copy of this transform rather than one
        recomputed from its own pixels.

        Args:
            show_progress: Show progress bars for the row and column passes

        Returns:
            New FourierImage with the spatial-domain result

        Raises:
            StateError: If no transform has been applied
        """
        transform = self._require_transform()
        output = dft2(transform, inverse=True, show_progress=show_progress)

        result = FourierImage(normalize(output.real))
        result.set_transform(transform)
        return result

    # Transform views

    def get_transform(self) -> np.ndarray:
        """Return a copy of the stored transform."""
        return self._require_transform().copy()

    def get_magnitude(self, log: bool = False) -> np.ndarray:
        """
        Magnitude of the transform, optionally as log(|X| + 1e-8).

        Raises:
            StateError: If no transform has been applied
        """
        magnitude = np.abs(self._require_transform())
        if log:
            magnitude = np.log(magnitude + LOG_EPSILON)
        return magnitude

    def get_phase(self) -> np.ndarray:
        """Phase atan2(imag, real) of the transform."""
        return np.angle(self._require_transform())

    def get_real(self) -> np.ndarray:
        return self._require_transform().real.copy()

    def get_imaginary(self) -> np.ndarray:
        return self._require_transform().imag.copy()

    def set_transform(self, transform: np.ndarray) -> None:
        """
        Replace the stored transform with a copy of the given grid.

        Raises:
            ValidationError: If the grid shape is not (height, width)
        """
        array = np.asarray(transform)
        if array.shape != (self.height, self.width):
            raise ValidationError(
                f"Invalid transform size: expected {(self.height, self.width)}, got {array.shape}"
            )
        self._transform = array.astype(np.complex128, copy=True)

    def magnitude_image(self, log: bool = True) -> Image:
        """Normalized magnitude as a displayable Image."""
        return Image(normalize(self.get_magnitude(log=log)))

    def phase_image(self) -> Image:
        """Normalized phase as a displayable Image."""
        return Image(normalize(self.get_phase()))

    # Filters

    def apply_low_pass_filter(self, cutoff: float) -> None:
        """
        Keep frequencies strictly inside cutoff * min(height, width) / 2.

        Raises:
            StateError: If no transform has been applied
            ValidationError: If cutoff is negative
        """
        filters.apply_low_pass(self._require_transform(), cutoff)

    def apply_high_pass_filter(self, cutoff: float) -> None:
        """
        Keep frequencies strictly outside cutoff * min(height, width) / 2.

        Raises:
            StateError: If no transform has been applied
            ValidationError: If cutoff is negative
        """
        filters.apply_high_pass(self._require_transform(), cutoff)

    def apply_band_pass_filter(self, low_cutoff: float, high_cutoff: float) -> None:
        """
        High-pass at low_cutoff, then low-pass at high_cutoff.

        Raises:
            StateError: If no transform has been applied
            ValidationError: If low_cutoff > high_cutoff or a cutoff is negative
        """
        filters.apply_band_pass(self._require_transform(), low_cutoff, high_cutoff)

    def apply_filter(self, filter_type: str, low_cutoff: float, high_cutoff: float) -> None:
        """
        Apply a filter by name.

        "low" keeps everything inside high_cutoff, "high" removes everything
        inside low_cutoff, "band" keeps the ring between the two.
        """
        if filter_type == "low":
            self.apply_low_pass_filter(high_cutoff)
        elif filter_type == "high":
            self.apply_high_pass_filter(low_cutoff)
        elif filter_type == "band":
            self.apply_band_pass_filter(low_cutoff, high_cutoff)
        else:
            raise ValidationError(
                f"Invalid filter type: {filter_type!r} (expected one of {', '.join(FILTER_TYPES)})"
            )
        logger.info(
            f"Applied {filter_type}-pass filter (low_cutoff={low_cutoff}, high_cutoff={high_cutoff})"
        )

    # Value semantics

    def copy(self) -> "FourierImage":
        clone = FourierImage(self._image)
        if self._transform is not None:
            clone._transform = self._transform.copy()
        return clone

    def __copy__(self) -> "FourierImage":
        return self.copy()

    def __deepcopy__(self, memo) -> "FourierImage":
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, FourierImage):
            return NotImplemented
        if self._image != other._image:
            return False
        if self._transform is None or other._transform is None:
            return self._transform is None and other._transform is None
        return np.array_equal(self._transform, other._transform)

    def __repr__(self) -> str:
        return (
            f"FourierImage(height={self.height}, width={self.width}, "
            f"channels={self.channels}, has_transform={self.has_transform})"
        )
