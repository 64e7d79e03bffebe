"""Image Fourier - direct 2D DFT and frequency-domain filtering toolkit"""

__version__ = "0.1.0"

from .dft import dft, dft2
from .errors import DimensionError, FourierError, StateError, ValidationError
from .fourier_image import FourierImage
from .image import Image

__all__ = [
    "dft",
    "dft2",
    "FourierImage",
    "Image",
    "FourierError",
    "StateError",
    "ValidationError",
    "DimensionError",
]
