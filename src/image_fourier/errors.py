"""Exception types raised by the Fourier toolkit."""

__all__ = ['FourierError', 'StateError', 'ValidationError', 'DimensionError']


class FourierError(Exception):
    """Base class for all toolkit errors."""


class StateError(FourierError, RuntimeError):
    """Operation needs a Fourier transform but none has been applied."""


class ValidationError(FourierError, ValueError):
    """A parameter is out of range (negative cutoff, mismatched shape, ...)."""


class DimensionError(FourierError, ValueError):
    """Input grid is empty or does not have the expected number of dimensions."""
