"""
Exception and warning types raised by the AMOI pipeline.

Fatal shape problems subclass ``ValueError`` so callers that already catch
``ValueError`` keep working. Too-few-points conditions are soft: they are
issued as warnings and the affected series comes back all-NaN.
"""

__all__ = ["SSTIndexError", "ShapeMismatchError", "GridShapeMismatchError", "InsufficientDataWarning"]

class SSTIndexError(ValueError):
    """Base class for fatal AMOI input errors."""

class ShapeMismatchError(SSTIndexError):
    """Length of the time axis matches no usable dimension of the SST data."""

class GridShapeMismatchError(SSTIndexError):
    """Latitude/longitude grids are missing, 1-D, or disagree with the SST grid."""

class InsufficientDataWarning(UserWarning):
    """Too few valid samples to fit a trend; the result is all-missing."""
