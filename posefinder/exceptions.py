"""
Errors raised by the pose decoder.
"""


class PoseFinderError(Exception):
    """Base class for decoder errors."""


class ShapeMismatch(PoseFinderError, ValueError):
    """A tensor does not have the channel count or grid size the decoder expects."""


class InvalidConfiguration(PoseFinderError, ValueError):
    """A decoder parameter is outside its allowed range."""


class OutOfBounds(PoseFinderError, IndexError):
    """A (channel, row, col) index falls outside a tensor."""
