"""
Custom exceptions for the hand gesture recognition system.

The classifier itself never raises on landmark input; these cover the layers
around it (configuration, recordings, the tracker adapter).
"""


class HandsignError(Exception):
    """Base exception for handsign errors."""
    pass


class ConfigError(HandsignError):
    """Raised when a configuration file is malformed or missing sections."""
    pass


class LandmarkFormatError(HandsignError):
    """Raised when strict coercion cannot turn input into a 21-point landmark set."""
    pass


class RecordingError(HandsignError):
    """Raised when a landmark recording cannot be read or parsed."""
    pass


class TrackerError(HandsignError):
    """Raised when the hand tracker cannot process an input image."""
    pass
