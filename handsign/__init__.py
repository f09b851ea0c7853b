"""
Hand Gesture Recognition

Classifies the 21 hand landmarks produced by a hand tracker (MediaPipe Hands)
into one of a fixed set of named gestures, one frame at a time.
"""

__version__ = "0.1.0"

from .types import Landmark, GestureLabel, FeatureSnapshot, GestureResult, DisplayProto
from .exceptions import HandsignError, ConfigError, LandmarkFormatError, RecordingError, TrackerError
from .config import load_config, Cfg
from .landmarks import as_landmark_set, landmarks_from_mediapipe
from .features import extract_features
from .gestures import GestureClassifier, classify, evaluate_predicates, resolve
from .display import ConsoleDisplay

__all__ = [
    "Landmark",
    "GestureLabel",
    "FeatureSnapshot",
    "GestureResult",
    "DisplayProto",
    "HandsignError",
    "ConfigError",
    "LandmarkFormatError",
    "RecordingError",
    "TrackerError",
    "load_config",
    "Cfg",
    "as_landmark_set",
    "landmarks_from_mediapipe",
    "extract_features",
    "GestureClassifier",
    "classify",
    "evaluate_predicates",
    "resolve",
    "ConsoleDisplay",
]
