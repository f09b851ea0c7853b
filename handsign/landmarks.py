"""
Hand landmark layout, coercion and geometry helpers.
"""
import logging
import math
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

import numpy as np

from .exceptions import LandmarkFormatError
from .types import Landmark

logger = logging.getLogger(__name__)

NUM_LANDMARKS = 21

# Landmark indices (MediaPipe Hands convention)
WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

FINGERS = ("index", "middle", "ring", "pinky")

# (tip, mcp) per finger, same order as FINGERS
FINGER_TIPS_MCPS = (
    (INDEX_TIP, INDEX_MCP),
    (MIDDLE_TIP, MIDDLE_MCP),
    (RING_TIP, RING_MCP),
    (PINKY_TIP, PINKY_MCP),
)


def as_landmark_set(points: Any, strict: bool = False) -> Optional[List[Landmark]]:
    """
    Convert tracker output into a fresh list of 21 Landmarks.

    Accepts Landmark objects, anything with x/y/z attributes (MediaPipe
    NormalizedLandmark), {"x", "y", "z"} mappings (JSON from a JS tracker),
    (x, y) or (x, y, z) tuples, or a numpy array of shape (21, 2) or (21, 3).

    Args:
        points: Landmark input for one hand, or None if no hand was detected
        strict: Raise LandmarkFormatError instead of returning None on bad input

    Returns:
        List of 21 Landmarks, or None if there is no usable hand
    """
    if points is None:
        return None

    try:
        rows = points.tolist() if isinstance(points, np.ndarray) else list(points)
        landmarks = [_to_landmark(p) for p in rows]
    except (TypeError, ValueError, KeyError, OverflowError) as e:
        return _reject(f"unconvertible landmark input: {e}", strict)

    if not landmarks:
        return None

    if len(landmarks) != NUM_LANDMARKS:
        return _reject(f"expected {NUM_LANDMARKS} landmarks, got {len(landmarks)}", strict)

    for i, lm in enumerate(landmarks):
        if not (math.isfinite(lm.x) and math.isfinite(lm.y) and math.isfinite(lm.z)):
            return _reject(f"non-finite coordinate at landmark {i}", strict)

    return landmarks


def _to_landmark(point: Any) -> Landmark:
    """Build a Landmark from an attribute object, a mapping or a 2/3-element sequence."""
    if isinstance(point, Mapping):
        return Landmark(float(point["x"]), float(point["y"]), float(point.get("z", 0.0)))

    if hasattr(point, "x") and hasattr(point, "y"):
        return Landmark(float(point.x), float(point.y), float(getattr(point, "z", 0.0)))

    values = [float(v) for v in point]
    if len(values) not in (2, 3):
        raise ValueError(f"landmark needs 2 or 3 coordinates, got {len(values)}")
    return Landmark(*values)


def _reject(reason: str, strict: bool) -> None:
    if strict:
        raise LandmarkFormatError(reason)
    logger.debug("Rejected landmark set: %s", reason)
    return None


def is_valid_landmark_set(points: Any) -> bool:
    """Check whether input can be classified as one hand."""
    return as_landmark_set(points) is not None


def landmarks_from_mediapipe(hand_landmarks: Any) -> List[Landmark]:
    """
    Convert a MediaPipe hand landmark result into Landmarks.

    Args:
        hand_landmarks: One entry of results.multi_hand_landmarks

    Returns:
        List of 21 Landmarks with x, y in [0..1] and relative z
    """
    return [Landmark(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]


def distance_xy(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks, ignoring depth."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def direction_angle(landmarks: Sequence[Landmark], tip: int, mcp: int) -> float:
    """Angle (radians) of the MCP->tip vector in image coordinates."""
    return math.atan2(landmarks[tip].y - landmarks[mcp].y, landmarks[tip].x - landmarks[mcp].x)
