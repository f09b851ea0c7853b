"""
Feature extraction: geometric features derived from a single landmark set.
"""
from typing import Sequence

from .landmarks import (
    FINGER_TIPS_MCPS,
    INDEX_MCP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_TIP,
    PINKY_TIP,
    THUMB_TIP,
    direction_angle,
    distance_xy,
)
from .types import FeatureSnapshot, Landmark

# tip must be this far above its MCP (normalized units) to count as extended
EXTENSION_MARGIN = 0.15
# tip closer than this to its MCP counts as curled
CURL_DISTANCE = 0.12


def finger_extended(landmarks: Sequence[Landmark], tip: int, mcp: int) -> bool:
    """Check if a finger points up: tip clearly above its MCP (smaller y)."""
    return landmarks[tip].y < landmarks[mcp].y - EXTENSION_MARGIN


def extract_features(landmarks: Sequence[Landmark]) -> FeatureSnapshot:
    """
    Compute the feature snapshot for one hand.

    Args:
        landmarks: 21 validated hand landmarks

    Returns:
        FeatureSnapshot holding only derived values, no references to the input
    """
    extended = tuple(finger_extended(landmarks, tip, mcp) for tip, mcp in FINGER_TIPS_MCPS)
    curls = tuple(distance_xy(landmarks[tip], landmarks[mcp]) for tip, mcp in FINGER_TIPS_MCPS)
    curled = tuple(curl < CURL_DISTANCE for curl in curls)

    index_angle = direction_angle(landmarks, INDEX_TIP, INDEX_MCP)
    middle_angle = direction_angle(landmarks, MIDDLE_TIP, MIDDLE_MCP)

    return FeatureSnapshot(
        extended=extended,
        curls=curls,
        curled=curled,
        thumb_index_distance=distance_xy(landmarks[THUMB_TIP], landmarks[INDEX_TIP]),
        index_middle_distance=distance_xy(landmarks[INDEX_TIP], landmarks[MIDDLE_TIP]),
        thumb_pinky_distance=distance_xy(landmarks[THUMB_TIP], landmarks[PINKY_TIP]),
        index_angle=index_angle,
        middle_angle=middle_angle,
        angle_between_fingers=abs(index_angle - middle_angle),
    )
