"""
Gesture recognition: per-gesture predicates and the priority resolver that
turns one landmark set into at most one named gesture.
"""
import logging
import math
from typing import Any, Callable, Dict, Optional, Sequence

from .features import extract_features
from .landmarks import (
    INDEX_MCP,
    INDEX_TIP,
    MIDDLE_DIP,
    MIDDLE_TIP,
    PINKY_DIP,
    PINKY_TIP,
    RING_DIP,
    RING_TIP,
    THUMB_IP,
    THUMB_MCP,
    THUMB_TIP,
    WRIST,
    as_landmark_set,
)
from .types import NO_GESTURE, FeatureSnapshot, GestureLabel, GestureResult, Landmark

logger = logging.getLogger(__name__)

Predicate = Callable[[Sequence[Landmark], FeatureSnapshot], bool]

# Highest priority first
PRIORITY = (
    GestureLabel.CALL,
    GestureLabel.VICTORY,
    GestureLabel.SUPER,
    GestureLabel.HAPPY,
    GestureLabel.POINTING,
    GestureLabel.HELLO,
    GestureLabel.LIKE,
    GestureLabel.DISLIKE,
    GestureLabel.FRIENDS,
    GestureLabel.I_LOVE_YOU,
    GestureLabel.ANGRY,
)

CONFIDENCE = {label: 0.95 for label in PRIORITY}
CONFIDENCE[GestureLabel.LIKE] = 0.9


def is_call(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Thumb and pinky up, middle and ring folded, thumb and pinky spread wide."""
    thumb_up = lm[THUMB_TIP].y < lm[THUMB_IP].y
    pinky_up = lm[PINKY_TIP].y < lm[PINKY_DIP].y
    middle_closed = lm[MIDDLE_TIP].y > lm[MIDDLE_DIP].y
    ring_closed = lm[RING_TIP].y > lm[RING_DIP].y
    return thumb_up and pinky_up and middle_closed and ring_closed and f.thumb_pinky_distance > 0.3


def is_victory(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Index and middle up and close together, ring and pinky down."""
    index, middle, ring, pinky = f.extended
    return (index and middle and not ring and not pinky
            and f.index_middle_distance < 0.15
            and abs(lm[INDEX_TIP].y - lm[MIDDLE_TIP].y) < 0.1
            and f.angle_between_fingers < math.pi / 6)


def is_ok_sign(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Thumb and index tips touching, the other three fingers up."""
    thumb, index = lm[THUMB_TIP], lm[INDEX_TIP]
    _, middle, ring, pinky = f.extended
    return (abs(thumb.x - index.x) < 0.15
            and abs(thumb.y - index.y) < 0.15
            and abs(thumb.z - index.z) < 0.15
            and middle and ring and pinky)


def is_gun(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Only index up, thumb held level with its MCP joint."""
    index, middle, ring, pinky = f.extended
    return (index and not middle and not ring and not pinky
            and abs(lm[THUMB_TIP].y - lm[THUMB_MCP].y) < 0.1)


def is_pointing(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Only index up."""
    index, middle, ring, pinky = f.extended
    return (index and not middle and not ring and not pinky
            and lm[INDEX_TIP].y < lm[INDEX_MCP].y - 0.15)


def is_hello(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Open palm with fingertips roughly level."""
    return (all(f.extended)
            and abs(lm[INDEX_TIP].y - lm[MIDDLE_TIP].y) < 0.1
            and abs(lm[MIDDLE_TIP].y - lm[RING_TIP].y) < 0.1
            and abs(lm[RING_TIP].y - lm[PINKY_TIP].y) < 0.1)


def is_thumbs_up(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Fist with the thumb tip well above the wrist."""
    thumb, wrist = lm[THUMB_TIP], lm[WRIST]
    return (not any(f.extended)
            and thumb.y < wrist.y - 0.15
            and abs(thumb.x - wrist.x) < 0.15)


def is_thumbs_down(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Fist with the thumb tip well below the wrist."""
    thumb, wrist = lm[THUMB_TIP], lm[WRIST]
    return (not any(f.extended)
            and thumb.y > wrist.y + 0.15
            and abs(thumb.x - wrist.x) < 0.15)


def is_friends(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Index, middle and ring up and level, thumb raised near the wrist line."""
    index, middle, ring, pinky = f.extended
    thumb, wrist = lm[THUMB_TIP], lm[WRIST]
    return (index and middle and ring and not pinky
            and abs(lm[INDEX_TIP].y - lm[MIDDLE_TIP].y) < 0.2
            and abs(lm[MIDDLE_TIP].y - lm[RING_TIP].y) < 0.2
            and thumb.y < wrist.y - 0.1
            and abs(thumb.x - wrist.x) < 0.2)


def is_i_love_you(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Index and pinky up and spread apart, middle and ring down."""
    index, middle, ring, pinky = f.extended
    return (index and not middle and not ring and pinky
            and abs(lm[THUMB_TIP].y - lm[WRIST].y) < 0.2
            and abs(lm[INDEX_TIP].y - lm[PINKY_TIP].y) < 0.3
            and abs(lm[INDEX_TIP].x - lm[PINKY_TIP].x) > 0.15)


def is_angry(lm: Sequence[Landmark], f: FeatureSnapshot) -> bool:
    """Only pinky up, thumb tucked against the palm."""
    index, middle, ring, pinky = f.extended
    return (pinky and not index and not middle and not ring
            and abs(lm[THUMB_TIP].x - lm[WRIST].x) < 0.12)


# The OK-sign and gun predicates report as Super and Happy respectively.
PREDICATES: Dict[GestureLabel, Predicate] = {
    GestureLabel.CALL: is_call,
    GestureLabel.VICTORY: is_victory,
    GestureLabel.SUPER: is_ok_sign,
    GestureLabel.HAPPY: is_gun,
    GestureLabel.POINTING: is_pointing,
    GestureLabel.HELLO: is_hello,
    GestureLabel.LIKE: is_thumbs_up,
    GestureLabel.DISLIKE: is_thumbs_down,
    GestureLabel.FRIENDS: is_friends,
    GestureLabel.I_LOVE_YOU: is_i_love_you,
    GestureLabel.ANGRY: is_angry,
}


def evaluate_predicates(landmarks: Sequence[Landmark], features: FeatureSnapshot) -> Dict[GestureLabel, bool]:
    """
    Evaluate every gesture predicate independently.

    Args:
        landmarks: 21 validated hand landmarks
        features: Snapshot extracted from the same landmarks

    Returns:
        Mapping of every GestureLabel to whether its predicate holds, in priority order
    """
    return {label: PREDICATES[label](landmarks, features) for label in PRIORITY}


def resolve(matches: Dict[GestureLabel, bool], features: Optional[FeatureSnapshot] = None) -> GestureResult:
    """
    Pick the highest-priority gesture whose predicate fired.

    Args:
        matches: Predicate outcomes per label
        features: Snapshot to attach to the result (optional)

    Returns:
        GestureResult with the winning label and its fixed confidence,
        or no gesture with confidence 0.0
    """
    for label in PRIORITY:
        if matches.get(label, False):
            return GestureResult(label=label, confidence=CONFIDENCE[label], features=features)
    return GestureResult(label=None, confidence=0.0, features=features)


class GestureClassifier:
    """
    Classifies one hand's landmarks per frame into a named gesture.

    Stateless between calls: every frame is classified on its own, so a single
    instance can be shared across threads.

    Usage:
        classifier = GestureClassifier()
        result = classifier.classify(landmarks)
    """

    def __init__(self, include_features: bool = True):
        """
        Initialize the classifier.

        Args:
            include_features: Attach the FeatureSnapshot to detected results
        """
        self.include_features = include_features

    def classify(self, landmarks: Any) -> GestureResult:
        """
        Classify a single frame.

        Args:
            landmarks: 21 landmarks in any form accepted by as_landmark_set,
                or None/empty if no hand was detected

        Returns:
            GestureResult; malformed input yields no gesture with confidence 0.0
        """
        lm = as_landmark_set(landmarks)
        if lm is None:
            return NO_GESTURE

        features = extract_features(lm)
        attached = features if self.include_features else None

        # Call short-circuits the remaining predicates
        if is_call(lm, features):
            logger.debug("Gesture: %s", GestureLabel.CALL)
            return GestureResult(GestureLabel.CALL, CONFIDENCE[GestureLabel.CALL], attached)

        result = resolve(evaluate_predicates(lm, features), attached)
        logger.debug("Gesture: %s (%.2f)", result.display_name, result.confidence)
        return result

    def evaluate(self, landmarks: Any) -> Dict[GestureLabel, bool]:
        """Return every predicate outcome for a frame (all False if input is unusable)."""
        lm = as_landmark_set(landmarks)
        if lm is None:
            return {label: False for label in PRIORITY}
        return evaluate_predicates(lm, extract_features(lm))


_default_classifier = GestureClassifier()


def classify(landmarks: Any) -> GestureResult:
    """Classify a frame with a shared default classifier."""
    return _default_classifier.classify(landmarks)
