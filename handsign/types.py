"""
Type definitions for hand gesture recognition system.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable


@dataclass
class Landmark:
    """A single hand keypoint in normalized camera space."""
    x: float
    y: float
    z: float = 0.0  # relative depth, device dependent


class GestureLabel(str, Enum):
    """Closed set of gestures the classifier can report."""
    CALL = "Call"
    VICTORY = "Victory"
    SUPER = "Super"  # OK-sign predicate
    HAPPY = "Happy"  # gun predicate
    POINTING = "Pointing"
    HELLO = "Hello"
    LIKE = "Like"
    DISLIKE = "Dislike"
    FRIENDS = "Friends"
    I_LOVE_YOU = "I Love You"
    ANGRY = "Angry"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FeatureSnapshot:
    """
    Geometric features derived from one landmark set.

    Per-finger tuples are ordered index, middle, ring, pinky.
    """
    extended: Tuple[bool, bool, bool, bool]
    curls: Tuple[float, float, float, float]  # tip to MCP distance
    curled: Tuple[bool, bool, bool, bool]
    thumb_index_distance: float
    index_middle_distance: float
    thumb_pinky_distance: float
    index_angle: float  # radians
    middle_angle: float  # radians
    angle_between_fingers: float  # radians

    @property
    def extended_count(self) -> int:
        """Number of extended fingers, thumb excluded."""
        return sum(1 for flag in self.extended if flag)

    @property
    def all_curled(self) -> bool:
        return all(self.curled)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-friendly dict."""
        data = asdict(self)
        for key in ("extended", "curls", "curled"):
            data[key] = list(data[key])
        data["extended_count"] = self.extended_count
        return data


@dataclass(frozen=True)
class GestureResult:
    """Outcome of classifying one frame."""
    label: Optional[GestureLabel]
    confidence: float
    features: Optional[FeatureSnapshot] = None

    @property
    def detected(self) -> bool:
        return self.label is not None

    @property
    def display_name(self) -> str:
        return self.label.value if self.label is not None else "None"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-friendly dict."""
        return {
            "gesture": self.label.value if self.label is not None else None,
            "confidence": self.confidence,
            "features": self.features.to_dict() if self.features is not None else None,
        }


NO_GESTURE = GestureResult(label=None, confidence=0.0)


@runtime_checkable
class DisplayProto(Protocol):
    """Abstract protocol for collaborators that present classification results."""

    async def show(self, result: GestureResult, source: str = "") -> None:
        """Present the result for one frame."""
        ...
