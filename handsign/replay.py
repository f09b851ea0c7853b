"""
Recorded landmark frames and caller-side throttling for replaying them.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .exceptions import LandmarkFormatError, RecordingError
from .landmarks import as_landmark_set
from .types import Landmark

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """One recorded frame: timestamp in seconds and the hand, if any."""
    t: float
    landmarks: Optional[List[Landmark]]


class FrameThrottle:
    """
    Admits frames no more often than a minimum interval.

    The classifier never throttles itself; the caller decides how often to
    classify relative to the frame source.
    """

    def __init__(self, min_interval_ms: int):
        """Initialize with the minimum spacing between admitted frames."""
        self.min_interval_ms = int(min_interval_ms)
        self.last_admitted_ms: Optional[int] = None

    def ready(self, t_now: float) -> bool:
        """
        Check whether a frame at t_now should be processed.

        Args:
            t_now: Frame timestamp in seconds

        Returns:
            True if the frame is admitted (and becomes the new reference time)
        """
        # compared in whole milliseconds
        now_ms = round(t_now * 1000)
        if self.last_admitted_ms is not None and now_ms - self.last_admitted_ms < self.min_interval_ms:
            return False
        self.last_admitted_ms = now_ms
        return True

    def reset(self) -> None:
        """Forget the last admitted frame."""
        self.last_admitted_ms = None


def load_frames(path: Union[str, Path]) -> Iterator[Frame]:
    """
    Read a JSON Lines landmark recording.

    Each line is {"t": seconds, "landmarks": [[x, y, z], ...] or null}.

    Args:
        path: Recording file

    Yields:
        Frame objects in file order; malformed hands are yielded as absent
    """
    record_path = Path(path)
    if not record_path.exists():
        raise RecordingError(f"Recording not found: {record_path}")

    with open(record_path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise RecordingError(f"{record_path}:{line_no}: invalid JSON ({e.msg})") from e

            if not isinstance(record, dict):
                raise RecordingError(f"{record_path}:{line_no}: expected an object")

            try:
                t = float(record.get("t", 0.0))
            except (TypeError, ValueError) as e:
                raise RecordingError(f"{record_path}:{line_no}: invalid timestamp") from e

            try:
                landmarks = as_landmark_set(record.get("landmarks"), strict=True)
            except LandmarkFormatError as e:
                logger.warning("⚠️  %s:%d: skipping hand (%s)", record_path, line_no, e)
                landmarks = None

            yield Frame(t=t, landmarks=landmarks)
