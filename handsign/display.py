"""
Console display for classification results.
"""
import json
from collections import Counter

from .types import GestureResult


class ConsoleDisplay:
    """Display that prints one line per classified frame."""

    def __init__(self, show_features: bool = False, json_output: bool = False):
        """Initialize the console display."""
        self.show_features = show_features
        self.json_output = json_output
        self.counts: Counter = Counter()
        self.frame_count = 0

    async def show(self, result: GestureResult, source: str = "") -> None:
        """Print the result for one frame."""
        self.frame_count += 1
        self.counts[result.display_name] += 1

        if self.json_output:
            data = result.to_dict()
            if not self.show_features:
                data.pop("features")
            data["source"] = source
            print(json.dumps(data))
            return

        marker = "✅" if result.detected else "❌"
        line = f"{marker} [{source}] {result.display_name} ({result.confidence:.2f})"
        if self.show_features and result.features is not None:
            f = result.features
            flags = "".join("1" if e else "0" for e in f.extended)
            line += (f" | extended={flags} thumb-pinky={f.thumb_pinky_distance:.3f}"
                     f" index-middle={f.index_middle_distance:.3f}"
                     f" angle={f.angle_between_fingers:.3f}")
        print(line)

    def summary(self) -> str:
        """Per-label frame counts, most frequent first."""
        parts = [f"{name}: {count}" for name, count in self.counts.most_common()]
        return f"{self.frame_count} frames | " + (", ".join(parts) if parts else "no frames")

    def reset_counters(self) -> None:
        """Reset counters for testing."""
        self.counts.clear()
        self.frame_count = 0
