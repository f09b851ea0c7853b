"""
Command-line application for hand gesture recognition.

    handsign replay recording.jsonl
    handsign image hand1.jpg hand2.png
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Cfg, load_config
from .display import ConsoleDisplay
from .exceptions import HandsignError
from .gestures import GestureClassifier
from .replay import FrameThrottle, load_frames
from .types import DisplayProto

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Feeds landmark sources through the classifier into a display."""

    def __init__(self, config: Cfg, display: Optional[DisplayProto] = None):
        """Initialize the application with configuration."""
        self.config = config
        self.classifier = GestureClassifier(include_features=config.recognition.include_features)
        self.display = display or ConsoleDisplay(
            show_features=config.display.show_features,
            json_output=config.display.json_output
        )

    async def run_replay(self, path: str) -> int:
        """
        Classify a recorded session, skipping frames faster than the throttle.

        Returns:
            Number of frames classified
        """
        throttle = FrameThrottle(self.config.recognition.min_interval_ms)
        classified = 0

        for frame in load_frames(path):
            if not throttle.ready(frame.t):
                continue
            result = self.classifier.classify(frame.landmarks)
            await self.display.show(result, source=f"t={frame.t:.3f}")
            classified += 1

        logger.info("Replayed %d frames from %s", classified, path)
        return classified

    async def run_images(self, paths: List[str]) -> int:
        """
        Detect and classify one hand in each image.

        Returns:
            Number of images classified
        """
        from .tracker import HandsTracker, load_image

        tracker = HandsTracker.from_config(self.config.mediapipe)
        try:
            for path in paths:
                landmarks = tracker.process(load_image(path))
                if landmarks is None:
                    logger.info("No hand detected in %s", path)
                await self.display.show(self.classifier.classify(landmarks), source=path)
        finally:
            tracker.close()

        return len(paths)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handsign", description="Rule-based hand gesture recognition")
    parser.add_argument("--config", help="Path to YAML config (default: config.default.yaml)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per frame")
    parser.add_argument("--features", action="store_true", help="Include derived features in the output")

    sub = parser.add_subparsers(dest="command", required=True)
    replay = sub.add_parser("replay", help="Classify a JSON Lines landmark recording")
    replay.add_argument("recording")
    image = sub.add_parser("image", help="Detect and classify a hand in still images")
    image.add_argument("images", nargs="+")
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, HandsignError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=config.logging.level, format=config.logging.format)
    if args.json:
        config.display.json_output = True
    if args.features:
        config.display.show_features = True

    app = GestureRecognitionApp(config)

    try:
        if args.command == "replay":
            await app.run_replay(args.recording)
        else:
            await app.run_images(args.images)
    except HandsignError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if isinstance(app.display, ConsoleDisplay) and not config.display.json_output:
        print(f"📊 {app.display.summary()}")
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
