"""
Integration tests for the display and the command-line application.
"""
import asyncio
import importlib.util
import io
import json
import tempfile
import unittest
import sys
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from handsign.config import load_config
from handsign.display import ConsoleDisplay
from handsign.exceptions import TrackerError
from handsign.gestures import classify
from handsign.main import GestureRecognitionApp, main
from handsign.types import DisplayProto, GestureLabel
from hand_poses import CANONICAL_POSES, as_tuples, build_hand

TRACKER_DEPS = all(importlib.util.find_spec(name) is not None for name in ("cv2", "mediapipe"))


class RecordingDisplay:
    """Display that keeps results instead of printing them."""

    def __init__(self):
        self.shown = []

    async def show(self, result, source=""):
        self.shown.append((source, result))


class TestConsoleDisplay(unittest.TestCase):
    """Test console output."""

    def test_implements_protocol(self):
        """Test that ConsoleDisplay satisfies DisplayProto."""
        self.assertIsInstance(ConsoleDisplay(), DisplayProto)
        self.assertIsInstance(RecordingDisplay(), DisplayProto)

    def test_text_output_and_counts(self):
        """Test one line per result and per-label counts."""
        display = ConsoleDisplay(show_features=True)
        out = io.StringIO()
        with redirect_stdout(out):
            asyncio.run(display.show(classify(build_hand(**CANONICAL_POSES["Hello"])), "f1"))
            asyncio.run(display.show(classify(build_hand(**CANONICAL_POSES["Hello"])), "f2"))
            asyncio.run(display.show(classify(None), "f3"))

        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn("Hello (0.95)", lines[0])
        self.assertIn("extended=1111", lines[0])
        self.assertIn("None (0.00)", lines[2])
        self.assertEqual(display.counts["Hello"], 2)
        self.assertEqual(display.counts["None"], 1)
        self.assertTrue(display.summary().startswith("3 frames"))

        display.reset_counters()
        self.assertEqual(display.frame_count, 0)
        self.assertEqual(display.summary(), "0 frames | no frames")

    def test_json_output(self):
        """Test one JSON object per line."""
        display = ConsoleDisplay(json_output=True)
        out = io.StringIO()
        with redirect_stdout(out):
            asyncio.run(display.show(classify(build_hand(**CANONICAL_POSES["Like"])), "img.png"))
        data = json.loads(out.getvalue())
        self.assertEqual(data, {"gesture": "Like", "confidence": 0.9, "source": "img.png"})


class TestReplayApp(unittest.TestCase):
    """Test replaying recordings through the application."""

    def setUp(self):
        self.cfg = load_config()
        self.tmp = tempfile.TemporaryDirectory()
        frames = [
            (0.0, CANONICAL_POSES["Victory"]),
            (0.05, CANONICAL_POSES["Hello"]),  # dropped by the 100 ms throttle
            (0.1, CANONICAL_POSES["Angry"]),
            (0.2, None),
        ]
        self.path = Path(self.tmp.name) / "session.jsonl"
        with open(self.path, "w") as f:
            for t, pose in frames:
                landmarks = as_tuples(build_hand(**pose)) if pose is not None else None
                f.write(json.dumps({"t": t, "landmarks": landmarks}) + "\n")

    def tearDown(self):
        self.tmp.cleanup()

    def test_replay_throttled(self):
        """Test that throttled frames are skipped and the rest classified in order."""
        display = RecordingDisplay()
        app = GestureRecognitionApp(self.cfg, display=display)
        count = asyncio.run(app.run_replay(str(self.path)))

        self.assertEqual(count, 3)
        labels = [result.label for _, result in display.shown]
        self.assertEqual(labels, [GestureLabel.VICTORY, GestureLabel.ANGRY, None])
        self.assertEqual(display.shown[0][0], "t=0.000")

    def test_main_json(self):
        """Test the replay command with JSON output."""
        out = io.StringIO()
        with redirect_stdout(out):
            code = asyncio.run(main(["--json", "replay", str(self.path)]))
        self.assertEqual(code, 0)
        gestures = [json.loads(line)["gesture"] for line in out.getvalue().splitlines()]
        self.assertEqual(gestures, ["Victory", "Angry", None])

    def test_main_summary(self):
        """Test the replay command prints a summary in text mode."""
        out = io.StringIO()
        with redirect_stdout(out):
            code = asyncio.run(main(["replay", str(self.path)]))
        self.assertEqual(code, 0)
        self.assertIn("3 frames", out.getvalue().splitlines()[-1])

    def test_main_missing_recording(self):
        """Test that a missing recording exits with status 1."""
        err = io.StringIO()
        with redirect_stderr(err), redirect_stdout(io.StringIO()):
            code = asyncio.run(main(["replay", str(Path(self.tmp.name) / "nope.jsonl")]))
        self.assertEqual(code, 1)
        self.assertIn("Recording not found", err.getvalue())

    def test_main_missing_config(self):
        """Test that a missing config exits with status 1."""
        with redirect_stderr(io.StringIO()):
            code = asyncio.run(main(["--config", "/nonexistent.yaml", "replay", str(self.path)]))
        self.assertEqual(code, 1)

    def test_main_bad_log_level(self):
        """Test that an unknown logging level in the config exits with status 1."""
        config_path = Path(self.tmp.name) / "verbose.yaml"
        config_path.write_text(
            "mediapipe: {max_num_hands: 1, min_detection_confidence: 0.5, min_tracking_confidence: 0.5}\n"
            "recognition: {min_interval_ms: 100}\n"
            "display: {show_features: false, json_output: false}\n"
            "logging: {level: VERBOSE}\n"
        )
        err = io.StringIO()
        with redirect_stderr(err), redirect_stdout(io.StringIO()):
            code = asyncio.run(main(["--config", str(config_path), "replay", str(self.path)]))
        self.assertEqual(code, 1)
        self.assertIn("VERBOSE", err.getvalue())


@unittest.skipUnless(TRACKER_DEPS, "opencv and mediapipe are required for tracker tests")
class TestTracker(unittest.TestCase):
    """Test the MediaPipe adapter with the model patched out."""

    def _fake_results(self, hands):
        return SimpleNamespace(multi_hand_landmarks=hands)

    def test_process_returns_first_hand(self):
        """Test that the first detected hand is converted to Landmarks."""
        from handsign import tracker as tracker_module

        hand = SimpleNamespace(landmark=[SimpleNamespace(x=lm.x, y=lm.y, z=lm.z)
                                         for lm in build_hand(**CANONICAL_POSES["Pointing"])])
        with mock.patch.object(tracker_module, "mp") as fake_mp:
            fake_mp.solutions.hands.Hands.return_value.process.return_value = self._fake_results([hand])
            tracker = tracker_module.HandsTracker()
            landmarks = tracker.process(np.zeros((8, 8, 3), dtype=np.uint8))

        self.assertEqual(len(landmarks), 21)
        self.assertEqual(classify(landmarks).label, GestureLabel.POINTING)

    def test_process_no_hand(self):
        """Test that no detection returns None."""
        from handsign import tracker as tracker_module

        with mock.patch.object(tracker_module, "mp") as fake_mp:
            fake_mp.solutions.hands.Hands.return_value.process.return_value = self._fake_results(None)
            tracker = tracker_module.HandsTracker()
            self.assertIsNone(tracker.process(np.zeros((8, 8, 3), dtype=np.uint8)))

    def test_load_image_missing(self):
        """Test that an unreadable image raises TrackerError."""
        from handsign.tracker import load_image

        with self.assertRaises(TrackerError):
            load_image("/nonexistent/hand.png")

    def test_run_images(self):
        """Test the image command path with the tracker patched."""
        display = RecordingDisplay()
        app = GestureRecognitionApp(load_config(), display=display)
        victory = build_hand(**CANONICAL_POSES["Victory"])

        with mock.patch("handsign.tracker.HandsTracker") as fake_tracker, \
                mock.patch("handsign.tracker.load_image") as fake_load:
            fake_load.return_value = np.zeros((8, 8, 3), dtype=np.uint8)
            fake_tracker.from_config.return_value.process.side_effect = [victory, None]
            count = asyncio.run(app.run_images(["a.png", "b.png"]))

        self.assertEqual(count, 2)
        self.assertEqual([(src, r.label) for src, r in display.shown],
                         [("a.png", GestureLabel.VICTORY), ("b.png", None)])
        fake_tracker.from_config.return_value.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
