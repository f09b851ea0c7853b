"""
Hand landmark detection on still images using MediaPipe.

The tracker is an external collaborator: it only turns pixels into the 21
landmarks the classifier consumes.
"""
import logging
from typing import List, Optional

import cv2
import mediapipe as mp
import numpy as np

from .config import MediaPipeConfig
from .exceptions import TrackerError
from .landmarks import landmarks_from_mediapipe
from .types import Landmark

logger = logging.getLogger(__name__)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.5,
                 min_tracking_conf: float = 0.5, model_complexity: int = 1):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
            model_complexity: MediaPipe model complexity (0 or 1)
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=True,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    @classmethod
    def from_config(cls, cfg: MediaPipeConfig) -> "HandsTracker":
        return cls(
            max_num_hands=cfg.max_num_hands,
            min_detection_conf=cfg.min_detection_confidence,
            min_tracking_conf=cfg.min_tracking_confidence,
            model_complexity=cfg.model_complexity
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Landmark]]:
        """
        Detect one hand in a frame and return its landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 Landmarks in [0..1] range, or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        # Only the first detected hand is classified
        return landmarks_from_mediapipe(results.multi_hand_landmarks[0])

    def close(self) -> None:
        """Release the MediaPipe graph."""
        self.hands.close()


def load_image(path: str) -> np.ndarray:
    """
    Read an image from disk in BGR format.

    Raises:
        TrackerError: If the file cannot be read as an image
    """
    image = cv2.imread(str(path))
    if image is None:
        raise TrackerError(f"Could not read image: {path}")
    return image
