"""
Configuration management for hand gesture recognition system.
"""
import logging

import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from .exceptions import ConfigError


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float
    model_complexity: int


@dataclass
class RecognitionConfig:
    """Caller-side recognition settings (the thresholds themselves are fixed)."""
    min_interval_ms: int
    include_features: bool


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_features: bool
    json_output: bool


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str
    format: str


@dataclass
class Cfg:
    """Main configuration class."""
    mediapipe: MediaPipeConfig
    recognition: RecognitionConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    return load_config_dict(data)


def load_config_dict(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    try:
        mp_data = data['mediapipe']
        mediapipe = MediaPipeConfig(
            max_num_hands=int(mp_data['max_num_hands']),
            min_detection_confidence=float(mp_data['min_detection_confidence']),
            min_tracking_confidence=float(mp_data['min_tracking_confidence']),
            model_complexity=int(mp_data.get('model_complexity', 1))
        )

        rec_data = data['recognition']
        recognition = RecognitionConfig(
            min_interval_ms=int(rec_data['min_interval_ms']),
            include_features=bool(rec_data.get('include_features', True))
        )

        display_data = data['display']
        display = DisplayConfig(
            show_features=bool(display_data['show_features']),
            json_output=bool(display_data['json_output'])
        )

        log_data = data.get('logging') or {}
        logging_cfg = LoggingConfig(
            level=str(log_data.get('level', 'WARNING')).upper(),
            format=log_data.get('format', '%(asctime)s %(levelname)s %(name)s: %(message)s')
        )
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    if mediapipe.max_num_hands != 1:
        raise ConfigError("mediapipe.max_num_hands must be 1: only one hand is classified per frame")
    if recognition.min_interval_ms < 0:
        raise ConfigError("recognition.min_interval_ms must be >= 0")
    if not isinstance(logging.getLevelName(logging_cfg.level), int):
        raise ConfigError(f"logging.level is not a logging level name: {logging_cfg.level}")

    return Cfg(
        mediapipe=mediapipe,
        recognition=recognition,
        display=display,
        logging=logging_cfg
    )
