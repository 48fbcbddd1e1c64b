"""Configuration for fuzzy matcher tolerances.

Tolerances can be tuned without touching the matching algorithm, either in a
YAML file or through environment variables (which take precedence).

Example YAML configuration:

    matcher:
      distance_ratio: 0.34
      min_distance: 1
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from fest_search.core.fuzzy.matcher import DISTANCE_RATIO, MIN_DISTANCE
from fest_search.logging.setup import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "FEST_SEARCH_CONFIG_PATH"
DISTANCE_RATIO_ENV = "FEST_SEARCH_DISTANCE_RATIO"
MIN_DISTANCE_ENV = "FEST_SEARCH_MIN_DISTANCE"


@dataclass
class MatcherConfig:
    """Tolerance settings for the fuzzy matcher.

    Attributes:
        distance_ratio: Edits tolerated per character of the shorter of
            token and word (floor applied).
        min_distance: Minimum number of edits always tolerated.
    """

    distance_ratio: float = DISTANCE_RATIO
    min_distance: int = MIN_DISTANCE

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if isinstance(self.distance_ratio, bool) or not isinstance(
            self.distance_ratio, (int, float)
        ):
            raise ValueError(
                f"distance_ratio must be a number, got {type(self.distance_ratio).__name__}"
            )
        if isinstance(self.min_distance, bool) or not isinstance(self.min_distance, int):
            raise ValueError(
                f"min_distance must be an integer, got {type(self.min_distance).__name__}"
            )
        if not 0.0 <= self.distance_ratio <= 1.0:
            raise ValueError(
                f"distance_ratio must be between 0.0 and 1.0, got {self.distance_ratio}"
            )
        if self.min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {self.min_distance}")


def load_matcher_config_from_yaml(path: Path | str) -> MatcherConfig:
    """Load matcher configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        MatcherConfig with values from the file; missing keys use defaults.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the YAML structure or a value is invalid.
        yaml.YAMLError: If the YAML is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return MatcherConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

    matcher_data = data.get("matcher", {})
    if matcher_data is None:
        return MatcherConfig()

    if not isinstance(matcher_data, dict):
        raise ValueError(
            f"Invalid matcher structure: expected dict, got {type(matcher_data).__name__}"
        )

    unknown = set(matcher_data) - {"distance_ratio", "min_distance"}
    if unknown:
        raise ValueError(f"Unknown matcher settings: {', '.join(sorted(unknown))}")

    return MatcherConfig(
        distance_ratio=matcher_data.get("distance_ratio", DISTANCE_RATIO),
        min_distance=matcher_data.get("min_distance", MIN_DISTANCE),
    )


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be {cast.__name__}, got: {raw}") from None


def load_matcher_config(path: Optional[Path | str] = None) -> MatcherConfig:
    """Load matcher configuration from YAML and environment.

    The YAML file is taken from ``path`` or FEST_SEARCH_CONFIG_PATH when
    set. FEST_SEARCH_DISTANCE_RATIO and FEST_SEARCH_MIN_DISTANCE override
    individual values.

    Raises:
        FileNotFoundError: If a configured YAML file doesn't exist.
        ValueError: If any value is invalid.
    """
    if path is None:
        path = os.getenv(CONFIG_PATH_ENV) or None

    base = load_matcher_config_from_yaml(path) if path else MatcherConfig()

    config = MatcherConfig(
        distance_ratio=_env_number(DISTANCE_RATIO_ENV, float, base.distance_ratio),
        min_distance=_env_number(MIN_DISTANCE_ENV, int, base.min_distance),
    )

    logger.debug(
        "Loaded matcher config",
        extra={
            "event": "matcher_config_loaded",
            "config_path": str(path) if path else None,
            "distance_ratio": config.distance_ratio,
            "min_distance": config.min_distance,
        },
    )
    return config
