"""Tests for matcher configuration loading."""

import os
from unittest.mock import patch

import pytest
import yaml

from fest_search.config import (
    MatcherConfig,
    load_matcher_config,
    load_matcher_config_from_yaml,
)
from fest_search.core.fuzzy import FuzzyMatcher, get_fuzzy_matcher


class TestMatcherConfig:
    """Tests for MatcherConfig validation."""

    def test_defaults(self):
        config = MatcherConfig()
        assert config.distance_ratio == 0.34
        assert config.min_distance == 1

    def test_invalid_ratio(self):
        with pytest.raises(ValueError):
            MatcherConfig(distance_ratio=-0.1)
        with pytest.raises(ValueError):
            MatcherConfig(distance_ratio=1.5)
        with pytest.raises(ValueError):
            MatcherConfig(distance_ratio="high")

    def test_invalid_min_distance(self):
        with pytest.raises(ValueError):
            MatcherConfig(min_distance=-1)
        with pytest.raises(ValueError):
            MatcherConfig(min_distance=1.5)
        with pytest.raises(ValueError):
            MatcherConfig(min_distance=True)


class TestLoadFromYaml:
    """Tests for load_matcher_config_from_yaml."""

    def test_load(self, tmp_path):
        path = tmp_path / "matcher.yaml"
        path.write_text("matcher:\n  distance_ratio: 0.5\n  min_distance: 2\n")

        config = load_matcher_config_from_yaml(path)
        assert config == MatcherConfig(distance_ratio=0.5, min_distance=2)

    def test_partial(self, tmp_path):
        path = tmp_path / "matcher.yaml"
        path.write_text("matcher:\n  min_distance: 0\n")

        config = load_matcher_config_from_yaml(str(path))
        assert config.distance_ratio == 0.34
        assert config.min_distance == 0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_matcher_config_from_yaml(path) == MatcherConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_matcher_config_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_structure(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_matcher_config_from_yaml(path)

        path.write_text("matcher: 0.5\n")
        with pytest.raises(ValueError):
            load_matcher_config_from_yaml(path)

    def test_unknown_setting(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("matcher:\n  distance_ration: 0.5\n")
        with pytest.raises(ValueError, match="distance_ration"):
            load_matcher_config_from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("matcher: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_matcher_config_from_yaml(path)


@pytest.mark.usefixtures("clean_env")
class TestLoadMatcherConfig:
    """Tests for load_matcher_config with environment overrides."""

    def test_defaults_without_env(self):
        assert load_matcher_config() == MatcherConfig()

    def test_config_path_from_env(self, tmp_path):
        path = tmp_path / "matcher.yaml"
        path.write_text("matcher:\n  distance_ratio: 0.5\n")

        with patch.dict(os.environ, {"FEST_SEARCH_CONFIG_PATH": str(path)}):
            config = load_matcher_config()

        assert config.distance_ratio == 0.5

    def test_env_overrides_yaml(self, tmp_path):
        path = tmp_path / "matcher.yaml"
        path.write_text("matcher:\n  distance_ratio: 0.5\n  min_distance: 2\n")

        with patch.dict(os.environ, {"FEST_SEARCH_MIN_DISTANCE": "0"}):
            config = load_matcher_config(path)

        assert config == MatcherConfig(distance_ratio=0.5, min_distance=0)

    def test_invalid_env_value(self):
        with patch.dict(os.environ, {"FEST_SEARCH_DISTANCE_RATIO": "loose"}):
            with pytest.raises(ValueError, match="FEST_SEARCH_DISTANCE_RATIO"):
                load_matcher_config()

        with patch.dict(os.environ, {"FEST_SEARCH_MIN_DISTANCE": "1.5"}):
            with pytest.raises(ValueError, match="FEST_SEARCH_MIN_DISTANCE"):
                load_matcher_config()

    def test_get_fuzzy_matcher_uses_config(self):
        with patch.dict(os.environ, {"FEST_SEARCH_DISTANCE_RATIO": "0", "FEST_SEARCH_MIN_DISTANCE": "0"}):
            matcher = get_fuzzy_matcher()

        assert isinstance(matcher, FuzzyMatcher)
        assert matcher.distance_ratio == 0.0
        assert matcher.min_distance == 0
        assert not matcher.matches("Dance Crew", "dence")
