"""Tests for server startup validation."""

import os
from unittest.mock import patch

import pytest

from fest_search import main as main_module
from fest_search.main import validate_environment


@pytest.mark.usefixtures("clean_env")
class TestValidateEnvironment:
    """Tests for validate_environment."""

    def test_defaults_are_valid(self):
        assert validate_environment() == []

    def test_invalid_port(self):
        with patch.dict(os.environ, {"FEST_SEARCH_PORT": "http"}):
            errors = validate_environment()
        assert any("FEST_SEARCH_PORT" in e for e in errors)

        with patch.dict(os.environ, {"FEST_SEARCH_PORT": "70000"}):
            errors = validate_environment()
        assert any("between 1 and 65535" in e for e in errors)

    def test_invalid_log_level(self):
        with patch.dict(os.environ, {"FEST_SEARCH_LOG_LEVEL": "chatty"}):
            errors = validate_environment()
        assert any("FEST_SEARCH_LOG_LEVEL" in e for e in errors)

    def test_invalid_matcher_config(self, tmp_path):
        with patch.dict(os.environ, {"FEST_SEARCH_DISTANCE_RATIO": "2"}):
            errors = validate_environment()
        assert any("Matcher configuration error" in e for e in errors)

        missing = tmp_path / "missing.yaml"
        with patch.dict(os.environ, {"FEST_SEARCH_CONFIG_PATH": str(missing)}):
            errors = validate_environment()
        assert any("not found" in e for e in errors)

        broken = tmp_path / "broken.yaml"
        broken.write_text("matcher: [unclosed\n")
        with patch.dict(os.environ, {"FEST_SEARCH_CONFIG_PATH": str(broken)}):
            errors = validate_environment()
        assert any("YAML parsing error" in e for e in errors)


@pytest.mark.usefixtures("clean_env")
class TestMain:
    """Tests for the main entry point."""

    def test_exits_on_invalid_config(self):
        with patch.dict(os.environ, {"FEST_SEARCH_PORT": "-1"}):
            with patch.object(main_module.uvicorn, "run") as run:
                with pytest.raises(SystemExit) as exc_info:
                    main_module.main()

        assert exc_info.value.code == 1
        run.assert_not_called()

    def test_runs_uvicorn(self):
        with patch.dict(os.environ, {"FEST_SEARCH_PORT": "9001"}):
            with patch.object(main_module.uvicorn, "run") as run:
                main_module.main()

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args[0] == "fest_search.api.routes:app"
        assert kwargs["port"] == 9001
        assert kwargs["reload"] is False
