"""Unit tests for logging configuration."""

import logging
import os
from unittest.mock import patch

import pytest

from makeimage.core.request_service import ImageRequestService
from makeimage.logging_config import (
    ROOT_LOGGER_NAME,
    configure_logging,
    get_logger,
    get_verbosity_from_env,
    log_prompts,
    set_verbosity,
)


@pytest.fixture(autouse=True)
def restore_level():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = root.level
    yield
    root.setLevel(level)
    set_verbosity(0)


@pytest.mark.unit
class TestSetVerbosity:
    @pytest.mark.parametrize(
        "level,expected_level,prompts",
        [
            (-1, logging.INFO, False),
            (0, logging.INFO, False),
            (1, logging.INFO, True),
            (2, logging.DEBUG, True),
            (5, logging.DEBUG, True),
        ],
    )
    def test_levels(self, level: int, expected_level: int, prompts: bool):
        set_verbosity(level)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == expected_level
        assert log_prompts() is prompts

    def test_handler_added_once(self):
        set_verbosity(0)
        set_verbosity(2)
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1


@pytest.mark.unit
class TestConfigureLogging:
    def test_quiet_wins_over_verbose_level(self):
        set_verbosity(2)
        configure_logging(verbose_level=2, quiet=True)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
        assert log_prompts() is False

    def test_verbose_level_applied_when_not_quiet(self):
        configure_logging(verbose_level=1)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO
        assert log_prompts() is True


@pytest.mark.unit
class TestGetVerbosityFromEnv:
    @pytest.mark.parametrize("raw,expected", [("0", 0), ("1", 1), ("2", 2), (" 2 ", 2)])
    def test_valid_values(self, raw: str, expected: int):
        with patch.dict(os.environ, {"MAKEIMAGE_VERBOSITY": raw}):
            assert get_verbosity_from_env() == expected

    @pytest.mark.parametrize("raw", ["", "x", "3", "-1"])
    def test_invalid_values_fall_back_to_0(self, raw: str):
        with patch.dict(os.environ, {"MAKEIMAGE_VERBOSITY": raw}):
            assert get_verbosity_from_env() == 0

    def test_missing(self):
        with patch.dict(os.environ):
            os.environ.pop("MAKEIMAGE_VERBOSITY", None)
            assert get_verbosity_from_env() == 0


@pytest.mark.unit
class TestGetLogger:
    def test_prefixes_relative_names(self):
        assert get_logger("core.coordinator").name == "makeimage.core.coordinator"

    def test_keeps_qualified_names(self):
        assert get_logger("makeimage.cli.commands").name == "makeimage.cli.commands"
        assert get_logger("makeimage").name == "makeimage"


@pytest.mark.unit
class TestWhatGetsLogged:
    def _generate(self, settings, make_response, caplog) -> str:
        body = {"created": 1, "data": [{"b64_json": "aGVsbG8="}]}
        with patch(
            "makeimage.core.request_service.requests.post",
            return_value=make_response(200, body),
        ):
            with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER_NAME):
                ImageRequestService(settings).generate("secret ramen recipe")
        return caplog.text

    def test_prompt_hidden_at_default_verbosity(self, settings, make_response, caplog):
        set_verbosity(0)
        assert "secret ramen recipe" not in self._generate(settings, make_response, caplog)

    def test_prompt_logged_at_verbosity_1(self, settings, make_response, caplog):
        set_verbosity(1)
        assert "secret ramen recipe" in self._generate(settings, make_response, caplog)

    def test_api_key_never_logged(self, settings, make_response, caplog):
        set_verbosity(2)
        text = self._generate(settings, make_response, caplog)
        assert "sk-test" not in text
        assert "aGVsbG8=" not in text
