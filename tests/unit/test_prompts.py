"""Unit tests for the prompt vocabulary (YAML-loaded word lists)."""

import random
from collections.abc import Iterator
from contextlib import contextmanager
from unittest.mock import mock_open, patch

import pytest

import makeimage.core.prompts
from makeimage.core.prompts import _load_prompts, get_prompt_words, random_prompt_pair
from makeimage.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def reset_cache():
    """Clear the module-level cache around each test."""
    original = makeimage.core.prompts._prompts_data
    makeimage.core.prompts._prompts_data = None
    yield
    makeimage.core.prompts._prompts_data = original


@contextmanager
def _bundled_yaml(content: str) -> Iterator[None]:
    """Serve content in place of the packaged prompts.yaml."""
    with patch("importlib.resources.files") as mock_files:
        mock_files.return_value.joinpath.return_value.open = mock_open(read_data=content)
        yield


@pytest.mark.unit
class TestPromptWords:
    def test_bundled_lists_are_loaded(self):
        left = get_prompt_words("left")
        right = get_prompt_words("right")
        assert "ramen" in left
        assert "cat" in right
        assert all(w.strip() for w in left + right)

    @pytest.mark.parametrize("side", ["left", "right"])
    def test_repeated_words_keep_their_weight(self, side: str):
        words = get_prompt_words(side)
        assert len(words) == 24
        for word in ("cycling", "ship", "boat"):
            assert words.count(word) == 2
        assert words.count("ramen") == 1

    def test_returns_copy(self):
        words = get_prompt_words("left")
        words.append("mutated")
        assert "mutated" not in get_prompt_words("left")

    def test_unknown_side_raises(self):
        with pytest.raises(ValueError):
            get_prompt_words("middle")

    def test_random_pair_is_drawn_from_lists(self):
        left, right = random_prompt_pair()
        assert left in get_prompt_words("left")
        assert right in get_prompt_words("right")

    def test_random_pair_is_reproducible_with_seeded_rng(self):
        assert random_prompt_pair(random.Random(7)) == random_prompt_pair(random.Random(7))

    def test_cached_after_first_load(self):
        _load_prompts()
        makeimage.core.prompts._prompts_data = {"left": ["x"], "right": ["y"]}
        assert random_prompt_pair() == ("x", "y")


@pytest.mark.unit
class TestPromptsValidation:
    def test_malformed_yaml_raises_configuration_error(self):
        with _bundled_yaml("left: [unclosed\n"):
            with pytest.raises(ConfigurationError) as exc_info:
                _load_prompts()
        assert "Failed to parse prompts.yaml" in str(exc_info.value)

    def test_missing_side_raises_configuration_error(self):
        with _bundled_yaml("left:\n  - cat\n"):
            with pytest.raises(ConfigurationError) as exc_info:
                _load_prompts()
        assert "right" in str(exc_info.value)

    def test_empty_list_raises_configuration_error(self):
        with _bundled_yaml("left: []\nright:\n  - cat\n"):
            with pytest.raises(ConfigurationError):
                _load_prompts()

    def test_blank_word_raises_configuration_error(self):
        with _bundled_yaml("left:\n  - '  '\nright:\n  - cat\n"):
            with pytest.raises(ConfigurationError):
                _load_prompts()

    def test_non_mapping_raises_configuration_error(self):
        with _bundled_yaml("- cat\n- dog\n"):
            with pytest.raises(ConfigurationError):
                _load_prompts()

    def test_missing_file_raises_configuration_error(self):
        with patch("importlib.resources.files") as mock_files:
            mock_files.return_value.joinpath.return_value.open.side_effect = FileNotFoundError()
            with pytest.raises(ConfigurationError) as exc_info:
                _load_prompts()
        assert "not found" in str(exc_info.value)
