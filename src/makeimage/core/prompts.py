"""
Prompt vocabulary loaded from the bundled prompts.yaml file.

Each image gets one word (or short phrase) picked at random from its own list.
The file is loaded once per process.
"""

import importlib.resources
import random
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from makeimage.utils.exceptions import ConfigurationError

# Module-level cache for parsed vocabulary
_prompts_data: dict[str, list[str]] | None = None


class PromptsSchema(BaseModel):
    """Schema for prompts.yaml."""

    model_config = {"extra": "allow"}

    left: list[str] = Field(..., min_length=1)
    right: list[str] = Field(..., min_length=1)

    @field_validator("left", "right")
    @classmethod
    def _no_blank_words(cls, words: list[str]) -> list[str]:
        if any(not w.strip() for w in words):
            raise ValueError("prompt words must not be blank")
        return words


def _load_prompts() -> dict[str, list[str]]:
    """Load and validate prompts.yaml from the package. Cached after first call.

    Raises:
        ConfigurationError: If the file is missing, malformed, or fails validation.
    """
    global _prompts_data
    if _prompts_data is not None:
        return _prompts_data

    try:
        with importlib.resources.files("makeimage").joinpath("prompts.yaml").open(
            encoding="utf-8"
        ) as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise ConfigurationError(
            "prompts.yaml not found. This file is required and should be bundled with the package."
        ) from e

    try:
        data: Any = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse prompts.yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("prompts.yaml must contain 'left' and 'right' word lists.")

    try:
        schema = PromptsSchema(**data)
    except ValidationError as e:
        errors = "\n".join(f"  - {err['loc'][0]}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"Invalid prompts.yaml structure:\n{errors}") from e

    _prompts_data = {"left": list(schema.left), "right": list(schema.right)}
    return _prompts_data


def get_prompt_words(side: str) -> list[str]:
    """Return the word list for 'left' or 'right'."""
    data = _load_prompts()
    if side not in data:
        raise ValueError(f"Unknown side: {side!r}. Must be 'left' or 'right'.")
    return list(data[side])


def random_prompt_pair(rng: random.Random | None = None) -> tuple[str, str]:
    """Pick one prompt for each side. Pass rng for reproducible picks."""
    chooser = rng or random
    return chooser.choice(get_prompt_words("left")), chooser.choice(get_prompt_words("right"))
