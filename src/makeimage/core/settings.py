"""
Settings (configuration reader) for makeimage.

Settings come from a key-value document with an ``OpenAI`` category holding
``APIKey``, ``URL`` and ``GenerateImageEndpoint``. The document is read once,
wrapped in an immutable Settings object and handed to whichever component
needs it. A missing or malformed document yields empty Settings; lookups then
return None instead of failing the process.
"""

import importlib.resources
import os
import plistlib
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any
from xml.parsers.expat import ExpatError

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from makeimage.logging_config import get_logger

logger = get_logger(__name__)

CATEGORY = "OpenAI"
KEY_API_KEY = "APIKey"
KEY_URL = "URL"
KEY_ENDPOINT = "GenerateImageEndpoint"
REQUIRED_KEYS = (KEY_API_KEY, KEY_URL, KEY_ENDPOINT)

DEFAULT_SETTINGS_RESOURCE = "environment.yaml"
SETTINGS_PATH_ENV = "MAKEIMAGE_SETTINGS"

# Environment variable -> settings key; applied by Settings.from_env()
ENV_OVERRIDES = {
    "OPENAI_API_KEY": KEY_API_KEY,
    "OPENAI_BASE_URL": KEY_URL,
    "OPENAI_IMAGE_ENDPOINT": KEY_ENDPOINT,
}


class EnvironmentDocument(BaseModel):
    """Schema for the settings document; only the OpenAI category is read."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    openai: dict[str, Any] = Field(default_factory=dict, alias=CATEGORY)


class Settings(Mapping[str, Any]):
    """Immutable key-value settings. Lookups of unknown keys return None."""

    def __init__(self, values: Mapping[str, Any] | None = None, source: str = "") -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))
        self.source = source

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # API key excluded to avoid leaking secrets
        shown = {k: v for k, v in self._values.items() if k != KEY_API_KEY}
        return f"Settings({shown!r}, source={self.source!r})"

    def value(self, key: str) -> Any | None:
        """Return the value stored under key, or None when absent."""
        return self._values.get(key)

    def string(self, key: str) -> str | None:
        """Return the value under key if it is a string, otherwise None."""
        value = self._values.get(key)
        return value if isinstance(value, str) else None

    def with_overrides(self, **values: Any) -> "Settings":
        """Return a new Settings with values replaced; None values are ignored."""
        merged = dict(self._values)
        merged.update({k: v for k, v in values.items() if v is not None})
        return Settings(merged, source=self.source)

    @classmethod
    def from_env(cls, path: str | Path | None = None) -> "Settings":
        """
        Load settings and apply environment overrides.

        Loads ``.env`` first (python-dotenv), then the settings document via
        load_settings(path), then overrides from:

            OPENAI_API_KEY: APIKey
            OPENAI_BASE_URL: URL
            OPENAI_IMAGE_ENDPOINT: GenerateImageEndpoint

        Empty environment values do not override.

        Returns:
            Settings instance
        """
        load_dotenv()
        settings = load_settings(path)
        overrides = {}
        for env_name, key in ENV_OVERRIDES.items():
            env_value = os.getenv(env_name, "")
            if env_value:
                overrides[key] = env_value
        if overrides:
            logger.debug("Settings overridden from env: %s", ", ".join(sorted(overrides)))
        return settings.with_overrides(**overrides)


def _read_settings_bytes(path: str | Path | None) -> tuple[bytes, str]:
    """Return raw document bytes and a source label. Raises OSError if unreadable."""
    if path is None:
        env_path = os.getenv(SETTINGS_PATH_ENV, "")
        if env_path:
            path = env_path
    if path is not None:
        p = Path(path)
        return p.read_bytes(), str(p)
    resource = importlib.resources.files("makeimage").joinpath(DEFAULT_SETTINGS_RESOURCE)
    return resource.read_bytes(), f"package:{DEFAULT_SETTINGS_RESOURCE}"


def _parse_document(raw: bytes, source: str) -> Any:
    """Parse YAML or property-list bytes. Property lists are detected by suffix or header."""
    if source.lower().endswith(".plist") or raw.lstrip().startswith((b"<?xml", b"bplist")):
        return plistlib.loads(raw)
    return yaml.safe_load(raw)


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load the OpenAI settings category from a YAML or plist document.

    Resolution order: explicit path, MAKEIMAGE_SETTINGS env, packaged
    environment.yaml. Missing or malformed documents produce empty Settings
    (a warning is logged); this function does not raise for them.

    Args:
        path: Optional settings file path

    Returns:
        Settings instance (possibly empty)
    """
    try:
        raw, source = _read_settings_bytes(path)
    except OSError as e:
        logger.warning("Settings file could not be read: %s", e)
        return Settings(source=str(path) if path is not None else "")

    try:
        data = _parse_document(raw, source)
    except (yaml.YAMLError, plistlib.InvalidFileException, ExpatError, ValueError) as e:
        logger.warning("Settings file %s is malformed: %s", source, e)
        return Settings(source=source)

    if not isinstance(data, dict):
        logger.warning("Settings file %s has no top-level mapping", source)
        return Settings(source=source)

    try:
        document = EnvironmentDocument.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        logger.warning("Settings file %s is invalid: %s", source, errors)
        return Settings(source=source)

    logger.debug("Loaded settings from %s keys=%s", source, list(document.openai))
    return Settings(document.openai, source=source)


__all__ = [
    "CATEGORY",
    "KEY_API_KEY",
    "KEY_ENDPOINT",
    "KEY_URL",
    "REQUIRED_KEYS",
    "Settings",
    "load_settings",
]
