"""Preset and fixture models, plus loaders for preset files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

Selector = Annotated[str, Field(min_length=1)]


class PresetLoadError(ValueError):
    """Raised when a preset or fixture file cannot be read or decoded."""


class Preset(BaseModel):
    """
    Site-specific extraction recipe.

    Attributes:
        preset_match_detectors: Selectors that must all hit for the preset to apply
        main_content_selectors: Selectors whose matches form the main content
        main_content_filters: Selectors removed from the extracted main content

    Example:
        preset = Preset(
            preset_match_detectors=[".main"],
            main_content_selectors=["#p"],
            main_content_filters=[".sponsored"],
        )
    """

    preset_match_detectors: tuple[Selector, ...] = Field(..., min_length=1)
    main_content_selectors: tuple[Selector, ...] = Field(..., min_length=1)
    main_content_filters: tuple[Selector, ...] = Field(...)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def all_selectors(self) -> list[str]:
        """Every selector of the preset, detectors first, filters last."""
        return [
            *self.preset_match_detectors,
            *self.main_content_selectors,
            *self.main_content_filters,
        ]

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to the JSON wire shape."""
        return self.model_dump(mode="json")


class Fixture(BaseModel):
    """A captured page: its URL and raw markup."""

    url: str
    html: str = Field(..., min_length=1)

    model_config = {"extra": "forbid"}

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must be an absolute http(s) URL")
        return v


def _read_mapping(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PresetLoadError(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            import yaml
        except ImportError as e:
            raise PresetLoadError("YAML support requires PyYAML: pip install readpull[yaml]") from e
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise PresetLoadError(f"Invalid YAML in {path}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PresetLoadError(f"Invalid JSON in {path}: {e}") from e


def load_preset(path: Path) -> Preset:
    """
    Load a preset from a JSON or YAML file.

    Raises:
        PresetLoadError: If the file cannot be read or decoded
        pydantic.ValidationError: If the content does not have the preset shape
    """
    return Preset.model_validate(_read_mapping(path))


def load_fixture(path: Path) -> Fixture:
    """Load a ``{"url": ..., "html": ...}`` fixture file."""
    data = _read_mapping(path)
    try:
        return Fixture.model_validate(data)
    except ValidationError as e:
        raise PresetLoadError(
            f'Invalid fixture {path}; expected {{"url": "https://example.com", "html": "<html>...</html>"}}: {e}'
        ) from e
