"""
Site configuration loader.

Provides typed access to a site's YAML configuration: content source, include
roots, collection container directory and file read options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from sitepartials.constants import DEFAULT_ENCODING, DEFAULT_EXCERPT_SEPARATOR, DEFAULT_INCLUDES_DIR


class SiteConfigError(ValueError):
    """Raised when a site configuration file is missing or invalid."""
    pass


class SiteConfig(BaseModel):
    """Root schema for a site configuration."""

    source: Path
    includes_dirs: List[str] = Field(default_factory=lambda: [DEFAULT_INCLUDES_DIR])
    extra_include_paths: List[Path] = Field(default_factory=list)
    collections_dir: str = ""
    encoding: str = DEFAULT_ENCODING
    excerpt_separator: str = DEFAULT_EXCERPT_SEPARATOR
    deprecated_directives: Dict[str, str] = Field(default_factory=dict)

    @field_validator("includes_dirs", mode="before")
    @classmethod
    def _coerce_includes_dirs(cls, value: Any) -> Any:
        # A single directory may be given as a plain string
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("collections_dir", mode="before")
    @classmethod
    def _coerce_collections_dir(cls, value: Any) -> Any:
        return "" if value is None else value


def load_site_config(config_path: Union[str, Path]) -> SiteConfig:
    """
    Load and validate a site configuration file.

    A relative ``source`` is resolved against the configuration file's
    directory; when omitted, that directory is the source.

    Returns:
        SiteConfig model for the site.

    Raises:
        SiteConfigError: If the file is missing or fails validation
    """
    config_file = Path(config_path)
    if not config_file.is_file():
        raise SiteConfigError(f"Site configuration not found: {config_file}")

    with open(config_file, "r", encoding="utf-8") as handle:
        raw_data = yaml.safe_load(handle) or {}

    if not isinstance(raw_data, dict):
        raise SiteConfigError(f"Invalid site configuration in {config_file}: expected a mapping")

    base_dir = config_file.parent.resolve()
    source = Path(raw_data.get("source") or ".")
    raw_data["source"] = source if source.is_absolute() else base_dir / source

    extra_paths = raw_data.get("extra_include_paths") or []
    raw_data["extra_include_paths"] = [
        path if Path(path).is_absolute() else base_dir / path for path in extra_paths
    ]

    for section in ("includes_dirs", "deprecated_directives"):
        if section in raw_data and raw_data[section] is None:
            raw_data.pop(section)

    try:
        return SiteConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise SiteConfigError(f"Invalid site configuration in {config_file}: {exc}") from exc
