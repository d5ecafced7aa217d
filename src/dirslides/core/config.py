"""Global user configuration and directory-local overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tomllib
from typing import Any, Mapping

from pydantic import BaseModel, Field
import yaml

from dirslides.core.settings import PresentationSettings

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_PATH = Path.home() / ".dirslides" / "config.toml"
CONFIG_PATH_ENV = "DIRSLIDES_CONFIG"
DIRECTORY_SETTINGS_FILE = Path(".dirslides.yaml")


class GlobalConfig(BaseModel):
    """User-level configuration stored in ~/.dirslides/config.toml."""

    settings: PresentationSettings = Field(default_factory=PresentationSettings)


def global_config_path() -> Path:
    """Return the config location, honoring the DIRSLIDES_CONFIG variable."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    return Path(override).expanduser() if override else GLOBAL_CONFIG_PATH


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load global config from TOML, returning defaults when missing."""
    path = path or global_config_path()
    if not path.exists():
        return GlobalConfig()

    contents = path.read_text(encoding="utf-8")
    data = tomllib.loads(contents)
    return GlobalConfig.model_validate(data)


def save_global_config(config: GlobalConfig, path: Path | None = None) -> None:
    """Persist global config to TOML."""
    path = path or global_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["[settings]"]
    for key, value in config.settings.model_dump(mode="json").items():
        # TOML has no null; an empty string reads back as None
        lines.append(f"{key} = {_toml_value('' if value is None else value)}")

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def config_from_context(obj: Mapping[str, Any] | None) -> GlobalConfig:
    """Return the config a CLI callback stored in the context, loading it otherwise."""
    config = (obj or {}).get("config")
    if isinstance(config, GlobalConfig):
        return config
    return load_global_config()


def load_directory_settings(
    directory: Path,
    base: PresentationSettings,
    *,
    file_name: Path = DIRECTORY_SETTINGS_FILE,
) -> PresentationSettings:
    """Merge a directory's .dirslides.yaml over the given settings."""
    path = directory / file_name
    if not path.is_file():
        return base

    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    if payload is None:
        return base
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a mapping of settings.")
    logger.debug("Applying directory settings from %s: %s", path, sorted(payload))
    return base.with_updates(**payload)


def resolve_settings(
    directory: Path | None,
    *,
    config: GlobalConfig | None = None,
    overrides: dict[str, Any] | None = None,
) -> PresentationSettings:
    """Resolve global defaults, directory overrides and explicit overrides."""
    settings = (config or load_global_config()).settings
    if directory is not None and directory.is_dir():
        settings = load_directory_settings(directory, settings)
    explicit = {key: value for key, value in (overrides or {}).items() if value is not None}
    if explicit:
        settings = settings.with_updates(**explicit)
    return settings


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    return f'"{_escape_toml_string(str(value))}"'


def _escape_toml_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
