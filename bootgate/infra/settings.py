# bootgate/infra/settings.py
"""
Bootstrap settings (YAML -> pydantic).

Example bootstrap.yaml:

    debug: auto                # true | false | auto
    default_debug: false
    ips: ["127.0.0.1", "10.0.0.0/8"]
    developers:
      - public_key: "alice@$2b$12$..."
        ip_independent: true
    environments:              # ordered, first match wins
      - pattern: "^.*\\.staging\\.example\\.com$"
        target: staging
      - pattern: "example.com/app"
        target: production
    default_environment: null
    config_dir: config
    fragments:
      production: ["common", "db/prod"]

- Missing file -> defaults (warning).
- Invalid file -> SettingsError (bootstrap must stop).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from bootgate.config.loader import read_yaml_mapping
from bootgate.errors import SettingsError
from bootgate.security.debug_mode import AUTO, DEFAULT_COOKIE_NAME, CliPolicy

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "BOOTGATE_SETTINGS"
DEFAULT_SETTINGS_PATH = Path("bootstrap.yaml")


class DeveloperEntry(BaseModel):
    public_key: str = Field(..., description="slug@bcrypt-hash")
    ip_independent: bool = Field(False, description="Skip the IP allow-list for this developer")


class EnvironmentEntry(BaseModel):
    pattern: str = Field(..., min_length=1, description="Literal host/path prefix, or regex when it starts with '^'")
    target: str = Field(..., min_length=1, description="Environment name")


class BootstrapSettings(BaseModel):
    debug: Union[bool, Literal["auto"]] = Field(AUTO, description="Explicit debug override or 'auto'")
    default_debug: bool = Field(False, description="Debug flag used when no cookie proof applies")
    cookie_name: str = Field(DEFAULT_COOKIE_NAME, min_length=1)
    ips: List[str] = Field(default_factory=list, description="IP allow-list; empty = unrestricted")
    developers: List[DeveloperEntry] = Field(default_factory=list)
    cli_policy: CliPolicy = Field(CliPolicy.DEFAULT)

    environments: List[EnvironmentEntry] = Field(default_factory=list)
    default_environment: Optional[str] = Field(None)
    env_required: bool = Field(True, description="CLI runs must pass --env")
    match_on: Literal["url", "host"] = Field("url", description="Regex rules test host+path or host only")

    config_dir: str = Field("config")
    config_extension: str = Field(".yaml")
    fragments: Dict[str, List[str]] = Field(default_factory=dict, description="environment -> fragment ids")

    @field_validator("debug", mode="before")
    @classmethod
    def _normalise_debug(cls, v):
        if isinstance(v, str) and v.strip().lower() == AUTO:
            return AUTO
        return v

    def resolved_config_dir(self, base: Optional[Path] = None) -> Path:
        p = Path(self.config_dir)
        if p.is_absolute() or base is None:
            return p
        return base / p


def load_settings(path: Optional[Union[str, Path]] = None) -> BootstrapSettings:
    """
    Path resolution: explicit arg > $BOOTGATE_SETTINGS > ./bootstrap.yaml.
    A relative config_dir is anchored at the settings file's directory.
    """
    if path is None:
        path = os.environ.get(SETTINGS_ENV_VAR) or DEFAULT_SETTINGS_PATH
    settings_path = Path(path)

    if not settings_path.exists():
        logger.warning("settings file not found, using defaults | path=%s", settings_path)
        return BootstrapSettings()

    raw = read_yaml_mapping(settings_path)
    try:
        settings = BootstrapSettings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(f"invalid settings in {settings_path}: {exc}") from exc

    if not Path(settings.config_dir).is_absolute():
        settings = settings.model_copy(
            update={"config_dir": str(settings.resolved_config_dir(settings_path.resolve().parent))}
        )
    logger.info("settings loaded | path=%s", settings_path)
    return settings
