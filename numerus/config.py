# file: numerus/config.py
"""
Configuration loader.

Precedence (highest to lowest):
1. OS environment variables
2. `.env` values
3. YAML config file values
4. Code defaults

Dataset sources are local paths or http(s) URLs; unset means the datasets
packaged with numerus.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field
from pydantic import ConfigDict as PydanticConfigDict

from numerus.cache import DEFAULT_REFRESH_INTERVAL_SECONDS
from numerus.net.http import HttpClientConfig


class NumerusSettings(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    log_level: str = "INFO"
    json_logging: bool = False

    # Reference data
    country_source: str | None = None
    nadp_source: str | None = None
    refresh_interval_seconds: int = Field(default=DEFAULT_REFRESH_INTERVAL_SECONDS, gt=0)

    # HTTP (URL sources only)
    http_timeout_seconds: float = 30.0
    http_max_retries: int = Field(default=2, ge=0)
    http_backoff_base_seconds: float = 0.5
    http_backoff_max_seconds: float = 8.0
    http_user_agent: str = "numerus/0.3 (reference data refresh)"

    def http_config(self) -> HttpClientConfig:
        return HttpClientConfig(
            timeout_seconds=self.http_timeout_seconds,
            max_retries=self.http_max_retries,
            backoff_base_seconds=self.http_backoff_base_seconds,
            backoff_max_seconds=self.http_backoff_max_seconds,
            user_agent=self.http_user_agent,
        )


ENV_PREFIX = "NUMERUS_"

_ENV_FIELDS = (
    "log_level",
    "json_logging",
    "country_source",
    "nadp_source",
    "refresh_interval_seconds",
    "http_timeout_seconds",
    "http_max_retries",
    "http_backoff_base_seconds",
    "http_backoff_max_seconds",
    "http_user_agent",
)

ENV_MAP: dict[str, str] = {f"{ENV_PREFIX}{name.upper()}": name for name in _ENV_FIELDS}


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def _read_dotenv(path: Path) -> dict[str, str]:
    # dotenv_values parses without touching os.environ.
    return {k: v for k, v in dotenv_values(path).items() if isinstance(v, str)}


def _env_overrides(env: dict[str, str]) -> dict[str, str]:
    return {field: env[key] for key, field in ENV_MAP.items() if key in env}


def load_settings(
    *, yaml_path: Path | None = None, env_path: Path | None = None
) -> NumerusSettings:
    """
    Load settings from YAML and .env, with OS env overrides.

    Args:
        yaml_path: Optional YAML config path. Falls back to `NUMERUS_CONFIG`
            from the OS environment, then from `.env`.
        env_path: Optional .env path (default: `.env` if present).
    """

    if env_path is None:
        maybe = Path(".env")
        env_path = maybe if maybe.exists() else None
    dotenv = _read_dotenv(env_path) if env_path is not None and env_path.exists() else {}

    if yaml_path is None:
        cfg = os.environ.get(f"{ENV_PREFIX}CONFIG") or dotenv.get(f"{ENV_PREFIX}CONFIG")
        if cfg:
            yaml_path = Path(cfg)

    data: dict[str, Any] = {}
    if yaml_path is not None and yaml_path.exists():
        data.update(_read_yaml(yaml_path))
    data.update(_env_overrides(dotenv))
    data.update(_env_overrides(dict(os.environ)))

    return NumerusSettings.model_validate(data)
