"""Configuration loading, validation, and access."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from commodity_tracker.core.exceptions import ConfigError

# Placeholder credential the upstream dashboards ship with
PLACEHOLDER_KEY = "demo"

# Un-prefixed credential variables honored when the prefixed form is absent
_LEGACY_KEY_VARS: dict[str, str] = {
    "alpha_vantage_key": "ALPHAVANTAGE_API_KEY",
    "metals_api_key": "METALS_API_KEY",
    "news_api_key": "NEWS_API_KEY",
}


def is_configured_key(key: str | None) -> bool:
    """True when a credential is present and not the placeholder."""
    return bool(key) and key.strip() != "" and key.strip() != PLACEHOLDER_KEY


def describe_key(key: str | None) -> str:
    """Human-readable credential state. Never echoes the secret."""
    if not key:
        return "No API key set"
    if not is_configured_key(key):
        return "Using demo key"
    return "API key configured"


class ProvidersConfig(BaseModel):
    """Upstream provider credentials and transport settings."""

    model_config = ConfigDict(frozen=True)

    alpha_vantage_key: str | None = None
    metals_api_key: str | None = None
    news_api_key: str | None = None
    request_timeout: float = 10.0
    alpha_vantage_rate_limit: int = 5

    @field_validator("alpha_vantage_key", "metals_api_key", "news_api_key", mode="before")
    @classmethod
    def keys_as_strings(cls, v: object) -> str | None:
        # an unquoted numeric key in YAML loads as an int
        if v is None:
            return None
        return str(v)

    @field_validator("request_timeout")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be > 0")
        return v

    @field_validator("alpha_vantage_rate_limit")
    @classmethod
    def rate_limit_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("alpha_vantage_rate_limit must be >= 1")
        return v


class NewsConfig(BaseModel):
    """Headline search configuration."""

    model_config = ConfigDict(frozen=True)

    max_articles: int = 10
    page_size: int = 10
    language: str = "en"
    queries: tuple[str, ...] = (
        "tariff trade canada us",
        "trade war tariff",
        "customs duty import",
    )

    @field_validator("max_articles", "page_size")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


class DashboardConfig(BaseModel):
    """Defaults for what the dashboard tracks."""

    model_config = ConfigDict(frozen=True)

    default_commodities: tuple[str, ...] = ("steel", "copper", "aluminum", "pvc")


class APIConfig(BaseModel):
    """FastAPI server configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8000
    api_key: str | None = None


class TrackerConfig(BaseModel):
    """Root configuration for the entire commodity-tracker system."""

    model_config = ConfigDict(frozen=True)

    providers: ProvidersConfig = ProvidersConfig()
    news: NewsConfig = NewsConfig()
    dashboard: DashboardConfig = DashboardConfig()
    api: APIConfig = APIConfig()


def load_config(
    config_path: str | None = None,
    env_prefix: str = "COMMODITY_TRACKER_",
) -> TrackerConfig:
    """Load configuration from environment + YAML file + defaults.

    Resolution order (highest priority first):
    1. Environment variables (COMMODITY_TRACKER_PROVIDERS__NEWS_API_KEY, etc.)
    2. Un-prefixed credentials (ALPHAVANTAGE_API_KEY, METALS_API_KEY, NEWS_API_KEY)
    3. YAML file at config_path
    4. Built-in defaults

    Nested keys use double-underscore in env vars:
        COMMODITY_TRACKER_NEWS__MAX_ARTICLES=5  ->  news.max_articles = 5
    """
    try:
        yaml_path = _resolve_config_path(config_path)
        base: dict = {}
        if yaml_path is not None:
            base = _load_yaml(yaml_path)

        merged = _merge_legacy_keys(base)
        merged = _merge_env_vars(merged, env_prefix)
        return TrackerConfig.model_validate(merged)
    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(str(e), context={"source": "load_config"}) from e


def _resolve_config_path(explicit: str | None) -> Path | None:
    """Determine config file path."""
    if explicit is not None:
        p = Path(explicit)
        if not p.exists():
            raise ConfigError(
                f"Config file not found: {explicit}",
                context={"field": "config_path", "value": explicit},
            )
        return p

    env_path = os.environ.get("COMMODITY_TRACKER_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.exists():
            raise ConfigError(
                f"Config file from COMMODITY_TRACKER_CONFIG not found: {env_path}",
                context={"field": "COMMODITY_TRACKER_CONFIG", "value": env_path},
            )
        return p

    default = Path("commodity-tracker.yml")
    if default.exists():
        return default

    return None


def _load_yaml(path: Path) -> dict:
    """Load and parse YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"YAML config must be a mapping, got {type(data).__name__}",
                context={"field": "config_file", "value": str(path)},
            )
        return data
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML config: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e


def _merge_legacy_keys(base: dict) -> dict:
    """Overlay the un-prefixed credential variables onto the providers section."""
    result = dict(base)
    providers = dict(result.get("providers") or {})
    for field, var in _LEGACY_KEY_VARS.items():
        value = os.environ.get(var)
        if value:
            providers[field] = value
    if providers:
        result["providers"] = providers
    return result


def _merge_env_vars(base: dict, prefix: str) -> dict:
    """Overlay environment variables onto base config dict.

    Double-underscore separates nesting levels.
    Values are auto-cast: "true"/"false" -> bool, numeric strings -> int.
    Leaves named "*_key" are credentials and stay verbatim.
    """
    result = dict(base)

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        remainder = key[len(prefix) :]
        parts = [p.lower() for p in remainder.split("__")]

        # Skip the CONFIG env var itself
        if parts == ["config"]:
            continue

        leaf = parts[-1]
        cast_value = value if leaf.endswith("_key") else _auto_cast(value)

        target = result
        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            else:
                target[part] = dict(target[part])
            target = target[part]
        target[leaf] = cast_value

    return result


def _auto_cast(value: str) -> str | int | float | bool:
    """Auto-cast string values from environment variables."""
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value
