"""Configuration system for the SBOM uploader."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from .errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:8081"
DEFAULT_PROJECT_NAME = "demo-app"
DEFAULT_PROJECT_VERSION = "1.0.0"
DEFAULT_BOM_PATH = "sbom.json"
DEFAULT_TIMEOUT_S = 30.0

# Values left behind by copy-pasted setup instructions
PLACEHOLDER_API_KEYS = frozenset(
    {
        "your_api_key",
        "your-api-key",
        "<api-key>",
        "<your-api-key>",
        "api_key_here",
        "changeme",
        "xxx",
    }
)


@dataclass
class UploaderConfig:
    """Configuration for a single SBOM upload."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = field(default=None, repr=False)
    project_name: str = DEFAULT_PROJECT_NAME
    project_version: str = DEFAULT_PROJECT_VERSION
    bom_path: str = DEFAULT_BOM_PATH
    timeout_s: float = DEFAULT_TIMEOUT_S

    # The server creates the project when it does not exist yet
    auto_create: bool = True


def is_placeholder(api_key: str | None) -> bool:
    """Return True if the key is empty or one of the well-known placeholders."""
    if api_key is None:
        return True
    stripped = api_key.strip()
    return not stripped or stripped.lower() in PLACEHOLDER_API_KEYS


def _strip(value: str | None) -> str | None:
    """Drop surrounding whitespace left by .env files and pasted secrets."""
    return value.strip() if isinstance(value, str) else value


def resolve_options(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> UploaderConfig:
    """Resolve uploader configuration from explicit values and the environment.

    Priority: explicit argument > ENV > defaults
    """
    explicit = dict(overrides or {})
    env = os.environ if environ is None else environ

    def get_option(
        name: str,
        env_name: str,
        default: Any = None,
        type_func: Any = None,
    ) -> Any:
        """Get option value with priority: explicit > ENV > default."""
        value = explicit.get(name)
        if value is not None:
            return value

        env_value = env.get(env_name)
        if env_value is not None and env_value != "":
            if type_func:
                try:
                    return type_func(env_value)
                except (ValueError, TypeError):
                    return default
            return env_value

        return default

    return UploaderConfig(
        base_url=get_option("base_url", "DT_BASE_URL", DEFAULT_BASE_URL),
        api_key=_strip(get_option("api_key", "DT_API_KEY")),
        project_name=get_option("project_name", "DT_PROJECT_NAME", DEFAULT_PROJECT_NAME),
        project_version=get_option(
            "project_version", "DT_PROJECT_VERSION", DEFAULT_PROJECT_VERSION
        ),
        bom_path=str(get_option("bom_path", "DT_BOM_PATH", DEFAULT_BOM_PATH)),
        timeout_s=get_option("timeout_s", "DT_TIMEOUT", DEFAULT_TIMEOUT_S, float),
    )


def validate(config: UploaderConfig) -> None:
    """Check the configuration before anything touches the network."""
    if is_placeholder(config.api_key):
        raise ConfigurationError(
            "API key is missing or still a placeholder; set DT_API_KEY or pass --api-key"
        )
    # Header values may not carry whitespace or control characters
    if any(c.isspace() or not c.isprintable() for c in config.api_key or ""):
        raise ConfigurationError(
            "API key contains whitespace or control characters; check DT_API_KEY"
        )
    if not (config.base_url or "").strip():
        raise ConfigurationError("Base URL must not be empty")
    parts = urlsplit(config.base_url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"Base URL must be an http(s) URL such as {DEFAULT_BASE_URL}, got {config.base_url!r}"
        )
    if not (config.project_name or "").strip():
        raise ConfigurationError("Project name must not be empty")
    if not (config.project_version or "").strip():
        raise ConfigurationError("Project version must not be empty")
    if not (math.isfinite(config.timeout_s) and config.timeout_s > 0):
        raise ConfigurationError("Timeout must be a finite number greater than zero")
