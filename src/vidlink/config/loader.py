"""
Unified configuration loader with priority resolution.

Root directory (VIDLINK_ROOT):
- macOS/Linux: ~/.vidlink
- Windows: %APPDATA%\\vidlink
- Override: VIDLINK_ROOT environment variable

Resolver settings priority (highest to lowest):
1. Environment variables (VIDLINK_CHANNELS, VIDLINK_USER_AGENT,
   VIDLINK_ATTEMPT_TIMEOUT, VIDLINK_MIN_BODY_LENGTH) - per key
2. Project config (.vidlink/config.yaml)
3. User config ({root_dir}/config.yaml)
4. Defaults (config/defaults.py)

Only the first config file found is read. Settings live under a
``resolver:`` mapping:

    resolver:
      attempt_timeout: 10
      channels:
        - corsproxy
        - name: myrelay
          template: "https://relay.example.org/?u={url}"
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from vidlink.config.defaults import (
    ATTEMPT_TIMEOUT,
    BUILTIN_CHANNELS,
    DEFAULT_CHANNELS,
    MIN_BODY_LENGTH,
    USER_AGENT,
)
from vidlink.models.channel import URL_PLACEHOLDER, Channel

logger = logging.getLogger(__name__)

RESOLVER_KEYS = frozenset(
    {"channels", "user_agent", "attempt_timeout", "min_body_length"}
)


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class ResolverConfig:
    """Resolved vidlink configuration."""

    channels: tuple[Channel, ...] = DEFAULT_CHANNELS
    user_agent: str = USER_AGENT
    attempt_timeout: float = ATTEMPT_TIMEOUT
    min_body_length: int = MIN_BODY_LENGTH
    source: ConfigSource = ConfigSource.DEFAULT
    config_path: Path | None = None

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self.channels)
        return (
            f"ResolverConfig(channels=[{names}], "
            f"attempt_timeout={self.attempt_timeout!r}, "
            f"min_body_length={self.min_body_length!r}, "
            f"source={self.source.value!r})"
        )


@dataclass
class ConfigValidationResult:
    """Result of validating a config dict.

    Attributes:
        errors: Fatal issues that prevent correct operation.
        warnings: Non-fatal issues that may cause unexpected behavior.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors were found."""
        return len(self.errors) == 0


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .vidlink/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".vidlink" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the vidlink root directory.

    Priority:
    1. VIDLINK_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\vidlink
       - macOS/Linux: ~/.vidlink

    Returns:
        Path to the root directory (may not exist yet).
    """
    env_root = os.environ.get("VIDLINK_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "vidlink"
        return Path.home() / "AppData" / "Roaming" / "vidlink"
    return Path.home() / ".vidlink"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _parse_channel(entry: Any) -> Channel:
    """Build a Channel from a config entry.

    An entry is either the name of a built-in channel or a mapping with
    ``name``, ``template`` and optional ``encode``.

    Raises:
        ValueError: If the entry is malformed.
    """
    if isinstance(entry, str):
        if entry not in BUILTIN_CHANNELS:
            raise ValueError(f"unknown built-in channel {entry!r}")
        return BUILTIN_CHANNELS[entry]

    if not isinstance(entry, dict):
        raise ValueError(f"channel entry must be a name or mapping, got {type(entry).__name__}")

    name = entry.get("name")
    template = entry.get("template")
    if not name or not isinstance(name, str):
        raise ValueError("channel entry is missing 'name'")
    if template is None and name in BUILTIN_CHANNELS:
        return BUILTIN_CHANNELS[name]
    if not isinstance(template, str) or URL_PLACEHOLDER not in template:
        raise ValueError(f"channel {name!r} template must contain {URL_PLACEHOLDER}")
    encode = entry.get("encode", True)
    if not isinstance(encode, bool):
        raise ValueError(f"channel {name!r} encode must be true or false, got {encode!r}")
    return Channel(name=name, template=template, encode=encode)


def _parse_channels(entries: Any) -> tuple[Channel, ...]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("channels must be a non-empty list")
    return tuple(_parse_channel(e) for e in entries)


def _user_agent(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"must be a non-empty string, got {value!r}")
    return value


def _positive(value: Any, kind: type) -> Any:
    number = kind(value)
    if number <= 0:
        raise ValueError(f"must be positive, got {value!r}")
    return number


def _settings_from_section(section: dict[str, Any], origin: str) -> dict[str, Any]:
    """Turn a ``resolver:`` mapping into ResolverConfig keyword arguments.

    Invalid values are logged and skipped so the default stays in effect.
    """
    settings: dict[str, Any] = {}
    parsers = {
        "channels": _parse_channels,
        "user_agent": _user_agent,
        "attempt_timeout": lambda v: _positive(v, float),
        "min_body_length": lambda v: _positive(v, int),
    }
    for key, parse in parsers.items():
        if key not in section:
            continue
        try:
            settings[key] = parse(section[key])
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid {key} in {origin}: {e}")
    return settings


def _settings_from_env() -> dict[str, Any]:
    """Collect per-key overrides from VIDLINK_* environment variables."""
    section: dict[str, Any] = {}
    env_channels = os.environ.get("VIDLINK_CHANNELS")
    if env_channels:
        section["channels"] = [n.strip() for n in env_channels.split(",") if n.strip()]
    for key in ("user_agent", "attempt_timeout", "min_body_length"):
        value = os.environ.get(f"VIDLINK_{key.upper()}")
        if value:
            section[key] = value
    return _settings_from_section(section, "environment") if section else {}


def _find_config_file() -> tuple[Path | None, ConfigSource]:
    project_config_path = _find_project_config()
    if project_config_path:
        return project_config_path, ConfigSource.PROJECT
    user_config_path = _get_user_config_path()
    if user_config_path.exists():
        return user_config_path, ConfigSource.USER
    return None, ConfigSource.DEFAULT


def _resolve_config() -> ResolverConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        ResolverConfig with the merged settings and the highest-priority
        source that contributed to them.
    """
    settings: dict[str, Any] = {}
    config_path, source = _find_config_file()

    if config_path is not None:
        raw = _load_yaml_config(config_path) or {}
        section = raw.get("resolver") or {}
        if isinstance(section, dict):
            settings.update(_settings_from_section(section, str(config_path)))
            logger.info(f"Using resolver config from {config_path}")
        else:
            logger.warning(f"Ignoring non-mapping 'resolver' section in {config_path}")
        if not settings:
            source = ConfigSource.DEFAULT

    env_settings = _settings_from_env()
    if env_settings:
        logger.info(f"Using resolver overrides from environment: {sorted(env_settings)}")
        settings.update(env_settings)
        source = ConfigSource.ENV

    if source is ConfigSource.DEFAULT:
        logger.debug("Using default resolver config")
    return ResolverConfig(source=source, config_path=config_path, **settings)


@lru_cache(maxsize=1)
def get_config() -> ResolverConfig:
    """Get resolved vidlink configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()


def validate_config(config_dict: dict | None = None) -> ConfigValidationResult:
    """Validate a parsed config file.

    Checks for:
    - Structural issues (wrong types)
    - Unknown keys in the resolver section
    - Channel entries that are unknown, malformed, or lack a {url} placeholder
    - Duplicate channel names
    - Non-positive timeouts and lengths

    Args:
        config_dict: Parsed YAML config dict (the full config, not just the
            resolver section).

    Returns:
        ConfigValidationResult with errors and warnings.
    """
    result = ConfigValidationResult()

    if config_dict is None:
        return result

    if not isinstance(config_dict, dict):
        result.errors.append(
            f"Config must be a YAML mapping (dict), got {type(config_dict).__name__}"
        )
        return result

    section = config_dict.get("resolver")
    if section is None:
        result.warnings.append("No 'resolver' section; defaults will be used")
        return result
    if not isinstance(section, dict):
        result.errors.append(
            f"'resolver' must be a mapping, got {type(section).__name__}"
        )
        return result

    for key in sorted(set(section) - RESOLVER_KEYS):
        result.warnings.append(f"Unknown key 'resolver.{key}'")

    if "channels" in section:
        entries = section["channels"]
        if not isinstance(entries, list) or not entries:
            result.errors.append("'resolver.channels' must be a non-empty list")
        else:
            seen: set[str] = set()
            for i, entry in enumerate(entries):
                try:
                    channel = _parse_channel(entry)
                except ValueError as e:
                    result.errors.append(f"resolver.channels[{i}]: {e}")
                    continue
                if channel.name in seen:
                    result.errors.append(f"Duplicate channel name {channel.name!r}")
                seen.add(channel.name)
            if len(entries) == 1:
                result.warnings.append(
                    "Only one channel configured; resolution fails whenever it is down"
                )

    for key, kind in (("attempt_timeout", float), ("min_body_length", int)):
        if key in section:
            try:
                _positive(section[key], kind)
            except (TypeError, ValueError) as e:
                result.errors.append(f"resolver.{key}: {e}")

    if "user_agent" in section:
        try:
            _user_agent(section["user_agent"])
        except ValueError as e:
            result.errors.append(f"resolver.user_agent: {e}")

    return result
