"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to channel and logging settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- The channel section is the ChannelSettings value object itself, so a
  loaded config can be handed straight to a channel
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

from notichannel.domain.value_objects.channel_settings import ChannelSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging output configuration."""
    level: str = "WARNING"
    json_format: bool = False


@dataclass(frozen=True)
class NotiChannelConfig:
    """Root configuration for notichannel."""
    channel: ChannelSettings = field(default_factory=ChannelSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env_override(data: dict, prefix: str = "NOTICHANNEL") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern NOTICHANNEL_SECTION_KEY.
    For example: NOTICHANNEL_LOGGING_LEVEL=DEBUG,
    NOTICHANNEL_CHANNEL_REJECT_AFTER_BREAK=true
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a JSON object", path)
        return {}
    return data


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert strings coming from the environment to int/bool
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type in ("int", int):
                filtered[f.name] = int(filtered[f.name])
            elif f.type in ("bool", bool):
                filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "NOTICHANNEL",
) -> NotiChannelConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (NOTICHANNEL_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to notichannel.json in CWD.
        env_prefix: Environment variable prefix. Defaults to NOTICHANNEL.
    """
    config_path = Path(path) if path else Path("notichannel.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return NotiChannelConfig(
        channel=_build_sub_config(ChannelSettings, data.get("channel", {})),
        logging=_build_sub_config(LoggingConfig, data.get("logging", {})),
    )
