"""Configuration for the diff tool (YAML file plus environment overrides)."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "diffjson.yaml"
CONFIG_ENV_VAR = "DIFFJSON_CONFIG"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(RuntimeError):
    """Raised for unreadable or malformed configuration."""


@dataclass
class DiffConfig:
    ignore_array_order: bool = False
    indent: int = 2
    ensure_ascii: bool = False
    log_level: str = "WARNING"


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}: expected an integer, got {raw!r}") from exc


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Config not readable: {path} ({exc})") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {path} ({exc})") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def _validate(values: Dict[str, Any]) -> Dict[str, Any]:
    known = {item.name: item for item in fields(DiffConfig)}
    unknown = sorted(set(values) - set(known))
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    expected = {"ignore_array_order": bool, "indent": int, "ensure_ascii": bool, "log_level": str}
    for name, value in values.items():
        kind = expected[name]
        # bool is an int subclass; an indent of `true` is still a mistake.
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            raise ConfigError(f"{name}: expected {kind.__name__}, got {type(value).__name__}")
    return values


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    ignore_order = os.getenv("DIFFJSON_IGNORE_ORDER")
    if ignore_order is not None:
        overrides["ignore_array_order"] = _parse_bool("DIFFJSON_IGNORE_ORDER", ignore_order)
    indent = os.getenv("DIFFJSON_INDENT")
    if indent is not None:
        overrides["indent"] = _parse_int("DIFFJSON_INDENT", indent)
    log_level = os.getenv("DIFFJSON_LOG_LEVEL")
    if log_level:
        overrides["log_level"] = log_level
    return overrides


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Pick the config file: explicit path, then $DIFFJSON_CONFIG, then the bundled default."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(path: Optional[Union[str, Path]] = None) -> DiffConfig:
    config_path = resolve_config_path(path)
    values: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config not found: {config_path}")
        values.update(_validate(_read_yaml(config_path)))
        LOGGER.debug("Loaded config from %s", config_path)
    values.update(_env_overrides())
    config = DiffConfig(**values)
    config.log_level = config.log_level.upper()
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigError(f"log_level: unknown level {config.log_level!r}")
    return config


__all__ = ["ConfigError", "DiffConfig", "DEFAULT_CONFIG_PATH", "resolve_config_path", "load_config"]
