"""Process-wide configuration: whitelist policy and error policy.

Config-driven construction path:
  YAML/JSON file → load_config() → dict → parse_config() → ArgTypesConfig

The configuration is written once at startup via configure() and is
read-only afterwards; validation calls only ever read it. If configure()
is never called, the first get_config() loads the file named by the
``ARGTYPE_CONFIG`` environment variable, or falls back to the defaults.

Accepted shape (camelCase keys are accepted as aliases)::

    throw_errors: true
    whitelist:
      starts_with: [data_, aria_]
      ends_with: [_handler]
      includes: [test]
      matches: [class_name]
      regex: ["^x_[a-z]+$"]

A bare list for ``whitelist`` is treated as ``matches``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from argtype._descriptors import ArgTypeError
from argtype._whitelist import EMPTY_WHITELIST, InvalidPatternError, WhitelistPolicy

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ARGTYPE_CONFIG"

# Whitelist field → accepted keys (snake_case first, then camelCase alias).
_WHITELIST_FIELDS = {
    "starts_with": ("starts_with", "startsWith"),
    "ends_with": ("ends_with", "endsWith"),
    "includes": ("includes",),
    "matches": ("matches",),
    "regex": ("regex",),
}
_CONFIG_KEYS = frozenset({"whitelist", "throw_errors", "throwErrors"})


class ConfigParseError(ArgTypeError, ValueError):
    """Error parsing configuration data into config types."""


@dataclass(frozen=True, slots=True)
class ArgTypesConfig:
    """Validated process-wide settings.

    throw_errors: raise on a failed check (True) or log a warning (False).
    """

    whitelist: WhitelistPolicy = field(default_factory=lambda: EMPTY_WHITELIST)
    throw_errors: bool = True


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════


def parse_whitelist(data: Any) -> WhitelistPolicy:
    """Parse whitelist config into a WhitelistPolicy.

    Raises:
        ConfigParseError: If the data is malformed or a regex is invalid.
    """
    if isinstance(data, WhitelistPolicy):
        return data
    if data is None:
        return EMPTY_WHITELIST
    if isinstance(data, (list, tuple)):
        data = {"matches": data}
    if not isinstance(data, Mapping):
        msg = f"whitelist must be a mapping or a list, got {type(data).__name__}"
        raise ConfigParseError(msg)

    known = {key for keys in _WHITELIST_FIELDS.values() for key in keys}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        msg = f"unknown whitelist fields: {unknown} (expected: {sorted(_WHITELIST_FIELDS)})"
        raise ConfigParseError(msg)

    rules: dict[str, tuple[str, ...]] = {}
    for name, keys in _WHITELIST_FIELDS.items():
        present = [k for k in keys if k in data]
        if len(present) > 1:
            msg = f"whitelist field {name!r} given more than once: {present}"
            raise ConfigParseError(msg)
        if present:
            rules[name] = _parse_string_list(data[present[0]], f"whitelist.{name}")

    try:
        return WhitelistPolicy(**rules)
    except InvalidPatternError as e:
        raise ConfigParseError(str(e)) from e


def parse_config(data: Any) -> ArgTypesConfig:
    """Parse a config dict into an ArgTypesConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if data is None:
        return ArgTypesConfig()
    if not isinstance(data, Mapping):
        msg = f"expected a mapping, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(str(k) for k in data if k not in _CONFIG_KEYS)
    if unknown:
        msg = f"unknown config fields: {unknown}"
        raise ConfigParseError(msg)

    throw_errors = data.get("throw_errors", data.get("throwErrors", True))
    if not isinstance(throw_errors, bool):
        msg = f"throw_errors must be a boolean, got {type(throw_errors).__name__}"
        raise ConfigParseError(msg)

    return ArgTypesConfig(
        whitelist=parse_whitelist(data.get("whitelist")),
        throw_errors=throw_errors,
    )


def load_config(path: str | os.PathLike[str]) -> ArgTypesConfig:
    """Load and parse a YAML (or JSON) config file.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    logger.debug("loaded argtype config from %s", path)
    return parse_config(data)


def _parse_string_list(data: Any, where: str) -> tuple[str, ...]:
    if not isinstance(data, (list, tuple)):
        msg = f"{where} must be a list of strings, got {type(data).__name__}"
        raise ConfigParseError(msg)
    for item in data:
        if not isinstance(item, str):
            msg = f"{where} entries must be strings, got {type(item).__name__}: {item!r}"
            raise ConfigParseError(msg)
    return tuple(data)


# ═══════════════════════════════════════════════════════════════════════════════
# Process-wide settings (single writer at startup, then read-only)
# ═══════════════════════════════════════════════════════════════════════════════

_active: ArgTypesConfig | None = None


def configure(config: ArgTypesConfig | Mapping[str, Any] | None = None) -> ArgTypesConfig:
    """Install the process-wide configuration.

    Call once at startup, before any validation runs. Accepts a parsed
    ArgTypesConfig or raw config data; None restores the defaults.
    """
    global _active
    if not isinstance(config, ArgTypesConfig):
        config = parse_config(config)
    _active = config
    return config


def get_config() -> ArgTypesConfig:
    """Return the active configuration, loading it on first use."""
    global _active
    if _active is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        _active = load_config(env_path) if env_path else ArgTypesConfig()
    return _active
