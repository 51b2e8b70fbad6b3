"""Argument-set validation: which supplied names were never declared."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from argtype._config import parse_whitelist

if TYPE_CHECKING:
    from collections.abc import Iterable


def check_unexpected(
    supplied: Iterable[str],
    declared: Iterable[str],
    whitelist: Any = None,
) -> frozenset[str]:
    """Return the supplied names that are neither declared nor whitelisted.

    ``whitelist`` is a WhitelistPolicy, raw whitelist config (mapping or
    bare list of exact names), or None for no whitelist. Inputs are only
    read; an empty result means the argument set is valid.

    Raises:
        ConfigParseError: If ``whitelist`` is malformed raw config.
    """
    policy = parse_whitelist(whitelist)
    known = frozenset(declared)
    return frozenset(
        name for name in supplied if name not in known and not policy.allows(name)
    )
