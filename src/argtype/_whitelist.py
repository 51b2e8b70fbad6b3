"""Whitelist policy: name rules that exempt arguments from the unexpected check.

Each rule compiles to a name matcher, a frozen dataclass immutable after
construction. A policy allows a name if ANY of its rules matches it (OR
across and within fields). Empty-string rules are dropped at construction,
so an empty prefix never whitelists everything.

Regex rules use ``google-re2`` for guaranteed linear-time matching. RE2 does
not support backreferences or lookahead/lookbehind because they require
backtracking, and patterns using them are rejected when the policy is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import re2

from argtype._descriptors import ArgTypeError


class InvalidPatternError(ArgTypeError, ValueError):
    """A whitelist regex is not valid RE2 syntax."""


@runtime_checkable
class NameMatcher(Protocol):
    """Match against an argument name."""

    def matches(self, name: str, /) -> bool: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Name matchers
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """The name equals ``value``."""

    value: str

    def matches(self, name: str, /) -> bool:
        return name == self.value


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """The name starts with ``prefix``."""

    prefix: str

    def matches(self, name: str, /) -> bool:
        return name.startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class SuffixMatcher:
    """The name ends with ``suffix``."""

    suffix: str

    def matches(self, name: str, /) -> bool:
        return name.endswith(self.suffix)


@dataclass(frozen=True, slots=True)
class ContainsMatcher:
    """The name contains ``substring``."""

    substring: str

    def matches(self, name: str, /) -> bool:
        return self.substring in name


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """The pattern matches anywhere in the name (search, not fullmatch).

    Raises:
        InvalidPatternError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid whitelist pattern "{self.pattern}": {e}'
            raise InvalidPatternError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, name: str, /) -> bool:
        return self._compiled.search(name) is not None


# ═══════════════════════════════════════════════════════════════════════════════
# Policy
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class WhitelistPolicy:
    """Immutable set of whitelist rules.

    Build directly or from config via ``parse_whitelist()``. The default
    policy has no rules and allows nothing.
    """

    starts_with: tuple[str, ...] = ()
    ends_with: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    matches: tuple[str, ...] = ()
    regex: tuple[str, ...] = ()
    _matchers: tuple[NameMatcher, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        matchers: list[NameMatcher] = []
        matchers.extend(ExactMatcher(v) for v in self.matches if v)
        matchers.extend(PrefixMatcher(v) for v in self.starts_with if v)
        matchers.extend(SuffixMatcher(v) for v in self.ends_with if v)
        matchers.extend(ContainsMatcher(v) for v in self.includes if v)
        matchers.extend(RegexMatcher(v) for v in self.regex if v)
        object.__setattr__(self, "_matchers", tuple(matchers))

    def allows(self, name: str) -> bool:
        """True if any rule matches ``name``."""
        return any(m.matches(name) for m in self._matchers)

    @property
    def rule_count(self) -> int:
        """Number of effective (non-empty) rules."""
        return len(self._matchers)


EMPTY_WHITELIST = WhitelistPolicy()
