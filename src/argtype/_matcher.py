"""Matcher: checks a value against a descriptor tree.

Mirrors the descriptor algebra one case per variant:
- Containers (array, shape) short-circuit on the first failing element/field
- Unions are first-match-wins; a failed union reports every alternative
- Results are data (Ok | Mismatch), never exceptions

INV: match() is pure. It never mutates the descriptor or the value, so
calling it twice with the same arguments yields equal results.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from argtype._descriptors import (
    ArrayOf,
    InstanceOf,
    OneOf,
    Optional,
    Primitive,
    ShapeOf,
    UnionOf,
    descriptor,
)
from argtype._format import describe, describe_value, render_path
from argtype._types import UNDEFINED, is_array, kind_of

type Path = tuple[str | int, ...]


@dataclass(frozen=True, slots=True)
class Ok:
    """The value conforms to the descriptor."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Mismatch:
    """The value does not conform.

    ``path`` is the chain of field names (str) and array indices (int) from
    the root value to the failing sub-value; empty for a root failure.
    """

    path: Path
    expected: str
    actual: str

    def __bool__(self) -> bool:
        return False

    @property
    def location(self) -> str:
        """The path rendered as ``[2].x[0]``, or ``value`` at the root."""
        return render_path(self.path) or "value"


type MatchResult = Ok | Mismatch

OK = Ok()


def match(value: Any, d: Any) -> MatchResult:
    """Match a value against a descriptor (or anything ``descriptor()`` accepts)."""
    return _match(value, descriptor(d), ())


def is_match(value: Any, d: Any) -> bool:
    """Boolean form of match()."""
    return isinstance(match(value, d), Ok)


def _match(value: Any, d: Any, path: Path) -> MatchResult:
    match d:
        case Primitive(name="any"):
            return OK
        case Primitive(name="null"):
            return OK if value is None else _mismatch(value, d, path)
        case Primitive(name="undefined"):
            return OK if value is UNDEFINED else _mismatch(value, d, path)
        case Primitive(name=name):
            return OK if kind_of(value) == name else _mismatch(value, d, path)
        case InstanceOf(cls=cls):
            if value is not None and isinstance(value, cls):
                return OK
            return _mismatch(value, d, path)
        case ArrayOf(element=inner):
            if not is_array(value):
                return _mismatch(value, d, path)
            for i, item in enumerate(value):
                result = _match(item, inner, (*path, i))
                if isinstance(result, Mismatch):
                    return result
            return OK
        case OneOf(values=values):
            if isinstance(value, str) and value in values:
                return OK
            return _mismatch(value, d, path)
        case Optional(inner=inner):
            if value is None or value is UNDEFINED:
                return OK
            return _match(value, inner, path)
        case ShapeOf(fields=fields):
            if kind_of(value) not in ("object", "function"):
                return _mismatch(value, d, path)
            for name, field in fields.items():
                try:
                    item = _read_field(value, name)
                except Exception as e:  # noqa: BLE001
                    actual = f"unreadable field ({type(e).__name__}: {e})"
                    return Mismatch(path=(*path, name), expected=describe(field), actual=actual)
                result = _match(item, field, (*path, name))
                if isinstance(result, Mismatch):
                    return result
            return OK
        case UnionOf(alternatives=alts):
            for alt in alts:
                if isinstance(_match(value, alt, path), Ok):
                    return OK
            return _mismatch(value, d, path)
    msg = f"unknown descriptor type: {type(d).__name__}"  # pragma: no cover
    raise TypeError(msg)  # pragma: no cover


def _read_field(value: Any, name: str) -> Any:
    """Read a field by key for mappings, by attribute otherwise.

    A missing field reads as UNDEFINED so optional fields may be absent.
    Attribute reads run user code (properties, ``__getattr__``); anything
    they raise is reported by the caller as a mismatch at the field.
    """
    if isinstance(value, Mapping):
        return value.get(name, UNDEFINED)
    return getattr(value, name, UNDEFINED)


def _mismatch(value: Any, d: Any, path: Path) -> Mismatch:
    return Mismatch(path=path, expected=describe(d), actual=describe_value(value))
