"""Diagnostic rendering for descriptors, values, and validation failures."""

from __future__ import annotations

import reprlib
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from argtype._descriptors import (
    ArrayOf,
    InstanceOf,
    OneOf,
    Optional,
    Primitive,
    ShapeOf,
    UnionOf,
)
from argtype._types import is_array, kind_of

if TYPE_CHECKING:
    from argtype._descriptors import Descriptor
    from argtype._matcher import Mismatch

# Large values are summarised, never dumped.
_repr = reprlib.Repr()
_repr.maxlist = 5
_repr.maxtuple = 5
_repr.maxdict = 5
_repr.maxstring = 60
_repr.maxother = 60
_repr.maxlevel = 2


def describe(d: Descriptor) -> str:
    """Render a descriptor as text, recursing into nested descriptors.

    ``array_of(one_of("red", "blue"))`` renders as
    ``array of (one of 'red','blue')``.
    """
    match d:
        case Primitive(name=name):
            return name
        case InstanceOf(cls=cls):
            return f"instance of {cls.__qualname__}"
        case ArrayOf(element=inner):
            return f"array of ({describe(inner)})"
        case OneOf(values=values):
            return "one of " + ",".join(repr(v) for v in values)
        case Optional(inner=inner):
            return f"optional ({describe(inner)})"
        case ShapeOf(fields=fields):
            body = ", ".join(f"{name}: {describe(f)}" for name, f in fields.items())
            return "shape {" + body + "}"
        case UnionOf(alternatives=()):
            return "never"
        case UnionOf(alternatives=alts):
            return "union of (" + " | ".join(describe(a) for a in alts) + ")"
    return repr(d)  # pragma: no cover


def describe_value(value: Any) -> str:
    """Render a value's runtime kind and a bounded representation of it."""
    kind = kind_of(value)
    match kind:
        case "null" | "undefined":
            return kind
        case "boolean" | "number" | "string" | "symbol":
            return f"{kind} {_repr.repr(value)}"
        case "function":
            name = getattr(value, "__qualname__", None) or type(value).__qualname__
            return f"function {name}"
    if is_array(value):
        return f"array of length {len(value)} {_repr.repr(value)}"
    if isinstance(value, Mapping):
        return f"object {_repr.repr(dict(value))}"
    return f"object {type(value).__qualname__} {_repr.repr(value)}"


def render_path(path: tuple[str | int, ...]) -> str:
    """Render a match trail as ``.field`` and ``[index]`` segments."""
    return "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in path)


def format_mismatch(
    mismatch: Mismatch, name: str | None = None, owner: str | None = None
) -> str:
    """Build a message naming the failing location, expected and actual type.

    ``name`` roots the path at the argument name (``items[2].x``); without it
    the root is ``value``.
    """
    where = (name or "value") + render_path(mismatch.path)
    msg = f"{where} expected {mismatch.expected}, got {mismatch.actual}"
    if owner:
        return f"{owner}: invalid argument {msg}"
    return f"invalid {msg}"


def format_unexpected(names: Iterable[str], owner: str | None = None) -> str:
    """Build a message listing every unexpected argument name."""
    listed = ", ".join(repr(n) for n in sorted(names))
    target = owner or "component"
    return f"{target} received unexpected arguments: {listed}"
