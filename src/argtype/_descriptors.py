"""Type descriptor algebra: pure data describing allowed values.

Every variant is a frozen dataclass, immutable after construction, and the
``Descriptor`` union is pattern-matchable via match/case:

    array_of(shape_of({"tags": array_of(one_of("a", "b"))}))

Helpers coerce their arguments through ``descriptor()``, so a primitive name
(``"string"``) or a class (``datetime``) can stand in for a descriptor
anywhere. Wrong-shaped arguments are a programming error in the declaration
and raise ``MalformedDescriptorError`` immediately.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

MAX_DEPTH = 32

PRIMITIVE_NAMES = frozenset(
    {
        "any",
        "boolean",
        "function",
        "null",
        "number",
        "object",
        "string",
        "symbol",
        "undefined",
    }
)


class ArgTypeError(Exception):
    """Base class for all argtype errors."""


class MalformedDescriptorError(ArgTypeError, TypeError):
    """A descriptor constructor received an argument of the wrong shape."""


# ═══════════════════════════════════════════════════════════════════════════════
# Variants
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Primitive:
    """Matches values of a runtime kind. ``any`` matches everything."""

    name: str

    def __post_init__(self) -> None:
        if self.name not in PRIMITIVE_NAMES:
            expected = ", ".join(sorted(PRIMITIVE_NAMES))
            msg = f"unknown primitive type {self.name!r} (expected one of: {expected})"
            raise MalformedDescriptorError(msg)


@dataclass(frozen=True, slots=True)
class InstanceOf:
    """Matches instances of a class, subclasses included."""

    cls: type

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            msg = f"instance_of expects a class, got {type(self.cls).__name__}"
            raise MalformedDescriptorError(msg)


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """Matches a list or tuple whose every element matches ``element``.

    Empty arrays match vacuously.
    """

    element: Descriptor

    def __post_init__(self) -> None:
        _check_descriptor(self.element, "array_of")
        _check_depth(self)


@dataclass(frozen=True, slots=True)
class OneOf:
    """Matches a string equal to one of a fixed set of literals."""

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        for v in self.values:
            if not isinstance(v, str):
                msg = f"one_of values must be strings, got {type(v).__name__}: {v!r}"
                raise MalformedDescriptorError(msg)


@dataclass(frozen=True, slots=True)
class Optional:
    """Matches whatever ``inner`` matches, plus ``None`` and ``UNDEFINED``."""

    inner: Descriptor

    def __post_init__(self) -> None:
        _check_descriptor(self.inner, "optional")
        _check_depth(self)


@dataclass(frozen=True, slots=True)
class ShapeOf:
    """Structural match on an object's fields.

    Every declared field must match; fields the shape does not declare are
    ignored. Field order is declaration order, which fixes which failure
    is reported first.
    """

    fields: Mapping[str, Descriptor]

    def __post_init__(self) -> None:
        for name, d in self.fields.items():
            if not isinstance(name, str):
                msg = f"shape_of field names must be strings, got {type(name).__name__}"
                raise MalformedDescriptorError(msg)
            _check_descriptor(d, f"shape_of field {name!r}")
        # Freeze the mapping so the descriptor cannot change under a caller.
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        _check_depth(self)

    def __hash__(self) -> int:
        return hash(tuple(self.fields.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapeOf):
            return NotImplemented
        return tuple(self.fields.items()) == tuple(other.fields.items())


@dataclass(frozen=True, slots=True)
class UnionOf:
    """Matches if any alternative matches, tried in order.

    An empty union matches nothing, so it acts as a "never" type.
    """

    alternatives: tuple[Descriptor, ...]

    def __post_init__(self) -> None:
        for d in self.alternatives:
            _check_descriptor(d, "union_of")
        _check_depth(self)


# Closed set of descriptor variants.
type Descriptor = Primitive | InstanceOf | ArrayOf | OneOf | Optional | ShapeOf | UnionOf

_VARIANTS = (Primitive, InstanceOf, ArrayOf, OneOf, Optional, ShapeOf, UnionOf)


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def descriptor(spec: Any) -> Descriptor:
    """Coerce a descriptor spec into a descriptor.

    Accepts an existing descriptor (returned unchanged), a primitive name
    string, or a class (becomes ``InstanceOf``).

    Raises:
        MalformedDescriptorError: For anything else.
    """
    if isinstance(spec, _VARIANTS):
        return spec
    if isinstance(spec, str):
        return Primitive(spec)
    if isinstance(spec, type):
        return InstanceOf(spec)
    msg = (
        "expected a descriptor, primitive type name or class, "
        f"got {type(spec).__name__}: {spec!r}"
    )
    raise MalformedDescriptorError(msg)


def primitive(name: str) -> Primitive:
    if not isinstance(name, str):
        msg = f"primitive expects a type name string, got {type(name).__name__}"
        raise MalformedDescriptorError(msg)
    return Primitive(name)


def instance_of(cls: type) -> InstanceOf:
    return InstanceOf(cls)


def array_of(element: Any) -> ArrayOf:
    return ArrayOf(descriptor(element))


def one_of(*values: str) -> OneOf:
    return OneOf(tuple(values))


def optional(inner: Any) -> Optional:
    return Optional(descriptor(inner))


def shape_of(fields: Mapping[str, Any]) -> ShapeOf:
    if not isinstance(fields, Mapping):
        msg = f"shape_of expects a mapping of field names, got {type(fields).__name__}"
        raise MalformedDescriptorError(msg)
    return ShapeOf({name: descriptor(d) for name, d in fields.items()})


def union_of(*alternatives: Any) -> UnionOf:
    return UnionOf(tuple(descriptor(d) for d in alternatives))


def conditional_instance_of(module: str, name: str) -> InstanceOf | Primitive:
    """Resolve a class by import path, degrading to ``any`` when unavailable.

    The capability check runs once, when the descriptor is built. Matching
    never inspects the environment.
    """
    try:
        cls = getattr(importlib.import_module(module), name)
    except (ImportError, AttributeError):
        return Primitive("any")
    if not isinstance(cls, type):
        return Primitive("any")
    return InstanceOf(cls)


def descriptor_depth(d: Descriptor) -> int:
    """Calculate the nesting depth of a descriptor tree."""
    match d:
        case Primitive() | InstanceOf() | OneOf():
            return 1
        case ArrayOf(element=inner) | Optional(inner=inner):
            return 1 + descriptor_depth(inner)
        case ShapeOf(fields=fields):
            return 1 + max((descriptor_depth(f) for f in fields.values()), default=0)
        case UnionOf(alternatives=alts):
            return 1 + max((descriptor_depth(a) for a in alts), default=0)
        case _:  # pragma: no cover
            return 0


def _check_descriptor(value: Any, where: str) -> None:
    if not isinstance(value, _VARIANTS):
        msg = f"{where} expects a descriptor, got {type(value).__name__}: {value!r}"
        raise MalformedDescriptorError(msg)


def _check_depth(d: Descriptor) -> None:
    depth = descriptor_depth(d)
    if depth > MAX_DEPTH:
        msg = f"descriptor depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
        raise MalformedDescriptorError(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Aliases
# ═══════════════════════════════════════════════════════════════════════════════

ACTION = Primitive("function")
CLASSIC_ACTION = UnionOf((Primitive("string"), Primitive("function")))
ELEMENT = conditional_instance_of("xml.dom.minidom", "Element")
NODE = conditional_instance_of("xml.dom.minidom", "Node")
