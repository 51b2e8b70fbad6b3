"""Declarations: attach descriptors to class attributes and check them.

This is the caller side of the core: it decides *when* to validate and what
to do with a failure. ``arg()`` builds the class's name → descriptor table at
class definition time and checks every assignment; ``forbid_extra_args``
checks the keyword arguments a class is constructed with.

Failures raise when the active config has ``throw_errors`` set, otherwise
they are logged as warnings. Every check sits behind ``if __debug__:``, so
running under ``python -O`` strips validation entirely.

Example::

    @forbid_extra_args
    class Button(Component):
        label = arg("string")
        size = arg(one_of("small", "large"), default="small")
        on_click = arg(optional(ACTION))

    Button(label="OK", colour="red")  # UnexpectedArgumentError
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from argtype._arguments import check_unexpected
from argtype._config import get_config
from argtype._descriptors import ArgTypeError, Primitive, descriptor
from argtype._format import format_mismatch, format_unexpected
from argtype._matcher import Mismatch, match
from argtype._types import UNDEFINED

if TYPE_CHECKING:
    from argtype._descriptors import Descriptor
    from argtype._matcher import MatchResult

logger = logging.getLogger(__name__)

_EMPTY_TABLE: Mapping[str, Descriptor] = MappingProxyType({})


class ArgumentTypeMismatchError(ArgTypeError, TypeError):
    """A value assigned to a declared argument does not match its descriptor."""

    def __init__(
        self, mismatch: Mismatch, name: str | None = None, owner: str | None = None
    ) -> None:
        self.mismatch = mismatch
        self.name = name
        self.owner = owner
        super().__init__(format_mismatch(mismatch, name, owner))


class UnexpectedArgumentError(ArgTypeError, TypeError):
    """Arguments were supplied that are neither declared nor whitelisted."""

    def __init__(self, names: Iterable[str], owner: str | None = None) -> None:
        self.names = frozenset(names)
        self.owner = owner
        super().__init__(format_unexpected(self.names, owner))


# ═══════════════════════════════════════════════════════════════════════════════
# Validation entry points
# ═══════════════════════════════════════════════════════════════════════════════


def validate_arg(
    value: Any, d: Any, name: str | None = None, owner: str | None = None
) -> MatchResult:
    """Match a value and report a failure per the active config.

    Raises:
        ArgumentTypeMismatchError: On mismatch, when throw_errors is set.
    """
    result = match(value, d)
    if isinstance(result, Mismatch):
        _report(ArgumentTypeMismatchError(result, name, owner))
    return result


def validate_args(
    supplied: Iterable[str], declared: Iterable[str], owner: str | None = None
) -> frozenset[str]:
    """Check an argument set against the declared names and the whitelist.

    Raises:
        UnexpectedArgumentError: On unexpected names, when throw_errors is set.
    """
    unexpected = check_unexpected(supplied, declared, get_config().whitelist)
    if unexpected:
        _report(UnexpectedArgumentError(unexpected, owner))
    return unexpected


def _report(error: ArgTypeError) -> None:
    if get_config().throw_errors:
        raise error
    logger.warning("%s", error)


# ═══════════════════════════════════════════════════════════════════════════════
# Declarations
# ═══════════════════════════════════════════════════════════════════════════════


class Arg:
    """Class attribute descriptor holding a declared argument.

    Values live in the instance ``__dict__``; reading an unassigned argument
    returns the default (``UNDEFINED`` when none was given).
    """

    __slots__ = ("default", "descriptor", "name", "owner")

    def __init__(self, spec: Any = Primitive("any"), default: Any = UNDEFINED) -> None:
        self.descriptor: Descriptor = descriptor(spec)
        self.default = default
        self.name = ""
        self.owner = ""

    def __repr__(self) -> str:
        return f"Arg({self.name!r}, {self.descriptor!r})"

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.owner = owner.__qualname__
        # Copy-on-write so a subclass never mutates its base's table.
        table = dict(arg_types(owner))
        table[name] = self.descriptor
        owner.__arg_types__ = MappingProxyType(table)  # type: ignore[attr-defined]
        if __debug__ and self.default is not UNDEFINED:
            validate_arg(self.default, self.descriptor, name, self.owner)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance: Any, value: Any) -> None:
        if __debug__:
            validate_arg(value, self.descriptor, self.name, type(instance).__qualname__)
        instance.__dict__[self.name] = value


def arg(spec: Any = Primitive("any"), default: Any = UNDEFINED) -> Any:
    """Declare a typed argument on a class.

    Raises:
        MalformedDescriptorError: If ``spec`` is not a descriptor spec.
    """
    return Arg(spec, default)


def arg_types(cls: type) -> Mapping[str, Descriptor]:
    """Return the read-only name → descriptor table declared on ``cls``."""
    return getattr(cls, "__arg_types__", _EMPTY_TABLE)


def forbid_extra_args[T: type](cls: T) -> T:
    """Class decorator: reject keyword arguments the class does not declare."""
    original = cls.__init__

    @functools.wraps(original)
    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        if __debug__:
            owner = type(self)
            validate_args(kwargs, arg_types(owner), owner.__qualname__)
        original(self, *args, **kwargs)

    cls.__init__ = __init__  # type: ignore[misc]
    cls.__forbid_extra_args__ = True  # type: ignore[attr-defined]
    return cls


class Component:
    """Minimal argument holder.

    Keyword arguments are kept in ``args``; those matching a declared
    ``arg()`` are also assigned (and therefore validated) as attributes.
    Declared arguments that were not supplied are checked through their
    default, so a required argument left out is a mismatch against
    ``UNDEFINED``. Combine with ``forbid_extra_args`` to reject undeclared
    names.
    """

    def __init__(self, **args: Any) -> None:
        self.args: Mapping[str, Any] = MappingProxyType(dict(args))
        owner = type(self)
        for name, d in arg_types(owner).items():
            if name in args:
                setattr(self, name, args[name])
            elif __debug__:
                validate_arg(getattr(self, name), d, name, owner.__qualname__)

    def update(self, **changes: Any) -> None:
        """Apply changed arguments, validating each declared one.

        Every change is checked before anything is applied, so a failed
        update leaves ``args`` and the attributes as they were.
        """
        owner = type(self)
        table = arg_types(owner)
        if __debug__:
            if getattr(owner, "__forbid_extra_args__", False):
                validate_args(changes, table, owner.__qualname__)
            for name, value in changes.items():
                if name in table:
                    validate_arg(value, table[name], name, owner.__qualname__)
        merged = dict(self.args)
        merged.update(changes)
        self.args = MappingProxyType(merged)
        for name, value in changes.items():
            if name in table:
                # Validated above.
                self.__dict__[name] = value
