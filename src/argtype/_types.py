"""Runtime kinds: how argtype classifies a Python value.

The primitive descriptor names describe value kinds rather than Python
classes, so the mapping lives here in one place:

| Kind        | Python values                                   |
|-------------|-------------------------------------------------|
| null        | ``None``                                        |
| undefined   | the ``UNDEFINED`` singleton (absent value)      |
| boolean     | ``bool``                                        |
| number      | ``numbers.Number`` except ``bool``              |
| string      | ``str``                                         |
| symbol      | ``Symbol`` instances                            |
| function    | any other callable                              |
| object      | everything else (mappings, sequences, objects)  |
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Final, Literal

type Kind = Literal[
    "null", "undefined", "boolean", "number", "string", "symbol", "function", "object"
]


class _Undefined:
    """Type of the ``UNDEFINED`` sentinel. There is exactly one instance."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


# A value that was never supplied, distinct from an explicit None.
UNDEFINED: Final = _Undefined()


@dataclass(frozen=True, slots=True, eq=False)
class Symbol:
    """A unique named token.

    Two symbols are equal only if they are the same object, even when
    their descriptions match.
    """

    description: str = ""

    def __repr__(self) -> str:
        return f"Symbol({self.description!r})"


def kind_of(value: Any) -> Kind:
    """Classify a value into one of the runtime kinds.

    Order matters: ``bool`` is checked before ``Number`` because it is a
    subclass of ``int``, and ``str`` before the callable check.
    """
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Symbol):
        return "symbol"
    if callable(value):
        return "function"
    return "object"


def is_array(value: Any) -> bool:
    """True for the sequence types treated as arrays (list and tuple)."""
    return isinstance(value, (list, tuple))
