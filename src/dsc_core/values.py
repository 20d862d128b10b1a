"""Value types for DSC Core."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ValueKind — the tag of a DynamicValue
# ---------------------------------------------------------------------------

class ValueKind(enum.Enum):
    Null = enum.auto()
    Text = enum.auto()
    Bool = enum.auto()
    Credential = enum.auto()
    Mapping = enum.auto()
    TextArray = enum.auto()
    IntArray = enum.auto()
    ObjectArray = enum.auto()
    Enumeration = enum.auto()
    Opaque = enum.auto()


# ---------------------------------------------------------------------------
# Raw credential
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Credential:
    username: str
    password: str | None = field(default=None, repr=False)

    def __str__(self) -> str:
        return self.username


# ---------------------------------------------------------------------------
# DynamicValue variants
# ---------------------------------------------------------------------------

@dataclass
class VText:
    value: str | None


@dataclass
class VBool:
    value: bool


@dataclass
class VCredential:
    value: Credential | str | None


@dataclass
class VMapping:
    entries: Mapping[str, Any]


@dataclass
class VTextArray:
    items: list[str | None] | None


@dataclass
class VIntArray:
    items: list[int] | None


@dataclass
class VObjectArray:
    # Element type is decided by items[0]; later elements are not checked.
    items: list[Any] | None


@dataclass
class VEnum:
    value: enum.Enum | str


@dataclass
class VOpaque:
    """Text that is already a valid literal, e.g. a rendered CIM instance."""

    text: str

    def __str__(self) -> str:
        return self.text


class _Null:
    """Singleton for values whose type could not be resolved."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = _Null()

DynamicValue = Union[
    VText, VBool, VCredential, VMapping, VTextArray, VIntArray,
    VObjectArray, VEnum, VOpaque, _Null,
]

_DYNAMIC_TYPES = (
    VText, VBool, VCredential, VMapping, VTextArray, VIntArray,
    VObjectArray, VEnum, VOpaque, _Null,
)


def is_dynamic(value: Any) -> bool:
    return isinstance(value, _DYNAMIC_TYPES)


def kind_of(value: DynamicValue) -> ValueKind:
    """Return the tag of an already classified value."""
    if isinstance(value, VText):
        return ValueKind.Text
    if isinstance(value, VBool):
        return ValueKind.Bool
    if isinstance(value, VCredential):
        return ValueKind.Credential
    if isinstance(value, VMapping):
        return ValueKind.Mapping
    if isinstance(value, VTextArray):
        return ValueKind.TextArray
    if isinstance(value, VIntArray):
        return ValueKind.IntArray
    if isinstance(value, VObjectArray):
        return ValueKind.ObjectArray
    if isinstance(value, VEnum):
        return ValueKind.Enumeration
    if isinstance(value, VOpaque):
        return ValueKind.Opaque
    return ValueKind.Null


# ---------------------------------------------------------------------------
# NamedValue
# ---------------------------------------------------------------------------

@dataclass
class NamedValue:
    """One parameter of a resource block.

    ``value`` is either a raw Python value or an already tagged DynamicValue.
    ``kind`` is the declared type, used when the raw value alone does not
    decide the tag (``None``, empty sequences).
    """

    name: str
    value: Any
    no_escape: bool = False
    allow_variables: bool = False
    comment: str | None = None
    kind: ValueKind | None = None


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def typed_null(kind: ValueKind | None) -> DynamicValue:
    """The DynamicValue of an absent value with a declared type."""
    if kind == ValueKind.Text or kind == ValueKind.Enumeration:
        return VText(None)
    if kind == ValueKind.Credential:
        return VCredential(None)
    if kind == ValueKind.TextArray:
        return VTextArray(None)
    if kind == ValueKind.IntArray:
        return VIntArray(None)
    if kind == ValueKind.ObjectArray:
        return VObjectArray(None)
    return Null


def classify(raw: Any, kind: ValueKind | None = None) -> DynamicValue:
    """Tag *raw* with its DynamicValue variant.

    - Already tagged values pass through unchanged
    - ``None`` takes the declared *kind* (``Null`` when unknown)
    - Sequences take a declared array *kind*; otherwise they dispatch on
      their first element, and empty ones default to a text array
    - Anything unsupported becomes ``VOpaque`` of its string form
    """
    if is_dynamic(raw):
        return raw
    if raw is None:
        return typed_null(kind)
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return VBool(raw)
    if isinstance(raw, Credential):
        return VCredential(raw)
    if isinstance(raw, enum.Enum):
        return VEnum(raw)
    if isinstance(raw, str):
        if kind == ValueKind.Credential:
            return VCredential(raw)
        if kind == ValueKind.Enumeration:
            return VEnum(raw)
        return VText(raw)
    if isinstance(raw, (int, float)):
        return VOpaque(str(raw))
    if isinstance(raw, Mapping):
        return VMapping(raw)
    if isinstance(raw, (list, tuple)):
        return _classify_sequence(list(raw), kind)

    logger.debug("No literal form for %s; using its string form", type(raw).__name__)
    return VOpaque(str(raw))


def _classify_sequence(items: list[Any], kind: ValueKind | None) -> DynamicValue:
    # A declared element type wins over the first element, which may be None
    if kind == ValueKind.TextArray:
        return VTextArray(items)
    if kind == ValueKind.IntArray:
        return VIntArray(items)
    if not items:
        if kind == ValueKind.ObjectArray:
            return VObjectArray(items)
        return VTextArray(items)
    first = items[0]
    if isinstance(first, str):
        return VTextArray(items)
    if isinstance(first, int) and not isinstance(first, bool):
        return VIntArray(items)
    return VObjectArray(items)
