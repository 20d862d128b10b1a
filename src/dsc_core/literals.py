"""Literal formatters: one per DynamicValue variant."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any

from .credentials import DEFAULT_PREFIX, resolve_reference_name
from .errors import UnsupportedValueError
from .escape import escape
from .values import (
    Credential,
    DynamicValue,
    VBool,
    VCredential,
    VEnum,
    VIntArray,
    VMapping,
    VObjectArray,
    VOpaque,
    VText,
    VTextArray,
    _Null,
)

logger = logging.getLogger(__name__)

TRUE_TOKEN = "$True"
FALSE_TOKEN = "$False"
NULL_TOKEN = "$null"
EMPTY_ARRAY = "@()"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def format_text(value: str | None, no_escape: bool = False, allow_variables: bool = False) -> str:
    """Double-quoted string literal; *no_escape* skips escaping, not quoting."""
    if value is None:
        return '""'
    text = str(value)
    if not no_escape:
        text = escape(text, allow_variables)
    return f'"{text}"'


def format_bool(value: bool) -> str:
    return TRUE_TOKEN if value else FALSE_TOKEN


def format_enum(value: enum.Enum | str) -> str:
    text = value.name if isinstance(value, enum.Enum) else str(value)
    return f'"{text}"'


def format_opaque(text: str) -> str:
    return text


def format_credential(
    value: Credential | str | None,
    parameter_name: str,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """Reference-variable expression for a credential.

    - absent → prompt for it, using the parameter name as the message
    - an existing ``$Creds...`` reference → separators normalised
    - otherwise → the canonical name derived from the username
    """
    if value is None:
        return f"Get-Credential -Message {parameter_name}"
    text = str(value)
    if text.startswith(prefix):
        return text.replace("-", "_").replace(".", "_")
    username = value.username if isinstance(value, Credential) else text
    return resolve_reference_name(username, prefix)


# ---------------------------------------------------------------------------
# Mappings
# ---------------------------------------------------------------------------

def _stringify(value: Any) -> tuple[bool, str]:
    """Return ``(ok, text)``; ``ok`` is False when *value* has no string form."""
    if value is None:
        return True, ""
    try:
        return True, str(value)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Cannot stringify %s: %s", type(value).__name__, exc)
        return False, ""


def format_mapping(entries: Mapping[str, Any]) -> str:
    """``@{ key = "value"; ... }``.

    A single entry without a string form spoils the whole literal: the
    mapping's type name is returned instead.
    """
    parts: list[str] = []
    for key, item in entries.items():
        ok, text = _stringify(item)
        if not ok:
            return type(entries).__name__
        parts.append(f' {key} = "{text}";')
    return "@{" + "".join(parts) + " }"


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

def format_text_array(
    items: list[Any] | None,
    no_escape: bool = False,
    allow_variables: bool = False,
) -> str:
    if not items:
        return EMPTY_ARRAY
    rendered = [
        format_text(str(item), no_escape, allow_variables)
        for item in items
        if item is not None
    ]
    return "@(" + ",".join(rendered) + ")"


def format_int_array(items: list[int] | None) -> str:
    if not items:
        return EMPTY_ARRAY
    return "@(" + ",".join(str(n) for n in items if n is not None) + ")"


def _single_quoted(value: Any) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def _format_hashtable(entries: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for key, item in entries.items():
        if item is None:
            rendered = NULL_TOKEN
        elif isinstance(item, (list, tuple)):
            rendered = "@(" + ",".join(_single_quoted(i) for i in item if i is not None) + ")"
        else:
            rendered = _single_quoted(item)
        parts.append(f"{key}={rendered}")
    return "@{" + "; ".join(parts) + "}"


def format_object_array(
    items: list[Any] | None,
    no_escape: bool = False,
    allow_variables: bool = False,
) -> str:
    """Array literal whose shape is chosen by the first element.

    Text elements render as a string array, mappings as hashtable literals,
    anything else is concatenated as already rendered text. Elements after
    the first are assumed to share its type.
    """
    if not items:
        return EMPTY_ARRAY
    first = items[0]
    if isinstance(first, str):
        return format_text_array(items, no_escape, allow_variables)
    if isinstance(first, Mapping):
        return "@(" + ",".join(_format_hashtable(item) for item in items) + ")"
    return "@(" + "".join(str(item) for item in items if item is not None) + ")"


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def format_value(
    value: DynamicValue,
    *,
    name: str = "",
    no_escape: bool = False,
    allow_variables: bool = False,
    credential_prefix: str = DEFAULT_PREFIX,
) -> str:
    """Render a classified value as literal text.

    Raises:
        UnsupportedValueError: If *value* is not a DynamicValue
    """
    if isinstance(value, VText):
        return format_text(value.value, no_escape, allow_variables)
    if isinstance(value, VBool):
        return format_bool(value.value)
    if isinstance(value, VCredential):
        return format_credential(value.value, name, credential_prefix)
    if isinstance(value, VMapping):
        return format_mapping(value.entries)
    if isinstance(value, VTextArray):
        return format_text_array(value.items, no_escape, allow_variables)
    if isinstance(value, VIntArray):
        return format_int_array(value.items)
    if isinstance(value, VObjectArray):
        return format_object_array(value.items, no_escape, allow_variables)
    if isinstance(value, VEnum):
        return format_enum(value.value)
    if isinstance(value, VOpaque):
        return format_opaque(value.text)
    if isinstance(value, _Null):
        return NULL_TOKEN
    raise UnsupportedValueError(
        f"expected a DynamicValue, got {type(value).__name__}; use values.classify() first"
    )
