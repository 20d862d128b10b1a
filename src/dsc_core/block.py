"""Block assembler: named values → aligned resource-block text."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .credentials import CredentialRegistry
from .literals import format_value
from .settings import DEFAULT_SETTINGS, RenderSettings
from .typedef import TypeResolver
from .values import Credential, NamedValue, VCredential, classify

logger = logging.getLogger(__name__)


def named_values(values: Mapping[str, Any] | Iterable[NamedValue]) -> dict[str, NamedValue]:
    """Normalise a plain mapping or a NamedValue iterable to ``{name: NamedValue}``.

    Later entries replace earlier ones with the same name.
    """
    if isinstance(values, Mapping):
        return {
            name: value if isinstance(value, NamedValue) else NamedValue(name, value)
            for name, value in values.items()
        }
    return {nv.name: nv for nv in values}


def render_block(
    values: Mapping[str, Any] | Iterable[NamedValue],
    *,
    resource: str = "",
    resolver: TypeResolver | None = None,
    credentials: CredentialRegistry | None = None,
    exclude_metadata: bool = False,
    settings: RenderSettings | None = None,
) -> str:
    """Render the body lines of one resource block.

    Lines are ``<indent><name padded> = <literal>;[ <comment>]`` sorted by
    name. Entries with a ``None`` value are dropped. Entries named
    ``<metadata_prefix><Name>`` never get a line of their own: their text is
    appended as a comment to ``Name``'s line, unless *exclude_metadata* is
    set, in which case they are discarded.

    *resolver* is asked for the declared type of values whose runtime type
    does not decide it (empty sequences). When *credentials* is given, it
    records every credential username rendered.
    """
    settings = settings or DEFAULT_SETTINGS
    prefix = settings.metadata_prefix
    entries = named_values(values)

    comments: dict[str, str] = {}
    rows: list[NamedValue] = []
    for name in sorted(entries):
        nv = entries[name]
        if nv.value is None:
            continue
        if name.startswith(prefix):
            if not exclude_metadata:
                comments[name[len(prefix):]] = str(nv.value)
            continue
        rows.append(nv)

    if not rows:
        return ""

    width = max(settings.min_name_width, max(len(nv.name) for nv in rows))
    lines: list[str] = []
    for nv in rows:
        literal = _render_literal(nv, resource, resolver, credentials, settings)
        comment = nv.comment or comments.get(nv.name)
        line = f"{settings.indent}{nv.name.ljust(width)} = {literal};"
        if comment:
            line += f" {comment}"
        lines.append(line + settings.line_terminator)
    return "".join(lines)


def render_resource(
    resource: str,
    instance: str,
    values: Mapping[str, Any] | Iterable[NamedValue],
    **kwargs: Any,
) -> str:
    """Wrap :func:`render_block` output in a ``Resource "Instance" { ... }`` header.

    Keyword arguments are passed to :func:`render_block`.
    """
    settings = kwargs.get("settings") or DEFAULT_SETTINGS
    body = render_block(values, resource=resource, **kwargs)
    nl = settings.line_terminator
    outer = settings.resource_indent
    return (
        f'{outer}{resource} "{instance}"{nl}'
        f"{outer}{{{nl}"
        f"{body}"
        f"{outer}}}{nl}"
    )


def _render_literal(
    nv: NamedValue,
    resource: str,
    resolver: TypeResolver | None,
    credentials: CredentialRegistry | None,
    settings: RenderSettings,
) -> str:
    prefix = credentials.prefix if credentials is not None else settings.credential_prefix
    try:
        kind = nv.kind
        if kind is None and resolver is not None and _is_empty_sequence(nv.value):
            kind = resolver.resolve_type(resource, nv.name)

        value = classify(nv.value, kind)
        if credentials is not None and isinstance(value, VCredential):
            _record_credential(credentials, value)

        return format_value(
            value,
            name=nv.name,
            no_escape=nv.no_escape,
            allow_variables=nv.allow_variables,
            credential_prefix=prefix,
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("Cannot format %s (%s): %s", nv.name, type(nv.value).__name__, exc)
        return _fallback(nv.value)


def _is_empty_sequence(raw: Any) -> bool:
    return isinstance(raw, (list, tuple)) and not raw


def _record_credential(credentials: CredentialRegistry, value: VCredential) -> None:
    raw = value.value
    if isinstance(raw, Credential):
        credentials.save(raw.username)
    elif isinstance(raw, str) and not raw.startswith(credentials.prefix):
        credentials.save(raw)


def _fallback(raw: Any) -> str:
    try:
        return str(raw)
    except Exception:  # noqa: BLE001
        return type(raw).__name__
