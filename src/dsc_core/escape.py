"""String escaping for double-quoted literals."""

from __future__ import annotations

ESCAPE_LEAD = "`"
SUBSTITUTION_SIGIL = "$"
TYPOGRAPHIC_QUOTES = ("„", "“", "”")


def escape(text: str | None, allow_variables: bool = False) -> str:
    """Escape *text* for use between double quotes.

    The escape lead is doubled first so that the escapes added afterwards
    are not escaped again. ``$`` is left alone when *allow_variables* is set.
    """
    if not text:
        return ""
    result = text.replace(ESCAPE_LEAD, ESCAPE_LEAD * 2)
    if not allow_variables:
        result = result.replace(SUBSTITUTION_SIGIL, ESCAPE_LEAD + SUBSTITUTION_SIGIL)
    for mark in TYPOGRAPHIC_QUOTES:
        result = result.replace(mark, ESCAPE_LEAD + mark)
    return result.replace('"', ESCAPE_LEAD + '"')
