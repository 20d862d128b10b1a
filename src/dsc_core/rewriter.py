"""Quote-boundary rewriter: turn a parameter's quoted literal into a bare expression.

A rendered block holds lines such as::

    Owner                = "$ConfigurationData.NonNodeData.Owner";

``strip_quotes(block, "Owner")`` drops the boundary quotes of that value so
the target language evaluates it instead of treating it as a string. The
parameter name may also occur inside other values, and composite values may
carry quoted fields of their own, so the scan below only accepts a real
assignment and skips quotes that belong to nested literals.
"""

from __future__ import annotations

import logging
import re

from .escape import ESCAPE_LEAD
from .settings import DEFAULT_SETTINGS, RenderSettings

logger = logging.getLogger(__name__)

_QUOTE = '"'
_FALLBACK_QUOTE = "'"


def strip_quotes(
    block: str,
    parameter_name: str,
    is_array: bool = False,
    is_object: bool = False,
    *,
    settings: RenderSettings | None = None,
) -> str:
    """Remove the boundary quotes around *parameter_name*'s value in *block*.

    Every quote pair found between the assignment and the end of its
    statement is stripped, so ``@("a","b")`` becomes ``@(a,b)``. With
    *is_array* or *is_object* set, quotes opening a nested ``field = "..."``
    literal are skipped and the composite value is tidied afterwards.

    Returns *block* unchanged when the parameter does not occur.
    """
    settings = settings or DEFAULT_SETTINGS
    assignment = _find_assignment(block, parameter_name)
    if assignment < 0:
        logger.debug("Parameter %s not found; block left unchanged", parameter_name)
        return block

    line_end = block.find(settings.statement_end, assignment)
    if line_end < 0:
        line_end = len(block)

    nested = is_array or is_object
    boundaries: list[int] = []
    start = _next_quote(block, assignment)
    while 0 <= start < line_end:
        end = _closing_quote(block, start, nested)
        if end < 0 or end > line_end:
            break
        boundaries.extend((start, end))
        start = _next_quote(block, end + 1)

    if not boundaries:
        return block

    parts: list[str] = []
    cursor = 0
    for pos in boundaries:
        parts.append(block[cursor:pos])
        cursor = pos + 1
    parts.append(block[cursor:])
    result = "".join(parts)

    if nested:
        result = _tidy_composite(result, assignment, settings)
    return result


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

def _find_assignment(block: str, parameter_name: str) -> int:
    """Index of the first occurrence of *parameter_name* that is an assignment.

    A candidate must be delimited by whitespace (or start the text) and the
    next ``=`` after it must come before the next quote; otherwise the name
    sits inside some other value.
    """
    pattern = re.compile(r"(?<!\S)" + re.escape(parameter_name) + " ")
    for match in pattern.finditer(block):
        pos = match.start()
        equals = block.find("=", pos)
        if equals < 0:
            return -1
        quote = block.find(_QUOTE, pos)
        if quote < 0 or equals < quote:
            return pos
    return -1


def _is_escaped(block: str, pos: int) -> bool:
    count = 0
    i = pos - 1
    while i >= 0 and block[i] == ESCAPE_LEAD:
        count += 1
        i -= 1
    return count % 2 == 1


def _next_quote(block: str, pos: int) -> int:
    """Next unescaped double quote at or after *pos*, or -1."""
    pos = block.find(_QUOTE, pos)
    while pos >= 0 and _is_escaped(block, pos):
        pos = block.find(_QUOTE, pos + 1)
    return pos


def _opens_nested(block: str, pos: int) -> bool:
    # field = "value" or field="value"
    return block[pos - 1 : pos] == "=" or block[max(pos - 2, 0) : pos] == "= "


def _closing_quote(block: str, start: int, nested: bool) -> int:
    end = _next_quote(block, start + 1)
    if end < 0:
        return block.find(_FALLBACK_QUOTE, start + 1)
    while nested and end >= 0 and _opens_nested(block, end):
        inner_end = _next_quote(block, end + 1)
        if inner_end < 0:
            return -1
        end = _next_quote(block, inner_end + 1)
    return end


# ---------------------------------------------------------------------------
# Composite clean-up
# ---------------------------------------------------------------------------

def _tidy_composite(block: str, assignment: int, settings: RenderSettings) -> str:
    nl = settings.line_terminator
    end = block.find(settings.statement_end, assignment)
    if end < 0:
        end = len(block)

    statement = block[assignment:end].replace(ESCAPE_LEAD + _QUOTE, _QUOTE)
    if statement.endswith('")'):
        statement = statement[:-1] + nl + settings.indent + ")"
    block = block[:assignment] + statement + block[end:]

    block = re.sub(re.escape(nl) + r"\s*[,;]" + re.escape(nl), nl, block)
    return block.replace("}," + nl, "}" + nl)
