"""ConfigurationDocument — per-node configuration data collected during a run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .literals import format_value
from .settings import DEFAULT_SETTINGS, RenderSettings
from .values import classify

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    value: Any
    description: str | None = None


@dataclass
class ConfigurationDocument:
    """Holds configuration data entries keyed by node, then by key.

    One node identifier (``settings.global_node``, ``NonNodeData`` by
    default) is reserved for data shared by every node and renders in its
    own section.
    """

    settings: RenderSettings = field(default_factory=lambda: DEFAULT_SETTINGS)
    nodes: dict[str, dict[str, Entry]] = field(default_factory=dict)

    # -- Entries ---------------------------------------------------------

    def add_entry(self, node: str, key: str, value: Any, description: str | None = None) -> None:
        """Add or replace *key* under *node*; a replaced key keeps its position."""
        entries = self.nodes.setdefault(node, {})
        if key in entries:
            logger.debug("Replacing configuration entry %s/%s", node, key)
        entries[key] = Entry(value, description)

    def get_entry(self, node: str, key: str) -> Any:
        entry = self.nodes.get(node, {}).get(key)
        return entry.value if entry is not None else None

    def remove_entry(self, node: str, key: str) -> None:
        self.nodes.get(node, {}).pop(key, None)

    @property
    def node_names(self) -> list[str]:
        """Node identifiers other than the global one, in insertion order."""
        return [n for n in self.nodes if n != self.settings.global_node]

    def clear(self) -> None:
        self.nodes.clear()

    # -- Rendering -------------------------------------------------------

    def render(self) -> str:
        """Render the document as a PowerShell data file.

        ``AllNodes`` lists one hashtable per node with its ``NodeName``
        first; the global node's entries go to ``NonNodeData``.
        """
        nl = self.settings.line_terminator
        node_blocks = [
            self._render_node(self.nodes[name], node_name=name) for name in self.node_names
        ]
        global_entries = self.nodes.get(self.settings.global_node, {})

        out = "@{" + nl
        out += "    AllNodes = @(" + nl
        out += ("," + nl).join(node_blocks)
        if node_blocks:
            out += nl
        out += "    )" + nl
        out += f"    {self.settings.global_node} = @(" + nl
        if global_entries:
            out += self._render_node(global_entries) + nl
        out += "    )" + nl
        out += "}" + nl
        return out

    def _render_node(self, entries: dict[str, Entry], node_name: str | None = None) -> str:
        nl = self.settings.line_terminator
        indent = self.settings.indent
        outer = self.settings.resource_indent
        lines = [outer + "@{"]
        if node_name is not None:
            lines.append(f'{indent}NodeName = "{node_name}"')
        for key, entry in entries.items():
            if entry.description:
                lines.append(f"{indent}# {entry.description}")
            literal = format_value(
                classify(entry.value), name=key, credential_prefix=self.settings.credential_prefix
            )
            lines.append(f"{indent}{key} = {literal}")
        lines.append(outer + "}")
        return nl.join(lines)
