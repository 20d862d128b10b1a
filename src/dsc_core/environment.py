"""Definition tables and per-run state."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .block import render_block, render_resource
from .credentials import CredentialRegistry
from .document import ConfigurationDocument
from .rewriter import strip_quotes
from .settings import DEFAULT_SETTINGS, RenderSettings
from .typedef import ResourceDef
from .values import NamedValue, ValueKind


@dataclass
class Environment:
    """State owned by one extraction run.

    Two environments share nothing, so runs may proceed independently.
    """

    settings: RenderSettings = field(default_factory=lambda: DEFAULT_SETTINGS)
    typedefs: dict[str, ResourceDef] = field(default_factory=dict)
    credentials: CredentialRegistry | None = None
    configuration: ConfigurationDocument | None = None

    def __post_init__(self) -> None:
        if self.credentials is None:
            self.credentials = CredentialRegistry(self.settings.credential_prefix)
        if self.configuration is None:
            self.configuration = ConfigurationDocument(settings=self.settings)

    # -- ResourceDef -----------------------------------------------------

    def register_typedef(self, rd: ResourceDef) -> None:
        self.typedefs[rd.name] = rd

    def resolve_typedef(self, name: str) -> ResourceDef | None:
        return self.typedefs.get(name)

    def resolve_type(self, resource: str, parameter: str) -> ValueKind | None:
        rd = self.resolve_typedef(resource)
        if rd is None:
            return None
        return rd.kind_of(parameter)

    # -- Rendering -------------------------------------------------------

    def render(
        self,
        resource: str,
        values: Mapping[str, Any] | Iterable[NamedValue],
        exclude_metadata: bool = False,
    ) -> str:
        return render_block(
            values,
            resource=resource,
            resolver=self,
            credentials=self.credentials,
            exclude_metadata=exclude_metadata,
            settings=self.settings,
        )

    def render_resource(
        self,
        resource: str,
        instance: str,
        values: Mapping[str, Any] | Iterable[NamedValue],
        exclude_metadata: bool = False,
    ) -> str:
        return render_resource(
            resource,
            instance,
            values,
            resolver=self,
            credentials=self.credentials,
            exclude_metadata=exclude_metadata,
            settings=self.settings,
        )

    def strip_quotes(
        self,
        block: str,
        parameter_name: str,
        is_array: bool = False,
        is_object: bool = False,
    ) -> str:
        return strip_quotes(block, parameter_name, is_array, is_object, settings=self.settings)
