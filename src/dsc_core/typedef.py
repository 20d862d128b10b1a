"""ParamDef and ResourceDef: declared parameter types of a resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .values import ValueKind


class TypeResolver(Protocol):
    def resolve_type(self, resource: str, parameter: str) -> ValueKind | None: ...


@dataclass
class ParamDef:
    name: str
    kind: ValueKind
    type_name: str = ""  # declared type as written in the schema, if known


@dataclass
class ResourceDef:
    name: str
    params: list[ParamDef] = field(default_factory=list)

    def kind_of(self, parameter: str) -> ValueKind | None:
        # Parameter names are case-insensitive in the target language
        wanted = parameter.lstrip("$").lower()
        for param in self.params:
            if param.name.lower() == wanted:
                return param.kind
        return None

    @classmethod
    def from_type_names(cls, name: str, params: dict[str, str]) -> "ResourceDef":
        """Build a definition from ``{parameter: declared type name}``.

        Parameters whose type name is not recognised are declared Opaque.
        """
        defs = [
            ParamDef(p, kind_from_type_name(t) or ValueKind.Opaque, t)
            for p, t in params.items()
        ]
        return cls(name=name, params=defs)


_TYPE_NAMES: dict[str, ValueKind] = {
    "string": ValueKind.Text,
    "guid": ValueKind.Text,
    "timespan": ValueKind.Text,
    "datetime": ValueKind.Text,
    "boolean": ValueKind.Bool,
    "bool": ValueKind.Bool,
    "switchparameter": ValueKind.Bool,
    "pscredential": ValueKind.Credential,
    "hashtable": ValueKind.Mapping,
    "string[]": ValueKind.TextArray,
    "arraylist": ValueKind.TextArray,
    "list`1": ValueKind.TextArray,
    "uint32[]": ValueKind.IntArray,
    "int32[]": ValueKind.IntArray,
    "object[]": ValueKind.ObjectArray,
    "ciminstance[]": ValueKind.ObjectArray,
    "ciminstance": ValueKind.Opaque,
    "uint32": ValueKind.Opaque,
    "int32": ValueKind.Opaque,
    "uint64": ValueKind.Opaque,
    "int64": ValueKind.Opaque,
}


def kind_from_type_name(type_name: str) -> ValueKind | None:
    """Map a declared type name (``System.String[]``, ``PSCredential``...) to a ValueKind."""
    name = type_name.strip().lower()
    # PowerShell type accelerator form: [string[]]
    if name.startswith("[") and name.endswith("]"):
        name = name[1:-1]
    for namespace in ("system.management.automation.", "microsoft.management.infrastructure.",
                      "system.collections.generic.", "system.collections.", "system."):
        if name.startswith(namespace):
            name = name[len(namespace):]
            break
    return _TYPE_NAMES.get(name)
