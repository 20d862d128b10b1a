"""DSC Core — literal rendering for DSC resource blocks."""

from .block import render_block, render_resource
from .credentials import CredentialRegistry, resolve_reference_name
from .document import ConfigurationDocument
from .environment import Environment
from .errors import DSCCoreError, SettingsError, UnsupportedValueError
from .escape import escape
from .literals import format_value
from .rewriter import strip_quotes
from .settings import DEFAULT_SETTINGS, RenderSettings, load_settings
from .typedef import ParamDef, ResourceDef, TypeResolver, kind_from_type_name
from .values import (
    Credential,
    NamedValue,
    Null,
    ValueKind,
    VBool,
    VCredential,
    VEnum,
    VIntArray,
    VMapping,
    VObjectArray,
    VOpaque,
    VText,
    VTextArray,
    classify,
)

__all__ = [
    "render_block",
    "render_resource",
    "strip_quotes",
    "escape",
    "format_value",
    "classify",
    "Environment",
    "ConfigurationDocument",
    "CredentialRegistry",
    "resolve_reference_name",
    "RenderSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "ParamDef",
    "ResourceDef",
    "TypeResolver",
    "kind_from_type_name",
    "Credential",
    "NamedValue",
    "Null",
    "ValueKind",
    "VBool",
    "VCredential",
    "VEnum",
    "VIntArray",
    "VMapping",
    "VObjectArray",
    "VOpaque",
    "VText",
    "VTextArray",
    "DSCCoreError",
    "SettingsError",
    "UnsupportedValueError",
]
