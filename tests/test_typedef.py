"""Tests for dsc_core.typedef."""

from dsc_core.typedef import ParamDef, ResourceDef, kind_from_type_name
from dsc_core.values import ValueKind


def test_kind_from_short_names():
    assert kind_from_type_name("String") == ValueKind.Text
    assert kind_from_type_name("Boolean") == ValueKind.Bool
    assert kind_from_type_name("PSCredential") == ValueKind.Credential
    assert kind_from_type_name("Hashtable") == ValueKind.Mapping


def test_kind_from_full_names():
    assert kind_from_type_name("System.String[]") == ValueKind.TextArray
    assert kind_from_type_name("System.UInt32[]") == ValueKind.IntArray
    assert kind_from_type_name(
        "System.Management.Automation.PSCredential"
    ) == ValueKind.Credential
    assert kind_from_type_name(
        "Microsoft.Management.Infrastructure.CimInstance[]"
    ) == ValueKind.ObjectArray


def test_kind_from_accelerator():
    assert kind_from_type_name("[string[]]") == ValueKind.TextArray
    assert kind_from_type_name("[Guid]") == ValueKind.Text


def test_kind_unknown():
    assert kind_from_type_name("MSFT_Something") is None


def test_resource_kind_of_case_insensitive():
    rd = ResourceDef("AADGroup", [ParamDef("DisplayName", ValueKind.Text)])
    assert rd.kind_of("displayname") == ValueKind.Text
    assert rd.kind_of("$DisplayName") == ValueKind.Text
    assert rd.kind_of("Missing") is None


def test_from_type_names():
    rd = ResourceDef.from_type_names(
        "AADGroup",
        {"Members": "String[]", "Credential": "PSCredential", "Rules": "MSFT_Rule"},
    )
    assert rd.kind_of("Members") == ValueKind.TextArray
    assert rd.kind_of("Credential") == ValueKind.Credential
    assert rd.kind_of("Rules") == ValueKind.Opaque
    assert rd.params[2].type_name == "MSFT_Rule"
