"""Tests for dsc_core.block."""

import logging

from dsc_core.block import named_values, render_block, render_resource
from dsc_core.credentials import CredentialRegistry
from dsc_core.settings import RenderSettings
from dsc_core.typedef import ParamDef, ResourceDef
from dsc_core.values import Credential, NamedValue, ValueKind, VOpaque

INDENT = " " * 12
NL = "\r\n"


def _line(name, literal, width=20, comment=""):
    return f"{INDENT}{name:<{width}} = {literal};{comment}{NL}"


class _Resolver:
    def __init__(self, kinds):
        self.kinds = kinds
        self.calls = []

    def resolve_type(self, resource, parameter):
        self.calls.append((resource, parameter))
        return self.kinds.get(parameter)


# ---------------------------------------------------------------------------
# named_values
# ---------------------------------------------------------------------------

def test_named_values_from_mapping():
    result = named_values({"A": 1})
    assert result == {"A": NamedValue("A", 1)}


def test_named_values_keeps_named_value_in_mapping():
    nv = NamedValue("A", "x", no_escape=True)
    assert named_values({"A": nv})["A"] is nv


def test_named_values_last_wins():
    result = named_values([NamedValue("A", 1), NamedValue("A", 2)])
    assert result["A"].value == 2


# ---------------------------------------------------------------------------
# render_block
# ---------------------------------------------------------------------------

class TestRenderBlock:
    def test_end_to_end_scenario(self):
        block = render_block({"Name": "Test", "Enabled": True, "Items": ["Item1", "Item2"]})
        assert block == (
            _line("Enabled", "$True")
            + _line("Items", '@("Item1","Item2")')
            + _line("Name", '"Test"')
        )

    def test_equals_aligned(self):
        block = render_block({"A": "x", "LongerName": "y", "Mid": True})
        columns = {line.index(" = ") for line in block.split(NL) if line}
        assert len(columns) == 1

    def test_width_grows_with_long_names(self):
        name = "AVeryLongParameterNameIndeed"
        block = render_block({name: "x", "B": "y"})
        assert block == _line(name, '"x"', width=len(name)) + _line("B", '"y"', width=len(name))

    def test_sorted_regardless_of_input_order(self):
        a = render_block([NamedValue("b", "2"), NamedValue("a", "1"), NamedValue("C", "3")])
        b = render_block([NamedValue("C", "3"), NamedValue("a", "1"), NamedValue("b", "2")])
        assert a == b
        names = [line.split()[0] for line in a.split(NL) if line]
        assert names == ["C", "a", "b"]

    def test_deterministic(self):
        values = {"Name": "Test", "Members": ["a"], "Cred": Credential("CONTOSO\\svc")}
        assert render_block(values) == render_block(values)

    def test_none_dropped(self):
        block = render_block({"Name": "Test", "Description": None})
        assert "Description" not in block
        assert block.count(NL) == 1

    def test_all_none_renders_nothing(self):
        assert render_block({"A": None}) == ""

    def test_metadata_becomes_comment(self):
        block = render_block({"Name": "Test", "_metadata_Name": "# from the portal"})
        assert block == _line("Name", '"Test"', comment=" # from the portal")
        assert "_metadata_" not in block

    def test_metadata_excluded(self):
        block = render_block(
            {"Name": "Test", "_metadata_Name": "# from the portal"}, exclude_metadata=True
        )
        assert block == _line("Name", '"Test"')

    def test_named_value_comment(self):
        block = render_block([NamedValue("Name", "Test", comment="# note")])
        assert block.endswith('"Test"; # note' + NL)

    def test_metadata_without_target_is_dropped(self):
        block = render_block({"Name": "Test", "_metadata_Other": "# orphan"})
        assert "orphan" not in block

    def test_no_escape_flag(self):
        block = render_block([NamedValue("Owner", "$OrganizationName", no_escape=True)])
        assert '"$OrganizationName"' in block

    def test_allow_variables_flag(self):
        block = render_block([NamedValue("Owner", "$Org`x", allow_variables=True)])
        assert '"$Org``x"' in block

    def test_opaque_passthrough(self):
        block = render_block({"Rules": VOpaque("@(MSFT_Rule{Name = 'x'})")})
        assert "= @(MSFT_Rule{Name = 'x'});" in block

    def test_number(self):
        assert "= 42;" in render_block({"Count": 42})

    def test_credential(self):
        block = render_block({"Credential": Credential("admin@contoso.com")})
        assert block == _line("Credential", "$Credsadmin")

    def test_credentials_recorded(self):
        reg = CredentialRegistry()
        render_block(
            {"Credential": Credential("Admin@contoso.com"), "Other": "$Credsexisting"},
            credentials=reg,
        )
        assert reg.test("admin@contoso.com")
        assert len(reg) == 1

    def test_resolver_for_empty_sequence(self):
        resolver = _Resolver({"Ports": ValueKind.IntArray})
        block = render_block({"Ports": [], "Name": "x"}, resource="Firewall", resolver=resolver)
        assert "= @();" in block
        assert resolver.calls == [("Firewall", "Ports")]

    def test_declared_kind_used(self):
        block = render_block([NamedValue("Ensure", "Present", kind=ValueKind.Enumeration)])
        assert '= "Present";' in block

    def test_formatting_failure_does_not_abort(self, caplog):
        values = [NamedValue("Bad", _ExplodingOpaque()), NamedValue("Good", "x")]
        with caplog.at_level(logging.WARNING, logger="dsc_core.block"):
            block = render_block(values)
        assert _line("Good", '"x"') in block
        assert "_ExplodingOpaque" in block
        assert "Cannot format Bad" in caplog.text

    def test_unprintable_value_does_not_abort(self, caplog):
        class Boom:
            def __str__(self):
                raise RuntimeError("no string form")

        with caplog.at_level(logging.WARNING, logger="dsc_core.block"):
            block = render_block({"A": "x", "B": Boom(), "C": "y"})
        assert _line("A", '"x"') in block
        assert _line("B", "Boom") in block
        assert _line("C", '"y"') in block
        assert "Cannot format B" in caplog.text

    def test_declared_text_array_skips_leading_none(self):
        block = render_block([NamedValue("Items", [None, "a"], kind=ValueKind.TextArray)])
        assert block == _line("Items", '@("a")')

    def test_custom_settings(self):
        settings = RenderSettings(indent="", line_terminator="\n", min_name_width=0)
        assert render_block({"A": "x"}, settings=settings) == 'A = "x";\n'


class _ExplodingOpaque(VOpaque):
    """Opaque value whose text cannot be read."""

    def __init__(self):
        pass

    @property
    def text(self):
        raise RuntimeError("no text")

    def __str__(self):
        raise RuntimeError("no text")


# ---------------------------------------------------------------------------
# render_resource
# ---------------------------------------------------------------------------

def test_render_resource_wraps_body():
    out = render_resource("AADGroup", "Admins", {"DisplayName": "Admins"})
    assert out == (
        '        AADGroup "Admins"' + NL
        + "        {" + NL
        + _line("DisplayName", '"Admins"')
        + "        }" + NL
    )


def test_render_resource_passes_resolver():
    rd = ResourceDef("AADGroup", [ParamDef("Owners", ValueKind.TextArray)])

    class Resolver:
        def resolve_type(self, resource, parameter):
            assert resource == "AADGroup"
            return rd.kind_of(parameter)

    out = render_resource("AADGroup", "Admins", {"Owners": []}, resolver=Resolver())
    assert "= @();" in out
