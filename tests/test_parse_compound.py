"""Tests for compound and member parsing."""

import pytest
from doxygen_xml import compound_xml, member_xml, sample_project, section

from doxygen_md.compound_kind import CompoundKind
from doxygen_md.errors import MalformedInput, UnsupportedSchema
from doxygen_md.member_kind import MemberKind, Visibility
from doxygen_md.parse_compound import parse_compound
from doxygen_md.rich_text import RefMarker, TextRun, plain_text
from doxygen_md.source_location import SourceLocation


@pytest.fixture
def compounds() -> dict[str, bytes]:
    """Compound documents of the sample project."""
    return sample_project()[0]


def test_parse_class(compounds: dict[str, bytes]) -> None:
    """Class fields, relations and template parameters are read."""
    node = parse_compound(compounds["classns_1_1Widget"])
    assert node.id == "classns_1_1Widget"
    assert node.kind == CompoundKind.CLASS
    assert node.name == "ns::Widget"
    assert node.unqualified_name == "Widget"
    assert plain_text(node.brief) == "A resizable widget."
    assert RefMarker("namespacens_1a1", "make_widget", "member") in node.detailed
    assert node.bases[0].name == "Base"
    assert node.bases[0].target_id == "classns_1_1Base"
    assert node.bases[0].visibility == Visibility.PUBLIC
    assert node.includes == ("widget.h",)
    assert [p.type.text for p in node.template_params] == ["typename T"]
    assert node.location == SourceLocation("widget.h", 10)


def test_members_in_declaration_order(compounds: dict[str, bytes]) -> None:
    """Members keep section order; private members are dropped by default."""
    node = parse_compound(compounds["classns_1_1Widget"])
    assert [m.name for m in node.members] == ["value_type", "Mode", "resize", "count"]
    kinds = [m.kind for m in node.members]
    assert kinds == [
        MemberKind.TYPEDEF,
        MemberKind.ENUM,
        MemberKind.FUNCTION,
        MemberKind.VARIABLE,
    ]

    with_private = parse_compound(compounds["classns_1_1Widget"], include_private=True)
    assert with_private.members[-1].name == "secret_"
    assert with_private.members[-1].visibility == Visibility.PRIVATE


def test_member_details(compounds: dict[str, bytes]) -> None:
    """Flags, argsstring tails, enum values and typedef definitions."""
    members = {m.name: m for m in parse_compound(compounds["classns_1_1Widget"]).members}
    resize = members["resize"]
    assert resize.is_const
    assert resize.args_tail == "const"
    assert resize.params[0].name == "n"
    assert resize.params[0].type.text == "int"
    assert not resize.has_return

    mode = members["Mode"]
    assert mode.is_strong_enum
    assert [v.name for v in mode.enum_values] == ["Fast", "Slow"]
    assert mode.enum_values[0].initializer == (TextRun("= 1"),)
    assert plain_text(mode.enum_values[0].brief) == "Go fast."
    assert mode.enum_values[0].kind == MemberKind.ENUM_VALUE

    assert members["count"].is_static
    assert members["value_type"].definition.startswith("using ")


def test_function_documentation(compounds: dict[str, bytes]) -> None:
    """Parameter docs, defaults and returns are attached to the function."""
    node = parse_compound(compounds["namespacens"])
    make = node.members[0]
    assert make.qualified_name == "ns::make_widget"
    assert make.type.segments == (RefMarker("classns_1_1Widget", "Widget", "compound"),)
    assert make.has_return
    assert make.params[0].default == (TextRun("3"),)
    assert plain_text(make.params[0].description) == "Initial size."
    assert plain_text(make.returns) == "A new widget."
    assert make.location == SourceLocation("widget.h", 40)
    assert [r.target_id for r in node.inner_classes] == [
        "classns_1_1Widget",
        "classns_1_1Base",
    ]


def test_pure_virtual(compounds: dict[str, bytes]) -> None:
    """Pure virtual functions keep their trailing specifiers."""
    draw = parse_compound(compounds["classns_1_1Base"]).members[0]
    assert draw.is_virtual
    assert draw.is_pure_virtual
    assert draw.args_tail == "const =0"


def test_group_and_file(compounds: dict[str, bytes]) -> None:
    """Group titles and file includes."""
    group = parse_compound(compounds["group__core"])
    assert group.kind == CompoundKind.GROUP
    assert group.display_title == "Core API"
    header = parse_compound(compounds["widget_8h"])
    assert header.includes == ("vector",)
    assert [r.target_id for r in header.inner_namespaces] == ["namespacens"]


def test_bare_compounddef() -> None:
    """A document may be a compounddef without the doxygen wrapper."""
    node = parse_compound(
        b'<compounddef id="structs" kind="struct"><compoundname>S</compoundname></compounddef>'
    )
    assert node.kind == CompoundKind.STRUCT
    assert node.members == ()
    assert node.location is None


def test_skipped_member_kinds() -> None:
    """Friends and other unrendered member kinds are ignored."""
    data = compound_xml(
        "classa",
        "class",
        "A",
        section(
            "friend",
            member_xml("classa_1fr", "friend", "B", type_="friend class"),
            member_xml("classa_1sig", "signal", "changed", type_="void", args="()"),
        ),
    )
    node = parse_compound(data)
    assert [(m.name, m.kind) for m in node.members] == [("changed", MemberKind.FUNCTION)]


def test_unsupported_kind() -> None:
    """Pages, dirs and examples are rejected with their kind."""
    with pytest.raises(UnsupportedSchema) as exc:
        parse_compound(compound_xml("indexpage", "page", "index"))
    assert exc.value.kind == "page"
    assert exc.value.compound_id == "indexpage"


def test_malformed_input() -> None:
    """Broken XML is malformed."""
    with pytest.raises(MalformedInput) as exc:
        parse_compound(b"<doxygen><compounddef", "broken")
    assert exc.value.compound_id == "broken"


def test_document_without_compounddef_is_unsupported() -> None:
    """Well-formed XML that holds no compound is rejected as unsupported."""
    with pytest.raises(UnsupportedSchema) as exc:
        parse_compound(b'<doxygen version="1.9.8"><other/></doxygen>', "dirdoc")
    assert exc.value.compound_id == "dirdoc"
    assert exc.value.kind == "doxygen"
