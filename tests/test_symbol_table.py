"""Tests for the two-phase symbol table."""

import pytest
from doxygen_xml import sample_project

from doxygen_md.compound_kind import CompoundKind
from doxygen_md.compound_node import CompoundNode, InnerRef
from doxygen_md.errors import DuplicateId
from doxygen_md.member_kind import MemberKind
from doxygen_md.member_node import MemberNode
from doxygen_md.output_location import OutputLocation
from doxygen_md.parse_compound import parse_compound
from doxygen_md.parse_index import DoxygenIndex, IndexEntry, parse_index
from doxygen_md.symbol_table import SymbolTable, SymbolTableBuilder
from doxygen_md.type_expression import type_from_text


def _member(mid: str, name: str) -> MemberNode:
    return MemberNode(
        id=mid,
        kind=MemberKind.FUNCTION,
        name=name,
        qualified_name=name,
        type=type_from_text("void"),
    )


def _sample_table() -> SymbolTable:
    compounds, index = sample_project()
    builder = SymbolTableBuilder(parse_index(index))
    builder.register_all(parse_compound(data) for data in compounds.values())
    return builder.freeze()


def test_locations_by_kind() -> None:
    """Each kind gets its own directory and a slug of the qualified name."""
    table = _sample_table()
    assert table.location("classns_1_1Widget") == OutputLocation("classes/ns-widget.md")
    assert table.location("namespacens") == OutputLocation("namespaces/ns.md")
    assert table.location("widget_8h") == OutputLocation("files/widget-h.md")
    assert table.location("group__core") == OutputLocation("groups/core.md")
    assert table.location("missing") is None


def test_slug_collision_in_registration_order() -> None:
    """Names that slug the same are disambiguated in registration order."""
    builder = SymbolTableBuilder()
    first = builder.register(CompoundNode("classFoo_1_1Bar", CompoundKind.CLASS, "Foo::Bar"))
    second = builder.register(CompoundNode("classfoo_1_1bar", CompoundKind.CLASS, "foo::bar"))
    assert first.path == "classes/foo-bar.md"
    assert second.path == "classes/foo-bar-2.md"

    reversed_builder = SymbolTableBuilder()
    reversed_builder.register(CompoundNode("classfoo_1_1bar", CompoundKind.CLASS, "foo::bar"))
    loc = reversed_builder.register(CompoundNode("classFoo_1_1Bar", CompoundKind.CLASS, "Foo::Bar"))
    assert loc.path == "classes/foo-bar-2.md"


def test_duplicate_id() -> None:
    """Registering the same id twice is fatal."""
    builder = SymbolTableBuilder()
    builder.register(CompoundNode("classa", CompoundKind.CLASS, "A"))
    with pytest.raises(DuplicateId) as exc:
        builder.register(CompoundNode("classa", CompoundKind.STRUCT, "B"))
    assert exc.value.compound_id == "classa"


def test_no_registration_after_freeze() -> None:
    """The builder refuses new compounds once frozen."""
    builder = SymbolTableBuilder()
    table = builder.freeze()
    assert len(table) == 0
    with pytest.raises(RuntimeError):
        builder.register(CompoundNode("classa", CompoundKind.CLASS, "A"))


def test_member_owner_by_rank() -> None:
    """A member repeated in a file and a namespace belongs to the namespace."""
    table = _sample_table()
    assert table.owner_of("namespacens_1a1") == "namespacens"
    assert table.member_location("namespacens_1a1") == OutputLocation(
        "namespaces/ns.md", "make_widget"
    )
    assert table.target("namespacens_1a1") == table.member_location("namespacens_1a1")
    assert table.target("classns_1_1Widget") == OutputLocation("classes/ns-widget.md")
    assert table.target("classstd_1_1vector") is None


def test_enum_values_share_owner() -> None:
    """Enum values are anchored on the page of their enum."""
    table = _sample_table()
    assert table.member_location("classns_1_1Widget_1e1a1") == OutputLocation(
        "classes/ns-widget.md", "fast"
    )
    assert table.owner_of("classns_1_1Widget_1e1a2") == "classns_1_1Widget"


def test_overload_and_section_anchors() -> None:
    """Overloads get -2; names clashing with page sections are pushed aside."""
    node = CompoundNode(
        "classa",
        CompoundKind.CLASS,
        "A",
        members=(_member("m1", "f"), _member("m2", "f"), _member("m3", "synopsis")),
    )
    builder = SymbolTableBuilder()
    builder.register(node)
    table = builder.freeze()
    assert table.member_location("m1") == OutputLocation("classes/a.md", "f")
    assert table.member_location("m2") == OutputLocation("classes/a.md", "f-2")
    assert table.member_location("m3") == OutputLocation("classes/a.md", "synopsis-2")


def test_declared_parents() -> None:
    """Scope containment wins over groups; files have no scope parent."""
    table = _sample_table()
    assert table.parent_of("classns_1_1Widget") == "namespacens"
    assert table.parent_of("classns_1_1Base") == "namespacens"
    assert table.parent_of("namespacens") is None
    assert table.parent_of("widget_8h") is None
    assert table.parent_of("group__core") is None


def test_group_parent_and_index_scope() -> None:
    """Groups adopt listed files; the index names scopes that were never registered."""
    index = DoxygenIndex(entries=(IndexEntry("namespacea", "namespace", "a"),))
    builder = SymbolTableBuilder(index)
    builder.register(
        CompoundNode(
            "group__g", CompoundKind.GROUP, "g", inner_files=(InnerRef("f_8h", "f.h"),)
        )
    )
    builder.register(CompoundNode("f_8h", CompoundKind.FILE, "f.h"))
    builder.register(CompoundNode("classa_1_1B", CompoundKind.CLASS, "a::B"))
    table = builder.freeze()
    assert table.parent_of("f_8h") == "group__g"
    assert table.parent_of("classa_1_1B") == "namespacea"
    assert "namespacea" not in table


def test_frozen_table_is_read_only() -> None:
    """The compounds view is an immutable snapshot in registration order."""
    table = _sample_table()
    ids = [node.id for node in table.compounds()]
    assert ids == list(sample_project()[0])
    assert isinstance(table.compounds(), tuple)
