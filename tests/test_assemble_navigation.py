"""Tests for navigation assembly and serialization."""

import yaml

from doxygen_md.assemble_navigation import assemble_navigation, navigation_to_yaml
from doxygen_md.navigation_entry import NavigationEntry
from doxygen_md.output_location import OutputLocation
from doxygen_md.render_index_page import render_index_page


def _entry(cid: str, title: str, section: str, parent: str | None = None) -> NavigationEntry:
    return NavigationEntry(
        title=title,
        location=OutputLocation(f"{section}/{cid}.md"),
        parent_key=parent,
        section=section,
        compound_id=cid,
    )


def test_sections_and_nesting() -> None:
    """Children nest under parents across sections; empty sections are omitted."""
    tree = assemble_navigation(
        [
            _entry("w", "ns::Widget", "classes", "ns"),
            _entry("ns", "ns", "namespaces"),
            _entry("g", "Core", "groups"),
        ]
    )
    assert [s.title for s in tree.sections] == ["Namespaces", "Groups"]
    ns_node = tree.sections[0].nodes[0]
    assert ns_node.entry.compound_id == "ns"
    assert [c.entry.compound_id for c in ns_node.children] == ["w"]
    assert tree.warnings == []


def test_alphabetical_at_every_level() -> None:
    """Case-insensitive first, then case-sensitive, then by path."""
    tree = assemble_navigation(
        [
            _entry("b", "beta", "classes"),
            _entry("a2", "alpha", "classes"),
            _entry("a1", "Alpha", "classes"),
            _entry("z", "zeta", "namespaces"),
            _entry("c2", "z::b", "classes", "z"),
            _entry("c1", "z::A", "classes", "z"),
        ]
    )
    classes = next(s for s in tree.sections if s.key == "classes")
    assert [n.entry.title for n in classes.nodes] == ["Alpha", "alpha", "beta"]
    z = tree.sections[0].nodes[0]
    assert [c.entry.title for c in z.children] == ["z::A", "z::b"]


def test_orphan_is_demoted() -> None:
    """A missing parent is reported and the entry moves to the top level."""
    tree = assemble_navigation([_entry("ab", "a::B", "classes", "namespacea")])
    assert [n.entry.compound_id for n in tree.sections[0].nodes] == ["ab"]
    assert len(tree.warnings) == 1
    warning = tree.warnings[0]
    assert warning.compound_id == "ab"
    assert warning.parent_id == "namespacea"


def test_cycle_is_broken() -> None:
    """Entries in a parent cycle are never dropped."""
    entries = [
        _entry("a", "A", "classes", "b"),
        _entry("b", "B", "classes", "a"),
        _entry("c", "C", "classes", "c"),
    ]
    tree = assemble_navigation(entries)
    assert sorted(e.compound_id for e in tree.entries()) == ["a", "b", "c"]
    top = [n.entry.compound_id for n in tree.sections[0].nodes]
    assert top == ["a", "c"]
    assert [c.entry.compound_id for c in tree.sections[0].nodes[0].children] == ["b"]
    assert {w.compound_id for w in tree.warnings} == {"a", "c"}


def test_navigation_yaml() -> None:
    """Parents become sections whose first item is their own page."""
    tree = assemble_navigation(
        [
            _entry("ns", "ns", "namespaces"),
            _entry("w", "ns::Widget", "classes", "ns"),
            _entry("f", "widget.h", "files"),
        ]
    )
    nav = yaml.safe_load(navigation_to_yaml(tree, "index.md"))
    assert nav == {
        "nav": [
            {"Overview": "index.md"},
            {
                "Namespaces": [
                    {"ns": [{"ns": "namespaces/ns.md"}, {"ns::Widget": "classes/w.md"}]}
                ]
            },
            {"Files": [{"widget.h": "files/f.md"}]},
        ]
    }


def test_index_page() -> None:
    """The landing page lists top-level entries per section."""
    tree = assemble_navigation(
        [_entry("ns", "ns", "namespaces"), _entry("w", "ns::Widget", "classes", "ns")]
    )
    text = render_index_page(tree, "API Reference")
    assert text == "# API Reference\n\n## Namespaces\n- [ns](namespaces/ns.md)\n"
