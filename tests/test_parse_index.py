"""Tests for the index document parser."""

import pytest
from doxygen_xml import sample_project

from doxygen_md.errors import MalformedInput
from doxygen_md.parse_index import parse_index


def test_parse_index_entries() -> None:
    """Every compound is listed with its kind and name."""
    index = parse_index(sample_project()[1])
    by_id = {e.refid: e for e in index.entries}
    assert len(index.entries) == 5
    assert by_id["namespacens"].kind == "namespace"
    assert by_id["group__core"].name == "core"


def test_scope_ids() -> None:
    """Only namespaces and class-like compounds open scopes."""
    scopes = parse_index(sample_project()[1]).scope_ids()
    assert scopes == {
        "ns::Base": "classns_1_1Base",
        "ns::Widget": "classns_1_1Widget",
        "ns": "namespacens",
    }


def test_compounds_without_refid_are_ignored() -> None:
    """Entries need a refid; nested member entries are not compounds."""
    data = (
        b'<doxygenindex><compound kind="file"><name>x.h</name></compound>'
        b'<compound refid="namespacens" kind="namespace"><name>ns</name>'
        b'<member refid="namespacens_1a1" kind="function"><name>make_widget</name></member>'
        b"</compound></doxygenindex>"
    )
    assert [e.refid for e in parse_index(data).entries] == ["namespacens"]


def test_malformed_index() -> None:
    """An unreadable index is malformed input."""
    with pytest.raises(MalformedInput):
        parse_index(b"<doxygenindex>")
