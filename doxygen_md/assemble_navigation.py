"""Assemble navigation entries into the site navigation tree.

Every entry ends up in the tree exactly once. An entry whose declared parent is not
among the rendered pages, or whose parent chain loops back to it, is demoted to the
top level of its own section and reported as an OrphanReference.
"""

from dataclasses import dataclass, field

import yaml

from doxygen_md.compound_kind import SECTION_TITLES
from doxygen_md.errors import OrphanReference
from doxygen_md.navigation_entry import NavigationEntry


@dataclass
class NavNode:
    """An entry and the entries nested under it."""

    entry: NavigationEntry
    children: list["NavNode"] = field(default_factory=list)


@dataclass
class NavSection:
    """A top-level navigation section (Namespaces, Classes...)."""

    key: str
    title: str
    nodes: list[NavNode] = field(default_factory=list)


@dataclass
class NavigationTree:
    """The ordered navigation tree plus the demotions made while building it."""

    sections: list[NavSection]
    warnings: list[OrphanReference] = field(default_factory=list)

    def entries(self) -> list[NavigationEntry]:
        """All entries, depth-first in display order."""
        out: list[NavigationEntry] = []
        pending = [n for s in self.sections for n in s.nodes][::-1]
        while pending:
            node = pending.pop()
            out.append(node.entry)
            pending.extend(reversed(node.children))
        return out


def assemble_navigation(entries: list[NavigationEntry]) -> NavigationTree:
    """Build the navigation tree from the entries emitted by the renderer."""
    ordered = sorted(entries, key=NavigationEntry.sort_key)
    by_id = {e.compound_id: e for e in ordered}
    warnings: list[OrphanReference] = []
    parents: dict[str, str | None] = {}

    for entry in ordered:
        pid = entry.parent_key
        if pid is not None and pid not in by_id:
            msg = f"Parent {pid} of {entry.compound_id} has no page; listed at top level"
            warnings.append(OrphanReference(msg, entry.compound_id, pid))
            pid = None
        parents[entry.compound_id] = pid

    for entry in ordered:
        if _in_cycle(entry.compound_id, parents):
            pid = parents[entry.compound_id] or ""
            msg = f"Parent cycle through {entry.compound_id}; listed at top level"
            warnings.append(OrphanReference(msg, entry.compound_id, pid))
            parents[entry.compound_id] = None

    nodes = {e.compound_id: NavNode(e) for e in ordered}
    sections = {key: NavSection(key, title) for key, title in SECTION_TITLES.items()}
    for entry in ordered:
        pid = parents[entry.compound_id]
        if pid is None:
            sections[entry.section].nodes.append(nodes[entry.compound_id])
        else:
            nodes[pid].children.append(nodes[entry.compound_id])

    return NavigationTree(
        sections=[s for s in sections.values() if s.nodes], warnings=warnings
    )


def _in_cycle(start: str, parents: dict[str, str | None]) -> bool:
    seen = {start}
    current = parents.get(start)
    while current is not None:
        if current in seen:
            return current == start
        seen.add(current)
        current = parents.get(current)
    return False


def _nav_item(node: NavNode) -> dict:
    if not node.children:
        return {node.entry.title: node.entry.location.path}
    items: list[dict] = [{node.entry.title: node.entry.location.path}]
    items += [_nav_item(child) for child in node.children]
    return {node.entry.title: items}


def navigation_to_yaml(tree: NavigationTree, index_page: str | None = None) -> str:
    """Serialize the tree as a MkDocs ``nav`` list."""
    nav: list[dict] = []
    if index_page:
        nav.append({"Overview": index_page})
    for section in tree.sections:
        nav.append({section.title: [_nav_item(n) for n in section.nodes]})
    return yaml.safe_dump(
        {"nav": nav}, sort_keys=False, default_flow_style=False, allow_unicode=True
    )
