"""Two-phase symbol table: a mutable builder for parsing, a frozen table for rendering.

Phase 1 registers every parsed compound through a SymbolTableBuilder. ``freeze()``
then computes member ownership, anchors and declared parents once and returns a
read-only SymbolTable that the resolver and renderer share without locking.
"""

import threading
from collections.abc import Iterable
from types import MappingProxyType

from doxygen_md.compound_kind import KIND_PREFIX, CompoundKind, is_class_kind, ownership_rank
from doxygen_md.compound_node import CompoundNode
from doxygen_md.errors import DuplicateId
from doxygen_md.member_node import MemberNode
from doxygen_md.output_location import OutputLocation
from doxygen_md.parse_index import DoxygenIndex
from doxygen_md.slugify import disambiguate, header_slug, slugify

# Anchors generated for the fixed page headings; member anchors must not reuse them.
PAGE_SECTION_ANCHORS = frozenset(
    {
        "synopsis",
        "detailed-description",
        "member-documentation",
        "see-also",
        "inheritance",
        "derived-classes",
        "namespaces",
        "classes",
        "groups",
        "files",
        "includes",
        "typedefs",
        "enumerations",
        "macros",
        "static-members",
        "members",
        "template-parameters",
    }
)


class SymbolTable:
    """Read-only view of all registered compounds and their output locations."""

    def __init__(
        self,
        nodes: dict[str, CompoundNode],
        locations: dict[str, OutputLocation],
        member_owner: dict[str, str],
        member_anchor: dict[str, str],
        parents: dict[str, str],
    ) -> None:
        """Wrap the computed maps; callers should use SymbolTableBuilder.freeze()."""
        self._nodes = MappingProxyType(dict(nodes))
        self._locations = MappingProxyType(dict(locations))
        self._member_owner = MappingProxyType(dict(member_owner))
        self._member_anchor = MappingProxyType(dict(member_anchor))
        self._parents = MappingProxyType(dict(parents))

    def __len__(self) -> int:
        """Return the number of registered compounds."""
        return len(self._nodes)

    def __contains__(self, compound_id: object) -> bool:
        """Check whether a compound id is registered."""
        return compound_id in self._nodes

    def compounds(self) -> tuple[CompoundNode, ...]:
        """All compounds in registration order."""
        return tuple(self._nodes.values())

    def resolve(self, compound_id: str) -> CompoundNode | None:
        """Look up a compound by id."""
        return self._nodes.get(compound_id)

    def location(self, compound_id: str) -> OutputLocation | None:
        """Output location of a compound page."""
        return self._locations.get(compound_id)

    def owner_of(self, member_id: str) -> str | None:
        """Id of the compound whose page documents the member."""
        return self._member_owner.get(member_id)

    def member_location(self, member_id: str) -> OutputLocation | None:
        """Page and anchor documenting a member."""
        owner = self._member_owner.get(member_id)
        if owner is None:
            return None
        return self._locations[owner].with_anchor(self._member_anchor[member_id])

    def target(self, ref_id: str) -> OutputLocation | None:
        """Location of a compound or member id, or None if it is not documented."""
        loc = self._locations.get(ref_id)
        if loc is not None:
            return loc
        return self.member_location(ref_id)

    def parent_of(self, compound_id: str) -> str | None:
        """Declared parent of a compound (may name an unregistered compound)."""
        return self._parents.get(compound_id)


class SymbolTableBuilder:
    """Collects compounds during phase 1. Registration is thread-safe."""

    def __init__(self, index: DoxygenIndex | None = None) -> None:
        """Start an empty builder; the index seeds declared-parent lookup."""
        self._index = index or DoxygenIndex()
        self._lock = threading.Lock()
        self._nodes: dict[str, CompoundNode] = {}
        self._locations: dict[str, OutputLocation] = {}
        self._taken_paths: set[str] = set()
        self._frozen = False

    def __len__(self) -> int:
        """Return the number of registered compounds."""
        return len(self._nodes)

    def register(self, node: CompoundNode) -> OutputLocation:
        """Insert a compound and assign its output location.

        Raises DuplicateId if the id was already registered.
        """
        with self._lock:
            if self._frozen:
                msg = "Cannot register after the symbol table was frozen"
                raise RuntimeError(msg)
            if node.id in self._nodes:
                msg = f"Duplicate compound id: {node.id}"
                raise DuplicateId(msg, node.id)
            self._nodes[node.id] = node
            loc = self._assign_location(node)
            self._locations[node.id] = loc
            return loc

    def register_all(self, nodes: Iterable[CompoundNode]) -> None:
        """Register nodes in iteration order."""
        for node in nodes:
            self.register(node)

    def freeze(self) -> SymbolTable:
        """Finish phase 1 and return the read-only table."""
        with self._lock:
            self._frozen = True
            member_owner = self._assign_member_owners()
            member_anchor = self._assign_member_anchors(member_owner)
            parents = self._declared_parents()
            return SymbolTable(
                nodes=self._nodes,
                locations=self._locations,
                member_owner=member_owner,
                member_anchor=member_anchor,
                parents=parents,
            )

    def _assign_location(self, node: CompoundNode) -> OutputLocation:
        prefix = KIND_PREFIX[node.kind]
        taken_key = disambiguate(f"{prefix}/{slugify(node.name)}", self._taken_paths)
        return OutputLocation(path=f"{taken_key}.md")

    def _assign_member_owners(self) -> dict[str, str]:
        order = {cid: i for i, cid in enumerate(self._nodes)}
        owner: dict[str, str] = {}
        members: dict[str, MemberNode] = {}
        for cid, node in self._nodes.items():
            rank = (ownership_rank(node.kind), order[cid])
            for member in node.members:
                current = owner.get(member.id)
                if current is not None:
                    cur_node = self._nodes[current]
                    if (ownership_rank(cur_node.kind), order[current]) <= rank:
                        continue
                owner[member.id] = cid
                members[member.id] = member
        for member_id in list(owner):
            for value in members[member_id].enum_values:
                if value.id:
                    owner[value.id] = owner[member_id]
        return owner

    def _assign_member_anchors(self, member_owner: dict[str, str]) -> dict[str, str]:
        anchors: dict[str, str] = {}
        for cid, node in self._nodes.items():
            taken = set(PAGE_SECTION_ANCHORS)
            for member in node.members:
                if member_owner.get(member.id) != cid:
                    continue
                anchors[member.id] = disambiguate(header_slug(member.name), taken)
                for value in member.enum_values:
                    if value.id and member_owner.get(value.id) == cid:
                        anchors[value.id] = disambiguate(header_slug(value.name), taken)
        return anchors

    def _declared_parents(self) -> dict[str, str]:
        parents: dict[str, str] = {}
        # Scope containment first: namespaces and classes enclose their inner types.
        for cid, node in self._nodes.items():
            if node.kind == CompoundKind.NAMESPACE or is_class_kind(node.kind):
                for ref in node.inner_namespaces + node.inner_classes:
                    if ref.target_id != cid:
                        parents.setdefault(ref.target_id, cid)
        # Then group membership.
        for cid, node in self._nodes.items():
            if node.kind == CompoundKind.GROUP:
                for ref in node.inner_refs():
                    if ref.target_id != cid:
                        parents.setdefault(ref.target_id, cid)
        # Finally the enclosing scope named by the index, registered or not.
        scopes = self._index.scope_ids()
        for cid, node in self._nodes.items():
            if cid in parents or "::" not in node.name:
                continue
            if node.kind == CompoundKind.NAMESPACE or is_class_kind(node.kind):
                scope_id = scopes.get(node.name.rsplit("::", 1)[0])
                if scope_id and scope_id != cid:
                    parents[cid] = scope_id
        return {cid: pid for cid, pid in parents.items() if cid in self._nodes}
