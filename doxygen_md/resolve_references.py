"""Resolve reference markers against the frozen symbol table.

Resolution never mutates nodes: it returns new Resolved* values. A marker whose target
is not documented degrades to a plain text run carrying the marker's label.
"""

from dataclasses import dataclass

from doxygen_md.compound_node import CompoundNode, InnerRef, Relation
from doxygen_md.member_node import MemberNode, Param
from doxygen_md.output_location import OutputLocation
from doxygen_md.rich_text import (
    RefMarker,
    ResolvedLink,
    ResolvedSegment,
    ResolvedText,
    RichText,
    TextRun,
    TextStyle,
    plain_text,
)
from doxygen_md.symbol_table import SymbolTable
from doxygen_md.type_expression import TypeExpression


@dataclass(frozen=True)
class ResolvedParam:
    """A parameter with resolved type and description."""

    param: Param
    type: ResolvedText
    default: str
    description: ResolvedText


@dataclass(frozen=True)
class ResolvedMember:
    """A member with every reference resolved."""

    node: MemberNode
    location: OutputLocation | None  # owner page + anchor
    owned: bool  # documented on the page being resolved
    type: ResolvedText
    params: tuple[ResolvedParam, ...]
    template_params: tuple[ResolvedParam, ...]
    initializer: ResolvedText
    brief: ResolvedText
    detailed: ResolvedText
    returns: ResolvedText
    see_also: tuple[ResolvedText, ...]
    enum_values: tuple["ResolvedMember", ...]


@dataclass(frozen=True)
class ResolvedCompound:
    """A compound ready for rendering."""

    node: CompoundNode
    location: OutputLocation
    brief: ResolvedText
    detailed: ResolvedText
    see_also: tuple[ResolvedText, ...]
    members: tuple[ResolvedMember, ...]
    template_params: tuple[ResolvedParam, ...]
    bases: tuple[ResolvedSegment, ...]
    derived: tuple[ResolvedSegment, ...]
    inner_namespaces: tuple[ResolvedSegment, ...]
    inner_classes: tuple[ResolvedSegment, ...]
    inner_groups: tuple[ResolvedSegment, ...]
    inner_files: tuple[ResolvedSegment, ...]


class ReferenceResolver:
    """Turns reference markers into links using a frozen SymbolTable."""

    def __init__(self, table: SymbolTable) -> None:
        """Bind the resolver to a symbol table."""
        self.table = table

    def resolve_ref(
        self, target_id: str, label: str, style: TextStyle = TextStyle.PLAIN
    ) -> ResolvedSegment:
        """Resolve a single target id, degrading to text if it is not documented."""
        loc = self.table.target(target_id) if target_id else None
        if loc is None:
            return TextRun(label, style)
        return ResolvedLink(path=loc.path, anchor=loc.anchor, text=label, style=style)

    def resolve_text(self, segments: RichText) -> ResolvedText:
        """Resolve every marker in a rich text sequence."""
        out: list[ResolvedSegment] = []
        for seg in segments:
            if isinstance(seg, RefMarker):
                out.append(self.resolve_ref(seg.target_id, seg.label))
            else:
                out.append(seg)
        return tuple(out)

    def resolve_type(self, type_expr: TypeExpression) -> ResolvedText:
        """Resolve the verbatim segments of a type expression."""
        return self.resolve_text(type_expr.segments)

    def resolve_param(self, param: Param) -> ResolvedParam:
        """Resolve a parameter's type and description."""
        return ResolvedParam(
            param=param,
            type=self.resolve_type(param.type),
            default=plain_text(param.default).strip(),
            description=self.resolve_text(param.description),
        )

    def resolve_member(self, member: MemberNode, page_id: str) -> ResolvedMember:
        """Resolve a member as listed on the page of ``page_id``."""
        return ResolvedMember(
            node=member,
            location=self.table.member_location(member.id),
            owned=self.table.owner_of(member.id) == page_id,
            type=self.resolve_type(member.type),
            params=tuple(self.resolve_param(p) for p in member.params),
            template_params=tuple(self.resolve_param(p) for p in member.template_params),
            initializer=self.resolve_text(member.initializer),
            brief=self.resolve_text(member.brief),
            detailed=self.resolve_text(member.detailed),
            returns=self.resolve_text(member.returns),
            see_also=tuple(self.resolve_text(s) for s in member.see_also),
            enum_values=tuple(self.resolve_member(v, page_id) for v in member.enum_values),
        )

    def resolve_relation(self, relation: Relation) -> ResolvedSegment:
        """Resolve a base/derived relation."""
        return self.resolve_ref(relation.target_id or "", relation.name, TextStyle.CODE)

    def resolve_inner(self, ref: InnerRef) -> ResolvedSegment:
        """Resolve a contained compound, titled as its own page is."""
        node = self.table.resolve(ref.target_id)
        label = node.display_title if node is not None else ref.name
        return self.resolve_ref(ref.target_id, label)

    def resolve_compound(self, node: CompoundNode) -> ResolvedCompound:
        """Resolve every rich-text field and type expression of a registered node."""
        location = self.table.location(node.id)
        if location is None:
            msg = f"Compound {node.id} is not registered"
            raise KeyError(msg)
        return ResolvedCompound(
            node=node,
            location=location,
            brief=self.resolve_text(node.brief),
            detailed=self.resolve_text(node.detailed),
            see_also=tuple(self.resolve_text(s) for s in node.see_also),
            members=tuple(self.resolve_member(m, node.id) for m in node.members),
            template_params=tuple(self.resolve_param(p) for p in node.template_params),
            bases=tuple(self.resolve_relation(r) for r in node.bases),
            derived=tuple(self.resolve_relation(r) for r in node.derived),
            inner_namespaces=tuple(self.resolve_inner(r) for r in node.inner_namespaces),
            inner_classes=tuple(self.resolve_inner(r) for r in node.inner_classes),
            inner_groups=tuple(self.resolve_inner(r) for r in node.inner_groups),
            inner_files=tuple(self.resolve_inner(r) for r in node.inner_files),
        )


def resolve_all(table: SymbolTable) -> dict[str, ResolvedCompound]:
    """Resolve every registered compound, in registration order."""
    resolver = ReferenceResolver(table)
    return {node.id: resolver.resolve_compound(node) for node in table.compounds()}
