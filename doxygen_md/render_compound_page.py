"""Render a resolved compound into a Markdown page."""

from dataclasses import dataclass

from doxygen_md.compound_kind import KIND_PREFIX, CompoundKind, is_class_kind
from doxygen_md.markdown import (
    md_anchor,
    md_code_span,
    md_codeblock,
    md_escape,
    md_link,
    md_table,
)
from doxygen_md.member_kind import MemberKind
from doxygen_md.navigation_entry import NavigationEntry
from doxygen_md.render_rich_text import render_rich_text
from doxygen_md.render_signature import (
    render_class_declaration,
    render_signature,
    render_synopsis,
    visibility_note,
)
from doxygen_md.resolve_references import ResolvedCompound, ResolvedMember, ResolvedParam
from doxygen_md.rich_text import (
    ResolvedLink,
    ResolvedSegment,
    ResolvedText,
    TextRun,
    TextStyle,
    plain_text,
)
from doxygen_md.symbol_table import SymbolTable

KIND_LABELS = {
    CompoundKind.CLASS: "Class",
    CompoundKind.STRUCT: "Struct",
    CompoundKind.UNION: "Union",
    CompoundKind.INTERFACE: "Interface",
    CompoundKind.CONCEPT: "Concept",
    CompoundKind.NAMESPACE: "Namespace",
    CompoundKind.FILE: "File",
}

# Synopsis groups in display order.
SYNOPSIS_GROUPS = ("Typedefs", "Enumerations", "Macros", "Static Members", "Members")


@dataclass(frozen=True)
class RenderedPage:
    """Markdown text of one page and its navigation entry."""

    path: str
    text: str
    entry: NavigationEntry


def page_title(resolved: ResolvedCompound) -> str:
    """Heading of a compound page."""
    node = resolved.node
    label = KIND_LABELS.get(node.kind)
    return f"{label} {node.display_title}" if label else node.display_title


def synopsis_group(member: ResolvedMember) -> str:
    """Synopsis group a member is listed under."""
    kind = member.node.kind
    if kind == MemberKind.TYPEDEF:
        return "Typedefs"
    if kind == MemberKind.ENUM:
        return "Enumerations"
    if kind == MemberKind.DEFINE:
        return "Macros"
    if member.node.is_static:
        return "Static Members"
    return "Members"


def render_compound_page(
    resolved: ResolvedCompound,
    table: SymbolTable,
    *,
    code_language: str = "cpp",
) -> RenderedPage:
    """Render a compound page and its navigation entry."""
    node = resolved.node
    path = resolved.location.path
    ctx = _PageContext(path, code_language)

    parts = [f"# {md_escape(page_title(resolved))}", ""]
    brief = ctx.text(resolved.brief)
    if brief:
        parts += [brief, ""]
    if is_class_kind(node.kind):
        parts += [md_codeblock(code_language, render_class_declaration(node)), ""]
        if node.includes:
            parts += [f"**Header:** {md_code_span(node.includes[0])}", ""]
    if node.location and node.kind != CompoundKind.NAMESPACE:
        parts += [f"*Defined in* {md_code_span(str(node.location))}", ""]

    parts.extend(_render_relations(resolved, ctx))
    parts.extend(_render_template_params(resolved.template_params, ctx))
    parts.extend(_render_inner("Namespaces", resolved.inner_namespaces, ctx))
    parts.extend(_render_inner("Classes", resolved.inner_classes, ctx))
    parts.extend(_render_inner("Groups", resolved.inner_groups, ctx))
    parts.extend(_render_inner("Files", resolved.inner_files, ctx))
    if node.kind == CompoundKind.FILE and node.includes:
        parts.append("## Includes")
        parts.extend(f"- {md_code_span(inc)}" for inc in node.includes)
        parts.append("")

    parts.extend(_render_synopsis(resolved.members, ctx))

    detailed = ctx.text(resolved.detailed)
    if detailed:
        parts += ["## Detailed Description", "", detailed, ""]

    parts.extend(_render_member_docs(resolved.members, ctx))
    parts.extend(_render_see_also("## See also", resolved.see_also, ctx))

    entry = NavigationEntry(
        title=node.display_title,
        location=resolved.location,
        parent_key=table.parent_of(node.id),
        section=KIND_PREFIX[node.kind],
        compound_id=node.id,
    )
    return RenderedPage(path=path, text="\n".join(parts).rstrip() + "\n", entry=entry)


class _PageContext:
    """Page path and fence language shared by the section renderers."""

    def __init__(self, path: str, code_language: str) -> None:
        self.path = path
        self.code_language = code_language

    def text(self, segments: ResolvedText, *, inline: bool = False) -> str:
        return render_rich_text(
            segments, self.path, inline=inline, code_language=self.code_language
        )

    def code(self, segments: ResolvedText) -> str:
        """Render a type: code spans, with links kept on the named parts."""
        return self.text(tuple(_as_code(s) for s in segments), inline=True)

    def link(self, label: str, member: ResolvedMember) -> str:
        if member.location is None:
            return label
        return md_link(label, member.location.href_from(self.path))


def _as_code(seg: ResolvedSegment) -> ResolvedSegment:
    if isinstance(seg, ResolvedLink):
        return ResolvedLink(seg.path, seg.anchor, seg.text, TextStyle.CODE)
    if seg.style == TextStyle.PLAIN and seg.text.strip():
        return TextRun(seg.text, TextStyle.CODE)
    return seg


def _render_relations(resolved: ResolvedCompound, ctx: _PageContext) -> list[str]:
    parts = []
    if resolved.bases:
        parts.append("## Inheritance")
        for relation, seg in zip(resolved.node.bases, resolved.bases, strict=True):
            virtual = ", virtual" if relation.is_virtual else ""
            link = ctx.text((seg,), inline=True)
            parts.append(f"- {link} ({relation.visibility.value}{virtual})")
        parts.append("")
    if resolved.derived:
        parts.append("## Derived Classes")
        parts.extend(f"- {ctx.text((seg,), inline=True)}" for seg in resolved.derived)
        parts.append("")
    return parts


def _render_template_params(
    params: tuple[ResolvedParam, ...], ctx: _PageContext
) -> list[str]:
    if not params or not any(p.description for p in params):
        return []
    rows = [
        [
            md_code_span(p.param.name or p.param.type.text),
            md_code_span(p.default),
            ctx.text(p.description, inline=True),
        ]
        for p in params
    ]
    table = md_table(["Name", "Default", "Description"], rows)
    return ["## Template Parameters", "", table, ""]


def _render_inner(
    title: str, refs: tuple[ResolvedSegment, ...], ctx: _PageContext
) -> list[str]:
    if not refs:
        return []
    parts = [f"## {title}"]
    parts.extend(f"- {ctx.text((seg,), inline=True)}" for seg in refs)
    parts.append("")
    return parts


def _render_synopsis(members: tuple[ResolvedMember, ...], ctx: _PageContext) -> list[str]:
    if not members:
        return []
    parts = ["## Synopsis", ""]
    for group in SYNOPSIS_GROUPS:
        rows = [
            [
                ctx.link(md_code_span(m.node.name) or "(anonymous)", m),
                md_code_span(render_synopsis(m.node)),
                ctx.text(m.brief, inline=True),
            ]
            for m in members
            if synopsis_group(m) == group
        ]
        if rows:
            table = md_table(["Name", "Declaration", "Description"], rows)
            parts += [f"### {group}", "", table, ""]
    return parts


def _render_member_docs(members: tuple[ResolvedMember, ...], ctx: _PageContext) -> list[str]:
    owned = [
        m
        for group in SYNOPSIS_GROUPS
        for m in members
        if m.owned and synopsis_group(m) == group
    ]
    if not owned:
        return []
    parts = ["## Member Documentation", ""]
    for member in owned:
        parts.extend(_render_member(member, ctx))
    return parts


def _render_member(member: ResolvedMember, ctx: _PageContext) -> list[str]:
    node = member.node
    parts = []
    if member.location and member.location.anchor:
        parts.append(md_anchor(member.location.anchor))
    parts += [f"### {md_escape(node.name) or '(anonymous)'}", ""]
    parts += [md_codeblock(ctx.code_language, render_signature(node)), ""]
    note = visibility_note(node)
    if note:
        parts += [f"*{note}*", ""]
    for text in (member.brief, member.detailed):
        rendered = ctx.text(text)
        if rendered:
            parts += [rendered, ""]

    if node.has_params:
        rows = [
            [
                md_code_span(p.param.name) or "(unnamed)",
                ctx.code(p.type),
                md_code_span(p.default),
                ctx.text(p.description, inline=True),
            ]
            for p in member.params
        ]
        table = md_table(["Name", "Type", "Default", "Description"], rows)
        parts += ["#### Parameters", "", table, ""]
    if node.has_return:
        rows = [[ctx.code(member.type), ctx.text(member.returns, inline=True)]]
        parts += ["#### Returns", "", md_table(["Type", "Description"], rows), ""]
    elif member.returns:
        parts += ["#### Returns", "", ctx.text(member.returns), ""]
    if member.enum_values:
        parts += ["#### Values", "", _enum_table(member, ctx), ""]

    parts.extend(_render_see_also("#### See also", member.see_also, ctx))
    if node.location:
        parts += [f"*Defined at* {md_code_span(str(node.location))}", ""]
    return parts


def _enum_table(member: ResolvedMember, ctx: _PageContext) -> str:
    rows = []
    for value in member.enum_values:
        name = md_code_span(value.node.name)
        if value.location and value.location.anchor and value.owned:
            name = md_anchor(value.location.anchor) + name
        init = plain_text(value.node.initializer).strip().removeprefix("=").strip()
        description = ctx.text(value.brief + value.detailed, inline=True)
        rows.append([name, md_code_span(init), description])
    return md_table(["Name", "Value", "Description"], rows)


def _render_see_also(
    heading: str, entries: tuple[ResolvedText, ...], ctx: _PageContext
) -> list[str]:
    rendered = [ctx.text(e, inline=True) for e in entries]
    rendered = [r for r in rendered if r]
    if not rendered:
        return []
    return [heading, "", *(f"- {r}" for r in rendered), ""]
