"""Parse ``<memberdef>`` elements into MemberNodes."""

from xml.etree.ElementTree import Element

from doxygen_md.member_kind import MemberKind, parse_member_kind, parse_visibility
from doxygen_md.member_node import MemberNode, Param
from doxygen_md.parse_description import (
    element_text,
    parse_description,
    parse_inline,
)
from doxygen_md.rich_text import RichText
from doxygen_md.source_location import SourceLocation
from doxygen_md.type_expression import parse_type_expression


def parse_member(elem: Element) -> MemberNode | None:
    """Parse a memberdef. Returns None for member kinds that are not rendered."""
    kind = parse_member_kind(elem.get("kind"))
    member_id = elem.get("id") or ""
    if kind is None or kind == MemberKind.ENUM_VALUE or not member_id:
        return None

    name = element_text(elem.find("name"))
    qualified_name = element_text(elem.find("qualifiedname")) or name
    brief = parse_description(elem.find("briefdescription"))
    detailed = parse_description(
        elem.find("detaileddescription"), elem.find("inbodydescription")
    )
    param_docs = {**brief.params, **detailed.params}
    tparam_docs = {**brief.template_params, **detailed.template_params}
    args_string = element_text(elem.find("argsstring"))

    return MemberNode(
        id=member_id,
        kind=kind,
        name=name,
        qualified_name=qualified_name,
        type=parse_type_expression(parse_inline(elem.find("type"))),
        visibility=parse_visibility(elem.get("prot")),
        params=tuple(_parse_param(p, param_docs) for p in elem.findall("param")),
        template_params=parse_template_params(elem.find("templateparamlist"), tparam_docs),
        args_tail=args_tail(args_string) if kind == MemberKind.FUNCTION else args_string,
        definition=element_text(elem.find("definition")),
        initializer=parse_inline(elem.find("initializer")),
        is_static=_yes(elem, "static"),
        is_virtual=(elem.get("virt") or "") in ("virtual", "pure-virtual"),
        is_pure_virtual=elem.get("virt") == "pure-virtual",
        is_const=_yes(elem, "const"),
        is_inline=_yes(elem, "inline"),
        is_explicit=_yes(elem, "explicit"),
        is_noexcept=_yes(elem, "noexcept"),
        is_constexpr=_yes(elem, "constexpr"),
        is_strong_enum=_yes(elem, "strong"),
        brief=brief.body,
        detailed=detailed.body,
        returns=detailed.returns or brief.returns,
        see_also=tuple(brief.see_also + detailed.see_also),
        enum_values=tuple(
            _parse_enum_value(v, qualified_name) for v in elem.findall("enumvalue")
        ),
        location=parse_location(elem.find("location")),
    )


def parse_template_params(
    elem: Element | None, docs: dict[str, RichText] | None = None
) -> tuple[Param, ...]:
    """Parse a ``<templateparamlist>``."""
    if elem is None:
        return ()
    return tuple(_parse_param(p, docs or {}) for p in elem.findall("param"))


def parse_location(elem: Element | None) -> SourceLocation | None:
    """Parse a ``<location>`` element, preferring the declaration site."""
    if elem is None:
        return None
    file = elem.get("declfile") or elem.get("file")
    if not file:
        return None
    line = elem.get("declline") or elem.get("line")
    return SourceLocation(file=file, line=int(line) if line and line.isdigit() else None)


def args_tail(args_string: str) -> str:
    """Return what follows the parameter list in an argsstring.

    ``(int a) const override`` -> ``const override``; ``(int a)=0`` -> ``=0``.
    """
    depth = 0
    started = False
    for i, ch in enumerate(args_string):
        if ch == "(":
            depth += 1
            started = True
        elif ch == ")":
            depth -= 1
            if started and depth == 0:
                return args_string[i + 1 :].strip()
    return ""


def _parse_param(elem: Element, docs: dict[str, RichText]) -> Param:
    name = element_text(elem.find("declname")) or element_text(elem.find("defname"))
    return Param(
        name=name,
        type=parse_type_expression(parse_inline(elem.find("type"))),
        default=parse_inline(elem.find("defval")),
        array=element_text(elem.find("array")),
        description=docs.get(name, ()),
    )


def _parse_enum_value(elem: Element, enum_qualified_name: str) -> MemberNode:
    name = element_text(elem.find("name"))
    scope = enum_qualified_name.rsplit("::", 1)[0] if "::" in enum_qualified_name else ""
    brief = parse_description(elem.find("briefdescription"))
    detailed = parse_description(elem.find("detaileddescription"))
    return MemberNode(
        id=elem.get("id") or "",
        kind=MemberKind.ENUM_VALUE,
        name=name,
        qualified_name=f"{scope}::{name}" if scope else name,
        type=parse_type_expression(()),
        visibility=parse_visibility(elem.get("prot")),
        initializer=parse_inline(elem.find("initializer")),
        brief=brief.body,
        detailed=detailed.body,
    )


def _yes(elem: Element, attr: str) -> bool:
    return (elem.get(attr) or "no").lower() == "yes"
