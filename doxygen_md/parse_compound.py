"""Parse one Doxygen compound XML document into a CompoundNode."""

import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

from doxygen_md.compound_kind import parse_compound_kind
from doxygen_md.compound_node import CompoundNode, InnerRef, Relation
from doxygen_md.errors import MalformedInput, UnsupportedSchema
from doxygen_md.member_kind import Visibility, parse_visibility
from doxygen_md.member_node import MemberNode
from doxygen_md.parse_description import element_text, parse_description
from doxygen_md.parse_member import parse_location, parse_member, parse_template_params


def load_xml(data: bytes, source_id: str | None = None) -> Element:
    """Parse XML bytes, raising MalformedInput on syntax errors."""
    try:
        return ET.fromstring(data)  # noqa: S314
    except ET.ParseError as e:
        msg = f"Malformed XML in {source_id or 'input'}: {e}"
        raise MalformedInput(msg, source_id) from e


def parse_compound(
    data: bytes,
    compound_id: str | None = None,
    *,
    include_private: bool = False,
) -> CompoundNode:
    """Parse a compound document.

    Raises MalformedInput for unparseable XML, and UnsupportedSchema for a document
    without a ``compounddef`` or with a compound kind that is not rendered.
    """
    root = load_xml(data, compound_id)
    cdef = root if root.tag == "compounddef" else root.find("compounddef")
    if cdef is None:
        msg = f"No compounddef element in {compound_id or 'input'}"
        raise UnsupportedSchema(msg, compound_id, root.tag)

    cid = cdef.get("id") or compound_id
    if not cid:
        msg = "compounddef has no id attribute"
        raise MalformedInput(msg, compound_id)

    raw_kind = cdef.get("kind") or ""
    kind = parse_compound_kind(raw_kind)
    if kind is None:
        msg = f"Unsupported compound kind '{raw_kind}' in {cid}"
        raise UnsupportedSchema(msg, cid, raw_kind)

    brief = parse_description(cdef.find("briefdescription"))
    detailed = parse_description(cdef.find("detaileddescription"))
    tparam_docs = {**brief.template_params, **detailed.template_params}

    return CompoundNode(
        id=cid,
        kind=kind,
        name=element_text(cdef.find("compoundname")) or cid,
        title=element_text(cdef.find("title")),
        brief=brief.body,
        detailed=detailed.body,
        see_also=tuple(brief.see_also + detailed.see_also),
        members=_parse_members(cdef, include_private=include_private),
        bases=tuple(_parse_relation(e) for e in cdef.findall("basecompoundref")),
        derived=tuple(_parse_relation(e) for e in cdef.findall("derivedcompoundref")),
        inner_classes=_inner(cdef, "innerclass", include_private=include_private),
        inner_namespaces=_inner(cdef, "innernamespace", include_private=True),
        inner_groups=_inner(cdef, "innergroup", include_private=True),
        inner_files=_inner(cdef, "innerfile", include_private=True),
        template_params=parse_template_params(cdef.find("templateparamlist"), tparam_docs),
        includes=tuple(
            element_text(e) for e in cdef.findall("includes") if element_text(e)
        ),
        location=parse_location(cdef.find("location")),
    )


def _parse_members(cdef: Element, *, include_private: bool) -> tuple[MemberNode, ...]:
    elems = [m for sec in cdef.iter("sectiondef") for m in sec.findall("memberdef")]
    elems += cdef.findall("memberdef")
    members: list[MemberNode] = []
    seen: set[str] = set()
    for elem in elems:
        member = parse_member(elem)
        if member is None or member.id in seen:
            continue
        if member.visibility == Visibility.PRIVATE and not include_private:
            continue
        seen.add(member.id)
        members.append(member)
    return tuple(members)


def _parse_relation(elem: Element) -> Relation:
    return Relation(
        name=element_text(elem),
        target_id=elem.get("refid") or None,
        visibility=parse_visibility(elem.get("prot")),
        is_virtual=(elem.get("virt") or "non-virtual") != "non-virtual",
    )


def _inner(cdef: Element, tag: str, *, include_private: bool) -> tuple[InnerRef, ...]:
    refs = []
    for elem in cdef.findall(tag):
        refid = elem.get("refid")
        if not refid:
            continue
        if parse_visibility(elem.get("prot")) == Visibility.PRIVATE and not include_private:
            continue
        refs.append(InnerRef(target_id=refid, name=element_text(elem)))
    return tuple(refs)
