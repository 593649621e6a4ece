"""Parse Doxygen description markup into segmented rich text.

Only the elements listed here are interpreted. Unknown inline markup is transparent
(its text is kept), and a handful of non-content elements are dropped entirely.
"""

from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from doxygen_md.rich_text import (
    LINE_BREAK,
    PARAGRAPH_BREAK,
    RefMarker,
    RichText,
    Segment,
    TextRun,
    TextStyle,
    normalize_segments,
)

_DROPPED_TAGS = {
    "image",
    "dot",
    "dotfile",
    "mscfile",
    "diafile",
    "plantuml",
    "anchor",
    "indexentry",
    "toclist",
    "internal",
    "xreftitle",
}

_SECTION_LABELS = {
    "attention": "Attention",
    "author": "Author",
    "authors": "Authors",
    "copyright": "Copyright",
    "date": "Date",
    "deprecated": "Deprecated",
    "invariant": "Invariant",
    "note": "Note",
    "post": "Postcondition",
    "pre": "Precondition",
    "remark": "Remark",
    "remarks": "Remarks",
    "since": "Since",
    "todo": "Todo",
    "version": "Version",
    "warning": "Warning",
}

_PARAMLIST_LABELS = {
    "exception": "Exceptions",
    "retval": "Return values",
}


@dataclass
class Description:
    """A description body plus the sections Doxygen nests inside it."""

    body: RichText = ()
    params: dict[str, RichText] = field(default_factory=dict)
    template_params: dict[str, RichText] = field(default_factory=dict)
    returns: RichText = ()
    see_also: list[RichText] = field(default_factory=list)


def parse_description(*elems: Element | None) -> Description:
    """Parse one or more description elements (brief, detailed) into a Description."""
    desc = Description()
    body: list[Segment] = []
    for elem in elems:
        if elem is None:
            continue
        walker = _Walker(desc)
        segments: list[Segment] = []
        walker.walk_children(elem, segments, TextStyle.PLAIN)
        if body:
            body.append(PARAGRAPH_BREAK)
        body.extend(segments)
    desc.body = normalize_segments(body)
    return desc


def parse_inline(elem: Element | None) -> RichText:
    """Parse mixed text/``<ref>`` content such as ``<type>`` or ``<defval>``.

    Whitespace inside is preserved so that the text stays verbatim.
    """
    if elem is None:
        return ()
    segments: list[Segment] = []
    _Walker(Description()).walk_children(elem, segments, TextStyle.PLAIN)
    out: list[Segment] = []
    for seg in segments:
        if isinstance(seg, TextRun) and seg.style == TextStyle.BREAK:
            seg = TextRun(" ")  # noqa: PLW2901
        if (
            out
            and isinstance(seg, TextRun)
            and isinstance(out[-1], TextRun)
            and seg.url == out[-1].url
        ):
            out[-1] = TextRun(out[-1].text + seg.text, out[-1].style, out[-1].url)
            continue
        out.append(seg)
    # Strip only the outer edges.
    if out and isinstance(out[0], TextRun):
        out[0] = TextRun(out[0].text.lstrip(), out[0].style, out[0].url)
    if out and isinstance(out[-1], TextRun):
        out[-1] = TextRun(out[-1].text.rstrip(), out[-1].style, out[-1].url)
    return tuple(s for s in out if not (isinstance(s, TextRun) and not s.text))


def element_text(elem: Element | None) -> str:
    """Return the whole text content of an element, stripped."""
    if elem is None:
        return ""
    return "".join(elem.itertext()).strip()


def code_text(elem: Element) -> str:
    """Flatten a ``programlisting`` keeping ``<sp/>`` as spaces and one line per codeline."""
    lines = elem.findall("codeline")
    if not lines:
        return _flatten_code(elem)
    return "\n".join(_flatten_code(line) for line in lines)


def _flatten_code(elem: Element) -> str:
    out = [elem.text or ""]
    for child in elem:
        if child.tag == "sp":
            out.append(" " * int(child.get("value") or 1))
        else:
            out.append(_flatten_code(child))
        out.append(child.tail or "")
    return "".join(out)


class _Walker:
    """Recursive descent over description markup, filling a Description."""

    def __init__(self, desc: Description) -> None:
        self.desc = desc

    def walk_children(
        self, elem: Element, out: list[Segment], style: TextStyle
    ) -> None:
        if elem.text:
            out.append(TextRun(elem.text, style))
        for child in elem:
            self.walk(child, out, style)
            if child.tail:
                out.append(TextRun(child.tail, style))

    def walk(  # noqa: C901, PLR0912
        self, elem: Element, out: list[Segment], style: TextStyle
    ) -> None:
        tag = elem.tag
        if tag in _DROPPED_TAGS:
            return
        if tag == "para":
            out.append(PARAGRAPH_BREAK)
            self.walk_children(elem, out, style)
            out.append(PARAGRAPH_BREAK)
        elif tag == "ref":
            out.append(
                RefMarker(
                    target_id=elem.get("refid") or "",
                    label=element_text(elem),
                    kindref=elem.get("kindref") or "compound",
                )
            )
        elif tag == "computeroutput":
            self.walk_children(elem, out, TextStyle.CODE)
        elif tag == "emphasis":
            self.walk_children(elem, out, TextStyle.EMPHASIS)
        elif tag == "bold":
            self.walk_children(elem, out, TextStyle.BOLD)
        elif tag == "ulink":
            out.append(TextRun(element_text(elem), style, url=elem.get("url")))
        elif tag in ("itemizedlist", "orderedlist"):
            self._walk_list(elem, out, ordered=tag == "orderedlist")
        elif tag == "programlisting":
            out += [PARAGRAPH_BREAK, TextRun(code_text(elem), TextStyle.CODE_BLOCK)]
            out.append(PARAGRAPH_BREAK)
        elif tag == "verbatim":
            out += [PARAGRAPH_BREAK, TextRun(elem.text or "", TextStyle.CODE_BLOCK)]
            out.append(PARAGRAPH_BREAK)
        elif tag == "linebreak":
            out.append(LINE_BREAK)
        elif tag == "sp":
            out.append(TextRun(" ", style))
        elif tag == "simplesect":
            self._walk_simplesect(elem, out)
        elif tag == "parameterlist":
            self._walk_parameterlist(elem, out)
        elif tag == "xrefsect":
            label = element_text(elem.find("xreftitle")) or "See"
            self._labelled(label, elem.find("xrefdescription"), out)
        else:
            self.walk_children(elem, out, style)

    def _walk_list(self, elem: Element, out: list[Segment], *, ordered: bool) -> None:
        out.append(PARAGRAPH_BREAK)
        for i, item in enumerate(elem.findall("listitem"), start=1):
            out.append(LINE_BREAK)
            out.append(TextRun(f"{i}. " if ordered else "- "))
            item_segments: list[Segment] = []
            self.walk_children(item, item_segments, TextStyle.PLAIN)
            # A list item is a single line.
            for seg in normalize_segments(item_segments):
                if isinstance(seg, TextRun) and seg.style == TextStyle.BREAK:
                    out.append(TextRun(" "))
                else:
                    out.append(seg)
        out.append(PARAGRAPH_BREAK)

    def _walk_simplesect(self, elem: Element, out: list[Segment]) -> None:
        kind = elem.get("kind") or ""
        if kind == "return":
            segments: list[Segment] = []
            self.walk_children(elem, segments, TextStyle.PLAIN)
            joined = list(self.desc.returns)
            if joined:
                joined.append(PARAGRAPH_BREAK)
            self.desc.returns = normalize_segments(joined + segments)
            return
        if kind == "see":
            segments = []
            self.walk_children(elem, segments, TextStyle.PLAIN)
            see = normalize_segments(segments)
            if see:
                self.desc.see_also.append(see)
            return
        if kind == "par":
            label = element_text(elem.find("title")) or "Note"
        else:
            label = _SECTION_LABELS.get(kind, kind.capitalize() or "Note")
        self._labelled(label, elem, out)

    def _labelled(self, label: str, elem: Element | None, out: list[Segment]) -> None:
        if elem is None:
            return
        segments: list[Segment] = []
        self.walk_children(elem, segments, TextStyle.PLAIN)
        body = [
            s
            for s in normalize_segments(segments)
            if not (isinstance(s, TextRun) and s.style == TextStyle.BREAK)
        ]
        out += [PARAGRAPH_BREAK, TextRun(f"{label}:", TextStyle.BOLD), TextRun(" ")]
        out += body
        out.append(PARAGRAPH_BREAK)

    def _walk_parameterlist(self, elem: Element, out: list[Segment]) -> None:
        kind = elem.get("kind") or "param"
        items: list[tuple[list[str], RichText]] = []
        for item in elem.findall("parameteritem"):
            names = [
                element_text(n) for n in item.iter("parametername") if element_text(n)
            ]
            segments: list[Segment] = []
            pdesc = item.find("parameterdescription")
            if pdesc is not None:
                self.walk_children(pdesc, segments, TextStyle.PLAIN)
            items.append((names, normalize_segments(segments)))

        if kind in ("param", "templateparam"):
            target = self.desc.params if kind == "param" else self.desc.template_params
            for names, text in items:
                for name in names:
                    target[name] = text
            return

        label = _PARAMLIST_LABELS.get(kind, kind.capitalize())
        out += [PARAGRAPH_BREAK, TextRun(f"{label}:", TextStyle.BOLD), PARAGRAPH_BREAK]
        for names, text in items:
            out.append(LINE_BREAK)
            out.append(TextRun("- "))
            out.append(TextRun(", ".join(names), TextStyle.CODE))
            flat = [
                s
                for s in text
                if not (isinstance(s, TextRun) and s.style == TextStyle.BREAK)
            ]
            if flat:
                out.append(TextRun(" "))
                out += flat
        out.append(PARAGRAPH_BREAK)
