"""Segmented rich text used by descriptions and type expressions."""

from dataclasses import dataclass
from enum import Enum


class TextStyle(str, Enum):
    """Inline or block styling carried by a text run."""

    PLAIN = "plain"
    CODE = "code"
    EMPHASIS = "emphasis"
    BOLD = "bold"
    CODE_BLOCK = "code_block"
    BREAK = "break"


@dataclass(frozen=True)
class TextRun:
    """A run of literal text."""

    text: str
    style: TextStyle = TextStyle.PLAIN
    url: str | None = None  # external hyperlink (ulink)


@dataclass(frozen=True)
class RefMarker:
    """A reference to another compound or member, still unresolved."""

    target_id: str
    label: str
    kindref: str = "compound"


@dataclass(frozen=True)
class ResolvedLink:
    """A reference that resolved to a page inside the generated site."""

    path: str  # site-relative, e.g. classes/foo.md
    anchor: str | None
    text: str
    style: TextStyle = TextStyle.PLAIN


Segment = TextRun | RefMarker
ResolvedSegment = TextRun | ResolvedLink
RichText = tuple[Segment, ...]
ResolvedText = tuple[ResolvedSegment, ...]

PARAGRAPH_BREAK = TextRun("\n\n", TextStyle.BREAK)
LINE_BREAK = TextRun("\n", TextStyle.BREAK)


def plain_text(segments: tuple[Segment | ResolvedLink, ...]) -> str:
    """Flatten segments to their display text, ignoring links and styles."""
    out: list[str] = []
    for seg in segments:
        if isinstance(seg, RefMarker):
            out.append(seg.label)
        else:
            out.append(seg.text)
    return "".join(out)


def normalize_segments(segments: list[Segment]) -> RichText:
    """Merge adjacent plain runs, collapse repeated breaks and trim the edges."""
    merged: list[Segment] = []
    for seg in segments:
        if isinstance(seg, TextRun) and not seg.text:
            continue
        prev = merged[-1] if merged else None
        if (
            isinstance(seg, TextRun)
            and isinstance(prev, TextRun)
            and seg.style == prev.style
            and seg.url == prev.url
            and seg.style in (TextStyle.PLAIN, TextStyle.CODE)
        ):
            merged[-1] = TextRun(prev.text + seg.text, seg.style, seg.url)
            continue
        if (
            isinstance(seg, TextRun)
            and isinstance(prev, TextRun)
            and seg.style == TextStyle.BREAK
            and prev.style == TextStyle.BREAK
        ):
            # Keep the stronger of the two breaks.
            if len(seg.text) > len(prev.text):
                merged[-1] = seg
            continue
        merged.append(seg)

    while merged and _is_blank(merged[0]):
        merged.pop(0)
    while merged and _is_blank(merged[-1]):
        merged.pop()
    if merged and isinstance(merged[0], TextRun) and merged[0].style == TextStyle.PLAIN:
        merged[0] = TextRun(merged[0].text.lstrip(), merged[0].style, merged[0].url)
    if merged and isinstance(merged[-1], TextRun) and merged[-1].style == TextStyle.PLAIN:
        merged[-1] = TextRun(merged[-1].text.rstrip(), merged[-1].style, merged[-1].url)
    return tuple(s for s in merged if not (isinstance(s, TextRun) and not s.text))


def _is_blank(seg: Segment) -> bool:
    if not isinstance(seg, TextRun):
        return False
    return seg.style == TextStyle.BREAK or (
        seg.style == TextStyle.PLAIN and not seg.text.strip()
    )
