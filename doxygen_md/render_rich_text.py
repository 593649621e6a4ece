"""Flatten resolved rich text into Markdown."""

import re

from doxygen_md.markdown import md_code_span, md_codeblock, md_escape, md_link
from doxygen_md.output_location import OutputLocation
from doxygen_md.rich_text import ResolvedLink, ResolvedText, TextRun, TextStyle


def render_rich_text(
    segments: ResolvedText,
    from_path: str,
    *,
    inline: bool = False,
    code_language: str = "cpp",
) -> str:
    """Render segments as Markdown, with links relative to the page at ``from_path``.

    ``inline`` produces a single line (for table cells and list items).
    """
    out: list[str] = []
    for seg in segments:
        if isinstance(seg, ResolvedLink):
            out.append(_render_link(seg, from_path))
        else:
            out.append(_render_run(seg, inline=inline, code_language=code_language))
    text = "".join(out)
    if inline:
        return " ".join(text.split())
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _render_link(seg: ResolvedLink, from_path: str) -> str:
    href = OutputLocation(seg.path, seg.anchor).href_from(from_path)
    label = seg.text or seg.path
    if seg.style == TextStyle.CODE:
        return md_link(md_code_span(label), href)
    return md_link(md_escape(label), href)


def _render_run(seg: TextRun, *, inline: bool, code_language: str) -> str:
    if seg.style == TextStyle.BREAK:
        return " " if inline else seg.text
    if seg.style == TextStyle.CODE_BLOCK:
        if inline:
            return md_code_span(seg.text)
        return "\n\n" + md_codeblock(code_language, seg.text) + "\n\n"
    if seg.style == TextStyle.CODE:
        return _pad(seg.text, md_code_span(seg.text))
    text = md_escape(seg.text)
    if seg.url:
        return md_link(text.strip() or seg.url, seg.url)
    if seg.style == TextStyle.EMPHASIS and text.strip():
        return _pad(seg.text, f"*{text.strip()}*")
    if seg.style == TextStyle.BOLD and text.strip():
        return _pad(seg.text, f"**{text.strip()}**")
    return text


def _pad(original: str, rendered: str) -> str:
    """Keep the whitespace that surrounded a styled run."""
    lead = " " if original[:1].isspace() else ""
    trail = " " if original[-1:].isspace() else ""
    return f"{lead}{rendered}{trail}" if rendered else lead
