"""Tests for description markup parsing."""

import xml.etree.ElementTree as ET

from doxygen_md.parse_description import (
    Description,
    code_text,
    parse_description,
    parse_inline,
)
from doxygen_md.rich_text import RefMarker, TextRun, TextStyle, plain_text


def _desc(xml: str) -> Description:
    return parse_description(ET.fromstring(f"<detaileddescription>{xml}</detaileddescription>"))


def test_inline_styles() -> None:
    """Code, emphasis and references are kept as separate segments."""
    desc = _desc(
        "<para>Use <computeroutput>f()</computeroutput> with "
        '<ref refid="classfoo" kindref="compound">Foo</ref> <emphasis>now</emphasis>.</para>'
    )
    assert desc.body[0] == TextRun("Use ")
    assert desc.body[1] == TextRun("f()", TextStyle.CODE)
    assert RefMarker("classfoo", "Foo", "compound") in desc.body
    assert TextRun("now", TextStyle.EMPHASIS) in desc.body
    assert plain_text(desc.body) == "Use f() with Foo now."


def test_paragraphs_are_separated() -> None:
    """Consecutive paragraphs are joined by a single paragraph break."""
    desc = _desc("<para>One.</para><para>Two.</para>")
    assert plain_text(desc.body) == "One.\n\nTwo."


def test_return_and_see_are_extracted() -> None:
    """Return and see sections leave the body."""
    desc = _desc(
        "<para>Body."
        '<simplesect kind="return"><para>The result.</para></simplesect>'
        '<simplesect kind="see"><para><ref refid="classbar">Bar</ref></para></simplesect>'
        "</para>"
    )
    assert plain_text(desc.body) == "Body."
    assert plain_text(desc.returns) == "The result."
    assert len(desc.see_also) == 1
    assert desc.see_also[0] == (RefMarker("classbar", "Bar", "compound"),)


def test_note_becomes_labelled_paragraph() -> None:
    """Other simple sections stay in the body with a bold label."""
    desc = _desc('<para>Text.<simplesect kind="note"><para>Careful.</para></simplesect></para>')
    assert TextRun("Note:", TextStyle.BOLD) in desc.body
    assert plain_text(desc.body).endswith("Note: Careful.")


def test_parameter_descriptions() -> None:
    """Param and templateparam lists are keyed by name; exceptions stay in the body."""
    desc = _desc(
        '<para><parameterlist kind="param"><parameteritem><parameternamelist>'
        "<parametername>a</parametername><parametername>b</parametername>"
        "</parameternamelist><parameterdescription><para>Operands.</para>"
        "</parameterdescription></parameteritem></parameterlist>"
        '<parameterlist kind="templateparam"><parameteritem><parameternamelist>'
        "<parametername>T</parametername></parameternamelist><parameterdescription>"
        "<para>Element type.</para></parameterdescription></parameteritem></parameterlist>"
        '<parameterlist kind="exception"><parameteritem><parameternamelist>'
        "<parametername>std::bad_alloc</parametername></parameternamelist>"
        "<parameterdescription><para>Out of memory.</para></parameterdescription>"
        "</parameteritem></parameterlist></para>"
    )
    assert plain_text(desc.params["a"]) == "Operands."
    assert desc.params["a"] == desc.params["b"]
    assert plain_text(desc.template_params["T"]) == "Element type."
    assert TextRun("Exceptions:", TextStyle.BOLD) in desc.body
    assert TextRun("std::bad_alloc", TextStyle.CODE) in desc.body


def test_lists_and_code_blocks() -> None:
    """List items become single lines and program listings become code blocks."""
    desc = _desc(
        "<para><itemizedlist><listitem><para>first</para></listitem>"
        "<listitem><para>second</para></listitem></itemizedlist></para>"
        "<para><programlisting><codeline><highlight>int<sp/>x;</highlight></codeline>"
        "<codeline><highlight>x++;</highlight></codeline></programlisting></para>"
    )
    text = plain_text(desc.body)
    assert "- first\n- second" in text
    assert TextRun("int x;\nx++;", TextStyle.CODE_BLOCK) in desc.body


def test_dropped_and_unknown_markup() -> None:
    """Images are dropped; unknown inline markup keeps its text."""
    desc = _desc('<para>A<image type="html" name="x.png"/> <mystery>kept</mystery></para>')
    assert plain_text(desc.body) == "A kept"


def test_parse_inline_keeps_inner_whitespace() -> None:
    """Type text is verbatim apart from the outer edges."""
    segments = parse_inline(
        ET.fromstring('<type> const <ref refid="classw">Widget</ref> &amp; </type>')
    )
    assert segments == (TextRun("const "), RefMarker("classw", "Widget"), TextRun(" &"))


def test_code_text_spaces() -> None:
    """The sp element carries a repeat count."""
    elem = ET.fromstring('<programlisting><codeline>a<sp value="3"/>b</codeline></programlisting>')
    assert code_text(elem) == "a   b"


def test_external_links_keep_their_url() -> None:
    """A ulink keeps its URL wherever it sits in the paragraph."""
    url = "https://example.com"
    trailing = _desc(f'<para>See <ulink url="{url}">the docs</ulink></para>')
    assert trailing.body == (TextRun("See "), TextRun("the docs", url=url))

    leading = _desc(f'<para><ulink url="{url}">Docs</ulink> explain it.</para>')
    assert leading.body[0] == TextRun("Docs", url=url)
    assert plain_text(leading.body) == "Docs explain it."

    middle = _desc(f'<para>Read <ulink url="{url}">this</ulink> first.</para>')
    assert TextRun("this", url=url) in middle.body
