"""Small Markdown building blocks."""

import re

_ESCAPE_RE = re.compile(r"([\\`*_\[\]<>])")


def md_escape(text: str) -> str:
    """Backslash-escape characters Markdown would treat as markup."""
    return _ESCAPE_RE.sub(r"\\\1", text)


def md_code_span(text: str) -> str:
    """Wrap text in a code span, widening the fence if the text holds backticks."""
    text = " ".join(text.split())
    if not text:
        return ""
    longest = max((len(m) for m in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    if longest:
        return f"{fence} {text} {fence}"
    return f"{fence}{text}{fence}"


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block."""
    fence = "````" if "```" in code else "```"
    return f"{fence}{lang}\n{code.rstrip()}\n{fence}"


def md_link(text: str, href: str) -> str:
    """Generate an inline link."""
    return f"[{text}]({href})"


def md_anchor(anchor: str) -> str:
    """Generate an explicit HTML anchor target."""
    return f'<a id="{anchor}"></a>'


def md_table_cell(text: str) -> str:
    """Make text safe for a single table cell."""
    return " ".join(text.split()).replace("|", "\\|")


def md_table(headers: list[str], rows: list[list[str]]) -> str:
    """Generate a Markdown table."""
    if not rows:
        return ""
    out = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(["---"] * len(headers)) + " |",
    ]
    out.extend("| " + " | ".join(md_table_cell(c) for c in r) + " |" for r in rows)
    return "\n".join(out)
