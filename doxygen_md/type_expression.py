"""Structured view of a C++ type as written in a Doxygen ``<type>`` element.

The verbatim segments are always kept; the structured fields are a best-effort parse
and ``parsed`` is False whenever the text did not fit the simple grammar below
(function pointers, pointer-to-const-pointer, unbalanced brackets...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from doxygen_md.rich_text import RichText, TextRun, plain_text

_TOKEN_RE = re.compile(
    r"\s*(\.\.\.|::|&&|[<>,*&()]|\[[^\]]*\]|[A-Za-z_~$][\w$]*|\d[\w.']*|\S)",
)
_QUALIFIERS = {"const", "volatile"}
# Declaration specifiers Doxygen sometimes leaves in <type>; not part of the type.
_DECL_SPECIFIERS = {
    "static",
    "inline",
    "virtual",
    "explicit",
    "constexpr",
    "consteval",
    "constinit",
    "extern",
    "mutable",
    "friend",
    "typename",
    "struct",
    "class",
    "union",
    "enum",
}


@dataclass(frozen=True)
class TypeExpression:
    """A type expression: verbatim segments plus the parsed structure."""

    segments: RichText
    base: str = ""
    template_args: tuple[TypeExpression, ...] = ()
    specifiers: tuple[str, ...] = ()
    is_const: bool = False
    is_volatile: bool = False
    is_reference: bool = False
    is_rvalue_reference: bool = False
    pointer_depth: int = 0
    array_suffix: str = ""
    parsed: bool = True

    @property
    def text(self) -> str:
        """Verbatim text of the type, reference labels included."""
        return plain_text(self.segments).strip()

    @property
    def is_empty(self) -> bool:
        """True for constructors and destructors, which have no return type."""
        return not self.text

    @property
    def is_void(self) -> bool:
        """True when the type is exactly ``void`` (not a pointer to void)."""
        if not self.parsed:
            return self.text == "void"
        return (
            self.base == "void"
            and self.pointer_depth == 0
            and not self.is_reference
            and not self.is_rvalue_reference
        )


def type_from_text(text: str) -> TypeExpression:
    """Parse a type given as plain text."""
    return parse_type_expression((TextRun(text),) if text else ())


def parse_type_expression(segments: RichText) -> TypeExpression:
    """Parse verbatim type segments into a TypeExpression. Never raises."""
    text = plain_text(segments).strip()
    if not text:
        return TypeExpression(segments=segments)
    fields = _parse_fields(text)
    if fields is None:
        return TypeExpression(segments=segments, parsed=False)
    return TypeExpression(segments=segments, **fields)


def _tokenize(text: str) -> list[str]:
    return [m.group(1) for m in _TOKEN_RE.finditer(text)]


def _parse_fields(text: str) -> dict | None:  # noqa: C901, PLR0912
    tokens = _tokenize(text)
    base_tokens: list[str] = []
    template_spans: list[tuple[int, int]] = []
    specifiers: list[str] = []
    flags = {
        "is_const": False,
        "is_volatile": False,
        "is_reference": False,
        "is_rvalue_reference": False,
    }
    pointer_depth = 0
    array_suffix = ""
    depth = 0
    open_at = -1

    for tok in tokens:
        if depth > 0:
            base_tokens.append(tok)
            if tok == "<":
                depth += 1
            elif tok == ">":
                depth -= 1
                if depth == 0:
                    template_spans.append((open_at, len(base_tokens) - 1))
            continue

        if tok in ("(", ")"):
            return None
        if tok == "<":
            if not base_tokens:
                return None
            depth = 1
            open_at = len(base_tokens)
            base_tokens.append(tok)
        elif tok == ">":
            return None
        elif tok in _QUALIFIERS:
            if pointer_depth or flags["is_reference"] or flags["is_rvalue_reference"]:
                # const applied to the pointer itself: not representable
                return None
            flags["is_" + tok] = True
        elif tok in _DECL_SPECIFIERS:
            specifiers.append(tok)
        elif tok == "*":
            if not base_tokens:
                return None
            pointer_depth += 1
        elif tok == "&":
            flags["is_reference"] = True
        elif tok == "&&":
            flags["is_rvalue_reference"] = True
        elif tok.startswith("["):
            array_suffix += tok
        else:
            if pointer_depth or flags["is_reference"] or flags["is_rvalue_reference"]:
                return None
            base_tokens.append(tok)

    if depth != 0 or not base_tokens:
        return None

    template_args: tuple[TypeExpression, ...] = ()
    base = _join(base_tokens)
    if template_spans:
        start, end = template_spans[-1]
        if end == len(base_tokens) - 1:
            template_args = tuple(
                type_from_text(arg) for arg in _split_args(base_tokens[start + 1 : end])
            )
            base = _join(base_tokens[:start])

    return {
        "base": base,
        "template_args": template_args,
        "specifiers": tuple(specifiers),
        "pointer_depth": pointer_depth,
        "array_suffix": array_suffix,
        **flags,
    }


def _split_args(tokens: list[str]) -> list[str]:
    args: list[list[str]] = [[]]
    depth = 0
    for tok in tokens:
        if tok == "<":
            depth += 1
        elif tok == ">":
            depth -= 1
        if tok == "," and depth == 0:
            args.append([])
            continue
        args[-1].append(tok)
    return [_join(a) for a in args if a]


def _join(tokens: list[str]) -> str:
    """Join tokens, inserting a space only between two word-like tokens."""
    out = ""
    prev = ""
    for tok in tokens:
        if out and _wordish(prev) and _wordish(tok):
            out += " "
        elif out and prev == ",":
            out += " "
        out += tok
        prev = tok
    return out


def _wordish(tok: str) -> bool:
    return bool(tok) and (tok[0].isalnum() or tok[0] in "_~$")
