"""Member kinds and access levels."""

from enum import Enum


class MemberKind(str, Enum):
    """Closed set of member kinds that get rendered."""

    FUNCTION = "function"
    VARIABLE = "variable"
    TYPEDEF = "typedef"
    ENUM = "enum"
    ENUM_VALUE = "enumvalue"
    DEFINE = "define"


class Visibility(str, Enum):
    """C++ access specifier."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"


# Doxygen memberdef kinds folded onto the kinds above; anything else is skipped.
_MEMBER_KIND_ALIASES: dict[str, MemberKind] = {
    "function": MemberKind.FUNCTION,
    "slot": MemberKind.FUNCTION,
    "signal": MemberKind.FUNCTION,
    "prototype": MemberKind.FUNCTION,
    "variable": MemberKind.VARIABLE,
    "property": MemberKind.VARIABLE,
    "typedef": MemberKind.TYPEDEF,
    "enum": MemberKind.ENUM,
    "enumvalue": MemberKind.ENUM_VALUE,
    "define": MemberKind.DEFINE,
}


def parse_member_kind(kind: str | None) -> MemberKind | None:
    """Map a Doxygen memberdef ``kind`` to a MemberKind, or None to skip it."""
    return _MEMBER_KIND_ALIASES.get((kind or "").strip().lower())


def parse_visibility(prot: str | None) -> Visibility:
    """Map a ``prot`` attribute to a Visibility, defaulting to public."""
    try:
        return Visibility((prot or "public").strip().lower())
    except ValueError:
        return Visibility.PUBLIC
