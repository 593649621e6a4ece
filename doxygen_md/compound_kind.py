"""Compound kinds recognized in Doxygen XML and their output sections."""

from enum import Enum


class CompoundKind(str, Enum):
    """Closed set of compound kinds that get a page."""

    CLASS = "class"
    STRUCT = "struct"
    UNION = "union"
    INTERFACE = "interface"
    NAMESPACE = "namespace"
    FILE = "file"
    GROUP = "group"
    CONCEPT = "concept"


CLASS_LIKE_KINDS = frozenset(
    {
        CompoundKind.CLASS,
        CompoundKind.STRUCT,
        CompoundKind.UNION,
        CompoundKind.INTERFACE,
        CompoundKind.CONCEPT,
    }
)

# Output directory per kind.
KIND_PREFIX: dict[CompoundKind, str] = {
    CompoundKind.CLASS: "classes",
    CompoundKind.STRUCT: "classes",
    CompoundKind.UNION: "classes",
    CompoundKind.INTERFACE: "classes",
    CompoundKind.CONCEPT: "classes",
    CompoundKind.NAMESPACE: "namespaces",
    CompoundKind.FILE: "files",
    CompoundKind.GROUP: "groups",
}

# Navigation sections in display order, keyed by prefix.
SECTION_TITLES: dict[str, str] = {
    "namespaces": "Namespaces",
    "classes": "Classes",
    "files": "Files",
    "groups": "Groups",
}


def parse_compound_kind(kind: str | None) -> CompoundKind | None:
    """Map a Doxygen ``kind`` attribute to a CompoundKind, or None if unsupported."""
    if not kind:
        return None
    try:
        return CompoundKind(kind.strip().lower())
    except ValueError:
        return None


def is_class_kind(kind: CompoundKind) -> bool:
    """Check if the kind represents a type (class, struct, etc.)."""
    return kind in CLASS_LIKE_KINDS


def ownership_rank(kind: CompoundKind) -> int:
    """Rank used to pick the owning page of a member listed in several compounds."""
    if kind in CLASS_LIKE_KINDS:
        return 0
    return {CompoundKind.NAMESPACE: 1, CompoundKind.GROUP: 2, CompoundKind.FILE: 3}[kind]
