"""Data model for compounds (classes, namespaces, files, groups...)."""

from dataclasses import dataclass

from doxygen_md.compound_kind import CompoundKind
from doxygen_md.member_kind import Visibility
from doxygen_md.member_node import MemberNode, Param
from doxygen_md.rich_text import RichText
from doxygen_md.source_location import SourceLocation


@dataclass(frozen=True)
class Relation:
    """A base or derived class relation. ``target_id`` is None for external types."""

    name: str
    target_id: str | None = None
    visibility: Visibility = Visibility.PUBLIC
    is_virtual: bool = False


@dataclass(frozen=True)
class InnerRef:
    """A reference to a contained compound (innerclass, innernamespace...)."""

    target_id: str
    name: str


@dataclass(frozen=True)
class CompoundNode:
    """One documented compound and the members it lists."""

    id: str
    kind: CompoundKind
    name: str  # qualified name
    title: str = ""
    brief: RichText = ()
    detailed: RichText = ()
    see_also: tuple[RichText, ...] = ()
    members: tuple[MemberNode, ...] = ()
    bases: tuple[Relation, ...] = ()
    derived: tuple[Relation, ...] = ()
    inner_classes: tuple[InnerRef, ...] = ()
    inner_namespaces: tuple[InnerRef, ...] = ()
    inner_groups: tuple[InnerRef, ...] = ()
    inner_files: tuple[InnerRef, ...] = ()
    template_params: tuple[Param, ...] = ()
    includes: tuple[str, ...] = ()
    location: SourceLocation | None = None

    @property
    def display_title(self) -> str:
        """Title shown in headings and navigation."""
        return self.title or self.name

    @property
    def unqualified_name(self) -> str:
        """Last component of the qualified name."""
        return self.name.rsplit("::", 1)[-1]

    def inner_refs(self) -> tuple[InnerRef, ...]:
        """All contained compounds, in declaration order per kind."""
        return (
            self.inner_namespaces
            + self.inner_classes
            + self.inner_groups
            + self.inner_files
        )
