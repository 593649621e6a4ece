"""Data model for members (functions, variables, typedefs, enums, macros)."""

from dataclasses import dataclass

from doxygen_md.member_kind import MemberKind, Visibility
from doxygen_md.rich_text import RichText
from doxygen_md.source_location import SourceLocation
from doxygen_md.type_expression import TypeExpression


@dataclass(frozen=True)
class Param:
    """A function or template parameter."""

    name: str
    type: TypeExpression
    default: RichText = ()  # verbatim default value text
    array: str = ""
    description: RichText = ()


@dataclass(frozen=True)
class MemberNode:
    """A member owned by a compound."""

    id: str
    kind: MemberKind
    name: str
    qualified_name: str
    type: TypeExpression
    visibility: Visibility = Visibility.PUBLIC
    params: tuple[Param, ...] = ()
    template_params: tuple[Param, ...] = ()
    args_tail: str = ""  # trailing specifiers after the parameter list
    definition: str = ""
    initializer: RichText = ()
    is_static: bool = False
    is_virtual: bool = False
    is_pure_virtual: bool = False
    is_const: bool = False
    is_inline: bool = False
    is_explicit: bool = False
    is_noexcept: bool = False
    is_constexpr: bool = False
    is_strong_enum: bool = False
    brief: RichText = ()
    detailed: RichText = ()
    returns: RichText = ()
    see_also: tuple[RichText, ...] = ()
    enum_values: tuple["MemberNode", ...] = ()
    location: SourceLocation | None = None

    @property
    def has_params(self) -> bool:
        """True when the member is callable with at least one parameter."""
        return bool(self.params)

    @property
    def has_return(self) -> bool:
        """True for functions with a non-void, non-empty return type."""
        return (
            self.kind == MemberKind.FUNCTION
            and not self.type.is_empty
            and not self.type.is_void
        )
