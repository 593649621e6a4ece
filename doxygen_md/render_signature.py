"""Render C++ declarations for members and classes.

All functions here are pure: the output depends only on the node passed in.
"""

from doxygen_md.compound_kind import CompoundKind
from doxygen_md.compound_node import CompoundNode
from doxygen_md.member_kind import MemberKind, Visibility
from doxygen_md.member_node import MemberNode, Param
from doxygen_md.rich_text import plain_text

# Break parameters onto separate lines past this width.
MAX_SIGNATURE_WIDTH = 80


def render_signature(member: MemberNode) -> str:
    """Render the full declaration of a member, possibly over several lines."""
    if member.kind == MemberKind.FUNCTION:
        return _template_header(member.template_params) + _function(member, wrap=True)
    if member.kind == MemberKind.ENUM:
        return _enum(member, with_values=True)
    return render_synopsis(member)


def render_synopsis(member: MemberNode) -> str:
    """Render a single-line declaration of a member."""
    if member.kind == MemberKind.FUNCTION:
        head = _template_header(member.template_params).replace("\n", " ")
        return head + _function(member, wrap=False)
    if member.kind == MemberKind.VARIABLE:
        return _variable(member)
    if member.kind == MemberKind.TYPEDEF:
        return _typedef(member)
    if member.kind == MemberKind.ENUM:
        return _enum(member, with_values=False)
    if member.kind == MemberKind.DEFINE:
        return _define(member)
    init = plain_text(member.initializer).strip()
    return f"{member.name} {init}".strip()


def render_param(param: Param) -> str:
    """Render one parameter as written in a declaration."""
    out = param.type.text
    if param.name:
        out = f"{out} {param.name}" if out else param.name
    out += param.array
    default = plain_text(param.default).strip()
    if default:
        out += f" = {default}"
    return out


def render_class_declaration(node: CompoundNode) -> str:
    """Render ``template <...>`` plus ``class Name : public Base``."""
    keyword = "class" if node.kind == CompoundKind.INTERFACE else node.kind.value
    out = f"{_template_header(node.template_params)}{keyword} {node.name}"
    if node.kind == CompoundKind.CONCEPT:
        return out
    bases = []
    for base in node.bases:
        virtual = "virtual " if base.is_virtual else ""
        bases.append(f"{base.visibility.value} {virtual}{base.name}")
    if bases:
        out += " : " + ", ".join(bases)
    return out


def _template_header(params: tuple[Param, ...]) -> str:
    if not params:
        return ""
    return "template <" + ", ".join(render_param(p) for p in params) + ">\n"


def _prefix(member: MemberNode) -> str:
    written = set(member.type.specifiers)
    words = []
    for flag, word in (
        (member.is_explicit, "explicit"),
        (member.is_static, "static"),
        (member.is_virtual, "virtual"),
        (member.is_inline, "inline"),
        (member.is_constexpr, "constexpr"),
    ):
        if flag and word not in written:
            words.append(word)
    return " ".join(words) + " " if words else ""


def _function(member: MemberNode, *, wrap: bool) -> str:
    ret = member.type.text
    head = _prefix(member) + (f"{ret} " if ret else "") + member.name
    params = [render_param(p) for p in member.params]
    tail = member.args_tail or _implied_tail(member)
    tail = f" {tail}" if tail else ""
    one_line = f"{head}({', '.join(params)}){tail}"
    if not wrap or len(one_line) <= MAX_SIGNATURE_WIDTH or len(params) < 2:  # noqa: PLR2004
        return one_line
    inner = ",\n".join(f"    {p}" for p in params)
    return f"{head}(\n{inner}\n){tail}"


def _implied_tail(member: MemberNode) -> str:
    words = []
    if member.is_const:
        words.append("const")
    if member.is_noexcept:
        words.append("noexcept")
    if member.is_pure_virtual:
        words.append("= 0")
    return " ".join(words)


def _variable(member: MemberNode) -> str:
    out = _prefix(member) + member.type.text
    out = f"{out} {member.name}" if out else member.name
    out += member.args_tail
    init = plain_text(member.initializer).strip()
    if init:
        out += f" {init}" if init.startswith(("=", "{")) else f" = {init}"
    return out


def _typedef(member: MemberNode) -> str:
    if member.definition.startswith("using "):
        return f"using {member.name} = {member.type.text}"
    return f"typedef {member.type.text} {member.name}{member.args_tail}"


def _enum(member: MemberNode, *, with_values: bool) -> str:
    name = member.name if not member.name.startswith("@") else ""
    out = "enum class" if member.is_strong_enum else "enum"
    if name:
        out += f" {name}"
    if member.type.text:
        out += f" : {member.type.text}"
    if not with_values or not member.enum_values:
        return out
    lines = []
    for value in member.enum_values:
        init = plain_text(value.initializer).strip()
        if init and not init.startswith("="):
            init = f"= {init}"
        lines.append(f"    {value.name} {init}".rstrip())
    return out + " {\n" + ",\n".join(lines) + "\n}"


def _define(member: MemberNode) -> str:
    out = f"#define {member.name}"
    if member.params or member.args_tail.startswith("("):
        out += "(" + ", ".join(p.name or p.type.text for p in member.params) + ")"
    body = plain_text(member.initializer).strip()
    return f"{out} {body}" if body else out


def visibility_note(member: MemberNode) -> str:
    """Return a short note for non-public members, or an empty string."""
    if member.visibility == Visibility.PUBLIC:
        return ""
    return member.visibility.value
