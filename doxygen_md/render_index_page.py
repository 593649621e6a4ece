"""Render the API landing page."""

from doxygen_md.assemble_navigation import NavigationTree
from doxygen_md.markdown import md_escape, md_link


def render_index_page(tree: NavigationTree, title: str, path: str = "index.md") -> str:
    """List the top-level entries of every navigation section."""
    parts = [f"# {title}", ""]
    for section in tree.sections:
        parts.append(f"## {section.title}")
        for node in section.nodes:
            href = node.entry.location.href_from(path)
            parts.append(f"- {md_link(md_escape(node.entry.title), href)}")
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"
