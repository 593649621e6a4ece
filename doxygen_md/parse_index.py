"""Parse the Doxygen ``index.xml`` document that lists every compound."""

from dataclasses import dataclass

from doxygen_md.parse_compound import load_xml
from doxygen_md.parse_description import element_text

INDEX_ID = "index"

# Compound kinds whose qualified name opens a C++ scope.
_SCOPE_KINDS = {"namespace", "class", "struct", "union", "interface"}


@dataclass(frozen=True)
class IndexEntry:
    """A compound listed in the index, with its raw kind string."""

    refid: str
    kind: str
    name: str


@dataclass(frozen=True)
class DoxygenIndex:
    """The parsed index document."""

    entries: tuple[IndexEntry, ...] = ()

    def scope_ids(self) -> dict[str, str]:
        """Map qualified scope names (namespaces, classes) to compound ids.

        The first entry wins when two compounds share a name.
        """
        scopes: dict[str, str] = {}
        for e in self.entries:
            if e.kind in _SCOPE_KINDS and e.name not in scopes:
                scopes[e.name] = e.refid
        return scopes


def parse_index(data: bytes) -> DoxygenIndex:
    """Parse ``index.xml``. Raises MalformedInput if the document is unreadable."""
    root = load_xml(data, INDEX_ID)
    entries = []
    for compound in root.findall("compound"):
        refid = compound.get("refid")
        if not refid:
            continue
        entries.append(
            IndexEntry(
                refid=refid,
                kind=compound.get("kind") or "",
                name=element_text(compound.find("name")) or refid,
            )
        )
    return DoxygenIndex(entries=tuple(entries))
