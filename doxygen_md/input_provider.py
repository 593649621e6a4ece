"""Sources of Doxygen XML documents."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

INDEX_FILE = "index.xml"
# XML files in a Doxygen output directory that are not compound documents.
NON_COMPOUND_FILES = frozenset({INDEX_FILE, "Doxyfile.xml"})


class InputProvider(Protocol):
    """Raw XML keyed by compound id, plus the index document."""

    def list_compounds(self) -> list[str]:
        """Compound ids in canonical order."""
        ...

    def read_compound(self, compound_id: str) -> bytes:
        """Bytes of one compound document."""
        ...

    def read_index(self) -> bytes | None:
        """Bytes of the index document, or None if there is none."""
        ...


class DirectoryInputProvider:
    """Reads the XML output directory written by Doxygen."""

    def __init__(self, xml_dir: str | Path) -> None:
        """Point the provider at a directory of ``*.xml`` files."""
        self.xml_dir = Path(xml_dir)
        if not self.xml_dir.is_dir():
            msg = f"XML directory not found: {self.xml_dir}"
            raise FileNotFoundError(msg)

    def list_compounds(self) -> list[str]:
        """Ids of all compound documents, sorted lexicographically."""
        ids = sorted(
            p.stem
            for p in self.xml_dir.glob("*.xml")
            if p.is_file() and p.name not in NON_COMPOUND_FILES
        )
        logger.debug("Found %d compound documents in %s", len(ids), self.xml_dir)
        return ids

    def read_compound(self, compound_id: str) -> bytes:
        """Read ``<compound_id>.xml``."""
        return (self.xml_dir / f"{compound_id}.xml").read_bytes()

    def read_index(self) -> bytes | None:
        """Read ``index.xml`` if present."""
        p = self.xml_dir / INDEX_FILE
        if not p.exists():
            logger.warning("No %s in %s", INDEX_FILE, self.xml_dir)
            return None
        return p.read_bytes()


class MemoryInputProvider:
    """Serves documents from a dict, in insertion order."""

    def __init__(self, compounds: dict[str, bytes], index: bytes | None = None) -> None:
        """Keep the documents as given."""
        self.compounds = dict(compounds)
        self.index = index

    def list_compounds(self) -> list[str]:
        """Compound ids in insertion order."""
        return list(self.compounds)

    def read_compound(self, compound_id: str) -> bytes:
        """Return one document."""
        return self.compounds[compound_id]

    def read_index(self) -> bytes | None:
        """Return the index document."""
        return self.index
