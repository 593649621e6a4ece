"""Destinations for the generated file tree."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    """A virtual file tree keyed by site-relative path."""

    def write_file(self, relative_path: str, text: str) -> None:
        """Store one file."""
        ...


class DirectorySink:
    """Writes files under an output directory."""

    def __init__(self, out_dir: str | Path) -> None:
        """Create the output directory if needed."""
        self.base_dir = Path(out_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.written = 0

    def write_file(self, relative_path: str, text: str) -> None:
        """Write a file, creating parent directories.

        Raises ValueError for paths that would land outside the output directory.
        """
        target = (self.base_dir / relative_path).resolve()
        try:
            target.relative_to(self.base_dir.resolve())
        except ValueError as e:
            msg = f"Refusing to write outside {self.base_dir}: {relative_path}"
            raise ValueError(msg) from e
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        self.written += 1
        logger.debug("Wrote %s", target)


class MemorySink:
    """Keeps files in a dict."""

    def __init__(self) -> None:
        """Start empty."""
        self.files: dict[str, str] = {}

    def write_file(self, relative_path: str, text: str) -> None:
        """Store a file."""
        self.files[relative_path] = text
