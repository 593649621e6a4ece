"""Output locations of generated pages."""

import posixpath
from dataclasses import dataclass


@dataclass(frozen=True)
class OutputLocation:
    """A page path relative to the site root, plus an optional in-page anchor."""

    path: str  # e.g. classes/ns-widget.md
    anchor: str | None = None

    def with_anchor(self, anchor: str | None) -> "OutputLocation":
        """Return the same page with a different anchor."""
        return OutputLocation(self.path, anchor)

    def href_from(self, from_path: str) -> str:
        """Relative link to this location from the page at ``from_path``."""
        fragment = f"#{self.anchor}" if self.anchor else ""
        if from_path == self.path:
            return fragment or posixpath.basename(self.path)
        start = posixpath.dirname(from_path) or "."
        return posixpath.relpath(self.path, start) + fragment
