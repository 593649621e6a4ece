"""Navigation entries emitted by the page renderer."""

from dataclasses import dataclass

from doxygen_md.output_location import OutputLocation


@dataclass(frozen=True)
class NavigationEntry:
    """One page in the navigation tree."""

    title: str
    location: OutputLocation
    parent_key: str | None  # compound id of the declared parent
    section: str  # namespaces, classes, files or groups
    compound_id: str

    def sort_key(self) -> tuple[str, str, str]:
        """Alphabetical, case-insensitive first, then case-sensitive, then path."""
        return (self.title.casefold(), self.title, self.location.path)
