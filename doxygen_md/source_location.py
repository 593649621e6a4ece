"""Source location hints attached to compounds and members."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """File and line where an entity is declared (informational only)."""

    file: str
    line: int | None = None

    def __str__(self) -> str:
        """Format as ``file:line``."""
        return f"{self.file}:{self.line}" if self.line else self.file
