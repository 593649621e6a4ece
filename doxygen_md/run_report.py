"""Summary of a site build: warnings, skipped compounds and page counts."""

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from doxygen_md.errors import DoxygenMdError


@dataclass(frozen=True)
class ReportWarning:
    """A non-fatal problem met during the build."""

    kind: str  # exception class name, e.g. OrphanReference
    compound_id: str | None
    message: str

    @classmethod
    def from_error(cls, error: DoxygenMdError) -> "ReportWarning":
        """Build a warning from a recoverable error."""
        return cls(type(error).__name__, error.compound_id, str(error))


class RunReport:
    """Collects what happened during one build."""

    def __init__(self, config_hash: str) -> None:
        """Initialize the report with the hash of the effective configuration."""
        self.config_hash = config_hash
        self.warnings: list[ReportWarning] = []
        self.skipped: list[str] = []
        self.counts: dict[str, int] = {}
        self.start_time = time.time()

    def warn(self, error: DoxygenMdError) -> None:
        """Record a recoverable error."""
        self.warnings.append(ReportWarning.from_error(error))

    def skip(self, compound_id: str) -> None:
        """Record a compound that was not rendered."""
        self.skipped.append(compound_id)

    def count(self, key: str, n: int = 1) -> None:
        """Increase a named counter."""
        self.counts[key] = self.counts.get(key, 0) + n

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready report, without timing data."""
        return {
            "config_hash": self.config_hash,
            "counts": dict(sorted(self.counts.items())),
            "skipped": sorted(self.skipped),
            "warnings": [
                {"kind": w.kind, "compound_id": w.compound_id, "message": w.message}
                for w in self.warnings
            ],
        }

    def write(self, path: str | Path) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
            },
            **self.to_dict(),
        }
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(report, indent=2), encoding="utf-8")
