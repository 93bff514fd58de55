"""
Aggregation of scan findings and the threshold gate.
"""

from dataclasses import dataclass

from todo_creeper.todo_scanner import Finding


@dataclass(frozen=True)
class ScanResult:
    """Summary of a scan. Counts are derived from the findings."""

    findings: tuple[Finding, ...]

    @property
    def todo_count(self) -> int:
        return len(self.findings)

    @property
    def file_count(self) -> int:
        return len({finding.path for finding in self.findings})

    def exceeds(self, threshold: int) -> bool:
        """Return True if the run should fail. A count equal to the threshold passes."""
        return self.todo_count > threshold

    def to_details(self) -> list[dict]:
        """Return findings in the todo-details output format."""
        return [finding.to_dict() for finding in self.findings]


def aggregate(findings) -> ScanResult:
    """Build a ScanResult, preserving finding order."""
    return ScanResult(findings=tuple(findings))
