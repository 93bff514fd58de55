"""Tests for finding aggregation and the threshold gate."""

from todo_creeper.aggregator import aggregate
from todo_creeper.patterns import MarkerKind
from todo_creeper.todo_scanner import Finding


def _findings():
    return [
        Finding("src/a.js", 3, "// TODO: fix", MarkerKind.TODO),
        Finding("src/a.js", 9, "// HACK: later", MarkerKind.HACK),
        Finding("b.py", 1, "# FIXME: broken", MarkerKind.FIXME),
    ]


class TestAggregate:
    """Tests for aggregate function and ScanResult."""

    def test_counts(self):
        """todo_count counts findings, file_count counts distinct paths."""
        result = aggregate(_findings())

        assert result.todo_count == 3
        assert result.file_count == 2

    def test_empty(self):
        result = aggregate([])

        assert result.todo_count == 0
        assert result.file_count == 0
        assert not result.exceeds(0)

    def test_preserves_order(self):
        findings = _findings()
        assert list(aggregate(findings).findings) == findings

    def test_accepts_generator(self):
        result = aggregate(f for f in _findings())
        assert result.todo_count == 3

    def test_threshold_equal_passes(self):
        """A count equal to the threshold passes."""
        assert not aggregate(_findings()).exceeds(3)

    def test_threshold_exceeded_fails(self):
        assert aggregate(_findings()).exceeds(2)

    def test_zero_threshold_single_finding_fails(self):
        result = aggregate(_findings()[:1])
        assert result.exceeds(0)

    def test_details(self):
        details = aggregate(_findings()).to_details()

        assert details[0] == {
            "file": "src/a.js",
            "line": 3,
            "content": "// TODO: fix",
            "type": "TODO",
        }
        assert [d["type"] for d in details] == ["TODO", "HACK", "FIXME"]
