"""Tests for marker pattern classification."""

import pytest

from todo_creeper.patterns import MARKER_PATTERNS, MarkerKind, classify_line


class TestMarkerPatterns:
    """Tests for the fixed pattern table."""

    def test_twelve_patterns(self):
        """There is one pattern per comment style and keyword."""
        assert len(MARKER_PATTERNS) == 12

    def test_keyword_priority_order(self):
        """All TODO patterns come before FIXME, and FIXME before HACK."""
        kinds = [kind for _, kind in MARKER_PATTERNS]
        assert kinds == [MarkerKind.TODO] * 4 + [MarkerKind.FIXME] * 4 + [MarkerKind.HACK] * 4


class TestClassifyLine:
    """Tests for classify_line function."""

    @pytest.mark.parametrize(
        "line",
        [
            "// TODO: slash",
            "/* TODO: block */",
            "# TODO: hash",
            "<!-- TODO: html -->",
        ],
    )
    def test_comment_styles(self, line):
        """Every comment style is recognized."""
        assert classify_line(line) == MarkerKind.TODO

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("// FIXME: broken", MarkerKind.FIXME),
            ("#HACK workaround", MarkerKind.HACK),
            ("x = 1  # fixme later", MarkerKind.FIXME),
            ("<!--hack-->", MarkerKind.HACK),
        ],
    )
    def test_keywords(self, line, expected):
        """Keywords are matched case-insensitively, with or without spacing."""
        assert classify_line(line) == expected

    def test_todo_wins_over_later_hack(self):
        """A line with TODO and a later HACK is a TODO."""
        assert classify_line("// TODO: clean up this // HACK") == MarkerKind.TODO

    def test_todo_wins_even_when_hack_comes_first(self):
        """Keyword priority beats position in the line."""
        assert classify_line("# HACK around it, # TODO remove") == MarkerKind.TODO

    def test_marker_in_string_literal(self):
        """Markers inside strings are reported too."""
        assert classify_line('url = "http://todo.example.com"') == MarkerKind.TODO

    @pytest.mark.parametrize(
        "line",
        [
            "TODO: no comment opener",
            "-- TODO: sql comment",
            "// nothing to do here",
            "",
        ],
    )
    def test_no_match(self, line):
        """Lines without a comment opener followed by a keyword don't match."""
        assert classify_line(line) is None
