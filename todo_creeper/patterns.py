"""
Marker comment patterns.

Classifies a single line as a TODO, FIXME or HACK comment. Matching is purely
line based: a marker inside a string literal is reported just like one in a
real comment.
"""

import re
from enum import Enum


class MarkerKind(str, Enum):
    """Kind of marker comment."""

    TODO = "TODO"
    FIXME = "FIXME"
    HACK = "HACK"


# Comment openers, in evaluation order: //, /*, #, <!--
COMMENT_OPENERS = (r"//", r"/\*", r"#", r"<!--")

# 4 comment styles x 3 keywords. All TODO patterns come first, then FIXME,
# then HACK; the first match wins.
MARKER_PATTERNS: list[tuple[re.Pattern, MarkerKind]] = [
    (re.compile(rf"{opener}\s*{kind.value}", re.IGNORECASE), kind)
    for kind in MarkerKind
    for opener in COMMENT_OPENERS
]


def classify_line(line: str) -> MarkerKind | None:
    """
    Classify a line of source text.

    Args:
        line: A single line, with or without its trailing newline

    Returns:
        The MarkerKind of the first matching pattern, or None
    """
    for pattern, kind in MARKER_PATTERNS:
        if pattern.search(line):
            return kind
    return None
