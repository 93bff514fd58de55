"""
Issue reconciliation for scan findings.

For every finding, looks for an existing issue that already tracks it and
creates a new issue when none is found. Matching is a text heuristic: it can
link a finding to an unrelated issue that mentions "todo", and it misses
issues that describe the same work in different words.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from todo_creeper import actions
from todo_creeper.github_client import GitHubClientError
from todo_creeper.todo_scanner import Finding
from todo_creeper.trigger import TriggerContext

TITLE_MAX_LENGTH = 50

MARKER_WORDS = ("todo", "fixme", "hack")

_LEADING_OPENER = re.compile(r"^(?://|/\*|#|<!--)\s*")
_TRAILING_CLOSER = re.compile(r"\s*(?:\*/|-->)$")
_WHITESPACE = re.compile(r"\s+")
_MARKER_PREFIX = re.compile(r"^(?:TODO|FIXME|HACK):", re.IGNORECASE)

ISSUE_BODY_TEMPLATE = """## TODO Item

**File:** `{path}`
**Line:** {line}
**Type:** {kind}

**Content:**
```
{content}
```

**Context:**
This TODO was automatically detected by the TODO Creeper action {context}.

**Action Required:**
Please review this TODO and either:
1. Address the TODO item
2. Create a proper issue with more details
3. Remove the TODO if it's no longer needed

---
*This issue was automatically created by [TODO Creeper](https://github.com/Gustrb/todo-creeper)*"""


class IssueTracker(Protocol):
    """Issue search and creation, as provided by GitHubClient."""

    def search_issues(self, query: str) -> list[dict]:
        ...

    def create_issue(
        self,
        title: str,
        body: str,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> dict:
        ...


MatchPredicate = Callable[[Finding, dict], bool]


@dataclass(frozen=True)
class IssueDraft:
    """An issue to be created for an untracked finding."""

    title: str
    body: str
    labels: tuple[str, ...] = ()
    assignee: str | None = None


class Outcome(Enum):
    """Result of reconciling one finding."""

    CREATED = "created"
    LINKED = "linked"
    FAILED = "failed"


@dataclass(frozen=True)
class ReconcileSummary:
    """Counts of reconciliation outcomes."""

    created: int = 0
    linked: int = 0
    failed: int = 0

    def add(self, outcome: Outcome) -> "ReconcileSummary":
        """Return a new summary with one more outcome counted."""
        return ReconcileSummary(
            created=self.created + (outcome is Outcome.CREATED),
            linked=self.linked + (outcome is Outcome.LINKED),
            failed=self.failed + (outcome is Outcome.FAILED),
        )


# Match predicates


def content_match(finding: Finding, issue: dict) -> bool:
    """
    Accept an issue found by searching for the finding's text.

    Matches when the body mentions the file path or the line text, or when
    the title mentions any marker word.
    """
    body = issue.get("body") or ""
    title = (issue.get("title") or "").lower()
    return (
        finding.path in body
        or finding.raw_text in body
        or any(word in title for word in MARKER_WORDS)
    )


def path_query_match(finding: Finding, issue: dict) -> bool:
    """Accept an issue found by searching for the file path if its body quotes the line."""
    body = issue.get("body") or ""
    return finding.raw_text in body


def find_existing_issue(
    finding: Finding,
    tracker: IssueTracker,
    content_predicate: MatchPredicate = content_match,
    path_predicate: MatchPredicate = path_query_match,
) -> dict | None:
    """
    Look for an issue that already tracks a finding.

    Searches by the line text first, then by the file path. A failed search
    is reported as a warning and treated as "no existing issue".

    Args:
        finding: Finding to look up
        tracker: Issue search interface
        content_predicate: Filter for results of the line-text search
        path_predicate: Filter for results of the file-path search

    Returns:
        The first matching issue dictionary, or None
    """
    try:
        for issue in tracker.search_issues(finding.raw_text):
            if content_predicate(finding, issue):
                return issue

        for issue in tracker.search_issues(finding.path):
            if path_predicate(finding, issue):
                return issue
    except GitHubClientError as e:
        actions.warning(f"Failed to search for existing issues: {e}")

    return None


# Issue drafting


def clean_content(raw_text: str) -> str:
    """
    Strip comment syntax from a marker line.

    Removes one leading comment opener and one trailing closer, and collapses
    whitespace runs.
    """
    text = _LEADING_OPENER.sub("", raw_text.strip(), count=1)
    text = _TRAILING_CLOSER.sub("", text, count=1)
    return _WHITESPACE.sub(" ", text).strip()


def build_title(raw_text: str) -> str:
    """
    Build an issue title from a marker line.

    The cleaned text keeps an existing "TODO:"/"FIXME:"/"HACK:" prefix, and
    gets "TODO: " otherwise. Titles longer than 50 characters are cut to 50
    and get "..." appended.
    """
    cleaned = clean_content(raw_text)
    title = cleaned if _MARKER_PREFIX.match(cleaned) else f"TODO: {cleaned}"

    if len(title) > TITLE_MAX_LENGTH:
        title = title[:TITLE_MAX_LENGTH] + "..."
    return title


def build_body(finding: Finding, trigger: TriggerContext) -> str:
    """Render the Markdown body of a new issue."""
    return ISSUE_BODY_TEMPLATE.format(
        path=finding.path,
        line=finding.line,
        kind=finding.kind.value,
        content=finding.raw_text,
        context=trigger.context_sentence(),
    )


def build_issue_draft(finding: Finding, trigger: TriggerContext, labels) -> IssueDraft:
    """Create the IssueDraft for an untracked finding."""
    return IssueDraft(
        title=build_title(finding.raw_text),
        body=build_body(finding, trigger),
        labels=tuple(labels),
        assignee=trigger.assignee,
    )


# Reconciliation


def reconcile_finding(
    finding: Finding,
    tracker: IssueTracker,
    trigger: TriggerContext,
    labels,
    content_predicate: MatchPredicate = content_match,
    path_predicate: MatchPredicate = path_query_match,
) -> Outcome:
    """
    Link a finding to an existing issue or create one for it.

    Returns:
        LINKED, CREATED, or FAILED when issue creation raised an error
    """
    existing = find_existing_issue(finding, tracker, content_predicate, path_predicate)
    if existing is not None:
        actions.info(
            f"🔗 TODO in {finding.source_ref} already has issue #{existing.get('number')}"
        )
        return Outcome.LINKED

    draft = build_issue_draft(finding, trigger, labels)
    try:
        issue = tracker.create_issue(
            draft.title,
            draft.body,
            labels=list(draft.labels),
            assignees=[draft.assignee] if draft.assignee else None,
        )
    except GitHubClientError as e:
        actions.warning(f"Failed to process TODO in {finding.source_ref}: {e}")
        return Outcome.FAILED

    actions.info(f"✅ Created issue #{issue.get('number')} for TODO in {finding.source_ref}")
    return Outcome.CREATED


def reconcile(
    findings,
    tracker: IssueTracker,
    trigger: TriggerContext,
    labels,
    content_predicate: MatchPredicate = content_match,
    path_predicate: MatchPredicate = path_query_match,
) -> ReconcileSummary:
    """
    Reconcile every finding, one at a time.

    Findings are handled independently: two findings matching the same
    existing issue are both counted as linked.

    Args:
        findings: Findings in scan order
        tracker: Issue search/create interface
        trigger: Context of the run, used for the body and the assignee
        labels: Labels applied to created issues
        content_predicate: Filter for results of the line-text search
        path_predicate: Filter for results of the file-path search

    Returns:
        ReconcileSummary with created, linked and failed counts
    """
    summary = ReconcileSummary()
    for finding in findings:
        summary = summary.add(
            reconcile_finding(
                finding, tracker, trigger, labels, content_predicate, path_predicate
            )
        )
    return summary
