"""
Workflow trigger context.

Describes what started the run: a pull request, a push, or something else.
Each kind knows how to describe itself in an issue body and who, if anyone,
new issues should be assigned to.
"""

import json
import os
from dataclasses import dataclass

PULL_REQUEST_EVENTS = {"pull_request", "pull_request_target"}


@dataclass(frozen=True)
class PullRequestTrigger:
    """Run triggered by a pull request."""

    number: int
    author: str | None = None

    def context_sentence(self) -> str:
        return f"in pull request #{self.number}"

    @property
    def assignee(self) -> str | None:
        return self.author


@dataclass(frozen=True)
class PushTrigger:
    """Run triggered by a direct push."""

    commit: str
    branch: str | None = None

    def context_sentence(self) -> str:
        sentence = f"in commit {self.commit[:7]}"
        if self.branch:
            sentence += f" on branch {self.branch}"
        return sentence

    @property
    def assignee(self) -> str | None:
        return None


@dataclass(frozen=True)
class UnknownTrigger:
    """Run with no pull request or push information."""

    event_name: str | None = None

    def context_sentence(self) -> str:
        return "during a repository scan"

    @property
    def assignee(self) -> str | None:
        return None


TriggerContext = PullRequestTrigger | PushTrigger | UnknownTrigger


def _load_event_payload(event_path: str | None) -> dict:
    if not event_path:
        return {}
    try:
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _branch_from_env(environ) -> str | None:
    branch = environ.get("GITHUB_REF_NAME")
    if branch:
        return branch
    ref = environ.get("GITHUB_REF", "")
    if ref.startswith("refs/heads/"):
        return ref[len("refs/heads/"):]
    return None


def trigger_from_event(event_name: str | None, payload: dict, sha: str | None = None,
                       branch: str | None = None) -> TriggerContext:
    """
    Build a trigger context from an event name and its webhook payload.

    Args:
        event_name: GitHub event name, e.g. "pull_request" or "push"
        payload: Decoded event payload
        sha: Commit the run is pinned to
        branch: Branch name for pushes

    Returns:
        The matching trigger context
    """
    if event_name in PULL_REQUEST_EVENTS:
        pull_request = payload.get("pull_request") or {}
        number = pull_request.get("number") or payload.get("number")
        if number is not None:
            author = (pull_request.get("user") or {}).get("login")
            return PullRequestTrigger(number=int(number), author=author)

    if event_name == "push":
        commit = payload.get("after") or sha
        if commit:
            return PushTrigger(commit=commit, branch=branch)

    return UnknownTrigger(event_name=event_name)


def load_trigger(environ=None) -> TriggerContext:
    """Read the trigger context of the current workflow run from the environment."""
    environ = os.environ if environ is None else environ
    payload = _load_event_payload(environ.get("GITHUB_EVENT_PATH"))
    return trigger_from_event(
        environ.get("GITHUB_EVENT_NAME"),
        payload,
        sha=environ.get("GITHUB_SHA"),
        branch=_branch_from_env(environ),
    )
