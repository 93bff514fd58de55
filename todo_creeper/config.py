"""
Configuration management for todo-creeper.

Loads action inputs from the environment. A .env file in the working
directory is honored so the scanner can be run outside of a workflow.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from todo_creeper.actions import get_input
from todo_creeper.todo_scanner import DEFAULT_EXCLUDE_PATTERNS

# Load .env file from the working directory
load_dotenv()

DEFAULT_THRESHOLD = 10
DEFAULT_ISSUE_LABELS = ("todo", "enhancement")
SCAN_SOURCES = ("api", "workspace")


@dataclass(frozen=True)
class ActionConfig:
    """Settings for one run."""

    token: str
    threshold: int = DEFAULT_THRESHOLD
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    create_issues: bool = False
    issue_labels: tuple[str, ...] = DEFAULT_ISSUE_LABELS
    scan_source: str = "api"
    repository: str = ""
    sha: str | None = None
    api_url: str = "https://api.github.com"
    workspace: str = "."


def split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated input, dropping blank items."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_threshold(value: str) -> int:
    """Parse the threshold input. Blank or non-numeric values use the default."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return DEFAULT_THRESHOLD


def load_config() -> ActionConfig:
    """Build the run configuration from action inputs and runner variables."""
    exclude = get_input("exclude-patterns", ",".join(DEFAULT_EXCLUDE_PATTERNS))
    labels = get_input("issue-labels", ",".join(DEFAULT_ISSUE_LABELS))

    return ActionConfig(
        token=get_input("token") or os.getenv("GITHUB_TOKEN", ""),
        threshold=parse_threshold(get_input("threshold")),
        exclude_patterns=split_list(exclude),
        create_issues=get_input("create-issues").lower() == "true",
        issue_labels=split_list(labels),
        scan_source=get_input("scan-source", "api").lower(),
        repository=os.getenv("GITHUB_REPOSITORY", ""),
        sha=os.getenv("GITHUB_SHA") or None,
        api_url=os.getenv("GITHUB_API_URL") or "https://api.github.com",
        workspace=os.getenv("GITHUB_WORKSPACE") or ".",
    )


def validate_config(config: ActionConfig) -> None:
    """Validate that required configuration is present."""
    missing = []

    if not config.token or config.token == "your_token_here":
        missing.append("token (or GITHUB_TOKEN)")

    needs_api = config.scan_source == "api" or config.create_issues
    if needs_api and config.repository.count("/") != 1:
        missing.append("GITHUB_REPOSITORY (owner/repo)")

    if config.scan_source not in SCAN_SOURCES:
        missing.append(f"scan-source (one of: {', '.join(SCAN_SOURCES)})")

    if config.threshold < 0:
        missing.append("threshold (must be a non-negative integer)")

    if missing:
        raise ValueError(
            f"Missing or invalid configuration: {', '.join(missing)}\n"
            "Pass the token input, e.g. `token: ${{ secrets.GITHUB_TOKEN }}`."
        )
