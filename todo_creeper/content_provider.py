"""
Repository content providers.

A provider lists directories and reads files of one fixed snapshot of a
repository. Every fetch made during a run goes through the same provider, so
all line numbers refer to the same commit.
"""

from pathlib import Path
from typing import Protocol

from todo_creeper.github_client import GitHubClient, GitHubClientError


class ContentFetchError(Exception):
    """Raised when a directory listing or file content is unavailable."""

    pass


class ContentProvider(Protocol):
    """Read-only view of a repository snapshot."""

    def list_directory(self, path: str) -> list[dict]:
        """Return entries ({"name", "path", "type"}) of a directory."""
        ...

    def get_file_content(self, path: str) -> str:
        """Return the decoded text of a file."""
        ...


class GitHubContentProvider:
    """Reads a repository through the GitHub contents API at a pinned ref."""

    def __init__(self, client: GitHubClient, ref: str | None):
        self.client = client
        self.ref = ref

    def list_directory(self, path: str) -> list[dict]:
        try:
            return self.client.list_directory(path, ref=self.ref)
        except GitHubClientError as e:
            raise ContentFetchError(str(e)) from e

    def get_file_content(self, path: str) -> str:
        try:
            return self.client.get_file_content(path, ref=self.ref)
        except GitHubClientError as e:
            raise ContentFetchError(str(e)) from e


class LocalContentProvider:
    """Reads a checked-out working tree from disk."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def list_directory(self, path: str) -> list[dict]:
        directory = self.root / path if path else self.root
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ContentFetchError(f"Cannot list '{path or '.'}': {e}") from e

        entries = []
        for child in children:
            if child.is_symlink():
                entry_type = "symlink"
            elif child.is_dir():
                entry_type = "dir"
            elif child.is_file():
                entry_type = "file"
            else:
                continue
            rel_path = child.relative_to(self.root).as_posix()
            entries.append({"name": child.name, "path": rel_path, "type": entry_type})
        return entries

    def get_file_content(self, path: str) -> str:
        try:
            return (self.root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentFetchError(f"Cannot read '{path}': {e}") from e
