"""
TODO/FIXME/HACK scanner.

Walks a repository snapshot, skipping excluded paths and files with
unrecognized extensions, and collects one Finding per marker line.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import PurePosixPath

from todo_creeper import actions
from todo_creeper.content_provider import ContentFetchError, ContentProvider
from todo_creeper.patterns import MarkerKind, classify_line

DEFAULT_EXCLUDE_PATTERNS = ("node_modules", "dist", "build", ".git")

# Only text files with common code extensions are scanned
CODE_EXTENSIONS = frozenset(
    {
        ".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c", ".cs",
        ".php", ".rb", ".go", ".rs", ".swift", ".kt", ".scala", ".clj", ".hs",
        ".ml", ".fs", ".vb", ".sql", ".sh", ".bash", ".zsh", ".fish", ".ps1",
        ".bat", ".cmd", ".yml", ".yaml", ".json", ".xml", ".html", ".css",
        ".scss", ".sass", ".less", ".vue", ".svelte", ".md", ".txt",
    }
)


@dataclass(frozen=True)
class Finding:
    """A marker comment found at a specific file and line."""

    path: str
    line: int
    raw_text: str
    kind: MarkerKind

    @property
    def source_ref(self) -> str:
        """Return source reference in file:line format."""
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict:
        """Serialize using the keys published in the todo-details output."""
        return {
            "file": self.path,
            "line": self.line,
            "content": self.raw_text,
            "type": self.kind.value,
        }


@dataclass(frozen=True)
class FileEntry:
    """A candidate file produced by the tree walk."""

    path: str
    type: str = "file"


def is_excluded(path: str, exclude_patterns) -> bool:
    """Return True if the path contains any exclusion pattern as a substring."""
    return any(pattern in path for pattern in exclude_patterns)


def has_code_extension(path: str, extensions=CODE_EXTENSIONS) -> bool:
    """Return True if the file's lowercase extension is allow-listed."""
    return PurePosixPath(path).suffix.lower() in extensions


def walk_tree(
    provider: ContentProvider, exclude_patterns=DEFAULT_EXCLUDE_PATTERNS, root: str = ""
) -> Iterator[FileEntry]:
    """
    Enumerate candidate files depth-first, in listing order.

    Excluded directories are never listed, so their descendants are excluded
    too. A directory that can't be listed is reported as a warning and
    contributes nothing.

    Args:
        provider: Content provider for the snapshot being scanned
        exclude_patterns: Substrings that exclude any path containing them
        root: Directory to start from ("" for the repository root)

    Yields:
        FileEntry for every non-excluded file
    """
    # Work-list of (path, type); the root is listed first
    pending: list[tuple[str, str]] = [(root, "dir")]

    while pending:
        path, entry_type = pending.pop()

        if entry_type == "file":
            yield FileEntry(path=path)
            continue

        try:
            entries = provider.list_directory(path)
        except ContentFetchError as e:
            actions.warning(f"Failed to scan directory {path or '.'}: {e}")
            continue

        children = []
        for entry in entries:
            child_path = f"{path}/{entry['name']}" if path else entry["name"]
            if is_excluded(child_path, exclude_patterns):
                continue
            if entry.get("type") in ("dir", "file"):
                children.append((child_path, entry["type"]))

        # Reverse so the first listed entry is popped first
        pending.extend(reversed(children))


def scan_content(path: str, content: str) -> list[Finding]:
    """
    Scan already-fetched text for marker comments.

    Args:
        path: Repository-relative path recorded on each Finding
        content: Full file text

    Returns:
        Findings in line order
    """
    findings = []

    for line_number, line in enumerate(content.split("\n"), start=1):
        kind = classify_line(line)
        if kind is not None:
            findings.append(
                Finding(path=path, line=line_number, raw_text=line.strip(), kind=kind)
            )

    return findings


def scan_file(
    provider: ContentProvider, entry: FileEntry, extensions=CODE_EXTENSIONS
) -> list[Finding]:
    """
    Scan a single file for marker comments.

    Files with an unrecognized extension are skipped without being fetched.
    A fetch or decode failure is reported as a warning and yields nothing.

    Args:
        provider: Content provider for the snapshot being scanned
        entry: File to scan
        extensions: Allowed lowercase extensions, including the dot

    Returns:
        List of Findings in the file
    """
    if not has_code_extension(entry.path, extensions):
        return []

    try:
        content = provider.get_file_content(entry.path)
    except ContentFetchError as e:
        actions.warning(f"Failed to scan file {entry.path}: {e}")
        return []

    return scan_content(entry.path, content)


def scan_tree(
    provider: ContentProvider,
    exclude_patterns=DEFAULT_EXCLUDE_PATTERNS,
    extensions=CODE_EXTENSIONS,
) -> list[Finding]:
    """
    Scan a whole repository snapshot.

    Args:
        provider: Content provider for the snapshot being scanned
        exclude_patterns: Substrings that exclude any path containing them
        extensions: Allowed lowercase extensions, including the dot

    Returns:
        Findings in traversal order, then line order within each file
    """
    findings = []
    for entry in walk_tree(provider, exclude_patterns):
        findings.extend(scan_file(provider, entry, extensions))
    return findings
