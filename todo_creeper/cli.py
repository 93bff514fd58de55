"""
Log display functions for todo-creeper.
"""

from todo_creeper import actions
from todo_creeper.aggregator import ScanResult
from todo_creeper.todo_scanner import Finding


def format_finding(index: int, finding: Finding) -> str:
    """
    Format a finding as a numbered detail line.

    Args:
        index: 1-based position in the scan results
        finding: The finding to format

    Returns:
        Line like "1. src/app.js:3 - // TODO: fix"
    """
    return f"{index}. {finding.source_ref} - {finding.raw_text}"


def format_summary(result: ScanResult) -> str:
    todo_word = "TODO" if result.todo_count == 1 else "TODOs"
    file_word = "file" if result.file_count == 1 else "files"
    return f"📊 Found {result.todo_count} {todo_word} across {result.file_count} {file_word}"


def display_results(result: ScanResult) -> None:
    """Write the scan summary and one line per finding to the log."""
    actions.info(format_summary(result))

    if result.todo_count > 0:
        actions.info("\n📝 TODO Details:")
        # Source lines are untrusted; the runner must not read them as commands
        with actions.stop_commands():
            for index, finding in enumerate(result.findings, start=1):
                actions.info(format_finding(index, finding))


def threshold_message(result: ScanResult, threshold: int) -> str:
    """Return the pass/fail message for the threshold check."""
    if result.exceeds(threshold):
        return f"❌ Too many TODOs found: {result.todo_count} (threshold: {threshold})"
    return f"✅ TODO count ({result.todo_count}) is within threshold ({threshold})"
