"""
todo-creeper: scan a repository for TODO/FIXME/HACK comments

Entry point for the GitHub Action.
"""

import json
import sys

from todo_creeper import actions
from todo_creeper.aggregator import aggregate
from todo_creeper.cli import display_results, threshold_message
from todo_creeper.config import ActionConfig, load_config, validate_config
from todo_creeper.content_provider import GitHubContentProvider, LocalContentProvider
from todo_creeper.github_client import GitHubClient
from todo_creeper.issue_reconciler import ReconcileSummary, reconcile
from todo_creeper.todo_scanner import scan_tree
from todo_creeper.trigger import PullRequestTrigger, load_trigger


def _build_provider(config: ActionConfig, client: GitHubClient | None):
    if config.scan_source == "workspace":
        return LocalContentProvider(config.workspace)
    return GitHubContentProvider(client, config.sha)


def run(config: ActionConfig, client=None, provider=None, trigger=None) -> int:
    """
    Scan, report outputs, optionally reconcile issues, and apply the threshold.

    Args:
        config: Validated run configuration
        client: GitHub client used for contents and issues. Built from config if omitted
        provider: Content provider. Chosen from config.scan_source if omitted
        trigger: Trigger context. Read from the runner environment if omitted

    Returns:
        Process exit code: 1 if the threshold is exceeded, else 0
    """
    if client is None:
        client = GitHubClient(config.token, config.repository, base_url=config.api_url)
    if provider is None:
        provider = _build_provider(config, client)
    if trigger is None:
        trigger = load_trigger()

    actions.info("🔍 Starting TODO scan...")

    result = aggregate(scan_tree(provider, config.exclude_patterns))

    actions.set_output("todo-count", result.todo_count)
    actions.set_output("todo-files", result.file_count)
    actions.set_output("todo-details", json.dumps(result.to_details()))

    display_results(result)

    summary = ReconcileSummary()
    if config.create_issues:
        if isinstance(trigger, PullRequestTrigger):
            actions.info("\n🔗 Processing TODOs for issue creation...")
            summary = reconcile(result.findings, client, trigger, config.issue_labels)
        else:
            actions.info("Skipping issue creation: no pull request context available")

    actions.set_output("issues-created", summary.created)
    actions.set_output("issues-linked", summary.linked)

    message = threshold_message(result, config.threshold)
    if result.exceeds(config.threshold):
        return actions.set_failed(message)

    actions.info(message)
    return 0


def main():
    try:
        config = load_config()
        validate_config(config)
        return run(config)
    except Exception as e:
        return actions.set_failed(f"Action failed: {e}")


if __name__ == "__main__":
    sys.exit(main())
