"""Tests for the action entry point."""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from todo_creeper.config import ActionConfig
from todo_creeper.content_provider import LocalContentProvider
from todo_creeper.main import main, run
from todo_creeper.trigger import PullRequestTrigger, PushTrigger, UnknownTrigger


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def repo(temp_dir):
    """Repository with one counted and one excluded TODO."""
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "a.js").write_text("const a = 1;\n\n// TODO: fix\n")
    (temp_dir / "node_modules").mkdir()
    (temp_dir / "node_modules" / "b.js").write_text("// TODO: ignored\n")
    return LocalContentProvider(temp_dir)


@pytest.fixture
def outputs(temp_dir):
    """Collect step outputs written during the test."""
    output_file = temp_dir / "github_output"
    output_file.touch()
    with patch.dict(os.environ, {"GITHUB_OUTPUT": str(output_file)}):

        def read():
            values = {}
            for line in output_file.read_text().splitlines():
                name, _, value = line.partition("=")
                values[name] = value
            return values

        yield read


@pytest.fixture
def client():
    mock = MagicMock()
    mock.search_issues.return_value = []
    mock.create_issue.return_value = {"number": 1}
    return mock


def _config(**overrides):
    settings = {"token": "abc", "repository": "octo/repo"}
    settings.update(overrides)
    return ActionConfig(**settings)


class TestRun:
    """Tests for the run pipeline."""

    def test_default_excludes_scenario(self, repo, client, outputs):
        """Only the file outside node_modules is counted."""
        code = run(_config(), client=client, provider=repo, trigger=UnknownTrigger())

        values = outputs()
        assert code == 0
        assert values["todo-count"] == "1"
        assert values["todo-files"] == "1"
        assert json.loads(values["todo-details"]) == [
            {"file": "src/a.js", "line": 3, "content": "// TODO: fix", "type": "TODO"}
        ]
        assert values["issues-created"] == "0"
        assert values["issues-linked"] == "0"

    def test_zero_threshold_fails(self, repo, client, outputs, capsys):
        code = run(_config(threshold=0), client=client, provider=repo, trigger=UnknownTrigger())

        assert code == 1
        assert "::error::❌ Too many TODOs found: 1 (threshold: 0)" in capsys.readouterr().out
        assert outputs()["todo-count"] == "1"

    def test_threshold_equal_passes(self, repo, client, outputs):
        code = run(_config(threshold=1), client=client, provider=repo, trigger=UnknownTrigger())
        assert code == 0

    def test_issue_creation_skipped_without_pull_request(self, repo, client, outputs, capsys):
        """Without a pull request, no issues are searched or created."""
        config = _config(create_issues=True)

        code = run(config, client=client, provider=repo, trigger=PushTrigger(commit="abc1234"))

        values = outputs()
        assert code == 0
        assert values["issues-created"] == "0"
        assert values["issues-linked"] == "0"
        assert "no pull request context available" in capsys.readouterr().out
        client.search_issues.assert_not_called()
        client.create_issue.assert_not_called()

    def test_existing_issue_linked(self, repo, client, outputs):
        """A TODO quoted verbatim in an issue body is linked, not created."""
        client.search_issues.return_value = [
            {"number": 3, "title": "Fix a", "body": "// TODO: fix"}
        ]
        trigger = PullRequestTrigger(number=10, author="dev")

        run(_config(create_issues=True), client=client, provider=repo, trigger=trigger)

        values = outputs()
        assert values["issues-linked"] == "1"
        assert values["issues-created"] == "0"
        client.create_issue.assert_not_called()

    def test_new_issue_created(self, repo, client, outputs):
        trigger = PullRequestTrigger(number=10, author="dev")

        run(
            _config(create_issues=True, issue_labels=("debt",)),
            client=client,
            provider=repo,
            trigger=trigger,
        )

        assert outputs()["issues-created"] == "1"
        args, kwargs = client.create_issue.call_args
        assert args[0] == "TODO: fix"
        assert kwargs["labels"] == ["debt"]
        assert kwargs["assignees"] == ["dev"]

    def test_issue_creation_disabled(self, repo, client, outputs):
        trigger = PullRequestTrigger(number=10, author="dev")

        run(_config(), client=client, provider=repo, trigger=trigger)

        client.search_issues.assert_not_called()


class TestMain:
    """Tests for the main entry point."""

    def test_missing_token_fails_before_scan(self, capsys):
        with patch.dict(os.environ, {"GITHUB_REPOSITORY": "octo/repo"}, clear=True):
            with patch("todo_creeper.main.run") as mock_run:
                code = main()

        assert code == 1
        mock_run.assert_not_called()
        assert "::error::Action failed: Missing or invalid configuration" in capsys.readouterr().out

    def test_workspace_scan(self, temp_dir, capsys):
        (temp_dir / "app.py").write_text("# FIXME: one\n# HACK: two\n")
        env = {
            "INPUT_TOKEN": "abc",
            "INPUT_SCAN-SOURCE": "workspace",
            "INPUT_THRESHOLD": "5",
            "GITHUB_WORKSPACE": str(temp_dir),
        }

        with patch.dict(os.environ, env, clear=True):
            code = main()

        output = capsys.readouterr().out
        assert code == 0
        assert "todo-count=2" in output
        assert "todo-files=1" in output

    def test_unexpected_error_reported(self, capsys):
        env = {"INPUT_TOKEN": "abc", "GITHUB_REPOSITORY": "octo/repo"}
        with patch.dict(os.environ, env, clear=True):
            with patch("todo_creeper.main.run", side_effect=RuntimeError("kaboom")):
                code = main()

        assert code == 1
        assert "::error::Action failed: kaboom" in capsys.readouterr().out
