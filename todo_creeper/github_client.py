"""
GitHub API client for repository contents and issues.
"""

import base64
import binascii
from urllib.parse import quote

import requests


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubClient:
    """Client for interacting with the GitHub API."""

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str, repository: str, base_url: str | None = None):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub token (usually the workflow's GITHUB_TOKEN)
            repository: Repository full name, e.g. "owner/repo"
            base_url: API root, for GitHub Enterprise. Defaults to api.github.com
        """
        self.token = token
        self.repository = repository
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _check_response(self, response: requests.Response, not_found: str) -> None:
        """Raise GitHubClientError for any non-OK response."""
        if response.status_code == 401:
            raise GitHubClientError(
                "Authentication failed. Check that the token input is valid."
            )
        elif response.status_code == 404:
            raise GitHubClientError(not_found)
        elif response.status_code == 403:
            # Check for rate limiting
            remaining = response.headers.get("X-RateLimit-Remaining", "unknown")
            raise GitHubClientError(
                f"API rate limit exceeded or access forbidden. "
                f"Remaining requests: {remaining}"
            )
        elif response.status_code == 422:
            raise GitHubClientError(f"Validation failed: {response.text}")
        elif not response.ok:
            raise GitHubClientError(
                f"GitHub API error: {response.status_code} - {response.text}"
            )

    def _request(self, method: str, url: str, not_found: str, **kwargs):
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise GitHubClientError(f"Request to {url} failed: {e}") from e

        self._check_response(response, not_found)

        try:
            return response.json()
        except ValueError as e:
            raise GitHubClientError(f"Invalid JSON response from {url}: {e}") from e

    def _contents(self, path: str, ref: str | None):
        # Paths may contain "#" or "?", which would otherwise end the URL path
        encoded_path = quote(path, safe="/")
        url = f"{self.base_url}/repos/{self.repository}/contents/{encoded_path}"
        params = {"ref": ref} if ref else None
        return self._request(
            "GET",
            url,
            f"Path '{path or '/'}' not found in {self.repository}.",
            params=params,
        )

    def list_directory(self, path: str = "", ref: str | None = None) -> list[dict]:
        """
        List a directory of the repository at a fixed ref.

        Args:
            path: Repository-relative directory path ("" for the root)
            ref: Commit SHA, branch or tag. Defaults to the default branch

        Returns:
            List of entry dictionaries with at least name, path and type

        Raises:
            GitHubClientError: If the API request fails or the path is a file
        """
        data = self._contents(path, ref)
        if not isinstance(data, list):
            raise GitHubClientError(f"'{path}' is not a directory.")
        return data

    def get_file_content(self, path: str, ref: str | None = None) -> str:
        """
        Fetch and decode a file's text content at a fixed ref.

        Args:
            path: Repository-relative file path
            ref: Commit SHA, branch or tag

        Returns:
            The file content decoded as UTF-8

        Raises:
            GitHubClientError: If the request fails or the content can't be decoded
        """
        data = self._contents(path, ref)
        if not isinstance(data, dict) or data.get("type") != "file":
            raise GitHubClientError(f"'{path}' is not a file.")

        content = data.get("content") or ""
        if data.get("encoding", "base64") != "base64":
            raise GitHubClientError(
                f"Unsupported encoding for '{path}': {data.get('encoding')}"
            )

        try:
            return base64.b64decode(content).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise GitHubClientError(f"Could not decode '{path}': {e}") from e

    def search_issues(self, query: str, per_page: int = 10) -> list[dict]:
        """
        Search issues in the configured repository for an exact phrase.

        Args:
            query: Text searched as a quoted phrase
            per_page: Maximum number of issues to return (max 100)

        Returns:
            List of issue dictionaries from the GitHub search API

        Raises:
            GitHubClientError: If the API request fails
        """
        url = f"{self.base_url}/search/issues"
        params = {
            "q": f'repo:{self.repository} "{query}" is:issue',
            "per_page": min(per_page, 100),
        }

        data = self._request(
            "GET", url, f"Repository '{self.repository}' not found.", params=params
        )
        return data.get("items", [])

    def create_issue(
        self,
        title: str,
        body: str,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> dict:
        """
        Create an issue in the configured repository.

        Args:
            title: Issue title
            body: Markdown body
            labels: Label names to apply
            assignees: Logins to assign. Omitted from the request when empty

        Returns:
            The created issue dictionary

        Raises:
            GitHubClientError: If the API request fails
        """
        url = f"{self.base_url}/repos/{self.repository}/issues"
        payload = {"title": title, "body": body, "labels": list(labels or [])}
        if assignees:
            payload["assignees"] = list(assignees)

        return self._request(
            "POST", url, f"Repository '{self.repository}' not found.", json=payload
        )
