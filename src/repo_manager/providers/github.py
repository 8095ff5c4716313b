"""GitHub REST backend.

GitHub has no native issue-link API, so dependencies are recorded as a
`Depends on #N` comment on the dependent issue.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from repo_manager import __version__
from repo_manager.errors import ConfigError
from repo_manager.models import IssueCreate, Label, Milestone
from repo_manager.providers.base import RepositoryProvider
from repo_manager.providers.http import check_token, parse_id, post

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubProvider(RepositoryProvider):
    """Provider for a GitHub repository ("owner/repo")."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        if not token or not token.strip():
            raise ConfigError("GitHub token is required")
        check_token(token)
        if not repository or not repository.strip("/ "):
            raise ConfigError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._rest_base_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"repo-manager/{__version__}",
            }
        )

    @property
    def repository(self) -> str:
        return self._repository_name

    def _repo_url(self, path: str) -> str:
        return f"{self._rest_base_url}/repos/{self._repository_name}/{path.lstrip('/')}"

    @staticmethod
    def format_date(deadline: str) -> str:
        """Turn a `YYYY-MM-DD` deadline into the timestamp GitHub expects for `due_on`."""

        return f"{deadline}T00:00:00Z"

    @staticmethod
    def strip_hash_from_color(color: str) -> str:
        return color.lstrip("#")

    def create_label(self, label: Label) -> None:
        payload: dict[str, Any] = {
            "name": label.name,
            "color": self.strip_hash_from_color(label.color),
            "description": label.description,
        }
        post(self._session, self._repo_url("labels"), operation="create label", payload=payload)
        logger.info("Label created", extra={"repo": self._repository_name, "label": label.name})

    def create_milestone(self, milestone: Milestone) -> int:
        payload = {
            "title": milestone.name,
            "description": milestone.description,
            "due_on": self.format_date(milestone.deadline),
            "state": "open",
        }
        resp = post(
            self._session,
            self._repo_url("milestones"),
            operation="create milestone",
            payload=payload,
        )
        # GitHub addresses milestones by `number`, not by the global `id`.
        return parse_id(resp, field="number", operation="create milestone")

    def create_issue(self, issue: IssueCreate) -> None:
        payload = {
            "title": issue.title,
            "body": issue.description,
            "milestone": None,
            "labels": list(issue.labels),
            "assignees": [],
        }
        post(self._session, self._repo_url("issues"), operation="create issue", payload=payload)
        logger.info("Issue created", extra={"repo": self._repository_name, "title": issue.title})

    def create_project_issue(
        self,
        *,
        title: str,
        body: str,
        milestone_id: int,
        labels: list[str],
    ) -> int:
        payload = {
            "title": title,
            "body": body,
            "milestone": milestone_id,
            "labels": list(labels),
            "assignees": [],
        }
        resp = post(
            self._session,
            self._repo_url("issues"),
            operation="create issue",
            payload=payload,
        )
        return parse_id(resp, field="number", operation="create issue")

    def create_issue_link(self, from_id: int, to_id: int) -> None:
        url = self._repo_url(f"issues/{from_id}/comments")
        post(
            self._session,
            url,
            operation="create issue link",
            payload={"body": f"Depends on #{to_id}"},
        )

    def close(self) -> None:
        self._session.close()
