"""GitLab REST backend (API v4)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from repo_manager.errors import ConfigError
from repo_manager.models import IssueCreate, Label, Milestone
from repo_manager.providers.base import RepositoryProvider
from repo_manager.providers.http import check_token, parse_id, post

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://gitlab.com/api/v4"


class GitLabProvider(RepositoryProvider):
    """Provider for a GitLab project, addressed by numeric id or "group/project" path."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        if not token or not token.strip():
            raise ConfigError("GitLab token is required")
        check_token(token)
        if not repository or not repository.strip("/ "):
            raise ConfigError("GitLab project id is required")

        self._project_id = repository.strip().strip("/")
        self._api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({"PRIVATE-TOKEN": token})

    @property
    def repository(self) -> str:
        return self._project_id

    def encode_project_id(self) -> str:
        """Percent-encode every non-alphanumeric byte of the project id or path."""

        encoded = quote(self._project_id, safe="")
        # quote() leaves "_.-~" untouched; encode them too.
        for char in "_.-~":
            encoded = encoded.replace(char, f"%{ord(char):02X}")
        return encoded

    def _project_url(self, path: str) -> str:
        return f"{self._api_url}/projects/{self.encode_project_id()}/{path.lstrip('/')}"

    def create_label(self, label: Label) -> None:
        payload: dict[str, Any] = {"name": label.name, "color": label.color}
        if label.description is not None:
            payload["description"] = label.description
        post(self._session, self._project_url("labels"), operation="create label", payload=payload)
        logger.info("Label created", extra={"project": self._project_id, "label": label.name})

    def create_milestone(self, milestone: Milestone) -> int:
        payload = {
            "title": milestone.name,
            "description": milestone.description,
            "due_date": milestone.deadline,
        }
        resp = post(
            self._session,
            self._project_url("milestones"),
            operation="create milestone",
            payload=payload,
        )
        return parse_id(resp, field="id", operation="create milestone")

    def create_issue(self, issue: IssueCreate) -> None:
        payload = {
            "title": issue.title,
            "description": issue.description,
            "labels": list(issue.labels),
        }
        post(self._session, self._project_url("issues"), operation="create issue", payload=payload)
        logger.info("Issue created", extra={"project": self._project_id, "title": issue.title})

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
            "description": body,
            "milestone_id": milestone_id,
            "labels": list(labels),
        }
        resp = post(
            self._session,
            self._project_url("issues"),
            operation="create issue",
            payload=payload,
        )
        # Issue routes (including links) take the project-scoped iid.
        return parse_id(resp, field="iid", operation="create issue")

    def create_issue_link(self, from_id: int, to_id: int) -> None:
        post(
            self._session,
            self._project_url(f"issues/{from_id}/links"),
            operation="create issue link",
            params={"target_issue_id": to_id},
        )

    def close(self) -> None:
        self._session.close()
