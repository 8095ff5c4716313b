"""Test configuration and fixtures."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from repo_manager.errors import ApiError
from repo_manager.models import (
    IssueCreate,
    IssueDescription,
    Label,
    Milestone,
    Project,
    ProjectIssue,
    Section,
)
from repo_manager.providers.base import RepositoryProvider


def make_response(status_code: int, payload: Any = None) -> Mock:
    """Build a fake `requests.Response` with a JSON payload."""
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = json.dumps(payload)
    return resp


def make_session(*responses: Mock) -> Mock:
    """Build a fake `requests.Session` answering POSTs with `responses`, in order."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    session.post.side_effect = list(responses)
    return session


class RecordingProvider(RepositoryProvider):
    """In-memory provider recording every primitive call in order.

    Ids are handed out sequentially: milestones from 100, issues from 1.
    """

    def __init__(
        self,
        *,
        fail_milestone: str | None = None,
        fail_issue: str | None = None,
        fail_link_from: int | None = None,
    ) -> None:
        self.calls: list[tuple[str, Any]] = []
        self._fail_milestone = fail_milestone
        self._fail_issue = fail_issue
        self._fail_link_from = fail_link_from
        self._next_milestone_id = 100
        self._next_issue_id = 1

    def create_label(self, label: Label) -> None:
        self.calls.append(("label", label.name))

    def create_milestone(self, milestone: Milestone) -> int:
        self.calls.append(("milestone", milestone.version))
        if milestone.version == self._fail_milestone:
            raise ApiError("create milestone", status=422, body="Validation Failed")
        milestone_id = self._next_milestone_id
        self._next_milestone_id += 1
        return milestone_id

    def create_issue(self, issue: IssueCreate) -> None:
        self.calls.append(("simple_issue", issue.title))

    def create_project_issue(
        self,
        *,
        title: str,
        body: str,
        milestone_id: int,
        labels: list[str],
    ) -> int:
        self.calls.append(("issue", (title, milestone_id)))
        if title == self._fail_issue:
            raise ApiError("create issue", status=500, body="boom")
        issue_id = self._next_issue_id
        self._next_issue_id += 1
        return issue_id

    def create_issue_link(self, from_id: int, to_id: int) -> None:
        self.calls.append(("link", (from_id, to_id)))
        if from_id == self._fail_link_from:
            raise ApiError("create issue link", status=404, body="Not Found")

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


def _issue(title: str, milestone: str, dependencies: list[str] | None = None) -> ProjectIssue:
    return ProjectIssue(
        title=title,
        milestone=milestone,
        estimate="1d",
        sprint=1,
        dependencies=dependencies or [],
        labels=["test"],
        description=IssueDescription(
            sections=[Section(title="## Objectif", content=[f"Deliver {title}"])]
        ),
    )


@pytest.fixture
def make_issue():
    """Factory for project issues with a one-section description."""
    return _issue


@pytest.fixture
def milestone() -> Milestone:
    return Milestone(
        name="v0.1.0",
        version="0.1.0",
        deadline="2024-12-31",
        description="Test milestone",
    )


@pytest.fixture
def project(milestone: Milestone) -> Project:
    """Two issues on one milestone, B depending on A."""
    return Project(
        name="Test Project",
        version="0.1.0",
        milestones=[milestone],
        issues=[_issue("A", "0.1.0"), _issue("B", "0.1.0", ["A"])],
    )


@pytest.fixture
def recording_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def response():
    """Factory for fake HTTP responses: `response(201, {"number": 7})`."""
    return make_response


@pytest.fixture
def session():
    """Factory for fake HTTP sessions: `session(response(201, {...}), ...)`."""
    return make_session


@pytest.fixture
def failing_provider():
    """Factory for recording providers configured to fail at a given step."""
    return RecordingProvider
