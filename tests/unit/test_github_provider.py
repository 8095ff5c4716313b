"""Unit tests for the GitHub backend (mocked HTTP session)."""

from __future__ import annotations

from unittest.mock import Mock, PropertyMock

import pytest
import requests

from repo_manager.errors import ApiError, ConfigError, NetworkError
from repo_manager.models import IssueCreate, Label, Milestone, Project
from repo_manager.providers.github import GitHubProvider


def _provider(session) -> GitHubProvider:
    return GitHubProvider(
        token="test-token",
        repository="octo-org/octo-repo/",  # intentionally includes trailing slash
        api_url="https://api.github.com/",
        session=session,
    )


def test_session_carries_github_headers(session) -> None:
    fake = session()
    _provider(fake)

    assert fake.headers["Authorization"] == "Bearer test-token"
    assert fake.headers["Accept"] == "application/vnd.github+json"
    assert fake.headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert fake.headers["User-Agent"].startswith("repo-manager/")


def test_create_label_strips_hash_from_color(session, response) -> None:
    fake = session(response(201, {"id": 1, "name": "bug"}))
    provider = _provider(fake)

    provider.create_label(Label(name="bug", color="#ff0000", description="Broken"))

    url = fake.post.call_args.args[0]
    assert url == "https://api.github.com/repos/octo-org/octo-repo/labels"
    assert fake.post.call_args.kwargs["json"] == {
        "name": "bug",
        "color": "ff0000",
        "description": "Broken",
    }


def test_create_milestone_formats_due_date_and_returns_number(
    session, response, milestone: Milestone
) -> None:
    fake = session(response(201, {"id": 987654, "number": 3}))
    provider = _provider(fake)

    milestone_id = provider.create_milestone(milestone)

    assert milestone_id == 3
    assert fake.post.call_args.args[0].endswith("/repos/octo-org/octo-repo/milestones")
    assert fake.post.call_args.kwargs["json"] == {
        "title": "v0.1.0",
        "description": "Test milestone",
        "due_on": "2024-12-31T00:00:00Z",
        "state": "open",
    }


def test_create_simple_issue_has_no_milestone(session, response) -> None:
    fake = session(response(201, {"number": 10}))
    provider = _provider(fake)

    provider.create_issue(IssueCreate(title="Hello", description="Body", labels=["agent"]))

    assert fake.post.call_args.kwargs["json"] == {
        "title": "Hello",
        "body": "Body",
        "milestone": None,
        "labels": ["agent"],
        "assignees": [],
    }


def test_create_project_issue_returns_issue_number(session, response) -> None:
    fake = session(response(201, {"id": 555, "number": 42}))
    provider = _provider(fake)

    issue_id = provider.create_project_issue(
        title="A", body="## Objectif\nx\n", milestone_id=3, labels=["test"]
    )

    assert issue_id == 42
    assert fake.post.call_args.kwargs["json"]["milestone"] == 3
    assert fake.post.call_args.kwargs["json"]["body"] == "## Objectif\nx\n"


def test_issue_link_is_a_dependency_comment(session, response) -> None:
    fake = session(response(201, {"id": 1}))
    provider = _provider(fake)

    provider.create_issue_link(2, 1)

    assert fake.post.call_args.args[0] == (
        "https://api.github.com/repos/octo-org/octo-repo/issues/2/comments"
    )
    assert fake.post.call_args.kwargs["json"] == {"body": "Depends on #1"}


def test_non_2xx_raises_api_error_with_status_and_body(session, response) -> None:
    fake = session(response(422, {"message": "Validation Failed"}))
    provider = _provider(fake)

    with pytest.raises(ApiError) as exc_info:
        provider.create_label(Label(name="bug", color="ff0000"))

    assert exc_info.value.status == 422
    assert "Validation Failed" in exc_info.value.body
    assert exc_info.value.operation == "create label"


def test_transport_failure_raises_network_error(session) -> None:
    fake = session()
    fake.post.side_effect = requests.ConnectionError("connection refused")
    provider = _provider(fake)

    with pytest.raises(NetworkError, match="connection refused"):
        provider.create_issue_link(2, 1)


def test_undecodable_error_body_still_raises_api_error(session) -> None:
    resp = Mock(spec=requests.Response)
    resp.status_code = 500
    undecodable = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    type(resp).text = PropertyMock(side_effect=undecodable)
    provider = _provider(session(resp))

    with pytest.raises(ApiError) as exc_info:
        provider.create_label(Label(name="bug", color="ff0000"))

    assert exc_info.value.status == 500
    assert exc_info.value.body == "Unable to read error response"


def test_success_without_number_raises_api_error(session, response, milestone) -> None:
    fake = session(response(201, {"id": 1}))
    provider = _provider(fake)

    with pytest.raises(ApiError, match="number"):
        provider.create_milestone(milestone)


def test_setup_project_end_to_end(session, response, project: Project) -> None:
    fake = session(
        response(201, {"number": 1}),
        response(201, {"number": 11}),
        response(201, {"number": 12}),
        response(201, {"id": 900}),
    )
    provider = _provider(fake)

    result = provider.setup_project(project)

    assert result.milestone_ids == {"0.1.0": 1}
    assert result.issue_ids == {"A": 11, "B": 12}
    urls = [call.args[0] for call in fake.post.call_args_list]
    assert [u.rsplit("/repos/octo-org/octo-repo/", 1)[1] for u in urls] == [
        "milestones",
        "issues",
        "issues",
        "issues/12/comments",
    ]
    assert fake.post.call_args_list[-1].kwargs["json"] == {"body": "Depends on #11"}


@pytest.mark.parametrize("token", ["", "   ", "abc\ndef", "tok\x00en", "tok€n"])
def test_invalid_token_is_a_config_error(session, token: str) -> None:
    with pytest.raises(ConfigError):
        GitHubProvider(token=token, repository="octo-org/octo-repo", session=session())


def test_missing_repository_is_a_config_error(session) -> None:
    with pytest.raises(ConfigError):
        GitHubProvider(token="test-token", repository="", session=session())


def test_close_closes_session(session) -> None:
    fake = session()
    with _provider(fake):
        pass

    fake.close.assert_called_once()
