"""Abstract base class for repository providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import TYPE_CHECKING

from repo_manager.models import IssueCreate, Label, Milestone, Project

if TYPE_CHECKING:
    from repo_manager.project_setup import SetupResult


class RepositoryProvider(ABC):
    """Abstract base class for repository-hosting providers.

    Implementations wrap one platform's REST API (GitHub, GitLab) behind the same
    primitives, so that project setup runs the same way on either of them.
    """

    @abstractmethod
    def create_label(self, label: Label) -> None:
        """Create a label in the repository.

        Args:
            label: Label to create. Labels are not deduplicated.
        """

    @abstractmethod
    def create_milestone(self, milestone: Milestone) -> int:
        """Create a milestone.

        Args:
            milestone: Milestone to create; its deadline is translated to the
                date format expected by the platform.

        Returns:
            The provider-assigned milestone identifier.
        """

    @abstractmethod
    def create_issue(self, issue: IssueCreate) -> None:
        """Create a simple issue with no milestone association."""

    @abstractmethod
    def create_project_issue(
        self,
        *,
        title: str,
        body: str,
        milestone_id: int,
        labels: list[str],
    ) -> int:
        """Create an issue attached to a milestone.

        Returns:
            The provider-assigned issue identifier, usable by `create_issue_link`.
        """

    @abstractmethod
    def create_issue_link(self, from_id: int, to_id: int) -> None:
        """Record that issue `from_id` depends on issue `to_id`."""

    def setup_project(self, project: Project) -> SetupResult:
        """Create the project's milestones, issues and dependency links, in that order."""

        from repo_manager.project_setup import setup_project

        return setup_project(self, project)

    def close(self) -> None:
        """Release the underlying transport."""

    def __enter__(self) -> RepositoryProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
