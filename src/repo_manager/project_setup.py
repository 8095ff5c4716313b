"""Project setup: drive a declarative project through a provider's primitives.

The run has three strictly ordered phases:

1. milestones, building a version -> milestone id table
2. issues, each resolved to its milestone id, building a title -> issue id table
3. dependency links between issues already created in phase 2

Any provider error or missing milestone aborts the run immediately. Resources
created before the failure stay on the remote side; nothing is rolled back.
Dependencies naming an unknown issue title are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from repo_manager.errors import NotFoundError
from repo_manager.models import Project
from repo_manager.providers.base import RepositoryProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SetupResult:
    """Identifiers assigned by the provider during one setup run."""

    project: str
    milestone_ids: dict[str, int] = field(default_factory=dict)
    issue_ids: dict[str, int] = field(default_factory=dict)
    links: list[tuple[int, int]] = field(default_factory=list)


def setup_project(provider: RepositoryProvider, project: Project) -> SetupResult:
    logger.info(
        "Setting up project",
        extra={
            "project": project.name,
            "version": project.version,
            "milestones": len(project.milestones),
            "issues": len(project.issues),
        },
    )

    milestone_ids: dict[str, int] = {}
    for milestone in project.milestones:
        milestone_id = provider.create_milestone(milestone)
        milestone_ids[milestone.version] = milestone_id
        logger.info(
            "Milestone created",
            extra={"milestone": milestone.name, "milestone_id": milestone_id},
        )

    issue_ids: dict[str, int] = {}
    for issue in project.issues:
        milestone_id = milestone_ids.get(issue.milestone)
        if milestone_id is None:
            raise NotFoundError(f"Milestone not found: {issue.milestone}")

        issue_id = provider.create_project_issue(
            title=issue.title,
            body=issue.description.to_markdown(),
            milestone_id=milestone_id,
            labels=list(issue.labels),
        )
        issue_ids[issue.title] = issue_id
        logger.info("Issue created", extra={"title": issue.title, "issue_id": issue_id})

    links: list[tuple[int, int]] = []
    for issue in project.issues:
        from_id = issue_ids[issue.title]
        for dependency in issue.dependencies:
            to_id = issue_ids.get(dependency)
            if to_id is None:
                logger.debug(
                    "Skipping unknown dependency",
                    extra={"title": issue.title, "dependency": dependency},
                )
                continue
            provider.create_issue_link(from_id, to_id)
            links.append((from_id, to_id))
            logger.info("Issue link created", extra={"from_id": from_id, "to_id": to_id})

    logger.info(
        "Project setup completed",
        extra={"project": project.name, "issues": len(issue_ids), "links": len(links)},
    )
    return SetupResult(
        project=project.name,
        milestone_ids=milestone_ids,
        issue_ids=issue_ids,
        links=links,
    )
