"""Domain model for labels, milestones, issues and projects.

The JSON documents consumed by the CLI are parsed straight into these models.
Milestones are referenced by issues through their `version` (a local key),
never through the id assigned by the remote provider.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError

from repo_manager.errors import ConfigError, InvalidInputError

logger = logging.getLogger(__name__)


class Label(BaseModel):
    name: str
    color: str
    description: str | None = None


class Milestone(BaseModel):
    name: str
    version: str
    deadline: str
    description: str


class Section(BaseModel):
    title: str
    content: list[str] = Field(default_factory=list)


class IssueDescription(BaseModel):
    """Structured issue body, rendered to markdown before submission."""

    sections: list[Section] = Field(default_factory=list)

    def to_markdown(self) -> str:
        """Render the sections as a markdown document.

        Each section is its title line followed by its content lines, ending with a
        newline; sections are separated by one blank line.
        """

        rendered = [
            f"{section.title}\n" + "\n".join(section.content) + "\n" for section in self.sections
        ]
        return "\n".join(rendered)


class Issue(BaseModel):
    """A standalone issue, created without milestone or dependencies."""

    title: str
    labels: list[str] = Field(default_factory=list)
    description: IssueDescription = Field(default_factory=IssueDescription)


class ProjectIssue(BaseModel):
    """An issue declared inside a project, attached to a milestone by version."""

    title: str
    milestone: str
    estimate: str = ""
    sprint: int = 0
    dependencies: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    description: IssueDescription = Field(default_factory=IssueDescription)


class Project(BaseModel):
    name: str
    version: str
    milestones: list[Milestone] = Field(default_factory=list)
    issues: list[ProjectIssue] = Field(default_factory=list)


class ProjectFile(BaseModel):
    project: Project


class LabelsFile(BaseModel):
    labels: list[Label] = Field(default_factory=list)


class IssuesFile(BaseModel):
    issues: list[Issue] = Field(default_factory=list)


class IssueCreate(BaseModel):
    """Payload of the simple issue-creation primitive (markdown already rendered)."""

    title: str
    description: str
    labels: list[str] = Field(default_factory=list)

    @classmethod
    def from_issue(cls, issue: Issue) -> IssueCreate:
        return cls(
            title=issue.title,
            description=issue.description.to_markdown(),
            labels=list(issue.labels),
        )


_DocumentT = TypeVar("_DocumentT", bound=BaseModel)


def _load_document(path: Path, model: type[_DocumentT]) -> _DocumentT:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Failed to parse config file {path}: {e}") from e

    try:
        document = model.model_validate(raw)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid document in {path}: {e}") from e

    logger.debug("Loaded input document", extra={"path": str(path), "model": model.__name__})
    return document


def load_labels(path: Path) -> list[Label]:
    return _load_document(path, LabelsFile).labels


def load_issues(path: Path) -> list[Issue]:
    return _load_document(path, IssuesFile).issues


def load_project(path: Path) -> Project:
    """Load a `{"project": {...}}` document."""

    return _load_document(path, ProjectFile).project
