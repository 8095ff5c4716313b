"""CLI entrypoint for repo-manager.

Commands:
- create-labels: create every label of a labels file
- create-issues: create every issue of an issues file (no milestones)
- setup-project: create milestones, issues and dependency links of a project file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from repo_manager import __version__
from repo_manager.errors import ConfigError, InvalidInputError, ProviderError
from repo_manager.manager.config import ManagerSettings
from repo_manager.manager.logging import configure_logging
from repo_manager.models import IssueCreate, load_issues, load_labels, load_project
from repo_manager.providers import ProviderType, RepositoryProvider, create_provider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-manager",
        description="Provision labels, milestones and issues on GitHub or GitLab",
    )
    parser.add_argument("--version", action="version", version=f"repo-manager {__version__}")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in ProviderType],
        default=None,
        help="Target platform (defaults to REPO_PROVIDER)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="REST API base URL (defaults to REPO_API_URL, then the provider's public API)",
    )
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help=(
            "'owner/repo' on GitHub, project id or 'group/project' on GitLab "
            "(defaults to REPO_PATH)"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_labels = subparsers.add_parser("create-labels", help="Create labels from a JSON file")
    create_labels.add_argument(
        "--config",
        default=str(Path("labels.json")),
        help="Path to the labels file ({\"labels\": [...]})",
    )

    create_issues = subparsers.add_parser("create-issues", help="Create issues from a JSON file")
    create_issues.add_argument(
        "--config",
        default=str(Path("issues.json")),
        help="Path to the issues file ({\"issues\": [...]})",
    )

    setup_project = subparsers.add_parser(
        "setup-project",
        help="Create a project's milestones, issues and dependency links",
    )
    setup_project.add_argument(
        "--config",
        default=str(Path("project.json")),
        help="Path to the project file ({\"project\": {...}})",
    )

    return parser


def _create_labels(provider: RepositoryProvider, path: Path) -> int:
    failures = 0
    for label in load_labels(path):
        try:
            provider.create_label(label)
        except ProviderError as e:
            failures += 1
            logger.error("Label creation failed", extra={"label": label.name, "error": str(e)})
            print(f"❌ Failed to create label {label.name}: {e}", file=sys.stderr)
            continue
        print(f"✅ Created label: {label.name}")
    return 1 if failures else 0


def _create_issues(provider: RepositoryProvider, path: Path) -> int:
    failures = 0
    for issue in load_issues(path):
        try:
            provider.create_issue(IssueCreate.from_issue(issue))
        except ProviderError as e:
            failures += 1
            logger.error("Issue creation failed", extra={"title": issue.title, "error": str(e)})
            print(f"❌ Failed to create issue {issue.title}: {e}", file=sys.stderr)
            continue
        print(f"✅ Created issue: {issue.title}")
    return 1 if failures else 0


def _setup_project(provider: RepositoryProvider, path: Path) -> int:
    project = load_project(path)
    try:
        result = provider.setup_project(project)
    except ProviderError as e:
        logger.error("Project setup failed", extra={"project": project.name, "error": str(e)})
        print(f"❌ Failed to set up project {project.name}: {e}", file=sys.stderr)
        return 1

    print(
        f"✅ Project {result.project} set up: {len(result.milestone_ids)} milestones, "
        f"{len(result.issue_ids)} issues, {len(result.links)} links"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ManagerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    provider_type = ProviderType(args.provider) if args.provider else settings.provider
    config = settings.provider_config(
        provider=provider_type,
        repository=args.repository,
        api_url=args.api_url,
    )

    try:
        provider = create_provider(provider_type, config)
    except ConfigError as e:
        logger.error("Invalid provider configuration", extra={"error": str(e)})
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    path = Path(args.config)
    try:
        with provider:
            if args.command == "create-labels":
                return _create_labels(provider, path)
            if args.command == "create-issues":
                return _create_issues(provider, path)
            if args.command == "setup-project":
                return _setup_project(provider, path)
    except (ConfigError, InvalidInputError) as e:
        logger.error("Invalid input", extra={"path": str(path), "error": str(e)})
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    logger.error("Unknown command", extra={"command": args.command})
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
