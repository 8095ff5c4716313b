#!/usr/bin/env python3
"""Programmatic project setup example.

This demonstrates using the components directly:

* load settings from `.env`
* load a project description from JSON
* create its milestones, issues and dependency links

Repository selection is passed as an argument (falls back to REPO_PATH).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from repo_manager.errors import ProviderError
from repo_manager.manager.config import ManagerSettings
from repo_manager.manager.logging import configure_logging
from repo_manager.models import load_project
from repo_manager.providers import create_provider


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Set up a project (programmatic example).")
    parser.add_argument("--repo", default=None, help="Target repository (defaults to REPO_PATH)")
    parser.add_argument(
        "--project",
        default=str(Path(__file__).with_name("project.json")),
        help="Path to the project description",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ManagerSettings()
    configure_logging(settings.log_level)

    project = load_project(Path(args.project))
    config = settings.provider_config(repository=args.repo)

    with create_provider(settings.provider, config) as provider:
        try:
            result = provider.setup_project(project)
        except ProviderError as exc:
            print(f"Setup failed: {exc}")
            return 1

    for title, issue_id in result.issue_ids.items():
        print(f"#{issue_id}: {title}")
    print(f"Linked {len(result.links)} dependencies")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
