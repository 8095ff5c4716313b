"""Factory for creating repository providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from repo_manager.errors import ConfigError
from repo_manager.providers import github, gitlab
from repo_manager.providers.base import RepositoryProvider

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    GITHUB = "github"
    GITLAB = "gitlab"

    @property
    def default_api_url(self) -> str:
        if self is ProviderType.GITHUB:
            return github.DEFAULT_API_URL
        return gitlab.DEFAULT_API_URL


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Connection settings shared by every provider."""

    api_url: str
    token: str
    repository: str


def create_provider(
    provider_type: ProviderType | str,
    config: ProviderConfig,
) -> RepositoryProvider:
    """Create a provider instance for the given platform.

    Raises:
        ConfigError: If the provider type is unknown or the config is unusable.
    """

    try:
        kind = ProviderType(provider_type)
    except ValueError as e:
        raise ConfigError(f"Unsupported provider: {provider_type}") from e

    api_url = config.api_url or kind.default_api_url
    logger.info(
        "Creating provider",
        extra={"provider": kind.value, "repository": config.repository, "api_url": api_url},
    )

    if kind is ProviderType.GITHUB:
        return github.GitHubProvider(
            token=config.token, repository=config.repository, api_url=api_url
        )
    return gitlab.GitLabProvider(token=config.token, repository=config.repository, api_url=api_url)
