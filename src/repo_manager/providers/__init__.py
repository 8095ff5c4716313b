"""Repository providers: the GitHub and GitLab REST backends."""

from repo_manager.providers.base import RepositoryProvider
from repo_manager.providers.factory import ProviderConfig, ProviderType, create_provider
from repo_manager.providers.github import GitHubProvider
from repo_manager.providers.gitlab import GitLabProvider

__all__ = [
    "GitHubProvider",
    "GitLabProvider",
    "ProviderConfig",
    "ProviderType",
    "RepositoryProvider",
    "create_provider",
]
