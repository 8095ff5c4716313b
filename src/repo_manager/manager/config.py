"""Settings for the repo-manager CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_manager.providers.factory import ProviderConfig, ProviderType


class ManagerSettings(BaseSettings):
    """Settings for the repo-manager CLI.

    Environment variables:
    - REPO_TOKEN     (required)
    - REPO_PROVIDER  (optional, "github" or "gitlab")
    - REPO_API_URL   (optional, defaults per provider)
    - REPO_PATH      (optional, may be given on the command line instead)
    - LOG_LEVEL      (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ManagerSettings(_env_file=path_to_env)`.
    """

    provider: ProviderType = Field(
        default=ProviderType.GITHUB,
        validation_alias="REPO_PROVIDER",
        description="Repository-hosting platform",
    )
    api_url: str = Field(
        default="",
        validation_alias="REPO_API_URL",
        description="REST API base URL; empty selects the provider's public endpoint",
    )
    token: str = Field(
        default="",
        validation_alias="REPO_TOKEN",
        description="API token used for authentication",
    )
    repository: str = Field(
        default="",
        validation_alias="REPO_PATH",
        description="'owner/repo' on GitHub, project id or 'group/project' on GitLab",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_token(self) -> ManagerSettings:
        if not self.token.strip():
            raise ValueError("REPO_TOKEN is required")
        return self

    def provider_config(
        self,
        *,
        provider: ProviderType | None = None,
        repository: str | None = None,
        api_url: str | None = None,
    ) -> ProviderConfig:
        """Build provider connection settings, letting CLI flags override the environment."""

        kind = provider or self.provider
        return ProviderConfig(
            api_url=api_url or self.api_url or kind.default_api_url,
            token=self.token,
            repository=repository or self.repository,
        )
