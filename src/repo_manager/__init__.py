"""repo-manager.

Provisions labels, milestones, issues and issue dependencies on GitHub or
GitLab from declarative JSON documents.
"""

__version__ = "0.1.0"

from repo_manager.errors import ProviderError
from repo_manager.models import Project
from repo_manager.providers import RepositoryProvider, create_provider

__all__ = ["__version__", "Project", "ProviderError", "RepositoryProvider", "create_provider"]
