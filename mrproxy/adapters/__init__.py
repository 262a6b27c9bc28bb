"""GitLab API adapters (base and implementation)."""

from mrproxy.adapters.base import GitLabError, MergeRequestClient, ProjectInfo
from mrproxy.adapters.gitlab import GitLabAdapter

__all__ = ["GitLabAdapter", "GitLabError", "MergeRequestClient", "ProjectInfo"]
