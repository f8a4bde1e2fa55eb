"""
Collaborator interfaces and their default implementations.
"""

from .base import Advisor, Linter, RepositorySource
from .git_source import GitHubRepoInfo, GitRepositorySource, parse_github_url

__all__ = [
    "Advisor",
    "Linter",
    "RepositorySource",
    "GitHubRepoInfo",
    "GitRepositorySource",
    "parse_github_url",
]
