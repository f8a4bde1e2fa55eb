"""Git-backed repository source.

Clones a GitHub repository into a temporary directory for the lifetime of
an ``async with`` block.
"""

import asyncio
import logging
import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from ..constants import CLONE_TIMEOUT
from ..core.exceptions import InvalidSourceError, RepositoryFetchError
from .base import RepositorySource

logger = logging.getLogger(__name__)


@dataclass
class GitHubRepoInfo:
    """Owner, name and optional ref of a GitHub repository."""
    owner: str
    repo: str
    branch: str | None = None
    commit: str | None = None

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}.git"

    def clone_url_with_token(self, token: str) -> str:
        return f"https://{token}@github.com/{self.owner}/{self.repo}.git"


def parse_github_url(url: str) -> GitHubRepoInfo:
    """Split a GitHub repository reference into its parts.

    Accepts https (optionally www.) URLs with or without a trailing
    ``.git``, ``/tree/<branch>`` and ``/commit/<sha>`` suffixes, and the
    ``git@github.com:owner/repo.git`` SSH form.

    Raises:
        InvalidSourceError: If the URL is not a GitHub repository reference
    """
    url = url.strip().rstrip('/')

    # SSH form
    if url.startswith('git@github.com:'):
        parts = [p for p in url.replace('git@github.com:', '').split('/') if p]
        if len(parts) >= 2:
            return GitHubRepoInfo(owner=parts[0], repo=parts[1].removesuffix('.git'))
        raise InvalidSourceError(f"Invalid GitHub SSH URL: {url}")

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or parsed.netloc not in ('github.com', 'www.github.com'):
        raise InvalidSourceError(f"Not a GitHub URL: {url}")

    parts = [p for p in parsed.path.split('/') if p]
    if len(parts) < 2:
        raise InvalidSourceError(f"Invalid GitHub URL format: {url}")

    owner, repo = parts[0], parts[1].removesuffix('.git')
    branch = None
    commit = None

    # Optional ref after owner/repo
    if len(parts) > 3:
        if parts[2] == 'tree':
            branch = '/'.join(parts[3:])
        elif parts[2] == 'commit':
            commit = parts[3]

    return GitHubRepoInfo(owner=owner, repo=repo, branch=branch, commit=commit)


class GitRepositorySource(RepositorySource):
    """Repository source that shallow-clones with the git CLI."""

    def __init__(self, auth_token: str | None = None, timeout: float = CLONE_TIMEOUT) -> None:
        self.auth_token = auth_token if auth_token is not None else os.getenv('GITHUB_TOKEN')
        self.timeout = timeout

    @asynccontextmanager
    async def checkout(self, url: str) -> AsyncIterator[Path]:
        repo_info = parse_github_url(url)

        with tempfile.TemporaryDirectory(prefix=f"codescout_{repo_info.owner}_{repo_info.repo}_") as temp_dir:
            repo_path = Path(temp_dir) / "repo"
            await self.clone_repository(repo_info, repo_path)
            yield repo_path

        logger.debug(f"Released checkout of {repo_info.owner}/{repo_info.repo}")

    async def clone_repository(self, repo_info: GitHubRepoInfo, target_dir: Path) -> None:
        """Shallow-clone the repository into ``target_dir``.

        Raises:
            RepositoryFetchError: If git exits non-zero or cannot be run
        """
        if self.auth_token:
            clone_url = repo_info.clone_url_with_token(self.auth_token)
        else:
            clone_url = repo_info.clone_url

        cmd = ["git", "clone", "--depth", "1"]

        if repo_info.branch:
            cmd.extend(["--branch", repo_info.branch])

        cmd.extend([clone_url, str(target_dir)])

        logger.info(f"Cloning {repo_info.owner}/{repo_info.repo} into {target_dir}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                # Fail instead of waiting on a credential prompt
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except OSError as e:
            raise RepositoryFetchError(f"Clone error: {e}") from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise RepositoryFetchError(f"Git clone timed out after {self.timeout}s") from None

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip()
            # git echoes the URL, token included
            if self.auth_token:
                error_msg = error_msg.replace(self.auth_token, "***")
            raise RepositoryFetchError(f"Failed to clone repository: {error_msg}")

        if repo_info.commit:
            await self._checkout_commit(target_dir, repo_info.commit)

    async def _checkout_commit(self, target_dir: Path, commit: str) -> None:
        """Fetch and check out a specific commit in a shallow clone."""
        for cmd in (
            ["git", "-C", str(target_dir), "fetch", "--depth", "1", "origin", commit],
            ["git", "-C", str(target_dir), "checkout", "--quiet", commit],
        ):
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate()
            if process.returncode != 0:
                raise RepositoryFetchError(
                    f"Failed to check out commit {commit}: {stderr.decode(errors='replace').strip()}"
                )
