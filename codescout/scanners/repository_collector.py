"""Collects analyzable source files from a GitHub repository."""

import logging
import os
from pathlib import Path

from ..constants import MAX_FILE_SIZE, MAX_FILES
from ..providers.base import RepositorySource
from ..providers.git_source import GitHubRepoInfo, parse_github_url
from .language import EXTENSION_LANGUAGES

logger = logging.getLogger(__name__)


class RepositoryFileCollector:
    """Fetches a repository and returns its supported source files."""

    # Directories pruned from the walk; their contents are never visited
    EXCLUDED_DIRECTORIES = frozenset({
        "node_modules",
        ".git",
        "dist",
        "build",
        "out",
        ".next",
        "coverage",
        "__pycache__",
        "venv",
        "env",
        ".venv",
    })

    SUPPORTED_EXTENSIONS = frozenset(EXTENSION_LANGUAGES)

    def __init__(
        self,
        source: RepositorySource,
        max_files: int = MAX_FILES,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> None:
        self.source = source
        self.max_files = max_files
        self.max_file_size = max_file_size

    def validate_url(self, url: str) -> GitHubRepoInfo:
        """Parse ``url``, raising InvalidSourceError if it is not a GitHub repo."""
        return parse_github_url(url)

    async def collect(self, url: str) -> dict[str, str]:
        """Fetch ``url`` and read every supported file.

        Args:
            url: GitHub repository URL

        Returns:
            Mapping of POSIX path relative to the repository root to file
            contents, in walk order. May be empty.

        Raises:
            InvalidSourceError: If the URL is not a GitHub repository reference
            RepositoryFetchError: If the repository cannot be fetched
        """
        repo_info = self.validate_url(url)

        async with self.source.checkout(url) as root:
            files = self.read_tree(root)

        logger.info(f"Collected {len(files)} files from {repo_info.owner}/{repo_info.repo}")
        return files

    def read_tree(self, root: Path) -> dict[str, str]:
        """Read supported files under ``root``, pruning excluded directories."""
        files: dict[str, str] = {}

        for file_path in self.iter_source_files(root):
            relative_path = file_path.relative_to(root).as_posix()

            try:
                if file_path.stat().st_size > self.max_file_size:
                    logger.warning(f"Skipping {relative_path}: larger than {self.max_file_size} bytes")
                    continue
                files[relative_path] = file_path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.error(f"Error reading file {relative_path}: {e}")
                continue

            if len(files) >= self.max_files:
                logger.warning(f"Limiting collection to {self.max_files} files in {root}")
                break

        return files

    def iter_source_files(self, root: Path):
        """Yield supported files under ``root`` in a stable order."""
        for dirpath, dirnames, filenames in os.walk(root):
            # Prune in place so os.walk never descends into excluded directories
            dirnames[:] = sorted(d for d in dirnames if d not in self.EXCLUDED_DIRECTORIES)

            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if path.suffix.lower() in self.SUPPORTED_EXTENSIONS and path.is_file():
                    yield path
