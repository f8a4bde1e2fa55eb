"""
Collaborator interfaces consumed by the analysis pipeline.

The pipeline never talks to ESLint, git or a language model directly; it
goes through these interfaces so each can be swapped for a fake in tests
or for a different backend in deployment.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any

from ..lint_profile import LintProfile
from ..models import Language


class Linter(ABC):
    """
    Lint engine capability.

    Implementations receive a scratch directory owned by the caller. They
    may write anything they need into it and must not keep references to
    it after returning; the caller deletes it.
    """

    @abstractmethod
    async def lint(
        self,
        content: str,
        language: Language,
        profile: LintProfile,
        workdir: Path,
    ) -> list[dict[str, Any]]:
        """
        Lint source text.

        Args:
            content: Source text to lint
            language: Language tag for the text
            profile: Rule profile to apply
            workdir: Empty scratch directory for this invocation

        Returns:
            Raw diagnostics as dicts with ``line``, ``column``, ``severity``,
            ``message`` and ``ruleId`` keys

        Raises:
            LintError: If the engine fails or its output cannot be read
        """
        pass


class RepositorySource(ABC):
    """
    Repository fetching capability.

    ``checkout`` materializes the repository's file tree and yields its
    root. Transient storage is released when the context exits, whether
    or not the body raised.
    """

    @abstractmethod
    def checkout(self, url: str) -> AbstractAsyncContextManager[Path]:
        """
        Materialize a repository.

        Args:
            url: Validated GitHub repository URL

        Returns:
            Async context manager yielding the checkout root

        Raises:
            RepositoryFetchError: If the repository cannot be fetched
        """
        pass


class Advisor(ABC):
    """Natural-language review capability."""

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def review(self, text: str) -> str | None:
        """
        Produce a prose review of ``text``.

        Returns:
            Review text, or None when no review could be produced. Failures
            must not propagate.
        """
        pass
