"""Shared fixtures and collaborator fakes for CodeScout tests."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import pytest

from codescout.core.exceptions import LintError, RepositoryFetchError
from codescout.core.orchestrator import AnalysisOrchestrator
from codescout.providers.base import Advisor, Linter, RepositorySource
from codescout.scanners.lint_adapter import LintAdapter
from codescout.scanners.repository_collector import RepositoryFileCollector


class FakeLinter(Linter):
    """Linter returning canned messages; content containing BROKEN fails."""

    def __init__(self, messages: list[dict[str, Any]] | None = None) -> None:
        self.messages = messages if messages is not None else [
            {"line": 1, "column": 1, "severity": 1, "message": "Unexpected console statement.", "ruleId": "no-console"},
        ]
        self.calls: list[tuple[str, Any, Path]] = []

    async def lint(self, content, language, profile, workdir):
        self.calls.append((content, language, workdir))
        assert workdir.is_dir()
        if "BROKEN" in content:
            raise LintError("Parsing error: Unexpected token")
        return list(self.messages)


class FakeRepositorySource(RepositorySource):
    """Source that 'checks out' an existing directory."""

    def __init__(self, root: Path | None = None, error: Exception | None = None) -> None:
        self.root = root
        self.error = error
        self.checkouts: list[str] = []
        self.released = 0

    @asynccontextmanager
    async def checkout(self, url):
        self.checkouts.append(url)
        if self.error is not None:
            raise self.error
        try:
            yield self.root
        finally:
            self.released += 1


class FakeAdvisor(Advisor):
    """Advisor echoing a fixed review, or raising when told to."""

    def __init__(self, text: str | None = "Looks fine.", fail: bool = False) -> None:
        self.text = text
        self.fail = fail
        self.inputs: list[str] = []

    async def review(self, text):
        self.inputs.append(text)
        if self.fail:
            raise RuntimeError("upstream unavailable")
        return self.text


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def fake_linter():
    return FakeLinter()


@pytest.fixture
def fake_advisor():
    return FakeAdvisor()


@pytest.fixture
def make_orchestrator(fake_linter, fake_advisor):
    """Build an orchestrator over a repository tree written to tmp_path."""

    def _make(root: Path | None = None, linter=None, advisor=None, source=None, **kwargs):
        source = source or FakeRepositorySource(root)
        return AnalysisOrchestrator(
            lint_adapter=LintAdapter(linter or fake_linter),
            collector=RepositoryFileCollector(source),
            advisor=advisor if advisor is not None else fake_advisor,
            **kwargs,
        )

    return _make


@pytest.fixture
def failing_source():
    return FakeRepositorySource(error=RepositoryFetchError("Failed to clone repository: not found"))
