"""Analysis orchestration for snippets and repositories.

A snippet runs through classify, lint + scan, and review. A repository is
collected first, then every file runs the same lint + scan pipeline as an
independent task; one failing file is logged and left out of
``processed_files`` while the rest of the batch carries on.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import ADVISOR_SAMPLE_SIZE, MAX_CONCURRENCY
from ..models import (
    SNIPPET_PATH,
    AnalysisReport,
    LintDiagnostic,
    SecurityFinding,
    SourceUnit,
)
from ..providers.base import Advisor
from ..scanners.language import SNIPPET_LANGUAGES, classify, is_lintable, language_for_path
from ..scanners.security_scanner import SecurityPatternScanner
from .dedupe import dedupe_lint_issues, dedupe_security_issues
from .exceptions import EmptyResultError, InvalidInputError, InvalidSourceError, UnsupportedLanguageError
from .logging_config import get_event_logger

if TYPE_CHECKING:
    from ..scanners.lint_adapter import LintAdapter
    from ..scanners.repository_collector import RepositoryFileCollector

logger = logging.getLogger(__name__)


@dataclass
class ReviewConfig:
    """Per-orchestrator tuning knobs."""
    max_concurrency: int = MAX_CONCURRENCY
    advisor_sample_size: int = ADVISOR_SAMPLE_SIZE


@dataclass
class FileAnalysis:
    """Result of one file's lint + scan pipeline."""
    path: str
    lint_issues: list[LintDiagnostic] = field(default_factory=list)
    security_issues: list[SecurityFinding] = field(default_factory=list)


class AnalysisOrchestrator:
    """Top-level driver for review requests."""

    def __init__(
        self,
        lint_adapter: "LintAdapter",
        collector: "RepositoryFileCollector",
        advisor: Advisor | None = None,
        scanner: SecurityPatternScanner | None = None,
        config: ReviewConfig | None = None,
    ) -> None:
        self.lint_adapter = lint_adapter
        self.collector = collector
        self.advisor = advisor
        self.scanner = scanner or SecurityPatternScanner()
        self.config = config or ReviewConfig()
        self.event_logger = get_event_logger()

    async def analyze_snippet(self, content: str) -> AnalysisReport:
        """Analyze a free-text snippet.

        Raises:
            InvalidInputError: If ``content`` is empty
            UnsupportedLanguageError: If the snippet is not Python or JavaScript/JSX
        """
        if not content or not content.strip():
            raise InvalidInputError("No content provided")

        language = classify(content)
        if language not in SNIPPET_LANGUAGES:
            raise UnsupportedLanguageError(
                "Unsupported file type. Only Python and JavaScript/JSX are supported.",
                language=language.value,
            )

        logger.info(f"Analyzing snippet as {language.value}")
        unit = SourceUnit(path=SNIPPET_PATH, language=language, content=content)

        advice = asyncio.create_task(self._advise(content))
        try:
            analysis = await self._analyze_file(unit)
        except BaseException:
            advice.cancel()
            await asyncio.gather(advice, return_exceptions=True)
            raise
        advisory_text = await advice

        return AnalysisReport(
            lint_issues=dedupe_lint_issues(analysis.lint_issues),
            security_issues=dedupe_security_issues(analysis.security_issues),
            processed_files=[unit.path],
            file_count=1,
            advisory_text=advisory_text,
        )

    async def analyze_repository(self, url: str) -> AnalysisReport:
        """Analyze every supported file of a GitHub repository.

        Raises:
            InvalidInputError: If ``url`` is empty
            InvalidSourceError: If ``url`` is not a GitHub repository reference
            EmptyResultError: If the repository has no supported files
            RepositoryFetchError: If the repository cannot be fetched
        """
        if not url or not url.strip():
            raise InvalidInputError("No content provided")

        url = url.strip()
        if "github.com" not in url:
            raise InvalidSourceError(
                "Invalid GitHub URL. Please provide a valid GitHub repository URL."
            )
        self.collector.validate_url(url)

        logger.info(f"Processing GitHub repository: {url}")
        files = await self.collector.collect(url)

        if not files:
            raise EmptyResultError("No JavaScript or Python files found in the repository.")

        units = [
            SourceUnit(path=path, language=language_for_path(path), content=content)
            for path, content in files.items()
        ]

        logger.info(f"Starting analysis of {len(units)} files")
        analyses, advisory_text = await asyncio.gather(
            self._fan_out(units),
            self._advise(self._sample_for_review(files)),
        )

        report = AnalysisReport(file_count=len(units), repository_url=url, advisory_text=advisory_text)
        for analysis in analyses:
            report.processed_files.append(analysis.path)
            report.lint_issues.extend(analysis.lint_issues)
            report.security_issues.extend(analysis.security_issues)

        logger.info(
            f"Analysis complete. Found {len(report.lint_issues)} lint issues and "
            f"{len(report.security_issues)} security issues"
        )
        self.event_logger.info(
            "repository analyzed",
            extra={
                "event": "repository_analyzed",
                "repository": url,
                "file_count": report.file_count,
                "processed_count": len(report.processed_files),
                "lint_count": len(report.lint_issues),
                "security_count": len(report.security_issues),
            },
        )

        report.lint_issues = dedupe_lint_issues(report.lint_issues)
        report.security_issues = dedupe_security_issues(report.security_issues)
        return report

    async def _fan_out(self, units: list[SourceUnit]) -> list[FileAnalysis]:
        """Run every unit's pipeline; return successes in input order."""
        semaphore = asyncio.Semaphore(max(1, self.config.max_concurrency))

        async def run(unit: SourceUnit) -> FileAnalysis:
            async with semaphore:
                return await self._analyze_file(unit)

        # gather keeps input order regardless of completion order
        results = await asyncio.gather(*(run(unit) for unit in units), return_exceptions=True)

        analyses: list[FileAnalysis] = []
        for unit, result in zip(units, results):
            if isinstance(result, Exception):
                logger.error(f"Error processing file {unit.path}: {result}", exc_info=result)
                self.event_logger.error(
                    "file failed",
                    extra={
                        "event": "file_failed",
                        "file_path": unit.path,
                        "language": unit.language.value,
                        "error": str(result),
                    },
                )
                continue
            if isinstance(result, BaseException):
                raise result
            analyses.append(result)

        return analyses

    async def _analyze_file(self, unit: SourceUnit) -> FileAnalysis:
        """Lint (when the language is lintable) and scan one unit."""
        logger.debug(f"Analyzing file: {unit.path}")
        analysis = FileAnalysis(path=unit.path)

        if is_lintable(unit.language):
            analysis.lint_issues = await self.lint_adapter.lint(
                unit.content, unit.language, unit.path
            )

        analysis.security_issues = self.scanner.scan(unit.content, unit.language, unit.path)

        self.event_logger.info(
            "file analyzed",
            extra={
                "event": "file_analyzed",
                "file_path": unit.path,
                "language": unit.language.value,
                "lint_count": len(analysis.lint_issues),
                "security_count": len(analysis.security_issues),
            },
        )
        return analysis

    def _sample_for_review(self, files: dict[str, str]) -> str:
        """Concatenate the first few collected files, each under a path marker."""
        sample = list(files.items())[: self.config.advisor_sample_size]
        return "\n\n".join(f"// File: {path}\n\n{content}" for path, content in sample)

    async def _advise(self, text: str) -> str | None:
        if self.advisor is None or not text:
            return None
        try:
            return await self.advisor.review(text)
        except Exception as e:
            logger.error(f"Error getting AI review: {e}")
            return None
