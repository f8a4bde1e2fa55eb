"""Core pipeline: orchestration, deduplication, errors and event logging."""

from .dedupe import dedupe_lint_issues, dedupe_security_issues
from .exceptions import (
    AdvisorError,
    ClientError,
    CodeScoutError,
    EmptyResultError,
    InvalidInputError,
    InvalidSourceError,
    LintError,
    RepositoryFetchError,
    UnsupportedLanguageError,
    ValidationError,
)
from .logging_config import configure_review_logging, get_event_logger
from .orchestrator import AnalysisOrchestrator, FileAnalysis, ReviewConfig

__all__ = [
    # Orchestration
    "AnalysisOrchestrator",
    "FileAnalysis",
    "ReviewConfig",
    # Deduplication
    "dedupe_lint_issues",
    "dedupe_security_issues",
    # Logging
    "configure_review_logging",
    "get_event_logger",
    # Exceptions
    "CodeScoutError",
    "ValidationError",
    "InvalidInputError",
    "UnsupportedLanguageError",
    "InvalidSourceError",
    "EmptyResultError",
    "ClientError",
    "RepositoryFetchError",
    "LintError",
    "AdvisorError",
]
