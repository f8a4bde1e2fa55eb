"""Scanners for language detection, lint normalization, security patterns and repository files."""

from .language import classify, is_lintable, language_for_path
from .lint_adapter import LintAdapter
from .repository_collector import RepositoryFileCollector
from .security_patterns import SECURITY_RULES, SecurityRule, offset_to_line
from .security_scanner import SecurityPatternScanner

__all__ = [
    "classify",
    "is_lintable",
    "language_for_path",
    "LintAdapter",
    "RepositoryFileCollector",
    "SECURITY_RULES",
    "SecurityRule",
    "offset_to_line",
    "SecurityPatternScanner",
]
