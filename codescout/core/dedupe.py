"""Issue deduplication.

Lint diagnostics collapse on ``(line, message)`` and security findings on
``(location, title)``. The file path is in neither key, so two files that
report the same message on the same line merge into one entry.
"""

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from ..models import LintDiagnostic, SecurityFinding

T = TypeVar("T")


def _dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


def dedupe_lint_issues(issues: Iterable[LintDiagnostic]) -> list[LintDiagnostic]:
    """First occurrence of each ``(line, message)`` wins; order is kept."""
    return _dedupe(issues, lambda issue: (issue.line, issue.message))


def dedupe_security_issues(findings: Iterable[SecurityFinding]) -> list[SecurityFinding]:
    """First occurrence of each ``(location, title)`` wins; order is kept."""
    return _dedupe(findings, lambda finding: (finding.location, finding.title))
