"""Pydantic models for analysis inputs and results.

This module defines the data models shared by the scanners, the
orchestrator and the HTTP layer: the unit of source being analyzed,
the two kinds of issue the pipeline produces, and the aggregate report
returned for one request.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SNIPPET_PATH = "‹snippet›"


class Language(str, Enum):
    """Languages and dialects the pipeline knows about."""

    JS = "js"
    JSX = "jsx"
    TS = "ts"
    TSX = "tsx"
    PY = "py"
    # Only produced by the snippet classifier; always rejected.
    HTML = "html"
    CSS = "css"
    UNKNOWN = "unknown"


class SourceUnit(BaseModel):
    """One file or snippet's worth of text plus its language.

    Attributes:
        path: Path relative to the repository root, or ``‹snippet›`` for
            ad-hoc input.
        language: Language the unit is analyzed as.
        content: UTF-8 source text.
    """

    model_config = ConfigDict(frozen=True)

    path: str = SNIPPET_PATH
    language: Language
    content: str


class SecurityFinding(BaseModel):
    """A single security-pattern match.

    Attributes:
        rule_id: Identifier of the catalog rule that matched (e.g. "CS001").
        title: Short human-readable title of the rule.
        description: Explanation of the risk.
        file_path: File the match was found in.
        line: 1-based line number of the match start.
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    title: str
    description: str
    file_path: str = SNIPPET_PATH
    line: int

    @property
    def location(self) -> str:
        return f"Line {self.line}"

    def to_wire(self, include_path: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "location": self.location,
        }
        if include_path:
            data["filePath"] = self.file_path
        return data


class LintDiagnostic(BaseModel):
    """A single problem reported by the lint engine."""

    model_config = ConfigDict(frozen=True)

    file_path: str = SNIPPET_PATH
    line: int
    column: int
    severity: Literal["error", "warning"]
    message: str
    rule_id: str | None = None

    def to_wire(self, include_path: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
            "message": self.message,
            "ruleId": self.rule_id,
        }
        if include_path:
            data["filePath"] = self.file_path
        return data


class AnalysisReport(BaseModel):
    """Aggregate result for one review request.

    Attributes:
        lint_issues: Diagnostics in collection order, then linter order.
        security_issues: Findings in collection order, then catalog order,
            then match order.
        processed_files: Paths whose pipeline ran to completion.
        file_count: Number of files collection yielded, including any
            that later failed.
        advisory_text: Prose review of the input, if one was produced.
        repository_url: Set for repository requests only.
    """

    lint_issues: list[LintDiagnostic] = Field(default_factory=list)
    security_issues: list[SecurityFinding] = Field(default_factory=list)
    processed_files: list[str] = Field(default_factory=list)
    file_count: int = 0
    advisory_text: str | None = None
    repository_url: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """Render the report in the response shape the UI consumes."""
        is_repo = self.repository_url is not None
        data: dict[str, Any] = {}
        if is_repo:
            data["repositoryUrl"] = self.repository_url
            data["fileCount"] = self.file_count
            data["processedFiles"] = list(self.processed_files)
        data["lintIssues"] = [issue.to_wire(include_path=is_repo) for issue in self.lint_issues]
        data["securityIssues"] = [
            finding.to_wire(include_path=is_repo) for finding in self.security_issues
        ]
        data["aiReview"] = self.advisory_text
        return data
