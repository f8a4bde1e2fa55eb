"""Tests for issue deduplication."""

from codescout.core.dedupe import dedupe_lint_issues, dedupe_security_issues
from codescout.models import LintDiagnostic, SecurityFinding


def lint(line, message, file_path="a.js", severity="warning", column=1):
    return LintDiagnostic(
        file_path=file_path, line=line, column=column, severity=severity, message=message
    )


def finding(line, title, file_path="a.js", rule_id="CS001"):
    return SecurityFinding(
        rule_id=rule_id, title=title, description="d", file_path=file_path, line=line
    )


class TestDedupeLintIssues:
    """Test lint diagnostic deduplication."""

    def test_empty(self):
        assert dedupe_lint_issues([]) == []

    def test_duplicates_collapse(self):
        issues = [lint(1, "m"), lint(1, "m"), lint(2, "m")]
        assert [(i.line, i.message) for i in dedupe_lint_issues(issues)] == [(1, "m"), (2, "m")]

    def test_first_occurrence_wins(self):
        first = lint(3, "Missing semicolon.", column=5, severity="error")
        second = lint(3, "Missing semicolon.", column=9, severity="warning")
        assert dedupe_lint_issues([first, second]) == [first]

    def test_order_preserved(self):
        issues = [lint(9, "z"), lint(1, "a"), lint(9, "z"), lint(5, "m")]
        assert [i.line for i in dedupe_lint_issues(issues)] == [9, 1, 5]

    def test_same_message_in_different_files_merges(self):
        issues = [lint(1, "m", file_path="a.js"), lint(1, "m", file_path="b.js")]
        result = dedupe_lint_issues(issues)
        assert len(result) == 1
        assert result[0].file_path == "a.js"

    def test_idempotent(self):
        issues = [lint(1, "m"), lint(1, "m"), lint(2, "n"), lint(2, "n", file_path="b.js")]
        once = dedupe_lint_issues(issues)
        assert dedupe_lint_issues(once) == once

    def test_accepts_generator(self):
        assert len(dedupe_lint_issues(lint(n % 2, "m") for n in range(5))) == 2


class TestDedupeSecurityIssues:
    """Test security finding deduplication."""

    def test_duplicates_collapse_on_location_and_title(self):
        findings = [
            finding(1, "Dangerous use of eval()"),
            finding(1, "Dangerous use of eval()"),
            finding(1, "Potential XSS vulnerability"),
        ]
        result = dedupe_security_issues(findings)
        assert [(f.location, f.title) for f in result] == [
            ("Line 1", "Dangerous use of eval()"),
            ("Line 1", "Potential XSS vulnerability"),
        ]

    def test_cross_file_merge(self):
        findings = [
            finding(4, "Potential hardcoded credentials", file_path="a.py"),
            finding(4, "Potential hardcoded credentials", file_path="b.py"),
            finding(5, "Potential hardcoded credentials", file_path="b.py"),
        ]
        result = dedupe_security_issues(findings)
        assert [(f.file_path, f.line) for f in result] == [("a.py", 4), ("b.py", 5)]

    def test_idempotent(self):
        findings = [finding(1, "t"), finding(1, "t"), finding(2, "t")]
        once = dedupe_security_issues(findings)
        assert dedupe_security_issues(once) == once
