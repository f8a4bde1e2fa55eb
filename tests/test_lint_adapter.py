"""Tests for the lint adapter."""

import pytest

from codescout.lint_profile import DEFAULT_LINT_PROFILE
from codescout.models import Language
from codescout.scanners.lint_adapter import LintAdapter, normalize_diagnostic

from .conftest import FakeLinter


class ExplodingLinter(FakeLinter):
    """Linter that fails after writing into its scratch directory."""

    async def lint(self, content, language, profile, workdir):
        self.calls.append((content, language, workdir))
        (workdir / "staged.js").write_text(content)
        raise RuntimeError("engine crashed")


class TestNormalizeDiagnostic:
    """Test raw message normalization."""

    def test_eslint_error(self):
        diagnostic = normalize_diagnostic(
            {"line": 3, "column": 7, "severity": 2, "message": "'x' is not defined.", "ruleId": "no-undef"},
            "a.js",
        )
        assert diagnostic.severity == "error"
        assert diagnostic.line == 3
        assert diagnostic.column == 7
        assert diagnostic.rule_id == "no-undef"
        assert diagnostic.file_path == "a.js"

    def test_eslint_warning(self):
        diagnostic = normalize_diagnostic({"line": 1, "column": 1, "severity": 1, "message": "m"}, "a.js")
        assert diagnostic.severity == "warning"
        assert diagnostic.rule_id is None

    def test_string_severity(self):
        assert normalize_diagnostic({"severity": "ERROR", "message": "m"}, "a.js").severity == "error"
        assert normalize_diagnostic({"severity": "info", "message": "m"}, "a.js").severity == "warning"

    def test_missing_position_defaults_to_zero(self):
        diagnostic = normalize_diagnostic({"severity": 2, "message": "m"}, "a.js")
        assert diagnostic.line == 0
        assert diagnostic.column == 0

    def test_wire_shape(self):
        diagnostic = normalize_diagnostic(
            {"line": 2, "column": 5, "severity": 1, "message": "Missing semicolon.", "ruleId": "semi"},
            "src/a.js",
        )
        assert diagnostic.to_wire() == {
            "line": 2,
            "column": 5,
            "severity": "warning",
            "message": "Missing semicolon.",
            "ruleId": "semi",
        }
        assert diagnostic.to_wire(include_path=True)["filePath"] == "src/a.js"


class TestLintAdapter:
    """Test the LintAdapter class."""

    def test_default_profile(self):
        adapter = LintAdapter(FakeLinter())
        assert adapter.profile is DEFAULT_LINT_PROFILE
        assert adapter.profile.rules["no-undef"] == "error"
        assert adapter.profile.rules["semi"] == ["error", "always"]

    @pytest.mark.asyncio
    async def test_lint_normalizes_messages(self):
        linter = FakeLinter([
            {"line": 1, "column": 1, "severity": 1, "message": "Unexpected console statement.", "ruleId": "no-console"},
            {"line": 2, "column": 4, "severity": 2, "message": "'y' is not defined.", "ruleId": "no-undef"},
        ])
        adapter = LintAdapter(linter)

        diagnostics = await adapter.lint("console.log(1)\ny", Language.JS, "src/a.js")

        assert [(d.line, d.severity, d.rule_id) for d in diagnostics] == [
            (1, "warning", "no-console"),
            (2, "error", "no-undef"),
        ]
        assert all(d.file_path == "src/a.js" for d in diagnostics)

    @pytest.mark.asyncio
    async def test_scratch_directory_removed_after_success(self):
        linter = FakeLinter()
        await LintAdapter(linter).lint("let a = 1;", Language.JS)

        workdir = linter.calls[0][2]
        assert not workdir.exists()

    @pytest.mark.asyncio
    async def test_failure_yields_no_diagnostics_and_cleans_up(self):
        linter = ExplodingLinter()
        diagnostics = await LintAdapter(linter).lint("let a = 1;", Language.JSX, "a.jsx")

        assert diagnostics == []
        workdir = linter.calls[0][2]
        assert not workdir.exists()

    @pytest.mark.asyncio
    async def test_parse_failure_yields_no_diagnostics(self):
        diagnostics = await LintAdapter(FakeLinter()).lint("BROKEN {{{", Language.JS)
        assert diagnostics == []

    @pytest.mark.asyncio
    async def test_each_call_gets_fresh_directory(self):
        linter = FakeLinter()
        adapter = LintAdapter(linter)
        await adapter.lint("a", Language.JS)
        await adapter.lint("b", Language.JSX)
        assert linter.calls[0][2] != linter.calls[1][2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("language", [
        Language.PY, Language.TS, Language.TSX, Language.HTML, Language.CSS, Language.UNKNOWN,
    ])
    async def test_non_lintable_languages_skip_engine(self, language):
        linter = FakeLinter()
        assert await LintAdapter(linter).lint("x = 1", language) == []
        assert linter.calls == []

    @pytest.mark.asyncio
    async def test_malformed_message_dropped(self):
        linter = FakeLinter([
            {"line": "not-a-number", "severity": 2, "message": "bad"},
            {"line": 4, "column": 1, "severity": 2, "message": "good"},
        ])
        diagnostics = await LintAdapter(linter).lint("x", Language.JS)
        assert [d.message for d in diagnostics] == ["good"]
