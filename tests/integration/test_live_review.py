"""End-to-end review against real collaborators."""

import pytest

from codescout.clients import ESLintLinter
from codescout.core import AnalysisOrchestrator, RepositoryFetchError
from codescout.lint_profile import DEFAULT_LINT_PROFILE
from codescout.models import Language
from codescout.providers import GitRepositorySource
from codescout.scanners import LintAdapter, RepositoryFileCollector

# Small, stable public repository
PUBLIC_REPO = "https://github.com/octocat/Hello-World"


@pytest.mark.integration
class TestESLintIntegration:
    """Run the real ESLint CLI."""

    @pytest.mark.asyncio
    async def test_flags_undefined_and_console(self, require_eslint):
        adapter = LintAdapter(ESLintLinter())

        diagnostics = await adapter.lint("console.log(missing)\n", Language.JS, "a.js")

        rules = {d.rule_id for d in diagnostics}
        assert "no-console" in rules
        assert "no-undef" in rules
        assert "semi" in rules

    @pytest.mark.asyncio
    async def test_syntax_error_yields_nothing(self, require_eslint):
        adapter = LintAdapter(ESLintLinter())
        assert await adapter.lint("function (", Language.JS) == []

    @pytest.mark.asyncio
    async def test_lint_profile_is_fixed(self, require_eslint, tmp_path):
        messages = await ESLintLinter().lint("var a = 1;\n", Language.JS, DEFAULT_LINT_PROFILE, tmp_path)
        assert [m["ruleId"] for m in messages] == ["no-unused-vars"]

    @pytest.mark.asyncio
    async def test_recommended_rules_apply(self, require_eslint, tmp_path):
        messages = await ESLintLinter().lint(
            "export const a = {x: 1, x: 2};\n", Language.JS, DEFAULT_LINT_PROFILE, tmp_path
        )
        assert "no-dupe-keys" in {m["ruleId"] for m in messages}


@pytest.mark.integration
@pytest.mark.slow
class TestRepositoryIntegration:
    """Clone and review a real repository."""

    @pytest.mark.asyncio
    async def test_clone_and_collect(self, skip_if_no_network, require_git):
        collector = RepositoryFileCollector(GitRepositorySource(auth_token=""))
        files = await collector.collect(PUBLIC_REPO)
        assert isinstance(files, dict)

    @pytest.mark.asyncio
    async def test_missing_repository_fails(self, skip_if_no_network, require_git):
        orchestrator = AnalysisOrchestrator(
            lint_adapter=LintAdapter(ESLintLinter()),
            collector=RepositoryFileCollector(GitRepositorySource(auth_token="")),
        )

        with pytest.raises(RepositoryFetchError):
            await orchestrator.analyze_repository("https://github.com/octocat/this-repo-does-not-exist-4242")
