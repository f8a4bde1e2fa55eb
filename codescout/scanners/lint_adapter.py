"""Lint adapter: runs the lint engine and normalizes its diagnostics."""

import logging
import tempfile
from pathlib import Path
from typing import Any

from ..lint_profile import DEFAULT_LINT_PROFILE, LintProfile
from ..models import SNIPPET_PATH, Language, LintDiagnostic
from ..providers.base import Linter
from .language import is_lintable

logger = logging.getLogger(__name__)


class LintAdapter:
    """Uniform lint interface over an external lint engine.

    Each call gets its own scratch directory, removed on every exit path.
    A failing engine yields no diagnostics for that file instead of an
    exception, so one unparseable file never stops a batch.
    """

    def __init__(self, linter: Linter, profile: LintProfile = DEFAULT_LINT_PROFILE) -> None:
        self.linter = linter
        self.profile = profile

    async def lint(
        self, content: str, language: Language, file_path: str = SNIPPET_PATH
    ) -> list[LintDiagnostic]:
        """Lint one unit of source.

        Args:
            content: Source text
            language: Language of the text; non-lintable languages return []
            file_path: Path recorded on each diagnostic

        Returns:
            Normalized diagnostics in the engine's order
        """
        if not is_lintable(language):
            return []

        try:
            with tempfile.TemporaryDirectory(prefix="codescout_lint_") as temp_dir:
                raw = await self.linter.lint(content, language, self.profile, Path(temp_dir))
        except Exception as e:
            logger.warning(f"Lint failed for {file_path}: {e}")
            return []

        diagnostics = []
        for message in raw:
            try:
                diagnostics.append(normalize_diagnostic(message, file_path))
            except (TypeError, ValueError) as e:
                logger.debug(f"Dropping malformed lint message in {file_path}: {e}")

        return diagnostics


def normalize_diagnostic(message: dict[str, Any], file_path: str) -> LintDiagnostic:
    """Convert one raw engine message into a LintDiagnostic.

    ESLint reports severity as 2 (error) or 1 (warning); string forms are
    accepted too. Anything that is not an error is a warning.
    """
    severity = message.get("severity")
    is_error = severity == 2 or (isinstance(severity, str) and severity.lower() == "error")

    return LintDiagnostic(
        file_path=file_path,
        line=int(message.get("line") or 0),
        column=int(message.get("column") or 0),
        severity="error" if is_error else "warning",
        message=str(message.get("message", "")),
        rule_id=message.get("ruleId"),
    )
