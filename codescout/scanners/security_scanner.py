"""Regex security-pattern scanner."""

import logging
from collections.abc import Sequence

from ..models import SNIPPET_PATH, Language, SecurityFinding
from .security_patterns import SECURITY_RULES, SecurityRule, offset_to_line

logger = logging.getLogger(__name__)


class SecurityPatternScanner:
    """Scanner that matches the security rule catalog against source text."""

    def __init__(self, rules: Sequence[SecurityRule] = SECURITY_RULES) -> None:
        self.rules = rules

    def scan(
        self, content: str, language: Language, file_path: str = SNIPPET_PATH
    ) -> list[SecurityFinding]:
        """Scan ``content`` with every rule that applies to ``language``.

        Findings come out in catalog order, then match order within a rule.
        An empty list is a normal result.

        Args:
            content: Source text to scan
            language: Language the text is written in
            file_path: Path recorded on each finding

        Returns:
            List of findings, one per non-overlapping match
        """
        findings: list[SecurityFinding] = []

        for rule in self.rules:
            if not rule.applies_to(language):
                continue

            for match in rule.pattern.finditer(content):
                findings.append(
                    SecurityFinding(
                        rule_id=rule.rule_id,
                        title=rule.title,
                        description=rule.description,
                        file_path=file_path,
                        line=offset_to_line(content, match.start()),
                    )
                )

        if findings:
            logger.debug(f"Found {len(findings)} security issues in {file_path}")
        return findings
