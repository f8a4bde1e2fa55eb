"""
Security pattern catalog for regex-based source scanning.

Each rule pairs a regular expression with the languages it is meaningful
for. The catalog is an immutable tuple built once at import time and
shared by every scan; nothing mutates it at request time.

Rules match text, not syntax: a match inside a comment or string literal
is still reported. Findings are emitted in catalog order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import Language

_SCRIPT = frozenset({Language.JS, Language.JSX, Language.TS, Language.TSX})
_COMPONENT = frozenset({Language.JSX, Language.TSX})
_PYTHON = frozenset({Language.PY})
_SCRIPT_AND_PYTHON = _SCRIPT | _PYTHON


@dataclass(frozen=True)
class SecurityRule:
    """A regex security rule.

    Attributes:
        rule_id: Stable identifier (e.g., "CS001").
        pattern: Compiled expression; every non-overlapping match is a finding.
        title: Short human-readable title shown to the user.
        description: Why the construct is risky.
        languages: Languages the rule applies to, or ``None`` for all.
        cwe_id: Optional CWE reference such as "CWE-95".
    """

    rule_id: str
    pattern: re.Pattern[str]
    title: str
    description: str
    languages: frozenset[Language] | None = None
    cwe_id: str | None = None

    def applies_to(self, language: Language) -> bool:
        return self.languages is None or language in self.languages


# ---------------------------------------------------------------------------
# Script (JavaScript / TypeScript) and shared rules
# ---------------------------------------------------------------------------

SECURITY_RULES: tuple[SecurityRule, ...] = (
    SecurityRule(
        rule_id="CS001",
        pattern=re.compile(r"eval\s*\("),
        title="Dangerous use of eval()",
        description="The eval() function can execute arbitrary code, posing a security risk.",
        languages=_SCRIPT_AND_PYTHON,
        cwe_id="CWE-95",
    ),
    SecurityRule(
        rule_id="CS002",
        pattern=re.compile(r"document\.write\s*\("),
        title="Insecure DOM manipulation",
        description="document.write() is vulnerable to XSS attacks.",
        languages=_SCRIPT,
        cwe_id="CWE-79",
    ),
    SecurityRule(
        rule_id="CS003",
        pattern=re.compile(r"innerHTML\s*="),
        title="Potential XSS vulnerability",
        description="Using innerHTML can lead to cross-site scripting attacks.",
        languages=_SCRIPT,
        cwe_id="CWE-79",
    ),
    SecurityRule(
        rule_id="CS004",
        pattern=re.compile(r"localStorage\s*\.\s*setItem\s*\("),
        title="Sensitive data storage",
        description=(
            "Be cautious when storing data in localStorage as it is not secure "
            "for sensitive information."
        ),
        languages=_SCRIPT,
        cwe_id="CWE-922",
    ),
    SecurityRule(
        rule_id="CS005",
        pattern=re.compile(r"password|token|secret|key", re.IGNORECASE),
        title="Potential hardcoded credentials",
        description="Possible sensitive information found. Never hardcode passwords or keys.",
        languages=_SCRIPT_AND_PYTHON,
        cwe_id="CWE-798",
    ),
    SecurityRule(
        rule_id="CS006",
        pattern=re.compile(r"\.exec\s*\(\s*req\.body|\.exec\s*\(\s*req\.query"),
        title="SQL Injection risk",
        description=(
            "Direct use of user input in database queries creates SQL injection "
            "vulnerabilities."
        ),
        languages=_SCRIPT,
        cwe_id="CWE-89",
    ),
    SecurityRule(
        rule_id="CS007",
        pattern=re.compile(r"http:"),
        title="Insecure HTTP protocol",
        description="Using HTTP instead of HTTPS can expose data to eavesdropping.",
        languages=_SCRIPT_AND_PYTHON,
        cwe_id="CWE-319",
    ),
    SecurityRule(
        rule_id="CS008",
        pattern=re.compile(r"""apiKey\s*=\s*["']*[^"']+"""),
        title="Hardcoded API keys",
        description="Hardcoded API keys or tokens expose your service to unauthorized access.",
        languages=_SCRIPT_AND_PYTHON,
        cwe_id="CWE-798",
    ),
    # -----------------------------------------------------------------------
    # Python-specific rules
    # -----------------------------------------------------------------------
    SecurityRule(
        rule_id="CS009",
        pattern=re.compile(r"exec\s*\("),
        title="Dangerous use of exec()",
        description="The exec() function can execute arbitrary code, posing a security risk.",
        languages=_PYTHON,
        cwe_id="CWE-95",
    ),
    SecurityRule(
        rule_id="CS010",
        pattern=re.compile(r"input\s*\("),
        title="Unsafe input usage",
        description="Using input() without proper validation can lead to security vulnerabilities.",
        languages=_PYTHON,
        cwe_id="CWE-20",
    ),
    SecurityRule(
        rule_id="CS011",
        pattern=re.compile(r"os\.system\s*\("),
        title="Dangerous system command execution",
        description=(
            "Direct execution of system commands can lead to command injection "
            "vulnerabilities."
        ),
        languages=_PYTHON,
        cwe_id="CWE-78",
    ),
    SecurityRule(
        rule_id="CS012",
        pattern=re.compile(r"subprocess\.call\s*\("),
        title="Unsafe subprocess execution",
        description="Make sure to sanitize inputs when using subprocess to prevent command injection.",
        languages=_PYTHON,
        cwe_id="CWE-78",
    ),
    SecurityRule(
        rule_id="CS013",
        pattern=re.compile(r"pickle\.load"),
        title="Unsafe deserialization",
        description=(
            "Using pickle for deserialization can lead to remote code execution "
            "vulnerabilities."
        ),
        languages=_PYTHON,
        cwe_id="CWE-502",
    ),
    # -----------------------------------------------------------------------
    # Component (JSX / TSX) rules
    # -----------------------------------------------------------------------
    SecurityRule(
        rule_id="CS014",
        pattern=re.compile(r"dangerouslySetInnerHTML"),
        title="Unsafe HTML injection sink",
        description=(
            "dangerouslySetInnerHTML bypasses React's escaping and can lead to "
            "cross-site scripting attacks."
        ),
        languages=_COMPONENT,
        cwe_id="CWE-79",
    ),
)

_RULE_INDEX: dict[str, SecurityRule] = {rule.rule_id: rule for rule in SECURITY_RULES}


def get_rule(rule_id: str) -> SecurityRule | None:
    """Look up a rule by its identifier."""
    return _RULE_INDEX.get(rule_id)


def rules_for_language(language: Language) -> list[SecurityRule]:
    """Rules that apply to ``language``, in catalog order."""
    return [rule for rule in SECURITY_RULES if rule.applies_to(language)]


def offset_to_line(content: str, offset: int) -> int:
    """Convert a character offset into a 1-based line number.

    The line is the number of newlines strictly before ``offset`` plus one.

    Raises:
        ValueError: If ``offset`` is outside ``[0, len(content)]``.
    """
    if offset < 0 or offset > len(content):
        raise ValueError(f"Offset {offset} outside content of length {len(content)}")
    return content.count("\n", 0, offset) + 1
