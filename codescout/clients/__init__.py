"""Clients for the external lint engine and review model."""

from .advisor_client import LLMAdvisor, get_advisor
from .eslint_client import ESLintLinter

__all__ = [
    "ESLintLinter",
    "LLMAdvisor",
    "get_advisor",
]
