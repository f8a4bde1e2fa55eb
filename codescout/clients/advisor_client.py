"""
LLM-based code review.

This module asks a chat model for a short prose review of source code. The
review is advisory only: any failure is logged and turned into ``None`` so
it never affects the rest of the report.
"""

import logging
import os
from typing import Any

import httpx

from ..constants import (
    ADVISOR_ANTHROPIC_MODEL,
    ADVISOR_MAX_TOKENS,
    ADVISOR_MODEL,
    ADVISOR_SYSTEM_PROMPT,
    DEFAULT_REQUEST_TIMEOUT,
)
from ..core.exceptions import AdvisorError
from ..providers.base import Advisor

logger = logging.getLogger(__name__)


class LLMAdvisor(Advisor):
    """Reviews code using the OpenAI or Anthropic chat API."""

    def __init__(
        self,
        api_key: str | None = None,
        api_type: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the advisor.

        Args:
            api_key: Explicit key; falls back to OPENAI_API_KEY, then
                ANTHROPIC_API_KEY
            api_type: "openai" or "anthropic"; inferred from the key source
                when omitted
            timeout: HTTP timeout in seconds
        """
        if api_key is None:
            api_key = os.getenv("OPENAI_API_KEY") or os.getenv("ANTHROPIC_API_KEY")
            if api_type is None:
                api_type = "openai" if os.getenv("OPENAI_API_KEY") else "anthropic"

        self.api_key = api_key
        self.api_type = api_type or "openai"
        self.timeout = timeout

        if self.enabled:
            logger.info(f"LLM advisor enabled using {self.api_type} API")
        else:
            logger.info("LLM advisor disabled - no API key found")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def review(self, text: str) -> str | None:
        """Return a prose review of ``text``, or None on any failure."""
        if not self.enabled or not text:
            return None

        try:
            return await self._query_llm(text)
        except Exception as e:
            logger.error(f"Error getting AI review: {e}")
            return None

    async def _query_llm(self, text: str) -> str:
        if self.api_type == "openai":
            return await self._query_openai(text)
        else:
            return await self._query_anthropic(text)

    async def _query_openai(self, text: str) -> str:
        """Query OpenAI API."""
        async with httpx.AsyncClient() as client:
            response = await client.post(
                "https://api.openai.com/v1/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": ADVISOR_MODEL,
                    "messages": [
                        {"role": "system", "content": ADVISOR_SYSTEM_PROMPT},
                        {"role": "user", "content": text},
                    ],
                    "max_tokens": ADVISOR_MAX_TOKENS,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
            return _require_text(result["choices"][0]["message"]["content"])

    async def _query_anthropic(self, text: str) -> str:
        """Query Anthropic API."""
        async with httpx.AsyncClient() as client:
            response = await client.post(
                "https://api.anthropic.com/v1/messages",
                headers={
                    "x-api-key": self.api_key or "",
                    "anthropic-version": "2023-06-01",
                    "content-type": "application/json",
                },
                json={
                    "model": ADVISOR_ANTHROPIC_MODEL,
                    "system": ADVISOR_SYSTEM_PROMPT,
                    "messages": [{"role": "user", "content": text}],
                    "max_tokens": ADVISOR_MAX_TOKENS,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
            return _require_text(result["content"][0]["text"])


def _require_text(content: Any) -> str:
    if not isinstance(content, str):
        raise AdvisorError("Review API returned no text")
    return content


# Global instance
_advisor: LLMAdvisor | None = None


def get_advisor() -> LLMAdvisor:
    """Get or create the global advisor instance."""
    global _advisor
    if _advisor is None:
        _advisor = LLMAdvisor()
    return _advisor
