"""LLM-backed career advisor built on the Groq chat completions API."""

from __future__ import annotations

import json
import logging
import time
from typing import Dict, List, Optional

from groq import Groq, GroqError

SYSTEM_PROMPT = (
    "You are the Career Advisor for CareerHub, a job search and learning platform for students "
    "and graduates in India. Help users with job search, course choices, resumes, interviews and "
    "salary questions (salaries are in Indian Rupees). Explain platform features when asked: job "
    "search, course recommendations, profile and resume analysis, and the activity dashboard. "
    "Be friendly and practical, and keep answers concise."
)
FALLBACK_REPLY = "Sorry, I could not generate a response."

_LOGGER = logging.getLogger("careerhub.chat")


class AdvisorUnavailable(RuntimeError):
    """Raised when the upstream model call fails."""


class AdvisorNotConfigured(RuntimeError):
    """Raised when no API key is available."""


def build_messages(message: str, history: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """System prompt, then prior turns, then the new user message."""
    return [{"role": "system", "content": SYSTEM_PROMPT}, *history, {"role": "user", "content": message}]


class CareerAdvisor:
    """Thin wrapper that owns the Groq client and the completion settings."""

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        client: Optional[Groq] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> Groq:
        if self._client is None:
            if not self.api_key:
                raise AdvisorNotConfigured("GROQ_API_KEY is not set")
            self._client = Groq(api_key=self.api_key)
        return self._client

    def reply(self, message: str, history: List[Dict[str, str]]) -> str:
        """Return the model's answer to `message` given earlier turns."""
        client = self._get_client()
        started = time.perf_counter()
        try:
            completion = client.chat.completions.create(
                model=self.model,
                messages=build_messages(message, history),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                top_p=1,
                stream=False,
            )
        except GroqError as exc:
            _LOGGER.warning("advisor_call_failed %s", json.dumps({"model": self.model, "error": str(exc)}))
            raise AdvisorUnavailable(str(exc)) from exc
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        _LOGGER.info("advisor_call_done %s", json.dumps({"model": self.model, "duration_ms": elapsed_ms}))
        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        return content or FALLBACK_REPLY
