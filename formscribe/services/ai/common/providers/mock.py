"""Mock provider: deterministic responses for tests and local development."""

from __future__ import annotations

import time
from collections.abc import Iterable

from .base import BaseProvider, ProviderResult


class MockProvider(BaseProvider):
    """Replays scripted replies in order; the last one repeats once exhausted.

    With no script it answers ``{}`` (nothing extracted).
    """

    name = "mock"

    def __init__(self, replies: Iterable[str] | None = None) -> None:
        self._replies = list(replies or ["{}"])
        self._cursor = 0
        self.prompts: list[str] = []

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        model: str = "",
        temperature: float = 0.1,
        max_tokens: int = 1000,
        timeout_seconds: float = 15.0,
    ) -> ProviderResult:
        t0 = time.monotonic()
        self.prompts.append(prompt)
        text = self._replies[min(self._cursor, len(self._replies) - 1)]
        self._cursor += 1
        elapsed = (time.monotonic() - t0) * 1000
        return ProviderResult(
            raw_text=text,
            model=model or "mock-v1",
            provider=self.name,
            prompt_tokens=len(prompt.split()),
            completion_tokens=len(text.split()),
            latency_ms=round(elapsed, 2),
        )
