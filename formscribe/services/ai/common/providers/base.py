"""Abstract base for all AI providers."""

from __future__ import annotations

import abc
from dataclasses import dataclass

from ..errors import ServiceError


@dataclass(frozen=True)
class ProviderResult:
    """Immutable result returned by every provider."""

    raw_text: str
    model: str
    provider: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: float = 0.0


class BaseProvider(abc.ABC):
    """Contract that every AI provider must implement.

    Implementations raise ``ServiceError`` for any transport, HTTP or
    response-shape failure; callers never see ``httpx`` exceptions.
    """

    name: str = "base"

    @abc.abstractmethod
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
        """Send *prompt* and return a ``ProviderResult``."""

    def _service_error(self, exc: Exception) -> ServiceError:
        """Translate a transport exception into a user-presentable ``ServiceError``."""
        import httpx

        if isinstance(exc, httpx.TimeoutException):
            message = f"{self.name} request timed out"
        elif isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status in (401, 403):
                message = f"{self.name} rejected the credentials (HTTP {status})"
            elif status == 429:
                message = f"{self.name} rate limit or quota exceeded"
            else:
                message = f"{self.name} returned HTTP {status}"
        elif isinstance(exc, httpx.HTTPError):
            message = f"{self.name} request failed: {exc.__class__.__name__}"
        else:
            message = f"{self.name} returned an unexpected response"
        return ServiceError(message, provider=self.name)
