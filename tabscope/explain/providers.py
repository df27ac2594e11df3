"""
Explanation providers

Async clients for the optional natural-language explanation service.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a friendly data analyst who explains statistics in plain language."


class BaseExplanationProvider(ABC):
    """Base class for explanation providers"""

    def __init__(self):
        self.provider_name = self.__class__.__name__.replace("ExplanationProvider", "").lower()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def is_configured(self) -> bool:
        """Check if the provider can be called"""
        pass

    @abstractmethod
    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """Return free-form explanation text for the prompt"""
        pass


class HTTPExplanationProvider(BaseExplanationProvider):
    """OpenAI-compatible chat-completions endpoint called with httpx"""

    def __init__(
        self,
        api_url: Optional[str],
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 15.0,
        max_tokens: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HTTPExplanationProvider":
        return cls(
            api_url=settings.EXPLANATION_API_URL,
            api_key=settings.EXPLANATION_API_KEY,
            model=settings.EXPLANATION_MODEL,
            timeout=settings.EXPLANATION_TIMEOUT,
            max_tokens=settings.EXPLANATION_MAX_TOKENS,
        )

    async def is_configured(self) -> bool:
        return bool(self.api_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": 0.7,
            "stream": False,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.api_url, json=payload, headers=self._headers())
            response.raise_for_status()
            data = response.json()

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"Unexpected response shape from {self.api_url}") from e
