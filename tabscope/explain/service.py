import logging
from typing import Optional

from ..config import EXPLANATION_FALLBACK, Settings, get_settings
from .context import build_prompt
from .providers import BaseExplanationProvider, HTTPExplanationProvider

logger = logging.getLogger(__name__)


class ExplanationService:
    """
    Best-effort explanation lookup.

    Always returns text: the provider's answer, or the fallback string when no
    provider is configured, the call fails, or the answer is empty.
    """

    def __init__(
        self,
        provider: Optional[BaseExplanationProvider] = None,
        fallback: str = EXPLANATION_FALLBACK,
    ):
        self.provider = provider
        self.fallback = fallback

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ExplanationService":
        settings = settings or get_settings()
        provider = HTTPExplanationProvider.from_settings(settings) if settings.explanation_configured else None
        return cls(provider=provider, fallback=settings.EXPLANATION_FALLBACK)

    async def explain(self, target: str, feature: str, stats: str) -> str:
        if self.provider is None or not await self.provider.is_configured():
            return self.fallback

        try:
            text = await self.provider.generate(build_prompt(target, feature, stats))
        except Exception as e:
            logger.warning(f"Explanation provider '{self.provider.provider_name}' failed: {e}")
            return self.fallback

        text = (text or "").strip()
        return text or self.fallback


async def generate_explanation(
    target: str,
    feature: str,
    stats: str,
    service: Optional[ExplanationService] = None,
) -> str:
    """Explain a target/feature pair; falls back to a fixed message on any failure."""
    service = service or ExplanationService.from_settings()
    return await service.explain(target, feature, stats)
