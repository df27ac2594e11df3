from .context import build_prompt, build_stats_context
from .providers import BaseExplanationProvider, HTTPExplanationProvider
from .service import ExplanationService, generate_explanation

__all__ = [
    "build_prompt",
    "build_stats_context",
    "BaseExplanationProvider",
    "HTTPExplanationProvider",
    "ExplanationService",
    "generate_explanation",
]
