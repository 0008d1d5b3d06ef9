"""AI task analysis for the smarttodo application."""

from .analysis import (
    ANALYSIS_PROMPT,
    AnalysisClient,
    build_analysis_request,
)
from .providers import AnthropicProvider, OpenAIProvider, ProviderManager

__all__ = [
    "ANALYSIS_PROMPT",
    "AnalysisClient",
    "build_analysis_request",
    "ProviderManager",
    "OpenAIProvider",
    "AnthropicProvider",
]
