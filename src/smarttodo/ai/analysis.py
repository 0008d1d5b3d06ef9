"""Task analysis: one structured model call per title."""

import logging

from pydantic_ai.exceptions import UnexpectedModelBehavior

from ..core.config import AppConfig, get_app_config
from ..models import AIProvider, AnalysisResult
from .providers import ProviderManager

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """
You are a practical planning assistant. For each todo task you receive, suggest a
priority level, a short list of concrete sub-tasks that complete it, and a brief
reasoning for the priority.

PRIORITY GUIDELINES:
- low: Nice to have, no deadline pressure
- medium: Important but flexible timing
- high: Important with time sensitivity

Write sub-tasks in the same language as the task. Use 3-5 sub-tasks.
"""


def build_analysis_request(title: str) -> str:
    """Build the user message sent to the model for one task."""
    return (
        "Analyze this todo task and suggest a priority level, a list of "
        f'sub-tasks to complete it, and a brief reasoning: "{title}"'
    )


class AnalysisClient:
    """Asks the configured model to analyze a task title."""

    def __init__(
        self,
        config: AppConfig | None = None,
        provider_manager: ProviderManager | None = None,
    ):
        self.config = config or get_app_config()
        self.provider_manager = provider_manager or ProviderManager(self.config)

    async def analyze(
        self, title: str, preferred_provider: AIProvider | None = None
    ) -> AnalysisResult:
        """
        Analyze a task title.

        Every failure after the input check (no provider, transport error,
        malformed output) is absorbed into ``AnalysisResult.fallback()``.

        Args:
            title: Non-blank task title
            preferred_provider: Provider to try before the configured default

        Returns:
            AnalysisResult with a priority that is always low, medium or high

        Raises:
            ValueError: If the title is blank.
        """
        if not title or not title.strip():
            raise ValueError("Task title cannot be empty")

        if not self.config.ai.enable_analysis:
            logger.info("AI analysis disabled; using default priority")
            return AnalysisResult.fallback()

        provider = self.provider_manager.get_provider(preferred_provider)
        if not provider:
            logger.warning("No AI providers configured for analysis")
            return AnalysisResult.fallback()

        try:
            agent = await provider.create_agent(ANALYSIS_PROMPT, AnalysisResult)
            result = await agent.run(build_analysis_request(title.strip()))
        except UnexpectedModelBehavior as e:
            logger.error(
                "Unusable analysis response from %s: %s", provider.agent_model, e
            )
            return AnalysisResult.fallback()
        except Exception as e:
            logger.warning(
                "Analysis request via %s failed: %s", provider.agent_model, e
            )
            return AnalysisResult.fallback()

        analysis = result.output

        logger.debug(
            "Analyzed %r: priority=%s, %d sub-tasks (%s)",
            title,
            analysis.suggested_priority.value,
            len(analysis.sub_tasks),
            analysis.reasoning,
        )
        return analysis
