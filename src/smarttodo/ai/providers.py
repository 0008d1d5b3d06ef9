"""AI provider selection for task analysis (OpenAI and Anthropic)."""

import logging
from abc import ABC, abstractmethod

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI
from pydantic_ai import Agent

from ..core.config import AppConfig, get_app_config
from ..models import AIProvider

logger = logging.getLogger(__name__)

PING_MESSAGE = [{"role": "user", "content": "ping"}]


class BaseLLMProvider(ABC):
    """A configured model that analysis agents are built on."""

    kind: AIProvider

    def __init__(self, api_key: str, model_name: str):
        self.api_key = api_key
        self.model_name = model_name

    @property
    def agent_model(self) -> str:
        """Model identifier in pydantic-ai ``provider:model`` form."""
        return f"{self.kind.value}:{self.model_name}"

    async def create_agent(self, system_prompt: str, output_type: type = str) -> Agent:
        return Agent(
            self.agent_model,
            output_type=output_type,
            system_prompt=system_prompt,
        )

    async def health_check(self) -> bool:
        """Send a one-token request; any SDK error means unavailable."""
        try:
            await self._ping()
        except Exception as e:
            logger.debug("%s health check failed: %s", self.agent_model, e)
            return False
        return True

    @abstractmethod
    async def _ping(self) -> None: ...


class OpenAIProvider(BaseLLMProvider):
    kind = AIProvider.OPENAI

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini"):
        super().__init__(api_key, model_name)
        self.client = AsyncOpenAI(api_key=api_key)

    async def _ping(self) -> None:
        await self.client.chat.completions.create(
            model=self.model_name, messages=PING_MESSAGE, max_tokens=1
        )


class AnthropicProvider(BaseLLMProvider):
    kind = AIProvider.ANTHROPIC

    def __init__(self, api_key: str, model_name: str = "claude-3-haiku-20240307"):
        super().__init__(api_key, model_name)
        self.client = AsyncAnthropic(api_key=api_key)

    async def _ping(self) -> None:
        await self.client.messages.create(
            model=self.model_name, messages=PING_MESSAGE, max_tokens=1
        )


class ProviderManager:
    """Selects a configured AI provider."""

    def __init__(self, config: AppConfig | None = None):
        self.config = config or get_app_config()
        self.providers: dict[AIProvider, BaseLLMProvider] = {}
        self._initialize_providers()

    def _initialize_providers(self):
        """Initialize providers that have an API key."""
        if self.config.ai.openai_api_key:
            self.providers[AIProvider.OPENAI] = OpenAIProvider(
                self.config.ai.openai_api_key, self.config.ai.openai_model
            )

        if self.config.ai.anthropic_api_key:
            self.providers[AIProvider.ANTHROPIC] = AnthropicProvider(
                self.config.ai.anthropic_api_key, self.config.ai.anthropic_model
            )

    def get_provider(
        self, preferred: AIProvider | None = None
    ) -> BaseLLMProvider | None:
        """Pick a provider without probing it.

        Order: preferred, configured default, then any configured provider.
        """
        if preferred and preferred in self.providers:
            return self.providers[preferred]

        default = self.providers.get(self.config.ai.default_provider)
        if default:
            return default

        return next(iter(self.providers.values()), None)

    async def check_providers(self) -> dict[AIProvider, bool]:
        """Run a health check against every configured provider."""
        return {
            kind: await provider.health_check()
            for kind, provider in self.providers.items()
        }
