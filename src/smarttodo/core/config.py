"""Application configuration management."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..models import AIProvider

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


class AIConfig(BaseModel):
    """AI-related configuration."""

    enable_analysis: bool = Field(default=True, description="Enable AI task analysis")

    # API keys
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API key")

    # Model configurations
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model to use")
    anthropic_model: str = Field(
        default="claude-3-haiku-20240307", description="Anthropic model to use"
    )

    # Provider settings
    default_provider: AIProvider = Field(
        default=AIProvider.OPENAI, description="Default AI provider"
    )


class DatabaseConfig(BaseModel):
    """Database configuration."""

    database_path: str = Field(
        default="~/.local/share/smarttodo/todos.db", description="Database file path"
    )
    table_name: str = Field(default="todos", description="Task table name")
    schema_name: str = Field(default="main", description="Schema holding the table")

    @property
    def qualified_table_name(self) -> str:
        return f"{self.schema_name}.{self.table_name}"


class AppConfig(BaseModel):
    """Main application configuration."""

    ai: AIConfig = Field(default_factory=AIConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    # Application settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="WARNING", description="Logging level")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_provider(name: str, default: AIProvider) -> AIProvider:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return AIProvider(value.strip().lower())
    except ValueError:
        logger.warning(
            "Unknown AI provider %r in %s; using %s", value, name, default.value
        )
        return default


def get_app_config() -> AppConfig:
    """Get application configuration from environment and defaults."""
    ai_config = AIConfig(
        enable_analysis=_env_flag("SMARTTODO_ENABLE_AI", True),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        openai_model=os.getenv("SMARTTODO_OPENAI_MODEL", "gpt-4o-mini"),
        anthropic_model=os.getenv(
            "SMARTTODO_ANTHROPIC_MODEL", "claude-3-haiku-20240307"
        ),
        default_provider=_env_provider(
            "SMARTTODO_DEFAULT_AI_PROVIDER", AIProvider.OPENAI
        ),
    )

    database_config = DatabaseConfig(
        database_path=os.getenv(
            "SMARTTODO_DATABASE_PATH", "~/.local/share/smarttodo/todos.db"
        ),
        table_name=os.getenv("SMARTTODO_TABLE_NAME", "todos"),
        schema_name=os.getenv("SMARTTODO_SCHEMA_NAME", "main"),
    )

    return AppConfig(
        ai=ai_config,
        database=database_config,
        debug=_env_flag("SMARTTODO_DEBUG", False),
        log_level=os.getenv("SMARTTODO_LOG_LEVEL", "WARNING").upper(),
    )
