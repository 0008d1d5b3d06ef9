"""Pydantic models for the smarttodo application."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def coerce(cls, value: Any) -> "Priority":
        """Map any value onto a priority, falling back to medium."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


class AIProvider(str, Enum):
    """Supported AI providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


def _coerce_sub_tasks(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class NewTaskRecord(BaseModel):
    """Insert candidate built from user input and an analysis result."""

    title: str = Field(..., min_length=1)
    is_completed: bool = False
    priority: Priority = Priority.MEDIUM
    sub_tasks: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class TaskRecord(BaseModel):
    """A persisted task as returned by the store."""

    id: str
    title: str = Field(..., min_length=1)
    is_completed: bool = False
    priority: Priority = Priority.MEDIUM
    sub_tasks: list[str] = Field(default_factory=list)
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        """Store identifiers are rendered as strings."""
        if isinstance(v, UUID):
            return str(v)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Priority:
        """Stored priorities outside the enum read back as medium."""
        return Priority.coerce(v)

    @field_validator("sub_tasks", mode="before")
    @classmethod
    def validate_sub_tasks(cls, v: Any) -> list[str]:
        """NULL sub-task arrays read back as an empty list."""
        return _coerce_sub_tasks(v)

    class Config:
        from_attributes = True
        frozen = True


class AnalysisResult(BaseModel):
    """AI analysis of a single task title.

    Used as the agent's structured output type, so the field aliases and
    descriptions form the schema the model is asked to fill in.
    """

    suggested_priority: Priority = Field(
        default=Priority.MEDIUM,
        alias="suggestedPriority",
        description="Suggested priority: low, medium, or high",
    )
    sub_tasks: list[str] = Field(
        default_factory=list,
        alias="subTasks",
        description="List of 3-5 sub-tasks to achieve the main goal",
    )
    reasoning: str = Field(
        default="", description="A short sentence explaining the priority"
    )

    @field_validator("suggested_priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Priority:
        return Priority.coerce(v)

    @field_validator("sub_tasks", mode="before")
    @classmethod
    def validate_sub_tasks(cls, v: Any) -> list[str]:
        return _coerce_sub_tasks(v)

    @field_validator("reasoning", mode="before")
    @classmethod
    def validate_reasoning(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @classmethod
    def fallback(cls) -> "AnalysisResult":
        """Result used whenever analysis cannot produce a usable answer."""
        return cls(
            suggestedPriority=Priority.MEDIUM,
            subTasks=[],
            reasoning="Analysis failed.",
        )

    class Config:
        populate_by_name = True
        # The model must send every key; missing keys still validate leniently.
        json_schema_extra = {
            "required": ["suggestedPriority", "subTasks", "reasoning"]
        }
