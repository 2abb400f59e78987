from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssessmentPayload(CamelModel):
    """Body for create and update. Every field takes any JSON value, stored as-is."""

    title: Any = None
    description: Any = None
    due_date: Any = Field(None, description="Any JSON value, stored unparsed")


class AssessmentItem(CamelModel):
    id: str
    title: Any = None
    description: Any = None
    due_date: Any = None
    owner_id: str | None = None


class AssessmentCreatedResponse(CamelModel):
    message: str = "Assessment created successfully"
    assessment_id: str


class MessageResponse(BaseModel):
    message: str
