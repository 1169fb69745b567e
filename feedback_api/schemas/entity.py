from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic.types import constr

NonEmptyStr = constr(min_length=1, strip_whitespace=True)


class ApiModel(BaseModel):
    """
    Base for wire models: snake_case attributes, camelCase JSON.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class EntityStatus(str, Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


class EntityKind(str, Enum):
    RESTAURANT = "restaurant"
    TEACHER = "teacher"


class Entity(ApiModel):
    id: NonEmptyStr
    kind: EntityKind = EntityKind.RESTAURANT
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    status: EntityStatus = EntityStatus.ACTIVE
    created_at: datetime
    updated_at: datetime


class EntityOverview(Entity):
    """Admin listing row."""
    feedback_count: int = 0
    average_rating: float = 0.0


class StatusUpdateIn(ApiModel):
    """
    Input schema for PATCH /admin/restaurants/status
    """
    restaurant_id: NonEmptyStr
    status: EntityStatus


class EntityCreateIn(ApiModel):
    """
    Input schema for POST /admin/restaurants
    """
    name: NonEmptyStr
    kind: EntityKind = EntityKind.RESTAURANT
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class FeedbackLinkOut(ApiModel):
    restaurant_id: str
    feedback_link: str
    qr_code_url: str = Field(description="URL of the rendered QR image for feedback_link")
