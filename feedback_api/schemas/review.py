from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, Field

from feedback_api.schemas.entity import ApiModel, NonEmptyStr


class ReviewPlatform(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


class ExternalReviewIn(ApiModel):
    """
    Input schema for POST /external-reviews (pushed by the sync job)
    """
    restaurant_id: NonEmptyStr
    platform: ReviewPlatform
    author: str = ""
    rating: float = Field(ge=1, le=5)
    comment: str = ""
    review_date: datetime


class ExternalReview(ApiModel):
    model_config = ConfigDict(frozen=True)

    id: str
    entity_id: str = Field(alias="restaurantId")
    platform: ReviewPlatform
    author: str = ""
    rating: float
    comment: str = ""
    review_date: datetime
    synced_at: datetime
