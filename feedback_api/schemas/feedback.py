from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import ConfigDict, Field

from feedback_api.schemas.entity import ApiModel, NonEmptyStr

Rating = Annotated[int, Field(ge=1, le=5)]


class FeedbackSubmitIn(ApiModel):
    """
    Input schema for POST /feedback/submit (public submission flow)
    """
    restaurant_id: NonEmptyStr
    customer_name: Optional[str] = None
    customer_contact: Optional[str] = None
    food_rating: Rating
    staff_rating: Rating
    ambience_rating: Rating
    overall_rating: Rating
    suggestions: Optional[str] = None


class FeedbackRecord(ApiModel):
    """
    Stored feedback record. Append-only, so the model is frozen.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    entity_id: str = Field(alias="restaurantId")
    created_at: datetime

    customer_name: Optional[str] = None
    customer_contact: Optional[str] = None
    food_rating: int
    staff_rating: int
    ambience_rating: int
    overall_rating: int
    suggestions: Optional[str] = None


class AverageRatings(ApiModel):
    food: float = 0.0
    staff: float = 0.0
    ambience: float = 0.0
    overall: float = 0.0


class ExternalReviewsCount(ApiModel):
    google: int = 0
    facebook: int = 0
    instagram: int = 0


class FeedbackStats(ApiModel):
    total_feedback: int
    average_ratings: AverageRatings
    recent_trend: Literal["improving", "stable", "declining"] = "stable"
    external_reviews_count: ExternalReviewsCount
