"""
Pydantic schemas for review endpoints.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from guideconnect.models import Review

ReviewStatus = Literal["approved", "pending", "flagged"]
ReviewTypeFilter = Literal["all", "guides", "destinations", "flagged"]


class TripInfo(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[int] = Field(default=None, gt=0)
    type: Optional[str] = None


class ReviewCreate(BaseModel):
    """Request body for POST /reviews. The author is the signed-in user."""

    title: str = Field(min_length=3)
    content: str = Field(min_length=20)
    rating: int = Field(ge=1, le=5)
    date: Optional[datetime] = None
    destination_id: Optional[int] = None
    guide_id: Optional[int] = None
    trip: Optional[TripInfo] = None
    photos: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    verified: bool = False
    featured: bool = False

    @model_validator(mode="after")
    def check_subject(self) -> "ReviewCreate":
        if self.destination_id is None and self.guide_id is None:
            raise ValueError("A review must reference a destination or a guide")
        return self


class ReviewUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3)
    content: Optional[str] = Field(default=None, min_length=20)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    trip: Optional[TripInfo] = None
    photos: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    verified: Optional[bool] = None
    featured: Optional[bool] = None
    response: Optional[str] = None


class ReviewAuthor(BaseModel):
    id: Optional[int] = None
    name: str


class ReviewResponse(BaseModel):
    id: int
    title: str
    content: str
    rating: int
    date: datetime
    author: ReviewAuthor
    type: Literal["guide", "destination"]
    entity_id: Optional[int] = None
    entity_name: str
    status: str
    destination_id: Optional[int] = None
    guide_id: Optional[int] = None
    trip: TripInfo
    photos: List[str]
    highlights: List[str]
    tags: List[str]
    verified: bool
    featured: bool
    helpful_count: int
    unhelpful_count: int
    response: Optional[str] = None
    response_date: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_model(cls, review: "Review") -> "ReviewResponse":
        """Build from a Review with destination and guide loaded."""
        if review.guide_id is not None:
            review_type = "guide"
            entity_id = review.guide_id
            entity_name = review.guide.name if review.guide else "Unknown Guide"
        else:
            review_type = "destination"
            entity_id = review.destination_id
            entity_name = review.destination.name if review.destination else "Unknown Destination"

        return cls(
            id=review.id,
            title=review.title,
            content=review.content,
            rating=review.rating,
            date=review.date,
            author=ReviewAuthor(id=review.author_id, name=review.author_name),
            type=review_type,
            entity_id=entity_id,
            entity_name=entity_name,
            status=review.moderation_status,
            destination_id=review.destination_id,
            guide_id=review.guide_id,
            trip=TripInfo.model_construct(
                start_date=review.trip_start_date,
                end_date=review.trip_end_date,
                duration=review.trip_duration,
                type=review.trip_type,
            ),
            photos=list(review.photos or []),
            highlights=list(review.highlights or []),
            tags=list(review.tags or []),
            verified=review.verified,
            featured=review.featured,
            helpful_count=review.helpful_count,
            unhelpful_count=review.unhelpful_count,
            response=review.response,
            response_date=review.response_date,
            created_at=review.created_at,
        )


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    total: int
