"""
Pydantic schemas for guide and guide schedule endpoints.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, model_validator

if TYPE_CHECKING:
    from guideconnect.models import Guide

ExperienceLevel = Literal["beginner", "intermediate", "expert", "master"]
Availability = Literal["available", "partially_available", "unavailable"]
ScheduleStatus = Literal["confirmed", "pending", "completed", "cancelled"]
ScheduleDifficulty = Literal["easy", "moderate", "challenging"]

# Dashboard wording for guide availability
STATUS_TO_AVAILABILITY = {
    "active": "available",
    "on_leave": "partially_available",
    "inactive": "unavailable",
}
AVAILABILITY_TO_STATUS = {v: k for k, v in STATUS_TO_AVAILABILITY.items()}


class GuideLocation(BaseModel):
    country: str = Field(min_length=2)
    region: str = Field(min_length=2)
    city: Optional[str] = None


class Experience(BaseModel):
    years: int = Field(ge=0)
    level: ExperienceLevel
    expeditions: Optional[int] = Field(default=None, ge=0)


class Certification(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(min_length=1)
    issued_by: str = Field(min_length=1)
    year: int = Field(ge=1950, le=2100)
    expiry_year: Optional[int] = Field(default=None, ge=1950, le=2100)


class DateWindow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date_from: date
    date_to: date

    @model_validator(mode="after")
    def check_order(self) -> "DateWindow":
        if self.date_to < self.date_from:
            raise ValueError("date_to must not be before date_from")
        return self


class SocialMedia(BaseModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None


class GuideCreate(BaseModel):
    """Request body for POST /guides."""

    name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=7)
    photo: HttpUrl
    location: GuideLocation
    languages: List[str] = Field(min_length=1)
    specialties: List[str] = Field(min_length=1)
    experience: Experience
    bio: str = Field(min_length=50)
    certifications: List[Certification] = Field(default_factory=list)
    hourly_rate: float = Field(gt=0)
    availability: Availability = "available"
    available_dates: List[DateWindow] = Field(default_factory=list)
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    destinations: List[int] = Field(default_factory=list, description="Destination ids")
    social_media: Optional[SocialMedia] = None


class GuideUpdate(BaseModel):
    """Request body for PUT /guides/{id}; only sent fields change."""

    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=7)
    photo: Optional[HttpUrl] = None
    location: Optional[GuideLocation] = None
    languages: Optional[List[str]] = Field(default=None, min_length=1)
    specialties: Optional[List[str]] = Field(default=None, min_length=1)
    experience: Optional[Experience] = None
    bio: Optional[str] = Field(default=None, min_length=50)
    certifications: Optional[List[Certification]] = None
    hourly_rate: Optional[float] = Field(default=None, gt=0)
    availability: Optional[Availability] = None
    available_dates: Optional[List[DateWindow]] = None
    destinations: Optional[List[int]] = None
    social_media: Optional[SocialMedia] = None


class GuideSummary(BaseModel):
    """Row shape of the guide list."""

    id: int
    name: str
    location: str
    rating: float
    review_count: int
    status: str
    experience: str
    languages: List[str]
    specialties: List[str]
    photo: str

    @classmethod
    def from_model(cls, guide: "Guide") -> "GuideSummary":
        return cls(
            id=guide.id,
            name=guide.name,
            location=guide.location_label,
            rating=guide.rating,
            review_count=guide.review_count,
            status=AVAILABILITY_TO_STATUS.get(guide.availability, "inactive"),
            experience=f"{guide.experience_years} years",
            languages=list(guide.languages or []),
            specialties=list(guide.specialties or []),
            photo=guide.photo,
        )


class DestinationRef(BaseModel):
    id: int
    name: str


class GuideResponse(BaseModel):
    """Full guide profile."""

    id: int
    name: str
    email: str
    phone: str
    photo: str
    location: GuideLocation
    languages: List[str]
    specialties: List[str]
    experience: Experience
    bio: str
    certifications: List[Certification]
    hourly_rate: float
    availability: str
    available_dates: List[DateWindow]
    rating: float
    review_count: int
    destinations: List[DestinationRef]
    social_media: SocialMedia
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, guide: "Guide") -> "GuideResponse":
        """Build from a Guide with certifications, available_dates and destinations loaded."""
        return cls(
            id=guide.id,
            name=guide.name,
            email=guide.email,
            phone=guide.phone,
            photo=guide.photo,
            location=GuideLocation.model_construct(
                country=guide.country, region=guide.region, city=guide.city
            ),
            languages=list(guide.languages or []),
            specialties=list(guide.specialties or []),
            experience=Experience.model_construct(
                years=guide.experience_years,
                level=guide.experience_level,
                expeditions=guide.expeditions,
            ),
            bio=guide.bio,
            certifications=[Certification.model_validate(c) for c in guide.certifications],
            hourly_rate=guide.hourly_rate,
            availability=guide.availability,
            available_dates=[DateWindow.model_validate(d) for d in guide.available_dates],
            rating=guide.rating,
            review_count=guide.review_count,
            destinations=[DestinationRef(id=d.id, name=d.name) for d in guide.destinations],
            social_media=SocialMedia(
                instagram=guide.instagram,
                facebook=guide.facebook,
                twitter=guide.twitter,
                linkedin=guide.linkedin,
            ),
            created_at=guide.created_at,
            updated_at=guide.updated_at,
        )


class GuideListResponse(BaseModel):
    guides: List[GuideSummary]
    total: int


class GuideStatsResponse(BaseModel):
    total_guides: int
    active_guides: int
    on_leave_guides: int
    inactive_guides: int
    average_rating: float = Field(description="Average guide rating (1 decimal)")
    total_reviews: int
    tours_this_month: int = Field(description="Schedules starting this calendar month")
    change_from_last_month: float = Field(
        description="Percentage change in scheduled tours versus last month"
    )


# ============================================================================
# Schedules (tours led by a guide)
# ============================================================================


class ScheduleCreate(BaseModel):
    destination: str = Field(min_length=2)
    location: str = Field(min_length=2)
    start_date: date
    end_date: date
    description: str = Field(min_length=10)
    max_participants: int = Field(ge=1)
    price: float = Field(ge=0)
    status: ScheduleStatus = "pending"
    difficulty: ScheduleDifficulty
    itinerary: str = Field(min_length=10)

    @model_validator(mode="after")
    def check_order(self) -> "ScheduleCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ScheduleUpdate(BaseModel):
    destination: Optional[str] = Field(default=None, min_length=2)
    location: Optional[str] = Field(default=None, min_length=2)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = Field(default=None, min_length=10)
    max_participants: Optional[int] = Field(default=None, ge=1)
    price: Optional[float] = Field(default=None, ge=0)
    status: Optional[ScheduleStatus] = None
    difficulty: Optional[ScheduleDifficulty] = None
    itinerary: Optional[str] = Field(default=None, min_length=10)


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guide_id: int
    destination: str
    location: str
    start_date: date
    end_date: date
    description: str
    max_participants: int
    price: float
    status: str
    difficulty: str
    itinerary: str
    created_at: datetime
    updated_at: datetime
