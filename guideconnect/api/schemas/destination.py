"""
Pydantic schemas for destination endpoints.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, HttpUrl, model_validator

if TYPE_CHECKING:
    from guideconnect.models import Destination

Difficulty = Literal["easy", "moderate", "challenging", "difficult", "extreme"]
Season = Literal["spring", "summer", "autumn", "winter", "all year"]
PricePeriod = Literal["per day", "per person", "per group", "total"]


class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DestinationLocation(BaseModel):
    country: str = Field(min_length=2)
    region: str = Field(min_length=2)
    coordinates: Optional[Coordinates] = None


class Price(BaseModel):
    amount: float = Field(gt=0, description="Price must be positive")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    period: PricePeriod = "per person"


class Duration(BaseModel):
    min_days: int = Field(ge=1)
    max_days: int = Field(ge=1)

    @model_validator(mode="after")
    def check_range(self) -> "Duration":
        if self.max_days < self.min_days:
            raise ValueError("max_days must be greater than or equal to min_days")
        return self


class DestinationCreate(BaseModel):
    """Request body for POST /destinations."""

    name: str = Field(min_length=2)
    location: DestinationLocation
    description: str = Field(min_length=20)
    images: List[HttpUrl] = Field(min_length=1, description="At least one image URL")
    featured: bool = False
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    price: Price
    duration: Duration
    difficulty: Difficulty
    activities: List[str] = Field(min_length=1)
    seasons: List[Season] = Field(min_length=1)
    amenities: List[str] = Field(default_factory=list)
    available_guides: List[int] = Field(default_factory=list, description="Guide ids")


class DestinationUpdate(BaseModel):
    """Request body for PUT /destinations/{id}; only sent fields change."""

    name: Optional[str] = Field(default=None, min_length=2)
    location: Optional[DestinationLocation] = None
    description: Optional[str] = Field(default=None, min_length=20)
    images: Optional[List[HttpUrl]] = Field(default=None, min_length=1)
    featured: Optional[bool] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    review_count: Optional[int] = Field(default=None, ge=0)
    price: Optional[Price] = None
    duration: Optional[Duration] = None
    difficulty: Optional[Difficulty] = None
    activities: Optional[List[str]] = Field(default=None, min_length=1)
    seasons: Optional[List[Season]] = Field(default=None, min_length=1)
    amenities: Optional[List[str]] = None
    available_guides: Optional[List[int]] = None


class GuideRef(BaseModel):
    id: int
    name: str
    photo: Optional[str] = None


class PriceOut(BaseModel):
    amount: float
    currency: str
    period: str


class DestinationResponse(BaseModel):
    id: int
    name: str
    location: DestinationLocation
    description: str
    images: List[str]
    featured: bool
    rating: float
    review_count: int
    price: PriceOut
    duration: Duration
    difficulty: str
    activities: List[str]
    seasons: List[str]
    amenities: List[str]
    available_guides: List[GuideRef]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, destination: "Destination", include_guides: bool = True) -> "DestinationResponse":
        """Build the response; ``include_guides`` requires Destination.guides to be loaded."""
        coordinates = None
        if destination.latitude is not None and destination.longitude is not None:
            coordinates = Coordinates(latitude=destination.latitude, longitude=destination.longitude)

        guides = []
        if include_guides:
            guides = [GuideRef(id=g.id, name=g.name, photo=g.photo) for g in destination.guides]

        return cls(
            id=destination.id,
            name=destination.name,
            location=DestinationLocation.model_construct(
                country=destination.country,
                region=destination.region,
                coordinates=coordinates,
            ),
            description=destination.description,
            images=list(destination.images or []),
            featured=destination.featured,
            rating=destination.rating,
            review_count=destination.review_count,
            price=PriceOut(
                amount=destination.price_amount,
                currency=destination.price_currency,
                period=destination.price_period,
            ),
            duration=Duration.model_construct(
                min_days=destination.min_days, max_days=destination.max_days
            ),
            difficulty=destination.difficulty,
            activities=list(destination.activities or []),
            seasons=list(destination.seasons or []),
            amenities=list(destination.amenities or []),
            available_guides=guides,
            created_at=destination.created_at,
            updated_at=destination.updated_at,
        )


class DestinationListResponse(BaseModel):
    destinations: List[DestinationResponse]
    total: int


class CountryCount(BaseModel):
    country: str
    count: int


class RatedDestination(BaseModel):
    id: int
    name: str
    rating: float
    review_count: int
    image: Optional[str] = None


class DestinationStatsResponse(BaseModel):
    total_destinations: int = Field(description="Number of destinations")
    featured_count: int = Field(description="Number of featured destinations")
    average_rating: float = Field(description="Average destination rating (1 decimal)")
    top_rated: List[RatedDestination] = Field(description="Five best rated destinations")
    most_reviewed: List[RatedDestination] = Field(description="Five most reviewed destinations")
    difficulty_breakdown: Dict[str, int] = Field(description="Destinations per difficulty")
