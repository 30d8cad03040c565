"""
DTOs for direct recommendation and AI requests.

These bypass the workflow engine: one collaborator call, no execution record.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .travel_dto import UserProfileDTO


class RecommendationRequestDTO(BaseModel):
    """Rule-based recommendations near a coordinate pair."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"latitude": 48.85, "longitude": 2.35, "interests": ["culture", "food"]}
        }
    )

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    interests: List[str] = Field(default_factory=list)
    budget: Optional[str] = None
    duration: Optional[str] = None


class AIRecommendationRequestDTO(BaseModel):
    destination: str = Field(..., min_length=1)
    interests: List[str] = Field(default_factory=list)
    travel_style: Optional[str] = None
    budget: Optional[str] = None
    duration: Optional[str] = None


class InsightsRequestDTO(BaseModel):
    """Destination insights; ``season`` defaults to the current month."""

    destination: str = Field(..., min_length=1)
    season: Optional[str] = None
    interests: List[str] = Field(default_factory=list)


class ItineraryRequestDTO(BaseModel):
    destination: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    user_profile: UserProfileDTO = Field(default_factory=UserProfileDTO)

    @model_validator(mode="after")
    def validate_dates(self) -> "ItineraryRequestDTO":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self
