"""
DTOs for workflow invocation requests.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .travel_dto import UserProfileDTO


# =============================================================================
# REQUEST DTOs
# =============================================================================

class LocationWorkflowRequestDTO(BaseModel):
    """Request DTO for the IP -> location workflow."""

    model_config = ConfigDict(json_schema_extra={"example": {"ip": "8.8.8.8"}})

    ip: str = Field(..., description="IPv4 or IPv6 address to resolve")
    background: bool = Field(
        default=False,
        description="If true, returns immediately and finishes the workflow in the background",
    )


class WeatherWorkflowRequestDTO(BaseModel):
    """Request DTO for the IP -> location -> weather workflow."""

    ip: Optional[str] = Field(
        default=None,
        description="IP address; the caller's address is used when omitted",
    )
    background: bool = False


class TravelPlanningRequestDTO(BaseModel):
    """Request DTO for the travel planning workflow."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "destination": "Paris, France",
                "start_date": "2024-06-01",
                "end_date": "2024-06-05",
            }
        }
    )

    ip: Optional[str] = Field(default=None, description="Resolve the destination from this IP")
    destination: Optional[str] = Field(default=None, description="Explicit destination name")
    start_date: date
    end_date: date
    background: bool = False

    @model_validator(mode="after")
    def validate_dates(self) -> "TravelPlanningRequestDTO":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AITravelPlanningRequestDTO(TravelPlanningRequestDTO):
    """Request DTO for the AI-augmented travel planning workflow."""

    user_profile: UserProfileDTO = Field(default_factory=UserProfileDTO)
