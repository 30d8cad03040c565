"""
Location DTOs.

Normalized shape of an IP geolocation lookup.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationDTO(BaseModel):
    """Geographic location resolved from an IP address."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ip": "8.8.8.8",
                "country": "United States",
                "region": "California",
                "city": "Mountain View",
                "latitude": 37.42,
                "longitude": -122.08,
                "timezone": "America/Los_Angeles",
                "isp": "Google LLC",
            }
        }
    )

    ip: str
    country: str = "Unknown"
    region: str = "Unknown"
    city: str = "Unknown"
    latitude: float = 0.0
    longitude: float = 0.0
    timezone: str = "UTC"
    isp: Optional[str] = Field(default=None, description="Internet service provider, when reported")

    @property
    def display_name(self) -> str:
        """Human-readable ``City, Country`` label."""
        return f"{self.city}, {self.country}"
