"""
Weather DTOs.

Current conditions and daily forecast summaries in metric units.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class WeatherDTO(BaseModel):
    """Current weather conditions for a place."""

    location: str
    temperature: float = Field(..., description="Degrees Celsius")
    description: str
    humidity: int = Field(..., description="Relative humidity, percent")
    wind_speed: float = Field(default=0.0, description="Metres per second")
    wind_direction: int = Field(default=0, description="Degrees")
    pressure: float = Field(..., description="hPa")
    uv_index: Optional[float] = None
    visibility: Optional[float] = Field(default=None, description="Kilometres")
    icon: str
    last_updated: str


class WeatherForecastDTO(BaseModel):
    """Daily forecast summary."""

    date: str
    max_temp: float
    min_temp: float
    description: str
    icon: str
    precipitation: float = Field(default=0.0, description="Millimetres over the day")


class TripWeatherDTO(BaseModel):
    """Weather at a trip destination: current conditions plus daily outlook.

    ``daily`` stays empty when only the place name is known or the
    forecast lookup failed.
    """

    current: WeatherDTO
    daily: List[WeatherForecastDTO] = Field(default_factory=list)
