"""
Direct lookup endpoints.

Single collaborator calls without an execution record. Failures map to
HTTP errors through the application's exception handlers.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_geolocation_provider, get_settings, get_weather_provider
from core.application.dtos.location_dto import LocationDTO
from core.application.dtos.weather_dto import WeatherDTO, WeatherForecastDTO
from core.domain.exceptions import MissingCredentialError


router = APIRouter()


@router.get(
    "/locations/{ip}",
    response_model=LocationDTO,
    status_code=status.HTTP_200_OK,
    summary="Look up an IP address",
)
async def get_location(
    ip: str,
    settings=Depends(get_settings),
    geolocation=Depends(get_geolocation_provider),
):
    if not settings.ipgeolocation_api_key:
        raise MissingCredentialError("IP geolocation API key not configured")
    return await geolocation.get_location(ip, settings.ipgeolocation_api_key)


@router.get(
    "/weather",
    response_model=WeatherDTO,
    status_code=status.HTTP_200_OK,
    summary="Current weather by coordinates or city",
)
async def get_weather(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    city: Optional[str] = Query(default=None, min_length=1),
    country: Optional[str] = Query(default=None),
    settings=Depends(get_settings),
    weather=Depends(get_weather_provider),
):
    """
    Current weather.

    **Query Parameters:**
    - `lat` and `lon`, or
    - `city` with an optional `country`
    """
    api_key = settings.openweather_api_key
    if not api_key:
        raise MissingCredentialError("Weather API key not configured")

    if lat is not None and lon is not None:
        return await weather.get_weather(lat, lon, api_key)
    if city:
        return await weather.get_weather_by_city(city, country, api_key)

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Provide either lat and lon, or city"
    )


@router.get(
    "/weather/forecast",
    response_model=List[WeatherForecastDTO],
    status_code=status.HTTP_200_OK,
    summary="Daily forecast by coordinates",
)
async def get_weather_forecast(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    settings=Depends(get_settings),
    weather=Depends(get_weather_provider),
):
    """Up to five daily summaries grouped from the 3-hourly forecast."""
    api_key = settings.openweather_api_key
    if not api_key:
        raise MissingCredentialError("Weather API key not configured")
    return await weather.get_forecast(lat, lon, api_key)
