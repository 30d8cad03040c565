"""
OpenWeatherMap adapter.

Current conditions and 5-day forecasts in metric units.
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from core.application.dtos.weather_dto import WeatherDTO, WeatherForecastDTO
from core.application.interfaces import IWeatherProvider
from core.domain.clock import utc_now
from core.domain.exceptions import CollaboratorError, MalformedResponseError
from core.infrastructure.adapters.http import request_json
from core.settings.modules.integrations_settings import OpenWeatherSettings


logger = logging.getLogger(__name__)


class OpenWeatherClient(IWeatherProvider):
    """
    OpenWeatherMap implementation of IWeatherProvider.
    """

    def __init__(self, settings: OpenWeatherSettings):
        self.base_url = settings.base_url.rstrip("/")
        self.timeout_seconds = settings.timeout_seconds

    async def get_weather(self, latitude: float, longitude: float, api_key: str) -> WeatherDTO:
        try:
            data = await self._get("weather", {"lat": latitude, "lon": longitude, "appid": api_key})
            return self.to_weather(data)
        except CollaboratorError as e:
            logger.error(f"Error getting current weather: {e}")
            raise type(e)(f"Failed to get weather data: {e}", status_code=e.status_code) from e

    async def get_weather_by_city(
        self, city: str, country: Optional[str], api_key: str
    ) -> WeatherDTO:
        query = f"{city},{country}" if country else city
        try:
            data = await self._get("weather", {"q": query, "appid": api_key})
            return self.to_weather(data)
        except CollaboratorError as e:
            logger.error(f"Error getting weather by city: {e}")
            raise type(e)(f"Failed to get weather for {city}: {e}", status_code=e.status_code) from e

    async def get_forecast(
        self, latitude: float, longitude: float, api_key: str
    ) -> List[WeatherForecastDTO]:
        try:
            data = await self._get("forecast", {"lat": latitude, "lon": longitude, "appid": api_key})
            return self.to_daily_forecast(data)
        except CollaboratorError as e:
            logger.error(f"Error getting weather forecast: {e}")
            raise type(e)(f"Failed to get weather forecast: {e}", status_code=e.status_code) from e

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        data = await request_json(
            "GET",
            f"{self.base_url}/{endpoint}",
            service="Weather",
            timeout_seconds=self.timeout_seconds,
            params={**params, "units": "metric"},
        )
        if not isinstance(data, dict):
            raise MalformedResponseError("Weather API returned an unexpected payload")
        return data

    @staticmethod
    def to_weather(data: Dict[str, Any]) -> WeatherDTO:
        """Map a /weather payload onto WeatherDTO."""
        try:
            main = data["main"]
            condition = data["weather"][0]
            wind = data.get("wind") or {}
            visibility = data.get("visibility")
            return WeatherDTO(
                location=f"{data.get('name', 'Unknown')}, {data.get('sys', {}).get('country', '')}".rstrip(", "),
                temperature=round(float(main["temp"]), 1),
                description=condition["description"],
                humidity=int(main["humidity"]),
                wind_speed=float(wind.get("speed") or 0),
                wind_direction=int(wind.get("deg") or 0),
                pressure=float(main["pressure"]),
                uv_index=data.get("uvi"),
                visibility=visibility / 1000 if visibility else None,
                icon=condition["icon"],
                last_updated=utc_now().isoformat(),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected weather payload: missing {e}") from e

    @staticmethod
    def to_daily_forecast(data: Dict[str, Any], days: int = 5) -> List[WeatherForecastDTO]:
        """Group 3-hourly /forecast entries into daily summaries."""
        daily: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
        try:
            for item in data.get("list", []):
                day = item["dt_txt"].split(" ")[0]
                daily.setdefault(day, []).append(item)

            forecasts: List[WeatherForecastDTO] = []
            for day, items in list(daily.items())[:days]:
                temps = [entry["main"]["temp"] for entry in items]
                midday = next(
                    (entry for entry in items if "12:00:00" in entry["dt_txt"]),
                    items[len(items) // 2],
                )
                precipitation = sum(
                    (entry.get("rain") or {}).get("3h") or (entry.get("snow") or {}).get("3h") or 0
                    for entry in items
                )
                forecasts.append(
                    WeatherForecastDTO(
                        date=day,
                        max_temp=round(max(temps), 1),
                        min_temp=round(min(temps), 1),
                        description=midday["weather"][0]["description"],
                        icon=midday["weather"][0]["icon"],
                        precipitation=round(precipitation, 1),
                    )
                )
            return forecasts
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected forecast payload: missing {e}") from e
