"""Weather adapters."""
from .openweather_client import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
