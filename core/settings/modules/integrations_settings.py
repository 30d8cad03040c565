from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from core.settings.base import WayfarerBaseSettings


class IPGeolocationSettings(WayfarerBaseSettings):
    """
    ipgeolocation.io integration settings.
    Loaded from .env file with exact variable name matching.
    """

    api_key: Optional[str] = Field(default=None, alias="IPGEOLOCATION_API_KEY")
    base_url: str = Field(default="https://api.ipgeolocation.io/ipgeo", alias="IPGEOLOCATION_BASE_URL")
    timeout_seconds: float = Field(default=10.0, alias="IPGEOLOCATION_TIMEOUT_SECONDS")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class OpenWeatherSettings(WayfarerBaseSettings):
    """
    OpenWeatherMap integration settings.
    Loaded from .env file with exact variable name matching.
    """

    api_key: Optional[str] = Field(default=None, alias="OPENWEATHER_API_KEY")
    base_url: str = Field(default="https://api.openweathermap.org/data/2.5", alias="OPENWEATHER_BASE_URL")
    timeout_seconds: float = Field(default=10.0, alias="OPENWEATHER_TIMEOUT_SECONDS")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class OpenAISettings(WayfarerBaseSettings):
    """
    OpenAI chat completions settings.
    Loaded from .env file with exact variable name matching.
    """

    api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    max_tokens: int = Field(default=1500, alias="OPENAI_MAX_TOKENS")
    temperature: float = Field(default=0.7, alias="OPENAI_TEMPERATURE")
    timeout_seconds: float = Field(default=30.0, alias="OPENAI_TIMEOUT_SECONDS")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return v or None
