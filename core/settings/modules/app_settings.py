from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.integrations_settings import (
    IPGeolocationSettings,
    OpenAISettings,
    OpenWeatherSettings,
)
from core.settings.modules.workflow_settings import StorageSettings, WorkflowSettings


class IntegrationsSettings(BaseModel):
    """Aggregates third-party API settings as nested objects."""

    model_config = ConfigDict(extra="ignore")

    ipgeolocation: IPGeolocationSettings
    openweather: OpenWeatherSettings
    openai: OpenAISettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Shortcut properties expose the three API keys directly because the
    workflow steps only need to know whether each one is configured.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    integrations: IntegrationsSettings
    workflow: WorkflowSettings
    storage: StorageSettings

    @property
    def ipgeolocation_api_key(self) -> str | None:
        return self.integrations.ipgeolocation.api_key

    @property
    def openweather_api_key(self) -> str | None:
        return self.integrations.openweather.api_key

    @property
    def openai_api_key(self) -> str | None:
        return self.integrations.openai.api_key


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        integrations=IntegrationsSettings(
            ipgeolocation=IPGeolocationSettings(),
            openweather=OpenWeatherSettings(),
            openai=OpenAISettings(),
        ),
        workflow=WorkflowSettings(),
        storage=StorageSettings(),
    )
