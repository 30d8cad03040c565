# Settings modules
from .app_settings import AppSettings, IntegrationsSettings, get_app_settings
from .integrations_settings import (
    IPGeolocationSettings,
    OpenAISettings,
    OpenWeatherSettings,
)
from .workflow_settings import StorageSettings, WorkflowSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "IntegrationsSettings",
    "IPGeolocationSettings",
    "OpenWeatherSettings",
    "OpenAISettings",
    "WorkflowSettings",
    "StorageSettings",
]
