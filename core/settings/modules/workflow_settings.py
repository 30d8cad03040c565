from __future__ import annotations

from typing import List

from pydantic import Field

from core.settings.base import WayfarerBaseSettings


class WorkflowSettings(WayfarerBaseSettings):
    """
    Workflow engine defaults.

    The travel workflows fall back to these values whenever the caller
    does not supply interests, budget, style or group size.
    """

    default_interests: List[str] = Field(
        default_factory=lambda: ["culture", "food", "nature"],
        alias="WORKFLOW_DEFAULT_INTERESTS",
    )
    default_budget: str = Field(default="$100-200 per day", alias="WORKFLOW_DEFAULT_BUDGET")
    default_travel_style: str = Field(default="balanced", alias="WORKFLOW_DEFAULT_TRAVEL_STYLE")
    default_travelers: int = Field(default=1, ge=1, alias="WORKFLOW_DEFAULT_TRAVELERS")

    # Per-step retries; 1 means a single attempt.
    step_max_attempts: int = Field(default=1, ge=1, alias="WORKFLOW_STEP_MAX_ATTEMPTS")
    step_backoff_seconds: float = Field(default=0.0, ge=0.0, alias="WORKFLOW_STEP_BACKOFF_SECONDS")

    # Time background executions get to finish on shutdown before they are cancelled
    shutdown_grace_seconds: float = Field(default=10.0, ge=0.0, alias="WORKFLOW_SHUTDOWN_GRACE_SECONDS")


class StorageSettings(WayfarerBaseSettings):
    """Execution store backend selection."""

    backend: str = Field(default="memory", alias="STORE_BACKEND")  # memory | redis
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    key_prefix: str = Field(default="wayfarer:executions", alias="STORE_KEY_PREFIX")
    plan_key_prefix: str = Field(default="wayfarer:plans", alias="STORE_PLAN_KEY_PREFIX")
