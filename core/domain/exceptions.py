"""
Domain exceptions.

Every failure raised by collaborators or the workflow engine derives from
WayfarerError so callers can tell expected failures from programming faults.
"""


class WayfarerError(Exception):
    """Base class for all expected Wayfarer failures."""


class InvalidInputError(WayfarerError):
    """Input rejected before any collaborator was called (e.g. malformed IP)."""


class MissingCredentialError(WayfarerError):
    """A collaborator requires an API key that is not configured."""


class CollaboratorError(WayfarerError):
    """An external API call failed (HTTP error, timeout, bad payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidCredentialError(CollaboratorError):
    """The external API rejected the configured credential."""


class RateLimitError(CollaboratorError):
    """The external API throttled the request."""


class MalformedResponseError(CollaboratorError):
    """The external API answered with a payload we could not interpret."""


class ExecutionStateError(WayfarerError):
    """An execution record was mutated after reaching a terminal status."""
