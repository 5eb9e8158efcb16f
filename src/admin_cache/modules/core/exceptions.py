"""Error taxonomy shared by every domain cache.

- ``TransportError``: the remote service call failed (network, HTTP or
  an unexpected response body).
  Raised by repositories, recorded and re-raised by the dispatcher.
  The cache is never touched when it is raised.
- Local validation failures are pydantic ``ValidationError`` instances
  raised while building request DTOs, before anything is sent.
- Consistency misses (replacing an id that is not on the visible page)
  are no-ops and never surface as exceptions.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorResponse(BaseModel):
    """Uniform error shape reported to the UI: ``{message, errorCode?}``."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    message: str
    error_code: Optional[str] = None


class AdminCacheError(Exception):
    """Base class for errors raised by the cache layer."""


class TransportError(AdminCacheError):
    """The remote service collaborator reported a failure."""

    def __init__(self, error: ErrorResponse) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code

    @classmethod
    def unknown(cls, message: Optional[str] = None) -> TransportError:
        return cls(
            ErrorResponse(
                message=message or UNKNOWN_ERROR_MESSAGE,
                error_code=UNKNOWN_ERROR_CODE,
            )
        )
