"""Error taxonomy of the panel.

Every operation failure ends up as one of these. The handlers catch them at
their boundary and turn them into "... Error" log entries; none is retried.
"""

from __future__ import annotations


class PanelError(Exception):
    """Base class for every panel failure."""

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(PanelError):
    """User input rejected locally, before any network call."""


class TransportError(PanelError):
    """The API could not be reached (connection refused, DNS, timeout...)."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ApiError(PanelError):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(PanelError):
    """A 2xx response whose body is not the JSON we expected."""
