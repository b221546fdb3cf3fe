"""Exceptions shared by the API, the storage backends and the scaffolder."""

from __future__ import annotations


class CrudkitError(Exception):
    """Base class for every error raised by crudkit."""


# ---------------------------------------------------------------------------
# Resource (HTTP-facing) errors
# ---------------------------------------------------------------------------


class ResourceError(CrudkitError):
    """An error that maps onto an HTTP response ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ResourceError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(ResourceError):
    """No record matched the requested id."""

    status_code = 404


class BackendError(ResourceError):
    """The storage backend failed; the raw driver message is kept."""

    status_code = 500


# ---------------------------------------------------------------------------
# Scaffolder errors
# ---------------------------------------------------------------------------


class ScaffoldError(CrudkitError):
    """Raised when the scaffolder is invoked incorrectly or cannot safely
    register a resource in the target project."""
