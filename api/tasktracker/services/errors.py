"""Error taxonomy shared by the stores, the admission controller and the routes.

Every error carries the HTTP status it maps to, so the app needs a single
exception handler. Client errors never have side effects on the store.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(TaskTrackerError):
    """Malformed or missing id, empty text, invalid quota value."""

    status_code = 400


class NotFoundError(TaskTrackerError):
    status_code = 400


class AuthorizationError(TaskTrackerError):
    """The task exists but belongs to a different user."""

    status_code = 403


class QuotaExceededError(TaskTrackerError):
    """The user already created ``max_tasks_per_day`` tasks today."""

    status_code = 400

    def __init__(self, detail: str = "Daily task limit reached") -> None:
        super().__init__(detail)


class StoreUnavailableError(TaskTrackerError):
    """The database could not be reached or failed mid-operation. Callers retry."""

    status_code = 500
