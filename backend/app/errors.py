"""Error hierarchy for the habit tracker.

Every error carries a stable ``code`` and the HTTP status it maps to. The
engine and services raise these; only ``app.error_handlers`` turns them into
responses, so nothing below the router layer imports FastAPI.
"""


class HabitTrackerError(Exception):
    """Base exception for all habit tracker errors."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message, "code": self.code}


# ─── 404 ────────────────────────────────────────────────────────

class NotFoundError(HabitTrackerError):
    code = "NOT_FOUND"
    http_status = 404


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class HabitNotFoundError(NotFoundError):
    code = "HABIT_NOT_FOUND"

    def __init__(self, message: str = "Habit not found"):
        super().__init__(message)


# ─── 400 ────────────────────────────────────────────────────────

class HabitValidationError(HabitTrackerError):
    """A provided field has an unacceptable value."""
    code = "VALIDATION_ERROR"
    http_status = 400


class InvalidNameError(HabitValidationError):
    code = "INVALID_NAME"

    def __init__(self, message: str = "New habit name is required"):
        super().__init__(message)


class DuplicateNameError(HabitTrackerError):
    code = "DUPLICATE_NAME"
    http_status = 400

    def __init__(self, name: str):
        super().__init__("User already exists")
        self.name = name


class NotEligibleError(HabitTrackerError):
    """The 24-hour window since the last update has not elapsed.

    A valid business outcome, not a fault: it is reported as 400 and never retried.
    """
    code = "NOT_ELIGIBLE"
    http_status = 400

    def __init__(self, message: str = "Cannot increment. Less than 24 hours have passed since the last update."):
        super().__init__(message)


# ─── 401 / 403 ──────────────────────────────────────────────────

class InvalidCredentialsError(HabitTrackerError):
    code = "INVALID_CREDENTIALS"
    http_status = 401

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class InvalidApiKeyError(HabitTrackerError):
    code = "INVALID_API_KEY"
    http_status = 403

    def __init__(self, message: str = "Forbidden: invalid or missing API key"):
        super().__init__(message)


# ─── 409 ────────────────────────────────────────────────────────

class ConflictError(HabitTrackerError):
    """The stored user document changed between fetch and save."""
    code = "SAVE_CONFLICT"
    http_status = 409

    def __init__(self, user_id: str, expected_version: int):
        super().__init__(
            f"User {user_id} was modified concurrently (expected version {expected_version}). Retry the request."
        )
        self.user_id = user_id
        self.expected_version = expected_version
