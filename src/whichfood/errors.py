"""Application error taxonomy."""


class WhichFoodError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidProfile(WhichFoodError):
    """Body metrics are missing or outside physiological bounds."""

    status_code = 400


class InvalidActivityLevel(WhichFoodError):
    """Activity level is not one of the known levels."""

    status_code = 400


class InvalidGoal(WhichFoodError):
    """A nutrient goal is zero or negative."""

    status_code = 400


class InvalidNutrients(WhichFoodError):
    """A nutrient vector failed validation."""

    status_code = 400


class InvalidMealLog(WhichFoodError):
    """A meal log payload is malformed."""

    status_code = 400


class InvalidHealthMetric(WhichFoodError):
    """A health metric payload is malformed."""

    status_code = 400


class UserAlreadyExists(WhichFoodError):
    """A user with the same e-mail is already registered."""

    status_code = 400


class NotFound(WhichFoodError):
    """Entity is missing or owned by another user."""

    status_code = 404


class ExternalLookupFailure(WhichFoodError):
    """A single food provider lookup failed."""

    status_code = 502

    def __init__(self, keyword: str, reason: str) -> None:
        super().__init__(f"Food lookup failed for {keyword!r}: {reason}")
        self.keyword = keyword
        self.reason = reason


class ExternalLookupExhausted(WhichFoodError):
    """Every food provider lookup for a request failed."""

    status_code = 502
