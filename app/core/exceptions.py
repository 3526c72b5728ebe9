from fastapi import status


class SkillSwapError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SkillSwapError):
    """Missing, empty or oversized input. Raised before touching the database."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(SkillSwapError):
    """A referenced match, user, message, profile or language does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(SkillSwapError):
    status_code = status.HTTP_409_CONFLICT
