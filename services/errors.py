"""
Error taxonomy for the onboarding service.

Each error carries the HTTP status it maps to; main.py registers one handler
that renders {"errcode", "message", "details"?} for all of them.
"""
from __future__ import annotations

from typing import Any


class OnboardingError(Exception):
    status_code = 500
    label = "Internal Error"
    errcode = "E00.000"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} [{self.status_code}] >> {self.message}"
        return f"{self.errcode} [{self.status_code}] >> {self.message} >> {self.details}"

    @property
    def content(self) -> dict[str, Any]:
        if self.details is None:
            return {"errcode": self.errcode, "message": self.message}
        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class AuthenticationError(OnboardingError):
    label = "Unauthorized"
    status_code = 401
    errcode = "E00.401"


class PermissionDenied(OnboardingError):
    label = "Forbidden"
    status_code = 403
    errcode = "E00.403"


class NotFound(OnboardingError):
    label = "Not Found"
    status_code = 404
    errcode = "E00.404"


class InvalidTransition(OnboardingError):
    label = "Conflict"
    status_code = 409
    errcode = "E01.409"


class FormLocked(InvalidTransition):
    errcode = "E02.409"


class AlreadyExists(OnboardingError):
    label = "Conflict"
    status_code = 409
    errcode = "E03.409"


class BadRequest(OnboardingError):
    label = "Bad Request"
    status_code = 400
    errcode = "E00.400"


class ValidationFailed(OnboardingError):
    label = "Unprocessable Entity"
    status_code = 422
    errcode = "E00.422"


class StoreError(OnboardingError):
    label = "Store Failure"
    status_code = 500
    errcode = "E00.500"
