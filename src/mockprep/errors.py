from __future__ import annotations

from enum import Enum

RESUME_REQUIRED_PHRASE = "Resume upload required"
ROLE_NOT_VERIFIED_PHRASE = "Target role not verified"


class MockPrepError(Exception):
    """Base class for errors surfaced to the user as notices."""


class InvalidResumeError(MockPrepError, ValueError):
    pass


class NotFoundError(MockPrepError, LookupError):
    pass


class PersistenceError(MockPrepError):
    pass


class ResumeRequiredError(PersistenceError):
    def __init__(self, message: str = f"{RESUME_REQUIRED_PHRASE}. Please upload your resume before continuing."):
        super().__init__(message)


class RoleNotVerifiedError(PersistenceError):
    def __init__(self, role: str = ""):
        detail = f" for '{role}'" if role else ""
        super().__init__(f"{ROLE_NOT_VERIFIED_PHRASE}{detail}. Complete resume-role verification first.")


class PersistenceErrorKind(str, Enum):
    RESUME_REQUIRED = "resume_required"
    VERIFICATION_REQUIRED = "verification_required"
    GENERIC = "generic"


def classify_persistence_error(error: BaseException | str) -> PersistenceErrorKind:
    message = str(error)
    if RESUME_REQUIRED_PHRASE in message:
        return PersistenceErrorKind.RESUME_REQUIRED
    if ROLE_NOT_VERIFIED_PHRASE in message:
        return PersistenceErrorKind.VERIFICATION_REQUIRED
    return PersistenceErrorKind.GENERIC


def persistence_error_notice(kind: PersistenceErrorKind, action: str = "save your data") -> str:
    if kind is PersistenceErrorKind.RESUME_REQUIRED:
        return "Resume upload required. Please upload your resume before continuing."
    if kind is PersistenceErrorKind.VERIFICATION_REQUIRED:
        return "Resume-role verification required. Please complete the verification process."
    return f"Failed to {action}. Please try again."
