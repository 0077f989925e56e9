"""Error taxonomy shared by every stage.

Codes follow the callable-function vocabulary the UI already understands
("unauthenticated", "invalid-argument", ...), so a caller can branch on
``exc.code`` without importing the concrete classes.
"""

from typing import ClassVar


class PolicyCompassError(Exception):
    """Base exception for every reportable condition."""

    code: ClassVar[str] = "internal"


class UnauthenticatedError(PolicyCompassError):
    """Raised when an operation runs without a valid identity."""

    code: ClassVar[str] = "unauthenticated"


class InvalidArgumentError(PolicyCompassError):
    """Raised when required input is missing or has the wrong shape."""

    code: ClassVar[str] = "invalid-argument"


class FailedPreconditionError(PolicyCompassError):
    """Raised when a collaborator is misconfigured (credentials, engine)."""

    code: ClassVar[str] = "failed-precondition"


_USER_MESSAGES: dict[str, str] = {
    "unauthenticated": "Please sign in again before running this action.",
    "invalid-argument": "The request is missing required input.",
    "empty-input": "The document contains no readable text to analyze.",
    "failed-precondition": "The service is not configured correctly. Contact an administrator.",
    "resource-exhausted": "The analysis quota is exhausted. Try again later.",
    "safety-rejected": "The analysis engine declined to process this document.",
    "malformed-response": "The analysis engine returned a response that could not be read.",
    "unsupported-type": "Only PDF documents are supported.",
    "too-small": "The file is too small to be a real document.",
    "too-large": "The file exceeds the maximum upload size.",
    "corrupt-or-encrypted": "The PDF is corrupt or password protected.",
    "internal": "Something went wrong. Please try again.",
}


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for an error kind."""
    code = exc.code if isinstance(exc, PolicyCompassError) else "internal"
    return _USER_MESSAGES.get(code, _USER_MESSAGES["internal"])
