from typing import ClassVar

from policy_compass.errors import InvalidArgumentError, PolicyCompassError


class EmptyInputError(InvalidArgumentError):
    """Raised when the document text is absent or whitespace-only."""

    code: ClassVar[str] = "empty-input"


class AnalysisError(PolicyCompassError):
    """Base exception for failures reported by the analysis engine."""


class ResourceExhaustedError(AnalysisError):
    """Raised when the engine quota or rate limit is exhausted."""

    code: ClassVar[str] = "resource-exhausted"


class SafetyRejectedError(AnalysisError):
    """Raised when the engine refuses the content on policy grounds."""

    code: ClassVar[str] = "safety-rejected"


class MalformedResponseError(AnalysisError):
    """Raised when the engine output cannot be read and has no usable fallback."""

    code: ClassVar[str] = "malformed-response"


class InternalError(AnalysisError):
    """Raised for any other engine failure."""

    code: ClassVar[str] = "internal"


class AnalysisNetworkError(InternalError):
    """Raised when the engine call fails due to network/infrastructure issues."""
