from collections.abc import Mapping
from types import MappingProxyType

from policy_compass.analysis.exceptions import EmptyInputError
from policy_compass.analysis.models import AnalysisRequest
from policy_compass.auth.identity import Identity, require_identity


def build_analysis_request(
    identity: Identity | None,
    text: str | None,
    variant: str | None = None,
    parameters: Mapping[str, str] | None = None,
) -> AnalysisRequest:
    """Package extracted text for the engine, checking preconditions first.

    Raises:
        UnauthenticatedError: if no valid identity is present.
        EmptyInputError: if text is absent or whitespace-only.
    """
    identity = require_identity(identity)
    if text is None or not text.strip():
        raise EmptyInputError("Document text is empty")
    return AnalysisRequest(
        identity=identity,
        document_text=text,
        variant=variant,
        parameters=MappingProxyType(dict(parameters or {})),
    )
