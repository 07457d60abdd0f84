"""
Normalization of raw diagnostic payloads.

Diagnostic agents do not agree on an envelope. Depending on the provider
version the canonical object comes back directly, nested under ``data`` or
nested under ``result``. Only one level of nesting is unwrapped; deeper
shapes have not been seen from real collaborators.
"""

from typing import Any, Mapping

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import FormatError
from ..core.models import DiagnosticResponse

logger = structlog.get_logger(__name__)


def _select_candidate(raw: Any) -> Mapping[str, Any]:
    """Pick the mapping that should hold the canonical diagnostic fields."""
    if not isinstance(raw, Mapping):
        raise FormatError("unrecognized diagnostic response shape")

    if "overall_health_score" in raw and raw.get("diagnostics") is not None:
        return raw
    if raw.get("data") is not None:
        logger.debug("Unwrapping diagnostic payload", key="data")
        candidate = raw["data"]
    elif raw.get("result") is not None:
        logger.debug("Unwrapping diagnostic payload", key="result")
        candidate = raw["result"]
    else:
        raise FormatError("unrecognized diagnostic response shape")

    if not isinstance(candidate, Mapping):
        raise FormatError("unrecognized diagnostic response shape")
    return candidate


def normalize(raw: Any) -> DiagnosticResponse:
    """
    Coerce a raw collaborator payload into a DiagnosticResponse.

    Accepts the canonical shape, ``{"data": canonical}`` or
    ``{"result": canonical}``. A DiagnosticResponse passes through unchanged
    in content, so normalizing twice gives the same result.

    Raises:
        FormatError: If no known shape matches, if ``diagnostics`` is not a
            list, or if the selected object fails validation
    """
    if isinstance(raw, DiagnosticResponse):
        raw = raw.model_dump(mode="json")

    candidate = _select_candidate(raw)

    diagnostics = candidate.get("diagnostics")
    if not isinstance(diagnostics, (list, tuple)):
        logger.error("Invalid diagnostics format", diagnostics_type=type(diagnostics).__name__)
        raise FormatError("diagnostics is not a sequence")

    try:
        response = DiagnosticResponse.model_validate(dict(candidate))
    except PydanticValidationError as e:
        raise FormatError(f"invalid diagnostic response: {e}") from e

    logger.info(
        "Normalized diagnostic response",
        health_score=response.overall_health_score,
        diagnostics=len(response.diagnostics),
    )
    return response
