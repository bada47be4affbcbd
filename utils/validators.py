"""
Request validators used by the member routes.
"""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import ValidationError

from utils.schemas import GENDERS, SignupRequest

logger = logging.getLogger(__name__)


class SignupValidationError(ValueError):
    """Carries every rule the sign-up payload violated."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def _format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"])
        msg = err["msg"]
        if err["type"] == "literal_error":
            msg = "must be one of " + ", ".join(GENDERS)
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def validate_signup(payload: Any) -> SignupRequest:
    """
    Validate an untyped sign-up payload.

    Returns the normalized ``SignupRequest``; raises ``SignupValidationError``
    listing every violated rule, not only the first.
    """
    if not isinstance(payload, dict):
        raise SignupValidationError(["body: must be a JSON object"])
    try:
        return SignupRequest.model_validate(payload)
    except ValidationError as exc:
        errors = _format_errors(exc)
        logger.debug("Sign-up payload rejected: %s", errors)
        raise SignupValidationError(errors) from exc
