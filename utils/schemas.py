"""
Pydantic schemas for the members API.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Literal, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"
GENDERS = ("male", "female", "other")


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    """
    Sign-up payload.  Only camelCase JSON keys are read (``firstName``,
    ``churchRole``); unknown keys, snake_case spellings included, are dropped.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=False, extra="ignore")

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: str
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    password: str = Field(..., min_length=8)
    date_of_birth: Optional[date] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    church_role: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def _check_email_syntax(cls, value: str) -> str:
        # Syntax only; the address is stored exactly as submitted.
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"must be a valid email address ({exc})") from exc
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class MemberPublic(BaseModel):
    """Client-facing member view.  Credential columns are not part of it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    church_role: str
    join_date: Optional[datetime] = None
    is_active: bool = True
    email_verified: bool = False

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class AuthData(BaseModel):
    member: MemberPublic
    token: str


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Any = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[str]] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    database: Literal["connected", "disconnected"]
    timestamp: datetime
