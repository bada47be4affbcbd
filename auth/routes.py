"""
Member API routes — sign-up, login, profile.

Route prefix: /members
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import (
    ApiError,
    BadRequest,
    Conflict,
    InternalError,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from auth.dependencies import db_session, get_current_member
from auth.password import hash_password_async, verify_password_async
from auth.tokens import TokenClaims, create_token
from database.helpers import (
    EmailAlreadyRegistered,
    create_member,
    get_member_by_email,
    get_member_by_id,
)
from database.models import Member
from utils.schemas import AuthData, MemberPublic, SuccessResponse
from utils.validators import SignupValidationError, validate_signup

logger = logging.getLogger(__name__)

router = APIRouter(tags=["members"])

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_TAKEN = "Email already registered"


def _auth_payload(member: Member) -> Dict[str, Any]:
    token = create_token(member.id, member.email, member.church_role)
    return AuthData(member=MemberPublic.model_validate(member), token=token).model_dump(
        by_alias=True, mode="json",
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    payload: Any = Body(None),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new member and return it with a fresh token."""
    try:
        req = validate_signup(payload)
    except SignupValidationError as exc:
        raise ValidationFailed(exc.errors) from exc

    try:
        if await get_member_by_email(session, req.email) is not None:
            raise Conflict(EMAIL_TAKEN)
        # Release the pooled connection while bcrypt runs; the insert opens its own transaction.
        await session.commit()

        password_hash = await hash_password_async(req.password)
        member = await create_member(
            session,
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            password_hash=password_hash,
            phone=req.phone,
            date_of_birth=req.date_of_birth,
            gender=req.gender,
            address=req.address,
            church_role=req.church_role,
        )
        await session.commit()
    except EmailAlreadyRegistered as exc:
        logger.info("Sign-up lost the race for %s", exc.email)
        raise Conflict(EMAIL_TAKEN) from exc
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("Signup error")
        raise InternalError() from exc

    logger.info("Registered member %s (id=%s)", member.email, member.id)
    return SuccessResponse(
        message="Member registered successfully",
        data=_auth_payload(member),
    ).model_dump()


@router.post("/login")
async def login(
    payload: Optional[Any] = Body(None),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    email = payload.get("email") if isinstance(payload, dict) else None
    password = payload.get("password") if isinstance(payload, dict) else None
    if not email or not password or not isinstance(email, str) or not isinstance(password, str):
        raise BadRequest("Email and password are required")

    try:
        member = await get_member_by_email(session, email)
        await session.commit()
        if member is None:
            logger.info("Login failed: unknown email")
            raise Unauthorized(INVALID_CREDENTIALS)

        if not member.is_active:
            logger.info("Login refused for deactivated member id=%s", member.id)
            raise Unauthorized("Account is deactivated")

        if not await verify_password_async(password, member.password_hash):
            logger.info("Login failed: bad password for member id=%s", member.id)
            raise Unauthorized(INVALID_CREDENTIALS)
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("Login error")
        raise InternalError() from exc

    logger.info("Login: member id=%s", member.id)
    return SuccessResponse(
        message="Login successful",
        data=_auth_payload(member),
    ).model_dump()


@router.get("/profile")
async def profile(
    claims: TokenClaims = Depends(get_current_member),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Return the authenticated member's profile."""
    try:
        member = await get_member_by_id(session, claims.id)
    except Exception as exc:
        logger.exception("Profile fetch error")
        raise InternalError() from exc

    if member is None:
        raise NotFound("Member not found")

    return SuccessResponse(
        message="Profile retrieved",
        data=MemberPublic.model_validate(member).to_json(),
    ).model_dump()
