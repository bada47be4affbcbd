"""
Database helper functions — member lookups and inserts.

"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import DEFAULT_CHURCH_ROLE, Member

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(Exception):
    """Raised when the unique email constraint rejects an insert."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


async def get_member_by_email(session: AsyncSession, email: str) -> Optional[Member]:
    result = await session.execute(select(Member).where(Member.email == email))
    return result.scalar_one_or_none()


async def get_member_by_id(session: AsyncSession, member_id: int) -> Optional[Member]:
    result = await session.execute(select(Member).where(Member.id == member_id))
    return result.scalar_one_or_none()


async def email_exists(session: AsyncSession, email: str) -> bool:
    result = await session.execute(select(Member.id).where(Member.email == email))
    return result.first() is not None


async def create_member(
    session: AsyncSession,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password_hash: str,
    phone: str | None = None,
    date_of_birth: date | None = None,
    gender: str | None = None,
    address: str | None = None,
    church_role: str | None = None,
) -> Member:
    """
    Insert a ``Member`` row and return it with server-assigned columns loaded.

    A concurrent sign-up that wins the race on the same email surfaces here as
    an ``IntegrityError``; it is translated to ``EmailAlreadyRegistered`` so
    callers handle both paths the same way.
    """
    member = Member(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone or None,
        password_hash=password_hash,
        date_of_birth=date_of_birth,
        gender=gender or None,
        address=address or None,
        church_role=church_role or DEFAULT_CHURCH_ROLE,
    )
    session.add(member)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        if await email_exists(session, email):
            raise EmailAlreadyRegistered(email) from exc
        raise
    await session.refresh(member)
    return member
