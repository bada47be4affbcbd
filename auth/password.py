"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor (``BCRYPT_ROUNDS``, default 12).
bcrypt is CPU-bound, so request handlers call the ``*_async`` variants,
which run the work in a thread and keep the event loop responsive.
"""

from __future__ import annotations

import asyncio

import bcrypt

from config.settings import config

# bcrypt only reads the first 72 bytes; recent releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
