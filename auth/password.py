"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The actual bcrypt call runs in a
worker thread so the event loop keeps serving other requests.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib

import bcrypt

from config.settings import config

# bcrypt only looks at the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def _prepare(password: str) -> bytes:
    raw = password.encode()
    if len(raw) <= _BCRYPT_MAX_BYTES:
        return raw
    return base64.b64encode(hashlib.sha256(raw).digest())


def hash_password_sync(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt using a fresh random salt."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(_prepare(password), salt).decode()


def verify_password_sync(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_prepare(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password(password: str, rounds: int | None = None) -> str:
    return await asyncio.to_thread(hash_password_sync, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password_sync, password, password_hash)
