"""
UserStore — the only code that reads or writes the ``users`` table.

Every operation opens its own session and commits (or rolls back) before
returning.  Uniqueness of ``email`` is enforced by the unique index; the
``IntegrityError`` it raises is the authoritative duplicate signal.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from database.models import Base, User
from database.session import build_session_factory

logger = logging.getLogger(__name__)


class UserStoreError(Exception):
    """Base class for store-level failures the API maps to a status code."""


class UserNotFound(UserStoreError):
    def __init__(self, user_id: Any):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class DuplicateEmail(UserStoreError):
    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered")
        self.email = email


def _parse_id(user_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        raise UserNotFound(user_id) from None


def _is_email_conflict(exc: IntegrityError) -> bool:
    # SQLite names the column, PostgreSQL the index (ix_users_email)
    return "email" in str(exc.orig).lower()


class UserStore:
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)
        self._schema_ready = False

    # ── Lifecycle ──────────────────────────────────────────────────────

    async def connect(self) -> None:
        """Create the schema (idempotent; safe to call repeatedly)."""
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True
        logger.info("User store ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()
        self._schema_ready = False
        logger.info("User store closed")

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("User store ping failed", exc_info=True)
            return False

    # ── Reads ──────────────────────────────────────────────────────────

    async def list_all(self) -> List[User]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(User).order_by(User.created_at, User.user_id)
            )
            return list(result.scalars().all())

    async def get(self, user_id: str | uuid.UUID) -> User:
        uid = _parse_id(user_id)
        async with self._session_factory() as session:
            user = await session.get(User, uid)
        if user is None:
            raise UserNotFound(user_id)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    # ── Writes ─────────────────────────────────────────────────────────

    async def create(self, fields: Dict[str, Any]) -> User:
        user = User(user_id=uuid.uuid4(), **fields)
        async with self._session_factory() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                if not _is_email_conflict(exc):
                    raise
                raise DuplicateEmail(fields.get("email", "")) from None
        logger.info("Created user %s", user.user_id)
        return user

    async def replace(self, user_id: str | uuid.UUID, fields: Dict[str, Any]) -> User:
        """Overwrite every given column of an existing user."""
        uid = _parse_id(user_id)
        async with self._session_factory() as session:
            user = await session.get(User, uid)
            if user is None:
                raise UserNotFound(user_id)
            for key, value in fields.items():
                setattr(user, key, value)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                if not _is_email_conflict(exc):
                    raise
                raise DuplicateEmail(fields.get("email", "")) from None
            await session.refresh(user)
        logger.info("Replaced user %s", uid)
        return user

    async def delete(self, user_id: str | uuid.UUID) -> None:
        uid = _parse_id(user_id)
        async with self._session_factory() as session:
            user = await session.get(User, uid)
            if user is None:
                raise UserNotFound(user_id)
            await session.delete(user)
            await session.commit()
        logger.info("Deleted user %s", uid)
