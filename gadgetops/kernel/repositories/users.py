"""
Credential store: key-based user lookups and inserts.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.kernel.models.user import User, UserRole


class UserRepository:
    """User persistence on top of an async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user by ID."""
        return await self.session.get(User, user_id)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Get a user by exact username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str, role: UserRole) -> User:
        """
        Insert a user and flush so the id and timestamps are populated.

        Raises:
            sqlalchemy.exc.IntegrityError: username already taken
        """
        user = User(username=username, password_hash=password_hash, role=role)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
