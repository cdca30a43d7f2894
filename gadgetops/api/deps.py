"""
FastAPI dependencies for authentication, authorization, and database sessions.
"""

import uuid
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.config import get_settings
from gadgetops.database import Database
from gadgetops.kernel.models.user import UserRole
from gadgetops.kernel.permissions.access_gate import AccessGate

settings = get_settings()

# Raw token in a plain header (no "Bearer" prefix); absence handled by the gate
token_header = APIKeyHeader(
    name=settings.token_header,
    auto_error=False,
    description="Session token returned by /signin",
)


def get_database(request: Request) -> Database:
    """The Database created with the application."""
    return request.app.state.database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a session committed at the end of the request."""
    async with database.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user_id(
    token: Annotated[Optional[str], Depends(token_header)],
    db: DbSession,
) -> uuid.UUID:
    """Authenticate the request; raise 401 on a missing or bad token."""
    return AccessGate(db).authenticate(token)


CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]


class RoleChecker:
    """
    Dependency class requiring an exact role.

    Usage:
        @router.post("")
        async def create_gadget(
            user_id: Annotated[uuid.UUID, Depends(RoleChecker(UserRole.ADMIN))],
            db: DbSession,
        ):
            ...
    """

    def __init__(self, required_role: UserRole):
        self.required_role = required_role

    async def __call__(self, user_id: CurrentUserId, db: DbSession) -> uuid.UUID:
        await AccessGate(db).authorize(user_id, self.required_role)
        return user_id


AdminUserId = Annotated[uuid.UUID, Depends(RoleChecker(UserRole.ADMIN))]


def get_request_id(request: Request) -> Optional[str]:
    """Get request correlation ID (set by RequestIdMiddleware)."""
    return getattr(request.state, "request_id", None)
