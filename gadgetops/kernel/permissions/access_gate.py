"""
Access gate: token authentication followed by role authorization.
"""

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.errors import ForbiddenError, MissingTokenError, UserNotFoundError
from gadgetops.kernel.identity.jwt import TokenService, get_token_service
from gadgetops.kernel.models.user import User, UserRole
from gadgetops.kernel.repositories.users import UserRepository


class AccessGate:
    """
    Two checks applied per operation.

    - authenticate: a valid session token is present (no store access)
    - authorize: the token's user currently holds exactly the required role

    Roles are not hierarchical: ADMIN does not satisfy a BASIC requirement.
    """

    def __init__(self, session: AsyncSession, token_service: Optional[TokenService] = None):
        self.users = UserRepository(session)
        self.token_service = token_service or get_token_service()

    def authenticate(self, token: Optional[str]) -> uuid.UUID:
        """
        Return the user id embedded in a session token.

        Raises:
            MissingTokenError: no token supplied
            InvalidTokenError: token fails verification
        """
        if not token:
            raise MissingTokenError()
        return self.token_service.verify(token)

    async def authorize(self, user_id: uuid.UUID, required_role: UserRole) -> User:
        """
        Look up the user's current role and compare it to required_role.

        One store lookup per call; roles are never cached.

        Raises:
            UserNotFoundError: no user with this id
            ForbiddenError: role differs from required_role
        """
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        if user.role != required_role:
            raise ForbiddenError(required_role.value)
        return user
