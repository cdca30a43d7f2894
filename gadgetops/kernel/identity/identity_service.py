"""
Identity service for signup and signin.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.errors import DuplicateUsernameError, InvalidCredentialsError, InvalidRoleError
from gadgetops.kernel.identity.jwt import TokenService, get_token_service
from gadgetops.kernel.identity.password import PasswordHasher
from gadgetops.kernel.models.user import User, UserRole
from gadgetops.kernel.repositories.users import UserRepository
from gadgetops.logging_config import get_logger

logger = get_logger(__name__)


class IdentityService:
    """
    Service for user identity operations.

    Handles user registration and password sign-in.
    """

    def __init__(
        self,
        session: AsyncSession,
        token_service: Optional[TokenService] = None,
        hasher: Optional[PasswordHasher] = None,
    ):
        self.session = session
        self.users = UserRepository(session)
        self.token_service = token_service or get_token_service()
        self.hasher = hasher or PasswordHasher()

    async def signup(self, username: str, password: str, role: Optional[str]) -> User:
        """
        Register a new user.

        Args:
            username: Unique login name
            password: Plain text password
            role: "BASIC" or "ADMIN"

        Returns:
            The created User

        Raises:
            InvalidRoleError: role is not a known UserRole
            DuplicateUsernameError: username already registered
        """
        try:
            user_role = UserRole(role)
        except ValueError:
            raise InvalidRoleError()

        if await self.users.find_by_username(username):
            raise DuplicateUsernameError()

        password_hash = self.hasher.hash(password)
        try:
            user = await self.users.create(username, password_hash, user_role)
        except IntegrityError:
            # Lost a race with a concurrent signup; the request rolls back
            raise DuplicateUsernameError()

        logger.info("User registered", extra={"user_id": str(user.id), "role": user_role.value})
        return user

    async def signin(self, username: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue a session token.

        Returns:
            Tuple of (User, token)

        Raises:
            InvalidCredentialsError: unknown username or wrong password
        """
        user = await self.users.find_by_username(username)
        if user is None:
            raise InvalidCredentialsError("User does not exist")

        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token = self.token_service.issue(user.id)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user, token
