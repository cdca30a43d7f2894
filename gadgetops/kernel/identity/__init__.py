"""
Identity Core - Authentication and user management.
"""

from gadgetops.kernel.identity.password import PasswordHasher, verify_password, hash_password
from gadgetops.kernel.identity.jwt import (
    SessionTokenPayload,
    TokenService,
    get_token_service,
)
from gadgetops.kernel.identity.identity_service import IdentityService

__all__ = [
    "PasswordHasher",
    "verify_password",
    "hash_password",
    "SessionTokenPayload",
    "TokenService",
    "get_token_service",
    "IdentityService",
]
