"""
Domain errors.

Each error knows the HTTP status and machine-readable code it maps to;
main.py renders them as {"detail": ..., "code": ...}.
"""

from typing import Any, Optional

from fastapi import status


class GadgetOpsError(Exception):
    """Base class for errors reported to the caller with a specific kind."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, extra: Optional[dict[str, Any]] = None):
        self.message = message or self.message
        self.extra = extra or {}
        super().__init__(self.message)


# Access gate

class MissingTokenError(GadgetOpsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "missing_token"
    message = "Unauthorized: No token provided"


class InvalidTokenError(GadgetOpsError):
    """Bad signature, expired, or not a token at all."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_token"
    message = "Unauthorized: Invalid token"


class UserNotFoundError(GadgetOpsError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "user_not_found"
    message = "User not found"


class ForbiddenError(GadgetOpsError):
    """
    Raised when the caller's role is not the role an operation requires.

    Attributes:
        required_role: The role the operation demanded
    """

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Forbidden: Insufficient permissions"

    def __init__(self, required_role: Optional[str] = None):
        self.required_role = required_role
        message = None
        if required_role:
            message = f"Forbidden: Insufficient permissions (requires: {required_role})"
        super().__init__(message)


# Identity

class DuplicateUsernameError(GadgetOpsError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_username"
    message = "Username already exists"


class InvalidRoleError(GadgetOpsError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_role"
    message = "Invalid role. Role must be 'BASIC' or 'ADMIN'."


class InvalidCredentialsError(GadgetOpsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid login credentials"


# Gadgets

class GadgetNotFoundError(GadgetOpsError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "gadget_not_found"
    message = "Gadget not found"


class NoValidFieldsError(GadgetOpsError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "no_valid_fields"
    message = "Invalid fields provided. You can only update: name, successProbability, status."


class InvalidFilterError(GadgetOpsError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_filter"
    message = "Invalid filter value"


class InvalidFieldValueError(GadgetOpsError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_field_value"
    message = "Invalid value for an updatable field"
