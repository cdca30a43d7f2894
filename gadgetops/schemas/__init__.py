"""
Pydantic schemas for API request/response validation.
"""

from gadgetops.schemas.auth import (
    SignupRequest,
    SigninRequest,
    UserResponse,
    SignupResponse,
    SigninResponse,
)
from gadgetops.schemas.gadget import (
    UPDATABLE_FIELDS,
    GadgetResponse,
    GadgetPatch,
    GadgetEnvelope,
    SelfDestructResponse,
)
from gadgetops.schemas.common import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Auth
    "SignupRequest",
    "SigninRequest",
    "UserResponse",
    "SignupResponse",
    "SigninResponse",
    # Gadget
    "UPDATABLE_FIELDS",
    "GadgetResponse",
    "GadgetPatch",
    "GadgetEnvelope",
    "SelfDestructResponse",
    # Common
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
]
