"""
Kernel Data Models

SQLAlchemy models for users and the gadget inventory.
"""

from gadgetops.kernel.models.base import Base, TimestampMixin, generate_uuid
from gadgetops.kernel.models.user import User, UserRole
from gadgetops.kernel.models.gadget import (
    Gadget,
    GadgetStatus,
    MIN_SUCCESS_PROBABILITY,
    MAX_SUCCESS_PROBABILITY,
)

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "generate_uuid",
    # User
    "User",
    "UserRole",
    # Gadget
    "Gadget",
    "GadgetStatus",
    "MIN_SUCCESS_PROBABILITY",
    "MAX_SUCCESS_PROBABILITY",
]
