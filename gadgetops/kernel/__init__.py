"""
Kernel Layer

- Models (users, gadgets)
- Repositories (the only database access)
- Identity Core (password hashing, session tokens, signup/signin)
- Permission Core (access gate)
"""

from gadgetops.kernel.models import (
    User,
    UserRole,
    Gadget,
    GadgetStatus,
)

__all__ = [
    "User",
    "UserRole",
    "Gadget",
    "GadgetStatus",
]
