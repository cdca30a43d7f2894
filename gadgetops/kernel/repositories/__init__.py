"""
Store adapters: the only code that talks to the database directly.
"""

from gadgetops.kernel.repositories.users import UserRepository
from gadgetops.kernel.repositories.gadgets import GadgetFilter, GadgetRepository

__all__ = [
    "UserRepository",
    "GadgetFilter",
    "GadgetRepository",
]
