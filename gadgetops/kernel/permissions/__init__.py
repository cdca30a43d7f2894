"""
Permission Core - token authentication and role checks.
"""

from gadgetops.kernel.permissions.access_gate import AccessGate

__all__ = [
    "AccessGate",
]
