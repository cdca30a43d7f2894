"""Orchestration layer - gadget lifecycle state machine."""

from gadgetops.orchestration.gadget_lifecycle import (
    GadgetLifecycleManager,
    TRANSITIONS,
    parse_filters,
)

__all__ = [
    "GadgetLifecycleManager",
    "TRANSITIONS",
    "parse_filters",
]
