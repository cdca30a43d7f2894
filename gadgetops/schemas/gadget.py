"""
Gadget schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from gadgetops.kernel.models.gadget import (
    MAX_SUCCESS_PROBABILITY,
    MIN_SUCCESS_PROBABILITY,
    GadgetStatus,
)
from gadgetops.schemas.common import CamelModel

# Wire names accepted by PATCH /gadgets/{id}
UPDATABLE_FIELDS = ("name", "successProbability", "status")


class GadgetResponse(CamelModel):
    """Gadget as returned to clients."""

    id: uuid.UUID
    name: str
    success_probability: int
    status: GadgetStatus
    created_at: datetime
    updated_at: datetime


class GadgetPatch(CamelModel):
    """Validated values of a partial update. Transitions are not checked."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    success_probability: Optional[int] = Field(
        None,
        ge=MIN_SUCCESS_PROBABILITY,
        le=MAX_SUCCESS_PROBABILITY,
        strict=True,
    )
    status: Optional[GadgetStatus] = None


class GadgetEnvelope(CamelModel):
    """Mutation result: a message plus the gadget's new state."""

    message: str
    gadget: GadgetResponse


class SelfDestructResponse(CamelModel):
    """Self-destruct result. The code is for display only."""

    message: str = "Self-destruct initiated"
    confirmation_code: str
