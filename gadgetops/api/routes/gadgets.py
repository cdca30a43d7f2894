"""
Gadget inventory endpoints.

Listing needs a valid token; every mutation also needs the ADMIN role.
"""

import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from gadgetops.api.deps import AdminUserId, CurrentUserId, DbSession
from gadgetops.orchestration.gadget_lifecycle import GadgetLifecycleManager, parse_filters
from gadgetops.schemas.gadget import GadgetEnvelope, GadgetResponse, SelfDestructResponse

router = APIRouter()


@router.get("", response_model=List[GadgetResponse])
async def list_gadgets(
    user_id: CurrentUserId,
    db: DbSession,
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status"),
    name: Optional[str] = Query(None, description="Case-insensitive substring of the codename"),
    min_success_probability: Optional[str] = Query(
        None, alias="minSuccessProbability", description="Inclusive lower bound (default 0)"
    ),
    max_success_probability: Optional[str] = Query(
        None, alias="maxSuccessProbability", description="Inclusive upper bound (default 100)"
    ),
):
    """List gadgets, optionally filtered."""
    filters = parse_filters(
        status=status_filter,
        name=name,
        min_success_probability=min_success_probability,
        max_success_probability=max_success_probability,
    )
    gadgets = await GadgetLifecycleManager(db).list(filters)
    return [GadgetResponse.model_validate(g) for g in gadgets]


@router.post("", response_model=GadgetEnvelope, status_code=status.HTTP_201_CREATED)
async def create_gadget(user_id: AdminUserId, db: DbSession):
    """Add a gadget with a generated codename. No request body."""
    gadget = await GadgetLifecycleManager(db).create()
    return GadgetEnvelope(
        message="Gadget added successfully",
        gadget=GadgetResponse.model_validate(gadget),
    )


@router.patch("/{gadget_id}", response_model=GadgetEnvelope)
async def update_gadget(
    gadget_id: uuid.UUID,
    user_id: AdminUserId,
    db: DbSession,
    payload: Dict[str, Any] = Body(..., examples=[{"status": "DECOMMISSIONED"}]),
):
    """
    Partially update a gadget.

    Only name, successProbability and status are applied; other keys are
    ignored. The status may be set to any value, including back to AVAILABLE.
    """
    gadget = await GadgetLifecycleManager(db).update(gadget_id, payload)
    return GadgetEnvelope(
        message="Gadget updated successfully",
        gadget=GadgetResponse.model_validate(gadget),
    )


@router.delete("/{gadget_id}", response_model=GadgetEnvelope)
async def decommission_gadget(gadget_id: uuid.UUID, user_id: AdminUserId, db: DbSession):
    """Mark a gadget DECOMMISSIONED instead of deleting it."""
    gadget = await GadgetLifecycleManager(db).decommission(gadget_id)
    return GadgetEnvelope(
        message="Gadget decommissioned successfully",
        gadget=GadgetResponse.model_validate(gadget),
    )


@router.post("/{gadget_id}/self-destruct", response_model=SelfDestructResponse)
async def self_destruct_gadget(gadget_id: uuid.UUID, user_id: AdminUserId, db: DbSession):
    """Mark a gadget DESTROYED and return a display-only confirmation code."""
    confirmation_code, _ = await GadgetLifecycleManager(db).self_destruct(gadget_id)
    return SelfDestructResponse(confirmation_code=confirmation_code)
