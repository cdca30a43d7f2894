"""
Gadget lifecycle: listing, creation, patches and the two status transitions.

    create ──► AVAILABLE ──decommission──► DECOMMISSIONED
                   │
                   └──self_destruct──► DESTROYED

The generic update is a raw field patch: it accepts any known status
without checking that the move is a legal transition. Only decommission
and self_destruct carry meaning.
"""

import random
import re
import secrets
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.engines.generators import CodenameGenerator, ConfirmationCodeGenerator
from gadgetops.errors import (
    GadgetNotFoundError,
    InvalidFieldValueError,
    InvalidFilterError,
    NoValidFieldsError,
)
from gadgetops.kernel.models.gadget import (
    MAX_SUCCESS_PROBABILITY,
    MIN_SUCCESS_PROBABILITY,
    Gadget,
    GadgetStatus,
)
from gadgetops.kernel.repositories.gadgets import GadgetFilter, GadgetRepository
from gadgetops.logging_config import get_logger
from gadgetops.schemas.gadget import UPDATABLE_FIELDS, GadgetPatch

logger = get_logger(__name__)

# Dedicated transitions and the status each one lands in
TRANSITIONS: Dict[str, GadgetStatus] = {
    "decommission": GadgetStatus.DECOMMISSIONED,
    "self_destruct": GadgetStatus.DESTROYED,
}


# ASCII digits with an optional sign
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_bound(raw: Union[str, int, None], default: int, label: str) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if isinstance(raw, bool):
        raise InvalidFilterError(f"{label} must be an integer")
    if isinstance(raw, str):
        if not _INTEGER.fullmatch(raw.strip()):
            raise InvalidFilterError(f"{label} must be an integer")
        raw = int(raw)
    elif not isinstance(raw, int):
        raise InvalidFilterError(f"{label} must be an integer")
    # Anything past either end selects the same rows as one step past it
    return max(MIN_SUCCESS_PROBABILITY - 1, min(raw, MAX_SUCCESS_PROBABILITY + 1))


def parse_filters(
    status: Optional[str] = None,
    name: Optional[str] = None,
    min_success_probability: Union[str, int, None] = None,
    max_success_probability: Union[str, int, None] = None,
) -> GadgetFilter:
    """
    Turn raw query values into a GadgetFilter.

    Empty strings count as absent. Bounds default to 0 and 100.

    Raises:
        InvalidFilterError: unknown status or non-integer bound
    """
    parsed_status = None
    if status:
        try:
            parsed_status = GadgetStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in GadgetStatus)
            raise InvalidFilterError(f"status must be one of: {allowed}")

    return GadgetFilter(
        status=parsed_status,
        name=name or None,
        min_success_probability=_parse_bound(
            min_success_probability, MIN_SUCCESS_PROBABILITY, "minSuccessProbability"
        ),
        max_success_probability=_parse_bound(
            max_success_probability, MAX_SUCCESS_PROBABILITY, "maxSuccessProbability"
        ),
    )


class GadgetLifecycleManager:
    """
    Runs gadget operations against the repository.

    Holds no state of its own beyond its collaborators; access checks
    happen before any method here is called.
    """

    def __init__(
        self,
        session: AsyncSession,
        codenames: Optional[CodenameGenerator] = None,
        confirmation_codes: Optional[ConfirmationCodeGenerator] = None,
        rng: Optional[random.Random] = None,
    ):
        self.gadgets = GadgetRepository(session)
        self.codenames = codenames or CodenameGenerator()
        self.confirmation_codes = confirmation_codes or ConfirmationCodeGenerator()
        self.rng = rng or secrets.SystemRandom()

    async def list(self, filters: GadgetFilter) -> List[Gadget]:
        """Gadgets matching filters, in stable repository order."""
        return await self.gadgets.find(filters)

    async def create(self) -> Gadget:
        """Add a gadget with a fresh codename and random success probability."""
        gadget = await self.gadgets.insert(
            name=self.codenames.generate(),
            success_probability=self.rng.randint(MIN_SUCCESS_PROBABILITY, MAX_SUCCESS_PROBABILITY),
            status=GadgetStatus.AVAILABLE,
        )
        logger.info(
            "Gadget created",
            extra={"gadget_id": str(gadget.id), "codename": gadget.name},
        )
        return gadget

    async def update(self, gadget_id: uuid.UUID, payload: Mapping[str, Any]) -> Gadget:
        """
        Patch name, successProbability and/or status.

        Unknown keys are dropped silently.

        Raises:
            NoValidFieldsError: nothing updatable left after dropping unknown keys
            InvalidFieldValueError: a kept value is null or out of range
            GadgetNotFoundError: no gadget with this id
        """
        fields = {key: value for key, value in payload.items() if key in UPDATABLE_FIELDS}
        if not fields:
            raise NoValidFieldsError()

        nulls = sorted(key for key, value in fields.items() if value is None)
        if nulls:
            raise InvalidFieldValueError(f"Fields cannot be null: {', '.join(nulls)}")

        try:
            patch = GadgetPatch.model_validate(fields)
        except ValidationError as e:
            raise InvalidFieldValueError(
                extra={
                    "errors": [
                        {
                            "field": ".".join(str(loc) for loc in error["loc"]),
                            "message": error["msg"],
                            "type": error["type"],
                        }
                        for error in e.errors()
                    ]
                }
            ) from e

        changes = patch.model_dump(exclude_unset=True)
        gadget = await self.gadgets.update_by_id(gadget_id, changes)
        if gadget is None:
            raise GadgetNotFoundError()

        logger.info(
            "Gadget updated",
            extra={"gadget_id": str(gadget_id), "fields": sorted(changes)},
        )
        return gadget

    async def _transition(self, gadget_id: uuid.UUID, transition: str) -> Gadget:
        # Applied whatever the current status is
        target = TRANSITIONS[transition]
        gadget = await self.gadgets.update_by_id(gadget_id, {"status": target})
        if gadget is None:
            raise GadgetNotFoundError()

        logger.info(
            "Gadget status changed",
            extra={"gadget_id": str(gadget_id), "transition": transition, "status": target.value},
        )
        return gadget

    async def decommission(self, gadget_id: uuid.UUID) -> Gadget:
        """Mark a gadget DECOMMISSIONED. The record is kept."""
        return await self._transition(gadget_id, "decommission")

    async def self_destruct(self, gadget_id: uuid.UUID) -> tuple[str, Gadget]:
        """
        Mark a gadget DESTROYED and hand back a confirmation code.

        The code is for display only: it is neither stored nor required
        to complete the transition. Repeat calls succeed with a new code.
        """
        confirmation_code = self.confirmation_codes.generate()
        gadget = await self._transition(gadget_id, "self_destruct")
        return confirmation_code, gadget
