"""
Gadget repository: filtered reads, inserts and field-level updates.
"""

import uuid
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.kernel.models.gadget import (
    MAX_SUCCESS_PROBABILITY,
    MIN_SUCCESS_PROBABILITY,
    Gadget,
    GadgetStatus,
)


@dataclass(frozen=True)
class GadgetFilter:
    """Parsed list filters. Probability bounds are inclusive."""

    status: Optional[GadgetStatus] = None
    name: Optional[str] = None
    min_success_probability: int = MIN_SUCCESS_PROBABILITY
    max_success_probability: int = MAX_SUCCESS_PROBABILITY


class GadgetRepository:
    """Gadget persistence on top of an async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, filters: GadgetFilter) -> List[Gadget]:
        """Gadgets matching every supplied filter, oldest first."""
        query = select(Gadget).where(
            Gadget.success_probability >= filters.min_success_probability,
            Gadget.success_probability <= filters.max_success_probability,
        )
        if filters.status is not None:
            query = query.where(Gadget.status == filters.status)
        if filters.name:
            query = query.where(Gadget.name.icontains(filters.name, autoescape=True))

        result = await self.session.execute(query.order_by(Gadget.created_at, Gadget.id))
        return list(result.scalars().all())

    async def get_by_id(self, gadget_id: uuid.UUID) -> Optional[Gadget]:
        return await self.session.get(Gadget, gadget_id)

    async def insert(self, name: str, success_probability: int, status: GadgetStatus) -> Gadget:
        gadget = Gadget(name=name, success_probability=success_probability, status=status)
        self.session.add(gadget)
        await self.session.flush()
        await self.session.refresh(gadget)
        return gadget

    async def update_by_id(
        self,
        gadget_id: uuid.UUID,
        fields: Mapping[str, Any],
    ) -> Optional[Gadget]:
        """
        Write only the given columns.

        Args:
            gadget_id: Gadget to update
            fields: Column name -> new value

        Returns:
            The updated gadget, or None if no gadget has this id
        """
        gadget = await self.get_by_id(gadget_id)
        if gadget is None:
            return None

        for column, value in fields.items():
            setattr(gadget, column, value)

        await self.session.flush()
        # updated_at is server-side; reload so it is not lazily fetched later
        await self.session.refresh(gadget)
        return gadget
