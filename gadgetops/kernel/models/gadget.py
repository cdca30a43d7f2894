"""
Gadget inventory model.
"""

import uuid
from enum import Enum

from sqlalchemy import CheckConstraint, Integer, String, Uuid
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from gadgetops.kernel.models.base import Base, TimestampMixin, generate_uuid

MIN_SUCCESS_PROBABILITY = 0
MAX_SUCCESS_PROBABILITY = 100


class GadgetStatus(str, Enum):
    """Lifecycle status of a gadget."""
    AVAILABLE = "AVAILABLE"
    DECOMMISSIONED = "DECOMMISSIONED"
    DESTROYED = "DESTROYED"


class Gadget(Base, TimestampMixin):
    """
    An inventory item.

    Rows are never deleted; decommission and self-destruct only move
    the status.
    """

    __tablename__ = "gadgets"
    __table_args__ = (
        CheckConstraint(
            f"success_probability BETWEEN {MIN_SUCCESS_PROBABILITY} AND {MAX_SUCCESS_PROBABILITY}",
            name="ck_gadgets_success_probability_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
    )
    success_probability: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    status: Mapped[GadgetStatus] = mapped_column(
        SAEnum(GadgetStatus, native_enum=False, length=32),
        default=GadgetStatus.AVAILABLE,
        index=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Gadget {self.name!r} {self.status.value}>"
