from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from core.domain.enums import ChangeOrderStatus, ChangeOrderType
from core.domain.identifiers import generate_id, utc_now
from core.exceptions import InvalidTransitionError


@dataclass
class ChangeOrder:
    id: str
    project_id: str
    type: ChangeOrderType
    amount: float
    description: str
    status: ChangeOrderStatus = ChangeOrderStatus.PENDING
    approved_by: str | None = None
    approved_at: datetime | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def is_decided(self) -> bool:
        return self.status != ChangeOrderStatus.PENDING

    @property
    def signed_amount(self) -> float:
        """Amount with the sign carried by ``type``."""
        if self.type == ChangeOrderType.NEGATIVE:
            return -float(self.amount)
        return float(self.amount)

    def approve(self, by: str | None, at: datetime | None = None) -> None:
        self._require_pending("approve")
        stamp = at or utc_now()
        self.status = ChangeOrderStatus.APPROVED
        self.approved_by = by
        self.approved_at = stamp
        self.updated_at = stamp

    def reject(self, at: datetime | None = None) -> None:
        self._require_pending("reject")
        self.status = ChangeOrderStatus.REJECTED
        self.updated_at = at or utc_now()

    def _require_pending(self, verb: str) -> None:
        if self.is_decided:
            raise InvalidTransitionError(
                f"Cannot {verb} a change order that is already {self.status.value}."
            )

    @staticmethod
    def create(
        project_id: str,
        type: ChangeOrderType,
        amount: float,
        description: str,
        created_by: str | None = None,
    ) -> "ChangeOrder":
        return ChangeOrder(
            id=generate_id(),
            project_id=project_id,
            type=type,
            amount=amount,
            description=description,
            created_by=created_by,
        )


__all__ = ["ChangeOrder"]
