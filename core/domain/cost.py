from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from core.domain.enums import DeductionType
from core.domain.identifiers import generate_id, utc_now


@dataclass
class CostEntry:
    id: str
    project_id: str
    amount: float
    category: str
    date: date
    vendor: str = ""
    description: str = ""
    # Descriptive tag only; no arithmetic reads it.
    deduction_type: DeductionType = DeductionType.MANUAL
    created_by: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    @staticmethod
    def create(
        project_id: str,
        amount: float,
        category: str,
        date: date,
        vendor: str = "",
        description: str = "",
        deduction_type: DeductionType = DeductionType.MANUAL,
        created_by: str | None = None,
    ) -> "CostEntry":
        return CostEntry(
            id=generate_id(),
            project_id=project_id,
            amount=amount,
            category=category,
            date=date,
            vendor=vendor,
            description=description,
            deduction_type=deduction_type,
            created_by=created_by,
        )


__all__ = ["CostEntry"]
