# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import (
    AuditLogEntry,
    ChangeOrder,
    CostEntry,
    ForecastSnapshot,
    Project,
    ProjectStatus,
)


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def update(self, project: Project) -> None: ...

    @abstractmethod
    def delete(self, project_id: str) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...

    @abstractmethod
    def list_for_member(self, user_id: str) -> List[Project]: ...

    @abstractmethod
    def list_by_status(self, status: ProjectStatus) -> List[Project]: ...

    @abstractmethod
    def list_with_pending_invite(self, email: str) -> List[Project]: ...


class CostRepository(ABC):
    @abstractmethod
    def add(self, cost: CostEntry) -> None: ...

    @abstractmethod
    def update(self, cost: CostEntry) -> None: ...

    @abstractmethod
    def delete(self, cost_id: str) -> None: ...

    @abstractmethod
    def get(self, cost_id: str) -> Optional[CostEntry]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[CostEntry]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class ChangeOrderRepository(ABC):
    @abstractmethod
    def add(self, change_order: ChangeOrder) -> None: ...

    @abstractmethod
    def update(self, change_order: ChangeOrder) -> None: ...

    @abstractmethod
    def get(self, change_order_id: str) -> Optional[ChangeOrder]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ChangeOrder]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class ForecastRepository(ABC):
    """Append-only: snapshots are never edited once written."""

    @abstractmethod
    def add(self, snapshot: ForecastSnapshot) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str, limit: int | None = None) -> List[ForecastSnapshot]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class AuditLogRepository(ABC):
    """Append-only, removed only together with the owning project."""

    @abstractmethod
    def add(self, entry: AuditLogEntry) -> None: ...

    @abstractmethod
    def list_recent(self, project_id: str, limit: int = 50) -> List[AuditLogEntry]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


__all__ = [
    "ProjectRepository",
    "CostRepository",
    "ChangeOrderRepository",
    "ForecastRepository",
    "AuditLogRepository",
]
