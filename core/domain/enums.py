from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class DeductionType(str, Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"


class ChangeOrderType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class ChangeOrderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AuditAction(str, Enum):
    COST_ADDED = "cost_added"
    COST_EDITED = "cost_edited"
    COST_DELETED = "cost_deleted"
    CHANGE_ORDER_ADDED = "change_order_added"
    CHANGE_ORDER_APPROVED = "change_order_approved"
    CHANGE_ORDER_REJECTED = "change_order_rejected"
    FORECAST_UPDATED = "forecast_updated"
    PROJECT_CREATED = "project_created"
    PROJECT_UPDATED = "project_updated"
    PROJECT_ARCHIVED = "project_archived"


__all__ = [
    "ProjectStatus",
    "DeductionType",
    "ChangeOrderType",
    "ChangeOrderStatus",
    "AuditAction",
]
