# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Enum as SAEnum,
    Index,
    Integer,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import (
    AuditAction,
    ChangeOrderStatus,
    ChangeOrderType,
    DeductionType,
    ProjectStatus,
)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    owner_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus), default=ProjectStatus.ACTIVE, nullable=False
    )
    baseline_budget: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    overhead_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    overhead_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="USD")
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    baseline_locked_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    # JSON arrays: user ids / lower-cased emails
    collaborator_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    pending_invites_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_projects_owner", ProjectORM.owner_id)
Index("idx_projects_status", ProjectORM.status)


class CostEntryORM(Base):
    __tablename__ = "costs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    vendor: Mapped[str] = mapped_column(String, default="")
    description: Mapped[str] = mapped_column(String, default="")
    date: Mapped[date] = mapped_column(Date, nullable=False)
    deduction_type: Mapped[DeductionType] = mapped_column(
        SAEnum(DeductionType), default=DeductionType.MANUAL, nullable=False
    )
    created_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_costs_project", CostEntryORM.project_id)
Index("idx_costs_date", CostEntryORM.date)


class ChangeOrderORM(Base):
    __tablename__ = "change_orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    type: Mapped[ChangeOrderType] = mapped_column(SAEnum(ChangeOrderType), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[ChangeOrderStatus] = mapped_column(
        SAEnum(ChangeOrderStatus), default=ChangeOrderStatus.PENDING, nullable=False
    )
    approved_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_change_orders_project", ChangeOrderORM.project_id)
Index("idx_change_orders_status", ChangeOrderORM.status)


class ForecastSnapshotORM(Base):
    __tablename__ = "forecasts"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    cost_to_date: Mapped[float] = mapped_column(Float, nullable=False)
    burn_rate: Mapped[float] = mapped_column(Float, nullable=False)
    remaining_budget: Mapped[float] = mapped_column(Float, nullable=False)
    projected_total: Mapped[float] = mapped_column(Float, nullable=False)
    manual_override: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    insight_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ai_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_forecasts_project", ForecastSnapshotORM.project_id)
Index("ux_forecasts_project_version", ForecastSnapshotORM.project_id, ForecastSnapshotORM.version, unique=True)


class AuditLogORM(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    action: Mapped[AuditAction] = mapped_column(SAEnum(AuditAction), nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    metadata_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_audit_logs_project", AuditLogORM.project_id)
Index("idx_audit_logs_created_at", AuditLogORM.created_at)
