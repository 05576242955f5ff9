from __future__ import annotations

from datetime import date

from core.exceptions import ValidationError
from core.interfaces import ProjectRepository


class ProjectValidationMixin:
    _project_repo: ProjectRepository

    def _validate_project_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")

    def _validate_baseline(self, baseline_budget: float, overhead_percent: float) -> None:
        if baseline_budget is None or float(baseline_budget) < 0:
            raise ValidationError(
                "Baseline budget must be zero or more.",
                code="BASELINE_BUDGET_INVALID",
            )
        if overhead_percent is None or not 0 <= float(overhead_percent) <= 100:
            raise ValidationError(
                "Overhead percent must be between 0 and 100.",
                code="OVERHEAD_PERCENT_INVALID",
            )

    def _validate_dates(self, start_date: date | None, end_date: date | None) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError(
                "Project end date cannot be before start date.",
                code="PROJECT_DATES_INVALID",
            )


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_email(email: str) -> str:
    normalized = normalize_email(email)
    local, _, domain = normalized.partition("@")
    if not local or "." not in domain:
        raise ValidationError("A valid email address is required.", code="EMAIL_INVALID")
    return normalized


__all__ = ["ProjectValidationMixin", "normalize_email", "validate_email"]
