"""Reporting API wrappers around renderer classes."""

import tempfile
from contextlib import suppress
from datetime import date
from pathlib import Path

from core.reporting.contexts import (
    AuditExportContext,
    ForecastReportContext,
    PdfReportContext,
    SpendChartContext,
)
from core.reporting.renderers.chart import SpendChartRenderer
from core.reporting.renderers.audit_csv import AuditCsvRenderer
from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.services.audit import DEFAULT_AUDIT_LIMIT, AuditService
from core.services.budget import cumulative_spend, sort_costs_by_date
from core.services.forecast import DEFAULT_FORECAST_HISTORY, ForecastService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def build_forecast_report_context(
    forecast_service: ForecastService,
    project_id: str,
    as_of: date | None = None,
) -> ForecastReportContext:
    as_of = as_of or date.today()
    project, costs, change_orders = forecast_service.load_ledgers(project_id)
    return ForecastReportContext(
        project=project,
        forecast=forecast_service.get_forecast(project_id, today=as_of),
        costs=sort_costs_by_date(costs),
        change_orders=change_orders,
        snapshots=forecast_service.list_forecasts(project_id, limit=DEFAULT_FORECAST_HISTORY),
        as_of=as_of,
    )


def _chart_context(ctx: ForecastReportContext) -> SpendChartContext:
    completion = ctx.forecast.completion
    return SpendChartContext(
        project_name=ctx.project.name,
        currency=ctx.project.currency,
        points=cumulative_spend(ctx.costs),
        total_budget=ctx.forecast.total_budget,
        projected_cost_at_completion=completion.projected_cost_at_completion,
        end_date=completion.end_date if completion.days_until_end is not None else None,
    )


def export_audit_log_csv(
    audit_service: AuditService,
    project_id: str,
    output_path: str | Path,
    limit: int = DEFAULT_AUDIT_LIMIT,
) -> Path:
    ctx = AuditExportContext(
        project_id=project_id,
        entries=audit_service.list_recent(project_id, limit=limit),
    )
    return AuditCsvRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_spend_chart_png(
    forecast_service: ForecastService,
    project_id: str,
    output_path: str | Path,
    as_of: date | None = None,
) -> Path:
    ctx = build_forecast_report_context(forecast_service, project_id, as_of=as_of)
    return SpendChartRenderer().render(_chart_context(ctx), _ensure_parent(Path(output_path)))


def generate_forecast_excel(
    forecast_service: ForecastService,
    project_id: str,
    output_path: str | Path,
    as_of: date | None = None,
) -> Path:
    ctx = build_forecast_report_context(forecast_service, project_id, as_of=as_of)
    return ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_forecast_pdf(
    forecast_service: ForecastService,
    project_id: str,
    output_path: str | Path,
    temp_dir: str | Path | None = None,
    as_of: date | None = None,
) -> Path:
    base = build_forecast_report_context(forecast_service, project_id, as_of=as_of)
    temp_dir = Path(temp_dir) if temp_dir is not None else Path(tempfile.mkdtemp(prefix="pb_report_"))
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path = SpendChartRenderer().render(
        _chart_context(base),
        temp_dir / f"spend_{project_id}.png",
    )

    ctx = PdfReportContext(
        project=base.project,
        forecast=base.forecast,
        costs=base.costs,
        change_orders=base.change_orders,
        snapshots=base.snapshots,
        as_of=base.as_of,
        chart_png_path=str(chart_path),
    )
    try:
        return PdfReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)


__all__ = [
    "build_forecast_report_context",
    "export_audit_log_csv",
    "generate_spend_chart_png",
    "generate_forecast_excel",
    "generate_forecast_pdf",
]
