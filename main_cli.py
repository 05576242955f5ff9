"""Project budget command line."""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

import typer

from core.exceptions import DomainError
from core.models import ChangeOrderType, ProjectStatus
from core.services.auth.session import UserSessionPrincipal
from core.services.budget import format_money
from infra.services import ServiceGraph

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Project budget ledger and forecasting.")

_REPORT_FORMATS = ("xlsx", "pdf", "png")


def _parse_day(value: Optional[str], label: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        typer.echo(f"Invalid {label} {value!r}; expected YYYY-MM-DD.", err=True)
        raise typer.Exit(2)


def _money(value: float | None, currency: str) -> str:
    if value is None:
        return "-"
    return f"{format_money(value, currency)} {currency}"


@contextmanager
def _service_graph(user: Optional[str] = None) -> Iterator[ServiceGraph]:
    from infra.db.base import default_session_factory
    from infra.services import build_service_graph

    session = default_session_factory()()
    try:
        graph = build_service_graph(session)
        if user:
            graph.user_session.set_principal(UserSessionPrincipal(user_id=user, username=user))
        yield graph
    finally:
        session.close()


@contextmanager
def _command(name: str, **params) -> Iterator[None]:
    """Trace one command and turn domain errors into a clean exit code."""
    from infra.operational_support import get_operational_support

    support = get_operational_support()
    try:
        with support.traced_command(name, **params) as trace_id:
            try:
                yield
            except (DomainError, typer.Exit):
                raise
            except Exception as exc:
                support.capture_exception(
                    exc_type=type(exc),
                    exc_value=exc,
                    exc_traceback=exc.__traceback__,
                    context=f"command:{name}",
                    trace_id=trace_id,
                )
                raise
    except DomainError as exc:
        logger.warning("%s failed: %s (%s)", name, exc, exc.code)
        typer.echo(f"Error [{exc.code}]: {exc}", err=True)
        raise typer.Exit(1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override PB_LOG_LEVEL for this run"
    ),
):
    """Configure logging before any command runs."""
    from infra.logging_config import setup_logging

    if log_level:
        os.environ["PB_LOG_LEVEL"] = log_level
    setup_logging(console=False)


@app.command("init-db")
def init_db():
    """Create or upgrade the database schema."""
    from infra.migrate import run_migrations
    from infra.path import default_db_path, default_db_url

    with _command("init-db"):
        default_db_path().parent.mkdir(parents=True, exist_ok=True)
        run_migrations(default_db_url())
    typer.echo(f"Database ready at {default_db_path()}")


@app.command("create-project")
def create_project(
    name: str = typer.Argument(..., help="Project name"),
    owner: str = typer.Option(..., "--owner", "-u", help="Owner user id"),
    baseline: float = typer.Option(0.0, "--baseline", "-b", help="Baseline budget"),
    overhead: float = typer.Option(0.0, "--overhead", help="Overhead percent (0-100)"),
    currency: str = typer.Option("USD", "--currency", help="ISO currency code"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date YYYY-MM-DD"),
    end: Optional[str] = typer.Option(None, "--end", help="End date YYYY-MM-DD"),
):
    """Create a project owned by --owner."""
    with _command("create-project"), _service_graph(owner) as graph:
        project = graph.project_service.create_project(
            owner,
            name,
            baseline_budget=baseline,
            overhead_percent=overhead,
            currency=currency,
            start_date=_parse_day(start, "start date"),
            end_date=_parse_day(end, "end date"),
        )
        typer.echo(project.id)


@app.command("projects")
def list_projects(
    user: str = typer.Option(..., "--user", "-u", help="User id (owned and shared projects)"),
    status: Optional[ProjectStatus] = typer.Option(None, "--status", "-s", help="Filter by status"),
):
    """List the projects a user owns or collaborates on."""
    with _command("projects"), _service_graph(user) as graph:
        projects = graph.project_service.list_projects_for_user(user)
        if status is not None:
            projects = [p for p in projects if p.status == status]

        if not projects:
            typer.echo("No projects found.")
            return

        for p in projects:
            shared = " (shared)" if p.owner_id != user else ""
            typer.echo(
                f"  {p.id:<36}  {p.name:<30} {p.status.value:<9} "
                f"{_money(p.baseline_budget + p.overhead_amount, p.currency)}{shared}"
            )
        typer.echo(f"\n  {len(projects)} project(s)")


@app.command()
def summary(
    project_id: str = typer.Argument(..., help="Project id"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Evaluation date YYYY-MM-DD"),
):
    """Show budget figures, burn rate, completion projection and insight."""
    with _command("summary", project_id=project_id), _service_graph() as graph:
        project = graph.project_service.require_project(project_id)
        fc = graph.forecast_service.get_forecast(project_id, today=_parse_day(as_of, "as-of date"))
        cur = project.currency

        typer.echo(f"Project: {project.name} [{project.status.value}]")
        typer.echo(f"  Baseline:            {_money(fc.baseline_budget, cur)}")
        typer.echo(f"  Overhead ({fc.overhead_percent:g}%):     {_money(fc.overhead_amount, cur)}")
        typer.echo(f"  Approved COs:        {_money(fc.approved_change_order_total, cur)}")
        typer.echo(f"  Total budget:        {_money(fc.total_budget, cur)}")
        typer.echo(f"  Cost to date:        {_money(fc.cost_to_date, cur)} ({fc.cost_count} entries)")
        typer.echo(f"  Remaining:           {_money(fc.remaining_budget, cur)}")
        typer.echo(f"  Burn rate:           {_money(fc.burn_rate, cur)}/day")
        typer.echo(f"  Projected total:     {_money(fc.projected_total, cur)}")

        completion = fc.completion
        typer.echo(f"  Completion:          {completion.status.value}")
        if completion.days_until_end is not None:
            typer.echo(f"    Days until end:    {completion.days_until_end}")
            typer.echo(f"    Cost at end:       {_money(completion.projected_cost_at_completion, cur)}")
            flag = "  OVERRUN" if completion.is_overrun else ""
            typer.echo(f"    Remaining at end:  {_money(completion.projected_remaining, cur)}{flag}")

        typer.echo(f"\n  {fc.insight.text}")


@app.command("add-cost")
def add_cost(
    project_id: str = typer.Argument(..., help="Project id"),
    amount: float = typer.Argument(..., help="Amount (> 0)"),
    category: str = typer.Option(..., "--category", "-c", help="Cost category"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    on: Optional[str] = typer.Option(None, "--date", help="Economic date YYYY-MM-DD"),
    vendor: str = typer.Option("", "--vendor", help="Vendor"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
):
    """Record a cost against a project."""
    with _command("add-cost", project_id=project_id), _service_graph(user) as graph:
        cost = graph.cost_service.add_cost(
            project_id,
            amount,
            category,
            cost_date=_parse_day(on, "date"),
            vendor=vendor,
            description=description,
        )
        typer.echo(cost.id)


@app.command("add-change-order")
def add_change_order(
    project_id: str = typer.Argument(..., help="Project id"),
    amount: float = typer.Argument(..., help="Amount magnitude (> 0)"),
    description: str = typer.Option(..., "--description", "-d", help="What changes"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    negative: bool = typer.Option(False, "--negative", help="Reduce the budget instead of adding"),
):
    """Submit a pending change order."""
    kind = ChangeOrderType.NEGATIVE if negative else ChangeOrderType.POSITIVE
    with _command("add-change-order", project_id=project_id), _service_graph(user) as graph:
        order = graph.change_order_service.add_change_order(project_id, kind, amount, description)
        typer.echo(order.id)


@app.command("decide-change-order")
def decide_change_order(
    change_order_id: str = typer.Argument(..., help="Change order id"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    reject: bool = typer.Option(False, "--reject", help="Reject instead of approve"),
):
    """Approve (default) or reject a pending change order."""
    with _command("decide-change-order", change_order_id=change_order_id), _service_graph(user) as graph:
        service = graph.change_order_service
        if reject:
            order = service.reject_change_order(change_order_id)
        else:
            order = service.approve_change_order(change_order_id)
        typer.echo(f"{order.id} {order.status.value}")


@app.command("save-forecast")
def save_forecast(
    project_id: str = typer.Argument(..., help="Project id"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    override: Optional[float] = typer.Option(None, "--override", help="Manual projected total"),
    note: Optional[str] = typer.Option(None, "--summary", help="Free-text summary to store"),
):
    """Save a new forecast snapshot version."""
    with _command("save-forecast", project_id=project_id), _service_graph(user) as graph:
        snapshot = graph.forecast_service.save_forecast(
            project_id,
            manual_override=override,
            ai_summary=note,
        )
        typer.echo(f"Saved forecast v{snapshot.version} for {project_id}")


@app.command("forecasts")
def list_forecasts(
    project_id: str = typer.Argument(..., help="Project id"),
    limit: int = typer.Option(10, "--limit", "-n", help="How many versions to show"),
):
    """Show saved forecast versions, newest first."""
    with _command("forecasts", project_id=project_id), _service_graph() as graph:
        project = graph.project_service.require_project(project_id)
        snapshots = graph.forecast_service.list_forecasts(project_id, limit=limit)
        if not snapshots:
            typer.echo("No forecasts saved yet.")
            return
        for s in snapshots:
            override = f"  override {_money(s.manual_override, project.currency)}" if s.manual_override is not None else ""
            typer.echo(
                f"  v{s.version:<4} {s.created_at:%Y-%m-%d %H:%M}  "
                f"spent {_money(s.cost_to_date, project.currency)}  "
                f"remaining {_money(s.remaining_budget, project.currency)}{override}"
            )


@app.command()
def dashboard(
    user: str = typer.Option(..., "--user", "-u", help="User id"),
    email: Optional[str] = typer.Option(None, "--email", help="Email for pending invites"),
):
    """Portfolio summary across a user's projects."""
    with _command("dashboard"), _service_graph(user) as graph:
        data = graph.dashboard_service.get_portfolio_summary(user, email=email)
        typer.echo("Portfolio")
        typer.echo("=" * 30)
        typer.echo(f"  Active projects:   {data.active_count}")
        typer.echo(f"  Archived projects: {data.archived_count}")
        typer.echo(f"  Active budget:     {data.total_active_budget:,.2f}")
        typer.echo(f"  Pending invites:   {data.pending_invite_count}")
        for alert in data.alerts:
            typer.echo(f"  ! {alert}")


@app.command("export-logs")
def export_logs(
    project_id: str = typer.Argument(..., help="Project id"),
    output: Path = typer.Argument(..., help="CSV file to write"),
    limit: int = typer.Option(50, "--limit", "-n", help="Most recent entries to include"),
):
    """Export the project's audit log as CSV."""
    from core.reporting import export_audit_log_csv

    with _command("export-logs", project_id=project_id), _service_graph() as graph:
        graph.project_service.require_project(project_id)
        path = export_audit_log_csv(graph.audit_service, project_id, output, limit=limit)
    typer.echo(f"Wrote {path}")


@app.command("export-report")
def export_report(
    project_id: str = typer.Argument(..., help="Project id"),
    output: Path = typer.Argument(..., help="Report file (.xlsx, .pdf or .png)"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="xlsx, pdf or png"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Evaluation date YYYY-MM-DD"),
):
    """Export a forecast workbook, PDF report or spend chart."""
    from core.reporting import (
        generate_forecast_excel,
        generate_forecast_pdf,
        generate_spend_chart_png,
    )

    resolved = (fmt or output.suffix.lstrip(".")).lower()
    if resolved not in _REPORT_FORMATS:
        typer.echo(f"Unsupported report format {resolved!r}; use one of {', '.join(_REPORT_FORMATS)}.", err=True)
        raise typer.Exit(2)
    day = _parse_day(as_of, "as-of date")

    with _command("export-report", project_id=project_id, format=resolved), _service_graph() as graph:
        generate = {
            "xlsx": generate_forecast_excel,
            "pdf": generate_forecast_pdf,
            "png": generate_spend_chart_png,
        }[resolved]
        path = generate(graph.forecast_service, project_id, output, as_of=day)
    typer.echo(f"Wrote {path}")


if __name__ == "__main__":
    app()
