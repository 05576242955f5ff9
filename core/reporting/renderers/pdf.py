from pathlib import Path
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfReportContext
from core.services.budget import format_money

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
])


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []
        project = ctx.project
        fc = ctx.forecast
        currency = project.currency

        def fmt(value) -> str:
            if value is None:
                return "-"
            return format_money(value, currency)

        # ---------------- Title ----------------
        story.append(Paragraph(escape(f"Budget Forecast - {project.name}"), styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"Project ID: {project.id}",
            f"Currency: {currency}",
            f"Start date: {project.start_date or '-'}",
            f"End date: {project.end_date or '-'}",
            f"As of: {ctx.as_of}",
            f"Total budget: {fmt(fc.total_budget)}",
            f"Cost to date: {fmt(fc.cost_to_date)}",
            f"Remaining budget: {fmt(fc.remaining_budget)}",
            f"Burn rate (per day): {fmt(fc.burn_rate)}",
            f"Projected total: {fmt(fc.projected_total)}",
        ]
        if fc.completion.days_until_end is not None:
            info.append(
                f"Projected cost at completion ({fc.completion.days_until_end} days): "
                f"{fmt(fc.completion.projected_cost_at_completion)}"
            )

        for line in info:
            story.append(Paragraph(escape(line), styles["Normal"]))

        story.append(Spacer(1, 8))
        story.append(Paragraph(escape(fc.insight.text), styles["Italic"]))
        story.append(Spacer(1, 16))

        # ---------------- Chart ----------------
        if ctx.chart_png_path:
            story.append(Paragraph("Spend", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.chart_png_path)
            img._restrictSize(720, 280)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Budget ----------------
        story.append(Paragraph("Budget Breakdown", styles["Heading2"]))
        story.append(Spacer(1, 8))
        data = [
            ["Item", "Amount"],
            ["Baseline budget", fmt(fc.baseline_budget)],
            [f"Overhead ({fc.overhead_percent:g}%)", fmt(fc.overhead_amount)],
            ["Approved change orders", fmt(fc.approved_change_order_total)],
            ["Total budget", fmt(fc.total_budget)],
        ]
        table = Table(data, colWidths=[280, 160])
        table.setStyle(_TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 16))

        # ---------------- Costs ----------------
        if ctx.costs:
            story.append(Paragraph("Costs", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Date", "Category", "Vendor", "Amount"]]
            for c in ctx.costs:
                data.append([c.date.isoformat(), c.category, c.vendor or "-", fmt(c.amount)])

            table = Table(data, colWidths=[100, 180, 220, 120])
            table.setStyle(_TABLE_STYLE)
            story.append(table)

        doc.build(story)
        return output_path
