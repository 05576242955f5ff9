from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ForecastReportContext
from core.services.budget import round_money


class ExcelReportRenderer:
    def render(self, ctx: ForecastReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        project = ctx.project
        fc = ctx.forecast
        currency = project.currency

        def money(value):
            return round_money(value, currency) if value is not None else None

        def header_row(ws, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = f"Budget Forecast - {project.name}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Project ID", project.id)
        kv("Project name", project.name)
        kv("Status", project.status.value)
        kv("Currency", currency)
        kv("Start date", project.start_date)
        kv("End date", project.end_date)
        kv("As of", ctx.as_of)

        row += 1
        kv("Baseline budget", money(fc.baseline_budget))
        kv("Overhead %", fc.overhead_percent)
        kv("Overhead amount", money(fc.overhead_amount))
        kv("Approved change orders", money(fc.approved_change_order_total))
        kv("Total budget", money(fc.total_budget))

        row += 1
        kv("Cost to date", money(fc.cost_to_date))
        kv("Remaining budget", money(fc.remaining_budget))
        kv("Burn rate (per day)", money(fc.burn_rate))
        kv("Projected total", money(fc.projected_total))
        kv("Projection", fc.completion.status.value)
        kv("Days until end", fc.completion.days_until_end)
        kv("Projected cost at completion", money(fc.completion.projected_cost_at_completion))
        kv("Projected remaining at completion", money(fc.completion.projected_remaining))

        row += 1
        kv("Insight", fc.insight.text)

        ws.column_dimensions["A"].width = 34
        ws.column_dimensions["B"].width = 60

        # ---------------- Costs ----------------
        ws_costs = wb.create_sheet("Costs")
        header_row(ws_costs, ["Date", "Category", "Vendor", "Description", "Amount", "Deduction"])
        for row_index, c in enumerate(ctx.costs, start=2):
            values = [
                c.date.isoformat(),
                c.category,
                c.vendor,
                c.description,
                money(c.amount),
                c.deduction_type.value,
            ]
            for col_index, v in enumerate(values, start=1):
                ws_costs.cell(row=row_index, column=col_index, value=v).border = thin_border

        ws_costs.column_dimensions["A"].width = 14
        ws_costs.column_dimensions["B"].width = 20
        ws_costs.column_dimensions["C"].width = 24
        ws_costs.column_dimensions["D"].width = 40
        ws_costs.column_dimensions["E"].width = 15
        ws_costs.column_dimensions["F"].width = 12

        # ---------------- Change orders ----------------
        ws_co = wb.create_sheet("Change Orders")
        header_row(ws_co, ["Created", "Type", "Amount", "Status", "Description", "Approved by"])
        for row_index, co in enumerate(ctx.change_orders, start=2):
            values = [
                co.created_at.date().isoformat() if co.created_at else "",
                co.type.value,
                money(co.amount),
                co.status.value,
                co.description,
                co.approved_by or "",
            ]
            for col_index, v in enumerate(values, start=1):
                ws_co.cell(row=row_index, column=col_index, value=v).border = thin_border

        for col_letter, width in zip("ABCDEF", (14, 12, 15, 12, 40, 24)):
            ws_co.column_dimensions[col_letter].width = width

        # ---------------- Forecast history ----------------
        if ctx.snapshots:
            ws_hist = wb.create_sheet("Forecast History")
            header_row(
                ws_hist,
                ["Version", "Saved", "Cost to date", "Burn rate", "Remaining", "Projected total", "Override"],
            )
            for row_index, s in enumerate(ctx.snapshots, start=2):
                values = [
                    s.version,
                    s.created_at.date().isoformat() if s.created_at else "",
                    money(s.cost_to_date),
                    money(s.burn_rate),
                    money(s.remaining_budget),
                    money(s.projected_total),
                    money(s.manual_override),
                ]
                for col_index, v in enumerate(values, start=1):
                    ws_hist.cell(row=row_index, column=col_index, value=v).border = thin_border
            for col_letter in "ABCDEFG":
                ws_hist.column_dimensions[col_letter].width = 16

        wb.save(output_path)
        return output_path
