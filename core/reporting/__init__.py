from core.reporting.api import (
    build_forecast_report_context,
    export_audit_log_csv,
    generate_forecast_excel,
    generate_forecast_pdf,
    generate_spend_chart_png,
)

__all__ = [
    "build_forecast_report_context",
    "export_audit_log_csv",
    "generate_spend_chart_png",
    "generate_forecast_excel",
    "generate_forecast_pdf",
]
