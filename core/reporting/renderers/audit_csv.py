import csv
import json
from pathlib import Path

from core.reporting.contexts import AuditExportContext

AUDIT_CSV_HEADERS = ["Date", "Action", "User", "Metadata"]


class AuditCsvRenderer:
    def render(self, ctx: AuditExportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
            writer.writerow(AUDIT_CSV_HEADERS)
            for entry in ctx.entries:
                writer.writerow([
                    entry.created_at.isoformat() if entry.created_at else "",
                    getattr(entry.action, "value", str(entry.action)),
                    entry.user_id or "",
                    json.dumps(entry.metadata, default=str, sort_keys=True),
                ])
        return output_path
