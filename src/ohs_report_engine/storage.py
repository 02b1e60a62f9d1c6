"""JSON file storage for assembled inspection reports.

Persists each report under the configured report_storage_path using the
inspection application's naming convention
``{prefix}_{documentNumber}_{YYYY-MM-DD}.json``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from ohs_report_engine.exceptions import ReportNotFoundError
from ohs_report_engine.models import InspectionReport, StoredReport

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class ReportStorage:
    """Manages persistence of assembled inspection reports."""

    def __init__(self, base_path: str, file_prefix: str = "OHS_Report") -> None:
        self.base_path = Path(base_path)
        self.file_prefix = file_prefix
        self.base_path.mkdir(parents=True, exist_ok=True)

    def report_file_name(self, report: InspectionReport, generated_at: datetime) -> str:
        """Build the file name for a report generated at the given time."""
        identifier = report.document_number or report.audit_id or "unknown"
        identifier = _UNSAFE_CHARS.sub("_", identifier).strip("._") or "unknown"
        return f"{self.file_prefix}_{identifier}_{generated_at.date().isoformat()}.json"

    def save_report(self, report: InspectionReport, generated_at: datetime) -> Path:
        """Persist a report to disk, replacing any report of the same name.

        Args:
            report: The assembled report.
            generated_at: Generation timestamp stored alongside the report.

        Returns:
            Path of the written file.
        """
        file_path = self.base_path / self.report_file_name(report, generated_at)
        stored = StoredReport(generated_at=generated_at, report=report)
        file_path.write_text(stored.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Saved inspection report %s to %s", report.document_number or report.audit_id, file_path)
        return file_path

    def _resolve(self, file_name: str) -> Path:
        file_path = (self.base_path / file_name).resolve()
        if file_path.parent != self.base_path.resolve():
            raise ReportNotFoundError(f"Invalid report file name: {file_name}", details={"file_name": file_name})
        return file_path

    def load_report(self, file_name: str) -> InspectionReport:
        """Load a stored report by file name.

        Args:
            file_name: Name of the report file inside the storage directory.

        Returns:
            The deserialized InspectionReport.

        Raises:
            ReportNotFoundError: If the name points outside the storage directory.
            FileNotFoundError: If the report file does not exist.
        """
        file_path = self._resolve(file_name)
        if not file_path.exists():
            raise FileNotFoundError(f"Report not found: {file_name}")
        return StoredReport.model_validate_json(file_path.read_text(encoding="utf-8")).report

    def list_reports(self, limit: int = 50) -> list[dict]:
        """List stored reports, newest first.

        Args:
            limit: Maximum number of summaries to return.

        Returns:
            Summary dicts with file name, identifiers, score, status, and finding count.
        """
        summaries: list[dict] = []
        files = sorted(self.base_path.glob("*.json"), key=lambda p: p.stat().st_mtime, reverse=True)

        for file_path in files:
            if len(summaries) >= limit:
                break
            try:
                stored = StoredReport.model_validate_json(file_path.read_text(encoding="utf-8"))
            except (ValidationError, UnicodeDecodeError) as exc:
                logger.warning("Skipping corrupt report file %s: %s", file_path, exc)
                continue
            report = stored.report
            summaries.append({
                "file_name": file_path.name,
                "audit_id": report.audit_id,
                "document_number": report.document_number,
                "store_name": report.store_name,
                "generated_at": stored.generated_at.isoformat(),
                "overall_score": report.overall_score,
                "overall_status": report.overall_status,
                "findings_count": len(report.findings),
            })

        return summaries
