"""Stored report browsing MCP tools."""

from __future__ import annotations

from ohs_report_engine.exceptions import ReportNotFoundError
from ohs_report_engine.storage import ReportStorage


def get_report_history(storage: ReportStorage, limit: int = 10) -> dict:
    """Retrieve summaries of previously generated reports.

    Args:
        storage: Report storage instance.
        limit: Maximum number of reports to return.

    Returns:
        Dict with report summaries, newest first.
    """
    reports = storage.list_reports(limit=limit)
    return {
        "reports": reports,
        "total_returned": len(reports),
    }


def get_report(storage: ReportStorage, file_name: str) -> dict:
    """Load one stored report by file name."""
    try:
        report = storage.load_report(file_name)
    except (FileNotFoundError, ReportNotFoundError) as exc:
        return {"status": "not_found", "message": str(exc)}
    return {"status": "ok", "file_name": file_name, "report": report.model_dump(mode="json")}
