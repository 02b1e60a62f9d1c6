"""Inspection scoring and report generation MCP tools.

Fetches an audit from the inspection application, assembles the structured
report, and either returns the scores directly or persists the report.
"""

from __future__ import annotations

from ohs_report_engine.client import InspectionClient
from ohs_report_engine.engine import ReportEngine
from ohs_report_engine.exceptions import ReportError, ReportNotFoundError
from ohs_report_engine.models import DepartmentBlock, InspectionReport


def _department_summary(report: InspectionReport) -> list[dict]:
    summary: list[dict] = []
    for block in report.sections:
        if not isinstance(block, DepartmentBlock) or block.is_legacy:
            continue
        summary.append({
            "name": block.name,
            "is_na": block.is_na,
            "score": block.score,
            "status": block.status,
            "passing_grade": block.passing_grade,
            "meets_passing_grade": block.meets_passing_grade,
        })
    return summary


def get_inspection_score(client: InspectionClient, engine: ReportEngine, audit_id: str) -> dict:
    """Score an inspection without persisting a report.

    Args:
        client: Inspection API client.
        engine: Report engine used for assembly.
        audit_id: Identifier of the inspection.

    Returns:
        Dict with the overall score, per-department scores, and finding counts.
    """
    try:
        document = client.get_audit(audit_id)
    except ReportNotFoundError:
        return {"status": "not_found", "message": f"Audit {audit_id} not found"}
    except ReportError as exc:
        return {"status": "error", "message": str(exc)}

    report = engine.assemble(document)
    return {
        "status": "ok",
        "audit_id": report.audit_id or str(audit_id),
        "document_number": report.document_number,
        "overall_score": report.overall_score,
        "overall_status": report.overall_status,
        "overall_band": report.overall_band,
        "departments": _department_summary(report),
        "findings_count": len(report.findings),
        "finding_counts": report.finding_counts,
    }


def generate_inspection_report(client: InspectionClient, engine: ReportEngine, audit_id: str) -> dict:
    """Assemble and persist the report for an inspection.

    Args:
        client: Inspection API client.
        engine: Report engine with storage configured.
        audit_id: Identifier of the inspection.

    Returns:
        Dict with the generation envelope and the assembled report.
    """
    try:
        document = client.get_audit(audit_id)
    except ReportNotFoundError:
        return {"status": "not_found", "message": f"Audit {audit_id} not found"}
    except ReportError as exc:
        return {"status": "error", "message": str(exc)}

    report = engine.assemble(document)
    result = engine.persist(report)
    if not result.success:
        return {"status": "error", "message": result.error, "result": result.model_dump(mode="json")}

    return {
        "status": "ok",
        "result": result.model_dump(mode="json"),
        "report": report.model_dump(mode="json"),
    }
