"""OHS Inspection Report Engine - scoring, findings, and report assembly for OHS inspections."""

__version__ = "0.1.0"

from ohs_report_engine.config import ReportConfig, get_config
from ohs_report_engine.engine import ReportEngine
from ohs_report_engine.exceptions import (
    ReportAPIError,
    ReportAuthError,
    ReportConnectionError,
    ReportError,
    ReportNotFoundError,
    ReportPermissionError,
)
from ohs_report_engine.exclusions import resolve_exclusions
from ohs_report_engine.findings import collect_findings
from ohs_report_engine.models import (
    AuditDocument,
    Department,
    DepartmentBlock,
    Finding,
    GenerationResult,
    InspectionReport,
    Item,
    ItemRow,
    Section,
    SectionBlock,
)
from ohs_report_engine.scoring import InspectionScorer, parse_coeff

__all__ = [
    "__version__",
    "ReportConfig",
    "get_config",
    "ReportError",
    "ReportConnectionError",
    "ReportAuthError",
    "ReportPermissionError",
    "ReportNotFoundError",
    "ReportAPIError",
    "AuditDocument",
    "Department",
    "Section",
    "Item",
    "Finding",
    "ItemRow",
    "SectionBlock",
    "DepartmentBlock",
    "InspectionReport",
    "GenerationResult",
    "InspectionScorer",
    "parse_coeff",
    "resolve_exclusions",
    "collect_findings",
    "ReportEngine",
]
