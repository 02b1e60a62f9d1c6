"""FastMCP server entry point for the OHS inspection report engine.

Registers the scoring and reporting tools. The server fetches audits from the
inspection application and writes reports under the configured storage path.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from ohs_report_engine.client import InspectionClient
from ohs_report_engine.config import ReportConfig, get_config
from ohs_report_engine.engine import ReportEngine
from ohs_report_engine.storage import ReportStorage
from ohs_report_engine.tools.history import get_report, get_report_history
from ohs_report_engine.tools.reports import generate_inspection_report, get_inspection_score

logger = logging.getLogger(__name__)

mcp = FastMCP("ohs-report-engine")

# Module-level singletons initialized on first tool call
_config: ReportConfig | None = None
_client: InspectionClient | None = None
_storage: ReportStorage | None = None
_engine: ReportEngine | None = None


def _get_dependencies() -> tuple[ReportConfig, InspectionClient, ReportStorage, ReportEngine]:
    """Lazily initialize and return the shared config, client, storage, and engine."""
    global _config, _client, _storage, _engine  # noqa: PLW0603
    if _config is None:
        _config = get_config()
        _client = InspectionClient(_config)
        _storage = ReportStorage(_config.report_storage_path, _config.report_file_prefix)
        _engine = ReportEngine(_storage)
    return _config, _client, _storage, _engine  # type: ignore[return-value]


@mcp.tool()
def inspection_score(audit_id: str = "") -> dict:
    """Score an OHS inspection: overall and per-department percentages plus finding counts."""
    if not audit_id:
        return {"status": "error", "message": "audit_id is required"}
    _, client, _, engine = _get_dependencies()
    return get_inspection_score(client, engine, audit_id)


@mcp.tool()
def inspection_report(audit_id: str = "") -> dict:
    """Generate and store the structured report for an OHS inspection."""
    if not audit_id:
        return {"status": "error", "message": "audit_id is required"}
    _, client, _, engine = _get_dependencies()
    return generate_inspection_report(client, engine, audit_id)


@mcp.tool()
def report_history(limit: int = 10) -> dict:
    """List previously generated inspection reports, newest first."""
    _, _, storage, _ = _get_dependencies()
    return get_report_history(storage, limit=limit)


@mcp.tool()
def report_detail(file_name: str = "") -> dict:
    """Load a stored inspection report by file name."""
    if not file_name:
        return {"status": "error", "message": "file_name is required"}
    _, _, storage, _ = _get_dependencies()
    return get_report(storage, file_name)


@mcp.tool()
def health_check() -> dict:
    """Verify the server is running and can reach the inspection application."""
    try:
        config, client, _, _ = _get_dependencies()
        client.ping()
        return {"status": "healthy", "inspection_api": config.inspection_api_url}
    except Exception as exc:
        return {"status": "unhealthy", "error": str(exc)}


def main() -> None:
    """Entry point for the ohs-report-engine MCP server."""
    config = get_config()
    logging.basicConfig(level=config.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.info("Starting ohs-report-engine MCP server")
    mcp.run()
