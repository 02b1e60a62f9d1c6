"""Shared test fixtures for the OHS report engine test suite.

Unit tests use MagicMock to simulate HTTP responses from requests.
Integration tests (tests/integration/) require a running inspection application.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ohs_report_engine.client import InspectionClient
from ohs_report_engine.config import ReportConfig
from ohs_report_engine.engine import ReportEngine
from ohs_report_engine.models import AuditDocument
from ohs_report_engine.storage import ReportStorage


def make_item(choice: str | None = "Yes", coeff: object = 1, **extra: object) -> dict:
    """Build a raw item payload in the inspection application's JSON shape."""
    item: dict = {"referenceValue": extra.pop("ref", "1.1"), "title": "Question?", "selectedChoice": choice, "coeff": coeff}
    item.update(extra)
    return item


def make_section(name: str, items: list[dict], department: str | None = None) -> dict:
    return {"sectionName": name, "sectionIcon": "📋", "departmentName": department, "items": items}


def make_department(name: str, is_na: bool = False, passing_grade: object = 80) -> dict:
    return {"departmentName": name, "departmentIcon": "🏢", "isNA": is_na, "passingGrade": passing_grade}


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def report_config(tmp_path: Path) -> ReportConfig:
    """Return a ReportConfig with test values."""
    return ReportConfig(
        INSPECTION_API_URL="https://inspections.test/",
        INSPECTION_API_TOKEN="token",
        INSPECTION_API_TIMEOUT=10,
        INSPECTION_API_MAX_RETRIES=1,
        REPORT_STORAGE_PATH=str(tmp_path / "reports"),
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def mock_session() -> MagicMock:
    """Return a MagicMock that simulates a requests.Session."""
    session = MagicMock()
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {"success": True, "data": {}}
    session.request.return_value = response
    return session


@pytest.fixture
def inspection_client(report_config: ReportConfig, mock_session: MagicMock) -> InspectionClient:
    """Return an InspectionClient with a mocked HTTP session."""
    client = InspectionClient(report_config)
    client.session = mock_session
    return client


@pytest.fixture
def report_storage(tmp_path: Path) -> ReportStorage:
    """Return a ReportStorage using a temp directory."""
    return ReportStorage(str(tmp_path / "report-storage"))


@pytest.fixture
def report_engine(report_storage: ReportStorage) -> ReportEngine:
    return ReportEngine(report_storage)


@pytest.fixture
def audit_payload() -> dict:
    """A grouped inspection: one scored department, one NA department, one orphan section."""
    return {
        "auditId": 42,
        "documentNumber": "OHS-0042",
        "storeName": "Store 12 - Downtown",
        "inspectorName": "A. Inspector",
        "inspectionDate": "2026-03-14T09:30:00",
        "status": "Completed",
        "departments": [
            make_department("Kitchen"),
            make_department("Maintenance", is_na=True),
        ],
        "sections": [
            make_section("Fire Safety", [
                make_item("Yes", "2", ref="1.1"),
                make_item("No", "2", ref="1.2", finding="Extinguisher expired", cr="Replace", priority="High"),
            ], department="Kitchen"),
            make_section("Workshop", [
                make_item("No", 1, ref="2.1", finding="Loose wiring"),
            ], department="Maintenance"),
            make_section("General", [
                make_item("Partially", 1, ref="3.1", finding="Signage faded"),
                make_item("NA", 5, ref="3.2"),
            ]),
        ],
    }


@pytest.fixture
def audit_document(audit_payload: dict) -> AuditDocument:
    return AuditDocument.model_validate(audit_payload)
