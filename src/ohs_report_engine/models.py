"""Pydantic v2 data models for inspection documents, findings, and assembled reports.

Input models (AuditDocument and its departments, sections, and items) accept the
camelCase JSON produced by the inspection application and are frozen, so the
engine can only read them. Output models describe the structured report handed
to renderers and storage.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ScoreStatus = Literal["pass", "warning", "fail"]
BlockStatus = Literal["pass", "warning", "fail", "na"]
OverallStatus = Literal["pass", "fail"]

DEFAULT_PASSING_GRADE = 80.0
DEFAULT_STATUS = "In Progress"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _empty_to_none(value: object) -> object:
    if value == "":
        return None
    return value


class _InputModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Item(_InputModel):
    """A single answered (or unanswered) checklist question."""

    reference: str | None = Field(None, validation_alias=AliasChoices("referenceValue", "reference"))
    title: str | None = None
    selected_choice: str | None = Field(None, validation_alias=AliasChoices("selectedChoice", "selected_choice"))
    coeff: str | float | None = None
    finding: str | None = None
    cr: str | None = None
    priority: str | None = None

    @field_validator("selected_choice", "priority", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("coeff", mode="before")
    @classmethod
    def _scalar_coeff(cls, value: object) -> object:
        if isinstance(value, str | int | float) and not isinstance(value, bool):
            return value
        return None

    @field_validator("reference", mode="before")
    @classmethod
    def _reference_to_str(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class Section(_InputModel):
    """An ordered group of items, optionally tagged with its department."""

    name: str = Field("", validation_alias=AliasChoices("sectionName", "name"))
    icon: str | None = Field(None, validation_alias=AliasChoices("sectionIcon", "icon"))
    department_name: str | None = Field(
        None, validation_alias=AliasChoices("departmentName", "department_name")
    )
    items: list[Item] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("department_name", mode="before")
    @classmethod
    def _empty_department(cls, value: object) -> object:
        return _empty_to_none(value)

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, value: object) -> object:
        return [] if value is None else value


class Department(_InputModel):
    """A top-level inspection area. Sections reference it by exact name."""

    name: str = Field(validation_alias=AliasChoices("departmentName", "name"))
    icon: str | None = Field(None, validation_alias=AliasChoices("departmentIcon", "icon"))
    is_na: bool = Field(False, validation_alias=AliasChoices("isNA", "is_na"))
    passing_grade: float = Field(
        DEFAULT_PASSING_GRADE, validation_alias=AliasChoices("passingGrade", "passing_grade")
    )

    @field_validator("is_na", mode="before")
    @classmethod
    def _null_flag(cls, value: object) -> object:
        return False if value is None else value

    @field_validator("passing_grade", mode="before")
    @classmethod
    def _default_grade(cls, value: object) -> object:
        if value is None or isinstance(value, bool):
            return DEFAULT_PASSING_GRADE
        try:
            grade = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return DEFAULT_PASSING_GRADE
        return grade if math.isfinite(grade) else DEFAULT_PASSING_GRADE


class AuditDocument(_InputModel):
    """A fully materialized inspection as supplied by the inspection application."""

    audit_id: str | None = Field(None, validation_alias=AliasChoices("auditId", "audit_id", "id"))
    document_number: str | None = Field(
        None, validation_alias=AliasChoices("documentNumber", "document_number")
    )
    store_name: str | None = Field(None, validation_alias=AliasChoices("storeName", "store_name"))
    inspector_name: str | None = Field(
        None, validation_alias=AliasChoices("inspectorName", "auditors", "inspector_name")
    )
    inspection_date: datetime | None = Field(
        None, validation_alias=AliasChoices("inspectionDate", "auditDate", "inspection_date")
    )
    status: str | None = None
    departments: list[Department] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)

    @field_validator("audit_id", "document_number", mode="before")
    @classmethod
    def _identifier_to_str(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return _blank_to_none(value)

    @field_validator("inspection_date", "status", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("departments", "sections", mode="before")
    @classmethod
    def _null_collections(cls, value: object) -> object:
        return [] if value is None else value


class Finding(BaseModel):
    """An answered item that needs corrective action."""

    section: str
    department: str | None = None
    reference: str | None = None
    question: str | None = None
    answer: str
    finding: str
    cr: str | None = None
    priority: str = "Medium"


class ItemRow(BaseModel):
    """One checklist row as shown under its section in the report."""

    reference: str | None = None
    question: str | None = None
    answer: str | None = None
    weight: float = 1.0


class SectionBlock(BaseModel):
    """A scored section with its item rows."""

    block_type: Literal["section"] = "section"
    name: str
    icon: str | None = None
    department_name: str | None = None
    score: float = Field(ge=0, le=100)
    status: ScoreStatus
    items: list[ItemRow] = Field(default_factory=list)


class DepartmentBlock(BaseModel):
    """A department with its sections, or the trailing block of ungrouped sections.

    NA departments carry no score. The legacy block (is_legacy=True) has no
    name, score, or passing grade.
    """

    block_type: Literal["department"] = "department"
    name: str | None = None
    icon: str | None = None
    is_na: bool = False
    is_legacy: bool = False
    passing_grade: float | None = None
    score: float | None = Field(None, ge=0, le=100)
    status: BlockStatus | None = None
    meets_passing_grade: bool | None = None
    sections: list[SectionBlock] = Field(default_factory=list)


ReportBlock = Annotated[DepartmentBlock | SectionBlock, Field(discriminator="block_type")]


class InspectionReport(BaseModel):
    """The assembled, render-ready result for one inspection."""

    audit_id: str | None = None
    document_number: str | None = None
    store_name: str | None = None
    inspector_name: str | None = None
    inspection_date: datetime | None = None
    status: str = DEFAULT_STATUS
    overall_score: float = Field(ge=0, le=100)
    overall_status: OverallStatus
    overall_band: ScoreStatus
    grouped: bool = False
    sections: list[ReportBlock] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    finding_counts: dict[str, int] = Field(default_factory=dict)


class GenerationResult(BaseModel):
    """Outcome of assembling and persisting a report."""

    success: bool
    error: str | None = None
    file_name: str | None = None
    file_path: str | None = None
    overall_score: float | None = None
    generated_at: datetime | None = None


class StoredReport(BaseModel):
    """On-disk envelope for a persisted report."""

    generated_at: datetime
    report: InspectionReport
