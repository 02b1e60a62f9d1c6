"""Report assembly: scores, department blocks, and findings for one inspection.

The ReportEngine derives the NA exclusion set once per call, feeds it to both
the overall score and the findings walk, and groups sections under their
departments through a SectionIndex built up front.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ohs_report_engine.exceptions import ReportError
from ohs_report_engine.exclusions import resolve_exclusions
from ohs_report_engine.findings import collect_findings, count_by_priority
from ohs_report_engine.grouping import SectionIndex
from ohs_report_engine.models import (
    DEFAULT_STATUS,
    AuditDocument,
    Department,
    DepartmentBlock,
    GenerationResult,
    InspectionReport,
    ItemRow,
    Section,
    SectionBlock,
)
from ohs_report_engine.scoring import PASS_THRESHOLD, InspectionScorer, parse_coeff
from ohs_report_engine.storage import ReportStorage

logger = logging.getLogger(__name__)


class ReportEngine:
    """Assembles inspection reports and optionally persists them."""

    def __init__(self, storage: ReportStorage | None = None) -> None:
        self.storage = storage
        self.scorer = InspectionScorer()

    def section_block(self, section: Section) -> SectionBlock:
        score = self.scorer.section_score(section)
        return SectionBlock(
            name=section.name,
            icon=section.icon,
            department_name=section.department_name,
            score=score,
            status=self.scorer.status_for(score),
            items=[
                ItemRow(
                    reference=item.reference,
                    question=item.title,
                    answer=item.selected_choice,
                    weight=parse_coeff(item.coeff),
                )
                for item in section.items
            ],
        )

    def department_block(self, department: Department, sections: list[Section]) -> DepartmentBlock:
        """Build the block for one declared department.

        NA departments are listed with their sections but carry no score.
        """
        block = DepartmentBlock(
            name=department.name,
            icon=department.icon,
            is_na=department.is_na,
            passing_grade=department.passing_grade,
            sections=[self.section_block(s) for s in sections],
        )
        if department.is_na:
            block.status = "na"
            return block
        block.score = self.scorer.score_sections(sections)
        block.status = self.scorer.status_for(block.score)
        block.meets_passing_grade = block.score >= department.passing_grade
        return block

    def assemble(self, document: AuditDocument) -> InspectionReport:
        """Assemble the structured report for an inspection.

        With declared departments, sections are grouped under them in declared
        order, followed by one legacy block for sections without a matching
        department. Without departments every section is listed flat.

        Args:
            document: The inspection to report on. It is not modified.

        Returns:
            InspectionReport with scores, blocks, and findings.
        """
        excluded = resolve_exclusions(document.departments)
        overall = self.scorer.overall_score(document, excluded)
        findings = collect_findings(document, excluded)

        blocks: list[DepartmentBlock | SectionBlock] = []
        if document.departments:
            index = SectionIndex.from_document(document)
            seen: set[str] = set()
            for department in document.departments:
                if department.name in seen:
                    logger.warning("Ignoring duplicate department %r in audit %s", department.name, document.audit_id)
                    continue
                seen.add(department.name)
                blocks.append(self.department_block(department, index.sections_for(department.name)))
            if index.legacy:
                blocks.append(DepartmentBlock(
                    is_legacy=True,
                    sections=[self.section_block(s) for s in index.legacy],
                ))
        else:
            blocks.extend(self.section_block(s) for s in document.sections)

        return InspectionReport(
            audit_id=document.audit_id,
            document_number=document.document_number,
            store_name=document.store_name,
            inspector_name=document.inspector_name,
            inspection_date=document.inspection_date,
            status=document.status or DEFAULT_STATUS,
            overall_score=overall,
            overall_status="pass" if overall >= PASS_THRESHOLD else "fail",
            overall_band=self.scorer.status_for(overall),
            grouped=bool(document.departments),
            sections=blocks,
            findings=findings,
            finding_counts=count_by_priority(findings),
        )

    def generate_report(self, document: AuditDocument, generated_at: datetime | None = None) -> GenerationResult:
        """Assemble a report and persist it through the configured storage."""
        return self.persist(self.assemble(document), generated_at)

    def persist(self, report: InspectionReport, generated_at: datetime | None = None) -> GenerationResult:
        """Write an assembled report through the configured storage.

        Write failures are logged and returned as an unsuccessful result
        rather than raised.

        Args:
            report: The assembled report.
            generated_at: Generation timestamp; defaults to now (UTC).

        Returns:
            GenerationResult describing the written file or the failure.

        Raises:
            ReportError: If the engine was created without storage.
        """
        if self.storage is None:
            raise ReportError("Report storage is not configured")

        generated_at = generated_at or datetime.now(UTC)
        try:
            file_path = self.storage.save_report(report, generated_at)
        except OSError as exc:
            logger.error("Error generating report for audit %s: %s", report.audit_id, exc)
            return GenerationResult(success=False, error=str(exc))

        logger.info(
            "Generated report %s (score %.1f, %d findings)",
            file_path.name, report.overall_score, len(report.findings),
        )
        return GenerationResult(
            success=True,
            file_name=file_path.name,
            file_path=str(file_path),
            overall_score=report.overall_score,
            generated_at=generated_at,
        )
