"""Extraction of findings: answered items that call for corrective action."""

from __future__ import annotations

from ohs_report_engine.exclusions import is_excluded
from ohs_report_engine.models import AuditDocument, Finding, Item

FINDING_CHOICES = frozenset({"No", "Partially"})
DEFAULT_PRIORITY = "Medium"
PRIORITY_LEVELS = ("High", "Medium", "Low")


def is_finding(item: Item) -> bool:
    """An item is a finding when it was answered No or Partially and has finding text."""
    if item.selected_choice not in FINDING_CHOICES:
        return False
    return bool(item.finding)


def collect_findings(document: AuditDocument, excluded: frozenset[str]) -> list[Finding]:
    """Walk sections and items in document order and collect findings.

    Sections belonging to an excluded (NA) department are skipped entirely.

    Args:
        document: The inspection to walk.
        excluded: Department names flagged as not applicable.

    Returns:
        Findings in section order, then item order.
    """
    findings: list[Finding] = []
    for section in document.sections:
        if is_excluded(section.department_name, excluded):
            continue
        for item in section.items:
            if not is_finding(item):
                continue
            findings.append(Finding(
                section=section.name,
                department=section.department_name,
                reference=item.reference,
                question=item.title,
                answer=item.selected_choice,  # type: ignore[arg-type]
                finding=item.finding,  # type: ignore[arg-type]
                cr=item.cr,
                priority=item.priority or DEFAULT_PRIORITY,
            ))
    return findings


def count_by_priority(findings: list[Finding]) -> dict[str, int]:
    """Tally findings per priority. Standard levels are always present."""
    counts = {level: 0 for level in PRIORITY_LEVELS}
    for finding in findings:
        counts[finding.priority] = counts.get(finding.priority, 0) + 1
    return counts
