"""Department-to-section index used when assembling grouped reports."""

from __future__ import annotations

from collections.abc import Iterable

from ohs_report_engine.models import AuditDocument, Section


class SectionIndex:
    """Sections bucketed by exact department name, in document order.

    Sections with no department, or tagged with a department the document
    does not declare, land in the legacy bucket so that every section is
    reachable from exactly one place.
    """

    def __init__(self, sections: Iterable[Section], department_names: Iterable[str]) -> None:
        self.by_department: dict[str, list[Section]] = {name: [] for name in department_names}
        self.legacy: list[Section] = []
        for section in sections:
            bucket = None
            if section.department_name is not None:
                bucket = self.by_department.get(section.department_name)
            if bucket is None:
                self.legacy.append(section)
            else:
                bucket.append(section)

    @classmethod
    def from_document(cls, document: AuditDocument) -> SectionIndex:
        return cls(document.sections, (d.name for d in document.departments))

    def sections_for(self, department_name: str) -> list[Section]:
        return list(self.by_department.get(department_name, []))
