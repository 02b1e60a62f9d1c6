"""Resolution of not-applicable (NA) departments.

The resulting set is derived once per report and shared by the overall score
and the findings walk so both apply the same exclusions.
"""

from __future__ import annotations

from collections.abc import Iterable

from ohs_report_engine.models import Department


def resolve_exclusions(departments: Iterable[Department] | None) -> frozenset[str]:
    """Return the names of departments flagged as not applicable.

    Args:
        departments: The document's declared departments, possibly empty or None.

    Returns:
        Frozen set of department names with is_na set.
    """
    if not departments:
        return frozenset()
    return frozenset(d.name for d in departments if d.is_na)


def is_excluded(department_name: str | None, excluded: frozenset[str]) -> bool:
    """True when a section tagged with department_name falls in an NA department."""
    return department_name is not None and department_name in excluded
