"""Weighted, partial-credit scoring of inspection items.

One rule is applied at every granularity: an item counts toward the maximum
only when it has been answered with something other than NA; "Yes" earns its
full weight, "Partially" earns half, anything else earns nothing. A scope with
no countable items scores 0.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from ohs_report_engine.exclusions import is_excluded
from ohs_report_engine.models import AuditDocument, Item, ScoreStatus, Section

PASS_THRESHOLD = 80.0
WARNING_THRESHOLD = 60.0
DEFAULT_WEIGHT = 1.0
NOT_APPLICABLE = "NA"

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_coeff(value: object) -> float:
    """Parse an item coefficient into a usable weight.

    Strings are read up to the first non-numeric character, so "2kg" weighs 2
    and "1,5" weighs 1. Absent, unparsable, non-finite, zero, or negative
    values fall back to 1.

    Args:
        value: The raw coefficient, usually a string or number.

    Returns:
        A positive finite weight.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_WEIGHT
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value.strip())
        if match is None:
            return DEFAULT_WEIGHT
        value = match.group()
    try:
        weight = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_WEIGHT
    if not math.isfinite(weight) or weight <= 0:
        return DEFAULT_WEIGHT
    return weight


def is_answered(item: Item) -> bool:
    """True when the item has a choice that counts toward the maximum."""
    return bool(item.selected_choice) and item.selected_choice != NOT_APPLICABLE


class InspectionScorer:
    """Computes percentage scores for items, sections, departments, and documents."""

    ANSWER_CREDIT: dict[str, float] = {
        "Yes": 1.0,
        "Partially": 0.5,
        "No": 0.0,
    }

    def item_points(self, item: Item) -> tuple[float, float]:
        """Return (earned, maximum) points for one item."""
        if not is_answered(item):
            return 0.0, 0.0
        weight = parse_coeff(item.coeff)
        credit = self.ANSWER_CREDIT.get(item.selected_choice or "", 0.0)
        return weight * credit, weight

    def score_items(self, items: Iterable[Item]) -> float:
        earned = 0.0
        maximum = 0.0
        for item in items:
            item_earned, item_max = self.item_points(item)
            earned += item_earned
            maximum += item_max
        return self._percentage(earned, maximum)

    def score_sections(self, sections: Iterable[Section]) -> float:
        """Pool the items of several sections into a single percentage."""
        return self.score_items(item for section in sections for item in section.items)

    def overall_score(self, document: AuditDocument, excluded: frozenset[str]) -> float:
        """Score every section outside the excluded (NA) departments.

        Args:
            document: The inspection to score.
            excluded: Department names whose sections are left out.

        Returns:
            Percentage in [0, 100].
        """
        return self.score_sections(
            s for s in document.sections if not is_excluded(s.department_name, excluded)
        )

    def department_score(self, document: AuditDocument, department_name: str) -> float:
        """Score the sections tagged with department_name, regardless of its NA flag."""
        return self.score_sections(s for s in document.sections if s.department_name == department_name)

    def section_score(self, section: Section) -> float:
        return self.score_items(section.items)

    @staticmethod
    def status_for(score: float) -> ScoreStatus:
        if score >= PASS_THRESHOLD:
            return "pass"
        if score >= WARNING_THRESHOLD:
            return "warning"
        return "fail"

    @staticmethod
    def _percentage(earned: float, maximum: float) -> float:
        if maximum <= 0:
            return 0.0
        percentage = earned / maximum * 100.0
        if not math.isfinite(percentage):
            return 0.0
        return min(max(percentage, 0.0), 100.0)
