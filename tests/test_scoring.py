"""Tests for weighted inspection scoring."""

from __future__ import annotations

import math

import pytest

from ohs_report_engine.models import AuditDocument, Item, Section
from ohs_report_engine.scoring import InspectionScorer, is_answered, parse_coeff


def _item(choice: str | None, coeff: object = 1) -> Item:
    return Item(selected_choice=choice, coeff=coeff)


def _section(items: list[Item], department: str | None = None, name: str = "S") -> Section:
    return Section(name=name, department_name=department, items=items)


class TestParseCoeff:
    def test_numeric_string(self) -> None:
        assert parse_coeff("2") == 2.0
        assert parse_coeff(" 1.5 ") == 1.5

    def test_numbers(self) -> None:
        assert parse_coeff(3) == 3.0
        assert parse_coeff(0.25) == 0.25

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("2kg", 2.0), ("1,5", 1.0), (".5", 0.5), ("1e2", 100.0), ("-3", 1.0), ("+4 pts", 4.0)],
    )
    def test_leading_number(self, value: str, expected: float) -> None:
        assert parse_coeff(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf", "0", 0, -2, True, [1]])
    def test_invalid_defaults_to_one(self, value: object) -> None:
        assert parse_coeff(value) == 1.0


class TestItemPoints:
    def setup_method(self) -> None:
        self.scorer = InspectionScorer()

    def test_yes_partially_no(self) -> None:
        assert self.scorer.item_points(_item("Yes", 4)) == (4.0, 4.0)
        assert self.scorer.item_points(_item("Partially", 4)) == (2.0, 4.0)
        assert self.scorer.item_points(_item("No", 4)) == (0.0, 4.0)

    def test_na_and_unanswered_contribute_nothing(self) -> None:
        assert self.scorer.item_points(_item("NA", 4)) == (0.0, 0.0)
        assert self.scorer.item_points(_item(None, 4)) == (0.0, 0.0)
        assert self.scorer.item_points(_item("", 4)) == (0.0, 0.0)

    def test_unknown_choice_counts_as_zero(self) -> None:
        assert self.scorer.item_points(_item("Maybe", 2)) == (0.0, 2.0)

    def test_is_answered(self) -> None:
        assert is_answered(_item("No"))
        assert not is_answered(_item("NA"))
        assert not is_answered(_item(None))


class TestSectionScore:
    def setup_method(self) -> None:
        self.scorer = InspectionScorer()

    def test_single_yes_weighted(self) -> None:
        assert self.scorer.section_score(_section([_item("Yes", 2)])) == 100.0

    def test_mixed_answers(self) -> None:
        section = _section([_item("Yes"), _item("Partially"), _item("No")])
        assert self.scorer.section_score(section) == 50.0

    def test_only_na_scores_zero(self) -> None:
        score = self.scorer.section_score(_section([_item("NA")]))
        assert score == 0.0
        assert not math.isnan(score)

    def test_empty_section_scores_zero(self) -> None:
        assert self.scorer.section_score(_section([])) == 0.0

    def test_na_items_do_not_dilute(self) -> None:
        with_na = _section([_item("Yes"), _item("NA", 10), _item(None, 10)])
        assert self.scorer.section_score(with_na) == 100.0

    def test_weights_shift_score(self) -> None:
        section = _section([_item("Yes", 3), _item("No", 1)])
        assert self.scorer.section_score(section) == 75.0

    def test_bad_coeff_uses_weight_one(self) -> None:
        section = _section([_item("Yes", "abc"), _item("No", None)])
        assert self.scorer.section_score(section) == 50.0

    def test_overflowing_weights_stay_in_bounds(self) -> None:
        both_yes = _section([_item("Yes", "1e308"), _item("Yes", "1e308")])
        mixed = _section([_item("Yes", "1e308"), _item("Partially", "1e308")])
        assert self.scorer.section_score(both_yes) == 0.0
        assert 0.0 <= self.scorer.section_score(mixed) <= 100.0

    def test_section_in_na_department_still_scored(self) -> None:
        assert self.scorer.section_score(_section([_item("Yes")], department="Closed")) == 100.0


class TestDocumentScores:
    def setup_method(self) -> None:
        self.scorer = InspectionScorer()
        self.document = AuditDocument(
            sections=[
                _section([_item("Yes", 2), _item("No", 2)], department="Kitchen"),
                _section([_item("No", 6)], department="Maintenance"),
                _section([_item("Yes", 1), _item("Partially", 2)]),
            ],
        )

    def test_overall_without_exclusions(self) -> None:
        # earned 2 + 1 + 1 = 4 of 2 + 2 + 6 + 1 + 2 = 13
        assert self.scorer.overall_score(self.document, frozenset()) == pytest.approx(4 / 13 * 100)

    def test_overall_skips_excluded_departments(self) -> None:
        # earned 2 + 1 + 1 = 4 of 7
        score = self.scorer.overall_score(self.document, frozenset({"Maintenance"}))
        assert score == pytest.approx(4 / 7 * 100)

    def test_exclusion_of_unknown_department_is_noop(self) -> None:
        assert self.scorer.overall_score(self.document, frozenset({"Other"})) == self.scorer.overall_score(
            self.document, frozenset()
        )

    def test_department_score(self) -> None:
        assert self.scorer.department_score(self.document, "Kitchen") == 50.0
        assert self.scorer.department_score(self.document, "Maintenance") == 0.0

    def test_department_score_exact_name_match(self) -> None:
        assert self.scorer.department_score(self.document, "kitchen") == 0.0

    def test_empty_document(self) -> None:
        assert self.scorer.overall_score(AuditDocument(), frozenset()) == 0.0

    def test_all_excluded_scores_zero(self) -> None:
        document = AuditDocument(sections=[_section([_item("Yes")], department="Closed")])
        assert self.scorer.overall_score(document, frozenset({"Closed"})) == 0.0

    def test_score_bounds(self) -> None:
        score = self.scorer.overall_score(self.document, frozenset())
        assert 0.0 <= score <= 100.0


class TestStatusFor:
    @pytest.mark.parametrize(
        ("score", "status"),
        [(100.0, "pass"), (80.0, "pass"), (79.99, "warning"), (60.0, "warning"), (59.9, "fail"), (0.0, "fail")],
    )
    def test_thresholds(self, score: float, status: str) -> None:
        assert InspectionScorer.status_for(score) == status
