"""
Scoring engine tests.

Covers risk classification, return statistics, normalization and the
value score.
"""

from __future__ import annotations

import math

import pytest

from rmf_screener.models.fund import FundStatistics, RiskLevel
from rmf_screener.services.normalizer import EmptyComparisonSetError, compute_bounds, normalize
from rmf_screener.services.return_statistics import (
    compute_statistics,
    drawdown_proxy,
    risk_adjusted_return,
    weighted_past_return,
)
from rmf_screener.services.risk_classifier import risk_score, risk_sort_key
from rmf_screener.services.value_score import ValueScoreEngine, score_funds, value_score

# --- Risk classifier ---


class TestRiskScore:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Low", 1),
            ("Low to Moderate", 2),
            ("Moderate", 3),
            ("Moderate to High", 4),
            ("High", 5),
            ("ต่ำ", 1),
            ("สูง", 5),
        ],
    )
    def test_known_labels(self, label: str, expected: int) -> None:
        assert risk_score(label) == expected

    def test_enum_member(self) -> None:
        assert risk_score(RiskLevel.MODERATE_TO_HIGH) == 4

    @pytest.mark.parametrize("label", ["Very High", "", None, 7])
    def test_unknown_defaults_to_moderate(self, label: object) -> None:
        assert risk_score(label) == 3

    def test_sort_key_puts_unknown_last(self) -> None:
        assert risk_sort_key("Low") < risk_sort_key("High") < risk_sort_key("Speculative")

    def test_sort_key_matches_thai_and_english(self) -> None:
        assert risk_sort_key("ต่ำ") == risk_sort_key("Low")
        assert risk_sort_key("ปานกลางถึงสูง") == risk_sort_key("Moderate to High")
        assert risk_sort_key("สูง") < risk_sort_key("Speculative")


# --- Return statistics ---


class TestReturnStatistics:
    def test_weighted_past_return(self, make_fund) -> None:
        fund = make_fund("A", (10.0, 8.0, 6.0))
        assert weighted_past_return(fund) == pytest.approx(8.3)

    def test_risk_adjusted_return(self, make_fund) -> None:
        fund = make_fund("A", (10.0, 8.0, 6.0))
        expected = (8.0 - 1.0) / math.sqrt(8.0 / 3.0)
        assert risk_adjusted_return(fund) == pytest.approx(expected)

    def test_flat_returns_use_unit_std_dev(self, make_fund) -> None:
        fund = make_fund("A", (5.0, 5.0, 5.0))
        assert risk_adjusted_return(fund) == pytest.approx(4.0)

    def test_flat_fractional_returns_use_unit_std_dev(self, make_fund) -> None:
        fund = make_fund("A", (0.1, 0.1, 0.1))
        assert risk_adjusted_return(fund) == pytest.approx(0.1 - 1.0)

    def test_drawdown_proxy_is_negated_worst_return(self, make_fund) -> None:
        assert drawdown_proxy(make_fund("A", (10.0, -4.0, 6.0))) == 4.0
        assert drawdown_proxy(make_fund("B", (10.0, 8.0, 6.0))) == -6.0

    def test_statistics_are_reproducible(self, make_fund) -> None:
        fund = make_fund("A", (12.5, -3.25, 7.0))
        assert compute_statistics(fund) == compute_statistics(fund)


# --- Normalizer ---


class TestNormalize:
    def test_scales_into_unit_interval(self) -> None:
        assert normalize(0.0, 0.0, 10.0) == 0.0
        assert normalize(5.0, 0.0, 10.0) == 0.5
        assert normalize(10.0, 0.0, 10.0) == 1.0

    def test_degenerate_range_is_midpoint(self) -> None:
        assert normalize(3.0, 3.0, 3.0) == 0.5

    def test_bounds_over_set(self) -> None:
        stats = [
            FundStatistics(weighted_past_return=1.0, risk_adjusted_return=-2.0, drawdown_proxy=5.0),
            FundStatistics(weighted_past_return=4.0, risk_adjusted_return=3.0, drawdown_proxy=-1.0),
        ]
        bounds = compute_bounds(stats)
        assert (bounds.past_min, bounds.past_max) == (1.0, 4.0)
        assert (bounds.sharpe_min, bounds.sharpe_max) == (-2.0, 3.0)
        assert (bounds.drawdown_min, bounds.drawdown_max) == (-1.0, 5.0)

    def test_empty_set_has_no_bounds(self) -> None:
        with pytest.raises(EmptyComparisonSetError):
            compute_bounds([])


# --- Value score ---


class TestValueScore:
    def test_reference_pair(self, make_fund) -> None:
        a = make_fund("A", (10.0, 8.0, 6.0), expense_ratio=1.0)
        b = make_fund("B", (-1.0, -2.0, -3.0), expense_ratio=0.5)

        assert value_score(b, [a, b]) == 0.0
        assert value_score(a, [a, b]) == pytest.approx(0.9)

    def test_all_negative_returns_score_zero(self, make_fund) -> None:
        loser = make_fund("L", (-5.0, -3.0, -1.0), expense_ratio=0.0)
        others = [make_fund("X", (2.0, 1.0, 0.5)), make_fund("Y", (-9.0, -8.0, -7.0))]
        assert value_score(loser, [loser, *others]) == 0.0

    def test_negative_weighted_return_scores_zero(self, make_fund) -> None:
        fund = make_fund("N", (-10.0, 2.0, 2.0), expense_ratio=0.0)
        scored = score_funds([fund, make_fund("P", (3.0, 3.0, 3.0))])
        assert scored[0].value_score == 0.0
        assert scored[0].disqualified is True

    def test_penalty_is_capped(self, make_fund) -> None:
        cheap = make_fund("C", (10.0, 8.0, 6.0), expense_ratio=2.5)
        pricey = make_fund("D", (10.0, 8.0, 6.0), expense_ratio=20.0)
        other = make_fund("E", (4.0, 3.0, 2.0), expense_ratio=0.0)

        assert ValueScoreEngine.expense_penalty(cheap) == pytest.approx(0.2)
        assert ValueScoreEngine.expense_penalty(pricey) == pytest.approx(0.2)
        comparison = [cheap, pricey, other]
        assert value_score(cheap, comparison) == value_score(pricey, comparison)

    def test_score_never_negative(self, make_fund) -> None:
        worst = make_fund("W", (1.0, 1.0, 1.0), expense_ratio=5.0)
        best = make_fund("B", (20.0, 18.0, 16.0), expense_ratio=0.0)
        scored = score_funds([worst, best])
        assert all(s.value_score >= 0.0 for s in scored)
        assert scored[0].value_score == 0.0

    def test_score_depends_on_comparison_set(self, make_fund) -> None:
        x = make_fund("X", (10.0, 8.0, 6.0), expense_ratio=0.0)
        y = make_fund("Y", (5.0, 4.0, 3.0), expense_ratio=0.0)
        z = make_fund("Z", (20.0, 15.0, 10.0), expense_ratio=0.0)

        assert value_score(y, [x, y]) != value_score(y, [x, y, z])

    def test_single_fund_scores_midpoint_less_penalty(self, make_fund) -> None:
        fund = make_fund("S", (6.0, 4.0, 2.0), expense_ratio=1.0)
        assert value_score(fund, [fund]) == pytest.approx(0.4)
        assert value_score(fund, []) == pytest.approx(0.4)

    def test_components_exposed(self, make_fund) -> None:
        a = make_fund("A", (10.0, 8.0, 6.0), expense_ratio=1.0)
        b = make_fund("B", (-1.0, -2.0, -3.0), expense_ratio=0.5)
        scored_a, scored_b = score_funds([a, b])

        assert (scored_a.past_norm, scored_a.sharpe_norm, scored_a.drawdown_norm) == (1.0, 1.0, 1.0)
        assert (scored_b.past_norm, scored_b.sharpe_norm, scored_b.drawdown_norm) == (0.0, 0.0, 0.0)

    def test_empty_set_scores_nothing(self) -> None:
        assert score_funds([]) == []

    def test_scoring_leaves_records_untouched(self, sample_funds) -> None:
        before = [f.model_dump() for f in sample_funds]
        score_funds(sample_funds)
        assert [f.model_dump() for f in sample_funds] == before
