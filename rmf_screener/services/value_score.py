# rmf_screener/services/value_score.py

import logging
from typing import List, Sequence
from rmf_screener.models.fund import FundRecord, FundStatistics, NormalizationBounds, ScoredFund
from rmf_screener.services.normalizer import compute_bounds, normalize
from rmf_screener.services.return_statistics import compute_statistics

logger = logging.getLogger(__name__)


class ValueScoreEngine:
    """
    Composite value score: past performance, risk-adjusted return and drawdown,
    each min-max normalized across a comparison set, minus an expense penalty.

    Scoring is set-relative. The same fund can score differently against
    different comparison sets, so the set is always passed in explicitly.
    """

    MAX_EXPENSE_PENALTY = 0.2
    EXPENSE_PENALTY_DIVISOR = 10.0

    @staticmethod
    def is_disqualified(fund: FundRecord, stats: FundStatistics) -> bool:
        """Uniformly negative or net-negative performance is never recommended."""
        return all(r < 0 for r in fund.returns) or stats.weighted_past_return < 0

    @classmethod
    def expense_penalty(cls, fund: FundRecord) -> float:
        return min(cls.MAX_EXPENSE_PENALTY, (fund.expense_ratio or 0.0) / cls.EXPENSE_PENALTY_DIVISOR)

    @classmethod
    def score(cls, fund: FundRecord, stats: FundStatistics, bounds: NormalizationBounds) -> ScoredFund:
        past_norm = normalize(stats.weighted_past_return, bounds.past_min, bounds.past_max)
        sharpe_norm = normalize(stats.risk_adjusted_return, bounds.sharpe_min, bounds.sharpe_max)
        # Lower drawdown is better, so flip it
        drawdown_norm = 1 - normalize(stats.drawdown_proxy, bounds.drawdown_min, bounds.drawdown_max)

        if cls.is_disqualified(fund, stats):
            return ScoredFund(
                fund=fund,
                value_score=0.0,
                past_norm=past_norm,
                sharpe_norm=sharpe_norm,
                drawdown_norm=drawdown_norm,
                disqualified=True,
            )

        raw_score = (past_norm + sharpe_norm + drawdown_norm) / 3
        final_score = max(0.0, raw_score - cls.expense_penalty(fund))
        return ScoredFund(
            fund=fund,
            value_score=final_score,
            past_norm=past_norm,
            sharpe_norm=sharpe_norm,
            drawdown_norm=drawdown_norm,
        )

    @classmethod
    def score_funds(cls, funds: Sequence[FundRecord]) -> List[ScoredFund]:
        """
        Score every fund against the list itself.

        1. per-fund statistics, 2. set-wide bounds, 3. scores. An empty list
        yields an empty result.
        """
        if not funds:
            return []

        statistics = [compute_statistics(fund) for fund in funds]
        bounds = compute_bounds(statistics)
        scored = [cls.score(fund, stats, bounds) for fund, stats in zip(funds, statistics)]

        logger.debug(
            f"Scored {len(scored)} funds, {sum(1 for s in scored if s.disqualified)} disqualified"
        )
        return scored

    @classmethod
    def value_score(cls, fund: FundRecord, comparison_set: Sequence[FundRecord]) -> float:
        """
        Score a single fund against an explicit comparison set.

        An empty comparison set scores the fund against itself only.
        """
        stats = compute_statistics(fund)
        comparison = [compute_statistics(f) for f in comparison_set] or [stats]
        bounds = compute_bounds(comparison)
        return cls.score(fund, stats, bounds).value_score


def score_funds(funds: Sequence[FundRecord]) -> List[ScoredFund]:
    return ValueScoreEngine.score_funds(funds)


def value_score(fund: FundRecord, comparison_set: Sequence[FundRecord]) -> float:
    return ValueScoreEngine.value_score(fund, comparison_set)
