# rmf_screener/services/normalizer.py

from typing import Sequence
from rmf_screener.models.fund import FundStatistics, NormalizationBounds

DEGENERATE_RANGE_VALUE = 0.5


class EmptyComparisonSetError(ValueError):
    """Raised when normalization bounds are requested for an empty set."""


def normalize(value: float, set_min: float, set_max: float) -> float:
    """Min-max scaling; a zero-width range maps every value to the midpoint."""
    if set_max == set_min:
        return DEGENERATE_RANGE_VALUE
    return (value - set_min) / (set_max - set_min)


def compute_bounds(statistics: Sequence[FundStatistics]) -> NormalizationBounds:
    """
    Bounds of every statistic across the comparison set.

    The bounds belong to exactly this set: recompute them whenever the set
    changes (e.g. after a filter is applied).
    """
    if not statistics:
        raise EmptyComparisonSetError("cannot compute normalization bounds of an empty comparison set")

    pasts = [s.weighted_past_return for s in statistics]
    sharpes = [s.risk_adjusted_return for s in statistics]
    drawdowns = [s.drawdown_proxy for s in statistics]

    return NormalizationBounds(
        past_min=min(pasts),
        past_max=max(pasts),
        sharpe_min=min(sharpes),
        sharpe_max=max(sharpes),
        drawdown_min=min(drawdowns),
        drawdown_max=max(drawdowns),
    )
