# rmf_screener/services/return_statistics.py

import numpy as np
from rmf_screener.models.fund import FundRecord, FundStatistics

# Favors recency while smoothing single-year noise
RETURN_WEIGHTS = (0.4, 0.35, 0.25)
RISK_FREE_RATE = 1.0
MIN_STD_DEV = 1.0


def weighted_past_return(fund: FundRecord) -> float:
    w1, w3, w5 = RETURN_WEIGHTS
    return fund.return_1y * w1 + fund.return_3y * w3 + fund.return_5y * w5


def risk_adjusted_return(fund: FundRecord) -> float:
    """
    Simplified Sharpe ratio over the three trailing returns.
    Population standard deviation; a flat return profile uses 1.0 instead of 0.
    """
    returns = np.array(fund.returns, dtype=float)
    mean = float(returns.mean())
    std_dev = float(returns.std())
    if std_dev == 0.0 or np.ptp(returns) == 0.0:
        std_dev = MIN_STD_DEV
    return (mean - RISK_FREE_RATE) / std_dev


def drawdown_proxy(fund: FundRecord) -> float:
    """Worst trailing return, negated: larger means a deeper loss."""
    return -min(fund.returns)


def compute_statistics(fund: FundRecord) -> FundStatistics:
    return FundStatistics(
        weighted_past_return=weighted_past_return(fund),
        risk_adjusted_return=risk_adjusted_return(fund),
        drawdown_proxy=drawdown_proxy(fund),
    )
