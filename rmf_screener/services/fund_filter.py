# rmf_screener/services/fund_filter.py

from typing import List, Optional, Sequence
from rmf_screener.models.fund import FilterCriteria, FundRecord


def matches(fund: FundRecord, criteria: FilterCriteria) -> bool:
    if criteria.category and fund.category != criteria.category:
        return False
    if criteria.company and fund.company != criteria.company:
        return False
    if criteria.risk and fund.risk != criteria.risk:
        return False
    if criteria.min_investment and fund.min_investment < criteria.min_investment:
        return False
    return True


def filter_funds(funds: Sequence[FundRecord], criteria: Optional[FilterCriteria] = None) -> List[FundRecord]:
    """
    Funds satisfying every set criterion, in their original order.
    Empty or missing criteria select everything.
    """
    if criteria is None or criteria.is_empty():
        return list(funds)
    return [fund for fund in funds if matches(fund, criteria)]
