# rmf_screener/services/fund_sorter.py

import logging
from typing import Callable, Dict, List, Optional, Sequence, Union
from rmf_screener.models.fund import FundRecord, SortDirection, SortDirective, SortField
from rmf_screener.services.risk_classifier import risk_score

logger = logging.getLogger(__name__)

SORT_KEYS: Dict[SortField, Callable[[FundRecord], Union[float, int, str]]] = {
    SortField.EXPENSE_RATIO: lambda f: f.expense_ratio,
    SortField.RETURN_1Y: lambda f: f.return_1y,
    SortField.RETURN_3Y: lambda f: f.return_3y,
    SortField.RETURN_5Y: lambda f: f.return_5y,
    SortField.RISK: lambda f: risk_score(f.risk),
    SortField.FUND_SIZE: lambda f: f.fund_size,
    SortField.MANAGEMENT_FEE: lambda f: f.management_fee,
    SortField.MIN_INVESTMENT: lambda f: f.min_investment,
    SortField.NAME: lambda f: f.name.lower(),
    SortField.COMPANY: lambda f: f.company.lower(),
}

# camelCase names used by the fund feed and older clients
SORT_FIELD_ALIASES: Dict[str, SortField] = {
    "expenseRatio": SortField.EXPENSE_RATIO,
    "return1Y": SortField.RETURN_1Y,
    "return3Y": SortField.RETURN_3Y,
    "return5Y": SortField.RETURN_5Y,
    "fundSize": SortField.FUND_SIZE,
    "managementFee": SortField.MANAGEMENT_FEE,
    "minInvestment": SortField.MIN_INVESTMENT,
}


def resolve_sort_field(key) -> Optional[SortField]:
    if isinstance(key, SortField):
        return key
    if not isinstance(key, str):
        return None
    if key in SORT_FIELD_ALIASES:
        return SORT_FIELD_ALIASES[key]
    try:
        return SortField(key)
    except ValueError:
        return None


def sort_funds(funds: Sequence[FundRecord], directive: SortDirective) -> List[FundRecord]:
    """
    Stable sort into a new list. Equal keys keep their input order in both
    directions; an unknown sort field leaves the order untouched.
    """
    field = resolve_sort_field(directive.field)
    if field is None:
        logger.warning(f"Unknown sort field '{directive.field}', keeping input order")
        return list(funds)

    return sorted(
        funds,
        key=SORT_KEYS[field],
        reverse=directive.direction == SortDirection.DESC,
    )
