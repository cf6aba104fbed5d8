# rmf_screener/services/catalogue_statistics.py

from typing import Dict, List, Sequence

import pandas as pd

from rmf_screener.models.fund import CatalogueOptions, CatalogueSummary, FundRecord
from rmf_screener.services.fund_loader import OTHER_CATEGORY
from rmf_screener.services.risk_classifier import risk_sort_key

SUMMARY_LIMIT = 5


def top_performers(funds: Sequence[FundRecord], limit: int = SUMMARY_LIMIT) -> List[FundRecord]:
    return sorted(funds, key=lambda f: f.return_1y, reverse=True)[:limit]


def lowest_expense(funds: Sequence[FundRecord], limit: int = SUMMARY_LIMIT) -> List[FundRecord]:
    # Zero means the feed had no fee data
    priced = [f for f in funds if f.expense_ratio > 0]
    return sorted(priced, key=lambda f: f.expense_ratio)[:limit]


def category_counts(funds: Sequence[FundRecord]) -> Dict[str, int]:
    """Number of funds per category, largest first (ties alphabetical)."""
    if not funds:
        return {}
    df = pd.DataFrame({"category": [f.category for f in funds]})
    counts = df.groupby("category").size().reset_index(name="funds")
    counts = counts.sort_values(["funds", "category"], ascending=[False, True])
    return {row.category: int(row.funds) for row in counts.itertuples(index=False)}


def catalogue_options(funds: Sequence[FundRecord]) -> CatalogueOptions:
    """Distinct values offered as filter choices."""
    categories = sorted({f.category for f in funds if f.category != OTHER_CATEGORY})
    companies = sorted({f.company for f in funds})
    risks = sorted({f.risk for f in funds}, key=lambda r: (risk_sort_key(r), r))

    return CatalogueOptions(
        categories=categories,
        companies=companies,
        risks=risks,
        category_counts=category_counts(funds),
    )


def catalogue_summary(funds: Sequence[FundRecord], limit: int = SUMMARY_LIMIT) -> CatalogueSummary:
    return CatalogueSummary(
        total_funds=len(funds),
        top_performers=top_performers(funds, limit),
        lowest_expense=lowest_expense(funds, limit),
    )
