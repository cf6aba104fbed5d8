# rmf_screener/services/catalogue_service.py

import logging
import math
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple, TypeVar

from rmf_screener.core.config import settings
from rmf_screener.models.fund import (
    CataloguePage,
    FilterCriteria,
    FundRecord,
    ScoredFund,
    SortDirective,
)
from rmf_screener.services.fund_filter import filter_funds
from rmf_screener.services.fund_loader import load_rmf_funds
from rmf_screener.services.fund_ranker import rank_scored
from rmf_screener.services.fund_sorter import sort_funds
from rmf_screener.services.value_score import score_funds

logger = logging.getLogger(__name__)

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> Tuple[List[T], int, int]:
    """
    Slice one 1-based page out of an ordered sequence.
    Returns (page items, clamped page number, total pages).
    """
    page_size = max(1, page_size)
    total_pages = math.ceil(len(items) / page_size)
    page = min(max(1, page), max(total_pages, 1))
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), page, total_pages


class FundCatalogue:
    """
    The loaded RMF catalogue and the screening pipeline over it:
    filter, sort, score against the filtered set, optionally rank, page.
    """

    def __init__(self, funds: Sequence[FundRecord]):
        self._funds: Tuple[FundRecord, ...] = tuple(funds)

    @property
    def funds(self) -> Tuple[FundRecord, ...]:
        return self._funds

    def __len__(self) -> int:
        return len(self._funds)

    def get_fund(self, fund_code: str) -> Optional[FundRecord]:
        for fund in self._funds:
            if fund.fund_code == fund_code or fund.id == fund_code:
                return fund
        return None

    def select(self, criteria: Optional[FilterCriteria] = None,
               directive: Optional[SortDirective] = None) -> List[FundRecord]:
        selected = filter_funds(self._funds, criteria)
        if directive is not None:
            selected = sort_funds(selected, directive)
        return selected

    def scored(self, criteria: Optional[FilterCriteria] = None,
               directive: Optional[SortDirective] = None,
               rank_by_value: bool = True) -> List[ScoredFund]:
        """Scores are relative to the filtered set, never the full catalogue."""
        selected = self.select(criteria, directive)
        if rank_by_value:
            return rank_scored(selected)
        return score_funds(selected)

    def view(self, criteria: Optional[FilterCriteria] = None,
             directive: Optional[SortDirective] = None,
             rank_by_value: bool = True,
             page: int = 1,
             page_size: Optional[int] = None) -> CataloguePage:
        page_size = page_size or settings.DEFAULT_PAGE_SIZE
        scored = self.scored(criteria, directive, rank_by_value)
        items, page, total_pages = paginate(scored, page, page_size)

        return CataloguePage(
            items=items,
            page=page,
            page_size=page_size,
            total_items=len(scored),
            total_pages=total_pages,
            ranked=rank_by_value,
            max_value_score=max((s.value_score for s in scored), default=0.0),
        )


@lru_cache()
def get_catalogue() -> FundCatalogue:
    """Process-wide catalogue, loaded on first use."""
    funds = load_rmf_funds(settings)
    logger.info(f"Fund catalogue ready with {len(funds)} funds")
    return FundCatalogue(funds)
