from fastapi import APIRouter, Depends, HTTPException, Query
import logging
from typing import List, Optional
from rmf_screener.core.config import settings
from rmf_screener.models.fund import (
    CatalogueOptions,
    CataloguePage,
    CatalogueSummary,
    FilterCriteria,
    FundRecord,
    ScoredFund,
    SortDirection,
    SortDirective,
    SortField,
)
from rmf_screener.services.catalogue_service import FundCatalogue, get_catalogue
from rmf_screener.services.catalogue_statistics import catalogue_options, catalogue_summary
from rmf_screener.services.fund_loader import FundDataError

router = APIRouter()
logger = logging.getLogger(__name__)


def load_catalogue() -> FundCatalogue:
    try:
        return get_catalogue()
    except FundDataError as e:
        logger.error(f"❌ Fund catalogue unavailable: {e}")
        raise HTTPException(status_code=503, detail="RMF fund data is currently unavailable")


def filter_params(
    category: Optional[str] = Query(None, description="Exact fund category"),
    company: Optional[str] = Query(None, description="Exact management company"),
    risk: Optional[str] = Query(None, description="Exact risk label, e.g. 'Moderate'"),
    min_investment: Optional[float] = Query(None, ge=0, description="Minimum initial investment lower bound"),
) -> FilterCriteria:
    return FilterCriteria(category=category, company=company, risk=risk, min_investment=min_investment)


# 🔹 Screened, scored and paged catalogue
@router.get("", response_model=CataloguePage)
def list_funds(
    criteria: FilterCriteria = Depends(filter_params),
    sort_by: str = Query(SortField.EXPENSE_RATIO.value, description="Sortable fund field"),
    direction: SortDirection = Query(SortDirection.DESC),
    rank: bool = Query(True, description="Order by value score instead of sort_by"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    catalogue: FundCatalogue = Depends(load_catalogue),
):
    directive = SortDirective(field=sort_by, direction=direction)
    return catalogue.view(criteria, directive, rank_by_value=rank, page=page, page_size=page_size)


# 🔹 Complete value ranking of the filtered set
@router.get("/ranked", response_model=List[ScoredFund])
def ranked_funds(
    criteria: FilterCriteria = Depends(filter_params),
    catalogue: FundCatalogue = Depends(load_catalogue),
):
    return catalogue.scored(criteria, rank_by_value=True)


@router.get("/options", response_model=CatalogueOptions)
def fund_options(catalogue: FundCatalogue = Depends(load_catalogue)):
    return catalogue_options(catalogue.funds)


@router.get("/statistics", response_model=CatalogueSummary)
def fund_statistics(
    criteria: FilterCriteria = Depends(filter_params),
    catalogue: FundCatalogue = Depends(load_catalogue),
):
    return catalogue_summary(catalogue.select(criteria))


@router.get("/{fund_code}", response_model=FundRecord)
def get_fund(fund_code: str, catalogue: FundCatalogue = Depends(load_catalogue)):
    fund = catalogue.get_fund(fund_code)
    if fund is None:
        raise HTTPException(status_code=404, detail=f"Fund {fund_code} not found")
    return fund
