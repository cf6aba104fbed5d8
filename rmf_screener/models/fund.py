import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Dict, Optional, Any
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "Low"
    LOW_TO_MODERATE = "Low to Moderate"
    MODERATE = "Moderate"
    MODERATE_TO_HIGH = "Moderate to High"
    HIGH = "High"


class SortField(str, Enum):
    EXPENSE_RATIO = "expense_ratio"
    RETURN_1Y = "return_1y"
    RETURN_3Y = "return_3y"
    RETURN_5Y = "return_5y"
    RISK = "risk"
    FUND_SIZE = "fund_size"
    MANAGEMENT_FEE = "management_fee"
    MIN_INVESTMENT = "min_investment"
    NAME = "name"
    COMPANY = "company"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


NUMERIC_FIELDS = (
    "nav", "expense_ratio", "return_1y", "return_3y", "return_5y",
    "min_investment", "management_fee", "trustee_fee", "custodian_fee",
    "total_expense_ratio", "fund_size",
)
EXTENDED_METRIC_FIELDS = ("dividend_yield", "volatility", "sharpe_ratio", "max_drawdown")
TEXT_FIELDS = (
    "id", "fund_code", "name", "company", "category", "risk",
    "nav_date", "benchmark", "inception_date",
)


def coerce_number(value: Any) -> Optional[float]:
    """Best-effort float conversion; None when the value is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class FundRecord(BaseModel):
    """
    One retirement mutual fund as loaded from the data source.

    Records are frozen: scoring, filtering, sorting and ranking never edit
    them. Accepts both the camelCase feed names and snake_case field names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identity
    id: str = ""
    fund_code: str = Field("", alias="fundCode")
    name: str = ""
    company: str = ""
    category: str = ""

    # Pricing
    nav: float = 0.0
    nav_date: str = Field("", alias="navDate")

    # Trailing returns in percent
    return_1y: float = Field(0.0, alias="return1Y")
    return_3y: float = Field(0.0, alias="return3Y")
    return_5y: float = Field(0.0, alias="return5Y")

    risk: str = RiskLevel.MODERATE.value

    # Fees in percent
    expense_ratio: float = Field(0.0, alias="expenseRatio")
    management_fee: float = Field(0.0, alias="managementFee")
    trustee_fee: float = Field(0.0, alias="trusteeFee")
    custodian_fee: float = Field(0.0, alias="custodianFee")
    total_expense_ratio: float = Field(0.0, alias="totalExpenseRatio")

    fund_size: float = Field(0.0, alias="fundSize")
    min_investment: float = Field(0.0, alias="minInvestment")
    benchmark: str = ""
    inception_date: str = Field("", alias="inceptionDate")

    # Extended metrics, not used for scoring
    dividend_yield: Optional[float] = Field(None, alias="dividendYield")
    volatility: Optional[float] = None
    sharpe_ratio: Optional[float] = Field(None, alias="sharpeRatio")
    max_drawdown: Optional[float] = Field(None, alias="maxDrawdown")

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def coerce_required_number(cls, v):
        number = coerce_number(v)
        return 0.0 if number is None else number

    @field_validator(*EXTENDED_METRIC_FIELDS, mode="before")
    @classmethod
    def coerce_optional_number(cls, v):
        return coerce_number(v)

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, Enum):
            return str(v.value)
        return str(v)

    @property
    def returns(self) -> List[float]:
        return [self.return_1y, self.return_3y, self.return_5y]


class FundStatistics(BaseModel):
    """Per-fund derived statistics for one evaluation."""
    weighted_past_return: float
    risk_adjusted_return: float
    drawdown_proxy: float


class NormalizationBounds(BaseModel):
    """Min/max of each statistic across one comparison set."""
    past_min: float
    past_max: float
    sharpe_min: float
    sharpe_max: float
    drawdown_min: float
    drawdown_max: float


class ScoredFund(BaseModel):
    fund: FundRecord
    value_score: float = Field(..., ge=0)
    past_norm: float
    sharpe_norm: float
    drawdown_norm: float
    disqualified: bool = False
    rank: Optional[int] = Field(None, description="1-based position in a value ranking")


class FilterCriteria(BaseModel):
    """Conjunctive filter; unset fields impose no constraint."""
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = None
    company: Optional[str] = None
    risk: Optional[str] = None
    min_investment: Optional[float] = Field(None, alias="minInvestment")

    def is_empty(self) -> bool:
        return not (self.category or self.company or self.risk or self.min_investment)


class SortDirective(BaseModel):
    field: str = SortField.EXPENSE_RATIO.value
    direction: SortDirection = SortDirection.DESC


class CataloguePage(BaseModel):
    items: List[ScoredFund] = Field(default_factory=list)
    page: int = 1
    page_size: int
    total_items: int = 0
    total_pages: int = 0
    ranked: bool = False
    max_value_score: float = 0.0


class CatalogueOptions(BaseModel):
    categories: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    category_counts: Dict[str, int] = Field(default_factory=dict)


class CatalogueSummary(BaseModel):
    total_funds: int = 0
    top_performers: List[FundRecord] = Field(default_factory=list)
    lowest_expense: List[FundRecord] = Field(default_factory=list)
