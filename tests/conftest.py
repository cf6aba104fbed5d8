from __future__ import annotations

from typing import Any, Callable

import pytest

from rmf_screener.models.fund import FundRecord


def build_fund(code: str, returns: tuple[float, float, float] = (10.0, 8.0, 6.0), **overrides: Any) -> FundRecord:
    r1, r3, r5 = returns
    data: dict[str, Any] = {
        "id": code,
        "fund_code": code,
        "name": f"{code} RMF",
        "company": "Alpha Asset",
        "category": "ตราสารหนี้",
        "return_1y": r1,
        "return_3y": r3,
        "return_5y": r5,
        "risk": "Moderate",
        "expense_ratio": 1.0,
        "management_fee": 0.9,
        "trustee_fee": 0.1,
        "fund_size": 1_000_000.0,
        "min_investment": 1000.0,
    }
    data.update(overrides)
    return FundRecord(**data)


@pytest.fixture
def make_fund() -> Callable[..., FundRecord]:
    return build_fund


@pytest.fixture
def sample_funds() -> list[FundRecord]:
    """Small catalogue mixing categories, companies and one losing fund."""
    return [
        build_fund("AAA", (10.0, 8.0, 6.0), name="Alpha Bond RMF", expense_ratio=1.0,
                   category="ตราสารหนี้", company="Alpha Asset", risk="Low"),
        build_fund("BBB", (-1.0, -2.0, -3.0), name="beta Thai Equity RMF", expense_ratio=0.5,
                   category="หุ้นไทย", company="Beta Capital", risk="High"),
        build_fund("CCC", (20.0, 15.0, 10.0), name="Gamma Global RMF", expense_ratio=1.8,
                   category="หุ้นต่างประเทศ", company="Alpha Asset", risk="Moderate to High",
                   min_investment=5000.0),
        build_fund("DDD", (5.0, 4.0, 3.0), name="delta Money RMF", expense_ratio=0.2,
                   category="ตราสารหนี้", company="Delta Fund", risk="Low to Moderate"),
        build_fund("EEE", (7.0, 7.0, 7.0), name="Epsilon Mixed RMF", expense_ratio=0.0,
                   category="อื่นๆ", company="Beta Capital", risk="Moderate"),
    ]
