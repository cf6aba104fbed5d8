# rmf_screener/services/fund_loader.py

import json
import logging
import re
import uuid
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type, retry_if_not_exception_type

from rmf_screener.core.config import Settings, settings
from rmf_screener.models.fund import FundRecord, RiskLevel, coerce_number

logger = logging.getLogger(__name__)

OTHER_CATEGORY = "อื่นๆ"
DEFAULT_MIN_INVESTMENT = 1000.0
NOT_SPECIFIED = "ไม่ระบุ"

# Fund feed reports risk on a 1-10 scale
RISK_LEVEL_LABELS: Dict[str, RiskLevel] = {
    "1": RiskLevel.LOW,
    "2": RiskLevel.LOW,
    "3": RiskLevel.LOW_TO_MODERATE,
    "4": RiskLevel.LOW_TO_MODERATE,
    "5": RiskLevel.MODERATE,
    "6": RiskLevel.MODERATE,
    "7": RiskLevel.MODERATE_TO_HIGH,
    "8": RiskLevel.MODERATE_TO_HIGH,
    "9": RiskLevel.HIGH,
    "10": RiskLevel.HIGH,
}

# Checked in order, first match wins
CATEGORY_PATTERNS: List[Tuple[str, str]] = [
    ("หุ้นไทย", r"หุ้นไทย|thai equity|thai stock|set|ตลาดหลักทรัพย์|หุ้นในประเทศ"),
    ("หุ้นต่างประเทศ", r"หุ้นต่างประเทศ|foreign equity|global equity|world equity|international equity|หุ้นโลก"),
    ("หุ้นสหรัฐอเมริกา", r"หุ้นสหรัฐ|หุ้นอเมริกา|us equity|usa equity|american equity|หุ้นอเมริกัน"),
    ("หุ้นจีน", r"หุ้นจีน|china equity|chinese equity|หุ้นประเทศจีน"),
    ("หุ้นญี่ปุ่น", r"หุ้นญี่ปุ่น|japan equity|japanese equity|หุ้นประเทศญี่ปุ่น"),
    ("หุ้นยุโรป", r"หุ้นยุโรป|europe equity|european equity|หุ้นประเทศยุโรป"),
    ("หุ้นตลาดเกิดใหม่", r"หุ้นตลาดเกิดใหม่|emerging markets|emerging equity|หุ้นประเทศกำลังพัฒนา"),
    ("ตราสารหนี้", r"ตราสารหนี้|fixed income|bond|debt|พันธบัตร|หุ้นกู้"),
    ("ตลาดเงิน", r"ตลาดเงิน|money market|เงินฝาก|deposit"),
    ("กองทุนรวมผสม", r"ผสม|mixed|balanced|สมดุล|ผสมหุ้นและตราสารหนี้"),
    ("กองทุนรวมยืดหยุ่น", r"ยืดหยุ่น|flexible|ปรับตัว|ปรับสัดส่วน"),
    ("อสังหาริมทรัพย์", r"อสังหา|property|real estate|ที่ดิน|อาคาร"),
    ("โครงสร้างพื้นฐาน", r"โครงสร้างพื้นฐาน|infrastructure|สาธารณูปโภค|พลังงาน|คมนาคม"),
    ("สินค้าโภคภัณฑ์", r"สินค้าโภคภัณฑ์|commodity|ทองคำ|ทอง|ทองคำขาว|น้ำมัน"),
    ("เทคโนโลยี", r"เทคโนโลยี|technology|tech|ดิจิทัล|digital|ai|artificial intelligence"),
    ("การเงิน", r"การเงิน|financial|ธนาคาร|banking|ประกัน|insurance"),
    ("บริโภค", r"บริโภค|consumer|อาหาร|เครื่องดื่ม|retail|ค้าปลีก"),
    ("พลังงาน", r"พลังงาน|energy|น้ำมัน|gas|ไฟฟ้า|พลังงานทดแทน"),
    ("สุขภาพ", r"สุขภาพ|healthcare|medical|ยา|โรงพยาบาล|biotech"),
    ("REIT", r"reit|real estate investment trust"),
    ("ตลาดเงิน", r"เงินฝาก|deposit|ตลาดเงิน|money"),
]
_COMPILED_CATEGORY_PATTERNS = [(category, re.compile(pattern)) for category, pattern in CATEGORY_PATTERNS]


class FundDataError(Exception):
    """The fund feed could not be read or has an unexpected shape."""


def _section(raw_fund: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = raw_fund.get(key)
    return section if isinstance(section, dict) else {}


def is_rmf(raw_fund: Dict[str, Any]) -> bool:
    overview = _section(raw_fund, "overviewInfo")
    if raw_fund.get("taxAllowance") == "RMF" or overview.get("taxAllowance") == "RMF":
        return True
    name = str(overview.get("name") or "").lower()
    symbol = str(overview.get("symbol") or "").lower()
    return "rmf" in name or "rmf" in symbol


def risk_label_from_level(risk_level: Any) -> str:
    return RISK_LEVEL_LABELS.get(str(risk_level).strip(), RiskLevel.MODERATE).value


def infer_category(name: Optional[str]) -> str:
    """Fund category guessed from keywords in its (Thai or English) name."""
    n = (name or "").lower()
    for category, pattern in _COMPILED_CATEGORY_PATTERNS:
        if pattern.search(n):
            return category
    return OTHER_CATEGORY


def _number(value: Any) -> float:
    number = coerce_number(value)
    return 0.0 if number is None else number


def transform_fund_data(raw_fund: Dict[str, Any]) -> FundRecord:
    overview = _section(raw_fund, "overviewInfo")
    performance = _section(raw_fund, "performanceInfo")
    fee = _section(raw_fund, "feeInfo")

    management_fee = _number(fee.get("actualManagementFee"))
    trustee_fee = _number(fee.get("actualTrusteeFee"))
    total_expense_ratio = management_fee + trustee_fee

    symbol = overview.get("symbol")
    raw_date = performance.get("date")
    nav_date = str(raw_date).split("T")[0] if raw_date else date.today().isoformat()

    return FundRecord(
        id=symbol or f"fund-{uuid.uuid4().hex}",
        name=overview.get("name") or "ไม่ระบุชื่อ",
        fund_code=symbol or "ไม่ระบุรหัส",
        company=overview.get("amcName") or "ไม่ระบุบริษัท",
        nav=_number(performance.get("navPerUnit")),
        nav_date=nav_date,
        expense_ratio=total_expense_ratio,
        return_1y=_number(performance.get("oneYearPercentChange")),
        return_3y=_number(performance.get("threeYearPercentChange")),
        return_5y=_number(performance.get("fiveYearPercentChange")),
        risk=risk_label_from_level(overview.get("riskLevel")),
        category=infer_category(overview.get("name")),
        min_investment=DEFAULT_MIN_INVESTMENT,
        management_fee=management_fee,
        trustee_fee=trustee_fee,
        custodian_fee=0.0,  # not published in the feed
        total_expense_ratio=total_expense_ratio,
        benchmark=NOT_SPECIFIED,
        inception_date=NOT_SPECIFIED,
        fund_size=_number(performance.get("nav")),
    )


def parse_fund_payload(payload: Any) -> List[FundRecord]:
    """
    Turn a raw feed document ({"filterFunds": [...]}) into RMF fund records.
    Non-RMF entries are dropped.
    """
    raw_funds = payload.get("filterFunds") if isinstance(payload, dict) else None
    if not isinstance(raw_funds, list) or len(raw_funds) == 0:
        raise FundDataError("Invalid data format: expected non-empty 'filterFunds' array")

    rmf_funds = [raw for raw in raw_funds if isinstance(raw, dict) and is_rmf(raw)]

    logger.info(f"Total funds: {len(raw_funds)}")
    logger.info(f"RMF funds: {len(rmf_funds)}")
    logger.info(f"Non-RMF funds filtered out: {len(raw_funds) - len(rmf_funds)}")

    if not rmf_funds:
        sample = [
            {
                "name": _section(raw, "overviewInfo").get("name"),
                "symbol": _section(raw, "overviewInfo").get("symbol"),
                "taxAllowance": raw.get("taxAllowance"),
            }
            for raw in raw_funds[:5] if isinstance(raw, dict)
        ]
        logger.warning(f"No RMF funds found in feed. First entries: {sample}")
        return []

    return [transform_fund_data(raw) for raw in rmf_funds]


def read_fund_payload(path: str) -> Any:
    with Path(path).open(encoding="utf-8") as fh:
        return json.load(fh)


@retry(
    stop=stop_after_attempt(settings.FUND_DATA_RETRIES),
    wait=wait_fixed(1),
    # A body that is not JSON will not get better on retry
    retry=(retry_if_exception_type(requests.RequestException)
           & retry_if_not_exception_type(requests.exceptions.JSONDecodeError)),
    reraise=True
)
def fetch_fund_payload(url: str, timeout: int = settings.FUND_DATA_TIMEOUT) -> Any:
    logger.info(f"Fetching fund feed from {url}")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def load_rmf_funds(config: Optional[Settings] = None) -> List[FundRecord]:
    """Load the RMF catalogue from FUND_DATA_PATH if set, otherwise FUND_DATA_URL."""
    config = config or settings
    try:
        if config.FUND_DATA_PATH:
            payload = read_fund_payload(config.FUND_DATA_PATH)
        else:
            payload = fetch_fund_payload(config.FUND_DATA_URL, timeout=config.FUND_DATA_TIMEOUT)
        funds = parse_fund_payload(payload)
    except (OSError, ValueError, TypeError, AttributeError, requests.RequestException) as e:
        logger.error(f"❌ Error loading RMF data: {e}")
        raise FundDataError(f"Failed to load RMF data: {e}") from e

    logger.info(f"✅ Loaded {len(funds)} RMF funds")
    return funds
