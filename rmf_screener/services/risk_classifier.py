# rmf_screener/services/risk_classifier.py

from typing import Dict
from rmf_screener.models.fund import RiskLevel

DEFAULT_RISK_SCORE = 3

RISK_SCORES: Dict[str, int] = {
    RiskLevel.LOW.value: 1,
    RiskLevel.LOW_TO_MODERATE.value: 2,
    RiskLevel.MODERATE.value: 3,
    RiskLevel.MODERATE_TO_HIGH.value: 4,
    RiskLevel.HIGH.value: 5,
    # Thai labels used by local fund fact sheets
    "ต่ำ": 1,
    "ต่ำถึงปานกลาง": 2,
    "ปานกลาง": 3,
    "ปานกลางถึงสูง": 4,
    "สูง": 5,
}


def risk_score(label) -> int:
    """Ordinal 1 (lowest) .. 5 (highest); unknown labels are treated as moderate."""
    if isinstance(label, RiskLevel):
        label = label.value
    if not isinstance(label, str):
        return DEFAULT_RISK_SCORE
    return RISK_SCORES.get(label.strip(), DEFAULT_RISK_SCORE)


def risk_sort_key(label: str) -> int:
    """Ordinal of a known label (Thai or English), unknown labels after all known ones."""
    if isinstance(label, str) and label.strip() in RISK_SCORES:
        return RISK_SCORES[label.strip()]
    return max(RISK_SCORES.values()) + 1
