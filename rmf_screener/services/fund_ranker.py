# rmf_screener/services/fund_ranker.py

from typing import List, Sequence
from rmf_screener.models.fund import FundRecord, ScoredFund
from rmf_screener.services.value_score import score_funds


def rank_scored(funds: Sequence[FundRecord]) -> List[ScoredFund]:
    """Score the funds against each other and order by value score, best first.
    Ties keep their input order."""
    scored = score_funds(funds)
    ranked = sorted(scored, key=lambda s: s.value_score, reverse=True)
    return [s.model_copy(update={"rank": position}) for position, s in enumerate(ranked, start=1)]


def rank_funds(funds: Sequence[FundRecord]) -> List[FundRecord]:
    return [s.fund for s in rank_scored(funds)]
