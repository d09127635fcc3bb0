"""
Phishing-language scan of the email text.
"""
import logging
from typing import Iterable

from phishlens.rulebook import HeuristicRules
from .models import WARNING, Finding, RiskContribution

logger = logging.getLogger("heuristics.content")

CATEGORY = "Content Analysis"


def scan_content(text: str, rules: HeuristicRules) -> Iterable[RiskContribution]:
    """
    Yield one contribution per listed phrase found in the case-folded text.

    Plain substring containment: a phrase inside a longer word still counts,
    and each phrase is counted at most once however often it occurs.
    """
    lowered = (text or "").lower()
    for phrase, weight in rules.phishing_phrases.items():
        if phrase in lowered:
            logger.debug(f"Suspicious phrase found: '{phrase}'")
            yield RiskContribution(
                score=weight,
                finding=Finding(
                    type=WARNING,
                    category=CATEGORY,
                    message=f'Contains suspicious phrase: "{phrase}"',
                ),
            )
