"""
Sender / Return-Path extraction and the authentication verdict.
"""
import logging
import re
from typing import Iterable, List, Optional

from phishlens.auth_checks import AuthVerifier
from phishlens.rulebook import HeuristicRules
from .models import DANGER, UNKNOWN, WARNING, Finding, HeaderAnalysis, RiskContribution

logger = logging.getLogger("heuristics.headers")

# Label with optional colon, value runs to the end of its line
FROM_RE = re.compile(r"From:?\s*([^\n\r]+)", re.IGNORECASE)
RETURN_PATH_RE = re.compile(r"Return-Path:?\s*([^\n\r]+)", re.IGNORECASE)

CATEGORY = "Authentication"
SPF_FAILED = "SPF validation failed"
DKIM_INVALID = "DKIM signature invalid"


def extract_field(pattern: re.Pattern, text: str) -> str:
    """First match of ``pattern``, trimmed; UNKNOWN if absent or blank."""
    match: Optional[re.Match] = pattern.search(text or "")
    if not match:
        return UNKNOWN
    value = match.group(1).strip()
    return value or UNKNOWN


def inspect_headers(text: str, verifier: AuthVerifier) -> HeaderAnalysis:
    verdict = verifier.verify(text)
    headers = HeaderAnalysis(
        sender=extract_field(FROM_RE, text),
        return_path=extract_field(RETURN_PATH_RE, text),
        spf_valid=verdict.spf_valid,
        dkim_valid=verdict.dkim_valid,
    )
    logger.debug(
        f"Headers: sender={headers.sender!r} return_path={headers.return_path!r} "
        f"spf={headers.spf_valid} dkim={headers.dkim_valid} ({verifier.name})"
    )
    return headers


def auth_contributions(headers: HeaderAnalysis, rules: HeuristicRules) -> Iterable[RiskContribution]:
    """SPF failure first, then DKIM failure."""
    contributions: List[RiskContribution] = []
    if not headers.spf_valid:
        contributions.append(RiskContribution(
            score=rules.spf_fail_weight,
            finding=Finding(type=DANGER, category=CATEGORY, message=SPF_FAILED),
        ))
    if not headers.dkim_valid:
        contributions.append(RiskContribution(
            score=rules.dkim_fail_weight,
            finding=Finding(type=WARNING, category=CATEGORY, message=DKIM_INVALID),
        ))
    return contributions
