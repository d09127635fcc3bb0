"""
Core heuristics analysis for phishing detection.

``analyze`` runs the link, content and header evaluators over the same text,
folds their score contributions into one risk score and assembles the report.
The engine keeps no state between calls; the only non-deterministic input is
the authentication verifier, which callers can replace.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from phishlens.auth_checks import AuthVerifier, get_verifier
from phishlens.rulebook import HeuristicRules, get_rules
from .content import scan_content
from .headers import auth_contributions, inspect_headers
from .links import analyze_links, link_contributions
from .models import (
    CRITICAL, HIGH, LOW, MEDIUM, SAFE,
    AnalysisReport, Finding, HeaderAnalysis, LinkAnalysis, RiskContribution,
)

logger = logging.getLogger("heuristics.core")

MAX_SCORE = 100

# (exclusive upper bound, level), checked in order
RISK_BANDS = (
    (25, LOW),
    (50, MEDIUM),
    (75, HIGH),
)

NO_CONCERNS = Finding(type=SAFE, category="Overall", message="No major security concerns detected")


def classify_risk(score: int) -> str:
    """Map a score to its risk level; anything from 75 up is CRITICAL."""
    for upper, level in RISK_BANDS:
        if score < upper:
            return level
    return CRITICAL


def accumulate(contributions: Iterable[RiskContribution]):
    """Fold contributions into (raw score, findings in contribution order)."""
    total = 0
    findings: List[Finding] = []
    for contribution in contributions:
        total += contribution.score
        if contribution.finding is not None:
            findings.append(contribution.finding)
    return total, findings


def build_report(
    links: Sequence[LinkAnalysis],
    headers: HeaderAnalysis,
    contributions: Iterable[RiskContribution],
    rules: HeuristicRules,
) -> AnalysisReport:
    raw_score, findings = accumulate(contributions)

    # Raw score and its own cutoff, not the LOW band: 20-24 is LOW without it
    if raw_score < rules.safe_threshold:
        findings.append(NO_CONCERNS)

    risk_score = min(raw_score, MAX_SCORE)
    return AnalysisReport(
        risk_score=risk_score,
        risk_level=classify_risk(risk_score),
        findings=tuple(findings),
        links=tuple(links),
        headers=headers,
    )


def analyze(
    email_text: str,
    verifier: Optional[AuthVerifier] = None,
    rules: Optional[HeuristicRules] = None,
) -> AnalysisReport:
    """
    Produce the phishing-risk report for raw email text.

    Args:
        email_text: Headers and body pasted as one string (may be empty)
        verifier: Source of the SPF/DKIM verdict; defaults to the configured one
        rules: Heuristic lists and weights; defaults to the current rule book

    Returns:
        A new, immutable AnalysisReport
    """
    text = email_text or ""
    rules = rules or get_rules()
    verifier = verifier or get_verifier()

    links = analyze_links(text, rules)
    headers = inspect_headers(text, verifier)

    contributions: List[RiskContribution] = []
    contributions.extend(link_contributions(links, rules))
    contributions.extend(scan_content(text, rules))
    contributions.extend(auth_contributions(headers, rules))

    report = build_report(links, headers, contributions, rules)
    logger.info(
        f"Analysis complete: score={report.risk_score} level={report.risk_level} "
        f"links={len(report.links)} findings={len(report.findings)}"
    )
    return report


__all__ = [
    'MAX_SCORE',
    'RISK_BANDS',
    'classify_risk',
    'accumulate',
    'build_report',
    'analyze'
]
