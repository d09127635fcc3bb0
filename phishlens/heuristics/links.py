"""
Link extraction and classification.

Every http(s) URL occurrence in the text becomes one LinkAnalysis, in order of
appearance and without deduplication. A link is suspicious when it contains a
listed domain or does not use https; each suspicious link is worth a flat score
regardless of how many reasons apply to it.

Scheme and domain matching ignore case, so ``HTTPS://example.com`` is secure
and ``HTTP://BIT.LY/x`` gets the "Shortened URL" reason. A case-sensitive
prefix and substring check would instead flag the first as an insecure
protocol and give the second no shortener reason.
"""
import logging
import re
from typing import Iterable, List

from phishlens.rulebook import HeuristicRules
from .domain_utils import registered_domain
from .models import LinkAnalysis, RiskContribution

logger = logging.getLogger("heuristics.links")

# Runs until whitespace or one of < > " '
URL_RE = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)

DISPLAY_TEXT_LIMIT = 50
ELLIPSIS = "..."


def extract_urls(text: str) -> List[str]:
    """All URL occurrences, duplicates included, in scan order."""
    if not text:
        return []
    return URL_RE.findall(text)


def display_text(url: str, limit: int = DISPLAY_TEXT_LIMIT) -> str:
    if len(url) > limit:
        return url[:limit] + ELLIPSIS
    return url


def is_secure(url: str) -> bool:
    return url.lower().startswith("https://")


def is_suspicious(url: str, rules: HeuristicRules) -> bool:
    lowered = url.lower()
    if any(domain in lowered for domain in rules.suspicious_domains):
        return True
    return not is_secure(url)


def link_reasons(url: str, rules: HeuristicRules) -> List[str]:
    """Every applicable reason label, evaluated independently."""
    lowered = url.lower()
    reasons = [
        label for label, markers in rules.link_reasons.items()
        if any(marker in lowered for marker in markers)
    ]
    if not is_secure(url):
        reasons.append(rules.insecure_reason)
    return reasons


def classify_link(url: str, rules: HeuristicRules) -> LinkAnalysis:
    suspicious = is_suspicious(url, rules)
    reasons = tuple(link_reasons(url, rules)) if suspicious else ()
    return LinkAnalysis(
        url=url,
        display_text=display_text(url),
        suspicious=suspicious,
        reasons=reasons,
        domain=registered_domain(url),
    )


def analyze_links(text: str, rules: HeuristicRules) -> List[LinkAnalysis]:
    links = [classify_link(url, rules) for url in extract_urls(text)]
    flagged = sum(1 for link in links if link.suspicious)
    if links:
        logger.debug(f"Found {len(links)} link(s), {flagged} suspicious")
    return links


def link_contributions(links: Iterable[LinkAnalysis], rules: HeuristicRules) -> Iterable[RiskContribution]:
    """One flat contribution per suspicious link; links never raise findings."""
    for link in links:
        if link.suspicious:
            yield RiskContribution(score=rules.suspicious_link_weight)


__all__ = [
    'URL_RE',
    'DISPLAY_TEXT_LIMIT',
    'ELLIPSIS',
    'extract_urls',
    'display_text',
    'is_suspicious',
    'link_reasons',
    'classify_link',
    'analyze_links',
    'link_contributions'
]
