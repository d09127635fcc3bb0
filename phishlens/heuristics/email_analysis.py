"""
Email analysis entry point for calling layers (web app, CLI).

Rejects input with nothing to analyze and turns unexpected engine failures
into one generic, user-presentable error. The analysis is all-or-nothing.
"""
import logging
from typing import Optional

from phishlens.auth_checks import AuthVerifier
from phishlens.rulebook import HeuristicRules
from .core import analyze
from .models import AnalysisReport

logger = logging.getLogger("heuristics.email_analysis")

EMPTY_EMAIL_MESSAGE = "Please paste an email to analyze"
ANALYSIS_FAILED_MESSAGE = "Unable to analyze the email. Please try again."


class EmptyEmailError(ValueError):
    """The submitted text is empty or whitespace only."""


class AnalysisError(RuntimeError):
    """The engine raised unexpectedly; no partial result is available."""


def analyze_email_content(
    email_text: Optional[str],
    verifier: Optional[AuthVerifier] = None,
    rules: Optional[HeuristicRules] = None,
) -> AnalysisReport:
    if not email_text or not email_text.strip():
        raise EmptyEmailError(EMPTY_EMAIL_MESSAGE)

    try:
        return analyze(email_text, verifier=verifier, rules=rules)
    except Exception as e:
        logger.error(f"Error in email analysis: {e}", exc_info=True)
        raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e


__all__ = [
    'EMPTY_EMAIL_MESSAGE',
    'ANALYSIS_FAILED_MESSAGE',
    'EmptyEmailError',
    'AnalysisError',
    'analyze_email_content'
]
