import pytest

from phishlens.auth_checks import AuthVerifier
from phishlens.heuristics.email_analysis import (
    ANALYSIS_FAILED_MESSAGE,
    EMPTY_EMAIL_MESSAGE,
    AnalysisError,
    EmptyEmailError,
    analyze_email_content,
)
from phishlens.heuristics.models import MEDIUM


class ExplodingVerifier(AuthVerifier):
    def verify(self, email_text):
        raise RuntimeError("resolver exploded")


@pytest.mark.parametrize("text", [None, "", "   \n\t  "])
def test_rejects_empty_input(text, passing_verifier):
    with pytest.raises(EmptyEmailError) as excinfo:
        analyze_email_content(text, verifier=passing_verifier)
    assert str(excinfo.value) == EMPTY_EMAIL_MESSAGE


def test_unexpected_failure_is_generic():
    with pytest.raises(AnalysisError) as excinfo:
        analyze_email_content("From: a@example.com\nhello", verifier=ExplodingVerifier())
    assert str(excinfo.value) == ANALYSIS_FAILED_MESSAGE
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_returns_report(passing_verifier):
    report = analyze_email_content("Your account is suspended: http://bit.ly/fix", verifier=passing_verifier)
    assert report.risk_score == 45
    assert report.risk_level == MEDIUM
