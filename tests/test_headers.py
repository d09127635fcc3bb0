from phishlens.auth_checks import StaticAuthVerifier
from phishlens.heuristics.headers import (
    DKIM_INVALID,
    FROM_RE,
    RETURN_PATH_RE,
    SPF_FAILED,
    auth_contributions,
    extract_field,
    inspect_headers,
)
from phishlens.heuristics.models import DANGER, UNKNOWN, WARNING, HeaderAnalysis


def test_sender_from_header_line(passing_verifier):
    headers = inspect_headers("From: Alice <alice@example.com>\nBody", passing_verifier)
    assert headers.sender == "Alice <alice@example.com>"


def test_missing_fields_are_unknown(passing_verifier):
    headers = inspect_headers("Hello there,\nsee you soon", passing_verifier)
    assert headers.sender == UNKNOWN
    assert headers.return_path == UNKNOWN
    assert headers.suspicious_headers == ()


def test_return_path_stops_at_line_end(passing_verifier):
    text = "Return-Path: <bounce@mailer.example.net>\r\nFrom: Billing <billing@example.net>\r\n\r\nHi"
    headers = inspect_headers(text, passing_verifier)
    assert headers.return_path == "<bounce@mailer.example.net>"
    assert headers.sender == "Billing <billing@example.net>"


def test_label_is_case_insensitive_and_colon_optional():
    assert extract_field(FROM_RE, "FROM   alice@example.com   \nbody") == "alice@example.com"
    assert extract_field(RETURN_PATH_RE, "return-path:<x@example.org>") == "<x@example.org>"


def test_first_match_wins():
    text = "From: first@example.com\nFrom: second@example.com"
    assert extract_field(FROM_RE, text) == "first@example.com"


def test_blank_value_is_unknown():
    assert extract_field(FROM_RE, "From:   ") == UNKNOWN
    assert extract_field(FROM_RE, "") == UNKNOWN


def test_verdict_comes_from_verifier():
    headers = inspect_headers("From: a@example.com", StaticAuthVerifier(spf_valid=False, dkim_valid=True))
    assert headers.spf_valid is False
    assert headers.dkim_valid is True


def test_auth_failures_raise_findings_spf_first(rules):
    contributions = auth_contributions(HeaderAnalysis(spf_valid=False, dkim_valid=False), rules)
    assert [c.score for c in contributions] == [25, 20]
    assert [(c.finding.type, c.finding.message) for c in contributions] == [
        (DANGER, SPF_FAILED),
        (WARNING, DKIM_INVALID),
    ]
    assert {c.finding.category for c in contributions} == {"Authentication"}


def test_passing_auth_adds_nothing(rules):
    assert list(auth_contributions(HeaderAnalysis(spf_valid=True, dkim_valid=True), rules)) == []
