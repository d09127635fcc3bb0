from phishlens.heuristics.links import (
    ELLIPSIS,
    analyze_links,
    classify_link,
    display_text,
    extract_urls,
    link_contributions,
)


def test_extract_urls_stops_at_whitespace_and_markup():
    text = 'See http://a.example.com/x and <a href="HTTPS://b.example.com/y">here</a> or \'https://c.example.com/z\''
    assert extract_urls(text) == [
        "http://a.example.com/x",
        "HTTPS://b.example.com/y",
        "https://c.example.com/z",
    ]


def test_extract_urls_keeps_duplicates_in_order():
    text = "http://one.example.com https://two.example.com http://one.example.com"
    assert extract_urls(text) == [
        "http://one.example.com",
        "https://two.example.com",
        "http://one.example.com",
    ]


def test_extract_urls_ignores_other_schemes():
    assert extract_urls("ftp://files.example.com mailto:someone@example.com") == []
    assert extract_urls("") == []


def test_shortened_insecure_link(rules):
    link = classify_link("http://bit.ly/x", rules)
    assert link.suspicious is True
    assert link.reasons == ("Shortened URL", "Insecure protocol")
    assert link.domain == "bit.ly"


def test_shortener_over_https(rules):
    link = classify_link("https://tinyurl.com/abc", rules)
    assert link.suspicious is True
    assert link.reasons == ("Shortened URL",)


def test_placeholder_domain(rules):
    link = classify_link("https://suspicious-domain.com/login", rules)
    assert link.suspicious is True
    assert link.reasons == ("Suspicious domain",)


def test_plain_http_is_insecure(rules):
    link = classify_link("http://example.com/page", rules)
    assert link.suspicious is True
    assert link.reasons == ("Insecure protocol",)


def test_secure_unlisted_link_is_clean(rules):
    link = classify_link("https://www.example.com/account", rules)
    assert link.suspicious is False
    assert link.reasons == ()
    assert link.domain == "example.com"


def test_reason_markers_only_apply_to_flagged_links(rules):
    # "tinyurl" marker without the listed tinyurl.com domain, over https
    link = classify_link("https://tinyurl.org/abc", rules)
    assert link.suspicious is False
    assert link.reasons == ()


def test_uppercase_https_scheme_is_secure(rules):
    assert classify_link("HTTPS://www.example.com/", rules).suspicious is False


def test_domain_uses_public_suffix(rules):
    assert classify_link("https://mail.example.co.uk/inbox", rules).domain == "example.co.uk"
    assert classify_link("http://192.168.1.10/login", rules).domain == "192.168.1.10"


def test_display_text_truncation():
    short = "https://example.com/x"
    exact = "https://example.com/" + "a" * 30
    long_url = "https://example.com/" + "a" * 60
    assert len(exact) == 50
    assert display_text(short) == short
    assert display_text(exact) == exact
    assert display_text(long_url) == long_url[:50] + ELLIPSIS
    assert len(display_text(long_url)) == 50 + len(ELLIPSIS)


def test_each_suspicious_link_adds_flat_score(rules):
    text = "http://a.example.com https://bit.ly/1 https://safe.example.com http://bit.ly/2"
    links = analyze_links(text, rules)
    contributions = list(link_contributions(links, rules))
    assert [link.suspicious for link in links] == [True, True, False, True]
    assert [c.score for c in contributions] == [30, 30, 30]
    assert all(c.finding is None for c in contributions)


def test_link_urls_are_substrings_of_input(rules):
    text = "Reset here: http://bit.ly/reset>now and https://example.com/a'b"
    for link in analyze_links(text, rules):
        assert link.url in text


def test_link_analysis_is_repeatable(rules):
    text = "http://bit.ly/x https://example.com http://suspicious-domain.com/a"
    assert analyze_links(text, rules) == analyze_links(text, rules)


def test_uppercase_shortener_gets_reason(rules):
    link = classify_link("HTTP://BIT.LY/x", rules)
    assert link.suspicious is True
    assert link.reasons == ("Shortened URL", "Insecure protocol")
