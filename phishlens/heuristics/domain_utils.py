"""
Domain and URL handling utilities for heuristics analysis.
"""
from urllib.parse import urlparse

import tldextract

# Bundled public suffix snapshot only: no list download, no disk cache
_tld_extractor = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


def url_hostname(url: str) -> str:
    """Lower-cased host of a URL, without credentials or port."""
    if not url:
        return ""
    try:
        parsed = urlparse(url if '//' in url else f'//{url}')
        return (parsed.hostname or "").lower()
    except ValueError:
        return ""


def registered_domain(url: str) -> str:
    """
    Registered domain (e.g. ``example.co.uk``) of a URL's host.

    Falls back to the bare hostname for IP literals, single-label hosts or
    anything the suffix list does not recognise.
    """
    hostname = url_hostname(url)
    if not hostname:
        return ""
    extracted = _tld_extractor(hostname)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return hostname


__all__ = [
    'url_hostname',
    'registered_domain'
]
