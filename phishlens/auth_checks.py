# auth_checks.py
"""
SPF / DKIM verdicts for pasted email text.

Nothing here performs real cryptographic or DNS verification. Verifiers are
interchangeable so the engine never depends on where a verdict comes from:

- RandomAuthVerifier: simulated verdicts (independent random draws)
- HeaderAuthVerifier: results already recorded by the receiving MTA in the
  Authentication-Results / ARC-Authentication-Results / Received-SPF headers
- StaticAuthVerifier: a fixed verdict, for tests and reproducible runs
"""
import logging
import random
from dataclasses import dataclass
from email import message_from_string, policy
from typing import Iterable, Optional

logger = logging.getLogger("auth_checks")


@dataclass(frozen=True)
class AuthVerdict:
    spf_valid: bool
    dkim_valid: bool


class AuthVerifier:
    """Base class: produce an AuthVerdict for one email."""

    name = "base"

    def verify(self, email_text: str) -> AuthVerdict:
        raise NotImplementedError


class RandomAuthVerifier(AuthVerifier):
    """Simulated check: SPF passes with ``spf_pass_rate``, DKIM with ``dkim_pass_rate``."""

    name = "random"

    def __init__(self, spf_pass_rate: float = 0.7, dkim_pass_rate: float = 0.6, seed: Optional[int] = None):
        for label, rate in (("spf_pass_rate", spf_pass_rate), ("dkim_pass_rate", dkim_pass_rate)):
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{label} must be between 0 and 1, got {rate}")
        self.spf_pass_rate = spf_pass_rate
        self.dkim_pass_rate = dkim_pass_rate
        self._rng = random.Random(seed)

    def verify(self, email_text: str) -> AuthVerdict:
        verdict = AuthVerdict(
            spf_valid=self._rng.random() < self.spf_pass_rate,
            dkim_valid=self._rng.random() < self.dkim_pass_rate,
        )
        logger.debug(f"[AUTH] simulated verdict spf={verdict.spf_valid} dkim={verdict.dkim_valid}")
        return verdict


class StaticAuthVerifier(AuthVerifier):
    name = "static"

    def __init__(self, spf_valid: bool = True, dkim_valid: bool = True):
        self._verdict = AuthVerdict(spf_valid=spf_valid, dkim_valid=dkim_valid)

    def verify(self, email_text: str) -> AuthVerdict:
        return self._verdict


class HeaderAuthVerifier(AuthVerifier):
    """Trust the pass/fail results recorded in the message's own headers.

    Only a recorded ``pass`` counts as valid; missing results do not.
    """

    name = "headers"

    def verify(self, email_text: str) -> AuthVerdict:
        spf, dkim = parse_authentication_results(email_text)
        logger.debug(f"[AUTH] header results spf={spf} dkim={dkim}")
        return AuthVerdict(spf_valid=spf == "pass", dkim_valid=dkim == "pass")


def parse_authentication_results(email_text: str):
    """
    Extract SPF and DKIM results from the header block of raw email text.

    Returns a tuple (spf, dkim), each one of:
    pass | fail | softfail | none | neutral | temperror | permerror | unknown
    """
    try:
        if not email_text or not email_text.strip():
            return "unknown", "unknown"

        msg = message_from_string(email_text.lstrip(), policy=policy.default)

        # Prefer Authentication-Results family
        ar_all = " ".join(
            str(value)
            for name in ("Authentication-Results", "ARC-Authentication-Results")
            for value in (msg.get_all(name) or [])
        )
        spf = _extract_key_result(ar_all, "spf")
        dkim = _extract_key_result(ar_all, "dkim")

        if not spf:
            spf = _extract_from_header(str(v) for v in (msg.get_all("Received-SPF") or []))

        return (spf or "unknown"), (dkim or "unknown")

    except Exception as e:
        logger.warning(f"[AUTH] parse failed: {e}")
        return "unknown", "unknown"


# ---------------------------------------------------------------------------

def _extract_key_result(ar_text: str, key: str) -> Optional[str]:
    """
    Find tokens like 'spf=pass' or 'dkim=fail' in Authentication-Results text.
    """
    if not ar_text:
        return None
    key = key.lower()
    for token in ar_text.lower().replace(";", " ").split():
        if token.startswith(key + "="):
            val = token.split("=", 1)[1].strip(" ;,()")
            if val:
                return val
    return None


def _extract_from_header(values: Iterable[str]) -> Optional[str]:
    """Map free-form Received-SPF values to a result keyword."""
    for value in values:
        v = value.strip().lower()
        # Received-SPF starts with the result; check compound words first
        for keyword in ("softfail", "pass", "fail", "neutral", "none", "temperror", "permerror"):
            if v.startswith(keyword):
                return keyword
    return None


def get_verifier(name: Optional[str] = None, seed: Optional[int] = None) -> AuthVerifier:
    """Build a verifier by name: random, headers, pass or fail."""
    from phishlens.heuristics import config

    name = (name or config.AUTH_VERIFIER or "random").strip().lower()
    if name == "random":
        return RandomAuthVerifier(
            spf_pass_rate=config.SPF_PASS_RATE,
            dkim_pass_rate=config.DKIM_PASS_RATE,
            seed=seed if seed is not None else config.AUTH_RANDOM_SEED,
        )
    if name == "headers":
        return HeaderAuthVerifier()
    if name == "pass":
        return StaticAuthVerifier(spf_valid=True, dkim_valid=True)
    if name == "fail":
        return StaticAuthVerifier(spf_valid=False, dkim_valid=False)
    raise ValueError(f"Unknown authentication verifier: {name!r}")


VERIFIER_NAMES = ("random", "headers", "pass", "fail")

__all__ = [
    'AuthVerdict',
    'AuthVerifier',
    'RandomAuthVerifier',
    'HeaderAuthVerifier',
    'StaticAuthVerifier',
    'parse_authentication_results',
    'get_verifier',
    'VERIFIER_NAMES'
]
