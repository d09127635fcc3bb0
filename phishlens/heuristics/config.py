"""
Configuration and constants for heuristics module.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_int(raw):
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# Optional JSON file merged over the built-in heuristic rules
RULES_FILE = os.getenv("PHISHLENS_RULES_FILE") or None

# Authentication verifier: random | headers | pass | fail
AUTH_VERIFIER = os.getenv("PHISHLENS_AUTH_VERIFIER", "random").strip().lower()
SPF_PASS_RATE = float(os.getenv("SPF_PASS_RATE", "0.7"))
DKIM_PASS_RATE = float(os.getenv("DKIM_PASS_RATE", "0.6"))
AUTH_RANDOM_SEED = _optional_int(os.getenv("AUTH_RANDOM_SEED"))
