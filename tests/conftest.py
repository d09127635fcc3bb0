import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from phishlens import live_config
from phishlens.auth_checks import StaticAuthVerifier
from phishlens.rulebook import DEFAULT_RULES


@pytest.fixture
def rules():
    return DEFAULT_RULES


@pytest.fixture
def passing_verifier():
    return StaticAuthVerifier(spf_valid=True, dkim_valid=True)


@pytest.fixture
def failing_verifier():
    return StaticAuthVerifier(spf_valid=False, dkim_valid=False)


@pytest.fixture
def stop_watcher():
    yield
    live_config.stop_watcher()
