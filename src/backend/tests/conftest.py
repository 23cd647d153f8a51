import os
import sys

import pytest


# Ensure `src/backend` is on sys.path so `common`, `api` and `scripts` import
# the same way whether pytest runs from the repository root or from here.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)


@pytest.fixture(autouse=True)
def _isolated_rules_env(monkeypatch):
    # A developer's .env must not leak a rules file or log level into tests.
    monkeypatch.delenv("STOREFRONT_RULES_PATH", raising=False)
    monkeypatch.delenv("STOREFRONT_RULES_LOG_LEVEL", raising=False)
