import os
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _clean_catchfall_env(monkeypatch):
    """Keep a developer's CATCHFALL_* overrides out of the tests."""
    for key in list(os.environ):
        if key.startswith("CATCHFALL_"):
            monkeypatch.delenv(key, raising=False)
