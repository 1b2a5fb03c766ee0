"""Root test configuration: isolate tests from local config and env"""

import pytest

from postdoc.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop POSTDOC_* env vars so a developer's shell never leaks into tests."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"POSTDOC_{name.upper()}", raising=False)
