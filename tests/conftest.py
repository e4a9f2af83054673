"""Root test configuration — isolate tests from user environment settings"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDRICH_* variables so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith("MDRICH_"):
            monkeypatch.delenv(name)
