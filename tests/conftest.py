"""Pytest configuration shared by the faultbridge tests."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in sys.path so tests.agents is importable
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from faultbridge.config import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from FAULTBRIDGE_* variables in the caller's shell."""
    for name in (
        "FAULTBRIDGE_AGENT_HOST",
        "FAULTBRIDGE_AGENT_PORT",
        "FAULTBRIDGE_INJECT_PATH",
        "FAULTBRIDGE_RECOVER_PATH",
        "FAULTBRIDGE_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
