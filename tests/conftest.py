"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def fresh_clients():
    """Start and end every test without cached outbound HTTP clients."""
    import webhook.clients as clients

    clients._transport = None
    clients._backend = None
    yield
    clients._transport = None
    clients._backend = None
