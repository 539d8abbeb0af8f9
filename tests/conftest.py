"""
Shared pytest fixtures for decision_monads tests.

Provides fixtures for:
- Capturing the diagnostic channel (package logger)
- Switching the invalid-input policy
- The reference decision tables
"""

import pytest
from unittest.mock import patch

from decision_monads.logger import logger
from decision_monads.settings import settings


# =============================================================================
# Diagnostics
# =============================================================================

@pytest.fixture
def logged_errors():
    """Mock replacing logger.error for the duration of a test."""
    with patch.object(logger, "error") as mock_error:
        yield mock_error


@pytest.fixture
def logged_warnings():
    """Mock replacing logger.warning for the duration of a test."""
    with patch.object(logger, "warning") as mock_warning:
        yield mock_warning


@pytest.fixture
def raise_policy(monkeypatch):
    """Make malformed input raise instead of degrading."""
    monkeypatch.setitem(settings["diagnostics"], "on_invalid", "raise")


# =============================================================================
# Tables
# =============================================================================

@pytest.fixture
def value_table():
    """Seven value rows, four of them true."""
    return [
        (False, 1),
        (False, 2),
        (True, 3),
        (True, 3.5),
        (True, 3.76),
        (False, 3.99),
        (True, 4),
    ]


@pytest.fixture
def function_table():
    """Six function rows, three of them true."""
    def times_three(x):
        return x * 3

    return [
        (False, lambda x: x, 1),
        (False, lambda x: x, 2),
        (True, lambda x: x + 1, 2),
        (True, lambda x: x * 2, 2),
        (False, lambda x: x, 3),
        (True, times_three, 3),
    ]
