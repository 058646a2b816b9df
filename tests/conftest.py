"""Shared pytest configuration and fixtures for the AMOI tests."""

import logging
import sys
from pathlib import Path

import pandas as pd
import pytest

# Ensure the src/ modules are importable when running tests from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sst_index_toolbox import SSTIndexToolbox  # noqa: E402


@pytest.fixture
def toolbox():
    """Default-configured toolbox with quiet logging."""
    return SSTIndexToolbox(log_level=logging.WARNING)


@pytest.fixture
def monthly_time():
    """20 years of month-start time stamps from January 1950."""
    return pd.date_range("1950-01-01", periods=240, freq="MS")
