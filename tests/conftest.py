"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.calculations.cap_rate import Assumptions, parse_assumptions


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


# Calculator form defaults, as the UI sends them
FORM_ASSUMPTIONS = {
    "leaseCommission": "3",
    "leaseCommissionYears": "5",
    "closingCosts": "5",
    "loanInterest": "7.0",
    "ltc": "30",
    "capex": "150,000",
}


@pytest.fixture
def assumptions() -> Assumptions:
    """Default acquisition assumptions parsed from form strings."""
    return parse_assumptions(FORM_ASSUMPTIONS)


@pytest.fixture
def no_cost_assumptions() -> Assumptions:
    """Assumptions with every cost set to zero."""
    return Assumptions()
