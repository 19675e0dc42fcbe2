"""
Shared test fixtures and sample data for tabular-codec tests.

Sample lines and layouts are defined here as module-level constants for
easy discovery and modification.
"""

import pytest

# ---------------------------------------------------------------------------
# Sample data -- edit here if the shared examples change
# ---------------------------------------------------------------------------
CUSTOMER_LAYOUT = [
    {"key": "name", "width": 10},
    {"width": 2},
    {"key": "zip", "width": 5},
    {"key": "age", "width": 3, "type": "integer"},
    {"key": "weight", "width": 7, "type": "float", "decimals": 2},
]

CUSTOMER_LINES = [
    # name(10) + filler(2) + zip(5) + age(3) + weight(7)
    "Jack      " + "XX" + "90210" + "032" + "0125.50",
    "Jill      " + "  " + "12345" + "   " + "0000.00",
]

PEOPLE_CSV = [
    "First Name,Last Name,Age,Internal Code",
    'Jack,"Smith, Jr.",32,A1',
    "",
    'Jill,"O""Brien",29,B2',
]


@pytest.fixture()
def customer_layout() -> list[dict]:
    return [dict(c) for c in CUSTOMER_LAYOUT]


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (multi-line end-to-end sessions)",
    )
