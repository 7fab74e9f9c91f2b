"""
Shared test fixtures and sample inputs for charge-summation tests.

Sample charge texts are defined here as module-level constants so unit
and integration tests exercise the same inputs.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample inputs -- edit here if new shapes of charge file are needed
# ---------------------------------------------------------------------------
CLEAN_CHARGES = "$12.34\n$5.00\n$1,000.00\n"
CLEAN_TOTAL = 1017.34

MIXED_CHARGES = "Statement\n$1.00\n$abc\n$3.00\n$\n"
MIXED_TOTAL = 4.00
MIXED_ERRORS = (2, 4)


@pytest.fixture()
def charge_file(tmp_path: Path):
    """Factory writing *text* to a file under tmp_path and returning its path."""

    def _write(text: str, name: str = "charges.txt", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads and writes real files)",
    )
