# conftest.py
"""
Pytest configuration for unit tests:
- Provides a record factory and a small raw table shared by the test modules.
"""

import pytest

from cityblocks.model.records import CityRecord


HEADER = ["City", "Reporting Year", "Emissions", "Per Capita", "Population", "Year Reported", "Method"]


@pytest.fixture
def make_record():
    """
    Factory fixture for CityRecord with sensible defaults.

    Usage:
        rec = make_record("Oslo", year=2015, emissions=1_000_000)
    """
    def _make(
        city: str = "Oslo",
        year: int = 2015,
        emissions: int = 1000,
        per_capita: float = 2.5,
        population: int = 400,
        year_reported: int = 2016,
        method: str = "GPC",
    ) -> CityRecord:
        return CityRecord(
            city=city,
            reporting_year=year,
            emissions=emissions,
            per_capita=per_capita,
            population=population,
            year_reported=year_reported,
            method=method,
        )
    return _make


@pytest.fixture
def raw_rows():
    """Data rows (no header): four good, three bad."""
    return [
        ["Oslo", "2014", "1,201,000", "1.9", "634,463", "2016", "GPC"],
        ["Paris", "2015", "6,350,000", "2.9", "2,206,488", "2016", "Bilan Carbone"],
        ["Atlantis", "2015", "unknown", "3.1", "1,000", "2016", "GPC"],
        ["Houston", "2015", "40,600,000", "18.1", "2,239,558", "2016", "ICLEI"],
        ["Nowhere", "", "1,000", "1.0", "100", "2018", "Other"],
        ["Short", "2015", "1"],
        ["Oslo", "2017", "1,080,000", "1.6", "666,759", "2018", ""],
    ]


@pytest.fixture
def csv_text():
    return (
        ",".join(HEADER) + "\n"
        'Oslo,2014,"1,201,000",1.9,"634,463",2016,GPC\n'
        'Paris,2015,"6,350,000",2.9,"2,206,488",2016,Bilan Carbone\n'
        'Atlantis,2015,unknown,3.1,"1,000",2016,GPC\n'
        'Houston,2015,"40,600,000",18.1,"2,239,558",2016,ICLEI\n'
        'Oslo,2017,"1,080,000",1.6,"666,759",2018,GPC\n'
    )
