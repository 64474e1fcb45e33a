"""
City Emission Records
=====================
Turns raw CSV rows into typed, validated city records.

The source table is loosely typed: numbers may carry thousands separators,
cells may be empty and some rows are plain garbage. Parsing is best-effort,
a bad row is dropped and counted, never raised.

Column order (fixed by the header row):
    city, reporting year, emissions, per capita, population, year reported, method
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import re
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Column indices of the source table
CITY = 0
REPORTING_YEAR = 1
EMISSIONS = 2
PER_CAPITA = 3
POPULATION = 4
YEAR_REPORTED = 5
METHOD = 6

N_COLUMNS = 7

THOUSANDS_SEPARATOR = ","

_LEADING_INT = re.compile(r"[+-]?\d+", re.ASCII)
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class CityRecord:
    """One validated row of the emissions table."""
    city: str
    reporting_year: int
    emissions: int  # metric tonnes CO2
    per_capita: float  # metric tonnes CO2 per resident
    population: int
    year_reported: int
    method: str


def strip_thousands(text: str) -> str:
    """'1,234,567' -> '1234567'"""
    return text.replace(THOUSANDS_SEPARATOR, "")


def parse_int(text: object) -> Optional[int]:
    """
    Parse the leading integer of a cell.

    Surrounding whitespace is ignored and trailing garbage is cut off, so
    '2015.0' gives 2015 and ' 42 t' gives 42. Cells without a leading
    integer give None.
    """
    if not isinstance(text, str):
        return None
    match = _LEADING_INT.match(text.strip())
    if match is None:
        return None
    return int(match.group())


def parse_float(text: object) -> Optional[float]:
    """
    Parse the leading decimal number of a cell.

    Returns None for cells without a leading number and for non-finite values.
    """
    if not isinstance(text, str):
        return None
    match = _LEADING_FLOAT.match(text.strip())
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def parse_row(row: Sequence[str]) -> Optional[CityRecord]:
    """
    Convert one raw row into a CityRecord.

    Args:
        row: The 7 text cells of a data row.

    Returns:
        The record, or None if the row has the wrong width or any of the five
        numeric cells fails to parse.
    """
    if len(row) != N_COLUMNS:
        return None

    reporting_year = parse_int(row[REPORTING_YEAR])
    emissions = parse_int(strip_thousands(row[EMISSIONS]))
    per_capita = parse_float(row[PER_CAPITA])
    population = parse_int(strip_thousands(row[POPULATION]))
    year_reported = parse_int(row[YEAR_REPORTED])

    numbers = (reporting_year, emissions, per_capita, population, year_reported)
    if any(value is None for value in numbers):
        return None

    return CityRecord(
        city=row[CITY],
        reporting_year=reporting_year,
        emissions=emissions,
        per_capita=per_capita,
        population=population,
        year_reported=year_reported,
        method=row[METHOD],
    )


def parse_records(rows: Iterable[Sequence[str]]) -> List[CityRecord]:
    """
    Validate all data rows (header already removed), keeping source order.

    Rejected rows are skipped; their count is logged so dirty sources remain
    visible without aborting the load.
    """
    records: List[CityRecord] = []
    rejected = 0

    for line_no, row in enumerate(rows, start=1):
        record = parse_row(row)
        if record is None:
            rejected += 1
            logger.debug(f"Rejected row {line_no}: {list(row)!r}")
            continue
        records.append(record)

    if rejected:
        logger.warning(f"Dropped {rejected} malformed row(s), kept {len(records)}.")
    else:
        logger.info(f"Parsed {len(records)} record(s).")

    return records
