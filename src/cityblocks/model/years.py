"""
Year Index
Groups validated records by reporting year and provides the dataset-wide
emission maximum used to normalize block heights.
"""
from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from cityblocks.model.records import CityRecord

logger = logging.getLogger(__name__)


class YearIndex(Mapping):
    """
    Read-only mapping reporting year -> records of that year.

    Keys keep first-seen order; records keep source order within a year.
    """

    def __init__(self, buckets: Dict[int, Tuple[CityRecord, ...]]) -> None:
        self._buckets = buckets

    def __getitem__(self, year: int) -> Tuple[CityRecord, ...]:
        return self._buckets[year]

    def __iter__(self) -> Iterator[int]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        counts = ", ".join(f"{year}: {len(recs)}" for year, recs in self._buckets.items())
        return f"YearIndex({{{counts}}})"

    def has_year(self, year: int) -> bool:
        return year in self._buckets

    def years(self) -> List[int]:
        """Available years in ascending order."""
        return sorted(self._buckets)

    def total(self) -> int:
        """Number of records over all years."""
        return sum(len(recs) for recs in self._buckets.values())


def partition_by_year(records: Iterable[CityRecord]) -> YearIndex:
    """Split records into per-year buckets without reordering anything."""
    buckets: Dict[int, List[CityRecord]] = {}
    for record in records:
        year = record.reporting_year
        if year not in buckets:
            buckets[year] = []
        buckets[year].append(record)

    index = YearIndex({year: tuple(recs) for year, recs in buckets.items()})
    logger.debug(f"Partitioned records: {index!r}")
    return index


def global_max_emissions(records: Sequence[CityRecord]) -> int:
    """Largest emissions value of the whole dataset (0 when empty)."""
    return max((r.emissions for r in records), default=0)


def resolve_start_year(index: YearIndex, preferred: int) -> Optional[int]:
    """
    Year to show first: the preferred one if present, else the earliest one.
    """
    if index.has_year(preferred):
        return preferred
    years = index.years()
    if not years:
        return None
    logger.warning(f"Year {preferred} not in dataset, starting at {years[0]}.")
    return years[0]
