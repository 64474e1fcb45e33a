"""
Input Manager (CSV)
Reads the emissions table from disk or over HTTP and turns it into a Dataset.
"""
from __future__ import annotations

from dataclasses import dataclass
import csv
import io
import logging
import os
from typing import List, Optional

import requests

from cityblocks.config import DEFAULT_DATA_PATH
from cityblocks.model.records import CityRecord, parse_records
from cityblocks.model.years import YearIndex, global_max_emissions, partition_by_year

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 30


class DatasetLoadError(Exception):
    """The source could not be fetched or decoded at all."""


@dataclass
class Dataset:
    """Everything derived from one load of the source table."""
    source: str
    header: List[str]
    records: List[CityRecord]
    year_index: YearIndex
    global_max: int


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class DatasetLoader:

    @staticmethod
    def fetch_text(source: str) -> str:
        """
        Return the raw CSV text of a file path or http(s) URL.

        Raises:
            DatasetLoadError: If the resource is missing, unreachable or not text.
        """
        if is_url(source):
            logger.info(f"Fetching dataset from: {source}")
            try:
                response = requests.get(source, timeout=HTTP_TIMEOUT)
                response.raise_for_status()
            except requests.RequestException as e:
                raise DatasetLoadError(f"Could not fetch '{source}': {e}") from e
            return response.text

        logger.info(f"Reading dataset from: {source}")
        if not os.path.isfile(source):
            raise DatasetLoadError(f"Dataset file '{source}' does not exist.")
        try:
            with open(source, "r", encoding="utf-8-sig", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Could not read '{source}': {e}") from e

    @staticmethod
    def split_rows(text: str) -> List[List[str]]:
        """Split CSV text into rows of cells (quoted cells may contain commas)."""
        return [row for row in csv.reader(io.StringIO(text))]

    @staticmethod
    def from_text(text: str, source: str = "<memory>") -> Dataset:
        """Parse CSV text whose first row is the header."""
        rows = DatasetLoader.split_rows(text)
        header = rows.pop(0) if rows else []

        records = parse_records(rows)
        year_index = partition_by_year(records)
        global_max = global_max_emissions(records)

        logger.info(
            f"Loaded {len(records)} record(s) over {len(year_index)} year(s) "
            f"{year_index.years()}, max emissions {global_max}."
        )
        return Dataset(
            source=source,
            header=header,
            records=records,
            year_index=year_index,
            global_max=global_max,
        )

    @staticmethod
    def load(source: Optional[str] = None) -> Dataset:
        """
        Fetch and parse the dataset.

        Args:
            source: File path or URL. Defaults to the bundled assets/data.csv.

        Raises:
            DatasetLoadError: If the source itself cannot be read. Malformed
                rows never raise, they are dropped.
        """
        if source is None:
            source = DEFAULT_DATA_PATH

        try:
            text = DatasetLoader.fetch_text(source)
        except DatasetLoadError as e:
            logger.exception(f"Failed to load dataset: {e}")
            raise

        return DatasetLoader.from_text(text, source=source)
