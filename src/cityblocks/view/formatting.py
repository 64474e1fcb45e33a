"""
Display Formatting
Number grouping and the rich-text lines of the detail panel.
"""
from __future__ import annotations

from dataclasses import dataclass
import html

from cityblocks.controller.layout import ColorBucket
from cityblocks.model.records import CityRecord

GROUP_SEPARATOR = " "


def group_thousands(value: int, separator: str = GROUP_SEPARATOR) -> str:
    """
    Group digits in threes from the right.

    Examples:
        - group_thousands(1234567) -> '1 234 567'
        - group_thousands(999) -> '999'
        - group_thousands(-12000) -> '-12 000'
    """
    sign = "-" if value < 0 else ""
    digits = str(abs(int(value)))
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return sign + separator.join(groups)


def format_per_capita(value: float) -> str:
    # 6.0 -> '6', 6.25 -> '6.25'
    return f"{value:g}"


@dataclass(frozen=True)
class DetailText:
    """Qt rich-text strings for the four panel labels."""
    city: str
    emissions: str
    per_capita: str
    population: str


def detail_text(record: CityRecord) -> DetailText:
    return DetailText(
        city=f"<b>{html.escape(record.city)}</b>",
        emissions=f"CO<sub>2</sub> emissions: {group_thousands(record.emissions)} Metric Tonnes.",
        per_capita=f"CO<sub>2</sub> per capita: {format_per_capita(record.per_capita)} Metric Tonnes per person.",
        population=f"Population: {group_thousands(record.population)} residents.",
    )


BUCKET_LABELS = {
    ColorBucket.A: "< 5 t/person",
    ColorBucket.B: "5 to 7.5 t/person",
    ColorBucket.C: "7.5 to 10 t/person",
    ColorBucket.D: "10 to 40 t/person",
    ColorBucket.E: ">= 40 t/person",
}


def bucket_label(bucket: ColorBucket) -> str:
    """Legend text of a per-capita color class."""
    return BUCKET_LABELS[bucket]
