# test_formatting.py
"""Unit tests for cityblocks.view.formatting"""

import pytest

from cityblocks.controller.layout import ColorBucket
from cityblocks.view.formatting import bucket_label, detail_text, group_thousands


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1 000"),
        (12345, "12 345"),
        (1234567, "1 234 567"),
        (100000000, "100 000 000"),
        (-12000, "-12 000"),
    ],
)
def test_group_thousands(value, expected):
    assert group_thousands(value) == expected


def test_group_thousands_custom_separator():
    assert group_thousands(1234567, separator=",") == "1,234,567"


def test_detail_text(make_record):
    rec = make_record("Houston", emissions=40600000, per_capita=18.1, population=2239558)
    text = detail_text(rec)
    assert text.city == "<b>Houston</b>"
    assert text.emissions == "CO<sub>2</sub> emissions: 40 600 000 Metric Tonnes."
    assert text.per_capita == "CO<sub>2</sub> per capita: 18.1 Metric Tonnes per person."
    assert text.population == "Population: 2 239 558 residents."


def test_detail_text_escapes_city(make_record):
    assert detail_text(make_record("A & B <x>")).city == "<b>A &amp; B &lt;x&gt;</b>"


def test_every_bucket_has_label():
    assert all(bucket_label(b) for b in ColorBucket)
