# test_registry.py
"""
Unit tests for cityblocks.view.registry

Covers:
- lookup round trip for every registered object.
- non-registered objects (floor, lights, None, equal-but-distinct objects).
- clear() between years leaves no stale entries.
- unhashable objects.
"""

import pytest

from cityblocks.controller.layout import compute_layout
from cityblocks.view.registry import PickRegistry


class FakeActor:
    """Stands in for a pv.Actor; equality is deliberately value-based."""

    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, FakeActor) and other.name == self.name

    __hash__ = None  # unhashable, like many wrapper objects with __eq__


@pytest.fixture
def registry():
    return PickRegistry()


def build(registry, records, global_max=100):
    """Mimic the scene build: one actor per placement."""
    registry.clear()
    actors = []
    for block in compute_layout(records, global_max).blocks:
        actor = FakeActor(block.record.city)
        registry.register(actor, block.record)
        actors.append(actor)
    return actors


def test_round_trip_for_every_block(registry, make_record):
    records = [make_record(city=f"C{i}") for i in range(7)]
    actors = build(registry, records)
    assert len(registry) == 7
    for actor, record in zip(actors, records):
        assert registry.lookup(actor) is record
        assert actor in registry


def test_unregistered_objects_have_no_association(registry, make_record):
    build(registry, [make_record(city="Oslo")])
    floor = object()
    assert registry.lookup(floor) is None
    assert registry.lookup(None) is None
    assert floor not in registry


def test_identity_not_equality(registry, make_record):
    build(registry, [make_record(city="Oslo")])
    twin = FakeActor("Oslo")
    assert registry.lookup(twin) is None


def test_rebuild_drops_previous_year(registry, make_record):
    old = build(registry, [make_record(city="A", year=2014), make_record(city="B", year=2014)])
    new = build(registry, [make_record(city="C", year=2015)])
    assert len(registry) == 1
    assert all(registry.lookup(a) is None for a in old)
    assert registry.lookup(new[0]).city == "C"


def test_objects_and_iteration(registry, make_record):
    actors = build(registry, [make_record(city="A"), make_record(city="B")])
    assert registry.objects() == actors
    assert [rec.city for _, rec in registry] == ["A", "B"]


def test_clear_on_empty_registry(registry):
    registry.clear()
    assert len(registry) == 0
