"""
Pick Registry
Associates rendered objects (actors) with the records they stand for, so the
object under the crosshair can be turned back into a city.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from cityblocks.model.records import CityRecord

logger = logging.getLogger(__name__)


class PickRegistry:
    """
    Identity-keyed map: object -> CityRecord.

    Objects are compared by identity, not equality, and a reference is held so
    the id of a registered object cannot be reused while it is registered.
    Covers the currently displayed year only; clear() before every rebuild.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Any, CityRecord]] = {}

    def register(self, obj: Any, record: CityRecord) -> None:
        self._entries[id(obj)] = (obj, record)

    def lookup(self, obj: Any) -> Optional[CityRecord]:
        """The record behind obj, or None for anything not registered (floor, lights, None)."""
        if obj is None:
            return None
        entry = self._entries.get(id(obj))
        if entry is None or entry[0] is not obj:
            return None
        return entry[1]

    def objects(self) -> List[Any]:
        return [obj for obj, _ in self._entries.values()]

    def clear(self) -> None:
        if self._entries:
            logger.debug(f"Dropping {len(self._entries)} pick entries.")
        self._entries.clear()

    def __contains__(self, obj: Any) -> bool:
        return self.lookup(obj) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[Any, CityRecord]]:
        return iter(list(self._entries.values()))
