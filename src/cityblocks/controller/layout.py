"""
Block Layout
============
Maps one year's records onto a square grid of boxes.

Why is this file needed?
------------------------
1. Placement: record i goes to cell (i // side, i % side) of a side x side grid
   centered at the origin with a pitch of 2 world units.
2. Height: linear in emissions against the dataset-wide maximum, so blocks are
   comparable between years.
3. Color: a step function of per-capita emissions.

No rendering happens here; the scene widget turns a YearLayout into actors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
from typing import List, Sequence, Tuple

from cityblocks.model.records import CityRecord

logger = logging.getLogger(__name__)

MAX_BLOCK_HEIGHT = 60.0
CELL_PITCH = 2.0
BLOCK_FOOTPRINT = 1.0

# Floor box: 100 x 10 x 100, top face at y = 0
FLOOR_SIZE = (100.0, 10.0, 100.0)
FLOOR_CENTER_Y = -5.0

SKY_COLOR = "#98BFDE"
FLOOR_COLOR = "#477A1E"


class ColorBucket(Enum):
    """Per-capita emission classes (tonnes CO2 per resident)."""
    A = "#1034A6"  # < 5.0
    B = "#412F88"  # [5.0, 7.5)
    C = "#722B6A"  # [7.5, 10.0)
    D = "#A2264B"  # [10.0, 40.0)
    E = "#FF0000"  # >= 40.0

    @property
    def color(self) -> str:
        return self.value


# Upper (exclusive) bounds, ascending
BUCKET_BOUNDS: Tuple[Tuple[float, ColorBucket], ...] = (
    (5.0, ColorBucket.A),
    (7.5, ColorBucket.B),
    (10.0, ColorBucket.C),
    (40.0, ColorBucket.D),
)


@dataclass(frozen=True)
class LightSpec:
    position: Tuple[float, float, float]
    color: str = "white"
    intensity: float = 1.0
    range: float = 100.0

    @property
    def attenuation(self) -> Tuple[float, float, float]:
        """(constant, linear, quadratic) falloff; half intensity at `range`."""
        return 1.0, 1.0 / self.range, 0.0


@dataclass(frozen=True)
class BlockPlacement:
    """Where and how one record is drawn."""
    record: CityRecord
    cell: Tuple[int, int]
    center: Tuple[float, float, float]
    height: float
    bucket: ColorBucket

    @property
    def color(self) -> str:
        return self.bucket.color

    @property
    def bounds(self) -> Tuple[float, float, float, float, float, float]:
        """(x_min, x_max, y_min, y_max, z_min, z_max) as used by pv.Box."""
        x, y, z = self.center
        half = BLOCK_FOOTPRINT / 2
        return (x - half, x + half, y - self.height / 2, y + self.height / 2, z - half, z + half)


@dataclass
class YearLayout:
    side: int
    blocks: List[BlockPlacement] = field(default_factory=list)
    lights: List[LightSpec] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.blocks)


def grid_side(n: int) -> int:
    """Smallest side of a square grid holding n cells (0 for n = 0)."""
    if n <= 0:
        return 0
    return math.ceil(math.sqrt(n))


def cell_of(index: int, side: int) -> Tuple[int, int]:
    """Row-major cell of the index-th record."""
    return index // side, index % side


def cell_to_world(i: int, j: int, side: int) -> Tuple[float, float]:
    """World (x, z) of the center of cell (i, j)."""
    x = (i + 0.5 - side / 2) * CELL_PITCH
    z = (j + 0.5 - side / 2) * CELL_PITCH
    return x, z


def block_height(emissions: float, global_max: float) -> float:
    """MAX_BLOCK_HEIGHT * emissions / global_max (flat blocks if the max is 0)"""
    if global_max <= 0:
        return 0.0
    return MAX_BLOCK_HEIGHT * emissions / global_max


def color_bucket(per_capita: float) -> ColorBucket:
    """Half-open intervals: a value on a boundary falls into the higher bucket."""
    for upper, bucket in BUCKET_BOUNDS:
        if per_capita < upper:
            return bucket
    return ColorBucket.E


def light_positions(side: int) -> List[LightSpec]:
    """Three point lights on the -X side, scaled with the grid footprint."""
    s = float(side)
    return [
        LightSpec(position=(-3 * s, 3 * s, -3 * s)),
        LightSpec(position=(-3 * s, 3 * s, 0.0)),
        LightSpec(position=(-3 * s, 3 * s, 3 * s)),
    ]


def compute_layout(records: Sequence[CityRecord], global_max: float) -> YearLayout:
    """
    Lay out one year's records.

    Args:
        records: Records of the year in source order.
        global_max: Largest emissions value over all years.

    Returns:
        The grid side, one placement per record and the light setup. An empty
        record list gives side 0 and no blocks.
    """
    side = grid_side(len(records))
    layout = YearLayout(side=side, lights=light_positions(side))

    for index, record in enumerate(records):
        i, j = cell_of(index, side)
        x, z = cell_to_world(i, j, side)
        height = block_height(record.emissions, global_max)
        layout.blocks.append(
            BlockPlacement(
                record=record,
                cell=(i, j),
                center=(x, height / 2, z),
                height=height,
                bucket=color_bucket(record.per_capita),
            )
        )

    logger.debug(f"Layout: {len(layout.blocks)} block(s) on a {side}x{side} grid.")
    return layout
