"""
Geo-Grid Bucketing
==================

Maps a geo-point to a coarse square cell key ``"<row>_<col>"`` where
``row = floor(lat / G)`` and ``col = floor(lng / G)``.  With the default
``G = 0.05`` degrees a cell is roughly 5 km across; routes are tagged with
every cell their polyline touches so candidate rides can be matched by
set intersection.

Floor (not truncation) semantics are required: ``-0.01`` falls in row
``-1`` while ``0.01`` falls in row ``0``.

Complexity: O(1) per point, O(n) for a polyline of n vertices.
"""

from __future__ import annotations

import math
from typing import Iterable

from .entities import GeoPoint

GRID_SIZE_DEG = 0.05


def cell_of(point: GeoPoint, cell_size_deg: float = GRID_SIZE_DEG) -> str:
    """Return the grid cell key for *point*.  Out-of-range coordinates are not rejected."""
    if cell_size_deg <= 0:
        raise ValueError("cell_size_deg must be positive")
    row = math.floor(point.latitude / cell_size_deg)
    col = math.floor(point.longitude / cell_size_deg)
    return f"{row}_{col}"


def cells_of(
    points: Iterable[GeoPoint], cell_size_deg: float = GRID_SIZE_DEG
) -> set[str]:
    """Return the de-duplicated set of cells covered by *points*."""
    return {cell_of(p, cell_size_deg) for p in points}
