"""Growable container owning every cell of the simulation."""

import logging
from typing import Callable, Dict, Iterator, List

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)


class CellStore:
    """
    Owns all Cell instances and hands out stable per-tick snapshots.

    Cells appended while for_each() is running are kept but only visited
    on the next pass.
    """

    def __init__(self):
        self._cells: List[Cell] = []
        self._by_uid: Dict[int, Cell] = {}
        self._next_uid = 1
        self.capacity = 0

    def reserve(self, count: int) -> None:
        """Record expected population size before bulk creation."""
        if count < 0:
            raise ValueError("reserve count must be non-negative")
        self.capacity = max(self.capacity, len(self._cells) + count)
        logger.debug("Reserved capacity for %d cells", self.capacity)

    def append(self, cell: Cell) -> int:
        """Take ownership of a cell and return its uid."""
        cell.uid = self._next_uid
        self._next_uid += 1
        self._cells.append(cell)
        self._by_uid[cell.uid] = cell
        return cell.uid

    def for_each(self, fn: Callable[[Cell], None]) -> int:
        """Apply fn to every cell present when the pass starts."""
        count = len(self._cells)
        for cell in self._cells[:count]:
            fn(cell)
        return count

    def get(self, uid: int) -> Cell:
        return self._by_uid[uid]

    def positions(self) -> np.ndarray:
        """Return (n, 3) array of cell centres."""
        if not self._cells:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array([c.position for c in self._cells], dtype=np.float64)

    def diameters(self) -> np.ndarray:
        return np.array([c.diameter for c in self._cells], dtype=np.float64)

    def clear(self) -> None:
        """Drop every cell (bulk teardown)."""
        self._cells.clear()
        self._by_uid.clear()

    @property
    def cells(self) -> List[Cell]:
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)
