"""State snapshot dataclasses for the cell growth simulation."""

from dataclasses import dataclass
from typing import List, Dict, Optional


@dataclass(frozen=True)
class CellSnapshot:
    """Immutable snapshot of a cell's state at a given time step."""
    uid: int
    parent_uid: Optional[int]
    x: float
    y: float
    z: float
    diameter: float
    can_divide: bool
    category: int


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given time step."""
    step: int
    cells: List[CellSnapshot]
    metrics: Dict[str, float]   # population, divisions, mean diameter, etc.

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "step": self.step,
                "cell_uid": c.uid,
                "parent_uid": "" if c.parent_uid is None else c.parent_uid,
                "x": c.x,
                "y": c.y,
                "z": c.z,
                "diameter": c.diameter,
                "can_divide": int(c.can_divide),
                "category": c.category
            }
            for c in self.cells
        ]
