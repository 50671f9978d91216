"""Cell entity with extensible per-instance attributes."""

import math
from dataclasses import dataclass, fields
from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .behavior import Behavior
    from .mechanics import DivisionGeometry

Position = Tuple[float, float, float]


@dataclass
class CellExtension:
    """
    Extra data members a cell carries on top of its mechanical state.

    Every declared field, including those added by dataclass subclasses,
    is copied to the daughter unchanged. Subclasses override propagate()
    to reset a field instead; values are copied shallowly.
    """
    can_divide: bool = True
    category: int = 0

    def propagate(self) -> "CellExtension":
        """Return the extension record a daughter starts with."""
        return type(self)(**{f.name: getattr(self, f.name) for f in fields(self) if f.init})


class Cell:
    """
    Spherical cell with position, size and attached behaviors.

    Mechanical state (position, diameter, adherence, mass) is owned by the
    interaction model; behaviors read and write it through this object only
    for the cell they were invoked on.
    """

    def __init__(self, position: Position,
                 diameter: float,
                 adherence: float = 0.0,
                 mass: float = 1.0,
                 ext: Optional[CellExtension] = None,
                 behaviors: Optional[List["Behavior"]] = None,
                 parent_uid: Optional[int] = None):
        if len(position) != 3 or not all(math.isfinite(c) for c in position):
            raise ValueError(f"position must be three finite numbers; got {position!r}")
        if not diameter > 0:
            raise ValueError(f"diameter must be positive; got {diameter}")

        self.uid: Optional[int] = None  # assigned by CellStore.append
        self.parent_uid = parent_uid
        self.position: Position = tuple(float(c) for c in position)
        self.diameter = float(diameter)
        self.adherence = float(adherence)
        self.mass = float(mass)
        self.ext = ext if ext is not None else CellExtension()
        self.behaviors: List["Behavior"] = list(behaviors) if behaviors else []

    @property
    def can_divide(self) -> bool:
        return self.ext.can_divide

    @can_divide.setter
    def can_divide(self, value: bool) -> None:
        self.ext.can_divide = bool(value)

    @property
    def category(self) -> int:
        return self.ext.category

    @category.setter
    def category(self, value: int) -> None:
        self.ext.category = int(value)

    @property
    def volume(self) -> float:
        return math.pi / 6.0 * self.diameter ** 3

    def add_behavior(self, behavior: "Behavior") -> None:
        """Attach a per-step behavior."""
        self.behaviors.append(behavior)

    def run_behaviors(self) -> None:
        """Execute every attached behavior once, in attachment order."""
        for behavior in list(self.behaviors):
            behavior.run(self)

    def spawn_daughter(self, geometry: "DivisionGeometry",
                       ext: CellExtension,
                       behaviors: List["Behavior"]) -> "Cell":
        """
        Construct the daughter of a division.

        Per-cell data belongs in ext, which propagates on its own. A subclass
        that takes extra constructor arguments or keeps attributes outside
        ext overrides this hook to pass them on.
        """
        return type(self)(
            position=geometry.position,
            diameter=geometry.diameter,
            adherence=geometry.adherence,
            mass=geometry.mass,
            ext=ext,
            behaviors=behaviors,
            parent_uid=self.uid
        )

    def is_finite(self) -> bool:
        """Check that mechanical state is representable."""
        return (all(math.isfinite(c) for c in self.position) and
                math.isfinite(self.diameter) and self.diameter > 0)

    def __repr__(self) -> str:
        x, y, z = self.position
        return (f"Cell(uid={self.uid}, pos=({x:.2f}, {y:.2f}, {z:.2f}), "
                f"d={self.diameter:.2f}, category={self.category})")
