"""Per-step cell behaviors: growth, division trigger and boundary clamp."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .cell import Cell
from .division import divide
from .domain import BoundedDomain

if TYPE_CHECKING:
    from .mechanics import InteractionModel
    from .store import CellStore


class Behavior(ABC):
    """Rule executed once per cell per tick."""

    # Daughters inherit the behavior instance on division
    copy_on_division = True

    @abstractmethod
    def run(self, cell: Cell) -> None:
        """Read and update the state of the cell it is invoked on."""


class GrowthBehavior(Behavior):
    """
    Grow the cell until it reaches division size, then divide.

    Per tick, in this order:
    1. diameter < division_diameter: request volume_increase from mechanics.
       Otherwise divide if the cell is allowed to.
    2. Clamp x and y into the domain margin band (z is never touched).

    A daughter created in step 1 does not exist yet when the mother is
    clamped, so it is first clamped on its own next invocation.
    """

    def __init__(self, domain: BoundedDomain,
                 mechanics: "InteractionModel",
                 store: "CellStore",
                 division_diameter: float = 8.0,
                 volume_increase: float = 300.0):
        self.domain = domain
        self.mechanics = mechanics
        self.store = store
        self.division_diameter = division_diameter
        self.volume_increase = volume_increase

    def run(self, cell: Cell) -> None:
        if cell.diameter < self.division_diameter:
            self.mechanics.change_volume(cell, self.volume_increase)
        elif cell.can_divide:
            daughter = divide(cell, self.mechanics, self.store)
            daughter.category = cell.category
            daughter.can_divide = True

        self.clamp(cell)

    def clamp(self, cell: Cell) -> None:
        """Pull x/y back inside the domain; write only if something changed."""
        d = self.domain
        eps = d.margin
        x, y, z = cell.position
        update_position = False

        # FIXME(suspected defect): both lower-bound branches move the cell to
        # x_max + eps, not x_min + eps / y_min + eps. Left unchanged; fixing it
        # changes simulation outcomes.
        if x > d.x_max - eps:
            x = d.x_max - eps
            update_position = True
        elif x < d.x_min + eps:
            x = d.x_max + eps
            update_position = True

        if y > d.y_max - eps:
            y = d.y_max - eps
            update_position = True
        elif y < d.y_min + eps:
            y = d.x_max + eps
            update_position = True

        if update_position:
            cell.position = (x, y, z)
