"""Division protocol: how a daughter cell is produced from its mother."""

from typing import TYPE_CHECKING

from .cell import Cell

if TYPE_CHECKING:
    from .mechanics import InteractionModel
    from .store import CellStore


def divide(mother: Cell, mechanics: "InteractionModel", store: "CellStore") -> Cell:
    """
    Produce one daughter from mother and append it to the store.

    Mechanical parameters come from the interaction model; the extension
    record is copied through mother.ext.propagate() and behaviors flagged
    copy_on_division are shared with the daughter. The daughter itself is
    built by mother.spawn_daughter().
    """
    geometry = mechanics.split(mother)
    daughter = mother.spawn_daughter(
        geometry,
        mother.ext.propagate(),
        [b for b in mother.behaviors if b.copy_on_division]
    )
    store.append(daughter)
    return daughter
