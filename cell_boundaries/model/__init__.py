"""Model package for the cell growth simulation."""

from .domain import BoundedDomain
from .cell import Cell, CellExtension
from .store import CellStore
from .mechanics import DivisionGeometry, InteractionModel, SphereMechanics
from .division import divide
from .behavior import Behavior, GrowthBehavior
from .registry import CellType, CellTypeRegistry, build_behaviors, register_behavior
from .state import CellSnapshot, SimulationState
from .engine import SimulationEngine, SimulationError

__all__ = [
    'BoundedDomain',
    'Cell',
    'CellExtension',
    'CellStore',
    'DivisionGeometry',
    'InteractionModel',
    'SphereMechanics',
    'divide',
    'Behavior',
    'GrowthBehavior',
    'CellType',
    'CellTypeRegistry',
    'build_behaviors',
    'register_behavior',
    'CellSnapshot',
    'SimulationState',
    'SimulationEngine',
    'SimulationError',
]
