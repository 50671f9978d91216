"""Simulation engine driving cell growth, division and confinement."""

import logging
import numpy as np
from typing import Dict, Optional, TYPE_CHECKING

from .cell import Cell, CellExtension
from .domain import BoundedDomain
from .mechanics import InteractionModel, SphereMechanics
from .registry import CellType, CellTypeRegistry, build_behaviors
from .state import SimulationState, CellSnapshot
from .store import CellStore

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """Raised when a tick leaves a cell in an unrepresentable state."""


class SimulationEngine:
    """
    Orchestrates the discrete-time simulation loop.

    Implements:
    1. Domain, store and mechanics initialization
    2. Founder cell placement
    3. Per-tick behavior pass over a stable snapshot of the population
    4. Mechanical resolution and state snapshot generation
    """

    def __init__(self, config: "SimulationConfig",
                 mechanics: Optional[InteractionModel] = None):
        self.config = config
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)

        self.domain = BoundedDomain.from_ranges(
            config.domain.x_range,
            config.domain.y_range,
            config.domain.cube_dim,
            config.domain.margin
        )
        self.store = CellStore()

        if mechanics is None:
            half = config.domain.cube_dim / 2
            mechanics = SphereMechanics(
                self.rng,
                dt=config.mechanics.dt,
                run_mechanical_interactions=config.mechanics.run_mechanical_interactions,
                bound_space=config.mechanics.bound_space,
                min_bound=-half,
                max_bound=half,
                max_displacement=config.mechanics.max_displacement,
                repulsion=config.mechanics.repulsion,
                attraction=config.mechanics.attraction
            )
        self.mechanics = mechanics

        self.cell_types = CellTypeRegistry()
        for type_cfg in config.cell_types:
            self.cell_types.register(CellType(
                name=type_cfg.name,
                behaviors=type_cfg.behaviors,
                can_divide=type_cfg.can_divide,
                category=type_cfg.category
            ))

        # Metrics tracking
        self.total_divisions = 0
        self.last_divisions = 0

        self._spawn_cells()

    def _behavior_params(self) -> Dict[str, Dict]:
        return {
            "growth": {
                "division_diameter": self.config.growth.division_diameter,
                "volume_increase": self.config.growth.volume_increase,
            }
        }

    def _spawn_cells(self) -> None:
        """Place founder cells uniformly on the seeding plane."""
        self.store.reserve(self.config.cell_count)
        d = self.domain

        for type_cfg in self.config.cell_types:
            cell_type = self.cell_types.get(type_cfg.name)
            # One behavior set per type, shared by all its cells and their offspring
            behaviors = build_behaviors(
                cell_type.behaviors,
                params=self._behavior_params(),
                domain=d,
                mechanics=self.mechanics,
                store=self.store
            )
            for _ in range(type_cfg.count):
                x = self.rng.uniform(d.x_min, d.x_max)
                y = self.rng.uniform(d.y_min, d.y_max)
                cell = Cell(
                    position=(x, y, d.z_min_init),
                    diameter=self.config.cells.diameter,
                    adherence=self.config.cells.adherence,
                    mass=self.config.cells.mass,
                    ext=CellExtension(
                        can_divide=cell_type.can_divide,
                        category=cell_type.category
                    ),
                    behaviors=behaviors
                )
                self.store.append(cell)

        logger.info("Spawned %d cells in domain x=[%g, %g] y=[%g, %g]",
                    len(self.store), d.x_min, d.x_max, d.y_min, d.y_max)

    def step(self) -> SimulationState:
        """
        Execute one discrete time step.

        1. Run every cell's behaviors once (cells born this tick are skipped)
        2. Resolve mechanical interactions
        3. Validate cell state
        4. Return current state snapshot
        """
        self.current_step += 1
        population_before = len(self.store)

        self.store.for_each(lambda cell: cell.run_behaviors())
        self.last_divisions = len(self.store) - population_before
        self.total_divisions += self.last_divisions

        self.mechanics.update(self.store.cells)

        bad = [c for c in self.store if not c.is_finite()]
        if bad:
            raise SimulationError(
                f"Step {self.current_step}: {len(bad)} cells in invalid state, first: {bad[0]!r}")

        logger.debug("Step %d: %d cells, %d divisions",
                     self.current_step, len(self.store), self.last_divisions)
        return self._create_state_snapshot()

    def run(self, steps: Optional[int] = None) -> Optional[SimulationState]:
        """Advance until finished (or for the given number of steps)."""
        target = self.config.steps if steps is None else self.current_step + steps
        state = None
        while self.current_step < target:
            state = self.step()
        return state

    def _create_state_snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        cell_snapshots = [
            CellSnapshot(
                uid=c.uid,
                parent_uid=c.parent_uid,
                x=c.position[0],
                y=c.position[1],
                z=c.position[2],
                diameter=c.diameter,
                can_divide=c.can_divide,
                category=c.category
            )
            for c in self.store
        ]

        population = len(self.store)
        diameters = self.store.diameters()

        metrics = {
            'population': population,
            'divisions': self.last_divisions,
            'total_divisions': self.total_divisions,
            'mean_diameter': float(diameters.mean()) if population > 0 else 0.0,
            'dividing_fraction': (sum(1 for c in self.store if c.can_divide) / population
                                  if population > 0 else 0.0)
        }

        return SimulationState(
            step=self.current_step,
            cells=cell_snapshots,
            metrics=metrics
        )

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return self.current_step >= self.config.steps

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'initial_cells': self.config.cell_count,
            'final_cells': len(self.store),
            'total_divisions': self.total_divisions,
        }
