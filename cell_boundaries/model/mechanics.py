"""Mechanical interaction model: volume growth, split geometry, overlap resolution."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .cell import Cell, Position

# Smallest volume a sphere may shrink to
MIN_VOLUME = 5.2359877e-7


@dataclass(frozen=True)
class DivisionGeometry:
    """Mechanical parameters of a daughter produced by a split."""
    position: Position
    diameter: float
    adherence: float
    mass: float


class InteractionModel(ABC):
    """Interface the growth and division rules rely on."""

    @abstractmethod
    def change_volume(self, cell: Cell, amount: float) -> None:
        """Request a volume increase (or decrease) for one cell."""

    @abstractmethod
    def split(self, mother: Cell) -> DivisionGeometry:
        """Shrink and move the mother; return the daughter's geometry."""

    def update(self, cells: List[Cell]) -> None:
        """Resolve mechanical interactions after the behavior pass."""


def diameter_from_volume(volume: float) -> float:
    return (6.0 * volume / math.pi) ** (1.0 / 3.0)


class SphereMechanics(InteractionModel):
    """
    Sphere cells with soft repulsion between overlapping neighbours.

    The pair force follows the sphere-sphere model:
    F = k * delta - gamma * sqrt(r * delta)

    Where:
    - delta = overlap distance (r_i + r_j - |x_i - x_j|)
    - r = effective radius r_i * r_j / (r_i + r_j)
    - k = repulsion coefficient
    - gamma = attraction coefficient

    A cell moves only if the net force exceeds its adherence; the
    displacement force * dt / mass is capped at max_displacement.
    """

    def __init__(self, rng: np.random.Generator,
                 dt: float = 0.01,
                 run_mechanical_interactions: bool = True,
                 bound_space: bool = True,
                 min_bound: float = -2250.0,
                 max_bound: float = 2250.0,
                 max_displacement: float = 3.0,
                 repulsion: float = 2.0,
                 attraction: float = 1.0,
                 volume_ratio_range: Tuple[float, float] = (0.9, 1.1)):
        self.rng = rng
        self.dt = dt
        self.run_mechanical_interactions = run_mechanical_interactions
        self.bound_space = bound_space
        self.min_bound = min_bound
        self.max_bound = max_bound
        self.max_displacement = max_displacement
        self.repulsion = repulsion
        self.attraction = attraction
        self.volume_ratio_range = volume_ratio_range

    def change_volume(self, cell: Cell, amount: float) -> None:
        """Grow the cell by amount * dt volume units."""
        volume = max(cell.volume + amount * self.dt, MIN_VOLUME)
        cell.diameter = diameter_from_volume(volume)

    def _division_axis(self) -> np.ndarray:
        """Uniformly distributed unit vector."""
        phi = self.rng.uniform(0.0, 2.0 * math.pi)
        theta = math.acos(2.0 * self.rng.uniform(0.0, 1.0) - 1.0)
        return np.array([
            math.sin(theta) * math.cos(phi),
            math.sin(theta) * math.sin(phi),
            math.cos(theta),
        ])

    def split(self, mother: Cell, volume_ratio: Optional[float] = None,
              axis: Optional[np.ndarray] = None) -> DivisionGeometry:
        """
        Divide the mother's volume between mother and daughter.

        volume_ratio = daughter volume / mother volume after the split.
        Centres move apart along the axis by a quarter of the radius,
        shared inversely to the resulting volumes.
        """
        if volume_ratio is None:
            volume_ratio = self.rng.uniform(*self.volume_ratio_range)
        if axis is None:
            axis = self._division_axis()
        axis = np.asarray(axis, dtype=np.float64)

        total_displacement = mother.diameter / 2.0 / 4.0
        d_daughter = total_displacement / (volume_ratio + 1.0)
        d_mother = total_displacement - d_daughter

        volume = mother.volume
        mother_volume = volume / (volume_ratio + 1.0)
        daughter_volume = volume - mother_volume

        centre = np.asarray(mother.position, dtype=np.float64)
        mother.position = tuple(float(v) for v in centre - d_mother * axis)
        mother.diameter = diameter_from_volume(mother_volume)

        return DivisionGeometry(
            position=tuple(float(v) for v in centre + d_daughter * axis),
            diameter=diameter_from_volume(daughter_volume),
            adherence=mother.adherence,
            mass=mother.mass,
        )

    def compute_displacements(self, positions: np.ndarray, radii: np.ndarray,
                              masses: np.ndarray,
                              adherence: np.ndarray) -> np.ndarray:
        """Return (n, 3) displacement of every cell from pair overlaps."""
        displacement = np.zeros_like(positions)
        if len(positions) < 2:
            return displacement

        tree = cKDTree(positions)
        pairs = tree.query_pairs(r=2.0 * float(radii.max()), output_type='ndarray')
        if len(pairs) == 0:
            return displacement

        i, j = pairs[:, 0], pairs[:, 1]
        delta_vec = positions[i] - positions[j]
        dist = np.linalg.norm(delta_vec, axis=1)
        overlap = radii[i] + radii[j] - dist
        touching = overlap > 0
        if not np.any(touching):
            return displacement

        i, j = i[touching], j[touching]
        delta_vec, dist, overlap = delta_vec[touching], dist[touching], overlap[touching]

        # Coincident centres are pushed apart along x
        direction = np.zeros_like(delta_vec)
        apart = dist > 0
        direction[apart] = delta_vec[apart] / dist[apart, None]
        direction[~apart] = (1.0, 0.0, 0.0)

        r_eff = radii[i] * radii[j] / (radii[i] + radii[j])
        magnitude = self.repulsion * overlap - self.attraction * np.sqrt(r_eff * overlap)
        pair_force = magnitude[:, None] * direction

        forces = np.zeros_like(positions)
        np.add.at(forces, i, pair_force)
        np.add.at(forces, j, -pair_force)

        force_norm = np.linalg.norm(forces, axis=1)
        moving = force_norm > adherence
        displacement[moving] = forces[moving] * (self.dt / masses[moving])[:, None]

        # Cap step length
        step = np.linalg.norm(displacement, axis=1)
        too_far = step > self.max_displacement
        displacement[too_far] *= (self.max_displacement / step[too_far])[:, None]
        return displacement

    def update(self, cells: List[Cell]) -> None:
        """Apply overlap resolution and space bounds to every cell."""
        if not cells:
            return
        positions = np.array([c.position for c in cells], dtype=np.float64)
        new_positions = positions

        if self.run_mechanical_interactions:
            radii = np.array([c.diameter / 2.0 for c in cells])
            masses = np.array([c.mass for c in cells])
            adherence = np.array([c.adherence for c in cells])
            new_positions = positions + self.compute_displacements(
                positions, radii, masses, adherence)

        if self.bound_space:
            new_positions = np.clip(new_positions, self.min_bound, self.max_bound)

        changed = np.any(new_positions != positions, axis=1)
        for idx in np.flatnonzero(changed):
            cells[idx].position = tuple(float(v) for v in new_positions[idx])
