"""Shared fixtures: a deterministic stand-in for the mechanical model."""

import pytest

from cell_boundaries.model.cell import Cell
from cell_boundaries.model.domain import BoundedDomain
from cell_boundaries.model.mechanics import DivisionGeometry, InteractionModel
from cell_boundaries.model.store import CellStore


class StubMechanics(InteractionModel):
    """Adds 1 to the diameter per volume request; splits reset both cells."""

    def __init__(self, reset_diameter: float = 6.0):
        self.reset_diameter = reset_diameter
        self.volume_requests = []
        self.splits = []
        self.updates = 0

    def change_volume(self, cell, amount):
        self.volume_requests.append((cell.uid, amount))
        cell.diameter += 1

    def split(self, mother):
        self.splits.append(mother.uid)
        mother.diameter = self.reset_diameter
        return DivisionGeometry(
            position=mother.position,
            diameter=self.reset_diameter,
            adherence=mother.adherence,
            mass=mother.mass,
        )

    def update(self, cells):
        self.updates += 1


@pytest.fixture
def domain():
    return BoundedDomain(x_min=-75.0, x_max=75.0, y_min=-75.0, y_max=75.0)


@pytest.fixture
def mechanics():
    return StubMechanics()


@pytest.fixture
def store():
    return CellStore()


@pytest.fixture
def make_cell(store):
    def _make(position=(0.0, 0.0, 0.0), diameter=6.0, behaviors=None, **kwargs):
        cell = Cell(position=position, diameter=diameter, behaviors=behaviors, **kwargs)
        store.append(cell)
        return cell
    return _make
