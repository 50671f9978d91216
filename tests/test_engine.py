"""Tests for the step driver: tick isolation and end-to-end population dynamics."""

import numpy as np
import pytest

from cell_boundaries.config import CellTypeConfig, SimulationConfig, default_config
from cell_boundaries.model.behavior import Behavior
from cell_boundaries.model.engine import SimulationEngine, SimulationError
from conftest import StubMechanics


class StepRecorder(Behavior):
    """Records (step, uid) for every invocation."""

    def __init__(self, engine):
        self.engine = engine
        self.calls = []

    def run(self, cell):
        self.calls.append((self.engine.current_step, cell.uid))


def _config(seed=11, **overrides):
    config = default_config()
    config.seed = seed
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


class TestSetup:
    def test_founders_placed_in_domain(self):
        engine = SimulationEngine(_config(), mechanics=StubMechanics())
        d = engine.domain

        assert len(engine.store) == 10
        assert engine.store.capacity == 10
        for cell in engine.store:
            x, y, z = cell.position
            assert d.x_min <= x < d.x_max
            assert d.y_min <= y < d.y_max
            assert z == d.z_min_init == -2250
            assert cell.diameter == 6
            assert cell.adherence == 0.0001
            assert cell.mass == 0.1
            assert cell.can_divide is True
            assert len(cell.behaviors) == 1

    def test_seed_is_reproducible(self):
        a = SimulationEngine(_config(seed=5), mechanics=StubMechanics())
        b = SimulationEngine(_config(seed=5), mechanics=StubMechanics())
        np.testing.assert_array_equal(a.store.positions(), b.store.positions())

    def test_cell_types(self):
        config = _config(cell_types=[
            CellTypeConfig(name="stem", count=3, category=1),
            CellTypeConfig(name="quiescent", count=2, can_divide=False, category=-5),
        ])
        engine = SimulationEngine(config, mechanics=StubMechanics())
        categories = [c.category for c in engine.store]
        assert categories == [1, 1, 1, -5, -5]
        assert [c.can_divide for c in engine.store] == [True] * 3 + [False] * 2

    def test_unknown_behavior_rejected(self):
        config = _config(cell_types=[CellTypeConfig(name="x", count=1, behaviors=["nope"])])
        with pytest.raises(KeyError):
            SimulationEngine(config, mechanics=StubMechanics())


class TestStep:
    def test_population_doubles_per_crossing(self):
        engine = SimulationEngine(_config(), mechanics=StubMechanics())
        populations = [engine.step().metrics['population'] for _ in range(9)]
        # 6 -> 7 -> 8, divide on the third tick; both cells restart at 6
        assert populations == [10, 10, 20, 20, 20, 40, 40, 40, 80]
        assert engine.total_divisions == 70

    def test_positions_stay_in_band(self):
        engine = SimulationEngine(_config(seed=3), mechanics=StubMechanics())
        d = engine.domain
        eps = d.margin
        for _ in range(12):
            engine.step()
            for cell in engine.store:
                x, y, _ = cell.position
                assert d.x_min + eps <= x <= d.x_max + eps
                assert d.y_min + eps <= y <= d.x_max + eps

    def test_non_dividing_cells_grow_forever(self):
        config = _config(cell_types=[CellTypeConfig(name="q", count=4, can_divide=False)])
        mechanics = StubMechanics()
        engine = SimulationEngine(config, mechanics=mechanics)
        for _ in range(6):
            engine.step()
        assert len(engine.store) == 4
        assert mechanics.splits == []
        assert all(c.diameter == 8 for c in engine.store)

    def test_daughters_first_run_next_tick(self):
        engine = SimulationEngine(_config(), mechanics=StubMechanics())
        recorder = StepRecorder(engine)
        for cell in engine.store:
            cell.add_behavior(recorder)

        engine.run(steps=4)

        first_seen = {}
        for step, uid in recorder.calls:
            first_seen.setdefault(uid, step)
        daughters = [c for c in engine.store if c.parent_uid is not None]
        assert len(daughters) == 10
        assert all(first_seen[c.uid] == 4 for c in daughters)
        # Each cell is visited exactly once per tick
        assert len(recorder.calls) == len(set(recorder.calls))

    def test_mechanics_updated_each_tick(self):
        mechanics = StubMechanics()
        engine = SimulationEngine(_config(), mechanics=mechanics)
        engine.run(steps=3)
        assert mechanics.updates == 3

    def test_snapshot_metrics(self):
        engine = SimulationEngine(_config(), mechanics=StubMechanics())
        engine.run(steps=2)
        state = engine.step()
        assert state.step == 3
        assert state.metrics['divisions'] == 10
        assert state.metrics['total_divisions'] == 10
        assert state.metrics['dividing_fraction'] == 1.0
        assert len(state.cells) == 20
        assert state.cells[-1].parent_uid is not None

    def test_invalid_state_aborts(self):
        class Broken(StubMechanics):
            def update(self, cells):
                cells[0].diameter = float("nan")

        engine = SimulationEngine(_config(), mechanics=Broken())
        with pytest.raises(SimulationError):
            engine.step()

    def test_run_until_finished(self):
        engine = SimulationEngine(_config(steps=5), mechanics=StubMechanics())
        state = engine.run()
        assert state.step == 5
        assert engine.is_finished()
        assert engine.get_summary()['total_steps'] == 5


class TestSphereMechanicsRun:
    def test_reference_setup_divides(self):
        engine = SimulationEngine(_config(seed=7, steps=100))
        engine.run()
        summary = engine.get_summary()

        assert summary['initial_cells'] == 10
        assert summary['final_cells'] >= 20
        assert summary['total_divisions'] >= 10
        for cell in engine.store:
            assert -2250 <= cell.position[2] <= 2250
            assert cell.is_finite()

    def test_zero_cells(self):
        config = SimulationConfig(steps=3, cell_types=[CellTypeConfig(name="none", count=0)])
        engine = SimulationEngine(config)
        state = engine.run()
        assert state.metrics['population'] == 0
        assert state.metrics['mean_diameter'] == 0.0
