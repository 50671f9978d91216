"""Tests for the behavior and cell type registration tables."""

import pytest

from cell_boundaries.model.behavior import Behavior, GrowthBehavior
from cell_boundaries.model.registry import (
    BEHAVIORS,
    CellType,
    CellTypeRegistry,
    build_behaviors,
    register_behavior,
)


def test_growth_is_registered(domain, mechanics, store):
    behaviors = build_behaviors(
        ["growth"],
        params={"growth": {"division_diameter": 10.0}},
        domain=domain, mechanics=mechanics, store=store,
    )
    assert len(behaviors) == 1
    growth = behaviors[0]
    assert isinstance(growth, GrowthBehavior)
    assert growth.division_diameter == 10.0
    assert growth.volume_increase == 300.0
    assert growth.store is store


def test_unknown_behavior(domain, mechanics, store):
    with pytest.raises(KeyError, match="chemotaxis"):
        build_behaviors(["chemotaxis"], domain=domain, mechanics=mechanics, store=store)


def test_register_custom_behavior(domain, mechanics, store):
    class Idle(Behavior):
        def run(self, cell):
            pass

    register_behavior("idle_test")(lambda **deps: Idle())
    try:
        behaviors = build_behaviors(["growth", "idle_test"],
                                    domain=domain, mechanics=mechanics, store=store)
        assert isinstance(behaviors[1], Idle)
        with pytest.raises(ValueError):
            register_behavior("idle_test")(lambda **deps: Idle())
    finally:
        BEHAVIORS.pop("idle_test", None)


def test_cell_type_registry():
    registry = CellTypeRegistry()
    registry.register(CellType(name="stem", category=2))
    assert "stem" in registry
    assert registry.get("stem").behaviors == ["growth"]
    assert registry.names() == ["stem"]
    with pytest.raises(KeyError):
        registry.get("neuron")


def test_cell_type_with_unknown_behavior():
    registry = CellTypeRegistry()
    with pytest.raises(KeyError):
        registry.register(CellType(name="x", behaviors=["missing"]))
