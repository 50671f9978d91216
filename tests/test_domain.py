"""Tests for the bounded domain value."""

import dataclasses

import pytest

from cell_boundaries.model.domain import CLAMP_MARGIN, BoundedDomain


def test_from_ranges_reference_setup():
    domain = BoundedDomain.from_ranges(150, 150, 4500)
    assert (domain.x_min, domain.x_max) == (-75, 75)
    assert (domain.y_min, domain.y_max) == (-75, 75)
    assert domain.z_min_init == -2250
    assert domain.margin == CLAMP_MARGIN == 0.01
    assert domain.width == domain.height == 150


@pytest.mark.parametrize("bounds", [
    dict(x_min=1, x_max=1, y_min=0, y_max=1),
    dict(x_min=2, x_max=1, y_min=0, y_max=1),
    dict(x_min=0, x_max=1, y_min=5, y_max=-5),
])
def test_invalid_extent(bounds):
    with pytest.raises(ValueError):
        BoundedDomain(**bounds)


def test_negative_margin():
    with pytest.raises(ValueError):
        BoundedDomain(0, 1, 0, 1, margin=-0.1)


def test_immutable():
    domain = BoundedDomain(0, 1, 0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        domain.x_max = 5


def test_contains():
    domain = BoundedDomain(-10, 10, -5, 5)
    assert domain.contains(0, 0)
    assert not domain.contains(10, 0)
    assert not domain.contains(0, -5 + 0.001)


@pytest.mark.parametrize("bounds", [
    dict(x_min=-1, x_max=1, y_min=-1, y_max=1, margin=2),
    dict(x_min=-1, x_max=1, y_min=-1, y_max=1, margin=1),
    dict(x_min=-10, x_max=10, y_min=-1, y_max=1, margin=1.5),
])
def test_margin_wider_than_half_extent(bounds):
    with pytest.raises(ValueError, match="no room"):
        BoundedDomain(**bounds)


def test_margin_just_below_half_extent():
    domain = BoundedDomain(-1, 1, -1, 1, margin=0.99)
    assert domain.contains(0, 0)
