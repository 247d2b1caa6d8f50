"""Shared fixtures for the robot arena tests."""
import pytest

from sim_model import ItemKind
from sim_world import Arena


@pytest.fixture
def arena():
    """Empty, seeded 800x600 arena."""
    return Arena(width=800, height=600, seed=1234)


@pytest.fixture
def place(arena):
    """Place an item at an exact pose; robots get the given heading."""
    def _place(kind, x, y, heading=None, radius=None):
        item = arena.place_item(kind, x, y, radius=radius)
        if heading is not None:
            item.heading = heading
        return item
    return _place


@pytest.fixture
def obstacle(place):
    def _obstacle(x, y, radius=None):
        return place(ItemKind.OBSTACLE, x, y, radius=radius)
    return _obstacle
