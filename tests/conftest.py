"""Shared fixtures: a small reference source and the catalog parsed from it."""

from __future__ import annotations

import pytest

from tfwrsense.catalog import parse_catalog
from tfwrsense.models.catalog import Catalog

REFERENCE = '''\
class Vector:
    length: float
    """Euclidean length"""

    x: float
    """
    Horizontal component.
    Measured in tiles.
    """

    y: float

class Items:
    Hay: Item
    \'\'\'Obtained by harvesting grass.\'\'\'

    def helper(self):
        pass

Origin = Vector(0, 0)
"""The zero vector."""

def move(direction: Direction) -> bool:
    """Moves the drone one tile."""

def clamp(value, low, high):
    """
    Clamp value into [low, high].
    """

def harvest():
    pass
'''


@pytest.fixture()
def reference_text() -> str:
    return REFERENCE


@pytest.fixture()
def catalog() -> Catalog:
    return parse_catalog(REFERENCE)
