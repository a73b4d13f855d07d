"""Shared fixtures for the hybrid quicksort tests."""

from __future__ import annotations

import itertools
import random

import pytest

from hybrid_quicksort import PartitionStrategy, PivotStrategy, QuickSortConfig

STRATEGY_GRID = list(itertools.product(PartitionStrategy, PivotStrategy))


def grid_id(pair):
    part, pivot = pair
    return f"{part.value}-{pivot.value}"


@pytest.fixture(params=STRATEGY_GRID, ids=[grid_id(p) for p in STRATEGY_GRID])
def config(request) -> QuickSortConfig:
    """Each of the 12 partition x pivot combinations, seeded."""
    part, pivot = request.param
    return QuickSortConfig(partition_strategy=part, pivot_strategy=pivot, seed=7)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def mixed_input(rng) -> list[int]:
    """300 ints with plenty of repeats, large enough to exercise partitioning."""
    return [rng.randint(-50, 50) for _ in range(300)]
