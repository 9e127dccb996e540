"""
Shared pytest configuration and fixtures for memory manager tests.
"""

import random

import pytest

from memsim.memory.manager import MemoryManager
from memsim.memory.queries import AllocationQuery, FreeQuery


@pytest.fixture
def small_manager():
    """Create a manager over ten cells for scenario tests"""
    return MemoryManager(10)


@pytest.fixture
def fragmented_manager():
    """Create a manager whose free memory is split into separated gaps

    Layout of the 20 cells: [1,2] free, [3,5] used, [6,9] free, [10,10] used,
    [11,20] free.
    """
    manager = MemoryManager(20)
    handles = [manager.allocate(size) for size in (2, 3, 4, 1)]
    manager.free(handles[0])
    manager.free(handles[2])
    return manager


@pytest.fixture
def random_queries():
    """Generate a reproducible mixed query sequence for stress testing"""
    rng = random.Random(42)
    queries = []
    for position in range(1, 401):
        if position > 1 and rng.random() < 0.4:
            queries.append(FreeQuery(rng.randint(1, position - 1)))
        else:
            queries.append(AllocationQuery(rng.randint(1, 64)))
    return queries
