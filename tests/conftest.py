import itertools
import math

import numpy as np
import pytest


def exhaustiveTourCost(costs, startIndex=0):
    """Cheapest closed tour from startIndex by trying every permutation."""
    costs = np.asarray(costs, dtype=float)
    n = costs.shape[0]
    others = [city for city in range(n) if city != startIndex]
    best = math.inf
    for perm in itertools.permutations(others):
        route = [startIndex, *perm, startIndex]
        total = sum(costs[a, b] for a, b in zip(route, route[1:]))
        best = min(best, total)
    return best


def completionCost(costs, partialTour, startIndex):
    """Cheapest real cost of finishing partialTour and returning to startIndex."""
    costs = np.asarray(costs, dtype=float)
    remaining = [city for city in range(costs.shape[0]) if city not in partialTour]
    best = math.inf
    for perm in itertools.permutations(remaining):
        route = [partialTour[-1], *perm, startIndex]
        total = sum(costs[a, b] for a, b in zip(route, route[1:]))
        best = min(best, total)
    return best


def randomCosts(n, seed, missing=0.0, symmetric=False):
    rng = np.random.default_rng(seed)
    costs = rng.integers(1, 50, size=(n, n)).astype(float)
    if symmetric:
        costs = np.triu(costs) + np.triu(costs, 1).T
    if missing:
        costs[rng.random((n, n)) < missing] = math.inf
    np.fill_diagonal(costs, math.inf)
    return costs


@pytest.fixture
def demoCosts():
    inf = math.inf
    return [
        [inf, 10, 8, 9, 7],
        [10, inf, 10, 5, 6],
        [8, 10, inf, 8, 9],
        [9, 5, 8, inf, 6],
        [7, 6, 9, 6, inf],
    ]
