#!/usr/bin/python3

import math
import numpy as np
from typing import List

# Sentinel meaning "no direct edge".  Float infinity absorbs additions and
# subtractions of finite costs, so bounds can never overflow.
INF = math.inf


class ScenarioError(ValueError):
    pass


# Space Complexity: O(n^2)
#   - Owns a private float copy of the n x n cost matrix
class Scenario:
    ''' <summary>
		A validated TSP instance: a square matrix of non-negative directed costs
		and the city every tour starts and ends at.  Entries equal to INF (or,
		when noEdge is given, entries >= noEdge) mean there is no direct edge.
		</summary>
	'''

    def __init__(self, costs, startIndex=0, noEdge=None):
        try:
            matrix = np.array(costs, dtype=float)
        except (TypeError, ValueError) as e:
            raise ScenarioError('Cost matrix is not numeric: {}'.format(e)) from e

        if matrix.ndim == 1 and matrix.size == 0:
            matrix = matrix.reshape((0, 0))
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ScenarioError('Cost matrix must be square, got shape {}'.format(matrix.shape))
        if np.isnan(matrix).any():
            raise ScenarioError('Cost matrix contains NaN entries')
        if (matrix < 0).any():
            i, j = np.argwhere(matrix < 0)[0]
            raise ScenarioError('Negative cost {} at ({}, {})'.format(matrix[i, j], i, j))

        if noEdge is not None:
            matrix[matrix >= noEdge] = INF

        n = matrix.shape[0]
        if isinstance(startIndex, bool) or not isinstance(startIndex, (int, np.integer)):
            raise ScenarioError('Start city must be an integer index, got {!r}'.format(startIndex))
        if n == 0:
            if startIndex != 0:
                raise ScenarioError('Start city {} given for an empty instance'.format(startIndex))
        elif not 0 <= startIndex < n:
            raise ScenarioError('Start city {} outside [0, {})'.format(startIndex, n))

        self._costs = matrix
        self._startIndex = int(startIndex)

    @property
    def costs(self) -> np.ndarray:
        return self._costs

    @property
    def startIndex(self) -> int:
        return self._startIndex

    def getCities(self) -> List[int]:
        return list(range(self._costs.shape[0]))

    def edgeExists(self, src: int, dest: int) -> bool:
        return src != dest and self._costs[src, dest] < INF

    def costTo(self, src: int, dest: int) -> float:
        return self._costs[src, dest]


class TSPSolution:
    def __init__(self, route: List[int], scenario: Scenario):
        self.route = list(route)
        self.cost = self._costRoute(scenario)

    # Time Complexity: O(n)
    def _costRoute(self, scenario: Scenario):
        cost = 0
        if len(set(self.route)) <= 1:
            return cost
        for src, dest in zip(self.route, self.route[1:]):
            if not scenario.edgeExists(src, dest):
                return INF
            cost += scenario.costTo(src, dest)
        return cost

    def __repr__(self):
        return 'TSPSolution({}, cost={})'.format(' -> '.join(str(c) for c in self.route), self.cost)


class BranchAndBoundResult:
    ''' <summary>
		Outcome of one branch-and-bound search.
		</summary>
		<returns>bestCost (math.inf when no tour exists), bestPath (closed tour of n+1
		cities, or None), nodesExplored (frontier pops), and the search statistics:
		time spent, number of improved tours found, max queue size, total number of
		states created, and number of pruned states.</returns>
	'''

    def __init__(self, bestCost, bestPath, nodesExplored, solution=None,
                 time=0.0, count=0, maxQueueSize=0, total=0, pruned=0):
        self.bestCost = bestCost
        self.bestPath = bestPath
        self.nodesExplored = nodesExplored
        self.solution = solution
        self.time = time
        self.count = count
        self.max = maxQueueSize
        self.total = total
        self.pruned = pruned

    @property
    def feasible(self) -> bool:
        return self.bestPath is not None

    def __repr__(self):
        return 'BranchAndBoundResult(bestCost={}, bestPath={}, nodesExplored={})'.format(
            self.bestCost, self.bestPath, self.nodesExplored)
