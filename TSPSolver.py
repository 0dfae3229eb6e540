#!/usr/bin/python3

import argparse
import logging
import math
import sys
import time
import numpy as np
from TSPClasses import *
from State import *
from Frontier import BestFirstQueue
from typing import List

logger = logging.getLogger(__name__)


class TSPSolver:
    def __init__(self):
        self._scenario = None

    def setupWithScenario(self, scenario: Scenario):
        self._scenario = scenario

    # Time Complexity: O(n^2)
    #		- O(n^2) matrix copy
    #		- O(n) to overwrite the diagonal
    #
    # Space Complexity: O(n^2)
    #		- Creates an n x n cost matrix
    def createCostMatrix(self):
        costs = self._scenario.costs.copy()  # the scenario's matrix is never mutated
        np.fill_diagonal(costs, math.inf)
        return costs

    # Time Complexity: O(n^2)
    #		- Two vectorized min() passes over the matrix, one per axis
    #		- Two broadcast subtractions over the matrix
    #
    # Space Complexity: O(n)
    #		- Reduces in place; only the row and column minimum arrays are allocated
    @staticmethod
    def reduceCostMatrix(costs: np.ndarray):
        if costs.size == 0:
            return 0.0

        rowMins = costs.min(axis=1)
        rowMins[rowMins == math.inf] = 0  # an all-INF row contributes nothing
        costs -= rowMins[:, np.newaxis]  # inf - x stays inf

        colMins = costs.min(axis=0)
        colMins[colMins == math.inf] = 0
        costs -= colMins[np.newaxis, :]

        return float(np.sum(rowMins) + np.sum(colMins))

    # Time Complexity: O(n^2)
    #		- O(n^2) copy of the parent's matrix
    #		- O(n) row/column blocking
    #		- reduceCostMatrix() is O(n^2)
    #
    # Space Complexity: O(n^2)
    #		- The child owns its own cost matrix
    def createChild(self, state: State, city: int):
        if state.isVisited(city) or state.costs[state.vertex, city] == math.inf:
            return None
        edgeCost = self._scenario.costTo(state.vertex, city)
        if edgeCost >= math.inf:
            return None

        startIndex = self._scenario.startIndex
        costs = state.costs.copy()
        reducedEdgeCost = costs[state.vertex, city]
        costs[state.vertex, :] = math.inf
        costs[:, city] = math.inf
        # Returning to the start early would let the bound count a tour that skips cities
        costs[city, startIndex] = math.inf
        reduction = self.reduceCostMatrix(costs)

        return State(costs,
                     state.level + 1,
                     city,
                     state.pathCost + edgeCost,
                     state.bound + reducedEdgeCost + reduction,
                     state.partialTour + [city])

    # Time Complexity: O(n^3)
    # 	- O(n) loop to iterate over cities, lowest index first
    #			- createChild() is O(n^2)
    #
    # Space Complexity: O(n^3)
    #		- Creates and returns a list of up to n-1 states
    #			- Each state is O(n^2) space complexity (because of cost matrix)
    def expand(self, state: State):
        states: List[State] = list()
        for city in self._scenario.getCities():
            child = self.createChild(state, city)
            if child is not None:
                states.append(child)
        return states

    # Time Complexity: O(n)
    #		- Finds the cities missing from the partial tour and closes the cycle
    #
    # Space Complexity: O(n)
    #		- Creates and returns a new TSPSolution object
    def toSolution(self, state: State):
        startIndex = self._scenario.startIndex
        remaining = [city for city in self._scenario.getCities() if not state.isVisited(city)]

        if not remaining:
            route = state.partialTour + [startIndex]
        elif len(remaining) == 1:
            route = state.partialTour + [remaining[0], startIndex]
        else:
            return None

        solution = TSPSolution(route, self._scenario)
        if solution.cost == math.inf:
            return None
        return solution

    ''' <summary>
		This is the entry point for the branch-and-bound algorithm.  States are
		explored best-first: lowest bound, then deepest level, then oldest.
		</summary>
		<returns>BranchAndBoundResult with the cost of the best tour (math.inf if none
		exists), the tour itself, the number of states popped from the queue, and the
		search statistics: time spent, number of improved tours found, max queue size,
		total number of states created, and number of pruned states.</returns>
	'''

    # Time Complexity: Worst case O(n!), average case O((b^n)*(n^3))
    #		- Let n be the number of cities
    #		- Let b be the average number of states added to the queue in each iteration
    #		- createCostMatrix() and reduceCostMatrix() are O(n^2)
    #		- Loop until the queue is empty
    #			- Worst case is every possible state is explored - O(n!)
    #			- expand() is O(n^3)
    #			- Queue operations are O(log n)
    #
    # Space Complexity: O((b^n)*(n^2))
    # 	- Has to store State objects in the priority queue
    #			- Each State object is O(n^2) space due to the cost matrix
    def branchAndBound(self, pruneOnPush=True):
        if self._scenario is None:
            raise RuntimeError('setupWithScenario() must be called before branchAndBound()')

        cities = self._scenario.getCities()
        ncities = len(cities)
        startIndex = self._scenario.startIndex
        startTime = time.time()

        if ncities <= 1:
            route = [startIndex, startIndex] if ncities == 1 else []
            return BranchAndBoundResult(0.0, route, 0,
                                        solution=TSPSolution(route, self._scenario),
                                        time=time.time() - startTime)

        q = BestFirstQueue()
        numSolutions = 0
        numStates = 1
        numPrunedStates = 0
        nodesExplored = 0

        costs: np.ndarray = self.createCostMatrix()  # O(n^2) time
        bound = self.reduceCostMatrix(costs)  # O(n^2) time
        startState = State(costs, 0, startIndex, 0.0, bound, [startIndex])
        q.push(startState)

        bssf = None
        bssfCost = math.inf

        while not q.empty():
            state: State = q.pop()  # O(log n) time
            nodesExplored += 1

            if state.bound >= bssfCost:
                numPrunedStates += 1
                continue

            if state.level >= ncities - 1:
                solution = self.toSolution(state)  # O(n) time
                if solution is not None and solution.cost < bssfCost:
                    numSolutions += 1
                    bssf = solution
                    bssfCost = solution.cost
                    logger.debug('New best tour %s with cost %s after %d states explored',
                                 bssf.route, bssfCost, nodesExplored)
                continue

            stateList: List[State] = self.expand(state)  # O(n^3) time
            numStates += len(stateList)

            curState: State
            for curState in stateList:  # O(n) time
                if pruneOnPush and curState.bound >= bssfCost:
                    numPrunedStates += 1
                else:
                    q.push(curState)  # O(log n)

        endTime = time.time()

        logger.debug('Search created %d states, pruned %d, max queue size %d',
                     numStates, numPrunedStates, q.maxSize)
        if bssf is None:
            logger.info('No feasible tour from city %d (%d states explored, %.3fs)',
                        startIndex, nodesExplored, endTime - startTime)
        else:
            logger.info('Optimal tour cost %s (%d states explored, %.3fs)',
                        bssfCost, nodesExplored, endTime - startTime)

        return BranchAndBoundResult(float(bssfCost),
                                    bssf.route if bssf is not None else None,
                                    nodesExplored,
                                    solution=bssf,
                                    time=endTime - startTime,
                                    count=numSolutions,
                                    maxQueueSize=q.maxSize,
                                    total=numStates,
                                    pruned=numPrunedStates)


def solve(costs, startIndex=0, noEdge=None, pruneOnPush=True) -> BranchAndBoundResult:
    solver = TSPSolver()
    solver.setupWithScenario(Scenario(costs, startIndex=startIndex, noEdge=noEdge))
    return solver.branchAndBound(pruneOnPush=pruneOnPush)


# Symmetric 5-city instance; the optimal tour costs 34
DEMO_COSTS = [
    [math.inf, 10, 8, 9, 7],
    [10, math.inf, 10, 5, 6],
    [8, 10, math.inf, 8, 9],
    [9, 5, 8, math.inf, 6],
    [7, 6, 9, 6, math.inf],
]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Exact TSP by best-first branch and bound on reduced cost matrices")
    parser.add_argument("input", nargs="?", default=None,
                        help="Path to a square cost matrix file (read by numpy.loadtxt, 'inf' = no edge). "
                             "Solves a built-in 5-city instance when omitted.")
    parser.add_argument("--start", type=int, default=0, help="Start city index (0-based).")
    parser.add_argument("--no-edge", type=float, default=None, help="Cost value meaning 'no edge' (and anything above it).")
    parser.add_argument("--no-push-pruning", action="store_true", help="Queue every child instead of pruning on creation.")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        costs = np.loadtxt(args.input, ndmin=2) if args.input else DEMO_COSTS
        result = solve(costs, startIndex=args.start, noEdge=args.no_edge,
                       pruneOnPush=not args.no_push_pruning)
    except (ScenarioError, OSError) as e:
        print("error: {}".format(e), file=sys.stderr)
        return 2

    if not result.feasible:
        print("No feasible tour found.")
        return 1

    print("Optimal tour cost: {:g}".format(result.bestCost))
    print("Path: " + " -> ".join(str(city) for city in result.bestPath))
    print("Nodes explored: {}".format(result.nodesExplored))
    print("Time taken: {:.1f} ms".format(result.time * 1000))
    return 0


if __name__ == "__main__":
    sys.exit(main())
