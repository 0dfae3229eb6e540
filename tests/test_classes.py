import math

import numpy as np
import pytest

from TSPClasses import INF, BranchAndBoundResult, Scenario, ScenarioError, TSPSolution


@pytest.mark.parametrize("costs", [
    [[0, 1, 2], [1, 0, 2]],
    [1, 2, 3],
    [[[0]]],
    [[0, 1], [1]],
])
def test_non_square_matrix_is_rejected(costs):
    with pytest.raises(ScenarioError):
        Scenario(costs)


def test_negative_cost_is_rejected():
    with pytest.raises(ScenarioError, match="Negative cost"):
        Scenario([[0, 3], [-1, 0]])


def test_nan_cost_is_rejected():
    with pytest.raises(ScenarioError, match="NaN"):
        Scenario([[0, math.nan], [1, 0]])


@pytest.mark.parametrize("startIndex", [-1, 3, 10])
def test_start_city_out_of_range(startIndex):
    with pytest.raises(ScenarioError):
        Scenario(np.ones((3, 3)), startIndex=startIndex)


@pytest.mark.parametrize("startIndex", [1.0, "0", True, None])
def test_start_city_must_be_an_integer(startIndex):
    with pytest.raises(ScenarioError):
        Scenario(np.ones((3, 3)), startIndex=startIndex)


def test_scenario_error_is_a_value_error():
    assert issubclass(ScenarioError, ValueError)


def test_empty_scenario():
    scenario = Scenario([])
    assert scenario.getCities() == []
    assert scenario.costs.shape == (0, 0)
    with pytest.raises(ScenarioError):
        Scenario([], startIndex=1)


def test_no_edge_sentinel_becomes_inf():
    big = 2 ** 31 // 4
    scenario = Scenario([[big, 4, big], [2, big, 6], [1, 9, big]], noEdge=big)

    assert scenario.costs[0, 2] == INF
    assert scenario.costs[0, 1] == 4
    assert not scenario.edgeExists(0, 2)
    assert scenario.edgeExists(2, 1)


def test_scenario_copies_its_input():
    costs = np.array([[0.0, 5.0], [5.0, 0.0]])
    scenario = Scenario(costs)
    scenario.costs[0, 1] = 99

    assert costs[0, 1] == 5


def test_diagonal_is_never_an_edge():
    scenario = Scenario([[0, 1], [1, 0]])
    assert not scenario.edgeExists(0, 0)
    assert scenario.costTo(0, 1) == 1


def test_solution_cost(demoCosts):
    scenario = Scenario(demoCosts)
    solution = TSPSolution([0, 4, 1, 3, 2, 0], scenario)

    assert solution.cost == 34
    assert "0 -> 4 -> 1 -> 3 -> 2 -> 0" in repr(solution)


def test_solution_with_missing_edge_costs_inf():
    scenario = Scenario([[INF, 1, INF], [INF, INF, 1], [1, INF, INF]])

    assert TSPSolution([0, 1, 2, 0], scenario).cost == 3
    assert TSPSolution([0, 2, 1, 0], scenario).cost == INF


def test_result_feasibility():
    assert BranchAndBoundResult(3.0, [0, 1, 0], 2).feasible
    assert not BranchAndBoundResult(INF, None, 5).feasible
