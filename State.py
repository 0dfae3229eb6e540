import numpy as np
from typing import List

# Space Complexity: O(n^2)
#   - Contains an n x n reduced cost matrix - O(n^2)
#   - Contains a partial tour (list) with up to n elements - O(n)
#   - Contains a level, vertex, path cost and bound (numbers) - O(1)
class State:
  def __init__(self, costs: np.ndarray, level: int, vertex: int, pathCost, bound, partialTour: List[int]):
    self.costs = costs
    self.level = level
    self.vertex = vertex
    self.pathCost = pathCost
    self.bound = bound
    self.partialTour = partialTour

  # Lowest bound first; among equal bounds the deeper (more complete) tour wins
  def sortKey(self):
    return (self.bound, -self.level)

  def __eq__(self, other):
    return self.sortKey() == other.sortKey()

  def __lt__(self, other):
    return self.sortKey() < other.sortKey()

  def isVisited(self, city: int) -> bool:
    return city in self.partialTour

  def __repr__(self):
    return 'State(level={}, vertex={}, pathCost={}, bound={}, partialTour={})'.format(
      self.level, self.vertex, self.pathCost, self.bound, self.partialTour)
