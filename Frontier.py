import heapq
import itertools
from typing import List, Tuple

from State import State


# Best-first frontier over States.
#   - push() and pop() are O(log n) on a binary heap
#   - Entries are (sortKey, insertion number, state); the insertion number makes
#     equal (bound, level) pairs pop first-in first-out, so a search is repeatable
class BestFirstQueue:
    def __init__(self):
        self._heap: List[Tuple[tuple, int, State]] = []
        self._counter = itertools.count()
        self.maxSize = 0

    def push(self, state: State):
        heapq.heappush(self._heap, (state.sortKey(), next(self._counter), state))
        if len(self._heap) > self.maxSize:
            self.maxSize = len(self._heap)

    def pop(self) -> State:
        return heapq.heappop(self._heap)[2]

    def peek(self) -> State:
        return self._heap[0][2]

    def empty(self) -> bool:
        return not self._heap

    def qsize(self) -> int:
        return len(self._heap)

    def __len__(self):
        return len(self._heap)
