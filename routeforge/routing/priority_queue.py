import heapq
from typing import Any, Generic, List, Tuple, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """
    Binary min-heap keyed by priority.

    Decrease-key is done by enqueueing the value again with the lower priority;
    duplicates are allowed and the consumer skips stale pops. Equal priorities
    pop in ascending value order, so values must be mutually comparable.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, Any]] = []

    def enqueue(self, value: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, value))

    def dequeue_min(self) -> Tuple[T, float]:
        if not self._heap:
            raise IndexError("dequeue from an empty priority queue")
        priority, value = heapq.heappop(self._heap)
        return value, priority

    def peek_min(self) -> Tuple[T, float]:
        if not self._heap:
            raise IndexError("peek into an empty priority queue")
        priority, value = self._heap[0]
        return value, priority

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)
