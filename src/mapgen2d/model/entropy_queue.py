"""Implements the updatable priority queue ordering cells by entropy."""

from __future__ import annotations

from dataclasses import dataclass, field


class EntropyQueue:
    """Binary min-heap of cell coords that supports changing the priority of a queued cell in place.

    Next to the heap, the queue keeps the heap index of every queued cell, so a cell's priority can be raised or
    lowered in O(log n) without leaving stale entries behind. Entries with equal priority are popped in the order they
    were first pushed.
    """

    # Heap-ordered list of queued cells.
    _heap: list[_HeapItem]
    # Maps the coords of every queued cell to its index in '_heap'.
    _indices: dict[tuple[int, int], int]
    # Number of insertions so far, used as tie breaker.
    _insertions: int

    def __init__(self) -> None:
        self._heap = []
        self._indices = {}
        self._insertions = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, coords: object) -> bool:
        return coords in self._indices

    def push(self, coords: tuple[int, int], priority: float) -> None:
        """Adds a cell to the queue, or changes its priority if it is already queued."""
        if coords in self._indices:
            self.update(coords, priority)
            return

        self._heap.append(_HeapItem(priority, self._insertions, coords))
        self._insertions += 1
        self._indices[coords] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def update(self, coords: tuple[int, int], priority: float) -> None:
        """Changes the priority of a queued cell.

        Raises:
            KeyError: The cell is not queued.
        """
        index = self._indices[coords]
        item = self._heap[index]
        old_priority = item._priority
        item._priority = priority
        if priority < old_priority:
            self._sift_up(index)
        elif priority > old_priority:
            self._sift_down(index)

    def priority(self, coords: tuple[int, int]) -> float:
        """Returns the priority of a queued cell.

        Raises:
            KeyError: The cell is not queued.
        """
        return self._heap[self._indices[coords]]._priority

    def peek(self) -> tuple[tuple[int, int], float]:
        """Returns the (coords, priority) of the cell with the lowest priority without removing it.

        Raises:
            IndexError: The queue is empty.
        """
        if not self._heap:
            raise IndexError("peek from an empty EntropyQueue")
        item = self._heap[0]
        return item._coords, item._priority

    def pop(self) -> tuple[tuple[int, int], float]:
        """Removes and returns the (coords, priority) of the cell with the lowest priority.

        Raises:
            IndexError: The queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from an empty EntropyQueue")

        last_index = len(self._heap) - 1
        self._swap(0, last_index)
        item = self._heap.pop()
        del self._indices[item._coords]
        if self._heap:
            self._sift_down(0)
        return item._coords, item._priority

    def _sift_up(self, index: int) -> None:
        """Moves an item towards the root until its parent is not greater."""
        while index > 0:
            parent = (index - 1) // 2
            if not self._heap[index] < self._heap[parent]:
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        """Moves an item towards the leaves until no child is smaller."""
        size = len(self._heap)
        while True:
            smallest = index
            for child in (2 * index + 1, 2 * index + 2):
                if child < size and self._heap[child] < self._heap[smallest]:
                    smallest = child
            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest

    def _swap(self, index_a: int, index_b: int) -> None:
        """Swaps two heap items and keeps the index map in sync."""
        self._heap[index_a], self._heap[index_b] = self._heap[index_b], self._heap[index_a]
        self._indices[self._heap[index_a]._coords] = index_a
        self._indices[self._heap[index_b]._coords] = index_b


@dataclass(order=True)
class _HeapItem:
    """Dataclass storing cell coordinates for the priority queue."""

    # The priority value (e.g. entropy or negated entropy).
    _priority: float
    # Insertion counter, breaks ties between equal priorities.
    _sequence: int
    # The coordinates of the cell.
    _coords: tuple[int, int] = field(compare=False)
