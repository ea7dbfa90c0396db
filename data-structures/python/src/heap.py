import logging
from collections.abc import Sequence
from typing import TypeVar, Generic, List, Iterator, Callable, Optional

T = TypeVar('T')

logger = logging.getLogger(__name__)


def _less(a, b) -> bool:
    return a < b


def _greater(a, b) -> bool:
    return a > b


class Heap(Generic[T]):
    """Array-backed binary heap ordered by a caller-supplied predicate.

    ``comparator(a, b)`` returns True when ``a`` must sit at least as close
    to the root as ``b``. ``Heap.MIN_HEAP`` and ``Heap.MAX_HEAP`` cover the
    usual numeric orders.

    Initial values are copied but not heapified; call ``balance()`` before
    relying on the heap property. Not safe for concurrent mutation from
    several threads without external locking.
    """

    MIN_HEAP = staticmethod(_less)
    MAX_HEAP = staticmethod(_greater)

    def __init__(self, comparator: Callable[[T, T], bool],
                 values: Optional[Sequence] = None) -> None:
        if not callable(comparator):
            logger.debug("rejected comparator %r", comparator)
            raise TypeError("Heap expects a compare function")
        if values is not None and (
                not isinstance(values, Sequence)
                or isinstance(values, (str, bytes, bytearray))):
            logger.debug("rejected initial values of type %s", type(values).__name__)
            raise TypeError("Heap expects an array of values")
        self._comparator = comparator
        self._data: List[T] = list(values) if values is not None else []

    @property
    def comparator(self) -> Callable[[T, T], bool]:
        return self._comparator

    def push(self, value: T) -> 'Heap[T]':
        self._data.append(value)
        self._sift_up(len(self._data) - 1)
        return self

    def pop(self) -> Optional[T]:
        if not self._data:
            return None
        result = self._data[0]
        self._swap(0, len(self._data) - 1)
        self._data.pop()
        self._sift_down(0)
        return result

    def top(self) -> Optional[T]:
        if not self._data:
            return None
        return self._data[0]

    def size(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return len(self._data) == 0

    def clear(self) -> 'Heap[T]':
        logger.debug("clearing %d elements", len(self._data))
        self._data.clear()
        return self

    def clone(self) -> 'Heap[T]':
        """Return an independent heap sharing the comparator and elements."""
        return Heap(self._comparator, self._data)

    def is_valid(self) -> bool:
        """Check the heap property without repairing anything.

        A child violates its parent only when the comparator places it
        strictly higher, so ties under ``a < b`` are accepted.
        """
        data = self._data
        size = len(data)
        for i in range(size // 2):
            for child in (2 * i + 1, 2 * i + 2):
                if child >= size:
                    break
                if (not self._comparator(data[i], data[child])
                        and self._comparator(data[child], data[i])):
                    return False
        return True

    def balance(self) -> 'Heap[T]':
        """Rebuild the heap property over the current array in O(n).

        Bottom-up heapify: sift down every internal node from ``n // 2 - 1``
        back to the root. Walking in descending order means both subtrees of
        a node are already valid heaps when it is sifted, which bounds the
        total work by O(n) rather than the O(n log n) of repeated pushes.
        """
        logger.debug("balancing heap of %d elements", len(self._data))
        for i in range(len(self._data) // 2 - 1, -1, -1):
            self._sift_down(i)
        return self

    def to_array(self) -> List[T]:
        """Copy of the backing array in heap order (not sorted)."""
        return self._data.copy()

    def drain(self) -> Iterator[T]:
        """Pop elements one at a time until the heap is empty.

        Destructive and one-shot: every yielded element is gone from the
        heap. Stopping early leaves the remainder a valid heap.
        """
        remaining = len(self._data)
        while remaining and self._data:
            remaining -= 1
            yield self.pop()
        logger.debug("drain finished with %d elements left", len(self._data))

    @classmethod
    def from_array(cls, arr: Sequence,
                   comparator: Callable[[T, T], bool] = _less) -> 'Heap[T]':
        """Build a balanced heap from an array.

        Note: Creates a shallow copy of the input array.
        """
        return cls(comparator, arr).balance()

    def _swap(self, i: int, j: int) -> None:
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._comparator(self._data[index], self._data[parent]):
                self._swap(index, parent)
                index = parent
            else:
                break

    def _sift_down(self, index: int) -> None:
        size = len(self._data)
        while True:
            target = index
            left = 2 * index + 1
            right = 2 * index + 2
            if left < size and self._comparator(self._data[left], self._data[target]):
                target = left
            if right < size and self._comparator(self._data[right], self._data[target]):
                target = right
            if target == index:
                break
            self._swap(index, target)
            index = target

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return len(self._data) > 0

    def __repr__(self) -> str:
        return f"Heap({self._data})"

    def __str__(self) -> str:
        return f"Heap(size={len(self._data)})"

    def __iter__(self) -> Iterator[T]:
        # Non-destructive: walks a clone in priority order.
        return self.clone().drain()


MIN_HEAP = Heap.MIN_HEAP
MAX_HEAP = Heap.MAX_HEAP
