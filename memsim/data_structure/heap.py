from __future__ import annotations
import operator
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

IndexChangeObserver = Callable[[T, Optional[int]], None]
Compare = Callable[[T, T], bool]


def _ignore_index_change(element, new_index) -> None:
    return None


class Heap(Generic[T]):
    """
    Binary heap that reports every element move to an observer.

    ``compare(a, b)`` returns True when ``a`` must be closer to the root than ``b``.
    Each time an element lands on a new array position the heap calls
    ``index_change_observer(element, new_index)``; when the element leaves the heap
    the new index is ``Heap.NULL_INDEX``. Keeping the reported index lets the owner
    erase an arbitrary element in O(log n).

    Example:
        >>> positions = {}
        >>> heap = Heap(index_change_observer=lambda e, i: positions.__setitem__(e, i))
        >>> for value in (5, 3, 8):
        ...     _ = heap.push(value)
        >>> heap.top()
        3
        >>> heap.erase(positions[5])
        >>> positions[5] is Heap.NULL_INDEX
        True
    """

    NULL_INDEX: Optional[int] = None

    def __init__(
        self,
        compare: Compare = operator.lt,
        index_change_observer: Optional[IndexChangeObserver] = None,
    ):
        self._compare = compare
        self._index_change_observer = index_change_observer or _ignore_index_change
        self._elements: List[T] = []

    def push(self, value: T) -> int:
        """
        Insert a value and restore heap order.

        Args:
            value (T): The value to insert.

        Returns:
            int: The final index of the inserted value.
        """
        self._elements.append(value)
        self._notify_index_change(value, self.size() - 1)
        return self._sift_up(self.size() - 1)

    def erase(self, index: int) -> None:
        """
        Remove the element stored at ``index``.

        A non-last element is first swapped with the last one; the element moved into
        the hole may need to go either down or up, so both sifts run.

        Args:
            index (int): Position of the element in the underlying array.

        Raises:
            IndexError: If ``index`` is outside ``[0, size)``.
        """
        if index is None or not 0 <= index < self.size():
            raise IndexError(f"heap index {index} out of range")

        last = self.size() - 1
        if index != last:
            self._swap_elements(index, last)
            self._notify_index_change(self._elements[last], self.NULL_INDEX)
            self._elements.pop()
            self._sift_down(index)
            self._sift_up(index)
        else:
            self._notify_index_change(self._elements[last], self.NULL_INDEX)
            self._elements.pop()

    def top(self) -> T:
        if self.empty():
            raise IndexError("top from empty heap")
        return self._elements[0]

    def pop(self) -> None:
        if self.empty():
            raise IndexError("pop from empty heap")
        self.erase(0)

    def size(self) -> int:
        return len(self._elements)

    def empty(self) -> bool:
        return not self._elements

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.empty()

    def __getitem__(self, index: int) -> T:
        return self._elements[index]

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    @staticmethod
    def _left_child(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def _right_child(index: int) -> int:
        return 2 * index + 2

    def _compare_elements(self, first_index: int, second_index: int) -> bool:
        return self._compare(self._elements[first_index], self._elements[second_index])

    def _notify_index_change(self, element: T, new_index: Optional[int]) -> None:
        self._index_change_observer(element, new_index)

    def _swap_elements(self, first_index: int, second_index: int) -> None:
        elements = self._elements
        elements[first_index], elements[second_index] = (
            elements[second_index],
            elements[first_index],
        )
        self._notify_index_change(elements[first_index], first_index)
        self._notify_index_change(elements[second_index], second_index)

    def _sift_up(self, index: int) -> int:
        while index != 0 and self._compare_elements(index, self._parent(index)):
            parent = self._parent(index)
            self._swap_elements(index, parent)
            index = parent
        return index

    def _sift_down(self, index: int) -> None:
        size = self.size()
        left = self._left_child(index)
        while left < size:
            right = self._right_child(index)
            child = left
            if right < size and self._compare_elements(right, left):
                child = right

            # already ordered relative to the preferred child
            if self._compare_elements(index, child):
                return

            self._swap_elements(index, child)
            index = child
            left = self._left_child(index)
