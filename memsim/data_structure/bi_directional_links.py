from __future__ import annotations
from typing import Any, Iterator, Optional


class NonCircularBiLink:
    __slots__ = ("_prev", "_next", "_value")

    def __init__(self, value: Any):
        """
        Create a detached node of a non-circular doubly linked list.

        The node itself is the stable reference to its position: linking or unlinking
        other nodes never changes it.

        Args:
            value (Any): The value to store in the node.

        Returns:
            None

        Example:
            >>> node = NonCircularBiLink("A")
            >>> node.prev is None and node.next is None
            True
        """
        self._prev: Optional[NonCircularBiLink] = None
        self._next: Optional[NonCircularBiLink] = None
        self._value: Any = value

    @property
    def prev(self) -> Optional[NonCircularBiLink]:
        return self._prev

    @property
    def next(self) -> Optional[NonCircularBiLink]:
        return self._next

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value

    @property
    def is_detached(self) -> bool:
        return self._prev is None and self._next is None

    def insert_after(self, node: NonCircularBiLink) -> None:
        """Insert a node after the current node.

        Args:
                node (NonCircularBiLink): The node to be inserted.

        Returns:
                None
        """
        node._prev = self
        node._next = self._next
        if self._next:
            self._next._prev = node
        self._next = node

    def insert_before(self, node: NonCircularBiLink) -> None:
        """Insert a node before the current node.

        Args:
                node (NonCircularBiLink): The node to be inserted.

        Returns:
                None
        """
        node._next = self
        node._prev = self._prev
        if self._prev:
            self._prev._next = node
        self._prev = node

    def remove(self) -> None:
        """Unlink the current node, joining its neighbours together.

        Returns:
                None
        """
        if self._prev:
            self._prev._next = self._next
        if self._next:
            self._next._prev = self._prev
        self._prev = None
        self._next = None

    def get_head(self) -> NonCircularBiLink:
        node = self
        while node.prev:
            node = node.prev
        return node

    def iter_forward(self) -> Iterator[NonCircularBiLink]:
        """Yield this node and every node after it."""
        node = self
        while node:
            yield node
            node = node.next

    def total_nodes(self) -> int:
        """Count the total number of nodes in the list containing the current node.

        Returns:
                int: The total number of nodes in the list.
        """
        return sum(1 for _ in self.get_head().iter_forward())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"
