from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from memsim.data_structure import Heap, NonCircularBiLink


@dataclass(slots=True)
class MemorySegment:
    """Represents a contiguous, inclusive address range ``[left, right]``"""

    left: int
    right: int
    heap_index: Optional[int] = field(default=Heap.NULL_INDEX)

    @property
    def size(self) -> int:
        return self.right - self.left + 1

    def is_free(self) -> bool:
        """A segment is free exactly when it currently sits in the free heap"""
        return self.heap_index is not Heap.NULL_INDEX

    def unite(self, other: MemorySegment) -> MemorySegment:
        """Return a new segment spanning both ranges, outside of any heap"""
        return MemorySegment(min(self.left, other.left), max(self.right, other.right))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left": self.left,
            "right": self.right,
            "size": self.size,
            "free": self.is_free(),
        }


class SegmentNode(NonCircularBiLink):
    """Handle to a memory segment inside a :class:`SegmentList`"""

    __slots__ = ()

    def __init__(self, segment: MemorySegment):
        super().__init__(segment)

    @property
    def value(self) -> MemorySegment:
        return self._value

    @value.setter
    def value(self, segment: MemorySegment) -> None:
        self._value = segment

    @property
    def left(self) -> int:
        return self.value.left

    @property
    def right(self) -> int:
        return self.value.right

    @property
    def size(self) -> int:
        return self.value.size

    def __repr__(self) -> str:
        return f"SegmentNode([{self.left}, {self.right}])"


class SegmentList:
    """
    Address-ordered doubly linked list of segment nodes.

    Nodes act as handles: inserting or removing other nodes never invalidates them.
    Removing a node detaches it, after which it must not be used again.
    """

    def __init__(self):
        self._head: Optional[SegmentNode] = None
        self._tail: Optional[SegmentNode] = None
        self._size: int = 0

    @property
    def head(self) -> Optional[SegmentNode]:
        return self._head

    @property
    def tail(self) -> Optional[SegmentNode]:
        return self._tail

    def append(self, segment: MemorySegment) -> SegmentNode:
        node = SegmentNode(segment)
        if self._tail is None:
            self._head = self._tail = node
        else:
            self._tail.insert_after(node)
            self._tail = node
        self._size += 1
        return node

    def insert_before(self, position: SegmentNode, segment: MemorySegment) -> SegmentNode:
        """
        Insert a new segment immediately before ``position``.

        Args:
            position (SegmentNode): A node currently in this list.
            segment (MemorySegment): The segment to wrap in a new node.

        Returns:
            SegmentNode: The handle of the inserted segment.
        """
        node = SegmentNode(segment)
        position.insert_before(node)
        if position is self._head:
            self._head = node
        self._size += 1
        return node

    def insert_after(self, position: SegmentNode, segment: MemorySegment) -> SegmentNode:
        node = SegmentNode(segment)
        position.insert_after(node)
        if position is self._tail:
            self._tail = node
        self._size += 1
        return node

    def remove(self, node: SegmentNode) -> None:
        if node is self._head:
            self._head = node.next
        if node is self._tail:
            self._tail = node.prev
        node.remove()
        self._size -= 1

    def is_begin(self, node: SegmentNode) -> bool:
        return node is self._head

    def is_end(self, node: SegmentNode) -> bool:
        return node is self._tail

    def contains(self, node: SegmentNode) -> bool:
        """Check in O(1) whether ``node`` is still linked into this list"""
        if node is self._head:
            return True
        return not node.is_detached

    def __iter__(self) -> Iterator[SegmentNode]:
        if self._head is None:
            return iter(())
        return self._head.iter_forward()

    def __len__(self) -> int:
        return self._size
