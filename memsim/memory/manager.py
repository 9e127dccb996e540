from __future__ import annotations
import logging
from typing import Any, Dict, Iterator, Optional

from memsim.data_structure import Heap
from memsim.memory.blocks import MemorySegment, SegmentList, SegmentNode

logger = logging.getLogger(__name__)


def _larger_then_leftmost(first: SegmentNode, second: SegmentNode) -> bool:
    return (first.size, -first.left) > (second.size, -second.left)


def _store_heap_index(node: SegmentNode, new_index: Optional[int]) -> None:
    node.value.heap_index = new_index


class MemoryManager:
    """
    Allocator over the address space ``[1, memory_size]``.

    Segments are kept in a doubly linked list in address order. The free ones are
    also stored in a heap keyed by size (largest first, leftmost on ties); every
    segment remembers its heap position, and an allocated segment simply has no
    heap position. The list nodes double as the handles returned to callers.

    Example:
        >>> manager = MemoryManager(10)
        >>> first = manager.allocate(4)
        >>> first.left, first.right
        (1, 4)
        >>> manager.allocate(7) is manager.end()
        True
        >>> manager.free(first)
        >>> manager.allocate(10).left
        1
    """

    def __init__(self, memory_size: int):
        if memory_size < 1:
            raise ValueError(f"Memory size must be positive, got {memory_size}")
        self.memory_size = memory_size
        self._segments = SegmentList()
        self._free_segments: Heap[SegmentNode] = Heap(
            compare=_larger_then_leftmost, index_change_observer=_store_heap_index
        )
        self._free_segments.push(self._segments.append(MemorySegment(1, memory_size)))

    def allocate(self, size: int) -> Optional[SegmentNode]:
        """
        Take ``size`` cells from the start of the largest free segment.

        Args:
            size (int): Number of cells requested.

        Returns:
            Optional[SegmentNode]: Handle of the allocated segment, or ``end()`` when
            the largest free segment is too small.

        Raises:
            ValueError: If ``size`` is not positive.
        """
        if size < 1:
            raise ValueError(f"Allocation size must be positive, got {size}")

        if self._free_segments.empty():
            logger.debug(f"Allocation of {size} failed: no free segments")
            return self.end()

        top = self._free_segments.top()
        if top.size < size:
            logger.debug(
                f"Allocation of {size} failed: largest free segment has {top.size}"
            )
            return self.end()

        self._free_segments.pop()
        if top.size == size:
            logger.debug(f"Allocated whole segment [{top.left}, {top.right}]")
            return top

        allocated = MemorySegment(top.left, top.left + size - 1)
        top.value.left = allocated.right + 1
        node = self._segments.insert_before(top, allocated)
        self._free_segments.push(top)
        logger.debug(
            f"Allocated [{allocated.left}, {allocated.right}], "
            f"remainder [{top.left}, {top.right}]"
        )
        return node

    def free(self, position: SegmentNode) -> None:
        """
        Release an allocated segment and coalesce it with free neighbours.

        The freed handle survives the merge; handles of absorbed neighbours become
        invalid.

        Args:
            position (SegmentNode): Handle returned by :meth:`allocate`.

        Raises:
            ValueError: If the handle is already free or no longer part of the memory.
        """
        if position is None or not self._segments.contains(position):
            raise ValueError(f"{position!r} is not a live segment")
        if position.value.is_free():
            raise ValueError(f"{position!r} is already free")

        logger.debug(f"Freeing [{position.left}, {position.right}]")
        if not self._segments.is_begin(position):
            self._append_if_free(position, position.prev)
        if not self._segments.is_end(position):
            self._append_if_free(position, position.next)
        self._free_segments.push(position)

    def end(self) -> Optional[SegmentNode]:
        """The sentinel returned instead of a handle when allocation fails"""
        return None

    def _append_if_free(self, remaining: SegmentNode, appending: SegmentNode) -> None:
        if not appending.value.is_free():
            return
        remaining.value = remaining.value.unite(appending.value)
        self._free_segments.erase(appending.value.heap_index)
        self._segments.remove(appending)
        logger.debug(f"Coalesced into [{remaining.left}, {remaining.right}]")

    def segments(self) -> Iterator[MemorySegment]:
        """Iterate over all segments in address order"""
        for node in self._segments:
            yield node.value

    def segment_count(self) -> int:
        return len(self._segments)

    def free_segment_count(self) -> int:
        return self._free_segments.size()

    def free_bytes(self) -> int:
        return sum(segment.size for segment in self.segments() if segment.is_free())

    def allocated_bytes(self) -> int:
        return self.memory_size - self.free_bytes()

    def largest_free_segment(self) -> Optional[MemorySegment]:
        if self._free_segments.empty():
            return None
        return self._free_segments.top().value

    def get_memory_summary(self) -> Dict[str, Any]:
        """
        Summarize the current state of the memory.

        The fragmentation ratio is ``1 - largest_free / free_bytes``: zero when all free
        memory is one contiguous segment, approaching one when it is scattered.

        Returns:
            Dict[str, Any]: Sizes, counts and ratios describing the memory.
        """
        free_bytes = self.free_bytes()
        largest = self.largest_free_segment()
        largest_size = largest.size if largest else 0
        return {
            "memory_size": self.memory_size,
            "segment_count": self.segment_count(),
            "free_segment_count": self.free_segment_count(),
            "allocated_segment_count": self.segment_count() - self.free_segment_count(),
            "free_bytes": free_bytes,
            "allocated_bytes": self.memory_size - free_bytes,
            "largest_free_segment": largest_size,
            "utilization_ratio": (self.memory_size - free_bytes) / self.memory_size,
            "fragmentation_ratio": (
                1.0 - largest_size / free_bytes if free_bytes else 0.0
            ),
        }

    def check_invariants(self) -> None:
        """
        Verify that segments partition the memory and the heap agrees with them.

        Raises:
            RuntimeError: On the first violated invariant.
        """
        expected_left = 1
        previous_free = False
        free_count = 0
        for node in self._segments:
            segment = node.value
            if segment.left != expected_left or segment.right < segment.left:
                raise RuntimeError(
                    f"Segment [{segment.left}, {segment.right}] breaks the partition "
                    f"at address {expected_left}"
                )
            if segment.is_free():
                if previous_free:
                    raise RuntimeError(
                        f"Free segment [{segment.left}, {segment.right}] was not "
                        f"coalesced with its left neighbour"
                    )
                index = segment.heap_index
                if index >= self._free_segments.size() or self._free_segments[index] is not node:
                    raise RuntimeError(
                        f"Segment [{segment.left}, {segment.right}] has stale heap "
                        f"index {index}"
                    )
                free_count += 1
            previous_free = segment.is_free()
            expected_left = segment.right + 1

        if expected_left != self.memory_size + 1:
            raise RuntimeError(
                f"Segments cover [1, {expected_left - 1}] instead of [1, {self.memory_size}]"
            )
        if free_count != self._free_segments.size():
            raise RuntimeError(
                f"Heap holds {self._free_segments.size()} segments but {free_count} are free"
            )
