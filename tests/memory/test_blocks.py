import pytest

from memsim.data_structure import Heap
from memsim.memory import MemorySegment, SegmentList, SegmentNode


class TestMemorySegment:
    """Test cases for the MemorySegment data class."""

    def test_segment_creation(self):
        """Test a new segment is outside of any heap."""
        segment = MemorySegment(3, 7)

        assert segment.left == 3
        assert segment.right == 7
        assert segment.heap_index is Heap.NULL_INDEX
        assert not segment.is_free()

    @pytest.mark.parametrize("left,right,size", [(1, 1, 1), (1, 10, 10), (5, 8, 4)])
    def test_size_is_inclusive(self, left, right, size):
        assert MemorySegment(left, right).size == size

    def test_heap_index_marks_free(self):
        """Test any heap position, zero included, marks the segment free."""
        segment = MemorySegment(1, 4, heap_index=0)
        assert segment.is_free()

    def test_unite_adjacent_segments(self):
        """Test uniting covers both ranges regardless of argument order."""
        left = MemorySegment(1, 4, heap_index=2)
        right = MemorySegment(5, 9)

        assert left.unite(right) == MemorySegment(1, 9)
        assert right.unite(left) == MemorySegment(1, 9)
        assert left.unite(right).heap_index is Heap.NULL_INDEX

    def test_to_dict(self):
        """Test the dictionary export."""
        assert MemorySegment(2, 5).to_dict() == {
            "left": 2,
            "right": 5,
            "size": 4,
            "free": False,
        }


class TestSegmentList:
    """Test cases for the address-ordered segment list."""

    def test_empty_list(self):
        segments = SegmentList()

        assert len(segments) == 0
        assert list(segments) == []
        assert segments.head is None
        assert segments.tail is None

    def test_append(self):
        """Test appending keeps head and tail current."""
        segments = SegmentList()
        first = segments.append(MemorySegment(1, 4))
        second = segments.append(MemorySegment(5, 8))

        assert isinstance(first, SegmentNode)
        assert list(segments) == [first, second]
        assert segments.is_begin(first)
        assert segments.is_end(second)

    def test_insert_before_head_moves_head(self):
        """Test inserting before the head makes the new node the head."""
        segments = SegmentList()
        tail = segments.append(MemorySegment(4, 10))
        head = segments.insert_before(tail, MemorySegment(1, 3))

        assert segments.head is head
        assert segments.tail is tail
        assert [node.left for node in segments] == [1, 4]
        assert len(segments) == 2

    def test_insert_after_tail_moves_tail(self):
        segments = SegmentList()
        head = segments.append(MemorySegment(1, 3))
        tail = segments.insert_after(head, MemorySegment(4, 10))

        assert segments.tail is tail
        assert [node.right for node in segments] == [3, 10]

    def test_remove_keeps_other_handles(self):
        """Test removing a node leaves neighbour handles usable."""
        segments = SegmentList()
        nodes = [segments.append(MemorySegment(i, i)) for i in range(1, 5)]
        segments.remove(nodes[1])

        assert [node.left for node in segments] == [1, 3, 4]
        assert nodes[0].next is nodes[2]
        assert nodes[2].prev is nodes[0]
        assert len(segments) == 3

    def test_remove_head_and_tail(self):
        segments = SegmentList()
        nodes = [segments.append(MemorySegment(i, i)) for i in range(1, 4)]
        segments.remove(nodes[0])
        segments.remove(nodes[2])

        assert segments.head is nodes[1]
        assert segments.tail is nodes[1]
        assert list(segments) == [nodes[1]]

    def test_contains(self):
        """Test membership is lost once a node is removed."""
        segments = SegmentList()
        only = segments.append(MemorySegment(1, 10))
        assert segments.contains(only)

        second = segments.insert_after(only, MemorySegment(11, 12))
        segments.remove(second)
        assert not segments.contains(second)
        assert segments.contains(only)

    def test_node_exposes_segment_bounds(self):
        node = SegmentNode(MemorySegment(6, 9))

        assert (node.left, node.right, node.size) == (6, 9, 4)
        assert repr(node) == "SegmentNode([6, 9])"
