from .blocks import MemorySegment, SegmentNode, SegmentList
from .manager import MemoryManager
from .queries import (
    AllocationQuery,
    FreeQuery,
    MemoryManagerQuery,
    AllocationResponse,
    make_successful_allocation,
    make_failed_allocation,
)
from .simulator import run_memory_manager
from .stream import (
    QueryReader,
    parse_query,
    read_simulation_input,
    format_responses,
    write_responses,
)

__all__ = [
    "MemorySegment",
    "SegmentNode",
    "SegmentList",
    "MemoryManager",
    "AllocationQuery",
    "FreeQuery",
    "MemoryManagerQuery",
    "AllocationResponse",
    "make_successful_allocation",
    "make_failed_allocation",
    "run_memory_manager",
    "QueryReader",
    "parse_query",
    "read_simulation_input",
    "format_responses",
    "write_responses",
]
