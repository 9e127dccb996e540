from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from memsim.memory.blocks import SegmentNode
from memsim.memory.manager import MemoryManager
from memsim.memory.queries import (
    AllocationQuery,
    AllocationResponse,
    FreeQuery,
    MemoryManagerQuery,
    make_failed_allocation,
    make_successful_allocation,
)

logger = logging.getLogger(__name__)


def run_memory_manager(
    memory_size: int,
    queries: Iterable[MemoryManagerQuery],
    check_invariants: bool = False,
    manager: Optional[MemoryManager] = None,
) -> List[AllocationResponse]:
    """
    Replay queries against a fresh memory manager.

    Every query, free queries included, takes one slot in the handle history, so a
    free query refers to its target by the raw 1-based position in the query
    sequence. A slot holds a handle only while that allocation is live: failed
    allocations and free queries store ``None``, and freeing clears the slot, so a
    repeated or dangling free is a no-op.

    Args:
        memory_size (int): Size of the address space.
        queries (Iterable[MemoryManagerQuery]): Queries in arrival order.
        check_invariants (bool): Verify the manager state after every query.
        manager (Optional[MemoryManager]): Manager to run against, created from
            ``memory_size`` when omitted.

    Returns:
        List[AllocationResponse]: One response per allocation query, in order.

    Raises:
        ValueError: If a free query does not point to an earlier query.
        TypeError: If a query is neither an allocation nor a free query.

    Example:
        >>> from memsim.memory.queries import AllocationQuery, FreeQuery
        >>> responses = run_memory_manager(5, [AllocationQuery(3), AllocationQuery(3)])
        >>> [response.success for response in responses]
        [True, False]
    """
    if manager is None:
        manager = MemoryManager(memory_size)
    responses: List[AllocationResponse] = []
    handles: List[Optional[SegmentNode]] = []

    for query in queries:
        if isinstance(query, AllocationQuery):
            handle = manager.allocate(query.allocation_size)
            if handle is not manager.end():
                responses.append(make_successful_allocation(handle.left))
            else:
                responses.append(make_failed_allocation())
            handles.append(handle)
        elif isinstance(query, FreeQuery):
            target = query.allocation_query_index - 1
            if target >= len(handles):
                raise ValueError(
                    f"Free query #{len(handles) + 1} refers to query "
                    f"#{query.allocation_query_index}, which has not been seen yet"
                )
            if handles[target] is not manager.end():
                manager.free(handles[target])
                handles[target] = manager.end()
            else:
                logger.debug(
                    f"Query #{query.allocation_query_index} holds no live allocation"
                )
            handles.append(manager.end())
        else:
            raise TypeError(f"Unknown MemoryManagerQuery type: {type(query).__name__}")

        if check_invariants:
            manager.check_invariants()

    logger.info(
        f"Processed {len(handles)} queries, "
        f"{sum(response.success for response in responses)}/{len(responses)} "
        f"allocations succeeded"
    )
    return responses
