from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class AllocationQuery:
    """Request for ``allocation_size`` contiguous cells"""

    allocation_size: int

    def __post_init__(self):
        if self.allocation_size < 1:
            raise ValueError(
                f"Allocation size must be positive, got {self.allocation_size}"
            )


@dataclass(frozen=True, slots=True)
class FreeQuery:
    """Request to release the allocation made by query number ``allocation_query_index`` (1-based)"""

    allocation_query_index: int

    def __post_init__(self):
        if self.allocation_query_index < 1:
            raise ValueError(
                f"Query index must be positive, got {self.allocation_query_index}"
            )


MemoryManagerQuery = Union[AllocationQuery, FreeQuery]


@dataclass(frozen=True, slots=True)
class AllocationResponse:
    """
    Outcome of an allocation query.

    Build instances with :func:`make_successful_allocation` and
    :func:`make_failed_allocation`; direct construction is meant for test fixtures.
    """

    success: bool
    position: int = 0


def make_successful_allocation(position: int) -> AllocationResponse:
    return AllocationResponse(success=True, position=position)


def make_failed_allocation() -> AllocationResponse:
    return AllocationResponse(success=False, position=0)
