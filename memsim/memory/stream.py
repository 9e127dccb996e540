"""
Text format of a simulation run.

Input is a whitespace separated list of integers: the memory size, the number of
queries, then one value per query. A positive value ``n`` allocates ``n`` cells, a
negative value ``-k`` frees the allocation made by query number ``k``. Line breaks
carry no meaning. Output holds one line per allocation query with the granted
address or ``-1``.
"""

from __future__ import annotations
from typing import IO, Iterable, Iterator, List, Tuple

from memsim.memory.queries import (
    AllocationQuery,
    AllocationResponse,
    FreeQuery,
    MemoryManagerQuery,
)

FAILED_ALLOCATION_MARKER = -1


def parse_query(value: int) -> MemoryManagerQuery:
    """
    Turn a raw query value into a query.

    Args:
        value (int): Positive allocation size or negated 1-based query index.

    Returns:
        MemoryManagerQuery: The matching query.

    Raises:
        ValueError: If ``value`` is zero.

    Example:
        >>> parse_query(3)
        AllocationQuery(allocation_size=3)
        >>> parse_query(-2)
        FreeQuery(allocation_query_index=2)
    """
    if value > 0:
        return AllocationQuery(value)
    if value < 0:
        return FreeQuery(-value)
    raise ValueError("Query value 0 is neither an allocation nor a free query")


class QueryReader:
    """
    Reads integers from a text stream one token at a time.

    Example:
        >>> import io
        >>> reader = QueryReader(io.StringIO("10 3\\n3 -1 5\\n"))
        >>> reader.read_memory_size()
        10
        >>> len(reader.read_queries())
        3
    """

    def __init__(self, stream: IO[str]):
        self._tokens = self._iter_tokens(stream)

    @staticmethod
    def _iter_tokens(stream: IO[str]) -> Iterator[int]:
        for line in stream:
            for token in line.split():
                try:
                    yield int(token)
                except ValueError:
                    raise ValueError(f"Expected an integer, got {token!r}") from None

    def read_int(self, what: str = "an integer") -> int:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ValueError(f"Unexpected end of input while reading {what}") from None

    def read_memory_size(self) -> int:
        memory_size = self.read_int("the memory size")
        if memory_size < 1:
            raise ValueError(f"Memory size must be positive, got {memory_size}")
        return memory_size

    def read_queries(self) -> List[MemoryManagerQuery]:
        """
        Read the query count followed by that many query values.

        Raises:
            ValueError: On a negative count, a zero query value or missing values.
        """
        count = self.read_int("the query count")
        if count < 0:
            raise ValueError(f"Query count must not be negative, got {count}")
        return [
            parse_query(self.read_int(f"query {number} of {count}"))
            for number in range(1, count + 1)
        ]


def read_simulation_input(stream: IO[str]) -> Tuple[int, List[MemoryManagerQuery]]:
    """Read the memory size followed by the query list from one stream"""
    reader = QueryReader(stream)
    memory_size = reader.read_memory_size()
    return memory_size, reader.read_queries()


def format_response(response: AllocationResponse) -> str:
    return str(response.position if response.success else FAILED_ALLOCATION_MARKER)


def format_responses(responses: Iterable[AllocationResponse]) -> str:
    return "".join(f"{format_response(response)}\n" for response in responses)


def write_responses(responses: Iterable[AllocationResponse], stream: IO[str]) -> None:
    stream.write(format_responses(responses))
