import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SimulationConfig(BaseModel):
    """
    SimulationConfig defines how a memory manager simulation is run.

    Attributes:
        memory_size (Optional[int]): Size of the address space. When None, the size is read from the input.
        input_path (Optional[Path]): File holding the queries. When None, standard input is used.
        output_path (Optional[Path]): File receiving the responses. When None, standard output is used.
        check_invariants (bool): Verify the allocator state after every query.
        summary (bool): Log a memory summary once all queries are processed.
        log_level (str): Name of the logging level.

    Example:
        >>> config = SimulationConfig()
        >>> config.log_level
        'INFO'
        >>> config.memory_size is None
        True
    """

    memory_size: Optional[int] = Field(
        default=None,
        gt=0,
        title="Memory Size",
        description="Size of the address space, overriding the value from the input",
    )
    input_path: Optional[Path] = Field(
        default=None,
        title="Input Path",
        description="File with the memory size and queries, standard input if unset",
    )
    output_path: Optional[Path] = Field(
        default=None,
        title="Output Path",
        description="File receiving one response per line, standard output if unset",
    )
    check_invariants: bool = Field(
        default=False,
        title="Check Invariants",
        description="Verify the segment partition and the free heap after every query",
    )
    summary: bool = Field(
        default=False,
        title="Summary",
        description="Log the memory summary after the run",
    )
    log_level: str = Field(
        default="INFO", title="Log Level", description="Logging level name"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def set_input_path(self, input_path: Union[str, Path]):
        """
        Set the file the queries are read from.

        Args:
            input_path (Union[str, Path]): Path to an existing file.

        Raises:
            ValueError: If the path is not an existing file.
        """
        logger.info(f"Setting input path to {input_path}")
        if isinstance(input_path, str):
            input_path = Path(input_path)
        if not input_path.is_file():
            raise ValueError(f"Input path {input_path} is not a file")
        self.input_path = input_path

    @contextmanager
    def open_input(self) -> Iterator[IO[str]]:
        if self.input_path is None:
            yield sys.stdin
            return
        with self.input_path.open("r", encoding="utf-8") as stream:
            yield stream

    @contextmanager
    def open_output(self) -> Iterator[IO[str]]:
        if self.output_path is None:
            yield sys.stdout
            return
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with self.output_path.open("w", encoding="utf-8") as stream:
            yield stream
