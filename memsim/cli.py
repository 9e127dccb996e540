#!/usr/bin/env python3
"""
Memory Manager Simulation Command Line Interface
Replays allocation and free queries against the memory manager and prints the granted addresses.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from memsim.conf import LOG_LEVELS, SimulationConfig
from memsim.memory import (
    MemoryManager,
    read_simulation_input,
    run_memory_manager,
    write_responses,
)


class MemoryManagerCLI:
    """Command-line interface for the memory manager simulation."""

    def __init__(self):
        self.config: Optional[SimulationConfig] = None
        self.logger = logging.getLogger(__name__)

    def setup_logging(self, level: str = "INFO"):
        """Setup logging configuration."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="memsim",
            description="Memory manager simulation - largest-first allocation with coalescing",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Input format:
  <memory size> <query count> <query 1> ... <query N>
  positive query  allocate that many cells
  negative query  free the allocation made by query number |value|

Examples:
  echo "10 3 3 -1 5" | memsim
  memsim --input queries.txt --output responses.txt --summary
            """,
        )
        parser.add_argument("--input", "-i", help="Input file (default: stdin)")
        parser.add_argument("--output", "-o", help="Output file (default: stdout)")
        parser.add_argument(
            "--memory-size",
            type=int,
            help="Override the memory size given in the input",
        )
        parser.add_argument(
            "--check-invariants",
            action="store_true",
            help="Verify the allocator state after every query",
        )
        parser.add_argument(
            "--summary", action="store_true", help="Log a memory summary after the run"
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=list(LOG_LEVELS),
            help="Set logging level",
        )
        return parser

    def load_config(self, args: argparse.Namespace) -> SimulationConfig:
        config = SimulationConfig(
            memory_size=args.memory_size,
            output_path=args.output,
            check_invariants=args.check_invariants,
            summary=args.summary,
            log_level=args.log_level,
        )
        if args.input:
            config.set_input_path(args.input)
        return config

    def simulate(self, config: SimulationConfig) -> None:
        """Read the queries, run them and write one response per allocation."""
        with config.open_input() as stream:
            memory_size, queries = read_simulation_input(stream)

        if config.memory_size is not None:
            self.logger.info(
                f"Overriding memory size {memory_size} with {config.memory_size}"
            )
            memory_size = config.memory_size

        manager = MemoryManager(memory_size)
        responses = run_memory_manager(
            memory_size,
            queries,
            check_invariants=config.check_invariants,
            manager=manager,
        )

        with config.open_output() as stream:
            write_responses(responses, stream)

        if config.summary:
            for key, value in manager.get_memory_summary().items():
                self.logger.info(f"{key}: {value}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        parser = self.build_parser()
        args = parser.parse_args(argv)
        self.setup_logging(args.log_level)

        try:
            self.config = self.load_config(args)
            self.simulate(self.config)
        except (ValidationError, ValueError, TypeError) as e:
            self.logger.error(f"Simulation aborted: {e}")
            return 1
        return 0


def main():
    """Main entry point."""
    try:
        sys.exit(MemoryManagerCLI().run())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
