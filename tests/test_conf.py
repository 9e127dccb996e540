import io
import sys

import pytest
from pydantic import ValidationError

from memsim.conf import SimulationConfig


class TestSimulationConfig:
    """Test cases for the simulation configuration model"""

    def test_defaults(self):
        config = SimulationConfig()

        assert config.memory_size is None
        assert config.input_path is None
        assert config.output_path is None
        assert config.check_invariants is False
        assert config.summary is False
        assert config.log_level == "INFO"

    def test_log_level_is_normalized(self):
        assert SimulationConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SimulationConfig(log_level="chatty")

    @pytest.mark.parametrize("memory_size", [0, -10])
    def test_invalid_memory_size(self, memory_size):
        with pytest.raises(ValidationError):
            SimulationConfig(memory_size=memory_size)

    def test_set_input_path(self, tmp_path):
        queries = tmp_path / "queries.txt"
        queries.write_text("10 1 3\n")
        config = SimulationConfig()
        config.set_input_path(str(queries))

        assert config.input_path == queries

    def test_set_input_path_rejects_missing_file(self, tmp_path):
        config = SimulationConfig()
        with pytest.raises(ValueError):
            config.set_input_path(tmp_path / "missing.txt")

    def test_open_input_defaults_to_stdin(self, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("5 0"))
        with SimulationConfig().open_input() as stream:
            assert stream.read() == "5 0"

    def test_open_output_creates_parent(self, tmp_path):
        output = tmp_path / "out" / "responses.txt"
        with SimulationConfig(output_path=output).open_output() as stream:
            stream.write("1\n")

        assert output.read_text() == "1\n"
