from pathlib import Path

from simulator.instructions import InstructionTable
from simulator.outcome import ErrorKind, SimulationError


def _read_lines(path, description):
    try:
        return Path(path).read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        raise ValueError(f"{description} {path} is not valid UTF-8 text") from e
    except OSError as e:
        raise SimulationError(ErrorKind.OPENING_FILE, f"({path}: {e.strerror})") from e


def read_tape(path):
    """Return the first line of the file verbatim; spaces become blank cells."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            line = f.readline()
    except UnicodeDecodeError as e:
        raise ValueError(f"Tape file {path} is not valid UTF-8 text") from e
    except OSError as e:
        raise SimulationError(ErrorKind.OPENING_FILE, f"({path}: {e.strerror})") from e
    return line.rstrip("\r\n")


def load_instruction_table(path):
    """Build an InstructionTable from an instruction file, grouping records by state."""
    lines = _read_lines(path, "Instructions file")
    try:
        return InstructionTable.from_lines(lines)
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e


def load_tapes(path):
    """Load one tape per line for batch runs."""
    return _read_lines(path, "Tapes file")
