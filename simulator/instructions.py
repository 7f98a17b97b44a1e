from dataclasses import dataclass
from typing import Dict, List, Optional

from simulator.outcome import ErrorKind, SimulationError
from simulator.tape import BLANK, Direction

WILDCARD = "*"
BLANK_TOKEN = "_"
HALT_MARKER = "halt"
COMMENT_PREFIX = ";"
DEFAULT_STATE_SENTINEL = "smallest_key"


def is_halting(state: str) -> bool:
    # Prefix match: "halt-accept" and "halting_area" halt as well
    return state[:len(HALT_MARKER)] == HALT_MARKER


@dataclass(frozen=True)
class Instruction:
    read_symbol: str
    write_symbol: str
    direction: Optional[Direction]
    next_state: str
    direction_token: str = ""

    @property
    def is_default(self) -> bool:
        return self.read_symbol == WILDCARD


def parse_symbol(token: str, line_number: int) -> str:
    if len(token) != 1:
        raise ValueError(f"Line {line_number}: symbol '{token}' must be a single character")
    return BLANK if token == BLANK_TOKEN else token


def parse_instruction_line(line: str, line_number: int = 0):
    """Parse one record into (state, Instruction); returns None for comments and blank lines."""
    if not line.strip() or line.startswith(COMMENT_PREFIX):
        return None

    fields = line.split()
    if len(fields) < 5:
        raise ValueError(
            f"Line {line_number}: expected '<state> <read> <write> <direction> <next>', got {line.strip()!r}"
        )

    state, read_token, write_token, direction_token, next_state = fields[:5]
    instruction = Instruction(
        read_symbol=parse_symbol(read_token, line_number),
        write_symbol=parse_symbol(write_token, line_number),
        direction=Direction.from_token(direction_token),
        next_state=next_state,
        direction_token=direction_token,
    )
    return state, instruction


class InstructionTable:
    """Ordered state -> instructions mapping, read-only once built."""

    def __init__(self, rules: Dict[str, List[Instruction]]):
        self._rules = {state: tuple(instructions) for state, instructions in rules.items()}

    @classmethod
    def from_lines(cls, lines):
        rules: Dict[str, List[Instruction]] = {}
        for line_number, line in enumerate(lines, start=1):
            parsed = parse_instruction_line(line.rstrip("\r\n"), line_number)
            if parsed is None:
                continue
            state, instruction = parsed
            rules.setdefault(state, []).append(instruction)
        return cls(rules)

    def __contains__(self, state):
        return state in self._rules

    def __len__(self):
        return len(self._rules)

    @property
    def states(self):
        return list(self._rules)

    def instructions_for(self, state):
        if state not in self._rules:
            raise SimulationError(ErrorKind.INCORRECT_STATE, f"(state '{state}')")
        return self._rules[state]

    @property
    def first_state(self):
        """First state encountered while parsing the instruction source."""
        if not self._rules:
            raise ValueError("Instruction table is empty; there is no initial state")
        return next(iter(self._rules))

    def resolve_initial_state(self, name=None):
        if name is None or name == DEFAULT_STATE_SENTINEL:
            return self.first_state
        return name

    def lookup(self, state, symbol):
        """
        First exact match on the read symbol wins. Otherwise the last wildcard
        instruction scanned for the state is the default.
        """
        default = None
        for instruction in self.instructions_for(state):
            if instruction.is_default:
                default = instruction
            elif instruction.read_symbol == symbol:
                return instruction

        if default is not None:
            return default
        raise SimulationError(
            ErrorKind.NO_INSTRUCTION_FOR_LETTER, f"(state '{state}', symbol '{symbol}')"
        )
