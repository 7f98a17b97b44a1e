from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    NO_ERROR = ("everything works great!", 0)
    OPENING_FILE = ("can not open file. Please, check filepaths.", 3)
    INCORRECT_DIRECTION = ("incorrect direction in instructions.", 4)
    INCORRECT_STATE = ("incorrect next state in instructions.", 5)
    NO_INSTRUCTION_FOR_LETTER = ("no instruction for current letter.", 6)

    def __init__(self, message, exit_code):
        self.message = message
        self.exit_code = exit_code


class SimulationError(Exception):
    """Carries an ErrorKind out of a table lookup, a loader or a trace sink."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.message} {detail}".strip())


@dataclass(frozen=True)
class Configuration:
    state: str
    tape: str
    head: int


@dataclass(frozen=True)
class Running:
    configuration: Configuration
    terminal = False
    kind = ErrorKind.NO_ERROR


@dataclass(frozen=True)
class Halted:
    configuration: Configuration
    terminal = True
    kind = ErrorKind.NO_ERROR


@dataclass(frozen=True)
class Failed:
    kind: ErrorKind
    configuration: Optional[Configuration]
    terminal = True
