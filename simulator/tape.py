from enum import Enum

from simulator.outcome import Configuration

BLANK = " "
KEEP = "*"


class Direction(Enum):
    RIGHT = "r"
    LEFT = "l"
    STAY = "*"

    @classmethod
    def from_token(cls, token):
        """Return the Direction for an instruction token, or None when it is not one."""
        for direction in cls:
            if direction.value == token:
                return direction
        return None


class Tape:
    """Single tape that grows by one blank cell whenever the head runs off an end."""

    def __init__(self, contents="", head=0):
        self.cells = list(contents) or [BLANK]
        if not 0 <= head < len(self.cells):
            raise ValueError(f"Head position {head} outside tape of length {len(self.cells)}")
        self.head = head

    def __len__(self):
        return len(self.cells)

    @property
    def contents(self):
        return "".join(self.cells)

    def read(self):
        return self.cells[self.head]

    def write(self, symbol):
        if symbol != KEEP:
            self.cells[self.head] = symbol

    def move_left(self):
        if self.head > 0:
            self.head -= 1
        else:
            self.cells.insert(0, BLANK)

    def move_right(self):
        if self.head < len(self.cells) - 1:
            self.head += 1
        else:
            self.cells.append(BLANK)
            self.head += 1

    def move_stay(self):
        pass

    def move(self, direction):
        if direction is Direction.LEFT:
            self.move_left()
        elif direction is Direction.RIGHT:
            self.move_right()
        else:
            self.move_stay()

    def snapshot(self, state):
        return Configuration(state, self.contents, self.head)
