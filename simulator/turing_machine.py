from simulator.instructions import is_halting
from simulator.outcome import ErrorKind, Failed, Halted, Running, SimulationError
from simulator.tape import Tape


class TuringMachine:
    """
    Single-tape deterministic machine.

    The machine owns its tape and borrows the instruction table. Every call to
    step() returns the current outcome: Running, Halted or Failed. The last two
    are terminal and further calls change nothing.
    """

    def __init__(self, table, tape, initial_state=None, trace=None):
        self.table = table
        self.tape = tape if isinstance(tape, Tape) else Tape(tape)
        self.trace = trace
        self.current_state = table.resolve_initial_state(initial_state)
        self.steps = 0
        self.outcome = Running(self.configuration())

    def configuration(self):
        return self.tape.snapshot(self.current_state)

    @property
    def halted(self):
        return self.outcome.terminal

    def _fail(self, kind):
        self.outcome = Failed(kind, self.configuration())
        return self.outcome

    def step(self):
        if self.outcome.terminal:
            return self.outcome

        if self.trace is not None:
            try:
                self.trace(self.configuration())
            except SimulationError as e:
                return self._fail(e.kind)

        if is_halting(self.current_state):
            self.outcome = Halted(self.configuration())
            return self.outcome

        try:
            instruction = self.table.lookup(self.current_state, self.tape.read())
        except SimulationError as e:
            return self._fail(e.kind)

        # The write stays in place even when the direction turns out to be invalid
        self.tape.write(instruction.write_symbol)
        if instruction.direction is None:
            return self._fail(ErrorKind.INCORRECT_DIRECTION)
        self.tape.move(instruction.direction)
        self.steps += 1

        self.current_state = instruction.next_state
        if not is_halting(self.current_state) and self.current_state not in self.table:
            return self._fail(ErrorKind.INCORRECT_STATE)

        self.outcome = Running(self.configuration())
        return self.outcome

    def run(self, max_steps=None):
        """Step until a terminal outcome, or until max_steps transitions have been applied."""
        while not self.outcome.terminal:
            # The halt check applies no transition, so it still runs at the limit
            if max_steps and self.steps >= max_steps and not is_halting(self.current_state):
                break
            self.step()
        return self.outcome
