from rich.console import Console

from simulator.outcome import ErrorKind, SimulationError

TAPE_FIELD_WIDTH = 20


def render_configuration(configuration):
    """State line, tape right-aligned in a fixed field, caret under the head cell."""
    tape = configuration.tape
    offset = max(TAPE_FIELD_WIDTH - len(tape), 0)
    return (
        f"State: {configuration.state}\n"
        f"{tape.rjust(TAPE_FIELD_WIDTH)}\n"
        f"{' ' * (offset + configuration.head)}^"
    )


class ConsoleTrace:
    """Print each configuration; in step mode wait for Enter before every report."""

    def __init__(self, console=None, step_mode=False):
        self.console = console or Console(highlight=False)
        self.step_mode = step_mode

    def __call__(self, configuration):
        if self.step_mode:
            self.console.input()
        # markup off: tapes may contain '[' characters
        self.console.print(render_configuration(configuration), markup=False)


class FileTrace:
    """Append each configuration to a file, opened per report."""

    def __init__(self, path):
        self.path = path

    def __call__(self, configuration):
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(render_configuration(configuration) + "\n")
        except OSError as e:
            raise SimulationError(ErrorKind.OPENING_FILE, f"({self.path}: {e.strerror})") from e


def make_trace(output, step_mode=False, console=None):
    if output == "console":
        return ConsoleTrace(console=console, step_mode=step_mode)
    return FileTrace(output)
