# tools/table_inspect.py

import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simulator.instructions import is_halting
from simulator.loader import load_instruction_table
from simulator.outcome import SimulationError
from simulator.tape import BLANK


def show_symbol(symbol):
    """Blank cells are written back as '_', the way instruction files spell them."""
    return "_" if symbol == BLANK else symbol

def find_problems(table):
    """List the records that would stop a run: bad direction tokens and undefined next states."""
    problems = []
    for state in table.states:
        for instruction in table.instructions_for(state):
            if instruction.direction is None:
                problems.append(
                    f"State {state}, read '{show_symbol(instruction.read_symbol)}': "
                    f"unknown direction '{instruction.direction_token}'"
                )
            if not is_halting(instruction.next_state) and instruction.next_state not in table:
                problems.append(
                    f"State {state}, read '{show_symbol(instruction.read_symbol)}': "
                    f"next state '{instruction.next_state}' is not defined"
                )
    return problems

def print_table(table, console=None):
    """Pretty print the instruction table grouped by state, followed by any problems found."""
    console = console or Console()

    view = Table(title="Instruction Table", show_header=True, header_style="bold magenta")
    view.add_column("State", justify="center")
    view.add_column("Read", justify="center")
    view.add_column("Write", justify="center")
    view.add_column("Move", justify="center")
    view.add_column("Next", justify="center")

    for state in table.states:
        for instruction in table.instructions_for(state):
            view.add_row(
                escape(state),
                escape(show_symbol(instruction.read_symbol)),
                escape(show_symbol(instruction.write_symbol)),
                escape(instruction.direction_token),
                escape(instruction.next_state),
            )
    console.print(view)

    problems = find_problems(table)
    if problems:
        console.print(f"[red]{len(problems)} problem(s) found:[/red]")
        for problem in problems:
            console.print(f"  {problem}", markup=False)
    else:
        console.print("[green]No problems found.[/green]")
    return problems

def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Instruction Table Inspector")
    parser.add_argument("instructions", help="Instruction table file")
    args = parser.parse_args(argv)

    console = Console()
    try:
        table = load_instruction_table(args.instructions)
    except SimulationError as e:
        console.print(f"[red]Error:[/red] {e.kind.message}")
        console.print(e.detail, style="dim", markup=False)
        return e.kind.exit_code
    except ValueError as e:
        console.print(f"[red]Invalid instructions:[/red] {escape(str(e))}")
        return 1

    console.print(f"[cyan]Loaded {len(table)} states from {args.instructions}[/cyan]")
    problems = print_table(table, console=console)
    return 1 if problems else 0

if __name__ == "__main__":
    sys.exit(main())
