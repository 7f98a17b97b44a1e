# tools/simulate_batch.py

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from simulator.loader import load_instruction_table, load_tapes
from simulator.outcome import SimulationError
from simulator.turing_machine import TuringMachine
from logger.logger import outcome_entry

console = Console()

# === Single Run ===
def simulate_tape(table, tape, initial_state=None, max_steps=0):
    """Run one tape to completion (or to max_steps) without tracing."""
    machine = TuringMachine(table, tape, initial_state=initial_state)
    machine.run(max_steps=max_steps)
    return machine

def simulate_tapes(table, tapes, initial_state=None, max_steps=0, progress=None, task=None):
    entries = []
    for index, tape in enumerate(tapes):
        machine = simulate_tape(table, tape, initial_state=initial_state, max_steps=max_steps)
        entries.append(outcome_entry(machine, tape_index=index, input=tape))
        if progress is not None:
            progress.update(task, advance=1)
    return entries

# === Main Batch Runner ===
def simulate_batch(instructions_file, tapes_file, results_file, initial_state=None, max_steps=0):
    table = load_instruction_table(instructions_file)
    tapes = load_tapes(tapes_file)
    console.print(f"[cyan]Loaded {len(table)} states and {len(tapes):,} tapes.[/cyan]")

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Tapes"),
            TimeElapsedColumn(),
            console=console
    ) as progress:
        task = progress.add_task("[cyan]Simulating...", total=len(tapes))
        entries = simulate_tapes(table, tapes, initial_state, max_steps, progress, task)

    # === BULK WRITE once per batch ===
    results_file = Path(results_file)
    results_file.parent.mkdir(parents=True, exist_ok=True)
    with open(results_file, "a", encoding="utf-8") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")

    halted = sum(1 for entry in entries if entry["outcome"] == "Halted")
    console.print(f"[green]{halted:,} of {len(entries):,} tapes halted. Results saved to {results_file}[/green]")
    return entries

# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run one instruction table against every tape in a file.")
    parser.add_argument("--instructions", required=True, help="Instruction table file")
    parser.add_argument("--tapes", required=True, help="File with one initial tape per line")
    parser.add_argument("--output", default="results/batch_results.jsonl", help="Results file (JSON lines)")
    parser.add_argument("--initial_state", help="Initial state (default: first state in the table)")
    parser.add_argument("--max_steps", type=int, default=100000, help="Maximum steps per tape (0 = unlimited)")
    args = parser.parse_args(argv)

    try:
        simulate_batch(
            args.instructions,
            args.tapes,
            args.output,
            initial_state=args.initial_state,
            max_steps=args.max_steps
        )
    except SimulationError as e:
        console.print(f"[red]Error:[/red] {e.kind.message}")
        console.print(e.detail, style="dim", markup=False)
        return e.kind.exit_code
    except ValueError as e:
        console.print(f"[red]Invalid input:[/red] {escape(str(e))}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
