# app.py

import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, Confirm

from config.config_loader import load_config, validate_config
from logger.logger import JSONLogger
from logger.trace import make_trace, render_configuration
from simulator.loader import read_tape, load_instruction_table
from simulator.outcome import Failed, SimulationError
from simulator.turing_machine import TuringMachine
from tools.table_inspect import print_table

console = Console(highlight=False)

EXIT_INVALID_INPUT = 1
EXIT_STEP_LIMIT = 7

# === Utilities ===
def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value.lower() in ("1", "true", "yes", "y", "on"):
        return True
    if value.lower() in ("0", "false", "no", "n", "off"):
        return False
    raise argparse.ArgumentTypeError(f"Expected a boolean, got '{value}'")

def report_failure(kind, configuration=None):
    console.print(f"[red]Error occured:[/red] {kind.message}")
    if configuration is not None:
        console.print("Last configuration:")
        console.print(render_configuration(configuration), markup=False)
    console.print()

def run_simulation(input_path, instructions_path, config):
    """Load the tape and the table, run the machine, report the outcome. Returns the exit code."""
    try:
        line = read_tape(input_path)
        table = load_instruction_table(instructions_path)
        initial_state = table.resolve_initial_state(config["initial_state"])
    except SimulationError as e:
        report_failure(e.kind)
        console.print(e.detail, style="dim", markup=False)
        return e.kind.exit_code
    except ValueError as e:
        console.print(f"[red]Invalid input:[/red] {escape(str(e))}")
        return EXIT_INVALID_INPUT

    trace = make_trace(config["output"], step_mode=config["step_mode"], console=console)
    machine = TuringMachine(table, line, initial_state=initial_state, trace=trace)
    outcome = machine.run(max_steps=config["max_steps"])

    if config["log_runs"]:
        run_logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
        run_logger.log_run(
            machine,
            input=str(input_path),
            instructions=str(instructions_path),
            initial_state=initial_state,
        )

    if not outcome.terminal:
        console.print(f"[yellow]Stopped after {machine.steps:,} steps without halting (max_steps reached).[/yellow]")
        return EXIT_STEP_LIMIT

    if isinstance(outcome, Failed):
        report_failure(outcome.kind, outcome.configuration)
        return outcome.kind.exit_code

    return 0

# === Interactive Mode ===
def show_main_menu():
    console.print("\n[bold cyan]Turing Tape Simulator[/bold cyan]")
    console.print("[1] Run a machine")
    console.print("[2] Inspect an instruction table")
    console.print("[3] Exit")

def handle_run(config):
    console.print("\n[bold]Run a Machine[/bold]")

    input_path = Prompt.ask("Tape file", default="input.txt")
    instructions_path = Prompt.ask("Instructions file", default="instructions.txt")
    output = Prompt.ask("Trace output ('console' or a file path)", default=config["output"])
    initial_state = Prompt.ask("Initial state", default=config["initial_state"])
    step_mode = False
    if output == "console":
        step_mode = Confirm.ask("Step by step?", default=config["step_mode"])

    run_config = dict(config, output=output, initial_state=initial_state, step_mode=step_mode)
    exit_code = run_simulation(input_path, instructions_path, run_config)
    if exit_code == 0:
        console.print("[green]Machine halted.[/green]")

def handle_inspect():
    console.print("\n[bold]Inspect Instruction Table[/bold]")

    instructions_path = Prompt.ask("Instructions file", default="instructions.txt")
    try:
        table = load_instruction_table(instructions_path)
    except SimulationError as e:
        report_failure(e.kind)
        return
    except ValueError as e:
        console.print(f"[red]Invalid instructions:[/red] {escape(str(e))}")
        return
    print_table(table, console=console)

def interactive_main(config):
    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3"], default="3")

        if choice == "1":
            handle_run(config)
        elif choice == "2":
            handle_inspect()
        elif choice == "3":
            console.print("[bold green]Goodbye![/bold green]")
            break
    return 0

# === CLI Mode ===
def build_parser():
    parser = argparse.ArgumentParser(description="Single-tape Turing machine simulator")
    parser.add_argument("input", nargs="?", help="File whose first line is the initial tape")
    parser.add_argument("instructions", nargs="?", help="Instruction table file")
    parser.add_argument("output", nargs="?", help="Trace destination: 'console' (default) or a file path")
    parser.add_argument("init_state", nargs="?", help="Initial state (default: first state in the table)")
    parser.add_argument("step_by_step", nargs="?", type=parse_bool,
                        help="Wait for Enter before every step (console output only)")
    parser.add_argument("--config", help="Path to a JSON runtime config")
    parser.add_argument("--max-steps", type=int, help="Stop after this many steps (0 = unlimited)")
    parser.add_argument("--verbose", action="store_true", help="Print the loaded configuration")
    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, echo=args.verbose)
        if args.output is not None:
            config["output"] = args.output
        if args.init_state is not None:
            config["initial_state"] = args.init_state
        if args.step_by_step is not None:
            config["step_mode"] = args.step_by_step
        if args.max_steps is not None:
            config["max_steps"] = args.max_steps
        validate_config(config)
    except (OSError, ValueError, TypeError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return EXIT_INVALID_INPUT

    if args.input is None:
        return interactive_main(config)
    if args.instructions is None:
        parser.error("an instructions file is required together with the tape file")

    return run_simulation(args.input, args.instructions, config)

if __name__ == "__main__":
    sys.exit(main())
