import io
import json

from rich.console import Console

from simulator.instructions import InstructionTable
from simulator.outcome import ErrorKind
from tools import simulate_batch as simulate_batch_tool
from tools import table_inspect
from tools.simulate_batch import simulate_batch, simulate_tape, simulate_tapes
from tools.table_inspect import find_problems, print_table

FLIP_TABLE = """\
flip 0 1 r flip
flip 1 0 r flip
flip _ _ * halt
"""


def table_from(text):
    return InstructionTable.from_lines(text.splitlines())


class TestTableInspect:

    def test_clean_table_has_no_problems(self):
        assert find_problems(table_from(FLIP_TABLE)) == []

    def test_reports_bad_direction_and_undefined_state(self):
        table = table_from("a 1 1 up a\na _ 0 r b\n")
        problems = find_problems(table)
        assert len(problems) == 2
        assert "unknown direction 'up'" in problems[0]
        assert "next state 'b' is not defined" in problems[1]
        assert "read '_'" in problems[1]

    def test_print_table_lists_every_instruction(self):
        buffer = io.StringIO()
        problems = print_table(table_from(FLIP_TABLE), console=Console(file=buffer, width=120))
        output = buffer.getvalue()
        assert problems == []
        assert "Instruction Table" in output
        assert output.count("flip") >= 3
        assert "No problems found." in output


class TestSimulateBatch:

    def test_simulate_tape(self):
        machine = simulate_tape(table_from(FLIP_TABLE), "0110")
        assert machine.outcome.configuration.tape == "1001 "

    def test_simulate_tapes_records_each_outcome(self):
        entries = simulate_tapes(table_from(FLIP_TABLE), ["01", "2", ""])
        assert [entry["outcome"] for entry in entries] == ["Halted", "Failed", "Halted"]
        assert entries[0]["final_tape"] == "10 "
        assert entries[1]["error"] == "NO_INSTRUCTION_FOR_LETTER"
        assert [entry["tape_index"] for entry in entries] == [0, 1, 2]

    def test_step_limit_leaves_machine_running(self):
        entries = simulate_tapes(table_from("a * * r a\n"), ["0"], max_steps=10)
        assert entries[0]["outcome"] == "Running"
        assert entries[0]["steps"] == 10

    def test_simulate_batch_writes_results(self, tmp_path):
        instructions = tmp_path / "flip.txt"
        instructions.write_text(FLIP_TABLE, encoding="utf-8")
        tapes = tmp_path / "tapes.txt"
        tapes.write_text("0\n11\n", encoding="utf-8")
        results = tmp_path / "results" / "batch.jsonl"

        simulate_batch(str(instructions), str(tapes), str(results))

        lines = results.read_text(encoding="utf-8").splitlines()
        entries = [json.loads(line) for line in lines]
        assert [entry["input"] for entry in entries] == ["0", "11"]
        assert [entry["final_tape"] for entry in entries] == ["1 ", "00 "]


class TestToolEntryPoints:

    def test_inspect_clean_table(self, tmp_path):
        path = tmp_path / "flip.txt"
        path.write_text(FLIP_TABLE, encoding="utf-8")
        assert table_inspect.main([str(path)]) == 0

    def test_inspect_table_with_problems(self, tmp_path):
        path = tmp_path / "broken.txt"
        path.write_text("a 1 1 up a\n", encoding="utf-8")
        assert table_inspect.main([str(path)]) == 1

    def test_inspect_missing_file(self, tmp_path, capsys):
        code = table_inspect.main([str(tmp_path / "missing.txt")])
        assert code == ErrorKind.OPENING_FILE.exit_code
        assert ErrorKind.OPENING_FILE.message in capsys.readouterr().out

    def test_batch_missing_tapes_file(self, tmp_path, capsys):
        instructions = tmp_path / "flip.txt"
        instructions.write_text(FLIP_TABLE, encoding="utf-8")
        code = simulate_batch_tool.main([
            "--instructions", str(instructions),
            "--tapes", str(tmp_path / "missing.txt"),
            "--output", str(tmp_path / "results.jsonl"),
        ])
        assert code == ErrorKind.OPENING_FILE.exit_code
        assert ErrorKind.OPENING_FILE.message in capsys.readouterr().out
        assert not (tmp_path / "results.jsonl").exists()
