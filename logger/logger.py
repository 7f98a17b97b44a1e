import json
import os
from datetime import datetime, timezone


def outcome_entry(machine, **extra):
    """Summarise a finished (or step-limited) machine as a JSON-ready dict."""
    outcome = machine.outcome
    configuration = outcome.configuration
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "outcome": type(outcome).__name__,
        "error": outcome.kind.name,
        "steps": machine.steps,
        "state": configuration.state if configuration else None,
        "final_tape": configuration.tape if configuration else None,
        "head": configuration.head if configuration else None,
    }
    entry.update(extra)
    return entry


class JSONLogger:
    """Run records as JSON lines, one file per UTC day."""

    def __init__(self, output_directory="logs/", log_file_prefix="tapesim_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"
        return os.path.join(self.output_directory, filename)

    def log(self, entry: dict):
        self.rotate()
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_run(self, machine, **extra):
        """Log the outcome of a machine together with where its inputs came from."""
        entry = outcome_entry(machine, **extra)
        self.log(entry)
        return entry

    def rotate(self):
        """Start a new log file if the UTC day has changed."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()
