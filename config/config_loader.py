import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "initial_state": "smallest_key",
    "step_mode": False,
    "output": "console",
    "max_steps": 0,
    "log_runs": False,
    "output_directory": "logs/",
    "log_file_prefix": "tapesim_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "initial_state": str,
    "step_mode": bool,
    "output": str,
    "max_steps": int,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; "max_steps": true is still a type error
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be 0 (unlimited) or a positive number of steps.")
    if not config["initial_state"]:
        raise ValueError("initial_state must be a state name or 'smallest_key'.")

def load_config(path=None, echo=False):
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        # Merge defaults with overrides
        config.update(user_config)

    # Validate schema
    validate_config(config)

    if echo:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config
