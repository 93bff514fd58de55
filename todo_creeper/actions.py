"""
GitHub Actions runtime plumbing.

Reads inputs from the environment, writes step outputs and emits log lines
in the workflow-command format the runner understands.
"""

import os
import uuid
from contextlib import contextmanager


def get_input(name: str, default: str = "") -> str:
    """
    Read an action input.

    The runner exposes inputs as INPUT_<NAME>, upper-cased with spaces
    replaced by underscores (dashes are kept).

    Args:
        name: Input name as declared in action.yml
        default: Value used when the input is unset or blank

    Returns:
        The trimmed input value
    """
    env_name = "INPUT_" + name.replace(" ", "_").upper()
    value = os.environ.get(env_name, "").strip()
    return value or default


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    """Write an informational line to the log."""
    print(message)


def warning(message: str) -> None:
    """Write a warning annotation to the log."""
    print(f"::warning::{_escape_data(message)}")


def error(message: str) -> None:
    """Write an error annotation to the log."""
    print(f"::error::{_escape_data(message)}")


def set_failed(message: str) -> int:
    """
    Report the step as failed.

    Returns:
        The exit code the process should end with
    """
    error(message)
    return 1


def set_output(name: str, value) -> None:
    """
    Set a step output.

    Appends to the file named by GITHUB_OUTPUT. Outside the runner the
    output is printed instead.
    """
    value = str(value)
    output_file = os.environ.get("GITHUB_OUTPUT")

    if not output_file:
        print(f"{name}={value}")
        return

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        line = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        line = f"{name}={value}\n"

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(line)


@contextmanager
def stop_commands():
    """
    Stop the runner from processing workflow commands inside the block.

    Used while echoing scanned source text, which may itself look like a
    command (e.g. a C++ line starting with "::").
    """
    token = f"todo-creeper-{uuid.uuid4().hex}"
    print(f"::stop-commands::{token}")
    try:
        yield token
    finally:
        print(f"::{token}::")
