"""
GitHub Actions runner integration.

Reads step inputs and talks back to the runner through environment files
(GITHUB_OUTPUT, GITHUB_PATH) or, when those are absent, workflow commands
written to stdout.

Usage:
    from setup_taskfile.github.actions import RunnerEnvironment

    env = RunnerEnvironment()
    version = env.get_input("version") or "latest"
    env.add_path(Path("/opt/hostedtoolcache/task/3.46.4/amd64"))
    env.set_output("version", "3.46.4")
"""

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Mapping, MutableMapping, Optional, TextIO, Union

from setup_taskfile.core.exceptions import PathPublishError, SetupTaskfileError

logger = logging.getLogger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class RunnerEnvironment:
    """
    Access to the runner's inputs, outputs and PATH.

    Attributes:
        environ: Environment mapping (os.environ by default)
        stream: Stream workflow commands are written to (stdout by default)
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.stream = stream or sys.stdout
        self.failed = False

    @property
    def is_actions(self) -> bool:
        """True when running inside a GitHub Actions job."""
        return self.environ.get("GITHUB_ACTIONS") == "true"

    @property
    def is_debug(self) -> bool:
        """True when step debug logging is enabled."""
        return self.environ.get("RUNNER_DEBUG") == "1"

    def get_input(self, name: str, default: str = "") -> str:
        """
        Read a step input.

        Args:
            name: Input name as declared in action.yml (e.g., "github-token")
            default: Value returned when the input is unset or blank

        Returns:
            Stripped input value
        """
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self.environ.get(key, "").strip()
        return value or default

    def set_output(self, name: str, value: str):
        """Set a step output."""
        self.set_outputs({name: value})

    def set_outputs(self, outputs: Mapping[str, str]):
        """
        Set several step outputs with a single write to GITHUB_OUTPUT.

        Either all outputs reach the file or none do.

        Raises:
            SetupTaskfileError: If a name or value contains the delimiter
        """
        output_file = self.environ.get("GITHUB_OUTPUT")
        if output_file:
            records = []
            for name, value in outputs.items():
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                if delimiter in name or delimiter in value:
                    raise SetupTaskfileError(
                        f"Unexpected input: output '{name}' contains the delimiter"
                    )
                records.append(f"{name}<<{delimiter}\n{value}\n{delimiter}")
            self._append_file_command(output_file, "\n".join(records))
        else:
            for name, value in outputs.items():
                self._issue_command("set-output", value, name=name)

        for name, value in outputs.items():
            logger.debug(f"Set output {name}={value}")

    def add_path(self, directory: Union[str, Path]):
        """
        Prepend a directory to PATH for this process and later steps.

        Raises:
            PathPublishError: If the runner's path file cannot be written
        """
        directory = str(directory)
        path_file = self.environ.get("GITHUB_PATH")

        try:
            if path_file:
                self._append_file_command(path_file, directory)
            else:
                self._issue_command("add-path", directory)
        except OSError as e:
            raise PathPublishError(f"Failed to add {directory} to PATH: {e}") from e

        current = self.environ.get("PATH", "")
        self.environ["PATH"] = (
            f"{directory}{os.pathsep}{current}" if current else directory
        )

    def set_failed(self, message: str):
        """Mark the step as failed with an error annotation."""
        self.failed = True
        self._issue_command("error", message)

    def _append_file_command(self, path: str, message: str):
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{message}\n")

    def _issue_command(self, command: str, message: str, **properties: str):
        props = ",".join(f"{k}={escape_property(v)}" for k, v in properties.items())
        head = f"::{command} {props}" if props else f"::{command}"
        self.stream.write(f"{head}::{escape_data(message)}\n")
        self.stream.flush()


class WorkflowCommandFormatter(logging.Formatter):
    """
    Render log records as workflow commands the runner understands.

    DEBUG records become ::debug:: lines (shown only with step debug
    logging), WARNING and ERROR become annotations, INFO stays plain.
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


__all__ = [
    "RunnerEnvironment",
    "WorkflowCommandFormatter",
    "escape_data",
    "escape_property",
]
