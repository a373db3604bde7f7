"""
Tests for the GitHub Actions runner integration.
"""

import io
import logging
import os
from pathlib import Path

import pytest
from unittest.mock import patch

from setup_taskfile.core.exceptions import PathPublishError, SetupTaskfileError
from setup_taskfile.github.actions import (
    RunnerEnvironment,
    WorkflowCommandFormatter,
    escape_data,
    escape_property,
)
from tests.utils.assertions import read_outputs, read_path_entries


@pytest.fixture
def legacy_env():
    """Runner without environment files; commands go to the stream."""
    return RunnerEnvironment(environ={"PATH": "/usr/bin"}, stream=io.StringIO())


class TestEscaping:
    """Test workflow command escaping."""

    def test_escape_data(self):
        """Test message escaping."""
        assert escape_data("50%\r\nnext") == "50%25%0D%0Anext"

    def test_escape_property(self):
        """Test property values also escape ':' and ','."""
        assert escape_property("a:b,c%") == "a%3Ab%2Cc%25"


class TestInputs:
    """Test reading step inputs."""

    def test_get_input(self):
        """Test INPUT_ variables are read and stripped."""
        env = RunnerEnvironment(environ={"INPUT_VERSION": " 3.46.4 \n"})
        assert env.get_input("version") == "3.46.4"

    def test_hyphenated_input(self):
        """Test hyphens are kept in the variable name."""
        env = RunnerEnvironment(environ={"INPUT_GITHUB-TOKEN": "ghs_abc"})
        assert env.get_input("github-token") == "ghs_abc"

    def test_spaces_become_underscores(self):
        """Test spaces in input names map to underscores."""
        env = RunnerEnvironment(environ={"INPUT_MY_INPUT": "x"})
        assert env.get_input("my input") == "x"

    def test_missing_input_default(self):
        """Test default for unset or blank inputs."""
        env = RunnerEnvironment(environ={"INPUT_VERSION": "  "})
        assert env.get_input("version") == ""
        assert env.get_input("version", "latest") == "latest"

    def test_flags(self):
        """Test actions and debug detection."""
        env = RunnerEnvironment(environ={"GITHUB_ACTIONS": "true", "RUNNER_DEBUG": "1"})
        assert env.is_actions
        assert env.is_debug
        assert not RunnerEnvironment(environ={}).is_actions


class TestOutputs:
    """Test setting step outputs."""

    def test_output_file(self, runner_env):
        """Test outputs are appended to GITHUB_OUTPUT."""
        runner_env.set_output("version", "3.50.0")
        runner_env.set_output("cache-hit", "false")

        assert read_outputs(runner_env) == {"version": "3.50.0", "cache-hit": "false"}
        assert runner_env.stream.getvalue() == ""

    def test_output_file_delimiter(self, runner_env):
        """Test heredoc delimiter format."""
        runner_env.set_output("version", "3.50.0")

        content = Path(runner_env.environ["GITHUB_OUTPUT"]).read_text()
        first_line = content.splitlines()[0]
        assert first_line.startswith("version<<ghadelimiter_")
        assert content.endswith("\n")

    def test_set_outputs_single_write(self, runner_env):
        """Test several outputs are appended in one write."""
        with patch.object(
            runner_env,
            "_append_file_command",
            wraps=runner_env._append_file_command,
        ) as append:
            runner_env.set_outputs({"version": "3.50.0", "cache-hit": "false"})

        assert append.call_count == 1
        assert read_outputs(runner_env) == {"version": "3.50.0", "cache-hit": "false"}

    def test_set_outputs_all_or_nothing(self, runner_env):
        """Test a rejected value leaves earlier outputs unwritten."""
        with patch("setup_taskfile.github.actions.uuid.uuid4", return_value="fixed"):
            with pytest.raises(SetupTaskfileError, match="cache-hit"):
                runner_env.set_outputs(
                    {"version": "3.50.0", "cache-hit": "ghadelimiter_fixed"}
                )

        assert read_outputs(runner_env) == {}

    def test_legacy_set_outputs(self, legacy_env):
        """Test set-output commands for each output without GITHUB_OUTPUT."""
        legacy_env.set_outputs({"version": "3.50.0", "cache-hit": "true"})

        assert legacy_env.stream.getvalue() == (
            "::set-output name=version::3.50.0\n"
            "::set-output name=cache-hit::true\n"
        )

    def test_legacy_set_output(self, legacy_env):
        """Test set-output command without GITHUB_OUTPUT."""
        legacy_env.set_output("cache-hit", "true")

        assert legacy_env.stream.getvalue() == "::set-output name=cache-hit::true\n"


class TestAddPath:
    """Test publishing PATH entries."""

    def test_path_file(self, runner_env, tmp_path):
        """Test directories are appended to GITHUB_PATH."""
        tool_dir = tmp_path / "task" / "3.50.0" / "amd64"

        runner_env.add_path(tool_dir)

        assert read_path_entries(runner_env) == [str(tool_dir)]

    def test_process_path_updated(self, runner_env, tmp_path):
        """Test the directory is prepended to this process's PATH."""
        tool_dir = tmp_path / "bin"

        runner_env.add_path(tool_dir)

        assert runner_env.environ["PATH"] == f"{tool_dir}{os.pathsep}/usr/bin"

    def test_empty_path(self):
        """Test PATH without previous entries."""
        env = RunnerEnvironment(environ={}, stream=io.StringIO())

        env.add_path("/opt/task")

        assert env.environ["PATH"] == "/opt/task"

    def test_legacy_add_path(self, legacy_env):
        """Test add-path command without GITHUB_PATH."""
        legacy_env.add_path("/opt/task")

        assert legacy_env.stream.getvalue() == "::add-path::/opt/task\n"

    def test_unwritable_path_file(self, tmp_path):
        """Test write failures raise PathPublishError and leave PATH alone."""
        env = RunnerEnvironment(
            environ={"GITHUB_PATH": str(tmp_path / "missing" / "path"), "PATH": "/usr/bin"},
            stream=io.StringIO(),
        )

        with pytest.raises(PathPublishError, match="Failed to add /opt/task to PATH"):
            env.add_path("/opt/task")

        assert env.environ["PATH"] == "/usr/bin"


class TestSetFailed:
    """Test failing the step."""

    def test_error_annotation(self, legacy_env):
        """Test set_failed writes an error command and marks the step."""
        legacy_env.set_failed("Unsupported architecture: mips")

        assert legacy_env.failed
        assert legacy_env.stream.getvalue() == "::error::Unsupported architecture: mips\n"

    def test_multiline_message_escaped(self, legacy_env):
        """Test newlines in messages are escaped."""
        legacy_env.set_failed("line one\nline two")

        assert legacy_env.stream.getvalue() == "::error::line one%0Aline two\n"

    def test_default_stream_is_stdout(self):
        """Test stdout is used when no stream is given."""
        with patch("sys.stdout", new=io.StringIO()) as fake_stdout:
            env = RunnerEnvironment(environ={})
            env.set_failed("boom")

        assert fake_stdout.getvalue() == "::error::boom\n"


class TestWorkflowCommandFormatter:
    """Test log record formatting."""

    def _format(self, level, message):
        record = logging.LogRecord("test", level, __file__, 1, message, None, None)
        return WorkflowCommandFormatter().format(record)

    def test_info_plain(self):
        """Test INFO stays plain text."""
        assert self._format(logging.INFO, "Latest version: 3.50.0") == (
            "Latest version: 3.50.0"
        )

    def test_debug_command(self):
        """Test DEBUG becomes a debug command."""
        assert self._format(logging.DEBUG, "GET url") == "::debug::GET url"

    def test_warning_and_error(self):
        """Test WARNING and ERROR become annotations."""
        assert self._format(logging.WARNING, "retrying") == "::warning::retrying"
        assert self._format(logging.ERROR, "a\nb") == "::error::a%0Ab"
