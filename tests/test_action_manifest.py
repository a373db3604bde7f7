"""
Tests for the composite action definition in action.yml.
"""

from pathlib import Path

import pytest
import yaml

ACTION_FILE = Path(__file__).resolve().parent.parent / "action.yml"


@pytest.fixture
def action():
    """Parsed action.yml."""
    with open(ACTION_FILE, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def steps_by_id(action):
    return {step["id"]: step for step in action["runs"]["steps"]}


class TestActionInterface:
    """Test declared inputs and outputs."""

    def test_inputs(self, action):
        """Test version defaults to latest and the token to the job token."""
        inputs = action["inputs"]
        assert inputs["version"]["default"] == "latest"
        assert inputs["github-token"]["default"] == "${{ github.token }}"

    def test_outputs_come_from_setup_step(self, action):
        """Test outputs are re-exported from the setup step."""
        outputs = action["outputs"]
        assert outputs["version"]["value"] == "${{ steps.setup.outputs.version }}"
        assert outputs["cache-hit"]["value"] == "${{ steps.setup.outputs.cache-hit }}"


class TestActionInstall:
    """Test how the action installs itself."""

    def test_installs_into_venv_under_runner_temp(self, action):
        """Test pip runs inside a venv, never the system interpreter."""
        script = steps_by_id(action)["install"]["run"]

        assert 'python3 -m venv "$venv"' in script
        assert "${RUNNER_TEMP}/setup-taskfile-venv" in script
        assert "python3 -m pip" not in script
        assert '"$python" -m pip install' in script

    def test_setup_runs_with_venv_python(self, action):
        """Test the setup step uses the interpreter the install step exported."""
        step = steps_by_id(action)["setup"]

        assert "${{ steps.install.outputs.python }}" in step["run"]
        assert "-m setup_taskfile" in step["run"]
        assert step["env"]["INPUT_VERSION"] == "${{ inputs.version }}"
