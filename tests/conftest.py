"""
Pytest configuration and shared fixtures for setup-taskfile tests.
"""

import io
from pathlib import Path

import pytest

from setup_taskfile.config import SetupConfig
from setup_taskfile.core.platform import PlatformTuple
from setup_taskfile.github.actions import RunnerEnvironment


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def linux_amd64() -> PlatformTuple:
    """Platform tuple for a Linux x86-64 host."""
    return PlatformTuple("linux", "amd64", "tar.gz")


@pytest.fixture
def windows_amd64() -> PlatformTuple:
    """Platform tuple for a Windows x86-64 host."""
    return PlatformTuple("windows", "amd64", "zip")


@pytest.fixture
def runner_env(tmp_path: Path) -> RunnerEnvironment:
    """
    Runner environment backed by a plain dict and in-memory stdout.

    GITHUB_OUTPUT and GITHUB_PATH point at empty files under tmp_path.
    """
    runner_dir = tmp_path / "runner"
    runner_dir.mkdir()
    output_file = runner_dir / "github_output"
    path_file = runner_dir / "github_path"
    output_file.touch()
    path_file.touch()

    environ = {
        "GITHUB_ACTIONS": "true",
        "GITHUB_OUTPUT": str(output_file),
        "GITHUB_PATH": str(path_file),
        "PATH": "/usr/bin",
    }
    return RunnerEnvironment(environ=environ, stream=io.StringIO())


@pytest.fixture
def setup_config(tmp_path: Path) -> SetupConfig:
    """Configuration with tool cache and temp dir under tmp_path."""
    return SetupConfig(
        version="latest",
        github_token="ghs_test",
        tool_cache_dir=tmp_path / "toolcache",
        temp_dir=tmp_path / "temp",
    )


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home
