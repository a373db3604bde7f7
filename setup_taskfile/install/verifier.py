"""
Smoke test of the installed Taskfile binary.

Runs `task --version` through the PATH the installer just published, which
proves both that extraction produced a working executable and that PATH
registration reaches it.
"""

import logging
import shutil
import subprocess
from typing import Optional

from setup_taskfile.core.exceptions import VerificationError
from setup_taskfile.install.locator import TOOL_NAME

logger = logging.getLogger(__name__)


def verify_installation(
    executable: str = TOOL_NAME, path: Optional[str] = None, timeout: int = 30
) -> str:
    """
    Run the installed binary with --version.

    The output is logged but not compared with the installed version.

    Args:
        executable: Command name to resolve on PATH
        path: PATH string to search (default: the process PATH)
        timeout: Seconds to wait for the process

    Returns:
        Stripped standard output of the version command

    Raises:
        VerificationError: If the binary is missing, cannot be spawned,
            times out or exits non-zero
    """
    resolved = shutil.which(executable, path=path)
    if not resolved:
        raise VerificationError(f"Unable to locate executable file: {executable}")

    logger.debug(f"Running {resolved} --version")

    try:
        result = subprocess.run(
            [resolved, "--version"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise VerificationError(
            f"'{executable} --version' timed out after {timeout}s"
        ) from e
    except OSError as e:
        raise VerificationError(f"Failed to run '{executable}': {e}") from e

    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip()
        raise VerificationError(
            f"'{executable} --version' failed with exit code {result.returncode}"
            + (f": {detail}" if detail else "")
        )

    output = result.stdout.strip()
    logger.info(f"Taskfile installed: {output}")
    return output
