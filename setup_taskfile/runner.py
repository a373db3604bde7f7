"""
Setup run orchestration.

A run walks a fixed sequence of states:

    START -> PLATFORM_RESOLVED -> VERSION_RESOLVED -> INSTALLED
          -> PATH_PUBLISHED -> VERIFIED -> SUCCEEDED

Any error moves the run to FAILED. Errors are caught once, in run(), and
reported as the step's failure message; outputs are only set on success.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from setup_taskfile.config import SetupConfig
from setup_taskfile.core.exceptions import SetupTaskfileError, UnexpectedError
from setup_taskfile.core.interfaces import ArchiveFetcher, CacheStore, ReleaseRegistry
from setup_taskfile.core.platform import PlatformTuple, resolve_platform
from setup_taskfile.core.tool_cache import ToolCache
from setup_taskfile.github.actions import RunnerEnvironment
from setup_taskfile.github.releases import GitHubReleaseRegistry
from setup_taskfile.install.fetcher import HttpArchiveFetcher
from setup_taskfile.install.installer import CachedInstaller, InstallationResult
from setup_taskfile.install.verifier import verify_installation
from setup_taskfile.install.version import resolve_version

logger = logging.getLogger(__name__)


class SetupState(Enum):
    """States of a setup run."""

    START = "start"
    PLATFORM_RESOLVED = "platform_resolved"
    VERSION_RESOLVED = "version_resolved"
    INSTALLED = "installed"
    PATH_PUBLISHED = "path_published"
    VERIFIED = "verified"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class TaskfileSetup:
    """
    Install Taskfile and publish it to the job.

    Example:
        >>> setup = TaskfileSetup(config, RunnerEnvironment(), cache, registry, fetcher)
        >>> exit_code = setup.run()
    """

    def __init__(
        self,
        config: SetupConfig,
        environment: RunnerEnvironment,
        cache: CacheStore,
        registry: ReleaseRegistry,
        fetcher: ArchiveFetcher,
        verifier: Callable[..., str] = verify_installation,
        platform_resolver: Callable[[], PlatformTuple] = resolve_platform,
    ):
        """
        Initialize a run.

        Args:
            config: Run configuration
            environment: Runner the outputs and PATH are published to
            cache: Tool cache
            registry: Release registry used for 'latest'
            fetcher: Archive downloader/extractor
            verifier: Callable running the installed binary; receives path=
            platform_resolver: Callable returning the host platform tuple
        """
        self.config = config
        self.environment = environment
        self.installer = CachedInstaller(cache, fetcher)
        self.registry = registry
        self.verifier = verifier
        self.platform_resolver = platform_resolver

        self.state = SetupState.START
        self.history: List[SetupState] = [SetupState.START]
        self.result: Optional[InstallationResult] = None

    def _transition(self, state: SetupState):
        logger.debug(f"Setup state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def execute(self) -> InstallationResult:
        """
        Run every step, raising on the first failure.

        Returns:
            InstallationResult of the run

        Raises:
            SetupTaskfileError: From whichever step failed
        """
        platform = self.platform_resolver()
        logger.info(f"Detected platform: {platform}")
        self._transition(SetupState.PLATFORM_RESOLVED)

        version = resolve_version(self.config.version, self.registry)
        self._transition(SetupState.VERSION_RESOLVED)

        result = self.installer.install(version, platform)
        self._transition(SetupState.INSTALLED)

        self.environment.add_path(result.installed_path)
        logger.info(f"Added {result.installed_path} to PATH")
        self._transition(SetupState.PATH_PUBLISHED)

        self.verifier(path=self.environment.environ.get("PATH"))
        self._transition(SetupState.VERIFIED)

        return result

    def run(self) -> int:
        """
        Run the setup and report the outcome to the runner.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        try:
            result = self.execute()
            self.environment.set_outputs(
                {
                    "version": result.version,
                    "cache-hit": str(result.cache_hit).lower(),
                }
            )
        except SetupTaskfileError as e:
            return self._fail(e)
        except Exception as e:
            logger.debug("Unclassified error during setup", exc_info=True)
            return self._fail(UnexpectedError(str(e) or "An unexpected error occurred"))

        self.result = result
        self._transition(SetupState.SUCCEEDED)
        logger.info(f"Successfully setup Taskfile v{result.version}")
        return 0

    def _fail(self, error: SetupTaskfileError) -> int:
        self._transition(SetupState.FAILED)
        self.environment.set_failed(str(error))
        return 1


def run_setup(
    config: SetupConfig, environment: Optional[RunnerEnvironment] = None
) -> int:
    """
    Run a setup with the default collaborators.

    Args:
        config: Run configuration
        environment: Runner environment (default: the current process)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    environment = environment or RunnerEnvironment()

    setup = TaskfileSetup(
        config=config,
        environment=environment,
        cache=ToolCache(config.tool_cache_dir),
        registry=GitHubReleaseRegistry(
            token=config.github_token, api_url=config.api_url
        ),
        fetcher=HttpArchiveFetcher(config.temp_dir),
    )
    return setup.run()
