"""
setup-taskfile CLI argument parser.

This module implements the command-line entry point used by the GitHub
Action and for local runs.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from setup_taskfile import __version__
from setup_taskfile.config import load_config
from setup_taskfile.core.exceptions import ConfigurationError
from setup_taskfile.github.actions import RunnerEnvironment, WorkflowCommandFormatter
from setup_taskfile.runner import run_setup

logger = logging.getLogger(__name__)


class CLI:
    """setup-taskfile command-line interface."""

    def __init__(self, environment: Optional[RunnerEnvironment] = None):
        """
        Initialize CLI with argument parser.

        Args:
            environment: Runner environment (default: the current process)
        """
        self.environment = environment or RunnerEnvironment()
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="setup-taskfile",
            description="Install the Taskfile (go-task) binary and add it to PATH",
            epilog=(
                "Inside GitHub Actions the version and github-token inputs are "
                "read from INPUT_VERSION and INPUT_GITHUB-TOKEN."
            ),
        )

        parser.add_argument(
            "task_version",
            nargs="?",
            metavar="VERSION",
            help="Taskfile version to install, e.g. 3.46.4, v3.46.4 or latest "
            "[default: latest]",
        )
        parser.add_argument(
            "--github-token",
            metavar="TOKEN",
            help="Token for the GitHub releases API [default: $GITHUB_TOKEN]",
        )
        parser.add_argument(
            "--tool-cache",
            type=Path,
            metavar="DIR",
            help="Tool cache root [default: $RUNNER_TOOL_CACHE]",
        )
        parser.add_argument(
            "--temp-dir",
            type=Path,
            metavar="DIR",
            help="Scratch directory for downloads [default: $RUNNER_TEMP]",
        )
        parser.add_argument(
            "--api-url",
            metavar="URL",
            help="GitHub API URL [default: $GITHUB_API_URL]",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./.setup-taskfile.yaml)",
        )
        parser.add_argument(
            "--version", action="version", version=f"setup-taskfile {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            config = load_config(parsed_args, self.environment)
        except ConfigurationError as e:
            self.environment.set_failed(str(e))
            return 1

        try:
            return run_setup(config, self.environment)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Step debug logging (RUNNER_DEBUG=1) counts as --verbose. Inside
        GitHub Actions records are rendered as workflow commands.
        """
        if args.verbose or self.environment.is_debug:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        handler = logging.StreamHandler(self.environment.stream)
        if self.environment.is_actions:
            handler.setFormatter(WorkflowCommandFormatter())
        else:
            handler.setFormatter(logging.Formatter(format_str))

        logging.basicConfig(
            level=level,
            handlers=[handler],
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
