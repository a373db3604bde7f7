"""
Test utilities for setup-taskfile testing.

This package provides runner-facing assertions and builders for release
archives.
"""

from .archives import build_tar_gz, build_zip, tar_gz_bytes
from .assertions import (
    assert_failed_with,
    assert_no_outputs,
    assert_output,
    assert_path_published,
    read_outputs,
    read_path_entries,
)

__all__ = [
    "build_tar_gz",
    "build_zip",
    "tar_gz_bytes",
    "assert_failed_with",
    "assert_no_outputs",
    "assert_output",
    "assert_path_published",
    "read_outputs",
    "read_path_entries",
]
