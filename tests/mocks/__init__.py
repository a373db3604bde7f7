"""
Mock implementations for testing setup-taskfile components.

This package provides in-memory stand-ins for the tool cache, the release
registry and the archive fetcher, so the runner can be tested without
network or disk access.
"""

from .fakes import (
    FakeArchiveFetcher,
    FakeCacheStore,
    FakeReleaseRegistry,
    auth_failure,
)

__all__ = [
    "FakeArchiveFetcher",
    "FakeCacheStore",
    "FakeReleaseRegistry",
    "auth_failure",
]
