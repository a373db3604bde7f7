"""
GitHub integration: the releases API and the Actions runner.
"""

from .actions import RunnerEnvironment, WorkflowCommandFormatter
from .releases import GitHubReleaseRegistry, DEFAULT_API_URL

__all__ = [
    "RunnerEnvironment",
    "WorkflowCommandFormatter",
    "GitHubReleaseRegistry",
    "DEFAULT_API_URL",
]
