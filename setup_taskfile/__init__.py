"""
setup-taskfile: install the Taskfile (go-task) binary in a CI job.
"""

__version__ = "1.0.0"
