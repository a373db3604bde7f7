"""
Entry point for running setup-taskfile as a module.

Usage: python -m setup_taskfile [VERSION] [options]
"""

from setup_taskfile.cli.parser import main

if __name__ == "__main__":
    main()
