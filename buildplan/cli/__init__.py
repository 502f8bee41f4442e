"""Command-line interface for buildplan.

Example Usage
-------------
    # From command line:
    buildplan --help
    buildplan compile --config buildplan.yaml --mode production
    buildplan show -c buildplan.yaml
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
