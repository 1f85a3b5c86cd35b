"""
	Definitions for internal use of the cli.
"""

import click

from apkbuild.logger import get_verbosity


class State:
    """Internal state of the application."""

    def __init__(self):
        self._verbosity = None
        self.project_dir = None
        self.project_name = None
        self.overrides = {}
        self.device_args = None

    @property
    def verbosity(self):
        return self._verbosity

    @verbosity.setter
    def verbosity(self, verbose):
        self._verbosity = get_verbosity(verbose=verbose)


pass_state = click.make_pass_decorator(State, ensure=True)
