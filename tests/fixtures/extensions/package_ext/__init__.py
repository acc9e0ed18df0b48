"""Package-style bundle using a relative import."""

from .helpers import COMMAND_NAME


def register(api):
    api.register_command(COMMAND_NAME, description='From a package bundle')
