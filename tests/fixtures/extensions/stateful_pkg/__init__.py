"""Package bundle whose submodule keeps state across register() calls."""

from .state import CALLS


def register(api):
    CALLS.append(api.cwd)
    api.register_command(f'cmd-{len(CALLS)}')
