"""Writes to the console while registering."""

import sys
import warnings


def register(api):
    print('hello from extension')
    print('second', 'line')
    print('to stderr', file=sys.stderr)
    warnings.warn('deprecated thing', DeprecationWarning)
    api.register_command('noisy')
