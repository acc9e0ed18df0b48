"""Raises CancelledError while registering."""

import asyncio


async def register(api):
    api.register_command('never-seen')
    raise asyncio.CancelledError('register cancelled')
