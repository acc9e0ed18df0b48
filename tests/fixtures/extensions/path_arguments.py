"""Passes a Path and non-string values where the host expects strings."""


async def register(api):
    await api.exec('ls', ['-la', 3], cwd=api.cwd)
    await api.exec('pwd')
    api.set_session_name(7)
    api.set_label('entry-1', 5)
    api.set_label(2)
    api.set_thinking_level(1)
    api.append_entry(9, {'ok': True})
