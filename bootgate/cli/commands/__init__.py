"""
bootgate.cli.commands

Each module exposes register(sub) and keeps its imports lazy.
"""
__all__ = [
    "new_developer_cmd",
    "resolve_cmd",
    "env_cmd",
]
