"""Commands – Command base class, @command decorator, registrar."""
from comas.commands.command import Command
from comas.commands.registrar import (
    DEFAULT_GROUP,
    CommandRegistrar,
    clear_command_registry,
    command,
    make_dispatcher,
    registered_commands,
)

__all__ = [
    "DEFAULT_GROUP",
    "Command",
    "CommandRegistrar",
    "clear_command_registry",
    "command",
    "make_dispatcher",
    "registered_commands",
]
