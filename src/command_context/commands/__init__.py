"""Command resolution into model-ready interactions."""

from .builder import RequestBuilder
from .models import CommandDefinition, ErrorInteraction, Interaction
from .registry import CommandRegistry, InMemoryCommandRegistry
from .runner import CommandRunner, ShellCommandRunner

__all__ = [
    "RequestBuilder",
    "CommandDefinition",
    "ErrorInteraction",
    "Interaction",
    "CommandRegistry",
    "InMemoryCommandRegistry",
    "CommandRunner",
    "ShellCommandRunner",
]
