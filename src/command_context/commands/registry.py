"""Command lookup."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import structlog

from .models import CommandDefinition

logger = structlog.get_logger()


class CommandRegistry(ABC):
    """Resolves command ids to definitions."""

    @abstractmethod
    def get_command(self, command_id: str) -> CommandDefinition | None:
        """Return the definition for command_id, or None when unknown."""


class InMemoryCommandRegistry(CommandRegistry):
    """Registry backed by a dict.

    Definitions may be given as CommandDefinition instances or as raw
    mappings; raw mappings are validated on registration, so an invalid
    context policy is reported here rather than when the command runs.
    """

    def __init__(
        self,
        commands: Mapping[str, CommandDefinition | Mapping[str, Any]] | None = None,
    ):
        self._commands: dict[str, CommandDefinition] = {}
        for command_id, definition in (commands or {}).items():
            self.register(command_id, definition)

    def register(
        self,
        command_id: str,
        definition: CommandDefinition | Mapping[str, Any],
    ) -> CommandDefinition:
        """
        Register a command.

        Args:
            command_id: Id used to look the command up
            definition: Definition or raw mapping

        Returns:
            The validated definition

        Raises:
            pydantic.ValidationError: If a raw mapping is invalid
        """
        if not isinstance(definition, CommandDefinition):
            definition = CommandDefinition.model_validate(dict(definition))
        self._commands[command_id] = definition
        logger.debug("command_registered", command_id=command_id, type=definition.type)
        return definition

    def get_command(self, command_id: str) -> CommandDefinition | None:
        return self._commands.get(command_id)

    def command_ids(self) -> list[str]:
        return list(self._commands)
