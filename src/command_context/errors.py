"""Error types for request building.

These are raised while resolving a command and converted into an
ErrorInteraction by the request builder, so callers never see them.
"""


class CommandContextError(Exception):
    """Base error for a request that cannot be turned into an Interaction."""

    def __init__(self, message: str, display_text: str | None = None):
        self.message = message
        self.display_text = display_text
        super().__init__(message)


class CommandNotFoundError(CommandContextError):
    """Requested command id is not registered."""

    def __init__(self, command_id: str):
        self.command_id = command_id
        super().__init__("Invalid command -- command not found.")


class EmptyPromptError(CommandContextError):
    """Instruction text or command display name is empty."""

    def __init__(self) -> None:
        super().__init__("Please enter a valid prompt for the custom command.")


class MissingSelectionError(CommandContextError):
    """Policy requires a selection but none (or an empty one) was resolved."""

    def __init__(self, command_name: str):
        self.command_name = command_name
        super().__init__(
            f"__{command_name}__ requires highlighted code. "
            "Please select some code in your editor and try again.",
            display_text=command_name,
        )
