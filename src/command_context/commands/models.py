"""Command definitions and the interactions built from them."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from command_context.context.models import ContextSnippet
from command_context.context.policy import DEFAULT_POLICY, InclusionPolicy


class CommandDefinition(BaseModel):
    """A predefined or user-authored command.

    ``context`` accepts the loosely-typed mapping hosts store (including a
    captured ``output`` key); it is validated into an InclusionPolicy once,
    when the definition is built.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt: str = ""
    slash_command: str | None = Field(default=None, alias="slashCommand")
    description: str | None = None
    type: Literal["default", "custom"] = "custom"
    context: InclusionPolicy | None = None
    output: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_context_output(cls, data: Any) -> Any:
        """Move ``context.output`` to the top-level ``output`` field."""
        if isinstance(data, dict):
            context = data.get("context")
            if isinstance(context, dict) and "output" in context:
                context = dict(context)
                data = {**data, "context": context}
                output = context.pop("output")
                data.setdefault("output", output)
        return data

    @property
    def policy(self) -> InclusionPolicy:
        return self.context if self.context is not None else DEFAULT_POLICY

    @property
    def display_name(self) -> str:
        """Name shown to the user: slash command, description, then prompt."""
        return self.slash_command or self.description or self.prompt

    @property
    def source_tag(self) -> str:
        """Provenance tag used to group interactions."""
        if self.type == "default" and self.slash_command:
            return self.slash_command.replace("/", "", 1)
        return "custom"


ContextFactory = Callable[[], Awaitable[list[ContextSnippet]]]


@dataclass
class Interaction:
    """The unit of work handed to the chat transcript.

    Context is resolved on the first call to get_context_snippets() and
    cached on the instance.
    """

    display_text: str
    text: str
    source: str
    context_factory: ContextFactory = field(repr=False)
    _resolved: list[ContextSnippet] | None = field(default=None, init=False, repr=False)

    is_error = False

    async def get_context_snippets(self) -> list[ContextSnippet]:
        if self._resolved is None:
            self._resolved = list(await self.context_factory())
        return list(self._resolved)


@dataclass(frozen=True)
class ErrorInteraction:
    """A request that could not be built, ready to render as-is."""

    error: str
    display_text: str | None = None

    is_error = True

    async def get_context_snippets(self) -> list[ContextSnippet]:
        return []
