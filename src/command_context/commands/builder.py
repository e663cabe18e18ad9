"""Request builder: turn a command id plus editor state into an Interaction."""

import structlog

from command_context.config import ContextSettings, settings
from command_context.context import messages
from command_context.context.assembler import ContextAssembler
from command_context.context.models import ContextSnippet
from command_context.context.policy import InclusionPolicy
from command_context.context.providers import EditorState
from command_context.context.tokens import truncate_text
from command_context.errors import (
    CommandContextError,
    CommandNotFoundError,
    EmptyPromptError,
    MissingSelectionError,
)

from .models import CommandDefinition, ContextFactory, ErrorInteraction, Interaction
from .prompts import display_text_with_file_name, model_text
from .registry import CommandRegistry
from .runner import CommandRunner

logger = structlog.get_logger()


class RequestBuilder:
    """Resolve commands into Interactions.

    build_interaction() never raises for request-level problems: unknown
    commands, empty prompts and missing selections come back as an
    ErrorInteraction carrying the message to show.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        editor: EditorState,
        assembler: ContextAssembler,
        command_runner: CommandRunner | None = None,
        context_settings: ContextSettings | None = None,
    ):
        """
        Initialize builder.

        Args:
            registry: Command lookup
            editor: Live editor state
            assembler: Context assembler used for full context
            command_runner: Runs policy commands whose output was not captured
            context_settings: Token budget for the instruction text
        """
        self._registry = registry
        self._editor = editor
        self._assembler = assembler
        self._command_runner = command_runner
        self._settings = context_settings or settings.context
        self._logger = logger.bind(component="request_builder")

    async def build_interaction(self, command_id: str) -> Interaction | ErrorInteraction:
        """
        Build the Interaction for a command.

        Args:
            command_id: Id of a registered command

        Returns:
            Interaction, or ErrorInteraction when the request is invalid
        """
        try:
            return await self._build(command_id)
        except CommandContextError as e:
            self._logger.info(
                "interaction_rejected",
                command_id=command_id,
                reason=type(e).__name__,
            )
            return ErrorInteraction(error=e.message, display_text=e.display_text)

    async def _build(self, command_id: str) -> Interaction:
        command = self._registry.get_command(command_id)
        if command is None:
            raise CommandNotFoundError(command_id)

        workspace_root = self._editor.get_workspace_root()
        policy = command.policy

        # A required selection must not fall back to the visible content
        if policy.requires_selection:
            selection = await self._editor.get_active_text_editor_smart_selection()
        else:
            selection = await self._editor.get_active_text_editor_selection_or_visible_content()

        prompt = command.prompt
        command_name = command.display_name
        if not prompt.strip() or not command_name.strip():
            raise EmptyPromptError()

        if policy.requires_selection and (selection is None or not selection.selected_text):
            raise MissingSelectionError(command_name)

        display_text = display_text_with_file_name(command_name, selection, workspace_root)
        text = model_text(
            prompt,
            selection.file_name if selection else None,
            selection.language if selection else None,
        )
        source = command.source_tag

        if selection is not None and policy.is_selection_only:
            snippets = messages.current_file_selection(selection)
            self._logger.debug("selection_only_context", command_id=command_id)
            return Interaction(
                display_text=display_text,
                text=text,
                source=source,
                context_factory=_resolved(snippets),
            )

        truncated = truncate_text(
            text, self._settings.max_human_input_tokens, self._settings.chars_per_token
        )

        async def context_factory() -> list[ContextSnippet]:
            output = await self._command_output(command, policy)
            return await self._assembler.assemble(
                truncated,
                selection,
                policy,
                command_output=output,
                workspace_root=workspace_root,
            )

        self._logger.debug(
            "interaction_built",
            command_id=command_id,
            source=source,
            truncated=len(truncated) < len(text),
        )
        return Interaction(
            display_text=display_text,
            text=truncated,
            source=source,
            context_factory=context_factory,
        )

    async def _command_output(
        self, command: CommandDefinition, policy: InclusionPolicy
    ) -> str | None:
        """Captured output of the policy's command, running it when needed."""
        if command.output is not None:
            return command.output
        if not isinstance(policy.command, str) or not policy.command.strip():
            return None
        if self._command_runner is None:
            return None
        try:
            return await self._command_runner.run(
                policy.command, self._editor.get_workspace_root()
            )
        except Exception as e:
            self._logger.warning("command_output_failed", command=policy.command, error=str(e))
            return None


def _resolved(snippets: list[ContextSnippet]) -> ContextFactory:
    async def factory() -> list[ContextSnippet]:
        return snippets

    return factory

