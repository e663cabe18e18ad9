"""Host wiring: build a ready-to-use RequestBuilder from settings.

Usage:
    from command_context.bootstrap import create_request_builder

    builder = create_request_builder(editor, registry)
    interaction = await builder.build_interaction("explain")
"""

import structlog

from command_context.commands.builder import RequestBuilder
from command_context.commands.registry import CommandRegistry
from command_context.commands.runner import CommandRunner, ShellCommandRunner
from command_context.config import Settings, settings
from command_context.context.assembler import ContextAssembler
from command_context.context.providers import CodebaseSearch, ContextProviders, EditorState
from command_context.context.search import KeywordCodebaseSearch
from command_context.context.workspace import WorkspaceProviders
from command_context.logging import configure_logging

logger = structlog.get_logger()


def create_request_builder(
    editor: EditorState,
    registry: CommandRegistry,
    app_settings: Settings | None = None,
    providers: ContextProviders | None = None,
    codebase_search: CodebaseSearch | None = None,
    command_runner: CommandRunner | None = None,
    configure_logs: bool = True,
) -> RequestBuilder:
    """
    Configure logging and assemble the default collaborators.

    Collaborators not passed in are built from the settings: filesystem
    providers over the editor's workspace, keyword codebase search rooted
    at the workspace (skipped when the editor has no root) and a shell
    command runner.

    Args:
        editor: Live editor state
        registry: Command lookup
        app_settings: Settings to use; defaults to the module singleton
        providers: Workspace context providers
        codebase_search: Codebase search collaborator
        command_runner: Runner for policy commands
        configure_logs: Install the structlog handler from app_settings.logging

    Returns:
        RequestBuilder wired to the collaborators
    """
    config = app_settings or settings
    if configure_logs:
        configure_logging(config.logging)

    context_settings = config.context
    root = editor.get_workspace_root()

    if providers is None:
        providers = WorkspaceProviders(editor, context_settings)
    if codebase_search is None and root is not None:
        codebase_search = KeywordCodebaseSearch(root, context_settings)
    if command_runner is None:
        command_runner = ShellCommandRunner(context_settings.command_timeout_seconds)

    assembler = ContextAssembler(providers, codebase_search, context_settings)

    logger.info(
        "request_builder.created",
        workspace_root=str(root) if root is not None else None,
        codebase_search=type(codebase_search).__name__ if codebase_search else None,
        max_snippets=context_settings.max_snippets,
    )
    return RequestBuilder(registry, editor, assembler, command_runner, context_settings)
