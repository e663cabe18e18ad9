"""Context assembler for gathering and bounding multi-source context."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from command_context.config import ContextSettings, settings

from . import messages
from .classification import is_unit_test_request, needs_package_manifest
from .deduplication import deduplicate_snippets
from .models import ContextSnippet, ProviderResult, Selection
from .policy import InclusionPolicy
from .providers import CodebaseSearch, ContextProviders

logger = structlog.get_logger()


@dataclass(frozen=True)
class AssemblyRequest:
    """Inputs of one assembly, shared by every step predicate."""

    text: str
    policy: InclusionPolicy
    selection: Selection | None = None
    command_output: str | None = None
    workspace_root: Path | None = None

    @property
    def is_unit_test(self) -> bool:
        return is_unit_test_request(self.text)

    @property
    def selection_file_name(self) -> str | None:
        return self.selection.file_name if self.selection else None


@dataclass(frozen=True)
class AssemblyStep:
    """One (predicate, provider call) entry of the assembly order."""

    name: str
    applies: Callable[[AssemblyRequest], bool]
    fetch: Callable[[AssemblyRequest], Awaitable[list[ContextSnippet]]]


class ContextAssembler:
    """Assemble context snippets from the sources an inclusion policy enables.

    Snippets are concatenated in a fixed order:

    1. codebase search
    2. open tabs
    3. current directory
    4. directory at policy.directory_path
    5. file at policy.file_path
    6. unit-test fallback (root listing, package manifest, imports), only
       for unit-test requests when steps 1-5 produced nothing
    7. current file selection
    8. command output

    and only the last ``max_snippets`` survive. Providers within a group run
    concurrently; a provider that raises contributes nothing.
    """

    def __init__(
        self,
        providers: ContextProviders,
        codebase_search: CodebaseSearch | None = None,
        context_settings: ContextSettings | None = None,
    ):
        """
        Initialize assembler.

        Args:
            providers: Workspace context providers
            codebase_search: Codebase search collaborator (codebase step is
                skipped when None)
            context_settings: Result budgets; defaults to the global settings
        """
        self._providers = providers
        self._codebase_search = codebase_search
        self._settings = context_settings or settings.context
        self._logger = logger.bind(component="context_assembler")

    @property
    def primary_steps(self) -> tuple[AssemblyStep, ...]:
        return (
            AssemblyStep(
                "codebase",
                lambda r: bool(r.policy.codebase) and self._codebase_search is not None,
                self._fetch_codebase,
            ),
            AssemblyStep(
                "open_tabs",
                lambda r: bool(r.policy.open_tabs),
                lambda r: self._providers.open_tabs(),
            ),
            AssemblyStep(
                "current_dir",
                lambda r: bool(r.policy.current_dir),
                lambda r: self._providers.current_dir(r.is_unit_test),
            ),
            AssemblyStep(
                "directory_path",
                lambda r: bool(r.policy.directory_path),
                lambda r: self._providers.directory(
                    r.policy.directory_path or "", r.selection_file_name
                ),
            ),
            AssemblyStep(
                "file_path",
                lambda r: bool(r.policy.file_path),
                lambda r: self._providers.file_path(r.policy.file_path or ""),
            ),
        )

    @property
    def unit_test_steps(self) -> tuple[AssemblyStep, ...]:
        return (
            AssemblyStep(
                "workspace_listing",
                lambda r: r.workspace_root is not None,
                lambda r: self._providers.directory_file_list(
                    r.workspace_root, True  # type: ignore[arg-type]
                ),
            ),
            AssemblyStep(
                "package_manifest",
                lambda r: needs_package_manifest(r.selection_file_name or ""),
                lambda r: self._providers.package_manifest(r.selection_file_name or ""),
            ),
            AssemblyStep(
                "imports",
                lambda r: bool(r.selection_file_name),
                lambda r: self._providers.current_file_imports(),
            ),
        )

    @property
    def trailing_steps(self) -> tuple[AssemblyStep, ...]:
        return (
            AssemblyStep(
                "selection",
                lambda r: r.policy.include_selection and r.selection is not None,
                self._fetch_selection,
            ),
            AssemblyStep(
                "command_output",
                lambda r: r.policy.include_command_output and bool(r.command_output),
                self._fetch_command_output,
            ),
        )

    async def assemble(
        self,
        text: str,
        selection: Selection | None,
        policy: InclusionPolicy,
        command_output: str | None = None,
        workspace_root: Path | None = None,
    ) -> list[ContextSnippet]:
        """
        Assemble context for an instruction.

        Never raises for provider failures: each failing provider is logged
        and treated as having produced no snippets.

        Args:
            text: Instruction text (already truncated)
            selection: Current selection, if any
            policy: Inclusion policy of the command
            command_output: Captured command output, if any
            workspace_root: Workspace root used by the unit-test fallback

        Returns:
            Snippets in assembly order, bounded to the last max_snippets
        """
        request = AssemblyRequest(
            text=text,
            policy=policy,
            selection=selection,
            command_output=command_output,
            workspace_root=workspace_root,
        )

        if policy.excludes_all:
            self._logger.debug("context_excluded")
            return []

        self._logger.info(
            "assembling_context",
            policy=sorted(policy.specified_fields),
            has_selection=selection is not None,
            is_unit_test=request.is_unit_test,
        )

        snippets = await self.run_steps(self.primary_steps, request)

        if self.should_use_unit_test_fallback(request, snippets):
            snippets.extend(await self.run_steps(self.unit_test_steps, request))

        snippets.extend(await self.run_steps(self.trailing_steps, request))

        return self._bound(snippets)

    def should_use_unit_test_fallback(
        self, request: AssemblyRequest, gathered: Sequence[ContextSnippet]
    ) -> bool:
        return request.is_unit_test and not gathered and bool(request.selection_file_name)

    async def run_steps(
        self,
        steps: Sequence[AssemblyStep],
        request: AssemblyRequest,
    ) -> list[ContextSnippet]:
        """
        Run the applicable steps concurrently and concatenate in step order.

        Args:
            steps: Steps in precedence order
            request: Assembly inputs

        Returns:
            Snippets of successful steps, in step order
        """
        applicable = [step for step in steps if step.applies(request)]
        if not applicable:
            return []

        results = await asyncio.gather(
            *(self._invoke(step, request) for step in applicable),
            return_exceptions=True,
        )

        snippets: list[ContextSnippet] = []
        for step, result in zip(applicable, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                provider_result = ProviderResult.failure(step.name, result)
                self._logger.warning(
                    "provider_failed",
                    provider=step.name,
                    error=provider_result.error,
                )
            else:
                provider_result = ProviderResult.success(step.name, result)

            # Failed providers contribute an empty sequence
            snippets.extend(provider_result.snippets_or_empty())

        return snippets

    async def _invoke(
        self, step: AssemblyStep, request: AssemblyRequest
    ) -> list[ContextSnippet]:
        return list(await step.fetch(request))

    async def _fetch_codebase(self, request: AssemblyRequest) -> list[ContextSnippet]:
        if self._codebase_search is None:
            return []
        return await self._codebase_search.get_context_messages(
            request.text, self._settings.codebase_result_limit
        )

    async def _fetch_selection(self, request: AssemblyRequest) -> list[ContextSnippet]:
        if request.selection is None:
            return []
        return messages.current_file_selection(request.selection)

    async def _fetch_command_output(self, request: AssemblyRequest) -> list[ContextSnippet]:
        return messages.terminal_output(request.command_output or "")

    def _bound(self, snippets: list[ContextSnippet]) -> list[ContextSnippet]:
        """Keep the last max_snippets snippets, collapsing duplicates first when enabled."""
        original_count = len(snippets)
        if self._settings.deduplicate:
            snippets = deduplicate_snippets(snippets)

        limit = self._settings.max_snippets
        bounded = snippets[-limit:] if limit > 0 else []

        self._logger.info(
            "context_assembled",
            gathered=original_count,
            deduplicated=len(snippets),
            returned=len(bounded),
            limit=limit,
        )
        return bounded
