"""Collaborator interfaces consumed by the assembler and request builder.

The editor host, codebase search and workspace providers are external to
context assembly. These abstract classes define the narrow surface used;
``command_context.context.workspace`` ships filesystem-backed
implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from .models import ContextSnippet, Selection


@dataclass(frozen=True)
class OpenDocument:
    """A document open in an editor tab."""

    file_name: str
    content: str
    language: str | None = None


class EditorState(ABC):
    """Live editor state for one request."""

    @abstractmethod
    def get_workspace_root(self) -> Path | None:
        """Workspace root directory, or None when no folder is open."""

    @abstractmethod
    async def get_active_text_editor_smart_selection(self) -> Selection | None:
        """Selection widened to its enclosing syntactic block."""

    @abstractmethod
    async def get_active_text_editor_selection_or_visible_content(
        self,
    ) -> Selection | None:
        """Literal selection, or the visible editor content when nothing is selected."""

    @abstractmethod
    def get_active_file(self) -> Path | None:
        """Path of the file in the active editor."""

    @abstractmethod
    async def get_open_documents(self) -> list[OpenDocument]:
        """Documents open in editor tabs, in tab order."""


class CodebaseSearch(ABC):
    """Semantic (or keyword) search over the codebase."""

    @abstractmethod
    async def get_context_messages(self, query: str, limit: int) -> list[ContextSnippet]:
        """
        Return up to limit snippets relevant to query, best first.

        Implementations should return an empty list rather than raise, but
        the assembler tolerates either.
        """


class ContextProviders(ABC):
    """One suspending function per workspace context source.

    Implementations may raise; the assembler converts any exception into
    an empty contribution for that source.
    """

    @abstractmethod
    async def open_tabs(self) -> list[ContextSnippet]:
        """One snippet per open editor tab."""

    @abstractmethod
    async def current_dir(self, is_unit_test: bool) -> list[ContextSnippet]:
        """Files beside the active file, biased to test files in test mode."""

    @abstractmethod
    async def directory(
        self, path: str, current_file: str | None = None
    ) -> list[ContextSnippet]:
        """Files under path, resolved relative to current_file when relative."""

    @abstractmethod
    async def file_path(self, path: str) -> list[ContextSnippet]:
        """The named file's content."""

    @abstractmethod
    async def directory_file_list(self, root: Path, is_test: bool) -> list[ContextSnippet]:
        """Listing of file names under root (recursive in test mode)."""

    @abstractmethod
    async def package_manifest(self, file_name: str) -> list[ContextSnippet]:
        """Nearest package manifest above file_name."""

    @abstractmethod
    async def current_file_imports(self) -> list[ContextSnippet]:
        """Import statements of the active file."""
