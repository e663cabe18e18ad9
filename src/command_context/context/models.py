"""Data models for context assembly."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any


class SnippetSource(str, Enum):
    """Provenance tag of a context snippet."""

    CODEBASE = "codebase"
    OPEN_TAB = "open_tab"
    CURRENT_DIR = "current_dir"
    DIRECTORY = "directory"
    FILE = "file"
    DIRECTORY_LIST = "directory_list"
    PACKAGE_MANIFEST = "package_manifest"
    IMPORTS = "imports"
    SELECTION = "selection"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Selection:
    """A captured span of source text in the active editor.

    file_name is the path of the file as reported by the editor (absolute
    or workspace-relative). start_line/end_line are 1-based and inclusive
    when known.
    """

    file_name: str
    selected_text: str
    preceding_text: str = ""
    following_text: str = ""
    language: str | None = None
    start_line: int | None = None
    end_line: int | None = None

    @property
    def display_name(self) -> str:
        return PurePath(self.file_name).name


@dataclass(frozen=True)
class ContextSnippet:
    """A single unit of retrieved context from one provider."""

    source: SnippetSource
    text: str
    file_name: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __hash__(self) -> int:
        """Hash on provenance, file and payload (metadata is not compared)."""
        return hash((self.source, self.file_name, self.text))


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider call.

    A failed provider carries its error string; the assembler treats it as
    an empty contribution via snippets_or_empty().
    """

    provider: str
    snippets: tuple[ContextSnippet, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, provider: str, snippets: "list[ContextSnippet] | tuple[ContextSnippet, ...]"
    ) -> "ProviderResult":
        return cls(provider=provider, snippets=tuple(snippets))

    @classmethod
    def failure(cls, provider: str, error: BaseException | str) -> "ProviderResult":
        return cls(provider=provider, error=str(error) or type(error).__name__)

    def snippets_or_empty(self) -> list[ContextSnippet]:
        """Snippets on success, empty list on failure."""
        if not self.ok:
            return []
        return list(self.snippets)
