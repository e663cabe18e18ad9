"""Filesystem-backed context providers.

WorkspaceProviders reads the local workspace through an EditorState: the
workspace root, the active file and the open documents come from the
editor, file contents and listings come from disk. Blocking file I/O runs
in the default executor so providers can be awaited side by side.
"""

import asyncio
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import structlog

from command_context.config import ContextSettings, settings

from . import messages
from .classification import detect_language, is_test_file
from .models import ContextSnippet, Selection, SnippetSource
from .providers import ContextProviders, EditorState, OpenDocument

logger = structlog.get_logger()

T = TypeVar("T")

# Directories never listed or read
SKIP_DIRS = frozenset({
    "node_modules",
    "__pycache__",
    ".git",
    "dist",
    "build",
    ".venv",
    "venv",
    ".mypy_cache",
    ".pytest_cache",
})

PACKAGE_MANIFEST = "package.json"

# Import statement patterns by language
_IMPORT_PATTERNS = {
    "python": re.compile(r"^\s*(import\s+\S|from\s+\S+\s+import\s)"),
    "javascript": re.compile(
        r"^\s*(import\b|export\s.+\sfrom\s|(const|let|var)\s.+=\s*require\()"
    ),
    "typescript": re.compile(
        r"^\s*(import\b|export\s.+\sfrom\s|(const|let|var)\s.+=\s*require\()"
    ),
    "go": re.compile(r"^\s*import\b"),
    "java": re.compile(r"^\s*import\s"),
    "kotlin": re.compile(r"^\s*import\s"),
    "rust": re.compile(r"^\s*(pub\s+)?(use|extern\s+crate)\s"),
    "c": re.compile(r"^\s*#\s*include\b"),
    "cpp": re.compile(r"^\s*#\s*include\b"),
    "csharp": re.compile(r"^\s*using\s"),
    "ruby": re.compile(r"^\s*require(_relative)?\b"),
    "php": re.compile(r"^\s*(use|require|require_once|include|include_once)\b"),
}
_GENERIC_IMPORT = re.compile(r"^\s*(import|from|use|using|#\s*include|require)\b")


def extract_imports(content: str, language: str | None) -> list[str]:
    """Return the import statement lines of a source file."""
    pattern = _IMPORT_PATTERNS.get(language or "", _GENERIC_IMPORT)
    imports: list[str] = []
    in_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if in_block:
            imports.append(line.rstrip())
            if stripped.startswith(")"):
                in_block = False
            continue
        if pattern.match(line):
            imports.append(line.rstrip())
            # Go and Python parenthesized import blocks
            if stripped.endswith("("):
                in_block = True

    return imports


def _is_skipped(path: Path) -> bool:
    return path.name.startswith(".") or path.name in SKIP_DIRS


def list_files(root: Path, recursive: bool) -> list[Path]:
    """List files under root, skipping hidden entries and vendor/build dirs."""
    if not root.is_dir():
        return []

    files: list[Path] = []
    pending = [root]
    while pending:
        directory = pending.pop()
        for entry in sorted(directory.iterdir()):
            if _is_skipped(entry):
                continue
            if entry.is_dir():
                if recursive:
                    pending.append(entry)
            elif entry.is_file():
                files.append(entry)

    return sorted(files)


def read_text(path: Path) -> str | None:
    """Read a text file, returning None for binary or unreadable files."""
    try:
        return path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        logger.debug("workspace.read_skipped", path=str(path), error=str(e))
        return None


class WorkspaceProviders(ContextProviders):
    """Context providers over the local workspace."""

    def __init__(
        self,
        editor: EditorState,
        context_settings: ContextSettings | None = None,
    ):
        """
        Initialize providers.

        Args:
            editor: Editor state supplying root, active file and open tabs
            context_settings: Limits for file reads and listings
        """
        self._editor = editor
        self._settings = context_settings or settings.context
        self._logger = logger.bind(component="workspace_providers")

    async def open_tabs(self) -> list[ContextSnippet]:
        documents = await self._editor.get_open_documents()
        return [
            messages.file_content(
                SnippetSource.OPEN_TAB,
                self._display_path(Path(doc.file_name)),
                doc.content,
                self._settings.max_file_chars,
            )
            for doc in documents
            if doc.content.strip()
        ]

    async def current_dir(self, is_unit_test: bool) -> list[ContextSnippet]:
        active = self._editor.get_active_file()
        if active is None:
            return []
        return await self._run(self._current_dir_sync, active, is_unit_test)

    async def directory(
        self, path: str, current_file: str | None = None
    ) -> list[ContextSnippet]:
        return await self._run(self._directory_sync, path, current_file)

    async def file_path(self, path: str) -> list[ContextSnippet]:
        return await self._run(self._file_path_sync, path)

    async def directory_file_list(self, root: Path, is_test: bool) -> list[ContextSnippet]:
        return await self._run(self._directory_file_list_sync, root, is_test)

    async def package_manifest(self, file_name: str) -> list[ContextSnippet]:
        return await self._run(self._package_manifest_sync, file_name)

    async def current_file_imports(self) -> list[ContextSnippet]:
        active = self._editor.get_active_file()
        if active is None:
            return []
        return await self._run(self._current_file_imports_sync, active)

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, func, *args)

    # Blocking helpers below run in the default executor.

    def _current_dir_sync(self, active: Path, is_unit_test: bool) -> list[ContextSnippet]:
        directory = self._resolve(active).parent
        return self._read_directory_sync(directory, SnippetSource.CURRENT_DIR, is_unit_test)

    def _directory_sync(self, path: str, current_file: str | None) -> list[ContextSnippet]:
        directory = self._resolve_relative(path, current_file)
        if directory is None or not directory.is_dir():
            self._logger.debug("workspace.directory_not_found", path=path)
            return []
        return self._read_directory_sync(directory, SnippetSource.DIRECTORY, False)

    def _file_path_sync(self, path: str) -> list[ContextSnippet]:
        target = self._resolve(Path(path).expanduser())
        if not target.is_file():
            self._logger.debug("workspace.file_not_found", path=path)
            return []
        content = read_text(target)
        if content is None:
            return []
        return [
            messages.file_content(
                SnippetSource.FILE,
                self._display_path(target),
                content,
                self._settings.max_file_chars,
            )
        ]

    def _package_manifest_sync(self, file_name: str) -> list[ContextSnippet]:
        manifest = self._find_upwards(self._resolve(Path(file_name)).parent, PACKAGE_MANIFEST)
        if manifest is None:
            return []
        content = read_text(manifest)
        if content is None:
            return []
        return messages.package_manifest(
            self._display_path(manifest), content, self._settings.max_file_chars
        )

    def _current_file_imports_sync(self, active: Path) -> list[ContextSnippet]:
        target = self._resolve(active)
        content = read_text(target)
        if content is None:
            return []
        imports = extract_imports(content, detect_language(target.name))
        return messages.import_statements(self._display_path(target), imports)

    def _read_directory_sync(
        self, directory: Path, source: SnippetSource, is_test: bool
    ) -> list[ContextSnippet]:
        files = list_files(directory, recursive=False)
        if is_test:
            files = [f for f in files if is_test_file(f.name)] or files

        snippets: list[ContextSnippet] = []
        for path in files[: self._settings.max_dir_files]:
            content = read_text(path)
            if not content or not content.strip():
                continue
            snippets.append(
                messages.file_content(
                    source, self._display_path(path), content, self._settings.max_file_chars
                )
            )
        return snippets

    def _directory_file_list_sync(self, root: Path, is_test: bool) -> list[ContextSnippet]:
        files = list_files(root, recursive=is_test)
        if is_test:
            files = [f for f in files if is_test_file(f.name)] or files

        entries = [f.relative_to(root).as_posix() for f in files]
        entries = entries[: self._settings.max_listing_entries]
        return messages.directory_listing(self._display_path(root), entries, is_test)

    def _resolve(self, path: Path) -> Path:
        """Resolve a workspace-relative path against the workspace root."""
        if path.is_absolute():
            return path
        root = self._editor.get_workspace_root()
        return (root / path) if root is not None else path.resolve()

    def _resolve_relative(self, path: str, current_file: str | None) -> Path | None:
        """Resolve path against the current file's directory, then the root."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate

        bases: list[Path] = []
        if current_file:
            bases.append(self._resolve(Path(current_file)).parent)
        root = self._editor.get_workspace_root()
        if root is not None:
            bases.append(root)

        for base in bases:
            resolved = base / candidate
            if resolved.is_dir():
                return resolved
        return None

    def _find_upwards(self, start: Path, name: str) -> Path | None:
        """Find name in start or its parents, stopping at the workspace root."""
        root = self._editor.get_workspace_root()
        directory = start
        while True:
            candidate = directory / name
            if candidate.is_file():
                return candidate
            if directory == root or directory.parent == directory:
                return None
            directory = directory.parent

    def _display_path(self, path: Path) -> str:
        """Workspace-relative path when possible, else the path as given."""
        root = self._editor.get_workspace_root()
        if root is not None and path.is_absolute():
            try:
                return path.relative_to(root).as_posix()
            except ValueError:
                pass
        return path.as_posix()


@dataclass
class StaticEditorState(EditorState):
    """In-memory editor state for headless use and tests.

    smart_selection defaults to selection; visible_content is returned by
    get_active_text_editor_selection_or_visible_content() when there is no
    selection. active_file defaults to the selection's file.
    """

    workspace_root: Path | None = None
    selection: Selection | None = None
    smart_selection: Selection | None = None
    visible_content: Selection | None = None
    active_file: Path | None = None
    open_documents: list[OpenDocument] = field(default_factory=list)

    def get_workspace_root(self) -> Path | None:
        return self.workspace_root

    async def get_active_text_editor_smart_selection(self) -> Selection | None:
        return self.smart_selection or self.selection

    async def get_active_text_editor_selection_or_visible_content(
        self,
    ) -> Selection | None:
        return self.selection or self.visible_content

    def get_active_file(self) -> Path | None:
        if self.active_file is not None:
            return self.active_file
        current = self.selection or self.visible_content
        return Path(current.file_name) if current is not None else None

    async def get_open_documents(self) -> list[OpenDocument]:
        return list(self.open_documents)
