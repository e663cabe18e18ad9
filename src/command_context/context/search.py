"""Local keyword search over the workspace.

A lightweight CodebaseSearch for hosts without an embeddings index: files
are ranked by how often the query's keywords occur in them.
"""

import asyncio
import re
from pathlib import Path

import structlog

from command_context.config import ContextSettings, settings

from . import messages
from .classification import EXTENSION_MAP, get_file_extension
from .models import ContextSnippet, SnippetSource
from .providers import CodebaseSearch
from .workspace import list_files, read_text

logger = structlog.get_logger()

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]{2,}")

STOPWORDS = frozenset({
    "the", "and", "for", "with", "this", "that", "from", "into", "are",
    "was", "were", "has", "have", "how", "what", "why", "when", "where",
    "which", "does", "code", "file", "files", "please", "can", "you",
    "use", "using", "make", "about", "explain", "write", "add", "all",
})


def extract_keywords(query: str) -> list[str]:
    """Lowercased, de-duplicated keywords of a query, in first-seen order."""
    keywords: list[str] = []
    for word in _WORD.findall(query):
        lowered = word.lower()
        if lowered in STOPWORDS or lowered in keywords:
            continue
        keywords.append(lowered)
    return keywords


def score_content(content: str, keywords: list[str]) -> int:
    lowered = content.lower()
    return sum(lowered.count(keyword) for keyword in keywords)


class KeywordCodebaseSearch(CodebaseSearch):
    """Rank workspace source files by keyword hits."""

    def __init__(
        self,
        root: Path,
        context_settings: ContextSettings | None = None,
        max_files: int = 2000,
    ):
        """
        Initialize search.

        Args:
            root: Workspace root to search
            context_settings: Limits for snippet payloads
            max_files: Maximum files scanned per query
        """
        self._root = root
        self._settings = context_settings or settings.context
        self._max_files = max_files
        self._logger = logger.bind(component="keyword_codebase_search")

    async def get_context_messages(self, query: str, limit: int) -> list[ContextSnippet]:
        keywords = extract_keywords(query)
        if not keywords or limit <= 0:
            return []

        try:
            loop = asyncio.get_event_loop()
            return await loop.run_in_executor(None, self._search_sync, keywords, limit)
        except OSError as e:
            self._logger.warning("codebase_search_failed", root=str(self._root), error=str(e))
            return []

    def _search_sync(self, keywords: list[str], limit: int) -> list[ContextSnippet]:
        candidates = [
            path
            for path in list_files(self._root, recursive=True)
            if get_file_extension(path.name).lower() in EXTENSION_MAP
        ][: self._max_files]

        scored: list[tuple[int, str, str]] = []
        for path in candidates:
            content = read_text(path)
            if not content:
                continue
            score = score_content(content, keywords)
            if score > 0:
                scored.append((score, path.relative_to(self._root).as_posix(), content))

        # Highest score first; ties broken by path for determinism
        scored.sort(key=lambda item: (-item[0], item[1]))

        results: list[ContextSnippet] = []
        for score, rel_path, content in scored[:limit]:
            snippet = messages.file_content(
                SnippetSource.CODEBASE, rel_path, content, self._settings.max_file_chars
            )
            snippet.metadata["score"] = score
            results.append(snippet)

        self._logger.debug(
            "codebase_search_complete",
            keywords=keywords,
            candidates=len(candidates),
            results=len(results),
        )
        return results
