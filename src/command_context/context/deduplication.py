"""Deduplication of the merged snippet sequence."""

from .models import ContextSnippet


def deduplicate_snippets(snippets: list[ContextSnippet]) -> list[ContextSnippet]:
    """
    Collapse exact duplicate snippets.

    Two snippets are duplicates when they share source, file name and text.
    The LAST occurrence is kept so that later (more specific) sources keep
    their position; relative order of survivors is unchanged.

    Args:
        snippets: Snippets in assembly order

    Returns:
        Deduplicated snippets in assembly order
    """
    if not snippets:
        return []

    seen: set[tuple[str, str | None, str]] = set()
    kept_reversed: list[ContextSnippet] = []

    for snippet in reversed(snippets):
        key = _get_dedup_key(snippet)
        if key in seen:
            continue
        seen.add(key)
        kept_reversed.append(snippet)

    kept_reversed.reverse()
    return kept_reversed


def _get_dedup_key(snippet: ContextSnippet) -> tuple[str, str | None, str]:
    return (snippet.source.value, snippet.file_name, snippet.text)
