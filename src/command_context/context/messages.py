"""Snippet builders shared by the providers.

Every function here is pure: it takes already-retrieved text and wraps it in
a ContextSnippet with a short framing sentence the model can anchor on.
"""

from collections.abc import Sequence
from typing import Any

from .classification import detect_language, language_display_name
from .models import ContextSnippet, Selection, SnippetSource
from .tokens import truncate_to_chars


def _fenced(text: str, language: str | None) -> str:
    return f"```{language or ''}\n{text}\n```"


def current_file_selection(selection: Selection) -> list[ContextSnippet]:
    """Snippet for the text selected in the active editor."""
    language = selection.language or detect_language(selection.file_name)
    parts = [
        f"Here is the selected {language_display_name(language, selection.file_name)} "
        f"code from file `{selection.file_name}`:"
    ]
    if selection.preceding_text:
        parts.append("<preceding>\n" + selection.preceding_text + "\n</preceding>")
    parts.append("<selected>\n" + selection.selected_text + "\n</selected>")
    if selection.following_text:
        parts.append("<following>\n" + selection.following_text + "\n</following>")

    metadata: dict[str, Any] = {"language": language}
    if selection.start_line is not None:
        metadata["start_line"] = selection.start_line
        metadata["end_line"] = selection.end_line

    return [
        ContextSnippet(
            source=SnippetSource.SELECTION,
            text="\n".join(parts),
            file_name=selection.file_name,
            metadata=metadata,
        )
    ]


def terminal_output(output: str) -> list[ContextSnippet]:
    """Snippet for captured command output (empty output yields nothing)."""
    if not output.strip():
        return []
    return [
        ContextSnippet(
            source=SnippetSource.TERMINAL,
            text=f"Here is the output returned from the terminal:\n<output>\n{output}\n</output>",
        )
    ]


def file_content(
    source: SnippetSource,
    file_name: str,
    content: str,
    max_chars: int,
) -> ContextSnippet:
    """Snippet carrying (a capped copy of) one file's content."""
    language = detect_language(file_name)
    capped = truncate_to_chars(content, max_chars)
    return ContextSnippet(
        source=source,
        text=f"Here is the content of file `{file_name}`:\n{_fenced(capped, language)}",
        file_name=file_name,
        metadata={"language": language, "truncated": capped != content},
    )


def directory_listing(
    directory: str,
    entries: Sequence[str],
    is_test: bool = False,
) -> list[ContextSnippet]:
    """Snippet listing file names under a directory."""
    if not entries:
        return []
    label = "test files" if is_test else "files"
    listing = "\n".join(entries)
    return [
        ContextSnippet(
            source=SnippetSource.DIRECTORY_LIST,
            text=f"Here is a list of {label} from the directory `{directory}`:\n{listing}",
            file_name=directory,
            metadata={"entry_count": len(entries), "test_mode": is_test},
        )
    ]


def package_manifest(manifest_path: str, content: str, max_chars: int) -> list[ContextSnippet]:
    capped = truncate_to_chars(content, max_chars)
    return [
        ContextSnippet(
            source=SnippetSource.PACKAGE_MANIFEST,
            text=(
                "Here is the package manifest of the current project "
                f"`{manifest_path}`:\n{_fenced(capped, 'json')}"
            ),
            file_name=manifest_path,
        )
    ]


def import_statements(file_name: str, imports: Sequence[str]) -> list[ContextSnippet]:
    if not imports:
        return []
    block = _fenced("\n".join(imports), detect_language(file_name))
    return [
        ContextSnippet(
            source=SnippetSource.IMPORTS,
            text=f"Here are the import statements from file `{file_name}`:\n{block}",
            file_name=file_name,
            metadata={"import_count": len(imports)},
        )
    ]
