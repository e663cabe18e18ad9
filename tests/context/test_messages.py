"""Tests for snippet builders."""

from command_context.context import messages
from command_context.context.models import Selection, SnippetSource


def test_current_file_selection_snippet() -> None:
    """Test the selection snippet carries file, language and surrounding text."""
    selection = Selection(
        file_name="src/app.py",
        selected_text="x = 1",
        preceding_text="# setup",
        following_text="print(x)",
        start_line=3,
        end_line=3,
    )

    [snippet] = messages.current_file_selection(selection)

    assert snippet.source == SnippetSource.SELECTION
    assert snippet.file_name == "src/app.py"
    assert "Python" in snippet.text
    assert "<selected>\nx = 1\n</selected>" in snippet.text
    assert "<preceding>\n# setup\n</preceding>" in snippet.text
    assert "<following>\nprint(x)\n</following>" in snippet.text
    assert snippet.metadata == {"language": "python", "start_line": 3, "end_line": 3}


def test_selection_without_surrounding_text() -> None:
    """Test empty preceding/following text is omitted."""
    [snippet] = messages.current_file_selection(Selection("a.go", "func main() {}"))

    assert "<preceding>" not in snippet.text
    assert "<following>" not in snippet.text
    assert "Go" in snippet.text


def test_terminal_output() -> None:
    """Test command output is wrapped; blank output yields nothing."""
    [snippet] = messages.terminal_output("FAILED tests/test_a.py::test_x")

    assert snippet.source == SnippetSource.TERMINAL
    assert "<output>\nFAILED tests/test_a.py::test_x\n</output>" in snippet.text
    assert messages.terminal_output("") == []
    assert messages.terminal_output("\n  \n") == []


def test_file_content_is_capped() -> None:
    """Test file payloads are capped and flagged."""
    snippet = messages.file_content(SnippetSource.FILE, "big.py", "x" * 500, max_chars=100)

    assert snippet.metadata["truncated"] is True
    assert "```python\n" in snippet.text
    assert "(truncated)" in snippet.text


def test_directory_listing() -> None:
    """Test listings name the directory and test mode; empty listings yield nothing."""
    [snippet] = messages.directory_listing("src", ["a.py", "b.py"], is_test=True)

    assert snippet.source == SnippetSource.DIRECTORY_LIST
    assert "test files" in snippet.text
    assert snippet.text.endswith("a.py\nb.py")
    assert snippet.metadata == {"entry_count": 2, "test_mode": True}
    assert messages.directory_listing("src", []) == []


def test_import_statements() -> None:
    """Test imports are fenced in the file's language; none yields nothing."""
    [snippet] = messages.import_statements("a.ts", ["import x from 'x'"])

    assert snippet.source == SnippetSource.IMPORTS
    assert "```typescript\nimport x from 'x'\n```" in snippet.text
    assert messages.import_statements("a.ts", []) == []


def test_package_manifest() -> None:
    """Test the manifest snippet is fenced as JSON."""
    [snippet] = messages.package_manifest("package.json", '{"name": "demo"}', max_chars=1000)

    assert snippet.source == SnippetSource.PACKAGE_MANIFEST
    assert '```json\n{"name": "demo"}\n```' in snippet.text
