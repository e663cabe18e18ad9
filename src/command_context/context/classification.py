"""Instruction and file classification helpers."""

import re
from pathlib import PurePath

# "unit", "e2e" or "integration" directly followed by the word "test"
_TEST_TYPE_PATTERN = re.compile(r"\b(unit|e2e|integration)(?=[\s-]+tests?\b)", re.IGNORECASE)

# File extensions whose projects keep a package.json manifest
_PACKAGE_MANIFEST_EXTENSION = re.compile(r"ts|js")

_TEST_FILE_PATTERN = re.compile(r"test|spec", re.IGNORECASE)

# Extension to language mapping
EXTENSION_MAP = {
    "py": "python",
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "go": "go",
    "rs": "rust",
    "java": "java",
    "kt": "kotlin",
    "rb": "ruby",
    "php": "php",
    "swift": "swift",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "hpp": "cpp",
    "cc": "cpp",
    "cs": "csharp",
    "sql": "sql",
    "sh": "shell",
    "md": "markdown",
}

# Display names for the model-facing file annotation
_LANGUAGE_NAMES = {
    "python": "Python",
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "go": "Go",
    "rust": "Rust",
    "java": "Java",
    "kotlin": "Kotlin",
    "ruby": "Ruby",
    "php": "PHP",
    "swift": "Swift",
    "c": "C",
    "cpp": "C++",
    "csharp": "C#",
    "sql": "SQL",
    "shell": "Shell",
    "markdown": "Markdown",
}


def extract_test_type(text: str) -> str:
    """Return "unit", "e2e" or "integration" when text asks for that kind of test.

    Examples:
        >>> extract_test_type("Generate unit tests for this function")
        'unit'
        >>> extract_test_type("Explain this code")
        ''
    """
    match = _TEST_TYPE_PATTERN.search(text)
    return match.group(1).lower() if match else ""


def is_unit_test_request(text: str) -> bool:
    return extract_test_type(text) == "unit"


def get_file_extension(file_name: str) -> str:
    """Extension without the leading dot ("" when there is none)."""
    return PurePath(file_name).suffix.lstrip(".")


def needs_package_manifest(file_name: str) -> bool:
    """True when the file's extension matches the ts/js pattern."""
    return bool(_PACKAGE_MANIFEST_EXTENSION.search(get_file_extension(file_name)))


def is_test_file(file_name: str) -> bool:
    return bool(_TEST_FILE_PATTERN.search(PurePath(file_name).name))


def detect_language(file_name: str) -> str | None:
    return EXTENSION_MAP.get(get_file_extension(file_name).lower())


def language_display_name(language: str | None, file_name: str | None = None) -> str:
    """Human-readable language name, falling back to the raw extension."""
    if language is None and file_name:
        language = detect_language(file_name)
    if language is None:
        ext = get_file_extension(file_name) if file_name else ""
        return ext or "text"
    return _LANGUAGE_NAMES.get(language, language)
