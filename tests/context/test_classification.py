"""Tests for instruction and file classification."""

import pytest

from command_context.context.classification import (
    detect_language,
    extract_test_type,
    get_file_extension,
    is_test_file,
    is_unit_test_request,
    language_display_name,
    needs_package_manifest,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Generate unit tests for the selected code", "unit"),
        ("Write a Unit Test", "unit"),
        ("add unit-tests please", "unit"),
        ("Create e2e tests", "e2e"),
        ("integration test for the API", "integration"),
        ("Explain what this code does", ""),
        ("Is this unit of work correct?", ""),
        ("Run the test suite", ""),
        ("Ask the community test group", ""),
    ],
)
def test_extract_test_type(text: str, expected: str) -> None:
    """Test test-type classification of instructions."""
    assert extract_test_type(text) == expected


def test_is_unit_test_request() -> None:
    """Test only unit-test requests are classified as such."""
    assert is_unit_test_request("Generate unit tests")
    assert not is_unit_test_request("Generate e2e tests")


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("src/app.ts", True),
        ("src/app.tsx", True),
        ("src/app.js", True),
        ("src/app.mjs", True),
        ("src/app.py", False),
        ("src/app.go", False),
        ("Makefile", False),
        ("src/APP.TS", False),
    ],
)
def test_needs_package_manifest(file_name: str, expected: bool) -> None:
    """Test the ts/js extension pattern (case-sensitive)."""
    assert needs_package_manifest(file_name) is expected


def test_get_file_extension() -> None:
    """Test extension extraction."""
    assert get_file_extension("a/b/c.py") == "py"
    assert get_file_extension("archive.tar.gz") == "gz"
    assert get_file_extension("README") == ""


def test_is_test_file() -> None:
    """Test test-file detection by name."""
    assert is_test_file("test_service.py")
    assert is_test_file("service.spec.ts")
    assert is_test_file("ServiceTest.java")
    assert not is_test_file("service.py")


def test_language_detection_and_display() -> None:
    """Test language detection and display names."""
    assert detect_language("x.py") == "python"
    assert detect_language("x.unknown") is None
    assert language_display_name("typescript") == "TypeScript"
    assert language_display_name(None, "x.cpp") == "C++"
    assert language_display_name(None, "x.zig") == "zig"
    assert language_display_name(None, None) == "text"
