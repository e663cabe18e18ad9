"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from command_context.config import ContextSettings
from command_context.context.models import Selection

# Enable pytest-asyncio for all tests
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def context_settings() -> ContextSettings:
    """Default budgets: 12 code + 3 text results, so 28 snippets survive."""
    return ContextSettings()


@pytest.fixture
def py_selection() -> Selection:
    """Selection in a Python file."""
    return Selection(
        file_name="src/app/service.py",
        selected_text="def handler(event):\n    return process(event)",
        language="python",
        start_line=10,
        end_line=11,
    )


@pytest.fixture
def ts_selection() -> Selection:
    """Selection in a TypeScript file."""
    return Selection(
        file_name="src/app/service.ts",
        selected_text="export function handler(event: Event) {}",
        language="typescript",
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A small workspace tree on disk.

    Layout:
        package.json
        src/app/service.py
        src/app/service.ts
        src/app/test_service.py
        src/app/util.py
        node_modules/dep/index.js
        .hidden/secret.txt
    """
    (tmp_path / "package.json").write_text('{"name": "demo", "devDependencies": {"jest": "^29"}}')
    app = tmp_path / "src" / "app"
    app.mkdir(parents=True)
    (app / "service.py").write_text(
        "import os\nfrom pathlib import Path\n\n\ndef handler(event):\n    return process(event)\n"
    )
    (app / "service.ts").write_text(
        "import { process } from './process'\nconst fs = require('fs')\n\n"
        "export function handler(event: Event) {}\n"
    )
    (app / "test_service.py").write_text("from app.service import handler\n\n\ndef test_handler():\n    pass\n")
    (app / "util.py").write_text("def helper():\n    return 1\n")
    dep = tmp_path / "node_modules" / "dep"
    dep.mkdir(parents=True)
    (dep / "index.js").write_text("module.exports = {}\n")
    hidden = tmp_path / ".hidden"
    hidden.mkdir()
    (hidden / "secret.txt").write_text("secret\n")
    return tmp_path
