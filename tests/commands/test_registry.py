"""Tests for the in-memory command registry."""

import pytest
from pydantic import ValidationError

from command_context.commands.models import CommandDefinition
from command_context.commands.registry import InMemoryCommandRegistry


def test_lookup_registered_commands() -> None:
    """Test definitions and raw mappings are both accepted."""
    registry = InMemoryCommandRegistry(
        {
            "explain": CommandDefinition(prompt="Explain", slash_command="/explain", type="default"),
            "mine": {"prompt": "Do my thing", "context": {"openTabs": True}},
        }
    )

    assert registry.get_command("explain").slash_command == "/explain"  # type: ignore[union-attr]
    mine = registry.get_command("mine")
    assert mine is not None
    assert mine.policy.open_tabs is True
    assert registry.command_ids() == ["explain", "mine"]


def test_unknown_command_is_none() -> None:
    """Test unknown ids resolve to None."""
    assert InMemoryCommandRegistry().get_command("missing") is None


def test_register_validates_mappings() -> None:
    """Test an invalid mapping fails at registration."""
    registry = InMemoryCommandRegistry()

    with pytest.raises(ValidationError):
        registry.register("bad", {"prompt": "x", "context": {"codebase": "maybe"}})

    assert registry.get_command("bad") is None


def test_register_replaces_existing() -> None:
    """Test re-registering an id replaces the definition."""
    registry = InMemoryCommandRegistry({"x": {"prompt": "old"}})
    registry.register("x", {"prompt": "new"})

    assert registry.get_command("x").prompt == "new"  # type: ignore[union-attr]
