"""Inclusion policy: which context sources a command gathers.

Command definitions carry a loosely-typed ``context`` mapping. It is
validated once into an InclusionPolicy when the definition is built, and the
assembler only ever reads the derived properties below.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InclusionPolicy(BaseModel):
    """Declarative flag set controlling which context sources are consulted.

    Every field defaults to None, meaning "not specified". The distinction
    matters: ``selection=False`` turns the current selection off, while an
    unspecified selection leaves it on.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    codebase: bool | None = None
    open_tabs: bool | None = Field(default=None, alias="openTabs")
    current_dir: bool | None = Field(default=None, alias="currentDir")
    current_file: bool | None = Field(default=None, alias="currentFile")
    selection: bool | None = None
    command: bool | str | None = None
    none: bool | None = None
    directory_path: str | None = Field(default=None, alias="directoryPath")
    file_path: str | None = Field(default=None, alias="filePath")

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "InclusionPolicy":
        """Validate a loosely-typed context mapping.

        Raises:
            pydantic.ValidationError: On unknown keys or wrongly typed values
        """
        if data is None:
            return DEFAULT_POLICY
        return cls.model_validate(data)

    @property
    def specified_fields(self) -> set[str]:
        return {name for name, value in self if value is not None}

    @property
    def excludes_all(self) -> bool:
        return self.none is True

    @property
    def requires_selection(self) -> bool:
        return self.selection is True

    @property
    def is_selection_only(self) -> bool:
        """True when the current selection is the only context requested."""
        if self.excludes_all:
            return False
        specified = self.specified_fields
        return not specified or (specified == {"selection"} and self.selection is True)

    @property
    def include_selection(self) -> bool:
        return self.current_file is True or self.selection is not False

    @property
    def include_command_output(self) -> bool:
        return bool(self.command)


# Policy of a command without a context mapping. Unlike an explicit empty
# mapping it is not selection-only.
DEFAULT_POLICY = InclusionPolicy(codebase=False)
