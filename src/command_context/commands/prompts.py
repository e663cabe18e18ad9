"""Display and model-facing text for a command request."""

from pathlib import Path, PurePath

from command_context.context.classification import language_display_name
from command_context.context.models import Selection

FILE_ANNOTATION = (
    "Use the shared context and the selected {language} code "
    "from file `{file_name}` to follow the instructions above."
)


def relative_file_name(file_name: str, workspace_root: Path | None) -> str:
    """File name relative to the workspace root when it lies under it."""
    path = PurePath(file_name)
    if workspace_root is not None and path.is_absolute():
        try:
            return path.relative_to(workspace_root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def display_text_with_file_name(
    command_name: str,
    selection: Selection | None,
    workspace_root: Path | None,
) -> str:
    """
    Human-visible text for a request.

    Examples:
        "/explain @src/app.py:10-24" with a ranged selection,
        "/explain @src/app.py" without a range, "/explain" without a file.
    """
    if selection is None or not selection.file_name:
        return command_name

    file_name = relative_file_name(selection.file_name, workspace_root)
    line_range = ""
    if selection.start_line is not None:
        end_line = selection.end_line if selection.end_line is not None else selection.start_line
        line_range = f":{selection.start_line}-{end_line}"
    return f"{command_name} @{file_name}{line_range}"


def model_text(prompt: str, file_name: str | None, language: str | None = None) -> str:
    """Instruction sent to the model, annotated with the selection's file."""
    if not file_name:
        return prompt
    annotation = FILE_ANNOTATION.format(
        language=language_display_name(language, file_name),
        file_name=PurePath(file_name).name,
    )
    return f"{prompt}\n\n{annotation}"
