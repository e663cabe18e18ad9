"""Context snippet gathering, ordering and bounding."""

from .assembler import AssemblyRequest, AssemblyStep, ContextAssembler
from .models import ContextSnippet, ProviderResult, Selection, SnippetSource
from .policy import DEFAULT_POLICY, InclusionPolicy
from .providers import CodebaseSearch, ContextProviders, EditorState, OpenDocument

__all__ = [
    "AssemblyRequest",
    "AssemblyStep",
    "ContextAssembler",
    "ContextSnippet",
    "ProviderResult",
    "Selection",
    "SnippetSource",
    "DEFAULT_POLICY",
    "InclusionPolicy",
    "CodebaseSearch",
    "ContextProviders",
    "EditorState",
    "OpenDocument",
]
