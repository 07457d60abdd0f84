"""Core data model, hierarchy store and analysis session."""

from .exceptions import (
    AgentDebuggerError,
    CollaboratorError,
    FormatError,
    NotFoundError,
    ValidationError,
)
from .hierarchy import AgentHierarchyStore
from .models import (
    Agent,
    AgentType,
    DiagnosticResponse,
    DiagnosticResult,
    DiagnosticStatus,
    Hierarchy,
    HierarchyGroup,
    Severity,
)

__all__ = [
    "Agent",
    "AgentType",
    "AgentHierarchyStore",
    "DiagnosticResponse",
    "DiagnosticResult",
    "DiagnosticStatus",
    "Hierarchy",
    "HierarchyGroup",
    "Severity",
    "AgentDebuggerError",
    "CollaboratorError",
    "FormatError",
    "NotFoundError",
    "ValidationError",
]
