"""
Exception classes for Agent Debugger.

- ValidationError: bad agent field input or a precondition the caller can fix
- NotFoundError: unknown agent id
- FormatError: diagnostic payload shape not recognized
- CollaboratorError: the external diagnostic service call failed

All of them are terminal for the operation that raised them. Nothing in the
core retries automatically.
"""

from typing import Optional


class AgentDebuggerError(Exception):
    """Base class for all Agent Debugger errors."""


class ValidationError(AgentDebuggerError):
    """
    Raised when agent fields or analysis inputs are invalid.

    Attributes:
        field: Name of the offending field, when there is one
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


class NotFoundError(AgentDebuggerError):
    """
    Raised when an agent id does not exist in the hierarchy.

    Attributes:
        agent_id: The id that was looked up
    """

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")


class FormatError(AgentDebuggerError):
    """Raised when a diagnostic payload cannot be coerced into a DiagnosticResponse."""


class CollaboratorError(AgentDebuggerError):
    """
    Raised when the external diagnostic collaborator fails.

    The message is surfaced verbatim to the user.

    Attributes:
        status_code: HTTP status returned by the collaborator, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
