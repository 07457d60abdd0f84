"""Integrations with external diagnostic services."""

from .agent_api_client import AgentAPIClient, create_agent_api_client
from .mock_collaborator import StaticDiagnosticCollaborator, get_mock_diagnostics

__all__ = [
    "AgentAPIClient",
    "create_agent_api_client",
    "StaticDiagnosticCollaborator",
    "get_mock_diagnostics",
]
