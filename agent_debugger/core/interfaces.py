"""
Abstract interfaces for Agent Debugger collaborators.

The diagnostic service is an external dependency; the session only knows
this contract, which keeps it testable with a canned collaborator.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import DiagnosticRequest


class DiagnosticCollaborator(ABC):
    """Interface for the external service that diagnoses an agent system."""

    @abstractmethod
    async def diagnose(self, request: DiagnosticRequest) -> Any:
        """
        Send the agent system description and return the raw result payload.

        The payload is loosely shaped and must go through the normalizer.

        Raises:
            CollaboratorError: If the call fails for any reason
        """
        pass
