"""
Client for the hosted diagnostic agent.

Posts the agent system description to the agent endpoint and unwraps the
success envelope. The call is made once: there is no retry and, unless one
is configured, no timeout. Any failure becomes a CollaboratorError.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..core.exceptions import CollaboratorError
from ..core.interfaces import DiagnosticCollaborator
from ..core.models import DiagnosticRequest
from ..utils.config import config

logger = logging.getLogger(__name__)


class AgentAPIClient(DiagnosticCollaborator):
    """Diagnostic collaborator backed by the agent HTTP API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        agent_id: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the agent API client.

        Args:
            base_url: Agent endpoint URL
            api_key: Bearer token for the agent service
            agent_id: Id of the diagnostic agent to run
            timeout: Seconds to wait for a response; None waits indefinitely
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.agent_id = agent_id
        self.timeout = timeout
        self._transport = transport
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def build_body(self, request: DiagnosticRequest) -> Dict[str, Any]:
        """Build the JSON body for one diagnostic call."""
        body: Dict[str, Any] = {
            "message": request.message,
            "agent_id": self.agent_id,
            "agent_hierarchy": request.agent_hierarchy,
        }
        body.update(request.session_metadata)
        return body

    async def diagnose(self, request: DiagnosticRequest) -> Any:
        """
        Run the diagnostic agent and return its raw ``result`` payload.

        Raises:
            CollaboratorError: On network errors, non-200 responses, invalid
                JSON or an unsuccessful envelope
        """
        body = self.build_body(request)
        logger.info(f"Calling diagnostic agent {self.agent_id}")

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self._transport
        ) as client:
            try:
                response = await client.post(self.base_url, headers=self.headers, json=body)
            except httpx.TimeoutException:
                raise CollaboratorError(f"Request timeout after {self.timeout}s")
            except httpx.RequestError as e:
                raise CollaboratorError(f"Network error: {str(e)}")

        if response.status_code != 200:
            logger.error(f"Agent API error {response.status_code}: {response.text[:500]}")
            raise CollaboratorError(
                f"Agent API error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            envelope = response.json()
        except json.JSONDecodeError:
            raise CollaboratorError(f"Invalid JSON response: {response.text[:200]}")

        return self.parse_envelope(envelope)

    def parse_envelope(self, envelope: Any) -> Any:
        """
        Extract the result payload from the agent response envelope.

        Expected shape: ``{"success": true, "response": {"result": ...}}``.
        A result delivered as a JSON string is decoded.
        """
        if not isinstance(envelope, dict):
            raise CollaboratorError("Agent response is not a JSON object")

        if not envelope.get("success"):
            message = envelope.get("error") or "Diagnostic agent reported failure"
            raise CollaboratorError(str(message))

        payload = envelope.get("response") or {}
        result = payload.get("result") if isinstance(payload, dict) else None
        if result is None:
            raise CollaboratorError("Diagnostic agent returned no result")

        if isinstance(result, str):
            try:
                result = json.loads(result)
            except json.JSONDecodeError:
                raise CollaboratorError(f"Diagnostic result is not valid JSON: {result[:200]}")

        return result


def create_agent_api_client() -> AgentAPIClient:
    """Create a client from the global configuration."""
    config.validate_agent_api()
    return AgentAPIClient(
        base_url=config.agent_api_url,
        api_key=config.agent_api_key,
        agent_id=config.diagnostic_agent_id,
        timeout=config.agent_api_timeout,
    )
