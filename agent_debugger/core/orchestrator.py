"""Analysis session that coordinates hierarchy, diagnostics and prompt fixes."""

import json
import time
from typing import Any, Callable, Dict, Mapping, Optional, Set, Union

import structlog
from jinja2 import Template

from ..analysis.normalizer import normalize
from ..analysis.prompt_fixes import generate_prompt_fixes
from ..prompts.system_prompts import DIAGNOSTIC_REQUEST_TEMPLATE, FLOW_NOT_PROVIDED
from ..utils.config import config
from .exceptions import CollaboratorError, FormatError, ValidationError
from .hierarchy import AgentHierarchyStore
from .interfaces import DiagnosticCollaborator
from .models import Agent, AgentType, DiagnosticRequest, DiagnosticResponse, PromptFixMap

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], None]


class DiagnosticSession:
    """
    One editing-and-analysis session for a described agent system.

    Holds the agent hierarchy, the latest DiagnosticResponse and the prompt
    fixes derived from it. A new analysis replaces the previous response
    wholesale; a failed analysis leaves no results behind. When analyses
    overlap, only the most recently started one may store its result.

    The collaborator may be left unset while agents are being edited; it is
    only needed once analyze() runs.
    """

    def __init__(
        self,
        collaborator: Optional[DiagnosticCollaborator] = None,
        store: Optional[AgentHierarchyStore] = None,
        user_id: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.collaborator = collaborator
        self.store = store if store is not None else AgentHierarchyStore(
            require_parent_for_sub=config.require_parent_for_sub
        )
        self.user_id = user_id or config.diagnostic_user_id
        self.diagnostics: Optional[DiagnosticResponse] = None
        self.prompt_fixes: Optional[PromptFixMap] = None
        self._progress_callback = progress_callback
        self._analysis_seq = 0

    # Agent editing

    def add_agent(
        self,
        name: str,
        type: Union[AgentType, str],
        parent_id: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> Agent:
        agent = self.store.add(name, type, parent_id=parent_id, system_prompt=system_prompt)
        self._refresh_prompt_fixes()
        return agent

    def update_agent(self, agent_id: str, patch: Mapping[str, Any]) -> Agent:
        agent = self.store.update(agent_id, patch)
        self._refresh_prompt_fixes()
        return agent

    def remove_agent(self, agent_id: str, cascade: bool = False) -> Set[str]:
        removed = self.store.remove(agent_id, cascade=cascade)
        self._refresh_prompt_fixes()
        return removed

    # Analysis

    def build_message(
        self, expected_behavior: str, actual_behavior: str, flow_description: str = ""
    ) -> str:
        """Render the message sent to the diagnostic agent."""
        template = Template(DIAGNOSTIC_REQUEST_TEMPLATE)
        return template.render(
            agent_hierarchy_json=json.dumps(self.store.describe(), indent=2),
            flow_description=flow_description.strip(),
            flow_not_provided=FLOW_NOT_PROVIDED,
            expected_behavior=expected_behavior,
            actual_behavior=actual_behavior,
        )

    async def analyze(
        self, expected_behavior: str, actual_behavior: str, flow_description: str = ""
    ) -> DiagnosticResponse:
        """
        Run the diagnostic collaborator over the current agent system.

        Raises:
            ValidationError: If a behavior description is blank or there are no agents
            CollaboratorError: If no collaborator is set or the call fails
            FormatError: If the returned payload has an unknown shape
        """
        if not expected_behavior.strip() or not actual_behavior.strip():
            raise ValidationError("Both expected and actual behavior are required")
        if len(self.store) == 0:
            raise ValidationError("Add at least one agent before running an analysis")
        if self.collaborator is None:
            raise CollaboratorError("No diagnostic collaborator configured")

        self._analysis_seq += 1
        seq = self._analysis_seq
        self.diagnostics = None
        self.prompt_fixes = None

        session_id = f"session-{int(time.time() * 1000)}"
        request = DiagnosticRequest(
            message=self.build_message(expected_behavior, actual_behavior, flow_description),
            agent_hierarchy=self.store.describe(),
            session_metadata={"user_id": self.user_id, "session_id": session_id},
        )

        logger.info("Starting analysis", session_id=session_id, agents=len(self.store))
        self._emit("analysis_started", {"session_id": session_id, "agents": len(self.store)})

        try:
            raw = await self.collaborator.diagnose(request)
            response = normalize(raw)
        except (CollaboratorError, FormatError) as e:
            logger.error("Analysis failed", session_id=session_id, error=str(e))
            self._emit("analysis_failed", {"session_id": session_id, "error": str(e)})
            raise

        if seq != self._analysis_seq:
            logger.info("Discarding superseded analysis result", session_id=session_id)
            return response

        self.diagnostics = response
        logger.info(
            "Completed analysis",
            session_id=session_id,
            health_score=response.overall_health_score,
        )
        self._emit(
            "analysis_completed",
            {"session_id": session_id, "health_score": response.overall_health_score},
        )
        return response

    async def generate_prompt_fixes(self) -> PromptFixMap:
        """
        Synthesize prompt fixes from the latest diagnostics.

        Raises:
            ValidationError: If no analysis has completed yet
        """
        if self.diagnostics is None:
            raise ValidationError("Run an analysis before generating prompt fixes")

        self.prompt_fixes = generate_prompt_fixes(self.store.agents, self.diagnostics)
        self._emit("prompt_fixes_generated", {"agents": sorted(self.prompt_fixes)})
        return self.prompt_fixes

    def _refresh_prompt_fixes(self) -> None:
        # Fixes are derived data; rebuild them in full when the agent set changes.
        if self.prompt_fixes is not None and self.diagnostics is not None:
            self.prompt_fixes = generate_prompt_fixes(self.store.agents, self.diagnostics)

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        if self._progress_callback:
            self._progress_callback(event_type, payload)


def resolve_collaborator() -> DiagnosticCollaborator:
    """
    Return the configured diagnostic collaborator.

    Raises:
        ValueError: If the agent API settings are incomplete outside mock mode
    """
    if config.mock_mode:
        from ..integrations.mock_collaborator import StaticDiagnosticCollaborator

        logger.info("MOCK MODE ENABLED - using canned diagnostics")
        return StaticDiagnosticCollaborator()

    from ..integrations.agent_api_client import create_agent_api_client

    return create_agent_api_client()


def create_session(
    store: Optional[AgentHierarchyStore] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> DiagnosticSession:
    """Create a session wired to the configured diagnostic collaborator."""
    return DiagnosticSession(
        resolve_collaborator(), store=store, progress_callback=progress_callback
    )
