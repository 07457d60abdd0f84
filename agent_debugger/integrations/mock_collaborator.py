"""Canned diagnostic collaborator for mock mode and offline demos."""

import copy
from typing import Any, List, Optional

import structlog

from ..core.exceptions import CollaboratorError
from ..core.interfaces import DiagnosticCollaborator
from ..core.models import DiagnosticRequest

logger = structlog.get_logger(__name__)


def get_mock_diagnostics() -> dict:
    """A representative payload covering all seven diagnostic categories."""
    return {
        "overall_health_score": 62,
        "diagnostics": [
            {
                "category": "Prompt Quality",
                "status": "Warning",
                "summary": "Sub-agent prompts leave the expected output undefined.",
                "detailed_explanation": "The research agent is told what to look for but not how to report it.",
                "recommended_fix": "Spell out the expected response structure in each sub-agent prompt.",
                "severity": "Medium",
            },
            {
                "category": "Architecture & Flow",
                "status": "Issue",
                "summary": "The orchestrator never hands results back to the writer agent.",
                "detailed_explanation": "Results from the research agent are dropped after the first delegation.",
                "recommended_fix": "Route sub-agent results through the orchestrator before the final step.",
                "severity": "High",
            },
            {
                "category": "Chain of Thought Quality",
                "status": "Pass",
                "summary": "Reasoning steps are explicit.",
                "detailed_explanation": "Agents already plan before acting.",
                "recommended_fix": "No change needed.",
                "severity": "Low",
            },
            {
                "category": "Error Handling",
                "status": "Warning",
                "summary": "Tool failures are not reported upstream.",
                "detailed_explanation": "A failed search returns an empty answer instead of an error.",
                "recommended_fix": "Ask agents to report tool failures explicitly.",
                "severity": "Medium",
            },
            {
                "category": "Context Management",
                "status": "Pass",
                "summary": "Context is carried between turns.",
                "detailed_explanation": "Prior decisions are referenced correctly.",
                "recommended_fix": "No change needed.",
                "severity": "Low",
            },
            {
                "category": "Output Formatting",
                "status": "Issue",
                "summary": "Final answers mix prose and JSON.",
                "detailed_explanation": "Downstream parsing fails on mixed output.",
                "recommended_fix": "Require a single JSON object as the final answer.",
                "severity": "High",
            },
            {
                "category": "Tool Usage",
                "status": "Pass",
                "summary": "Tools are used appropriately.",
                "detailed_explanation": "Tool choice matches the task.",
                "recommended_fix": "No change needed.",
                "severity": "Low",
            },
        ],
        "priority_actions": [
            "Return sub-agent results to the orchestrator",
            "Enforce a single JSON final answer",
            "Report tool failures explicitly",
        ],
    }


class StaticDiagnosticCollaborator(DiagnosticCollaborator):
    """
    Collaborator that returns a fixed payload, or fails with a fixed error.

    Records every request it receives for inspection.
    """

    def __init__(self, payload: Any = None, error: Optional[str] = None):
        self.payload = get_mock_diagnostics() if payload is None else payload
        self.error = error
        self.requests: List[DiagnosticRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def diagnose(self, request: DiagnosticRequest) -> Any:
        self.requests.append(request)
        if self.error is not None:
            logger.warning("Mock collaborator failing", error=self.error)
            raise CollaboratorError(self.error)
        return copy.deepcopy(self.payload)
