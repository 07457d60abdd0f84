"""
Mock diagnostic payloads and collaborators for testing.

Provides canned responses from the diagnostic agent in the different
envelope shapes seen in the wild, so tests run without network access.
"""

from typing import Any, Dict, List, Optional


def create_diagnostic(
    category: str,
    status: str = "Issue",
    severity: str = "Medium",
    recommended_fix: str = "Tighten the prompt",
) -> Dict[str, Any]:
    """
    Create a single diagnostic finding.

    Args:
        category: Free-text category label
        status: Pass, Warning or Issue
        severity: Low, Medium or High
        recommended_fix: Fix text shown in reports

    Returns:
        Dict in the canonical DiagnosticResult shape
    """
    return {
        "category": category,
        "status": status,
        "summary": f"{category} finding",
        "detailed_explanation": f"Details about {category.lower()}",
        "recommended_fix": recommended_fix,
        "severity": severity,
    }


def create_diagnostic_payload(
    diagnostics: Optional[List[Dict[str, Any]]] = None,
    score: int = 70,
    priority_actions: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Create a canonical DiagnosticResponse payload."""
    return {
        "overall_health_score": score,
        "diagnostics": diagnostics if diagnostics is not None else [
            create_diagnostic("Chain of Thought Quality", "Issue", "High"),
            create_diagnostic("Output Format", "Warning", "Medium"),
            create_diagnostic("Tool Usage", "Pass", "Low"),
        ],
        "priority_actions": priority_actions if priority_actions is not None else [
            "Add step-by-step reasoning",
            "Standardize the final answer format",
        ],
    }


def create_agent_envelope(result: Any, success: bool = True, error: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a result the way the agent API does."""
    if not success:
        return {"success": False, "error": error or "Agent run failed"}
    return {"success": True, "response": {"status": "success", "result": result}}


def create_agent_records() -> List[Dict[str, Any]]:
    """A small system: one orchestrator, two sub-agents and one orphan."""
    return [
        {
            "id": "agent-1",
            "name": "Orchestrator",
            "type": "major",
            "systemPrompt": "You route customer requests.",
        },
        {"id": "agent-2", "name": "Researcher", "type": "sub", "parentId": "agent-1"},
        {"id": "agent-3", "name": "Writer", "type": "sub", "parentId": "agent-1"},
        {"id": "agent-4", "name": "Stray", "type": "sub", "parentId": "agent-99"},
    ]
