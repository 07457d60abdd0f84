"""
Shared data models for Agent Debugger.

Agents and diagnostics travel over HTTP and through files, so they are
pydantic models. Agent fields accept both snake_case and the camelCase wire
names (``parentId``, ``systemPrompt``) used by the browser client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgentType(str, Enum):
    """Position of an agent in the two-tier hierarchy."""
    MAJOR = "major"
    SUB = "sub"


class DiagnosticStatus(str, Enum):
    """Outcome of a single diagnostic check."""
    PASS = "Pass"
    WARNING = "Warning"
    ISSUE = "Issue"


class Severity(str, Enum):
    """Severity attached to a diagnostic finding."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Agent(BaseModel):
    """One agent in the described multi-agent system."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: AgentType
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")

    @property
    def is_major(self) -> bool:
        return self.type == AgentType.MAJOR

    @property
    def role_label(self) -> str:
        """Human readable role used in synthesized prompts."""
        return "primary orchestrator" if self.is_major else "specialized sub-agent"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DiagnosticResult(BaseModel):
    """A single finding produced by the diagnostic collaborator. Never mutated."""

    model_config = ConfigDict(frozen=True)

    category: str
    status: DiagnosticStatus
    summary: str = ""
    detailed_explanation: str = ""
    recommended_fix: str = ""
    severity: Optional[Severity] = None

    @property
    def is_actionable(self) -> bool:
        """Warnings and issues feed prompt-fix synthesis; passes never do."""
        return self.status in (DiagnosticStatus.WARNING, DiagnosticStatus.ISSUE)


class DiagnosticResponse(BaseModel):
    """Complete diagnostic output for one analysis run."""

    overall_health_score: int = Field(ge=0, le=100)
    diagnostics: List[DiagnosticResult]
    # Collaborators sometimes omit this; consumers always see a list.
    priority_actions: List[str] = Field(default_factory=list)

    @field_validator("priority_actions", mode="before")
    @classmethod
    def _default_priority_actions(cls, value: Any) -> Any:
        return [] if value is None else value

    def actionable(self) -> List[DiagnosticResult]:
        return [d for d in self.diagnostics if d.is_actionable]


# Agent id -> synthesized system prompt
PromptFixMap = Dict[str, str]


@dataclass
class HierarchyGroup:
    """A major agent and the sub-agents that reference it."""
    major: Agent
    children: List[Agent] = field(default_factory=list)


@dataclass
class Hierarchy:
    """Grouped view of the agent set, in insertion order at each level."""
    groups: List[HierarchyGroup] = field(default_factory=list)
    orphans: List[Agent] = field(default_factory=list)

    @property
    def dangling(self) -> List[Agent]:
        """Orphans that do carry a parent_id which resolves to no major agent."""
        return [agent for agent in self.orphans if agent.parent_id]

    def all_agents(self) -> List[Agent]:
        agents: List[Agent] = []
        for group in self.groups:
            agents.append(group.major)
            agents.extend(group.children)
        agents.extend(self.orphans)
        return agents

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": [
                {
                    "major": group.major.to_dict(),
                    "children": [child.to_dict() for child in group.children],
                }
                for group in self.groups
            ],
            "orphans": [agent.to_dict() for agent in self.orphans],
        }


@dataclass
class DiagnosticRequest:
    """Input handed to the external diagnostic collaborator."""
    message: str
    agent_hierarchy: List[Dict[str, Any]]
    session_metadata: Dict[str, str] = field(default_factory=dict)
