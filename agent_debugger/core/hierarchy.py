"""
Agent hierarchy store.

Holds the agents of the described system in insertion order and enforces the
field rules for adding and updating them. The parent relation is a weak
reference by id: it is used for lookup and grouping only, and is never fixed
up when the referenced agent disappears unless a cascading delete is asked for.
"""

import time
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Union

import structlog

from .exceptions import NotFoundError, ValidationError
from .models import Agent, AgentType, Hierarchy, HierarchyGroup

logger = structlog.get_logger(__name__)

MAX_NAME_LENGTH = 50

# Accepted patch keys, wire aliases mapped onto model field names
_PATCH_FIELDS = {
    "name": "name",
    "type": "type",
    "parent_id": "parent_id",
    "parentId": "parent_id",
    "system_prompt": "system_prompt",
    "systemPrompt": "system_prompt",
}


class AgentHierarchyStore:
    """In-memory store for a two-tier (major -> sub) agent hierarchy."""

    def __init__(self, require_parent_for_sub: bool = True):
        """
        Args:
            require_parent_for_sub: Reject sub agents that arrive without a
                parent_id. Turn off to accept orphans at construction time.
        """
        self.require_parent_for_sub = require_parent_for_sub
        self._agents: Dict[str, Agent] = {}
        self._last_stamp = 0

    @classmethod
    def from_records(
        cls,
        records: Iterable[Union[Agent, Mapping[str, Any]]],
        require_parent_for_sub: bool = True,
    ) -> "AgentHierarchyStore":
        """
        Build a store from existing agent records.

        Records that carry an id keep it; records without one get a fresh id.
        Field rules are applied to every record.

        Raises:
            ValidationError: On a duplicate id or an invalid field
        """
        store = cls(require_parent_for_sub=require_parent_for_sub)
        for record in records:
            if isinstance(record, Agent):
                data = record.model_dump()
            elif not isinstance(record, Mapping):
                raise ValidationError(f"Agent record must be an object, got {type(record).__name__}")
            else:
                data = {_PATCH_FIELDS.get(key, key): value for key, value in record.items()}

            agent_id = data.get("id")
            agent = store._build(
                agent_id=store._generate_id() if agent_id in (None, "") else agent_id,
                name=data.get("name"),
                agent_type=data.get("type"),
                parent_id=data.get("parent_id"),
                system_prompt=data.get("system_prompt"),
            )
            if agent.id in store._agents:
                raise ValidationError(f"Duplicate agent id: {agent.id}", field="id")
            store._agents[agent.id] = agent
        return store

    # Collection protocol

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    @property
    def agents(self) -> List[Agent]:
        """All agents in insertion order."""
        return list(self._agents.values())

    def get(self, agent_id: str) -> Agent:
        """Return the agent with ``agent_id`` or raise NotFoundError."""
        try:
            return self._agents[agent_id]
        except KeyError:
            raise NotFoundError(agent_id) from None

    def clear(self) -> None:
        self._agents.clear()

    # Mutations

    def add(
        self,
        name: str,
        type: Union[AgentType, str],
        parent_id: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> Agent:
        """Create an agent with a freshly generated id."""
        agent = self._build(
            agent_id=self._generate_id(),
            name=name,
            agent_type=type,
            parent_id=parent_id,
            system_prompt=system_prompt,
        )
        self._agents[agent.id] = agent
        logger.debug("Agent added", agent_id=agent.id, agent_type=agent.type.value)
        return agent

    def update(self, agent_id: str, patch: Mapping[str, Any]) -> Agent:
        """
        Apply a partial update to an existing agent.

        Args:
            agent_id: Agent to update
            patch: Any of name, type, parent_id/parentId, system_prompt/systemPrompt

        Raises:
            NotFoundError: If the agent does not exist
            ValidationError: If the patch changes the id, names an unknown
                field, or leaves the agent in an invalid state
        """
        current = self.get(agent_id)

        if "id" in patch and patch["id"] != agent_id:
            raise ValidationError("Agent id cannot be changed", field="id")

        merged = current.model_dump()
        for key, value in patch.items():
            if key == "id":
                continue
            if key not in _PATCH_FIELDS:
                raise ValidationError(f"Unknown agent field: {key}", field=key)
            merged[_PATCH_FIELDS[key]] = value

        agent = self._build(
            agent_id=agent_id,
            name=merged["name"],
            agent_type=merged["type"],
            parent_id=merged["parent_id"],
            system_prompt=merged["system_prompt"],
        )
        self._agents[agent_id] = agent
        logger.debug("Agent updated", agent_id=agent_id, fields=sorted(patch))
        return agent

    def remove(self, agent_id: str, cascade: bool = False) -> Set[str]:
        """
        Delete an agent.

        With ``cascade`` and a major target, every agent whose parent_id
        points at it is deleted too. Removing a sub agent never touches others.

        Returns:
            Ids of every agent that was removed
        """
        target = self.get(agent_id)
        removed = {agent_id}

        if cascade and target.is_major:
            removed.update(
                agent.id for agent in self._agents.values() if agent.parent_id == agent_id
            )

        for removed_id in removed:
            del self._agents[removed_id]

        logger.debug("Agents removed", agent_id=agent_id, cascade=cascade, removed=len(removed))
        return removed

    # Queries

    def has_children(self, agent_id: str) -> bool:
        """True when at least one agent references ``agent_id`` as its parent."""
        return any(agent.parent_id == agent_id for agent in self._agents.values())

    def parent_of(self, agent: Agent) -> Optional[Agent]:
        """
        Resolve the parent of ``agent``.

        Returns None when parent_id is absent or does not resolve. The two
        cases look the same here; compare ``agent.parent_id`` against
        list_hierarchy() to tell them apart.
        """
        if not agent.parent_id:
            return None
        return self._agents.get(agent.parent_id)

    def list_hierarchy(self) -> Hierarchy:
        """
        Group agents for display.

        Every major agent gets a group holding the subs that reference it.
        Subs whose parent_id is absent or does not resolve to a major agent
        are returned as orphans. Each agent appears exactly once.
        """
        groups: Dict[str, HierarchyGroup] = {}
        for agent in self._agents.values():
            if agent.is_major:
                groups[agent.id] = HierarchyGroup(major=agent)

        orphans: List[Agent] = []
        for agent in self._agents.values():
            if agent.is_major:
                continue
            group = groups.get(agent.parent_id) if agent.parent_id else None
            if group is None:
                orphans.append(agent)
            else:
                group.children.append(agent)

        return Hierarchy(groups=list(groups.values()), orphans=orphans)

    def describe(self) -> List[Dict[str, Any]]:
        """Flatten the agents into the description sent to the diagnostic service."""
        description = []
        for agent in self._agents.values():
            parent = self.parent_of(agent)
            description.append({
                "name": agent.name,
                "type": agent.type.value,
                "parent": parent.name if parent else None,
                "systemPrompt": agent.system_prompt or "Not provided",
            })
        return description

    # Internals

    def _generate_id(self) -> str:
        stamp = max(int(time.time() * 1000), self._last_stamp + 1)
        while f"agent-{stamp}" in self._agents:
            stamp += 1
        self._last_stamp = stamp
        return f"agent-{stamp}"

    def _build(
        self,
        agent_id: str,
        name: Any,
        agent_type: Any,
        parent_id: Optional[str],
        system_prompt: Optional[str],
    ) -> Agent:
        if not isinstance(agent_id, str) or not agent_id:
            raise ValidationError("Agent id must be a non-empty string", field="id")
        for field, value in (("parent_id", parent_id), ("system_prompt", system_prompt)):
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Agent {field} must be a string", field=field)

        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Agent name is required", field="name")
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Agent name must be at most {MAX_NAME_LENGTH} characters", field="name"
            )

        try:
            agent_type = AgentType(agent_type)
        except ValueError:
            raise ValidationError(f"Unknown agent type: {agent_type!r}", field="type") from None

        parent_id = parent_id or None
        if agent_type == AgentType.MAJOR:
            parent_id = None
        elif parent_id is None and self.require_parent_for_sub:
            raise ValidationError("Sub agents must have a parent agent", field="parent_id")

        return Agent(
            id=agent_id,
            name=name,
            type=agent_type,
            parent_id=parent_id,
            system_prompt=system_prompt or None,
        )
