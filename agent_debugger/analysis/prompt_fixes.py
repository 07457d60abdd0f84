"""
Prompt-fix synthesis.

Turns diagnostic findings into a rewritten system prompt for each agent.
Every Warning or Issue finding is mapped to at most one guidance snippet by
keyword matching on its category; the snippets are deduplicated and wrapped
in a role-aware prompt skeleton. Pass findings never contribute, and
categories that match no rule are dropped without complaint.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import structlog

from ..core.models import Agent, DiagnosticResponse, DiagnosticResult, PromptFixMap
from ..prompts.fix_snippets import (
    CLARITY,
    CLOSING_REMINDER,
    CONTEXT,
    COORDINATION,
    ERROR_HANDLING,
    FIX_SNIPPETS,
    MAJOR_RESPONSIBILITIES,
    OUTPUT_FORMAT,
    QUALITY_STANDARDS,
    REASONING,
    SUB_RESPONSIBILITIES,
    TOOL_USAGE,
)

logger = structlog.get_logger(__name__)

CategoryPredicate = Callable[[str], bool]


def _contains_any(*keywords: str) -> CategoryPredicate:
    def predicate(category: str) -> bool:
        return any(keyword in category for keyword in keywords)
    return predicate


# Evaluated top to bottom against the lower-cased category; first match wins.
CATEGORY_RULES: List[Tuple[CategoryPredicate, str]] = [
    (_contains_any("prompt", "instruction"), CLARITY),
    (_contains_any("chain of thought", "reasoning"), REASONING),
    (_contains_any("error", "handling"), ERROR_HANDLING),
    (_contains_any("context", "memory"), CONTEXT),
    (_contains_any("output", "format"), OUTPUT_FORMAT),
    (_contains_any("tool", "function"), TOOL_USAGE),
    (_contains_any("architecture", "flow"), COORDINATION),
]


def match_category(category: str) -> Optional[str]:
    """Return the snippet id for a diagnostic category, or None if nothing matches."""
    lowered = (category or "").lower()
    for predicate, snippet_id in CATEGORY_RULES:
        if predicate(lowered):
            return snippet_id
    return None


def snippets_for(diagnostics: Iterable[DiagnosticResult]) -> List[str]:
    """
    Collect the deduplicated guidance snippets for a set of findings.

    Order follows the first finding that produced each snippet.
    """
    snippets: List[str] = []
    for diagnostic in diagnostics:
        if not diagnostic.is_actionable:
            continue
        snippet_id = match_category(diagnostic.category)
        if snippet_id is None:
            logger.debug("No snippet for diagnostic category", category=diagnostic.category)
            continue
        snippet = FIX_SNIPPETS[snippet_id]
        if snippet not in snippets:
            snippets.append(snippet)
    return snippets


def build_agent_prompt(agent: Agent, snippets: Sequence[str]) -> str:
    """Assemble the rewritten system prompt for one agent."""
    responsibilities = MAJOR_RESPONSIBILITIES if agent.is_major else SUB_RESPONSIBILITIES

    sections = [
        f"You are {agent.name}, a {agent.role_label} in a multi-agent system.",
        f"ROLE & RESPONSIBILITIES:\n{responsibilities}",
        "OPERATIONAL GUIDELINES:\n" + "\n".join(snippets),
        f"QUALITY STANDARDS:\n{QUALITY_STANDARDS}",
    ]
    if agent.system_prompt:
        sections.append(f"CURRENT CONTEXT:\n{agent.system_prompt}")
    sections.append(CLOSING_REMINDER)

    return "\n\n".join(sections)


def generate_prompt_fixes(
    agents: Iterable[Agent],
    diagnostics: Union[DiagnosticResponse, Iterable[DiagnosticResult]],
) -> PromptFixMap:
    """
    Synthesize prompt fixes for every agent that has applicable guidance.

    Args:
        agents: Agents to write prompts for
        diagnostics: A DiagnosticResponse or its list of findings

    Returns:
        Mapping of agent id to prompt text. Agents without any snippet are
        left out entirely.
    """
    if isinstance(diagnostics, DiagnosticResponse):
        diagnostics = diagnostics.diagnostics
    findings = list(diagnostics)

    prompt_fixes: PromptFixMap = {}
    for agent in agents:
        snippets = snippets_for(findings)
        if snippets:
            prompt_fixes[agent.id] = build_agent_prompt(agent, snippets)

    logger.info(
        "Generated prompt fixes",
        findings=len(findings),
        agents_fixed=len(prompt_fixes),
    )
    return prompt_fixes
