"""Diagnostic normalization, prompt-fix synthesis and reporting."""

from .normalizer import normalize
from .prompt_fixes import build_agent_prompt, generate_prompt_fixes, match_category, snippets_for
from .report import format_report, health_band, status_counts

__all__ = [
    "normalize",
    "generate_prompt_fixes",
    "build_agent_prompt",
    "match_category",
    "snippets_for",
    "format_report",
    "health_band",
    "status_counts",
]
