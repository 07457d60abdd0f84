"""Plain-text rendering of diagnostic results."""

from collections import Counter
from typing import Dict

from ..core.models import DiagnosticResponse, DiagnosticStatus


def health_band(score: int) -> str:
    """Bucket a health score: good (>= 80), fair (>= 60) or poor."""
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"


def status_counts(response: DiagnosticResponse) -> Dict[str, int]:
    """Count findings per status, including statuses with no findings."""
    counts = Counter(diagnostic.status.value for diagnostic in response.diagnostics)
    return {status.value: counts.get(status.value, 0) for status in DiagnosticStatus}


def format_report(response: DiagnosticResponse) -> str:
    """Render the full diagnostic report as copyable text."""
    recommendations = "\n\n".join(
        f"{i}. {diagnostic.category}\n   {diagnostic.recommended_fix}"
        for i, diagnostic in enumerate(response.diagnostics, start=1)
    )
    actions = "\n".join(
        f"{i}. {action}" for i, action in enumerate(response.priority_actions, start=1)
    )

    return (
        "DIAGNOSTIC REPORT\n"
        f"Health Score: {response.overall_health_score}/100\n"
        "\n"
        "RECOMMENDATIONS:\n"
        f"{recommendations}\n"
        "\n"
        "PRIORITY ACTIONS:\n"
        f"{actions}\n"
    )
