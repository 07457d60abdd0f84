"""
Guidance snippets and fixed blocks for synthesized prompt fixes.

Snippet text is keyed by category id and must stay stable: downstream tooling
and tests compare synthesized prompts against these literals.
"""

CLARITY = "clarity"
REASONING = "reasoning"
ERROR_HANDLING = "error_handling"
CONTEXT = "context"
OUTPUT_FORMAT = "output_format"
TOOL_USAGE = "tool_usage"
COORDINATION = "coordination"

FIX_SNIPPETS = {
    CLARITY: (
        "- Be clear and specific in your responses\n"
        "- Follow a structured approach: analyze, plan, then execute\n"
        "- Provide detailed explanations for your decisions"
    ),
    REASONING: (
        "- Show your reasoning step-by-step\n"
        "- Break down complex tasks into smaller steps\n"
        "- Explain your thought process before providing solutions"
    ),
    ERROR_HANDLING: (
        "- Validate inputs before processing\n"
        "- Provide clear error messages when issues occur\n"
        "- Handle edge cases gracefully"
    ),
    CONTEXT: (
        "- Maintain conversation context throughout interactions\n"
        "- Reference previous information when relevant\n"
        "- Build upon earlier decisions coherently"
    ),
    OUTPUT_FORMAT: (
        "- Structure your responses in a clear, consistent format\n"
        "- Use appropriate formatting (lists, sections, code blocks)\n"
        "- Ensure outputs are parseable and well-organized"
    ),
    TOOL_USAGE: (
        "- Use available tools appropriately for each task\n"
        "- Verify tool outputs before proceeding\n"
        "- Choose the most efficient tool for each operation"
    ),
    COORDINATION: (
        "- Coordinate with other agents when needed\n"
        "- Follow the established workflow pattern\n"
        "- Communicate status and results clearly to downstream agents"
    ),
}

MAJOR_RESPONSIBILITIES = (
    "- Coordinate sub-agents and manage the overall workflow\n"
    "- Make high-level decisions and delegate tasks appropriately\n"
    "- Ensure consistent communication between all system components"
)

SUB_RESPONSIBILITIES = (
    "- Perform specialized tasks as directed by your parent agent\n"
    "- Report results clearly and concisely\n"
    "- Maintain focus on your specific domain of expertise"
)

QUALITY_STANDARDS = (
    "- Accuracy: Ensure all outputs are correct and verified\n"
    "- Clarity: Communicate in clear, unambiguous language\n"
    "- Efficiency: Complete tasks using optimal approaches\n"
    "- Reliability: Handle errors gracefully and maintain system stability"
)

CLOSING_REMINDER = (
    "Remember: Your role is critical to the system's success. "
    "Follow these guidelines consistently."
)
