"""
Message templates for the external diagnostic agent.

Templates are rendered with jinja2; the agent hierarchy arrives pre-serialized
as indented JSON.
"""

FLOW_NOT_PROVIDED = "Not provided - please infer from agent structure"

DIAGNOSTIC_REQUEST_TEMPLATE = """
AGENT SYSTEM CONFIGURATION:
{{ agent_hierarchy_json }}

FLOW DESCRIPTION:
{{ flow_description or flow_not_provided }}

EXPECTED BEHAVIOR:
{{ expected_behavior }}

ACTUAL BEHAVIOR:
{{ actual_behavior }}

Please analyze this multi-agent system and provide comprehensive diagnostics across all 7 categories.
"""
