"""
Agent Debugger: diagnostic tooling for multi-agent systems.

Describe a hierarchy of major and sub agents, explain how the system should
behave versus how it actually behaves, and get back a structured diagnostic
report plus synthesized system-prompt fixes for each agent.
"""

__version__ = "0.1.0"
