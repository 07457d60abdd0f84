"""
Pytest configuration and fixtures for Agent Debugger tests.

Provides reusable agent stores, diagnostic payloads and canned
collaborators so tests run without network access or environment variables.
"""

import os
from unittest.mock import patch

import pytest

from agent_debugger.core.hierarchy import AgentHierarchyStore
from agent_debugger.core.orchestrator import DiagnosticSession
from agent_debugger.integrations.mock_collaborator import StaticDiagnosticCollaborator
from agent_debugger.utils.config import config
from tests.mocks.diagnostic_mock import create_agent_records, create_diagnostic_payload


@pytest.fixture
def store():
    """Empty hierarchy store with the default parent policy."""
    return AgentHierarchyStore()


@pytest.fixture
def populated_store():
    """
    Store holding one major agent, two children and a dangling sub-agent.

    Usage:
        def test_something(populated_store):
            hierarchy = populated_store.list_hierarchy()
    """
    return AgentHierarchyStore.from_records(create_agent_records())


@pytest.fixture
def diagnostic_payload():
    return create_diagnostic_payload()


@pytest.fixture
def mock_collaborator(diagnostic_payload):
    """Collaborator returning the canonical diagnostic payload."""
    return StaticDiagnosticCollaborator(payload=diagnostic_payload)


@pytest.fixture
def session(populated_store, mock_collaborator):
    """Session over the populated store backed by the canned collaborator."""
    return DiagnosticSession(mock_collaborator, store=populated_store, user_id="test-user")


# Environment variable management for tests
@pytest.fixture(autouse=True)
def preserve_env():
    """
    Automatically preserve and restore environment variables for each test.

    This ensures tests don't pollute each other's environment.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def isolated_config():
    """Keep tests independent of any .env file or shell settings."""
    with patch.object(config, "mock_mode", False), \
            patch.object(config, "require_parent_for_sub", True), \
            patch.object(config, "diagnostic_user_id", "diagnostic-user"):
        yield
