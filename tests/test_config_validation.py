"""Tests for configuration loading and validation."""

import os
from unittest.mock import patch

import pytest

from agent_debugger.utils.config import AgentDebuggerConfig


@patch.dict(os.environ, {}, clear=True)
def test_defaults():
    config = AgentDebuggerConfig.from_env()

    assert config.agent_api_url == ""
    assert config.diagnostic_user_id == "diagnostic-user"
    assert config.agent_api_timeout is None
    assert config.require_parent_for_sub is True
    assert config.mock_mode is False


@patch.dict(
    os.environ,
    {
        "AGENT_API_URL": "https://agents.example.com/run",
        "AGENT_API_KEY": "key",
        "AGENT_API_TIMEOUT": "30",
        "REQUIRE_PARENT_FOR_SUB": "false",
        "AGENT_DEBUGGER_MOCK_MODE": "true",
    },
    clear=True,
)
def test_from_env():
    config = AgentDebuggerConfig.from_env()

    assert config.agent_api_url == "https://agents.example.com/run"
    assert config.agent_api_timeout == 30.0
    assert config.require_parent_for_sub is False
    assert config.mock_mode is True


def test_validate_agent_api_missing_url():
    config = AgentDebuggerConfig(agent_api_key="key")
    with pytest.raises(ValueError, match="AGENT_API_URL is required"):
        config.validate_agent_api()


def test_validate_agent_api_missing_key():
    config = AgentDebuggerConfig(agent_api_url="https://agents.example.com/run")
    with pytest.raises(ValueError, match="AGENT_API_KEY is required"):
        config.validate_agent_api()


def test_validate_with_settings():
    config = AgentDebuggerConfig(agent_api_url="https://agents.example.com/run", agent_api_key="key")
    config.validate()  # Should not raise


def test_mock_mode_skips_agent_api_checks():
    config = AgentDebuggerConfig(mock_mode=True)
    config.validate()  # Should not raise


def test_validate_timeout():
    config = AgentDebuggerConfig(mock_mode=True, agent_api_timeout=0)
    with pytest.raises(ValueError, match="AGENT_API_TIMEOUT must be positive"):
        config.validate()


def test_validate_log_level():
    config = AgentDebuggerConfig(mock_mode=True, log_level="LOUD")
    with pytest.raises(ValueError, match="Unknown LOG_LEVEL"):
        config.validate()


@patch.dict(os.environ, {"AGENT_API_TIMEOUT": "soon"}, clear=True)
def test_malformed_timeout_reported_by_validate():
    config = AgentDebuggerConfig.from_env()  # Should not raise
    config.mock_mode = True

    with pytest.raises(ValueError, match="AGENT_API_TIMEOUT must be a number: 'soon'"):
        config.validate()


@patch.dict(os.environ, {"AGENT_API_TIMEOUT": "soon"}, clear=True)
def test_malformed_timeout_blocks_agent_api_client():
    config = AgentDebuggerConfig.from_env()
    config.agent_api_url = "https://agents.example.com/run"
    config.agent_api_key = "key"

    with pytest.raises(ValueError, match="must be a number"):
        config.validate_agent_api()
