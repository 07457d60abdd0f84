"""Tests for loading agent and diagnostic files."""

import json

import pytest
import yaml

from agent_debugger.core.exceptions import ValidationError
from agent_debugger.utils.file_helpers import load_agents_file, load_structured_file
from tests.mocks.diagnostic_mock import create_agent_records


def test_load_agents_from_json_list(tmp_path):
    path = tmp_path / "agents.json"
    path.write_text(json.dumps(create_agent_records()))

    store = load_agents_file(path)

    assert [a.id for a in store.agents] == ["agent-1", "agent-2", "agent-3", "agent-4"]


def test_load_agents_from_yaml_mapping(tmp_path):
    path = tmp_path / "agents.yml"
    path.write_text(yaml.safe_dump({"agents": create_agent_records()}))

    store = load_agents_file(path)

    assert store.get("agent-2").parent_id == "agent-1"


def test_orphans_allowed_when_policy_off(tmp_path):
    path = tmp_path / "agents.json"
    path.write_text(json.dumps([{"name": "Loose", "type": "sub"}]))

    with pytest.raises(ValidationError):
        load_agents_file(path)
    assert len(load_agents_file(path, require_parent_for_sub=False)) == 1


def test_agents_file_must_hold_a_list(tmp_path):
    path = tmp_path / "agents.json"
    path.write_text(json.dumps({"agent": {"name": "One"}}))

    with pytest.raises(ValidationError, match="list of agents"):
        load_agents_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_structured_file(tmp_path / "missing.json")


def test_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"agents": [')

    with pytest.raises(ValueError, match="Invalid JSON"):
        load_structured_file(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("agents: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_structured_file(path)
