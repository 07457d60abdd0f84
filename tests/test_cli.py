"""
CLI smoke tests.

Runs the real click commands against agent and diagnostic files written to
a temporary directory; analysis uses the canned collaborator via --mock.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from agent_debugger.cli import main
from agent_debugger.prompts.fix_snippets import FIX_SNIPPETS, REASONING
from tests.mocks.diagnostic_mock import create_agent_records, create_diagnostic_payload


@pytest.fixture
def cli_runner():
    """Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def agents_file(tmp_path):
    path = tmp_path / "agents.yaml"
    path.write_text(yaml.safe_dump({"agents": create_agent_records()}))
    return path


@pytest.fixture
def diagnostics_file(tmp_path):
    path = tmp_path / "diagnostics.json"
    path.write_text(json.dumps({"data": create_diagnostic_payload()}))
    return path


def test_version(cli_runner):
    result = cli_runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "Agent Debugger v0.1.0" in result.output


def test_hierarchy_command(cli_runner, agents_file):
    result = cli_runner.invoke(main, ["hierarchy", "--agents", str(agents_file)])

    assert result.exit_code == 0
    assert "Orchestrator" in result.output
    assert "dangling parent agent-99" in result.output


def test_fix_command_writes_yaml(cli_runner, agents_file, diagnostics_file, tmp_path):
    out = tmp_path / "fixes.yaml"
    result = cli_runner.invoke(main, [
        "fix", "--agents", str(agents_file), "--diagnostics", str(diagnostics_file), "--out", str(out),
    ])

    assert result.exit_code == 0, result.output
    fixes = yaml.safe_load(out.read_text())
    assert list(fixes) == ["agent-1", "agent-2", "agent-3", "agent-4"]
    assert FIX_SNIPPETS[REASONING] in fixes["agent-1"]


def test_fix_command_prints(cli_runner, agents_file, diagnostics_file):
    result = cli_runner.invoke(main, [
        "fix", "--agents", str(agents_file), "--diagnostics", str(diagnostics_file),
    ])

    assert result.exit_code == 0
    assert "You are Researcher, a specialized sub-agent" in result.output


def test_fix_command_rejects_bad_diagnostics(cli_runner, agents_file, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"foo": 1}))

    result = cli_runner.invoke(main, ["fix", "--agents", str(agents_file), "--diagnostics", str(bad)])

    assert result.exit_code == 1
    assert "unrecognized diagnostic response shape" in result.output


def test_fix_command_rejects_bad_agents(cli_runner, diagnostics_file, tmp_path):
    agents = tmp_path / "agents.json"
    agents.write_text(json.dumps([{"name": "Loose", "type": "sub"}]))

    result = cli_runner.invoke(main, ["fix", "--agents", str(agents), "--diagnostics", str(diagnostics_file)])

    assert result.exit_code == 1
    assert "Could not load agents" in result.output


def test_report_plain(cli_runner, diagnostics_file):
    result = cli_runner.invoke(main, ["report", "--diagnostics", str(diagnostics_file), "--plain"])

    assert result.exit_code == 0
    assert "Health Score: 70/100" in result.output
    assert "1. Add step-by-step reasoning" in result.output


def test_report_table(cli_runner, diagnostics_file):
    result = cli_runner.invoke(main, ["report", "--diagnostics", str(diagnostics_file)])

    assert result.exit_code == 0
    assert "70/100 (fair)" in result.output


def test_analyze_mock(cli_runner, agents_file, tmp_path):
    out = tmp_path / "result.json"
    fixes_out = tmp_path / "fixes.json"
    result = cli_runner.invoke(main, [
        "analyze",
        "--agents", str(agents_file),
        "--expected-behavior", "Route billing questions",
        "--actual-behavior", "Everything goes to research",
        "--out", str(out),
        "--fixes-out", str(fixes_out),
        "--format", "json",
        "--mock",
    ])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text())["overall_health_score"] == 62
    assert set(json.loads(fixes_out.read_text())) == {"agent-1", "agent-2", "agent-3", "agent-4"}


def test_analyze_without_settings(cli_runner, agents_file, monkeypatch):
    from agent_debugger.utils.config import config

    monkeypatch.setattr(config, "agent_api_url", "")
    result = cli_runner.invoke(main, [
        "analyze", "--agents", str(agents_file),
        "--expected-behavior", "a", "--actual-behavior", "b",
    ])

    assert result.exit_code == 1
    assert "AGENT_API_URL is required" in result.output


def test_config_check_fails_without_settings(cli_runner, monkeypatch):
    from agent_debugger.utils.config import config

    monkeypatch.setattr(config, "agent_api_url", "")
    result = cli_runner.invoke(main, ["config-check"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
