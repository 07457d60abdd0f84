"""File loading utilities for agent definitions and diagnostic payloads."""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from ..core.exceptions import ValidationError
from ..core.hierarchy import AgentHierarchyStore


def load_structured_file(path: Union[str, Path]) -> Any:
    """
    Load a JSON or YAML file.

    ``.yaml``/``.yml`` files are parsed as YAML, everything else as JSON.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content cannot be parsed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    text = file_path.read_text()
    if file_path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def load_agents_file(
    path: Union[str, Path], require_parent_for_sub: bool = True
) -> AgentHierarchyStore:
    """
    Load agent definitions into a hierarchy store.

    The file holds either a list of agent records or ``{"agents": [...]}``.
    """
    data = load_structured_file(path)
    if isinstance(data, dict):
        data = data.get("agents")
    if not isinstance(data, list):
        raise ValidationError(f"Agent file must contain a list of agents: {path}")

    return AgentHierarchyStore.from_records(data, require_parent_for_sub=require_parent_for_sub)
