"""Configuration management for Agent Debugger."""

import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        return float("nan")


@dataclass
class AgentDebuggerConfig:
    """Configuration settings for Agent Debugger."""

    # Diagnostic agent service
    agent_api_url: str = ""
    agent_api_key: Optional[str] = None
    diagnostic_agent_id: str = "697e1751066158e77fde5fcb"
    diagnostic_user_id: str = "diagnostic-user"
    agent_api_timeout: Optional[float] = None  # None waits indefinitely
    agent_api_timeout_raw: Optional[str] = None

    # Hierarchy policy
    require_parent_for_sub: bool = True

    # General settings
    log_level: str = "INFO"
    debug: bool = False
    mock_mode: bool = False

    @classmethod
    def from_env(cls) -> "AgentDebuggerConfig":
        """Load configuration from environment variables."""
        return cls(
            agent_api_url=os.getenv("AGENT_API_URL", ""),
            agent_api_key=os.getenv("AGENT_API_KEY"),
            diagnostic_agent_id=os.getenv("DIAGNOSTIC_AGENT_ID", "697e1751066158e77fde5fcb"),
            diagnostic_user_id=os.getenv("DIAGNOSTIC_USER_ID", "diagnostic-user"),
            agent_api_timeout=_optional_float(os.getenv("AGENT_API_TIMEOUT")),
            agent_api_timeout_raw=os.getenv("AGENT_API_TIMEOUT"),
            require_parent_for_sub=os.getenv("REQUIRE_PARENT_FOR_SUB", "true").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            mock_mode=os.getenv("AGENT_DEBUGGER_MOCK_MODE", "false").lower() == "true",
        )

    def validate_agent_api(self) -> None:
        """Check the settings needed to call the diagnostic agent service."""
        if not self.agent_api_url:
            raise ValueError("AGENT_API_URL is required")

        if not self.agent_api_key:
            raise ValueError("AGENT_API_KEY is required")

        if not self.diagnostic_agent_id:
            raise ValueError("DIAGNOSTIC_AGENT_ID is required")

        self._validate_timeout()

    def validate(self) -> None:
        """Validate configuration."""
        if not self.mock_mode:
            self.validate_agent_api()

        self._validate_timeout()

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level}")

    def _validate_timeout(self) -> None:
        if self.agent_api_timeout is None:
            return
        # NaN marks a value that could not be parsed
        if math.isnan(self.agent_api_timeout):
            raise ValueError(f"AGENT_API_TIMEOUT must be a number: {self.agent_api_timeout_raw!r}")
        if self.agent_api_timeout <= 0:
            raise ValueError("AGENT_API_TIMEOUT must be positive")


# Global config instance
config = AgentDebuggerConfig.from_env()
