"""HTTP server for the Agent Debugger web client."""
