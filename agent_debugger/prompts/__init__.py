"""Prompt text used when talking to the diagnostic service and when writing fixes."""
