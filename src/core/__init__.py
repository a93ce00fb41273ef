"""Core module for configuration, field parsing, exceptions and logging.

Patterns applied:
- Pydantic Settings with SettingsConfigDict
- Custom namespaced exceptions
"""
