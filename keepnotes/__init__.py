"""
Keep-style note manager.

- backend/: Note store access, in-memory note state, configuration, logging
- cli/: Command-line client (Typer + Rich)
"""
