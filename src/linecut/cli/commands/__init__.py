"""CLI command implementations for the linecut application.

This package contains subcommands for the linecut CLI, including:
- validate: Validate a configuration file
"""

from linecut.cli.commands.validate import validate_command

__all__ = ["validate_command"]
