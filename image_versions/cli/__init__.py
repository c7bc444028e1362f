"""CLI module for image-versions-action.

This module provides the command-line interface for the image versions action.
It supports both CLI arguments and environment variables for configuration.
"""

from .main import (
    build_config,
    cli,
    evaluate_boolean,
    initialize_sentry,
    main,
)

__all__ = [
    "cli",
    "main",
    "build_config",
    "evaluate_boolean",
    "initialize_sentry",
]
