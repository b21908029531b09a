"""CLI module for vsm-publisher.

This module provides the command-line interface for the publisher.
Every option also reads a VSM_* environment variable.
"""

from .main import (
    Config,
    build_config,
    cli,
    evaluate_boolean,
    main,
    run_pipeline,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run_pipeline",
    "evaluate_boolean",
]
