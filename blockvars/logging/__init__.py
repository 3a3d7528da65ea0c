"""
Logging infrastructure for blockvars.

Provides component-bound loguru loggers and structured logging helpers.
"""

from .logger import (
    BlockVarsLogger,
    get_blockvars_logger,
    initialize_logging,
    initialize_from_config,
    log_registry_operation,
    log_reconciliation_step,
)

__all__ = [
    "BlockVarsLogger",
    "get_blockvars_logger",
    "initialize_logging",
    "initialize_from_config",
    "log_registry_operation",
    "log_reconciliation_step",
]
