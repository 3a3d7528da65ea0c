"""
Logging infrastructure for blockvars.

Provides component-bound loguru loggers for:
- Registry mutations (create, rename, conflicts)
- Type lattice reconciliation steps
- Usage-site collection
- Name prompt flows
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from loguru import logger

COMPONENTS = ("registry", "lattice", "document", "prompt")


class BlockVarsLogger:
    """
    Logger setup for blockvars with component-specific sinks.

    Features:
    - Structured logging with a bound ``component``
    - Optional console and rotating file sinks
    - A dedicated file per component when file logging is enabled
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        rotation: str = "10 MB",
        retention: str = "1 week",
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_file_logging: bool = False,
        enable_console_logging: bool = True,
    ):
        """
        Initialize the blockvars logger.

        Args:
            log_dir: Directory for log files
            rotation: When to rotate log files
            retention: How long to keep old logs
            level: Default log level
            format_string: Custom format string
            enable_file_logging: Whether to log to files
            enable_console_logging: Whether to log to console
        """
        self.log_dir = log_dir or Path("logs")
        self.rotation = rotation
        self.retention = retention
        self.level = level

        self.format_string = format_string or (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        # Remove default handler
        logger.remove()
        logger.configure(extra={"component": "system"})

        if enable_console_logging:
            logger.add(
                sys.stderr,
                format=self.format_string,
                level=level,
                colorize=True,
            )

        if enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handlers()

    def _add_file_handlers(self) -> None:
        """Add the main log file and one file per component."""
        logger.add(
            self.log_dir / "blockvars.log",
            format=self.format_string,
            level=self.level,
            rotation=self.rotation,
            retention=self.retention,
        )

        for component in COMPONENTS:
            logger.add(
                self.log_dir / f"{component}.log",
                format=self.format_string,
                level="DEBUG",
                rotation=self.rotation,
                retention=self.retention,
                filter=lambda record, c=component: record["extra"].get("component") == c,
            )


def get_blockvars_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Args:
        component: Component name

    Returns:
        Logger instance

    Example:
        >>> log = get_blockvars_logger("registry")
        >>> log.debug("Created variable", name="i")
    """
    return logger.bind(component=component)


def log_registry_operation(logger_instance: Any, operation: str, **kwargs: Any) -> None:
    """
    Log a namespace mutation or lookup.

    Args:
        logger_instance: Logger to use
        operation: Operation type (e.g., "create", "rename")
        **kwargs: Additional context (id, name, type, namespace)
    """
    # Context is bound rather than passed as format arguments: names are user input.
    logger_instance.bind(
        operation=operation, timestamp=datetime.now().isoformat(), **kwargs
    ).debug(f"Registry operation: {operation}")


def log_reconciliation_step(
    logger_instance: Any,
    name: str,
    previous: Any,
    contributed: Any,
    result: Any,
    **kwargs: Any,
) -> None:
    """
    Log one fold step of type reconciliation.

    Args:
        logger_instance: Logger to use
        name: Variable name being reconciled
        previous: Types before this step
        contributed: Types contributed by the usage site
        result: Types after intersection
        **kwargs: Additional context (site id, site kind)
    """
    logger_instance.bind(
        variable=name, timestamp=datetime.now().isoformat(), **kwargs
    ).debug(f"For: {name} was: {previous} got: {contributed} result={result}")


def initialize_logging(
    log_dir: Optional[Path] = None, level: str = "INFO", **kwargs: Any
) -> BlockVarsLogger:
    """
    Initialize the blockvars logging system.

    This should be called once at application startup.

    Args:
        log_dir: Directory for log files
        level: Default log level
        **kwargs: Additional configuration for BlockVarsLogger

    Returns:
        Configured BlockVarsLogger instance
    """
    return BlockVarsLogger(log_dir=log_dir, level=level, **kwargs)


def initialize_from_config(log_config: Any) -> BlockVarsLogger:
    """Initialize logging from a ``LogConfig``."""
    return initialize_logging(
        log_dir=Path(log_config.log_dir),
        level=log_config.level,
        format_string=log_config.format,
        rotation=log_config.rotation,
        retention=log_config.retention,
        enable_file_logging=log_config.enable_file_logging,
        enable_console_logging=log_config.enable_console_logging,
    )

