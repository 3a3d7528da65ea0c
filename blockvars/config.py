"""
Configuration management for blockvars.

This module provides centralized configuration for all components:
- Variable naming (candidate letters, reserved prompt labels, messages)
- Type lattice settings (conflict sentinel, equivalence table location)
- Logging settings
"""

import os
from pathlib import Path
from typing import List, Literal, Optional, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()


class NamingConfig(BaseModel):
    """Configuration for generated names and the name prompt flows."""

    candidate_letters: str = Field(
        default="ijkmnopqrstuvwxyzabcdefgh",
        min_length=1,
        description="Single-letter candidates for generated names (no 'l')",
    )
    reserved_labels: List[str] = Field(
        default_factory=lambda: ["Create variable...", "Rename variable..."],
        description="Button labels that are never accepted as variable names",
    )
    new_variable_title: str = Field(default="New variable name:")
    rename_variable_title: str = Field(default='Rename all "%1" variables to:')
    already_exists: str = Field(default='A variable named "%1" already exists.')
    already_exists_for_another_type: str = Field(
        default='A variable named "%1" already exists for another type: "%2".'
    )


class LatticeConfig(BaseModel):
    """Configuration for type lattice reconciliation."""

    conflict_type: str = Field(
        default="Var",
        min_length=1,
        description="Type reported when no common type can be established",
    )
    separator: str = Field(
        default=":", min_length=1, description="Separator between type qualifiers"
    )
    equivalence_file: Optional[str] = Field(
        default=None, description="JSON file holding the type equivalence table"
    )

    @property
    def equivalence_path(self) -> Optional[Path]:
        """Get absolute path to the equivalence table, if configured."""
        if not self.equivalence_file:
            return None
        return Path(self.equivalence_file).resolve()


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "<level>{message}</level>",
        description="Log message format",
    )
    rotation: str = Field(default="10 MB", description="Log file rotation size")
    retention: str = Field(default="1 week", description="Log file retention period")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, description="Whether to enable file logging"
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for blockvars."""

    naming: NamingConfig = Field(default_factory=NamingConfig)
    lattice: LatticeConfig = Field(default_factory=LatticeConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            lattice=LatticeConfig(
                conflict_type=os.getenv("BLOCKVARS_CONFLICT_TYPE", "Var"),
                equivalence_file=os.getenv("BLOCKVARS_EQUIVALENCE_FILE") or None,
            ),
            logging=LogConfig(
                level=cast(
                    Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    os.getenv("BLOCKVARS_LOG_LEVEL", "INFO"),
                ),
                log_dir=os.getenv("BLOCKVARS_LOG_DIR", "logs"),
            ),
        )


# Global configuration instance
config = Config.from_env()
