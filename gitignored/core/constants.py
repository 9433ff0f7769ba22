"""
gitignored Core: Constants and Type Definitions

This module provides package-wide constants, error codes, and type definitions.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
GITIGNORED_VERSION = "0.1.0"


class ErrorCode(IntEnum):
    """Standardized error codes for gitignored operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, rule or configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    ENCODING_ERROR = 4  # Input is not valid text
    INTERNAL_ERROR = 6  # Bug in gitignored


# Type aliases for clarity
RawRule: TypeAlias = str
GlobExpression: TypeAlias = str

# Conventional ignore file name
IGNORE_FILENAME = ".gitignore"

COMMENT_PREFIX = "#"
NEGATION_PREFIX = "!"
SEPARATOR = "/"
RECURSIVE_WILDCARD = "**"


class Limits:
    """Input limits."""

    MAX_PATH_LENGTH = 4096
    MAX_RULE_LENGTH = 4096
    MAX_IGNORE_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "gitignored"
    IGNORE_FILE = "ignore_file"
    RULES = "rules"
    MATCHING = "matching"
    LOGGING = "logging"

    # Matching configuration
    CASE_SENSITIVE = "case_sensitive"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.IGNORE_FILE: IGNORE_FILENAME,
        ConfigKey.RULES: [],
        ConfigKey.MATCHING: {
            ConfigKey.CASE_SENSITIVE: True,
        },
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "WARNING",
            ConfigKey.LOG_FILE: None,
        },
    }
}
