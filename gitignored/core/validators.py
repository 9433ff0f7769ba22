"""
gitignored Core: Input Validators.

This module provides validation functions for rules, paths, configuration,
and the text-decoding checks that keep undecodable input from ever excluding
a path.
"""
import os
from typing import Any, Dict, Union

from gitignored.core.constants import ConfigKey, ErrorCode, Limits

TextLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


class EncodingError(ValidationError):
    """Raised when a rule or path is not valid text."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ENCODING_ERROR)


def ensure_text(value: TextLike) -> str:
    """Return ``value`` as a string that round-trips through UTF-8.

    Bytes must decode as UTF-8. Strings must not carry surrogate escapes,
    which is how ``os.fsdecode`` and ``surrogateescape`` reading represent
    undecodable file names and lines.

    Args:
        value: String, bytes or path-like object

    Returns:
        Decoded text

    Raises:
        EncodingError: If the value is not valid text
    """
    value = os.fspath(value)

    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"Not valid UTF-8: {value!r} ({e.reason})")

    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Not valid text: {value!r} ({e.reason})")

    return value


def validate_rule(rule: str) -> bool:
    """Validate a single ignore rule.

    Empty rules are valid; they are treated as no-ops.

    Args:
        rule: Rule text

    Returns:
        True if valid

    Raises:
        ValidationError: If rule is invalid
    """
    if not isinstance(rule, str):
        raise ValidationError(f"Rule must be string, got {type(rule)}")

    if len(rule) > Limits.MAX_RULE_LENGTH:
        raise ValidationError(f"Rule exceeds maximum length ({Limits.MAX_RULE_LENGTH})")

    if "\0" in rule:
        raise ValidationError("Invalid rule: contains null bytes")

    return True


def validate_path(path: str) -> bool:
    """Validate that a path can be evaluated.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not path:
        raise ValidationError("Path cannot be empty")

    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    return True


def validate_log_level(level: str) -> bool:
    """Validate a log level name.

    Args:
        level: Level name (case-insensitive)

    Returns:
        True if valid

    Raises:
        ValidationError: If level is unknown
    """
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise ValidationError(f"Invalid log level: {level}. Must be one of {list(_LOG_LEVELS)}")

    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the ``gitignored`` configuration section.

    Args:
        config: Configuration dictionary (the contents of the ``gitignored`` key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.IGNORE_FILE in config:
        ignore_file = config[ConfigKey.IGNORE_FILE]
        if not isinstance(ignore_file, str) or not ignore_file:
            raise ValidationError(f"Ignore file must be a non-empty string: {ignore_file}")

    if ConfigKey.RULES in config:
        rules = config[ConfigKey.RULES]
        if not isinstance(rules, list):
            raise ValidationError("Rules must be a list")

        for i, rule in enumerate(rules):
            try:
                validate_rule(rule)
            except ValidationError as e:
                raise ValidationError(f"Invalid rule at index {i}: {e}")

    if ConfigKey.MATCHING in config:
        matching = config[ConfigKey.MATCHING]
        if not isinstance(matching, dict):
            raise ValidationError("Matching configuration must be a dictionary")

        case_sensitive = matching.get(ConfigKey.CASE_SENSITIVE, True)
        if not isinstance(case_sensitive, bool):
            raise ValidationError(f"case_sensitive must be boolean: {case_sensitive}")

    if ConfigKey.LOGGING in config:
        logging_config = config[ConfigKey.LOGGING]
        if not isinstance(logging_config, dict):
            raise ValidationError("Logging configuration must be a dictionary")

        if ConfigKey.LOG_LEVEL in logging_config:
            validate_log_level(logging_config[ConfigKey.LOG_LEVEL])

    return True
