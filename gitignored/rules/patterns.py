#!/usr/bin/env python3
r"""Glob matching primitive for ignore rules.

This module turns glob expressions into compiled regular expressions:
- ``?`` matches one character, ``*`` any run of characters
- ``**`` matches any number of path segments and must be a whole segment
- ``[abc]``, ``[a-z]``, ``[!abc]`` / ``[^abc]`` character classes
- ``\x`` matches ``x`` literally
- Case-sensitive and case-insensitive modes
- Optional literal separator: ``*`` and ``?`` never cross ``/``

Options are passed as an immutable :class:`MatchOptions` value on every call.

Example:
    >>> matches("**/dist/*.js", "/repo/build/dist/lib.js", MatchOptions())
    True
    >>> matches("/repo/*.js", "/repo/lib/a.js", MatchOptions(require_literal_separator=True))
    False
"""

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import PurePath
from typing import Any, List, Mapping, Optional, Pattern, Union

from gitignored.core.constants import ConfigKey, ErrorCode, GlobExpression, SEPARATOR
from gitignored.core.validators import ValidationError

PathLike = Union[str, "os.PathLike[str]"]

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class ConfigurationError(ValidationError):
    """Raised when a glob expression cannot be compiled."""

    def __init__(self, message: str, expression: GlobExpression):
        super().__init__(f"{message}: {expression!r}", ErrorCode.INVALID_INPUT)
        self.reason = message
        self.expression = expression


@dataclass(frozen=True)
class MatchOptions:
    """Options a glob expression is evaluated with."""

    case_sensitive: bool = True
    require_literal_separator: bool = False

    def with_separator(self, required: bool) -> "MatchOptions":
        """Return a copy with ``require_literal_separator`` set to ``required``."""
        return replace(self, require_literal_separator=required)

    @classmethod
    def from_config(cls, section: Optional[Mapping[str, Any]] = None) -> "MatchOptions":
        """Build options from the ``matching`` configuration section.

        Args:
            section: Mapping with an optional ``case_sensitive`` key

        Returns:
            Match options
        """
        section = section or {}
        return cls(case_sensitive=bool(section.get(ConfigKey.CASE_SENSITIVE, True)))


DEFAULT_OPTIONS = MatchOptions()


def escape(literal: str) -> GlobExpression:
    """Escape glob metacharacters so ``literal`` only matches itself.

    Args:
        literal: Text to embed in a glob expression, typically a directory path

    Returns:
        Escaped glob expression
    """
    return _GLOB_SPECIAL.sub(r"\\\1", literal)


def normalize_path(path: PathLike) -> str:
    """Return ``path`` in the POSIX string form expressions are matched against."""
    if isinstance(path, PurePath):
        return path.as_posix()
    return os.fspath(path)


def translate(expression: GlobExpression, options: MatchOptions = DEFAULT_OPTIONS) -> str:
    """Translate a glob expression into regular expression source.

    Args:
        expression: Glob expression
        options: Match options (only the separator rule affects the result)

    Returns:
        Regular expression source, to be matched against a whole path

    Raises:
        ConfigurationError: If the expression is malformed
    """
    any_run = "[^/]*" if options.require_literal_separator else ".*"
    any_char = "[^/]" if options.require_literal_separator else "."

    parts: List[str] = []
    i = 0
    n = len(expression)

    while i < n:
        char = expression[i]

        if char == "*":
            if expression.startswith("**", i):
                i = _translate_recursive(expression, i, parts)
            else:
                parts.append(any_run)
                i += 1
        elif char == "?":
            parts.append(any_char)
            i += 1
        elif char == "[":
            i = _translate_class(expression, i, parts, options)
        elif char == "\\":
            if i + 1 == n:
                raise ConfigurationError("Dangling escape at end of pattern", expression)
            parts.append(re.escape(expression[i + 1]))
            i += 2
        else:
            parts.append(re.escape(char))
            i += 1

    return "".join(parts)


def _translate_recursive(expression: str, start: int, parts: List[str]) -> int:
    """Translate a ``**`` starting at ``start``; return the next index."""
    end = start + 2
    n = len(expression)

    if end < n and expression[end] == "*":
        raise ConfigurationError("'***' is not a valid wildcard", expression)

    alone = (start == 0 or expression[start - 1] == SEPARATOR) and (
        end == n or expression[end] == SEPARATOR
    )
    if not alone:
        raise ConfigurationError("'**' must be alone in a path segment", expression)

    if end == n:
        # Trailing ** matches everything below
        parts.append(".*")
        return end

    # **/ matches zero or more directories
    parts.append("(?:.*/)?")
    return end + 1


def _translate_class(expression: str, start: int, parts: List[str], options: MatchOptions) -> int:
    """Translate a ``[...]`` class starting at ``start``; return the next index."""
    i = start + 1
    n = len(expression)

    negate = i < n and expression[i] in "!^"
    if negate:
        i += 1

    body_start = i
    # A leading ] is a literal member of the class
    if i < n and expression[i] == "]":
        i += 1

    end = expression.find("]", i)
    if end < 0:
        raise ConfigurationError("Unclosed character class", expression)

    body = expression[body_start:end]
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]").replace("^", "\\^")

    if negate and options.require_literal_separator:
        # The lookahead keeps "/" out of the class body, where it could close a range
        parts.append(f"(?!/)[^{body}]")
    elif negate:
        parts.append(f"[^{body}]")
    else:
        parts.append(f"[{body}]")

    return end + 1


def compile_glob(expression: GlobExpression, options: MatchOptions = DEFAULT_OPTIONS) -> Pattern[str]:
    """Compile a glob expression.

    Args:
        expression: Glob expression
        options: Match options

    Returns:
        Compiled regular expression

    Raises:
        ConfigurationError: If the expression cannot be compiled
    """
    source = translate(expression, options)
    flags = 0 if options.case_sensitive else re.IGNORECASE

    try:
        return re.compile(source, flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid pattern ({e.msg})", expression) from e


@dataclass(frozen=True)
class GlobPattern:
    """A compiled glob expression together with its options."""

    expression: GlobExpression
    options: MatchOptions
    regex: Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def compile(cls, expression: GlobExpression, options: MatchOptions = DEFAULT_OPTIONS) -> "GlobPattern":
        """Compile ``expression``.

        Raises:
            ConfigurationError: If the expression cannot be compiled
        """
        return cls(expression, options, compile_glob(expression, options))

    def matches(self, path: PathLike) -> bool:
        """Check if the whole of ``path`` matches this expression."""
        return self.regex.fullmatch(normalize_path(path)) is not None


def matches(expression: GlobExpression, path: PathLike, options: MatchOptions = DEFAULT_OPTIONS) -> bool:
    """Check if ``path`` matches a glob expression.

    Args:
        expression: Glob expression
        path: Path to test
        options: Match options

    Returns:
        True if the whole path matches

    Raises:
        ConfigurationError: If the expression cannot be compiled
    """
    return GlobPattern.compile(expression, options).matches(path)
