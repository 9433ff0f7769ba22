#!/usr/bin/env python3
"""Expansion of classified patterns into root-anchored glob expressions.

Every expression is rooted at the escaped root directory:

=========  ==========  =================================================
kind       anchor      expressions
=========  ==========  =================================================
FILE       RELATIVE    ``root/text``
FILE       ANYWHERE    ``root/**/text``
DIRECTORY  RELATIVE    ``root/dir``, ``root/dir/**/*``
DIRECTORY  ANYWHERE    ``root/**/dir``, ``root/**/dir/**/*``
BOTH       RELATIVE    ``root/text*``, ``root/text/**``
BOTH       ANYWHERE    ``root/**/text*``, ``root/**/text/**``
=========  ==========  =================================================

Relative expressions are matched with a literal separator (``*`` stays
within one segment); anywhere expressions are not.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Sequence, Tuple

from gitignored.core.constants import SEPARATOR
from gitignored.rules.classifier import AnchorMode, PathKind, Pattern
from gitignored.rules.patterns import (
    DEFAULT_OPTIONS,
    GlobPattern,
    MatchOptions,
    PathLike,
    escape,
)

_DESCENDANTS = "**/*"
_SUBTREE = "/**"


@dataclass(frozen=True)
class MatchSpec:
    """Compiled expressions for one pattern; a path matches if any of them does."""

    globs: Tuple[GlobPattern, ...]
    options: MatchOptions

    @classmethod
    def compile(cls, expressions: Sequence[str], options: MatchOptions) -> "MatchSpec":
        """Compile ``expressions`` with ``options``.

        Raises:
            ConfigurationError: If any expression cannot be compiled
        """
        return cls(tuple(GlobPattern.compile(e, options) for e in expressions), options)

    @property
    def expressions(self) -> Tuple[str, ...]:
        return tuple(g.expression for g in self.globs)

    def matches(self, target: PathLike) -> bool:
        return any(g.matches(target) for g in self.globs)


class PathExpander:
    """Turn :class:`Pattern` records into :class:`MatchSpec` values.

    The expander only carries the caller's base options (case sensitivity);
    the separator rule of each expansion is decided per pattern and carried
    by the returned :class:`MatchSpec`, never stored.
    """

    def __init__(self, options: MatchOptions = DEFAULT_OPTIONS):
        self._options = options

    @property
    def options(self) -> MatchOptions:
        return self._options

    def expressions(self, pattern: Pattern, root: PathLike) -> Tuple[Tuple[str, ...], MatchOptions]:
        """Build the expressions for ``pattern`` without compiling them.

        Args:
            pattern: Classified pattern
            root: Directory relative patterns are anchored to

        Returns:
            Tuple of (expressions, options to match them with)
        """
        base = self._base(pattern, self._root_prefix(root))

        if pattern.kind is PathKind.FILE:
            expressions: Tuple[str, ...] = (base,)
        elif pattern.kind is PathKind.DIRECTORY:
            directory = base[: -len(SEPARATOR)]
            expressions = (directory, base + _DESCENDANTS)
        else:
            # A trailing * is folded into the arbitrary suffix so it never forms "x**"
            stem = base[:-1] if base.endswith("*") and not base.endswith("\\*") else base
            expressions = (stem + "*", base + _SUBTREE)

        literal_separator = pattern.anchor is AnchorMode.RELATIVE
        return expressions, self._options.with_separator(literal_separator)

    def expand(self, pattern: Pattern, root: PathLike) -> MatchSpec:
        """Expand and compile ``pattern``.

        Args:
            pattern: Classified pattern
            root: Directory relative patterns are anchored to

        Returns:
            Compiled match spec

        Raises:
            ConfigurationError: If the expansion cannot be compiled
        """
        expressions, options = self.expressions(pattern, root)
        return MatchSpec.compile(expressions, options)

    def expand_directory(self, pattern: Pattern, root: PathLike) -> MatchSpec:
        """Expand ``pattern`` as a directory: the directory itself and everything beneath it.

        Raises:
            ConfigurationError: If the expansion cannot be compiled
        """
        return self.expand(pattern.as_directory(), root)

    def _root_prefix(self, root: PathLike) -> str:
        return escape(PurePath(root).as_posix().rstrip(SEPARATOR))

    def _base(self, pattern: Pattern, root_prefix: str) -> str:
        text = pattern.text

        if pattern.anchor is AnchorMode.ANYWHERE:
            return f"{root_prefix}/**/{text}"

        # A leading **/ stays unanchored within the root's subtree
        if text.startswith(SEPARATOR):
            return root_prefix + text
        return f"{root_prefix}/{text}"


def expand(pattern: Pattern, root: PathLike, options: MatchOptions = DEFAULT_OPTIONS) -> MatchSpec:
    """Expand ``pattern`` against ``root`` with base ``options``."""
    return PathExpander(options).expand(pattern, root)
