#!/usr/bin/env python3
"""Classification of raw ignore rules.

A rule string is parsed into an immutable :class:`Pattern` recording:
- whether the rule is negated (leading ``!``)
- where it may match (anywhere beneath the root, or relative to it)
- what it may denote (a file, a directory, or either)

Example:
    >>> classify("!build/")
    Pattern(text='build/', negated=True, anchor=<AnchorMode.ANYWHERE: 'anywhere'>, kind=<PathKind.DIRECTORY: 'directory'>)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from gitignored.core.constants import NEGATION_PREFIX, RECURSIVE_WILDCARD, SEPARATOR


class AnchorMode(Enum):
    """Where a pattern is allowed to match."""

    ANYWHERE = "anywhere"  # Single segment, matches at any depth
    RELATIVE = "relative"  # Anchored to the root (possibly via **/)


class PathKind(Enum):
    """What a pattern can denote."""

    FILE = "file"
    DIRECTORY = "directory"
    BOTH = "both"


FileHeuristic = Callable[[str], bool]

_LITERAL_EXTENSION = re.compile(r"[^/]\.[^./*]+$")


def has_literal_extension(text: str) -> bool:
    """Return True if ``text`` ends in a ``.ext`` suffix with no wildcard in ``ext``.

    A name that is only a suffix, such as ``.git``, does not count.
    """
    return _LITERAL_EXTENSION.search(text) is not None


@dataclass(frozen=True)
class Pattern:
    """A classified ignore rule."""

    text: str
    negated: bool
    anchor: AnchorMode
    kind: PathKind

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def may_be_directory(self) -> bool:
        return self.kind in (PathKind.DIRECTORY, PathKind.BOTH)

    def directory_form(self) -> str:
        """Return the pattern text as a directory rule (trailing ``/``)."""
        if self.text.endswith(SEPARATOR):
            return self.text
        return self.text + SEPARATOR

    def as_directory(self) -> "Pattern":
        """Return a non-negated directory pattern for the same path and anchor."""
        return Pattern(
            text=self.directory_form(),
            negated=False,
            anchor=self.anchor,
            kind=PathKind.DIRECTORY,
        )

    def ancestor_forms(self) -> List[str]:
        """List the spellings whose negation re-includes this pattern's directory.

        For ``a/b/`` this is ``a/b/``, ``/a/b/``, ``a/``, ``/a/``. A rule that
        is not itself a directory rule also lists its bare text, so ``lib`` is
        re-included by ``!lib`` as well as ``!lib/``.
        """
        forms: List[str] = []

        if not self.text.endswith(SEPARATOR):
            bare = self.text.lstrip(SEPARATOR)
            forms.extend((bare, SEPARATOR + bare))

        segments = [s for s in self.text.split(SEPARATOR) if s]
        for depth in range(len(segments), 0, -1):
            prefix = SEPARATOR.join(segments[:depth]) + SEPARATOR
            forms.extend((prefix, SEPARATOR + prefix))

        return list(dict.fromkeys(forms))


class PatternClassifier:
    """Parse raw rule strings into :class:`Pattern` records.

    The file/directory heuristic is a constructor argument so that it can be
    replaced without touching evaluation.
    """

    def __init__(self, file_heuristic: Optional[FileHeuristic] = None):
        """Initialize classifier.

        Args:
            file_heuristic: Predicate deciding that a (non-directory) pattern
                can only denote a file. Defaults to :func:`has_literal_extension`.
        """
        self._looks_like_file = file_heuristic or has_literal_extension

    def classify(self, raw: str) -> Pattern:
        """Classify one rule.

        Never fails: a rule that fits no more specific case is of kind
        ``BOTH``.

        Args:
            raw: Rule as written in the ignore file

        Returns:
            Classified pattern
        """
        negated = raw.startswith(NEGATION_PREFIX)
        if negated:
            raw = raw[len(NEGATION_PREFIX):]

        text = "".join(raw.split())

        return Pattern(
            text=text,
            negated=negated,
            anchor=self.anchor_of(text),
            kind=self.kind_of(text),
        )

    def anchor_of(self, text: str) -> AnchorMode:
        """Decide whether ``text`` matches anywhere or relative to the root."""
        segments = [s for s in text.split(SEPARATOR) if s]

        if (
            not text.startswith(RECURSIVE_WILDCARD)
            and not text.startswith(SEPARATOR)
            and len(segments) <= 1
        ):
            return AnchorMode.ANYWHERE
        return AnchorMode.RELATIVE

    def kind_of(self, text: str) -> PathKind:
        """Decide whether ``text`` denotes a file, a directory, or either."""
        if text.endswith(SEPARATOR):
            return PathKind.DIRECTORY
        if self._looks_like_file(text):
            return PathKind.FILE
        return PathKind.BOTH


_default_classifier = PatternClassifier()


def classify(raw: str) -> Pattern:
    """Classify ``raw`` with the default extension heuristic."""
    return _default_classifier.classify(raw)
