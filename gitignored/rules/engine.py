#!/usr/bin/env python3
"""Ignore rule evaluation.

This module decides whether a path is excluded by an ordered rule set:
- Rules are classified and expanded against the root directory
- Non-negated directory rules block everything beneath them, unless the
  same directory (or an ancestor) is negated somewhere in the rule set
- Otherwise the last matching rule wins; a negated rule re-includes
- Broken rules are skipped and reported; undecodable input never excludes

Evaluation is a pure function of (rules, root, target). Evaluators only hold
immutable collaborators and may be shared between threads.

Example:
    >>> evaluator = RuleSetEvaluator()
    >>> evaluator.evaluate(["*.js", "!lib.js"], "/repo", "/repo/lib.js")
    False
    >>> evaluator.evaluate(["lib/", "!lib/deep/keep.js"], "/repo", "/repo/lib/deep/keep.js")
    True
"""

import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import List, Optional, Sequence, Set, Tuple, Union

from gitignored.core.logging import Logger, get_logger
from gitignored.core.validators import EncodingError, TextLike, ensure_text
from gitignored.rules.classifier import Pattern, PatternClassifier
from gitignored.rules.expander import PathExpander
from gitignored.rules.patterns import DEFAULT_OPTIONS, ConfigurationError, MatchOptions, PathLike

Rule = Union[str, bytes]


@dataclass(frozen=True)
class RejectedRule:
    """A rule skipped during evaluation."""

    rule: str
    reason: str


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one target against a rule set."""

    excluded: bool
    matched_rule: Optional[str] = None  # Rule that decided the verdict
    blocked_by: Optional[str] = None  # Directory rule that short-circuited
    rejected: Tuple[RejectedRule, ...] = ()


@dataclass(frozen=True)
class _ClassifiedRule:
    raw: str
    pattern: Pattern


class RuleSetEvaluator:
    """Evaluate ordered ignore rules against target paths.

    Features:
    - Directory-block precedence computed as a separate pass
    - Last-match-wins ordering for everything else
    - Per-rule rejection of expressions that do not compile
    - Fail-open handling of undecodable rules and paths
    """

    def __init__(
        self,
        options: MatchOptions = DEFAULT_OPTIONS,
        classifier: Optional[PatternClassifier] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize evaluator.

        Args:
            options: Base match options (case sensitivity)
            classifier: Pattern classifier (defaults to the extension heuristic)
            logger: Logger for rejected rules and decisions
        """
        self._classifier = classifier or PatternClassifier()
        self._expander = PathExpander(options)
        self._logger = logger or get_logger("gitignored.rules")

    @property
    def options(self) -> MatchOptions:
        return self._expander.options

    @property
    def classifier(self) -> PatternClassifier:
        return self._classifier

    @property
    def expander(self) -> PathExpander:
        return self._expander

    def evaluate(self, rules: Sequence[Rule], root: TextLike, target: TextLike) -> bool:
        """Check if ``target`` is excluded by ``rules``.

        Args:
            rules: Ignore rules in file order, comments and blank lines removed
            root: Directory relative rules are anchored to
            target: Path to test; relative paths are taken relative to ``root``

        Returns:
            True if the target is excluded
        """
        return self.explain(rules, root, target).excluded

    def explain(self, rules: Sequence[Rule], root: TextLike, target: TextLike) -> Evaluation:
        """Evaluate ``target`` and report which rule decided it.

        Args:
            rules: Ignore rules in file order, comments and blank lines removed
            root: Directory relative rules are anchored to
            target: Path to test; relative paths are taken relative to ``root``

        Returns:
            Evaluation with the verdict, the deciding rule and any rejected rules
        """
        rejected: List[RejectedRule] = []

        try:
            root_path = PurePath(os.path.abspath(ensure_text(root)))
            target_path = PurePath(ensure_text(target))
        except EncodingError as e:
            self._logger.warning("Path is not valid text, not excluding", reason=e)
            return Evaluation(excluded=False)

        if not target_path.is_absolute():
            target_path = root_path / target_path

        classified = self._classify_all(rules, rejected)

        if target_path == root_path or root_path not in target_path.parents:
            return Evaluation(excluded=False, rejected=tuple(rejected))

        for blocked in self._blocked(classified):
            try:
                spec = self._expander.expand_directory(blocked.pattern, root_path)
            except ConfigurationError:
                # Reported once, by the ordered scan below
                continue

            if spec.matches(target_path):
                self._logger.debug(
                    "Excluded by directory rule", rule=blocked.raw, target=target_path
                )
                return Evaluation(
                    excluded=True,
                    matched_rule=blocked.raw,
                    blocked_by=blocked.raw,
                    rejected=tuple(rejected),
                )

        excluded = False
        matched_rule: Optional[str] = None

        for rule in classified:
            try:
                spec = self._expander.expand(rule.pattern, root_path)
            except ConfigurationError as e:
                self._reject(rule.raw, e.reason, rejected)
                continue

            if spec.matches(target_path):
                excluded = not rule.pattern.negated
                matched_rule = rule.raw

        if matched_rule is not None:
            self._logger.debug(
                "Last matching rule", rule=matched_rule, excluded=excluded, target=target_path
            )

        return Evaluation(excluded=excluded, matched_rule=matched_rule, rejected=tuple(rejected))

    def blocked_directories(self, rules: Sequence[Rule]) -> List[Pattern]:
        """Find directory rules that nothing later can re-include from.

        A non-negated ``DIRECTORY`` or ``BOTH`` rule is blocking unless the
        rule set also negates its directory, or one of its ancestors, spelled
        with or without a leading ``/``.

        Args:
            rules: Ignore rules in file order

        Returns:
            Blocking patterns in file order
        """
        return [r.pattern for r in self._blocked(self._classify_all(rules, []))]

    def _blocked(self, classified: Sequence[_ClassifiedRule]) -> List[_ClassifiedRule]:
        negated_texts: Set[str] = {r.pattern.text for r in classified if r.pattern.negated}

        return [
            r
            for r in classified
            if r.pattern.may_be_directory
            and not r.pattern.negated
            and not r.pattern.is_empty
            and negated_texts.isdisjoint(r.pattern.ancestor_forms())
        ]

    def _classify_all(self, rules: Sequence[Rule], rejected: List[RejectedRule]) -> List[_ClassifiedRule]:
        classified: List[_ClassifiedRule] = []

        for rule in rules:
            try:
                raw = ensure_text(rule)
            except EncodingError as e:
                self._reject(repr(rule), str(e), rejected)
                continue

            pattern = self._classifier.classify(raw)
            if pattern.is_empty:
                continue
            classified.append(_ClassifiedRule(raw, pattern))

        return classified

    def _reject(self, rule: str, reason: str, rejected: List[RejectedRule]) -> None:
        self._logger.warning("Skipping ignore rule", rule=rule, reason=reason)
        rejected.append(RejectedRule(rule=rule, reason=reason))


class Gitignore:
    """Rule evaluation bound to one root directory.

    Example:
        >>> ig = Gitignore("/repo")
        >>> ig.ignores(["lib/*.js", "!lib/include.js"], "/repo/lib/include.js")
        False
    """

    def __init__(
        self,
        root: Optional[PathLike] = None,
        options: MatchOptions = DEFAULT_OPTIONS,
        evaluator: Optional[RuleSetEvaluator] = None,
    ):
        """Initialize with ``root`` (defaults to the current directory)."""
        self.root = Path(os.path.abspath(root)) if root is not None else Path.cwd()
        self._evaluator = evaluator or RuleSetEvaluator(options)

    @property
    def evaluator(self) -> RuleSetEvaluator:
        return self._evaluator

    def ignores(self, rules: Sequence[Rule], target: TextLike) -> bool:
        """Check if ``target`` is excluded by ``rules``."""
        return self._evaluator.evaluate(rules, self.root, target)

    def explain(self, rules: Sequence[Rule], target: TextLike) -> Evaluation:
        return self._evaluator.explain(rules, self.root, target)

    def ignores_path(self, pattern: Union[str, Pattern], target: TextLike) -> bool:
        """Check a single rule against ``target``.

        A negated rule reports the opposite of whether it matches, so
        ``!/*.js`` does not ignore ``/repo/module.js`` but does ignore
        ``/repo/lib/module.js``.

        Raises:
            ConfigurationError: If the rule cannot be compiled
        """
        if not isinstance(pattern, Pattern):
            pattern = self._evaluator.classifier.classify(pattern)

        target_path = self.root / Path(target)
        spec = self._evaluator.expander.expand(pattern, self.root)
        return spec.matches(target_path) != pattern.negated


def evaluate(
    rules: Sequence[Rule], root: TextLike, target: TextLike, options: MatchOptions = DEFAULT_OPTIONS
) -> bool:
    """Check if ``target`` is excluded by ``rules`` with base ``options``."""
    return RuleSetEvaluator(options).evaluate(rules, root, target)
