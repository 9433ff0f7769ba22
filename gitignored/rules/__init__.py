"""gitignored Rules System.

This module provides ignore-rule classification, expansion and evaluation:
- patterns: glob matching primitive and match options
- classifier: raw rule -> Pattern (negation, anchor, kind)
- expander: Pattern -> root-anchored match expressions
- engine: ordered rule-set evaluation with directory-block precedence
"""

from .classifier import AnchorMode, PathKind, Pattern, PatternClassifier, classify, has_literal_extension
from .engine import Evaluation, Gitignore, RejectedRule, RuleSetEvaluator, evaluate
from .expander import MatchSpec, PathExpander, expand
from .patterns import ConfigurationError, GlobPattern, MatchOptions, escape, matches, translate

__all__ = [
    # Glob primitive
    "MatchOptions",
    "GlobPattern",
    "ConfigurationError",
    "matches",
    "translate",
    "escape",
    # Classification
    "AnchorMode",
    "PathKind",
    "Pattern",
    "PatternClassifier",
    "classify",
    "has_literal_extension",
    # Expansion
    "MatchSpec",
    "PathExpander",
    "expand",
    # Evaluation
    "Evaluation",
    "RejectedRule",
    "RuleSetEvaluator",
    "Gitignore",
    "evaluate",
]
