"""gitignored - version-control style path exclusion rules.

Decides, for an ordered list of ignore rules and a path, whether the path is
excluded, with the negation and directory-block precedence users expect from
``.gitignore`` files.

Example:
    >>> from gitignored import RuleSetEvaluator
    >>> RuleSetEvaluator().evaluate(["build/", "*.log"], "/repo", "/repo/build/app")
    True
"""

from gitignored.core.constants import GITIGNORED_VERSION as __version__
from gitignored.core.validators import EncodingError, ValidationError
from gitignored.ignorefile import find_ignore_file, load_rules, parse_rules
from gitignored.rules import (
    AnchorMode,
    ConfigurationError,
    Evaluation,
    Gitignore,
    MatchOptions,
    PathKind,
    Pattern,
    PatternClassifier,
    PathExpander,
    RuleSetEvaluator,
    classify,
    evaluate,
)
from gitignored.walker import walk

__all__ = [
    "__version__",
    "AnchorMode",
    "ConfigurationError",
    "EncodingError",
    "Evaluation",
    "Gitignore",
    "MatchOptions",
    "PathExpander",
    "PathKind",
    "Pattern",
    "PatternClassifier",
    "RuleSetEvaluator",
    "ValidationError",
    "classify",
    "evaluate",
    "find_ignore_file",
    "load_rules",
    "parse_rules",
    "walk",
]
