#!/usr/bin/env python3
"""Directory walking with ignore rules.

Excluded directories are pruned before they are entered, so nothing beneath
them is visited or evaluated.

Example:
    >>> for path in walk("/repo", [".git/", "target/", "src/*.rs", "!src/a.rs"]):
    ...     print(path)
"""

import os
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from gitignored.core.logging import Logger, get_logger
from gitignored.rules.engine import Rule, RuleSetEvaluator


def walk(
    root: Union[str, Path],
    rules: Sequence[Rule],
    evaluator: Optional[RuleSetEvaluator] = None,
    logger: Optional[Logger] = None,
) -> Iterator[Path]:
    """Yield files beneath ``root`` that ``rules`` do not exclude.

    Each directory's files are yielded in name order before its
    subdirectories are entered, also in name order. Symlinked directories
    are not followed.

    Args:
        root: Directory to walk; relative rules are anchored here
        rules: Ignore rules in file order
        evaluator: Evaluator to use (defaults to a case-sensitive one)
        logger: Logger for unreadable directories

    Yields:
        Absolute paths of non-excluded files
    """
    root = Path(os.path.abspath(root))
    rules = list(rules)
    evaluator = evaluator or RuleSetEvaluator()
    logger = logger or get_logger("gitignored.walker")

    def on_error(error: OSError) -> None:
        logger.warning("Cannot read directory", path=error.filename, reason=error.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)

        dirnames[:] = sorted(
            name for name in dirnames if not evaluator.evaluate(rules, root, current / name)
        )

        for name in sorted(filenames):
            path = current / name
            if not evaluator.evaluate(rules, root, path):
                yield path
