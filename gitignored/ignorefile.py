#!/usr/bin/env python3
"""Reading ignore files.

Ignore files hold one rule per line. Blank lines and lines starting with
``#`` are dropped; everything else is kept in file order. Files are decoded
as UTF-8 with surrogate escapes, so undecodable lines reach the evaluator
(which rejects them) instead of failing the whole file.

Example:
    >>> parse_rules(["# build output", "build/", "", "!build/keep.txt"])
    ['build/', '!build/keep.txt']
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from gitignored.core.constants import COMMENT_PREFIX, IGNORE_FILENAME, ErrorCode, Limits
from gitignored.core.validators import ValidationError


def parse_rules(lines: Iterable[str]) -> List[str]:
    """Strip comments and blank lines from ignore file lines.

    Args:
        lines: Raw lines, with or without line endings

    Returns:
        Rules in file order
    """
    rules: List[str] = []

    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith(COMMENT_PREFIX):
            continue
        rules.append(line)

    return rules


def load_rules(path: Union[str, Path]) -> List[str]:
    """Load rules from an ignore file.

    Args:
        path: Ignore file path

    Returns:
        Rules in file order

    Raises:
        ValidationError: If the file is missing, too large or unreadable
    """
    path = Path(path)

    if not path.is_file():
        raise ValidationError(f"Ignore file not found: {path}", ErrorCode.NOT_FOUND)

    try:
        size = path.stat().st_size
        if size > Limits.MAX_IGNORE_FILE_SIZE:
            raise ValidationError(
                f"Ignore file exceeds maximum size ({Limits.MAX_IGNORE_FILE_SIZE} bytes): {path}"
            )

        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            return parse_rules(f)

    except PermissionError as e:
        raise ValidationError(f"Cannot read ignore file {path}: {e}", ErrorCode.PERMISSION_DENIED)
    except OSError as e:
        raise ValidationError(f"Failed to read ignore file {path}: {e}", ErrorCode.INTERNAL_ERROR)


def find_ignore_file(root: Union[str, Path], filename: str = IGNORE_FILENAME) -> Optional[Path]:
    """Return ``root/filename`` if it exists as a file."""
    candidate = Path(root) / filename
    return candidate if candidate.is_file() else None
