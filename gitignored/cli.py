#!/usr/bin/env python3
"""Command-line interface for gitignored.

This module provides the ``gitignored`` command:
- Argument parsing and validation
- Configuration file and environment loading
- Rule collection from ignore files, configuration and arguments
- ``check``: report which paths are excluded
- ``walk``: list the files that are not excluded

Example:
    >>> from gitignored.cli import parse_arguments
    >>> args = parse_arguments(["--root", "/repo", "-e", "build/", "check", "build/app"])
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from gitignored.core.config import ConfigError, ConfigManager, ConfigSource
from gitignored.core.constants import GITIGNORED_VERSION, ConfigKey, IGNORE_FILENAME
from gitignored.core.logging import Logger
from gitignored.core.validators import ValidationError, validate_path, validate_rule
from gitignored.ignorefile import find_ignore_file, load_rules
from gitignored.rules.engine import RuleSetEvaluator
from gitignored.rules.patterns import MatchOptions
from gitignored.walker import walk

DESCRIPTION = "gitignored - evaluate .gitignore-style exclusion rules"

# Exit codes
EXIT_EXCLUDED = 0
EXIT_NOT_EXCLUDED = 1
EXIT_ERROR = 2


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If a referenced file or directory is unusable
    """
    parser = argparse.ArgumentParser(
        prog="gitignored",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check paths against the repository's .gitignore
  gitignored --root ~/src/project check build/app src/main.rs

  # Show which rule excluded each path
  gitignored check -v target/debug/app

  # List files that survive extra rules
  gitignored -e '*.log' -e '!keep.log' walk

  # Case-insensitive matching with a custom rules file
  gitignored -i -f ignore.txt walk
        """,
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {GITIGNORED_VERSION}",
    )

    # Configuration file
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Rule sources
    rules_group = parser.add_argument_group("rule options")

    rules_group.add_argument(
        "-r",
        "--root",
        metavar="DIR",
        type=str,
        default=".",
        help="Root directory rules are anchored to (default: current directory)",
    )

    rules_group.add_argument(
        "-f",
        "--rules-file",
        metavar="FILE",
        type=str,
        help=f"Ignore file to read rules from (default: ROOT/{IGNORE_FILENAME} if present)",
    )

    rules_group.add_argument(
        "-e",
        "--rule",
        metavar="RULE",
        action="append",
        dest="rules",
        help="Additional rule, applied after file rules (can be specified multiple times)",
    )

    rules_group.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        help="Match rules case-insensitively",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log messages to FILE",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Print the given paths that are excluded",
        description="Print each PATH that is excluded. Relative paths are taken relative to ROOT. "
        "Exits 0 if any path is excluded, 1 if none is.",
    )
    check_parser.add_argument("paths", metavar="PATH", nargs="+", help="Path to check")
    check_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also print the rule that decided each path",
    )

    subparsers.add_parser(
        "walk",
        help="List files under ROOT that are not excluded",
        description="Print every file under ROOT that is not excluded, relative to ROOT.",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    root_path = Path(args.root)

    if not root_path.exists():
        raise CLIError(f"Root directory does not exist: {args.root}")

    if not root_path.is_dir():
        raise CLIError(f"Root is not a directory: {args.root}")

    if args.rules_file and not Path(args.rules_file).is_file():
        raise CLIError(f"Rules file does not exist: {args.rules_file}")

    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")

    for rule in args.rules or []:
        try:
            validate_rule(rule)
        except ValidationError as e:
            raise CLIError(f"Invalid rule {rule!r}: {e}")

    for path in getattr(args, "paths", None) or []:
        try:
            validate_path(path)
        except ValidationError as e:
            raise CLIError(f"Invalid path {path!r}: {e}")


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration dictionary from command-line arguments.

    Only options given on the command line appear, so they override the
    file and environment without masking them.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for ConfigManager
    """
    section: Dict[str, Any] = {}

    if args.ignore_case:
        section[ConfigKey.MATCHING] = {ConfigKey.CASE_SENSITIVE: False}

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config[ConfigKey.LOG_LEVEL] = "DEBUG"
    if args.log_file:
        logging_config[ConfigKey.LOG_FILE] = args.log_file
    if logging_config:
        section[ConfigKey.LOGGING] = logging_config

    return {ConfigKey.ROOT: section}


def load_config(args: argparse.Namespace, environ: Optional[Dict[str, str]] = None) -> ConfigManager:
    """
    Load layered configuration for a run.

    Args:
        args: Parsed arguments namespace
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Configuration manager with file, environment and argument layers

    Raises:
        CLIError: If the configuration file cannot be loaded
    """
    try:
        config = ConfigManager(config_file=args.config, environ=environ)
    except ConfigError as e:
        raise CLIError(e.message)

    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: Dict[str, Any]) -> Logger:
    """
    Setup logging based on the merged configuration.

    Args:
        config: Merged ``gitignored`` configuration section

    Returns:
        Configured logger instance

    Raises:
        CLIError: If the log file cannot be opened
    """
    logging_config = config.get(ConfigKey.LOGGING, {})
    log_level = logging_config.get(ConfigKey.LOG_LEVEL, "WARNING")
    log_file = logging_config.get(ConfigKey.LOG_FILE)

    logger = Logger("gitignored.cli", level=log_level)

    if log_file:
        try:
            logger.add_handler(logger.create_file_handler(log_file))
        except OSError as e:
            raise CLIError(f"Cannot open log file {log_file}: {e}")
        logger.debug("Logging to file", file=log_file)

    return logger


def collect_rules(args: argparse.Namespace, config: Dict[str, Any], root: Path) -> List[str]:
    """
    Gather rules in evaluation order.

    Rules from the ignore file come first, then configured rules, then rules
    given with ``-e``.

    Args:
        args: Parsed arguments namespace
        config: Merged ``gitignored`` configuration section
        root: Root directory

    Returns:
        Ordered rule list

    Raises:
        CLIError: If the ignore file cannot be read or configured rules are not a list
    """
    rules: List[str] = []

    if args.rules_file:
        rules_file: Optional[Path] = Path(args.rules_file)
    else:
        rules_file = find_ignore_file(root, config.get(ConfigKey.IGNORE_FILE, IGNORE_FILENAME))

    if rules_file is not None:
        try:
            rules.extend(load_rules(rules_file))
        except ValidationError as e:
            raise CLIError(str(e))

    configured = config.get(ConfigKey.RULES) or []
    if not isinstance(configured, list):
        raise CLIError(f"Configured rules must be a list, not {type(configured).__name__}")

    rules.extend(configured)
    rules.extend(args.rules or [])

    return rules


def run_check(
    args: argparse.Namespace, evaluator: RuleSetEvaluator, rules: List[str], root: Path
) -> int:
    """
    Print the excluded paths among ``args.paths``.

    Returns:
        EXIT_EXCLUDED if any path is excluded, EXIT_NOT_EXCLUDED otherwise
    """
    any_excluded = False

    for path in args.paths:
        evaluation = evaluator.explain(rules, root, path)
        if not evaluation.excluded:
            continue

        any_excluded = True
        if args.verbose:
            print(f"{evaluation.matched_rule}\t{path}")
        else:
            print(path)

    return EXIT_EXCLUDED if any_excluded else EXIT_NOT_EXCLUDED


def run_walk(evaluator: RuleSetEvaluator, rules: List[str], root: Path, logger: Logger) -> int:
    """Print every non-excluded file under ``root``, relative to it."""
    for path in walk(root, rules, evaluator=evaluator, logger=logger):
        print(path.relative_to(root).as_posix())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)

        config = load_config(args).section()
        logger = setup_logging(config)

        root = Path(os.path.abspath(args.root))
        rules = collect_rules(args, config, root)
        logger.debug("Collected rules", root=root, count=len(rules))

        evaluator = RuleSetEvaluator(
            options=MatchOptions.from_config(config.get(ConfigKey.MATCHING)),
            logger=logger,
        )

        with logger.add_context(command=args.command):
            if args.command == "check":
                return run_check(args, evaluator, rules, root)
            return run_walk(evaluator, rules, root, logger)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
