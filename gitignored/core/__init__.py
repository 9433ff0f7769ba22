"""gitignored Core - Shared utilities and infrastructure.

Import specific functions from submodules:
    from gitignored.core.config import ConfigManager
    from gitignored.core import constants
    from gitignored.core import logging
    from gitignored.core import validators
"""

from gitignored.core import config, constants, logging, validators

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]
