"""Shared pytest fixtures for gitignored tests."""
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from gitignored.core import logging as gitignored_logging
from gitignored.rules.engine import RuleSetEvaluator

ROOT = "/repo"


@pytest.fixture
def root() -> Path:
    """Root directory used by evaluation tests (never touched on disk)."""
    return Path(ROOT)


@pytest.fixture
def evaluator() -> RuleSetEvaluator:
    """Case-sensitive evaluator with the default classifier."""
    return RuleSetEvaluator()


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create a small project with build output and VCS metadata."""
    (tmp_path / "src").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / "target").mkdir()

    for name in ("a.rs", "b.rs", "c.rs"):
        (tmp_path / "src" / name).write_text("")
    (tmp_path / ".git" / "gitfile").write_text("")
    (tmp_path / "target" / "targetfile").write_text("")
    (tmp_path / "Cargo.toml").write_text("[package]\n")

    return tmp_path


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample gitignored configuration."""
    return {
        "gitignored": {
            "ignore_file": ".gitignore",
            "rules": ["*.log", "!keep.log"],
            "matching": {"case_sensitive": True},
            "logging": {"level": "INFO", "file": None},
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "gitignored.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop shared logger instances between tests."""
    yield
    gitignored_logging._loggers.clear()
