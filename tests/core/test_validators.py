"""Tests for gitignored.core.validators module."""
from pathlib import PurePosixPath

import pytest

from gitignored.core.constants import ErrorCode, Limits
from gitignored.core.validators import (
    EncodingError,
    ValidationError,
    ensure_text,
    validate_config,
    validate_log_level,
    validate_path,
    validate_rule,
)


class TestEnsureText:
    """Tests for ensure_text()."""

    def test_str(self):
        assert ensure_text("lib/*.js") == "lib/*.js"

    def test_bytes(self):
        assert ensure_text("café".encode("utf-8")) == "café"

    def test_path_like(self):
        assert ensure_text(PurePosixPath("/repo/lib")) == "/repo/lib"

    def test_invalid_bytes(self):
        with pytest.raises(EncodingError) as exc_info:
            ensure_text(b"\xff\xfe")

        assert exc_info.value.error_code == ErrorCode.ENCODING_ERROR
        assert isinstance(exc_info.value, ValidationError)

    def test_surrogate_escaped_str(self):
        with pytest.raises(EncodingError):
            ensure_text(b"lib\xff".decode("utf-8", "surrogateescape"))


class TestValidateRule:
    """Tests for validate_rule()."""

    def test_valid(self):
        assert validate_rule("build/")
        assert validate_rule("")

    def test_not_a_string(self):
        with pytest.raises(ValidationError, match="must be string"):
            validate_rule(42)

    def test_too_long(self):
        with pytest.raises(ValidationError, match="maximum length"):
            validate_rule("a" * (Limits.MAX_RULE_LENGTH + 1))

    def test_null_byte(self):
        with pytest.raises(ValidationError, match="null"):
            validate_rule("a\0b")


class TestValidatePath:
    """Tests for validate_path()."""

    def test_valid(self):
        assert validate_path("/repo/lib.js")

    @pytest.mark.parametrize("path", ["", "a\0b", "a" * (Limits.MAX_PATH_LENGTH + 1)])
    def test_invalid(self, path):
        with pytest.raises(ValidationError):
            validate_path(path)

    def test_not_a_string(self):
        with pytest.raises(ValidationError, match="must be string"):
            validate_path(b"/repo")


class TestValidateLogLevel:
    """Tests for validate_log_level()."""

    @pytest.mark.parametrize("level", ["DEBUG", "info", "Warning", "ERROR", "CRITICAL"])
    def test_valid(self, level):
        assert validate_log_level(level)

    @pytest.mark.parametrize("level", ["VERBOSE", "", 10])
    def test_invalid(self, level):
        with pytest.raises(ValidationError, match="Invalid log level"):
            validate_log_level(level)


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_valid(self, sample_config):
        assert validate_config(sample_config["gitignored"])

    def test_empty(self):
        assert validate_config({})

    @pytest.mark.parametrize(
        "config,message",
        [
            ([], "must be a dictionary"),
            ({"ignore_file": ""}, "Ignore file"),
            ({"rules": "*.log"}, "Rules must be a list"),
            ({"rules": ["ok", 3]}, "index 1"),
            ({"matching": []}, "Matching configuration"),
            ({"matching": {"case_sensitive": "no"}}, "case_sensitive must be boolean"),
            ({"logging": "DEBUG"}, "Logging configuration"),
            ({"logging": {"level": "LOUD"}}, "Invalid log level"),
        ],
    )
    def test_invalid(self, config, message):
        with pytest.raises(ValidationError, match=message):
            validate_config(config)
