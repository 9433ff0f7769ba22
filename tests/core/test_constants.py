"""Tests for gitignored.core.constants module."""
import pytest

from gitignored.core.constants import (
    DEFAULT_CONFIG,
    GITIGNORED_VERSION,
    IGNORE_FILENAME,
    ConfigKey,
    ErrorCode,
    Limits,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.SUCCESS == 0
        assert ErrorCode.INVALID_INPUT == 1
        assert ErrorCode.NOT_FOUND == 2
        assert ErrorCode.PERMISSION_DENIED == 3
        assert ErrorCode.ENCODING_ERROR == 4
        assert ErrorCode.INTERNAL_ERROR == 6

    def test_error_codes_are_unique(self):
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestDefaults:
    """Tests for default values."""

    def test_version(self):
        assert GITIGNORED_VERSION.count(".") == 2

    def test_default_config(self):
        section = DEFAULT_CONFIG[ConfigKey.ROOT]

        assert section[ConfigKey.IGNORE_FILE] == IGNORE_FILENAME == ".gitignore"
        assert section[ConfigKey.RULES] == []
        assert section[ConfigKey.MATCHING][ConfigKey.CASE_SENSITIVE] is True
        assert section[ConfigKey.LOGGING][ConfigKey.LOG_LEVEL] == "WARNING"

    @pytest.mark.parametrize(
        "limit", [Limits.MAX_PATH_LENGTH, Limits.MAX_RULE_LENGTH, Limits.MAX_IGNORE_FILE_SIZE]
    )
    def test_limits_are_positive(self, limit):
        assert limit > 0
