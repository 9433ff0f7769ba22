#!/usr/bin/env python3
"""Tests for pattern expansion."""

from pathlib import PurePosixPath

import pytest

from gitignored.rules.classifier import classify
from gitignored.rules.expander import MatchSpec, PathExpander, expand
from gitignored.rules.patterns import ConfigurationError, MatchOptions


@pytest.fixture
def expander():
    return PathExpander()


class TestExpressions:
    """Tests for the expressions each kind and anchor produce."""

    @pytest.mark.parametrize(
        "rule,expected,literal_separator",
        [
            ("*.js", ("/repo/**/*.js",), False),
            ("/lib.js", ("/repo/lib.js",), True),
            ("lib/*.js", ("/repo/lib/*.js",), True),
            ("lib/", ("/repo/**/lib", "/repo/**/lib/**/*"), False),
            ("/lib/", ("/repo/lib", "/repo/lib/**/*"), True),
            ("lib", ("/repo/**/lib*", "/repo/**/lib/**"), False),
            ("remove-*", ("/repo/**/remove-*", "/repo/**/remove-*/**"), False),
            ("**/dist", ("/repo/**/dist*", "/repo/**/dist/**"), True),
            ("/**/dist/*.js", ("/repo/**/dist/*.js",), True),
        ],
    )
    def test_expressions(self, expander, rule, expected, literal_separator):
        expressions, options = expander.expressions(classify(rule), "/repo")

        assert expressions == expected
        assert options.require_literal_separator is literal_separator

    def test_negation_does_not_change_expressions(self, expander):
        assert expander.expressions(classify("!lib/"), "/repo") == expander.expressions(
            classify("lib/"), "/repo"
        )

    def test_root_trailing_separator(self, expander):
        assert expander.expressions(classify("/lib.js"), "/repo/")[0] == ("/repo/lib.js",)

    def test_root_metacharacters_are_escaped(self, expander):
        spec = expander.expand(classify("x.js"), "/tmp/a[1]")

        assert spec.expressions == ("/tmp/a\\[1\\]/**/x.js",)
        assert spec.matches("/tmp/a[1]/x.js")
        assert not spec.matches("/tmp/a1/x.js")

    def test_options_keep_case_sensitivity(self):
        expander = PathExpander(MatchOptions(case_sensitive=False))
        _, options = expander.expressions(classify("/lib.js"), "/repo")

        assert options == MatchOptions(case_sensitive=False, require_literal_separator=True)
        assert expander.options == MatchOptions(case_sensitive=False)


class TestExpand:
    """Tests for compiled expansion."""

    def test_file_rule_anywhere(self, expander):
        spec = expander.expand(classify("*.js"), "/repo")

        assert spec.matches("/repo/module.js")
        assert spec.matches("/repo/dist/module.js")
        assert not spec.matches("/other/module.js")

    def test_relative_rule_stays_in_segment(self, expander):
        spec = expander.expand(classify("lib/*.js"), "/repo")

        assert spec.matches("/repo/lib/module.js")
        assert not spec.matches("/repo/lib/deep/module.js")
        assert not spec.matches("/repo/dist/lib/module.js")

    def test_directory_rule_covers_directory_and_contents(self, expander):
        spec = expander.expand(classify("lib/"), "/repo")

        assert spec.matches("/repo/lib")
        assert spec.matches("/repo/lib/module.js")
        assert spec.matches("/repo/dist/lib/nested/module.js")

    def test_both_rule(self, expander):
        spec = expander.expand(classify("lib"), "/repo")

        assert spec.matches("/repo/lib")
        assert spec.matches("/repo/lib/nested/module.js")

    def test_matches_pure_path(self, expander):
        spec = expander.expand(classify("lib/"), "/repo")
        assert spec.matches(PurePosixPath("/repo/lib/module.js"))

    def test_case_insensitive(self):
        spec = PathExpander(MatchOptions(case_sensitive=False)).expand(classify("*.JS"), "/repo")
        assert spec.matches("/repo/module.js")

    def test_uncompilable_rule_raises(self, expander):
        with pytest.raises(ConfigurationError) as exc_info:
            expander.expand(classify("[a-"), "/repo")

        assert exc_info.value.reason == "Unclosed character class"

    def test_module_level_expand(self):
        spec = expand(classify("/lib.js"), "/repo")

        assert isinstance(spec, MatchSpec)
        assert spec.matches("/repo/lib.js")

    def test_expansion_depends_only_on_rule_and_root(self, expander):
        first = expander.expand(classify("lib/*.js"), "/repo")
        expander.expand(classify("*.js"), "/other")
        second = expander.expand(classify("lib/*.js"), "/repo")

        assert first == second


class TestExpandDirectory:
    """Tests for directory-block expansion."""

    def test_both_rule_expands_as_directory(self, expander):
        spec = expander.expand_directory(classify("lib"), "/repo")

        assert spec.expressions == ("/repo/**/lib", "/repo/**/lib/**/*")
        assert spec.matches("/repo/lib/deep/include.js")
        assert not spec.matches("/repo/library.js")

    def test_keeps_anchor(self, expander):
        spec = expander.expand_directory(classify("/lib/"), "/repo")

        assert spec.matches("/repo/lib/module.js")
        assert not spec.matches("/repo/deep/lib/module.js")
