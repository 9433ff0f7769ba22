#!/usr/bin/env python3
"""Tests for rule classification."""

import pytest

from gitignored.rules.classifier import (
    AnchorMode,
    PathKind,
    Pattern,
    PatternClassifier,
    classify,
    has_literal_extension,
)


class TestHasLiteralExtension:
    """Tests for the default file heuristic."""

    @pytest.mark.parametrize("text", ["lib.js", "*.js", "/lib.js", "dist/lib/module.js", "a.tar.gz"])
    def test_files(self, text):
        assert has_literal_extension(text)

    @pytest.mark.parametrize("text", ["lib", ".git", "*.j*", "lib.", "remove-*", "a/.env"])
    def test_not_files(self, text):
        assert not has_literal_extension(text)


class TestClassify:
    """Tests for PatternClassifier.classify."""

    @pytest.mark.parametrize(
        "raw,text,anchor,kind",
        [
            ("*.js", "*.js", AnchorMode.ANYWHERE, PathKind.FILE),
            ("lib", "lib", AnchorMode.ANYWHERE, PathKind.BOTH),
            ("lib/", "lib/", AnchorMode.ANYWHERE, PathKind.DIRECTORY),
            ("/lib/", "/lib/", AnchorMode.RELATIVE, PathKind.DIRECTORY),
            ("/lib.js", "/lib.js", AnchorMode.RELATIVE, PathKind.FILE),
            ("lib/*.js", "lib/*.js", AnchorMode.RELATIVE, PathKind.FILE),
            ("a/b/", "a/b/", AnchorMode.RELATIVE, PathKind.DIRECTORY),
            ("**/dist", "**/dist", AnchorMode.RELATIVE, PathKind.BOTH),
            ("**/remove-items.js", "**/remove-items.js", AnchorMode.RELATIVE, PathKind.FILE),
            (".git", ".git", AnchorMode.ANYWHERE, PathKind.BOTH),
            ("remove-*", "remove-*", AnchorMode.ANYWHERE, PathKind.BOTH),
        ],
    )
    def test_classification(self, raw, text, anchor, kind):
        pattern = classify(raw)

        assert pattern == Pattern(text=text, negated=False, anchor=anchor, kind=kind)

    def test_negation_is_stripped(self):
        pattern = classify("!build/")

        assert pattern.negated is True
        assert pattern.text == "build/"
        assert pattern.kind is PathKind.DIRECTORY

    def test_whitespace_is_removed(self):
        """All whitespace is removed, including inside the rule."""
        assert classify("  lib / ").text == "lib/"
        assert classify("remove*, !remove-items.js").text == "remove*,!remove-items.js"

    @pytest.mark.parametrize("raw", ["", "   ", "!", "! \t"])
    def test_empty_rules(self, raw):
        assert classify(raw).is_empty

    def test_deterministic(self):
        assert classify("lib/*.js") == classify("lib/*.js")

    def test_pluggable_heuristic(self):
        """A replacement heuristic changes only the kind."""
        classifier = PatternClassifier(file_heuristic=lambda text: False)
        pattern = classifier.classify("lib.js")

        assert pattern.kind is PathKind.BOTH
        assert pattern.anchor is AnchorMode.ANYWHERE

    def test_directory_suffix_wins_over_heuristic(self):
        classifier = PatternClassifier(file_heuristic=lambda text: True)
        assert classifier.kind_of("lib.d/") is PathKind.DIRECTORY


class TestPattern:
    """Tests for Pattern helpers."""

    def test_may_be_directory(self):
        assert classify("lib/").may_be_directory
        assert classify("lib").may_be_directory
        assert not classify("lib.js").may_be_directory

    def test_directory_form(self):
        assert classify("lib").directory_form() == "lib/"
        assert classify("lib/").directory_form() == "lib/"

    def test_as_directory(self):
        directory = classify("!/lib").as_directory()

        assert directory == Pattern(
            text="/lib/", negated=False, anchor=AnchorMode.RELATIVE, kind=PathKind.DIRECTORY
        )

    def test_ancestor_forms_of_directory_rule(self):
        assert classify("a/b/").ancestor_forms() == ["a/b/", "/a/b/", "a/", "/a/"]

    def test_ancestor_forms_of_rooted_directory_rule(self):
        assert classify("/lib/").ancestor_forms() == ["lib/", "/lib/"]

    def test_ancestor_forms_include_bare_text(self):
        assert classify("lib").ancestor_forms() == ["lib", "/lib", "lib/", "/lib/"]

    def test_pattern_is_frozen(self):
        with pytest.raises(AttributeError):
            classify("lib").text = "other"
