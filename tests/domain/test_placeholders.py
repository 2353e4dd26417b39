"""Tests for placeholder detection and substitution."""

from __future__ import annotations

from pathlib import Path

import pytest

from filepipe.domain.placeholders import Placeholder, detect_placeholders, substitute


class TestDetectPlaceholders:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("cat %in > %out", {Placeholder.IN, Placeholder.OUT}),
            ("fasmg input.asm %out", {Placeholder.OUT}),
            ("wc -l %in", {Placeholder.IN}),
            ("echo nothing", set()),
            ("echo %IN %Out", set()),
        ],
    )
    def test_detect(self, template: str, expected: set[Placeholder]) -> None:
        assert detect_placeholders(template) == frozenset(expected)

    def test_substring_match(self) -> None:
        # Detection is literal substring search, not word matching.
        assert detect_placeholders("cat %input") == {Placeholder.IN}

    def test_placeholder_values(self) -> None:
        assert Placeholder.IN == "%in"
        assert Placeholder.OUT == "%out"


class TestSubstitute:
    def test_replaces_all_occurrences(self) -> None:
        result = substitute("diff %in %in", {Placeholder.IN: Path("/tmp/a")})
        assert result == "diff /tmp/a /tmp/a"

    def test_replaces_both(self) -> None:
        result = substitute(
            "cat %in > %out; cat %out",
            {Placeholder.IN: "/x/in", Placeholder.OUT: "/x/out"},
        )
        assert result == "cat /x/in > /x/out; cat /x/out"

    def test_absent_mapping_leaves_token(self) -> None:
        result = substitute("cmd %in %out", {Placeholder.OUT: "/o"})
        assert result == "cmd %in /o"

    def test_no_mapping_is_identity(self) -> None:
        assert substitute("echo %in", {}) == "echo %in"

    def test_shell_syntax_untouched(self) -> None:
        template = "sort %in | uniq -c > '%out' 2>&1"
        result = substitute(template, {Placeholder.IN: "I", Placeholder.OUT: "O"})
        assert result == "sort I | uniq -c > 'O' 2>&1"
