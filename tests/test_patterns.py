# tests/test_patterns.py
import re
import pytest

from projctx.core.patterns import (
    RegexPattern,
    SubstringPattern,
    coerce_pattern,
    coerce_patterns,
    parse_pattern,
)


def test_substring_is_literal_not_glob():
    pattern = SubstringPattern("*.ts")
    assert not pattern.matches("src/a.ts")
    assert pattern.matches("src/*.ts")


def test_regex_searches_anywhere():
    pattern = RegexPattern(re.compile(r"components/"))
    assert pattern.matches("src/components/Button.jsx")
    assert not pattern.matches("src/App.jsx")


def test_parse_pattern():
    assert parse_pattern("test") == SubstringPattern("test")
    parsed = parse_pattern(r"re:\.spec\.ts$")
    assert isinstance(parsed, RegexPattern)
    assert parsed.matches("a.spec.ts")
    assert str(parsed) == r"re:\.spec\.ts$"


def test_parse_invalid_regex():
    with pytest.raises(ValueError):
        parse_pattern("re:(unclosed")


def test_coerce_pattern_kinds():
    regex = re.compile("x")
    assert coerce_pattern("x") == SubstringPattern("x")
    assert coerce_pattern(regex) == RegexPattern(regex)
    existing = SubstringPattern("y")
    assert coerce_pattern(existing) is existing
    with pytest.raises(TypeError):
        coerce_pattern(42)


def test_coerce_patterns_wraps_single_value():
    assert coerce_patterns("abc") == (SubstringPattern("abc"),)
    assert coerce_patterns(["a", "b"]) == (SubstringPattern("a"), SubstringPattern("b"))
