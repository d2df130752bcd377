# src/projctx/core/patterns.py
import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

REGEX_PREFIX = "re:"


@dataclass(frozen=True)
class SubstringPattern:
    """Matches when the text occurs anywhere in the relative path."""
    text: str

    def matches(self, rel_path: str) -> bool:
        return self.text in rel_path

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class RegexPattern:
    """Matches when the regex finds a match anywhere in the relative path."""
    regex: "re.Pattern"

    def matches(self, rel_path: str) -> bool:
        return self.regex.search(rel_path) is not None

    def __str__(self) -> str:
        return f"{REGEX_PREFIX}{self.regex.pattern}"


PathPattern = Union[SubstringPattern, RegexPattern]


def parse_pattern(raw: str) -> PathPattern:
    """
    Parses the text form used on the command line.
    're:<expr>' compiles a regex, anything else is a literal substring.
    """
    if raw.startswith(REGEX_PREFIX):
        expr = raw[len(REGEX_PREFIX):]
        try:
            return RegexPattern(re.compile(expr))
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{expr}': {e}") from e
    return SubstringPattern(raw)


def coerce_pattern(value: Union[str, "re.Pattern", PathPattern]) -> PathPattern:
    if isinstance(value, (SubstringPattern, RegexPattern)):
        return value
    if isinstance(value, re.Pattern):
        return RegexPattern(value)
    if isinstance(value, str):
        return SubstringPattern(value)
    raise TypeError(f"Unsupported pattern type: {type(value).__name__}")


def coerce_patterns(values: Iterable[Union[str, "re.Pattern", PathPattern]]) -> Tuple[PathPattern, ...]:
    # A lone pattern is not a collection of patterns.
    if isinstance(values, (str, re.Pattern, SubstringPattern, RegexPattern)):
        values = [values]
    return tuple(coerce_pattern(v) for v in values)
