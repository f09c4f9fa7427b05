from __future__ import annotations

import re


# Priority order: the first indicator that matches wins.
BUILTIN_INDICATORS: tuple[str, ...] = (
    r"No tests found",
    r"Permission denied",
    r"Out of space",
    r"Segmentation fault",
    r"\bKilled\b",
    r"\bERROR\b",
)


def compile_indicators(extra_pattern: str | None = None) -> list[re.Pattern[str]]:
    """Built-in indicators (case-insensitive) plus an optional caller pattern, last.

    The caller pattern is a regular expression matched case-sensitively; an
    invalid one raises `re.error`.
    """
    compiled = [re.compile(p, re.IGNORECASE) for p in BUILTIN_INDICATORS]
    extra = str(extra_pattern or "")
    if extra.strip():
        compiled.append(re.compile(extra))
    return compiled


def first_match(text: str, patterns: list[re.Pattern[str]]) -> str | None:
    """Return the source of the first pattern found anywhere in `text`."""
    for pat in patterns:
        if pat.search(text):
            return pat.pattern
    return None
