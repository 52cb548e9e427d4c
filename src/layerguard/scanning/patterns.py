"""Glob pattern matching on POSIX relative paths.

Supported syntax:
    *        any run of characters inside one path segment
    ?        one character inside a path segment
    [abc]    character class, [!abc] negated
    **       zero or more whole directories (a trailing ** matches everything below)
    {a,b}    alternatives, nested groups allowed; a group without a comma is literal
"""

from __future__ import annotations

import re
from functools import lru_cache


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups into plain glob patterns, in order, deduplicated.

    >>> expand_braces("src/*.{ts,tsx}")
    ['src/*.ts', 'src/*.tsx']
    """
    results: list[str] = []
    for expanded in _expand(pattern):
        if expanded not in results:
            results.append(expanded)
    return results


def _expand(pattern: str) -> list[str]:
    depth = 0
    start = -1
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                alternatives = _split_top_level(pattern[start + 1 : i])
                if len(alternatives) > 1:
                    prefix, suffix = pattern[:start], pattern[i + 1 :]
                    expanded: list[str] = []
                    for alt in alternatives:
                        expanded.extend(_expand(prefix + alt + suffix))
                    return expanded
    return [pattern]


def _split_top_level(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = []
    for ch in body:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def glob_to_regex(pattern: str) -> str:
    """Translate one brace-free glob pattern into an anchored regex string."""
    pattern = pattern.replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.lstrip("/")

    segments = [s for s in pattern.split("/") if s]
    parts: list[str] = []
    for idx, segment in enumerate(segments):
        last = idx == len(segments) - 1
        if segment == "**":
            parts.append(".*" if last else "(?:[^/]+/)*")
        else:
            parts.append(_translate_segment(segment) + ("" if last else "/"))
    return "^" + "".join(parts) + "$"


def _translate_segment(segment: str) -> str:
    out: list[str] = []
    i = 0
    n = len(segment)
    while i < n:
        ch = segment[i]
        if ch == "*":
            # Collapse runs of * inside a segment
            while i + 1 < n and segment[i + 1] == "*":
                i += 1
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        elif ch == "[":
            end = segment.find("]", i + 2 if i + 1 < n and segment[i + 1] in "!^" else i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                body = segment[i + 1 : end]
                if body and body[0] in "!^":
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return "".join(out)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(glob_to_regex(p)) for p in expand_braces(pattern))


class GlobMatcher:
    """Matches POSIX relative paths against a glob pattern with brace groups."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regexes = _compile(pattern)

    def matches(self, relative_path: str) -> bool:
        return any(rx.match(relative_path) for rx in self._regexes)

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"
