"""ECMA-262 regular expressions for ``patternProperties``, translated to ``re``.

JSON Schema patterns use ECMA-262 syntax.  Most of it is shared with Python's
``re``; the translation handles the differences that would otherwise fail to
compile or silently change meaning:

- named groups ``(?<name>...)``      -> ``(?P<name>...)``
- named backreferences ``\\k<name>`` -> ``(?P=name)``
- code point escapes ``\\u{1F600}``  -> ``\\U0001F600``
- control escapes ``\\cJ``           -> ``\\x0a``
- the empty negated class ``[^]``    -> ``[\\s\\S]``
- the empty class ``[]``             -> ``(?!)``
- ``$`` outside a class              -> ``(?!\\n)\\Z`` (ECMA ``$`` never matches
  before a trailing newline)

Compilation uses ``re.ASCII`` so ``\\d``, ``\\w`` and ``\\b`` keep their
ECMA (ASCII-only) meaning.  Patterns are searched, not anchored, as JSON
Schema requires.
"""

from __future__ import annotations

import re

from json_schema_view.errors import SchemaConfigurationError

__all__ = ["compile_pattern", "ecma_to_python"]

_NAMED_GROUP = re.compile(r"\(\?<(?=[A-Za-z_])")


def ecma_to_python(pattern: str) -> str:
    """Translate an ECMA-262 pattern into an equivalent Python ``re`` pattern.

    Args:
        pattern: The pattern as written in the schema.

    Returns:
        A pattern string suitable for ``re.compile(..., re.ASCII)``.
    """
    out: list[str] = []
    i = 0
    in_class = False
    length = len(pattern)
    while i < length:
        ch = pattern[i]
        if ch == "\\" and i + 1 < length:
            nxt = pattern[i + 1]
            if nxt == "k" and i + 2 < length and pattern[i + 2] == "<":
                end = pattern.find(">", i + 3)
                if end != -1:
                    out.append(f"(?P={pattern[i + 3:end]})")
                    i = end + 1
                    continue
            if nxt == "u" and i + 2 < length and pattern[i + 2] == "{":
                end = pattern.find("}", i + 3)
                if end != -1:
                    out.append(f"\\U{int(pattern[i + 3:end], 16):08X}")
                    i = end + 1
                    continue
            if nxt == "c" and i + 2 < length and pattern[i + 2].isalpha():
                out.append(f"\\x{ord(pattern[i + 2]) % 32:02x}")
                i += 3
                continue
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
            out.append(ch)
            i += 1
            continue
        if pattern.startswith("[^]", i):
            out.append(r"[\s\S]")
            i += 3
            continue
        if pattern.startswith("[]", i):
            # empty class: matches nothing in ECMA, a syntax error in Python
            out.append("(?!)")
            i += 2
            continue
        if ch == "[":
            in_class = True
            out.append(ch)
            if pattern.startswith("^", i + 1):
                out.append("^")
                i += 1
            i += 1
            continue
        if ch == "$":
            out.append(r"(?!\n)\Z")
            i += 1
            continue
        if ch == "(" and _NAMED_GROUP.match(pattern, i):
            out.append("(?P<")
            i += 3
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate and compile an ECMA-262 pattern.

    Raises:
        SchemaConfigurationError: If the pattern cannot be compiled.
    """
    try:
        return re.compile(ecma_to_python(pattern), re.ASCII)
    except (re.error, ValueError) as exc:
        msg = f"cannot compile pattern {pattern!r}: {exc}"
        raise SchemaConfigurationError(msg) from exc
