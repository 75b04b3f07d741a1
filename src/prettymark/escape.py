"""Escaping helpers for CommonMark output.

Every function here is pure: the result depends only on the arguments.
Escaping is context-sensitive rather than blanket, so ordinary prose keeps
its punctuation while anything a parser could read as markup gets a
backslash.

Rules applied by escape_text():
- Always: backslash, backtick, ``*`` ``_`` ``[`` ``]`` ``<``
- ``&`` when it could start an entity (followed by a letter, digit or ``#``)
- First non-space character of a line: ``#`` ``>`` ``-`` ``=`` ``~``,
  ``+`` followed by whitespace, and the ``.`` or ``)`` closing 1-9 digits
  when whitespace or the end of the text follows
- Inside headings: every ``#`` (a trailing run would close the heading)

Example:
    >>> escape_text("# not a heading", line_start=True)
    '\\\\# not a heading'
    >>> code_span("a ` b")
    '``a ` b``'
"""

from __future__ import annotations

import re

# Characters that are markup wherever they appear
_ALWAYS = frozenset("\\`*_[]<")

# Characters that open a block construct at the start of a line
_LINE_START = frozenset("#>-=~")

_ORDERED_MARKER = re.compile(r"[0-9]{1,9}[.)](?=[ \t]|\Z)")
_ENTITY_START = re.compile(r"[A-Za-z0-9#]")
_BACKTICK_RUN = re.compile(r"`+")
_BACKSLASH_ESCAPE = re.compile(r"\\([!-/:-@\[-`{-~])")


def escape_text(text: str, *, line_start: bool = False, heading: bool = False) -> str:
    """Escape literal text so it re-parses as the same text.

    Args:
        text: Literal text run (no code)
        line_start: True if the text begins at the start of an output line
        heading: True if the text is heading content

    Returns:
        Text with a backslash in front of every character that would
        otherwise be read as markup at its position.
    """
    if not text:
        return text

    # Position of the first non-space character when it could open a block
    block_start = -1
    if line_start:
        indent = len(text) - len(text.lstrip(" "))
        if indent < len(text) and indent <= 3:
            block_start = indent

    marker_end = -1
    if block_start >= 0:
        match = _ORDERED_MARKER.match(text, block_start)
        if match:
            marker_end = match.end() - 1

    parts: list[str] = []
    for i, ch in enumerate(text):
        if (
            ch in _ALWAYS
            or i == marker_end
            or (heading and ch == "#")
            or (ch == "&" and _ENTITY_START.match(text, i + 1))
            or (
                i == block_start
                and (ch in _LINE_START or (ch == "+" and text[i + 1 : i + 2] in ("", " ", "\t")))
            )
        ):
            parts.append("\\")
        parts.append(ch)
    return "".join(parts)


def unescape_text(text: str) -> str:
    """Remove CommonMark backslash escapes.

    Inverse of escape_text(): ``unescape_text(escape_text(s)) == s``.
    """
    return _BACKSLASH_ESCAPE.sub(r"\1", text)


def code_span(content: str) -> str:
    """Wrap inline code in the shortest backtick fence that cannot collide.

    The fence is one backtick longer than the longest backtick run inside
    the content. One space of padding is added on each side when the
    content starts or ends with a backtick, or starts and ends with a space
    (a parser strips one such space from each side).

    Args:
        content: Code span content

    Returns:
        Complete code span including delimiters
    """
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    fence = "`" * (longest + 1)
    if (
        content.startswith("`")
        or content.endswith("`")
        or (content.startswith(" ") and content.endswith(" ") and content.strip(" "))
    ):
        content = f" {content} "
    return f"{fence}{content}{fence}"


def link_destination(url: str) -> str:
    """Format a link or image destination.

    Destinations with whitespace or angle brackets use the ``<...>`` form;
    everything else is written bare with parentheses escaped.
    """
    if any(ch in url for ch in " \t<>"):
        return "<" + _escape_chars(url, "\\<>") + ">"
    return _escape_chars(url, "\\()")


def link_title(title: str) -> str:
    """Format a link title as a double-quoted string."""
    return '"' + _escape_chars(title, '\\"') + '"'


def code_fence(code: str, info: str = "") -> str:
    """Choose the fence for a fenced code block.

    At least three characters, and longer than any fence-like run that
    starts a line of the content. Tildes replace backticks when the info
    string contains a backtick, which a backtick fence cannot carry.
    """
    char = "~" if "`" in info else "`"
    longest = 0
    for line in code.split("\n"):
        stripped = line.lstrip(" ")
        run = len(stripped) - len(stripped.lstrip(char))
        longest = max(longest, run)
    return char * max(3, longest + 1)


def escape_info(info: str) -> str:
    """Escape a fenced code info string."""
    return _escape_chars(info, "\\")


def _escape_chars(text: str, chars: str) -> str:
    parts: list[str] = []
    for i, ch in enumerate(text):
        if ch in chars or (ch == "&" and _ENTITY_START.match(text, i + 1)):
            parts.append("\\")
        parts.append(ch)
    return "".join(parts)
