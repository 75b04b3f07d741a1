"""Append-only output buffer with lazy indentation.

Appends to a list and joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

Three kinds of output are held back instead of being appended immediately:

- Pending spaces: indentation and the space after a marker ("- ", "> ",
  "# ") are only written once real text follows on the same line. Blank
  lines therefore never carry trailing whitespace, and an empty heading
  renders as a bare "#".
- A deferred string: text whose spelling depends on what comes next
  (a trailing "!" that must become "\\!" if a link follows). It is flushed
  unchanged by the next write unless the caller respells it first.
- Reserved lines: a blank line whose presence is not known yet (the
  separator between items of a list that has not shown whether it is
  tight). The slot is kept in place and filled or left empty once
  settled.

Apart from settling reserved slots, nothing already appended is rewritten.

Thread Safety:
Writer instances are owned by a single PrettyPrinter.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prettymark.printer import Frame


class Writer:
    """Output buffer used by PrettyPrinter.

    Usage:
            >>> w = Writer()
            >>> w.write_text("-")
            >>> w.write_space()
            >>> w.write_text("item")
            >>> w.build()
            '- item'

    """

    __slots__ = (
        "_parts",
        "_prefix",
        "_pending_spaces",
        "_deferred",
        "_reserved",
        "at_line_start",
    )

    def __init__(self, prefix: str = "") -> None:
        """Initialize empty Writer.

        Args:
            prefix: Written at the start of every line
        """
        self._parts: list[str] = []
        self._prefix = prefix
        self._pending_spaces = 0
        self._deferred = ""
        # slot index -> text of a reserved line
        self._reserved: dict[int, str] = {}
        self.at_line_start = True
        self.write_indent(())

    @property
    def mark(self) -> int:
        """Position that changes whenever output is written.

        Two equal marks mean nothing was written in between. Pending spaces
        do not count until they are flushed.
        """
        return len(self._parts) + (1 if self._deferred else 0)

    def write_text(self, text: str) -> None:
        """Append text, first flushing anything held back.

        Empty strings are skipped, so they never force out pending spaces.
        """
        if not text:
            return
        self._flush()
        self._parts.append(text)
        self.at_line_start = False

    def write_space(self, count: int = 1) -> None:
        """Add lazy spaces, written only if text follows on this line."""
        self._pending_spaces += count

    def defer(self, text: str) -> None:
        """Hold text back until the next write."""
        self._flush()
        self._deferred = text
        self.at_line_start = False

    def respell_deferred(self, old: str, new: str) -> None:
        """Replace the deferred text if it is exactly ``old``."""
        if self._deferred == old:
            self._deferred = new

    def write_hard_break(self) -> None:
        """End the current line. Pending spaces are dropped."""
        if self._deferred:
            self._parts.append(self._deferred)
            self._deferred = ""
        self._pending_spaces = 0
        self._parts.append("\n")

    def write_indent(self, frames: Iterable[Frame]) -> None:
        """Write the line prefix and the continuation margin of each frame.

        Quote frames contribute a ">" marker; every frame contributes its
        indent as lazy spaces.
        """
        if self._prefix:
            self.write_text(self._prefix)
            self._pending_spaces = 1
        for frame in frames:
            if frame.marker:
                self.write_text(frame.marker)
            self._pending_spaces += frame.indent
        self.at_line_start = True

    def reserve_line(self, frames: Iterable[Frame]) -> int:
        """Start a new line through a slot that settle_line() decides.

        The writer ends up in the same state as after write_hard_break()
        and write_indent(frames), but the line break and margin just
        written are held in the slot. Unsettled slots stay empty.

        Returns:
            Slot to pass to settle_line()
        """
        if self._deferred:
            self._parts.append(self._deferred)
            self._deferred = ""
        slot = len(self._parts)
        self.write_hard_break()
        self.write_indent(frames)
        self._reserved[slot] = "".join(self._parts[slot:])
        del self._parts[slot:]
        self._parts.append("")
        return slot

    def settle_line(self, slot: int, keep: bool) -> None:
        """Fill a reserved slot with its line, or leave it empty."""
        text = self._reserved.pop(slot)
        if keep:
            self._parts[slot] = text

    def mark_line_start(self) -> None:
        """Treat the current position as the start of a line's content.

        Used after list and quote markers, where block syntax can begin.
        """
        self.at_line_start = True

    def build(self) -> str:
        """Join all parts into the final string.

        Deferred text is included; trailing pending spaces are not.
        """
        if self._deferred:
            self._parts.append(self._deferred)
            self._deferred = ""
        return "".join(self._parts)

    def _flush(self) -> None:
        if self._deferred:
            self._parts.append(self._deferred)
            self._deferred = ""
        if self._pending_spaces:
            self._parts.append(" " * self._pending_spaces)
            self._pending_spaces = 0
