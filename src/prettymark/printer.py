"""Event-driven pretty printer for CommonMark documents.

The printer consumes a stream of events, one at a time, and writes the
canonical CommonMark text for them. It keeps an explicit stack of open
containers so that list markers, quote prefixes, indentation, emphasis
delimiters and escaping are chosen from local state only.

Example:
    >>> from prettymark import PrettyPrinter, read_events
    >>> printer = PrettyPrinter()
    >>> printer.push_events(read_events("Lorem _ipsum_ dolor `sit`."))
    >>> printer.finish()
    'Lorem *ipsum* dolor `sit`.'

Block separation:
A block that follows a sibling is separated from it by a blank line, except
inside a tight list where a single newline keeps the list tight. Items of a
tight list hold their inline content directly (no Paragraph events); the
first evidence seen inside a list decides whether it is tight. Separators
written before that evidence arrives are reserved in the writer and settled
once it does.

Emphasis delimiters:
Runs use the configured delimiter, which also works inside words. A run
that would touch a delimiter of the same character (right after its
enclosing run opened, or right after a sibling run closed) switches to the
other character so the two delimiter runs cannot merge.

Thread Safety:
A printer is single-use and owned by one caller. Independent printers
share no state and may run concurrently.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from prettymark.config import PrintConfig, get_print_config
from prettymark.errors import PrinterClosedError, UnbalancedStructureError
from prettymark.escape import (
    code_fence,
    code_span,
    escape_info,
    escape_text,
    link_destination,
    link_title,
)
from prettymark.events import (
    INLINE_CONTAINERS,
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    HardBreak,
    Heading,
    Html,
    Image,
    InlineHtml,
    Link,
    List,
    ListItem,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strong,
    Tag,
    Text,
)
from prettymark.utils.logger import get_logger
from prettymark.writer import Writer

logger = get_logger(__name__)


@dataclass(slots=True)
class Frame:
    """One open container on the printer's stack.

    Attributes:
        tag: The tag from the Start event that opened this frame
        marker: Written at the start of every continuation line (">" for quotes)
        indent: Spaces added after the marker on continuation lines
        number: Next item number (ordered lists)
        bullet: Marker character: "-" or "*" for bullets, "." or ")" for ordered
        tight: Whether list items hold inline content directly (None until seen)
        inline_open: A list item has an implicit inline run in progress
        delimiter: Emphasis/strong delimiter this frame opened with
        opened_at: Writer mark right after the opening delimiter
        code: Buffered code block text
        indented: Render this code block with 4-space indentation
        reserved: Writer slots for separators awaiting this list's tightness

    """

    tag: Tag
    marker: str = ""
    indent: int = 0
    number: int = 0
    bullet: str = "-"
    tight: bool | None = None
    inline_open: bool = False
    delimiter: str = ""
    opened_at: int = -1
    code: list[str] = field(default_factory=list)
    indented: bool = False
    reserved: list[int] = field(default_factory=list)


class PrettyPrinter:
    """Serialize a CommonMark event stream into canonical source text.

    Push events with push_event() or push_events(), then call finish() once
    to get the text. An End event that does not match the innermost open
    container raises UnbalancedStructureError and halts the printer: every
    later call re-raises it, so a partial buffer is never handed out.

    """

    __slots__ = (
        "_config",
        "_writer",
        "_stack",
        "_needs_break",
        "_closed_run",
        "_previous_list",
        "_error",
        "_closed",
    )

    def __init__(self, config: PrintConfig | None = None) -> None:
        """Initialize an empty printer.

        Args:
            config: Formatting options (defaults to the current context's config)
        """
        self._config = config or get_print_config()
        self._writer = Writer(self._config.prefix)
        self._stack: list[Frame] = []
        self._needs_break = False
        # (delimiter, writer mark) of the emphasis run that closed last
        self._closed_run: tuple[str, int] | None = None
        # (stack depth, bullet) of a list that just closed, until the next block starts
        self._previous_list: tuple[int, str] | None = None
        self._error: UnbalancedStructureError | None = None
        self._closed = False

    @property
    def config(self) -> PrintConfig:
        return self._config

    @property
    def depth(self) -> int:
        """Number of currently open containers."""
        return len(self._stack)

    def push_event(self, event: Event) -> None:
        """Push a single event into the printer.

        Raises:
            UnbalancedStructureError: End does not match the innermost container
            PrinterClosedError: finish() was already called
        """
        self._check_usable()
        try:
            match event:
                case Start(tag=tag):
                    self._start(tag)
                case End(tag=tag):
                    self._end(tag)
                case Text(content=content):
                    self._text(content)
                case Code(content=content):
                    self._begin_inline()
                    self._writer.write_text(code_span(content))
                case SoftBreak():
                    self._soft_break()
                case HardBreak():
                    self._hard_break()
                case Html(content=content):
                    self._html(content)
                case InlineHtml(content=content):
                    self._begin_inline()
                    self._write_lines(content)
                case Rule():
                    self._rule()
                case _:
                    raise TypeError(f"Not a prettymark event: {event!r}")
        except UnbalancedStructureError as exc:
            self._error = exc
            logger.debug("Halting on unbalanced event stream: %s", exc)
            raise

    def push_events(self, events: Iterable[Event]) -> None:
        """Push a series of events into the printer, stopping at the first error."""
        for event in events:
            self.push_event(event)

    def finish(self) -> str:
        """Return the printed text and close the printer.

        Raises:
            UnbalancedStructureError: Containers are still open, or the
                printer halted earlier
            PrinterClosedError: finish() was already called
        """
        self._check_usable()
        if self._stack:
            top = self._stack[-1]
            self._error = UnbalancedStructureError(
                f"{type(top.tag).__name__} still open at end of stream",
                expected=top.tag,
                depth=len(self._stack),
            )
            logger.debug("Halting on unbalanced event stream: %s", self._error)
            raise self._error
        self._closed = True
        return self._writer.build()

    # =========================================================================
    # Start / End
    # =========================================================================

    def _start(self, tag: Tag) -> None:
        writer = self._writer
        match tag:
            case Paragraph():
                self._mark_list(tight=False)
                self._begin_block()
                self._push(tag)
            case Heading(level=level):
                self._begin_block()
                writer.write_text("#" * level)
                writer.write_space()
                self._push(tag)
            case BlockQuote():
                self._begin_block()
                writer.write_text(">")
                writer.write_space()
                writer.mark_line_start()
                self._push(tag, marker=">", indent=1)
            case List(start=start):
                previous = self._begin_block()
                # Two adjacent lists with the same marker would merge into one
                if start is None:
                    bullet = "*" if previous == "-" else "-"
                else:
                    bullet = ")" if previous == "." else "."
                self._push(tag, number=start or 0, bullet=bullet)
            case ListItem():
                self._begin_block()
                marker = self._item_marker()
                writer.write_text(marker)
                writer.write_space()
                writer.mark_line_start()
                self._push(tag, indent=len(marker) + 1)
            case CodeBlock(fenced=fenced):
                previous = self._begin_block()
                # An indented block right after a list would be absorbed by its last item
                indented = not fenced and previous is None and not self._tight_context()
                self._push(tag, indented=indented)
            case Emphasis() | Strong():
                self._begin_inline()
                char = self._emphasis_char()
                delimiter = char if isinstance(tag, Emphasis) else char * 2
                writer.write_text(delimiter)
                self._push(tag, delimiter=delimiter, opened_at=writer.mark)
            case Link():
                self._begin_inline()
                writer.respell_deferred("!", "\\!")
                writer.write_text("[")
                self._push(tag)
            case Image():
                self._begin_inline()
                writer.write_text("![")
                self._push(tag)

    def _end(self, tag: Tag) -> None:
        frame = self._pop(tag)
        match frame.tag:
            case Paragraph() | Heading() | BlockQuote() | ListItem():
                self._needs_break = True
            case List():
                self._needs_break = True
                self._previous_list = (len(self._stack), frame.bullet)
                # No evidence either way: both spellings re-parse alike
                self._settle_list(frame, tight=True)
            case CodeBlock():
                self._write_code_block(frame)
                self._needs_break = True
            case Emphasis() | Strong():
                self._writer.write_text(frame.delimiter)
                self._closed_run = (frame.delimiter[0], self._writer.mark)
            case Link(url=url, title=title) | Image(url=url, title=title):
                destination = link_destination(url)
                if title:
                    destination = f"{destination} {link_title(title)}"
                self._writer.write_text(f"]({destination})")

    def _item_marker(self) -> str:
        parent = self._top()
        if parent is None or not isinstance(parent.tag, List):
            return "-"
        if not parent.tag.ordered:
            return parent.bullet
        marker = f"{parent.number}{parent.bullet}"
        parent.number += 1
        return marker

    # =========================================================================
    # Leaf events
    # =========================================================================

    def _text(self, content: str) -> None:
        top = self._top()
        if top is not None and isinstance(top.tag, CodeBlock):
            top.code.append(content)
            return

        self._begin_inline()
        heading = self._in_heading()
        if heading:
            content = content.replace("\n", " ")
        lines = content.split("\n")
        for i, line in enumerate(lines):
            if i:
                self._newline()
            escaped = escape_text(line, line_start=self._writer.at_line_start, heading=heading)
            if i == len(lines) - 1 and escaped.endswith("!"):
                # "!" followed by a link would turn it into an image
                self._writer.write_text(escaped[:-1])
                self._writer.defer("!")
            else:
                self._writer.write_text(escaped)

    def _soft_break(self) -> None:
        if self._config.soft_break == "newline" and not self._in_heading():
            self._newline()
        else:
            self._writer.write_text(" ")

    def _hard_break(self) -> None:
        # Headings are single-line
        if self._in_heading():
            self._writer.write_text(" ")
            return
        self._writer.write_text("\\" if self._config.hard_break == "backslash" else "  ")
        self._newline()

    def _html(self, content: str) -> None:
        top = self._top()
        if top is not None and (isinstance(top.tag, INLINE_CONTAINERS) or top.inline_open):
            self._write_lines(content)
            return
        self._begin_block()
        self._write_lines(content.removesuffix("\n"))
        self._needs_break = True

    def _rule(self) -> None:
        self._begin_block()
        # "---" would read as a bullet or setext underline inside list items
        in_item = any(isinstance(frame.tag, ListItem) for frame in self._stack)
        self._writer.write_text("___" if in_item else "---")
        self._needs_break = True

    def _write_code_block(self, frame: Frame) -> None:
        writer = self._writer
        code = "".join(frame.code)
        lines = code.split("\n")
        if code.endswith("\n"):
            lines.pop()

        if frame.indented and lines and lines[0].strip():
            for i, line in enumerate(lines):
                if i:
                    self._newline()
                if line:
                    writer.write_space(4)
                writer.write_text(line)
            return

        info = frame.tag.info if isinstance(frame.tag, CodeBlock) else ""
        fence = code_fence(code, info)
        writer.write_text(fence + escape_info(info))
        for line in lines:
            self._newline()
            writer.write_text(line)
        self._newline()
        writer.write_text(fence)

    def _write_lines(self, text: str) -> None:
        for i, line in enumerate(text.split("\n")):
            if i:
                self._newline()
            self._writer.write_text(line)

    # =========================================================================
    # Block separation
    # =========================================================================

    def _begin_block(self) -> str | None:
        """Prepare for a new block in the innermost container.

        Returns:
            The bullet of the list that immediately precedes this block as a
            sibling, if any.
        """
        top = self._top()
        if top is not None and top.inline_open:
            top.inline_open = False
            self._needs_break = True
        previous, self._previous_list = self._previous_list, None
        self._flush_break()
        if previous is not None and previous[0] == len(self._stack):
            return previous[1]
        return None

    def _begin_inline(self) -> None:
        """Start inline content directly inside a list item (a tight list)."""
        top = self._top()
        if top is None or top.inline_open or not isinstance(top.tag, ListItem):
            return
        self._previous_list = None
        self._mark_list(tight=True)
        self._flush_break()
        top.inline_open = True

    def _flush_break(self) -> None:
        if not self._needs_break:
            return
        self._needs_break = False
        self._newline()
        parent = self._context_list()
        if parent is None or parent.tight is False:
            self._newline()
        elif parent.tight is None:
            parent.reserved.append(self._writer.reserve_line(self._stack))

    def _context_list(self) -> Frame | None:
        """The list whose tightness governs separators at this position."""
        top = self._top()
        if top is not None and isinstance(top.tag, ListItem) and len(self._stack) >= 2:
            top = self._stack[-2]
        if top is not None and isinstance(top.tag, List):
            return top
        return None

    def _tight_context(self) -> bool:
        parent = self._context_list()
        return parent is not None and parent.tight is not False

    def _mark_list(self, *, tight: bool) -> None:
        """Record list tightness from content found directly inside an item."""
        if len(self._stack) < 2 or not isinstance(self._stack[-1].tag, ListItem):
            return
        parent = self._stack[-2]
        if isinstance(parent.tag, List) and (parent.tight is None or not tight):
            parent.tight = tight
            self._settle_list(parent, tight=tight)

    def _settle_list(self, frame: Frame, *, tight: bool) -> None:
        """Decide the separators reserved while the list's tightness was unknown."""
        for slot in frame.reserved:
            self._writer.settle_line(slot, keep=not tight)
        frame.reserved.clear()

    def _emphasis_char(self) -> str:
        """Delimiter character for an emphasis or strong run opening here."""
        char = self._config.emphasis
        mark = self._writer.mark
        top = self._top()
        touching: set[str] = set()
        if top is not None and top.delimiter and top.opened_at == mark:
            touching.add(top.delimiter[0])
        if self._closed_run is not None and self._closed_run[1] == mark:
            touching.add(self._closed_run[0])
        if char in touching:
            return self._config.alternate_emphasis
        return char

    def _newline(self) -> None:
        self._writer.write_hard_break()
        self._writer.write_indent(self._stack)

    # =========================================================================
    # Stack
    # =========================================================================

    def _top(self) -> Frame | None:
        return self._stack[-1] if self._stack else None

    def _in_heading(self) -> bool:
        return any(isinstance(frame.tag, Heading) for frame in self._stack)

    def _push(self, tag: Tag, **fields: object) -> None:
        self._stack.append(Frame(tag, **fields))  # type: ignore[arg-type]

    def _pop(self, tag: Tag) -> Frame:
        name = type(tag).__name__
        if not self._stack:
            raise UnbalancedStructureError(f"End({name}) with no open container", found=tag)
        top = self._stack[-1]
        if type(top.tag) is not type(tag):
            raise UnbalancedStructureError(
                f"End({name}) does not match open {type(top.tag).__name__}",
                expected=top.tag,
                found=tag,
                depth=len(self._stack),
            )
        return self._stack.pop()

    def _check_usable(self) -> None:
        if self._closed:
            raise PrinterClosedError("Printer already finished; create a new one")
        if self._error is not None:
            raise self._error
