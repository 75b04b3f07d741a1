"""Typed document events for prettymark.

A document arrives as a flat stream of events, in the order a CommonMark
parser emits them. Containers are bracketed by Start/End pairs carrying a
Tag; leaf content (text, code spans, breaks, raw HTML) arrives between them.

All events and tags are frozen dataclasses with slots for:
- Equality: two streams compare equal when their events do (round-trip tests)
- Immutability: safe to share across threads
- Pattern matching: match statements work naturally

Event Hierarchy:
Event
├── Start(tag) / End(tag)
├── Text
├── Code
├── SoftBreak
├── HardBreak
├── Html
├── InlineHtml
└── Rule

Tag
├── Paragraph
├── Heading
├── BlockQuote
├── List
├── ListItem
├── CodeBlock
├── Emphasis
├── Strong
├── Link
└── Image

"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Tags
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Paragraph of inline content."""


@dataclass(frozen=True, slots=True)
class Heading:
    """ATX heading.

    Markdown: # text (level 1) through ###### text (level 6)

    """

    level: int = 1


@dataclass(frozen=True, slots=True)
class BlockQuote:
    """Block quote.

    Markdown: > text

    """


@dataclass(frozen=True, slots=True)
class List:
    """Ordered or unordered list.

    ``start`` is None for a bullet list, otherwise the number of the
    first item.

    """

    start: int | None = None

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True, slots=True)
class ListItem:
    """Single list item."""


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Code block.

    Markdown: ```info ... ``` (fenced) or 4-space indented

    """

    info: str = ""
    fenced: bool = True


@dataclass(frozen=True, slots=True)
class Emphasis:
    """Emphasized (italic) text.

    Markdown: *text* or _text_

    """


@dataclass(frozen=True, slots=True)
class Strong:
    """Strong (bold) text.

    Markdown: **text** or __text__

    """


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink.

    Markdown: [text](url "title")

    """

    url: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Image:
    """Image. The alt text arrives as the events between Start and End.

    Markdown: ![alt](url "title")

    """

    url: str
    title: str = ""


Tag = (
    Paragraph
    | Heading
    | BlockQuote
    | List
    | ListItem
    | CodeBlock
    | Emphasis
    | Strong
    | Link
    | Image
)

# Tags whose content is inline text rather than blocks
INLINE_CONTAINERS = (Paragraph, Heading, Emphasis, Strong, Link, Image)

# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class Start:
    """Opens a container or inline span."""

    tag: Tag


@dataclass(frozen=True, slots=True)
class End:
    """Closes the innermost open container or span."""

    tag: Tag


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text. Escaped on output except inside code blocks."""

    content: str


@dataclass(frozen=True, slots=True)
class Code:
    """Inline code span content, without delimiters."""

    content: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """Line break with no semantic significance."""


@dataclass(frozen=True, slots=True)
class HardBreak:
    """Explicit line break."""


@dataclass(frozen=True, slots=True)
class Html:
    """Raw HTML, passed through verbatim.

    In block position this is an HTML block; inside inline content it is
    emitted in place.

    """

    content: str


@dataclass(frozen=True, slots=True)
class InlineHtml:
    """Raw inline HTML, passed through verbatim in place."""

    content: str


@dataclass(frozen=True, slots=True)
class Rule:
    """Thematic break.

    Markdown: ---, ***, or ___

    """


Event = Start | End | Text | Code | SoftBreak | HardBreak | Html | InlineHtml | Rule
