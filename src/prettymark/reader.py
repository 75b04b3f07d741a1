"""Read CommonMark source into a prettymark event stream.

Parsing is delegated to markdown-it-py, whose flat token stream already
brackets containers with ``*_open`` / ``*_close`` tokens. This module maps
those tokens onto prettymark events:

- Paragraphs hidden by markdown-it (the paragraphs of tight lists) produce
  no events, so tight list items hold their inline content directly.
- Fenced and indented code blocks become Start(CodeBlock), Text, End.
- Adjacent text tokens are merged into a single Text event.

Example:
    >>> from prettymark.reader import read_events
    >>> list(read_events("*hi*"))
    [Start(tag=Paragraph()), Start(tag=Emphasis()), Text(content='hi'), End(tag=Emphasis()), End(tag=Paragraph())]

Thread Safety:
The shared MarkdownIt instance is only read after construction. Each call
owns its own token list and tag stack.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll

from prettymark.events import (
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

if TYPE_CHECKING:
    from markdown_it.token import Token

logger = get_logger(__name__)

_md = MarkdownIt("commonmark")


def get_parser() -> MarkdownIt:
    """Return the shared CommonMark ``MarkdownIt`` instance."""
    return _md


def read_events(source: str, *, parser: MarkdownIt | None = None) -> Iterator[Event]:
    """Parse CommonMark source and yield its events in document order.

    Args:
        source: CommonMark text
        parser: markdown-it instance to use (defaults to a CommonMark preset)

    Yields:
        Events suitable for PrettyPrinter.push_events()
    """
    tokens = (parser or _md).parse(source)
    yield from _merge_text(_block_events(tokens))


def _block_events(tokens: list[Token]) -> Iterator[Event]:
    open_tags: list[Tag] = []
    for token in tokens:
        match token.type:
            case "paragraph_open" | "paragraph_close" if token.hidden:
                continue
            case "paragraph_open":
                yield _open(open_tags, Paragraph())
            case "heading_open":
                yield _open(open_tags, Heading(level=int(token.tag[1:])))
            case "blockquote_open":
                yield _open(open_tags, BlockQuote())
            case "bullet_list_open":
                yield _open(open_tags, List())
            case "ordered_list_open":
                start = token.attrGet("start")
                yield _open(open_tags, List(start=int(start) if start is not None else 1))
            case "list_item_open":
                yield _open(open_tags, ListItem())
            case (
                "paragraph_close"
                | "heading_close"
                | "blockquote_close"
                | "bullet_list_close"
                | "ordered_list_close"
                | "list_item_close"
            ):
                yield End(open_tags.pop())
            case "fence":
                tag = CodeBlock(info=unescapeAll(token.info).strip(), fenced=True)
                yield from (Start(tag), Text(token.content), End(tag))
            case "code_block":
                tag = CodeBlock(fenced=False)
                yield from (Start(tag), Text(token.content), End(tag))
            case "hr":
                yield Rule()
            case "html_block":
                yield Html(token.content)
            case "inline":
                yield from _inline_events(token.children or [])
            case _:
                logger.debug("Skipping unsupported block token %r", token.type)


def _inline_events(tokens: list[Token]) -> Iterator[Event]:
    open_tags: list[Tag] = []
    for token in tokens:
        match token.type:
            case "text" | "text_special":
                yield Text(token.content)
            case "code_inline":
                yield Code(token.content)
            case "softbreak":
                yield SoftBreak()
            case "hardbreak":
                yield HardBreak()
            case "em_open":
                yield _open(open_tags, Emphasis())
            case "strong_open":
                yield _open(open_tags, Strong())
            case "link_open":
                tag = Link(url=str(token.attrGet("href") or ""), title=str(token.attrGet("title") or ""))
                yield _open(open_tags, tag)
            case "em_close" | "strong_close" | "link_close":
                yield End(open_tags.pop())
            case "image":
                tag = Image(url=str(token.attrGet("src") or ""), title=str(token.attrGet("title") or ""))
                yield Start(tag)
                yield from _inline_events(token.children or [])
                yield End(tag)
            case "html_inline":
                yield InlineHtml(token.content)
            case _:
                logger.debug("Skipping unsupported inline token %r", token.type)


def _open(open_tags: list[Tag], tag: Tag) -> Start:
    open_tags.append(tag)
    return Start(tag)


def _merge_text(events: Iterable[Event]) -> Iterator[Event]:
    pending: list[str] = []
    for event in events:
        if isinstance(event, Text):
            pending.append(event.content)
            continue
        yield from _joined(pending)
        pending.clear()
        yield event
    yield from _joined(pending)


def _joined(parts: list[str]) -> Iterator[Text]:
    text = "".join(parts)
    if text:
        yield Text(text)
