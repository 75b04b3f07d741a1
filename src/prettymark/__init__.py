"""
prettymark — Canonical CommonMark pretty printer

Turns a stream of CommonMark document events back into normalized,
re-parseable CommonMark source: one emphasis style, one list marker, minimal
escaping, consistent block spacing.

Quick Start:
    >>> from prettymark import prettify
    >>> prettify("Lorem __ipsum__ dolor `sit` amet!")
    'Lorem **ipsum** dolor `sit` amet!'

Event API:
    >>> from prettymark import PrettyPrinter, read_events
    >>> printer = PrettyPrinter()
    >>> printer.push_events(read_events("Lorem _ipsum_ dolor `sit`."))
    >>> printer.finish()
    'Lorem *ipsum* dolor `sit`.'

Any producer of prettymark events can drive PrettyPrinter directly; the
bundled reader uses markdown-it-py as the CommonMark parser.

Installation:
    pip install prettymark
"""

from prettymark.config import (
    PrintConfig,
    get_print_config,
    print_config_context,
    reset_print_config,
    set_print_config,
)
from prettymark.errors import (
    ConfigError,
    PrettyMarkError,
    PrinterClosedError,
    UnbalancedStructureError,
)
from prettymark.escape import code_span, escape_text, unescape_text
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
from prettymark.printer import PrettyPrinter
from prettymark.reader import read_events

__version__ = "0.1.0"


def prettify(source: str, *, config: PrintConfig | None = None) -> str:
    """Parse a CommonMark document and return it pretty printed.

    Args:
        source: CommonMark source text
        config: Formatting options (defaults to the current context's config)

    Returns:
        Canonical CommonMark text

    Example:
        >>> prettify("Lorem __ipsum__ dolor `sit` amet!")
        'Lorem **ipsum** dolor `sit` amet!'
    """
    printer = PrettyPrinter(config)
    printer.push_events(read_events(source))
    return printer.finish()


class PrettyDisplay:
    """Wrapper that pretty prints the wrapped document when formatted.

    Example:
        >>> str(PrettyDisplay("Lorem __ipsum__ dolor `sit` amet!"))
        'Lorem **ipsum** dolor `sit` amet!'
        >>> f"My document: {PrettyDisplay('Lorem __ipsum__')}"
        'My document: Lorem **ipsum**'
    """

    __slots__ = ("source", "config")

    def __init__(self, source: str, config: PrintConfig | None = None) -> None:
        self.source = source
        self.config = config

    def __str__(self) -> str:
        return prettify(self.source, config=self.config)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"PrettyDisplay({self.source!r})"


__all__ = [
    # Main API
    "prettify",
    "PrettyDisplay",
    "PrettyPrinter",
    "read_events",
    # Configuration
    "PrintConfig",
    "get_print_config",
    "set_print_config",
    "reset_print_config",
    "print_config_context",
    # Errors
    "PrettyMarkError",
    "UnbalancedStructureError",
    "PrinterClosedError",
    "ConfigError",
    # Escaping
    "escape_text",
    "unescape_text",
    "code_span",
    # Events
    "Event",
    "Start",
    "End",
    "Text",
    "Code",
    "SoftBreak",
    "HardBreak",
    "Html",
    "InlineHtml",
    "Rule",
    # Tags
    "Tag",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "List",
    "ListItem",
    "CodeBlock",
    "Emphasis",
    "Strong",
    "Link",
    "Image",
    # Version
    "__version__",
]
