"""Round-trip tests: re-parsing printed output yields the same events.

Soft breaks are printed as newlines here so that they survive as SoftBreak
events; with the default (space) they fold into the surrounding text.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from prettymark import (
    Code,
    Emphasis,
    End,
    Paragraph,
    PrettyPrinter,
    PrintConfig,
    Start,
    Strong,
    Text,
    prettify,
    read_events,
)

NEWLINES = PrintConfig(soft_break="newline")

DOCUMENTS = [
    "Lorem _ipsum_ dolor `sit`.",
    "# Foo\n\nLorem ipsum\n\n## Bar\n\nDolor sit amet",
    "- Foo\n- Bar\n- Baz",
    "1. Foo\n\n   Bar\n2. Baz\n3. Quux",
    "> Lorem ipsum\n>\n> Dolor sit",
    "- > Foo\n  > * Bar\n  > * Baz",
    "```python\nprint('hi')\n```",
    "    indented code\n    more\n",
    '[link](http://example.com "title") and ![img](a.png)',
    "Some **strong _nested_ text** here",
    "*a **b** c*",
    "- a\n\n* b",
    "1. a\n2. b\n\n1) c",
    "Text with \\* literal asterisks and 1. numbers",
    "a  \nb",
    "a\n\n* * *\n\nb",
    "<div>\nhello\n</div>\n\nafter",
    "- a\n  - b\n- c",
    "10. ten\n11. eleven",
    "Line one\nline two",
    "# Heading with `code` and *emphasis*",
    "> quote\n\n- list in doc\n\n```\nfenced\n```",
    "Escapes: \\# \\> \\- \\[x\\] \\<tag> &amp;",
    "1\\. not a list",
    "\\- not a list",
    "Image ![alt *text*](img.png)",
    "Hey\\![link](u)",
    "Code with ``a ` backtick`` inside",
    "- ```\n  x\n  ```\n\n- b",
    "- ```\n  x\n  ```\n- b",
    "- ```\n  x\n  ```\n\n- ```\n  y\n  ```\n\n- b",
    "foo**bar*baz*qux**",
    "*x*_y_",
    "__a__**b**",
    "1.5 litres\n\n1\\. item",
]


def events_of(source: str) -> list:
    return list(read_events(source))


def print_events(events, config: PrintConfig = NEWLINES) -> str:
    printer = PrettyPrinter(config)
    printer.push_events(events)
    return printer.finish()


class TestDocumentRoundTrip:
    """Printed documents re-parse to the same event stream."""

    @pytest.mark.parametrize("source", DOCUMENTS)
    def test_events_preserved(self, source: str) -> None:
        output = prettify(source, config=NEWLINES)
        assert events_of(output) == events_of(source)

    @pytest.mark.parametrize("source", DOCUMENTS)
    def test_output_is_fixed_point(self, source: str) -> None:
        """Printing already-canonical text changes nothing."""
        once = prettify(source, config=NEWLINES)
        assert prettify(once, config=NEWLINES) == once


# Printable characters with CommonMark meaning, plus filler
MARKUP_ALPHABET = "ab1 #*_`[]()!<>-+.=~&\\|{}"


class TestTextRoundTrip:
    """Escaped text re-parses to the same literal text."""

    @given(text=st.text(alphabet=MARKUP_ALPHABET, min_size=1, max_size=24).map(str.strip).filter(bool))
    @settings(max_examples=300)
    def test_paragraph_text(self, text: str) -> None:
        events = [Start(Paragraph()), Text(text), End(Paragraph())]
        assert events_of(print_events(events)) == events

    @given(content=st.text(alphabet="`a ", min_size=1, max_size=16).filter(lambda s: "a" in s))
    @settings(max_examples=200)
    def test_code_span(self, content: str) -> None:
        events = [Start(Paragraph()), Code(content), End(Paragraph())]
        assert events_of(print_events(events)) == events


class TestDelimiterNonCollision:
    """Nested or adjacent emphasis never produces colliding delimiter runs."""

    @given(kinds=st.lists(st.sampled_from([Emphasis, Strong]), min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_no_triple_runs(self, kinds: list) -> None:
        tags = [kind() for kind in kinds]
        events = [
            Start(Paragraph()),
            *(Start(tag) for tag in tags),
            Text("x"),
            *(End(tag) for tag in reversed(tags)),
            End(Paragraph()),
        ]
        output = print_events(events)
        assert "***" not in output
        assert "___" not in output

    @pytest.mark.parametrize(
        "kinds",
        [
            [Strong, Emphasis],
            [Emphasis, Strong],
            [Emphasis, Emphasis],
            [Strong, Strong],
            [Emphasis, Strong, Emphasis],
        ],
    )
    def test_nesting_reparses(self, kinds: list) -> None:
        tags = [kind() for kind in kinds]
        events = [
            Start(Paragraph()),
            *(Start(tag) for tag in tags),
            Text("x"),
            *(End(tag) for tag in reversed(tags)),
            End(Paragraph()),
        ]
        assert events_of(print_events(events)) == events

    @pytest.mark.parametrize(
        "kinds",
        [
            [Emphasis, Emphasis],
            [Strong, Strong],
            [Strong, Emphasis],
            [Emphasis, Strong],
            [Emphasis, Emphasis, Emphasis],
        ],
    )
    def test_adjacent_siblings_reparse(self, kinds: list) -> None:
        events = [Start(Paragraph())]
        for kind in kinds:
            events += [Start(kind()), Text("x"), End(kind())]
        events.append(End(Paragraph()))
        assert events_of(print_events(events)) == events

    @given(kinds=st.lists(st.sampled_from([Emphasis, Strong]), min_size=2, max_size=6))
    @settings(max_examples=100)
    def test_sibling_runs_never_merge(self, kinds: list) -> None:
        events = [Start(Paragraph())]
        for kind in kinds:
            events += [Start(kind()), Text("x"), End(kind())]
        events.append(End(Paragraph()))
        output = print_events(events)
        assert "***" not in output
        assert "___" not in output
        assert events_of(output) == events
