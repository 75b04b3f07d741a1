"""Drive the printer from a hand-built event stream (no parser involved)."""

from prettymark import (
    Emphasis,
    End,
    List,
    ListItem,
    Paragraph,
    PrettyPrinter,
    Start,
    Text,
)

events = [
    Start(Paragraph()),
    Text("Shopping "),
    Start(Emphasis()),
    Text("list"),
    End(Emphasis()),
    Text(":"),
    End(Paragraph()),
    Start(List(start=1)),
    Start(ListItem()),
    Text("eggs"),
    End(ListItem()),
    Start(ListItem()),
    Text("1.5 litres of milk"),
    End(ListItem()),
    End(List(start=1)),
]

printer = PrettyPrinter()
printer.push_events(events)
print(printer.finish())
# Shopping *list*:
#
# 1. eggs
# 2. 1.5 litres of milk
