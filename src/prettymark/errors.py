"""Exception classes for prettymark.

Provides standardized exceptions for error handling throughout prettymark.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prettymark.events import Tag


class PrettyMarkError(Exception):
    """Base exception for all prettymark errors.

    Subclass this for specific error categories.
    """

    pass


class UnbalancedStructureError(PrettyMarkError):
    """An End event does not match the innermost open container.

    Raised by the printer when the event stream is malformed: an End arrives
    with nothing open, an End closes a different kind of container than the
    innermost one, or the stream finishes with containers still open.
    """

    def __init__(
        self,
        message: str,
        expected: Tag | None = None,
        found: Tag | None = None,
        depth: int = 0,
    ) -> None:
        """Initialize unbalanced structure error.

        Args:
            message: Error description
            expected: Tag of the innermost open container (None if the stack was empty)
            found: Tag of the offending End event (None when finishing)
            depth: Container stack depth at the point of failure
        """
        self.message = message
        self.expected = expected
        self.found = found
        self.depth = depth
        super().__init__(f"{message} (depth {depth})")


class PrinterClosedError(PrettyMarkError):
    """The printer was used after finish() consumed it."""

    pass


class ConfigError(PrettyMarkError, ValueError):
    """Invalid print configuration value.

    Raised when PrintConfig is built with an option outside its allowed set.
    """

    def __init__(self, option: str, value: object, allowed: tuple[str, ...]) -> None:
        """Initialize config error.

        Args:
            option: Name of the offending PrintConfig field
            value: The rejected value
            allowed: The accepted values for the field
        """
        self.option = option
        self.value = value
        super().__init__(f"Option '{option}': {value!r} is not one of {', '.join(map(repr, allowed))}")
