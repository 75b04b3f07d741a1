"""ContextVar-based print configuration for prettymark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A PrettyPrinter built without an explicit config reads the current one.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    printer = PrettyPrinter(PrintConfig(soft_break="newline"))

    # Ambient config for a block of code
    with print_config_context(PrintConfig(emphasis="_")):
        text = prettify("Lorem *ipsum*")  # 'Lorem _ipsum_'

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Literal

from prettymark.errors import ConfigError

EMPHASIS_DELIMITERS = ("*", "_")
SOFT_BREAKS = ("space", "newline")
HARD_BREAKS = ("spaces", "backslash")


@dataclass(frozen=True, slots=True)
class PrintConfig:
    """Immutable print configuration.

    Every option has a fixed default so identical input always yields
    identical output.

    Attributes:
        emphasis: Primary emphasis delimiter. Nested emphasis alternates to
            the other one.
        soft_break: Render soft breaks as a "space" or a "newline".
        hard_break: Render hard breaks as two trailing "spaces" or a
            "backslash", each followed by a newline.
        prefix: Written at the start of every output line, followed by a
            space on lines with content (e.g. "///" for doc comments).

    """

    emphasis: Literal["*", "_"] = "*"
    soft_break: Literal["space", "newline"] = "space"
    hard_break: Literal["spaces", "backslash"] = "spaces"
    prefix: str = ""

    def __post_init__(self) -> None:
        if self.emphasis not in EMPHASIS_DELIMITERS:
            raise ConfigError("emphasis", self.emphasis, EMPHASIS_DELIMITERS)
        if self.soft_break not in SOFT_BREAKS:
            raise ConfigError("soft_break", self.soft_break, SOFT_BREAKS)
        if self.hard_break not in HARD_BREAKS:
            raise ConfigError("hard_break", self.hard_break, HARD_BREAKS)

    @property
    def alternate_emphasis(self) -> str:
        """Delimiter used at odd emphasis nesting depth."""
        return "_" if self.emphasis == "*" else "*"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PrintConfig":
        """Create PrintConfig from dictionary.

        Only includes keys that are valid PrintConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                PrintConfig attribute names.

        Returns:
            New PrintConfig instance with values from dict.

        Example:
            >>> config = PrintConfig.from_dict({
            ...     "soft_break": "newline",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.soft_break
            'newline'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PrintConfig = PrintConfig()

_print_config: ContextVar[PrintConfig] = ContextVar(
    "print_config",
    default=_DEFAULT_CONFIG,
)


def get_print_config() -> PrintConfig:
    """Get current print configuration (thread-local).

    Returns:
        The active PrintConfig for this thread/context.

    """
    return _print_config.get()


def set_print_config(config: PrintConfig) -> None:
    """Set print configuration for current context.

    Args:
        config: PrintConfig instance to use for this context.

    """
    _print_config.set(config)


def reset_print_config() -> None:
    """Reset to default configuration."""
    _print_config.set(_DEFAULT_CONFIG)


@contextmanager
def print_config_context(config: PrintConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: PrintConfig to use within the context.

    Yields:
        None

    Example:
        >>> with print_config_context(PrintConfig(hard_break="backslash")):
        ...     text = prettify("a  \\nb")
        >>> text
        'a\\\\\\nb'

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _print_config.get()
    _print_config.set(config)
    try:
        yield
    finally:
        _print_config.set(previous)


__all__ = [
    "PrintConfig",
    "get_print_config",
    "set_print_config",
    "reset_print_config",
    "print_config_context",
]
