"""Utility modules for prettymark.

Provides:
- logger: get_logger for logging
"""

from prettymark.utils.logger import get_logger

__all__ = ["get_logger"]
