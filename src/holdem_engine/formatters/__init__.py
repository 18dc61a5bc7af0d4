"""Output formatters."""

from holdem_engine.formatters.text import TextFormatter
from holdem_engine.formatters.table import TableFormatter

__all__ = ["TextFormatter", "TableFormatter"]
