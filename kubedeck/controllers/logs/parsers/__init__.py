"""Log chunk parsers."""

from kubedeck.controllers.logs.parsers.log_parser import (
    LogLine,
    LogParser,
    parse_line,
    should_suppress,
)

__all__ = [
    "LogLine",
    "LogParser",
    "parse_line",
    "should_suppress",
]
