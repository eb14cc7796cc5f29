"""Parser module for tiny-bash."""

from .parser import (
    BashlexParser,
    ParseException,
    parse,
)

__all__ = [
    "BashlexParser",
    "ParseException",
    "parse",
]
