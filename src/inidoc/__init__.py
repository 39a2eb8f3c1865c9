"""This module provides a parser for simple INI-style configuration files."""

from .document import DEFAULT_SECTION, Document, load, loads
from .exceptions import (
    IniError,
    IniSyntaxError,
    InvalidIdentifier,
    DumpError,
    LoadError,
    ParseError,
)
from .ini import is_valid, validate

__version__ = "0.1.0"
