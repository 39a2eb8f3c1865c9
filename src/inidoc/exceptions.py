class IniError(Exception):
    """Base class for all errors raised by inidoc."""


class ParseError(IniError):
    """The text could not be ingested into a document.

    Attributes:
        lineno: The 1-based line number the error occured on, if known.
        line: The offending line, if known.
    """

    lineno: int | None = None
    line: str | None = None

    def at(self, lineno: int, line: str):
        """Annotate the error with the line it was raised on."""

        self.lineno = lineno
        self.line = line

    def __str__(self) -> str:
        msg = super().__str__()

        if self.lineno is not None:
            msg = f"{msg} (line {self.lineno}: '{self.line}')"

        return msg


class InvalidIdentifier(ParseError, ValueError):
    """A section name, key or value is empty or contains a space or semicolon.

    Attributes:
        identifier: The rejected identifier.
    """

    def __init__(self, identifier: str):
        self.identifier = identifier

        super().__init__(f"invalid identifier: '{identifier}'")


class IniSyntaxError(ParseError, ValueError):
    """A line is neither a section header nor a key=value property."""

    def __init__(self, line: str):
        super().__init__("invalid syntax")
        self.line = line


class LoadError(IniError, OSError):
    """A file could not be read. The underlying error is chained as __cause__."""


class DumpError(IniError, ValueError):
    """A section or property cannot be written as a line that parses back to itself."""
