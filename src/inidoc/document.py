import io
import logging
import pathlib
import re
from collections import UserDict
from collections.abc import Callable, Iterable, Mapping
from typing import Self, TextIO

from .encoding import FALLBACK_ENCODING, detect_encoding
from .exceptions import DumpError, IniSyntaxError, LoadError, ParseError
from .ini import Property, Section, parse, validate

_log = logging.getLogger(__name__)

DEFAULT_SECTION = "default"

# Only these are line breaks, other Unicode line boundaries are part of the line.
RE_NEWLINE = re.compile(r"\r\n|\r|\n")

ParseFunc = Callable[[str], Section | Property | None]


class Document(UserDict[str, dict[str, str]]):
    """A parsed INI document: section names mapped to their properties.

    Every section name, key and value in the document is a valid identifier (see ini.validate()).
    Properties that appear before any section header belong to the 'default' section.

    Ingesting more text merges it into the existing document.
    Re-declaring a section header clears that section, while properties overwrite existing keys.
    Ingestion is not atomic: if a line fails, everything before it is kept.

    Only whole-section assignment (doc[name] = {...}) is validated.
    The section dicts themselves are plain dicts, so writing to doc[name] directly skips validation;
    use add_key_val() instead.

    Args:
        sections: Initial sections to add to the document.

    Raises:
        InvalidIdentifier: A section name, key or value in sections is invalid.
    """

    def __init__(self, sections: Mapping[str, Mapping[str, str]] | None = None):
        super().__init__()

        if sections is not None:
            self.update(sections)

    def __setitem__(self, name: str, section: Mapping[str, str]):
        validate(name)
        for key, value in section.items():
            validate(key)
            validate(value)

        self.data[name] = dict(section)

    def add_section(self, name: str):
        """Add an empty section, replacing any existing section with the same name.

        Args:
            name: The section's name.

        Raises:
            InvalidIdentifier: The name is invalid. The document is left unchanged.
        """

        validate(name)

        if name in self.data:
            _log.debug("clearing section %s", name)

        self.data[name] = {}

    def add_key_val(self, key: str, value: str, section: str | None = None):
        """Set a property in a section.

        The section is created if it does not exist yet. Existing sections are not cleared.

        Args:
            key: The property's key.
            value: The property's value.
            section: The section to set the property in.
                Defaults to the 'default' section.

        Raises:
            InvalidIdentifier: The section name, key or value is invalid (checked in that order).
                The document is left unchanged.
        """

        if section is None:
            section = DEFAULT_SECTION

        validate(section)
        validate(key)
        validate(value)

        if section not in self.data:
            self.add_section(section)

        self.data[section][key] = value

    def ingest(self, lines: Iterable[str], parse_func: ParseFunc = parse):
        """Ingest INI lines into the document.

        Properties before the first section header go into the 'default' section.

        Args:
            lines: The lines to ingest, i.e. an open text file.
            parse_func: A function that returns a section, property, or None per non-blank line.
                This function can be overriden to implement custom functionality.
                Defaults to ini.parse.

        Raises:
            InvalidIdentifier: A section name, key or value is invalid.
            IniSyntaxError: A line is neither a section header nor a property.
                Lines after the failing line are not ingested.
        """

        section = DEFAULT_SECTION

        for n, line in enumerate(lines, start=1):
            line = line.strip()

            # Skip blank lines.
            if not line:
                continue

            try:
                match parse_func(line):
                    case Section(name):
                        section = name
                        self.add_section(section)

                    case Property(key, value):
                        self.add_key_val(key, value, section)

                    case _:
                        raise IniSyntaxError(line)

            except ParseError as e:
                e.at(n, line)
                raise

    def ingest_text(self, text: str, **kwargs):
        """Ingest an INI text into the document.

        Args:
            text: The INI text. Lines may end in LF, CRLF or CR.
            **kwargs: Passed to ingest().

        Raises:
            See ingest().
        """

        self.ingest(RE_NEWLINE.split(text), **kwargs)

    def load_file(
        self, path: str | pathlib.Path, encoding: str | None = None, **kwargs
    ):
        """Read an INI file and ingest it into the document.

        Args:
            path: The path to the file.
            encoding: The file's encoding.
                If None, encoding detection is attempted, falling back to UTF-8.
            **kwargs: Passed to ingest().

        Raises:
            LoadError: The file could not be read or decoded.
            ParseError: See ingest().
        """

        if isinstance(path, str):
            path = pathlib.Path(path)

        try:
            if encoding is None:
                with path.open("rb") as f:
                    encoding = detect_encoding(f) or FALLBACK_ENCODING

            text = path.read_text(encoding=encoding)

        except (OSError, UnicodeDecodeError, LookupError) as e:
            # LookupError is raised for unknown encoding names.
            raise LoadError(f"failed to read {path}: {e}") from e

        _log.debug("loading %s as %s", path, encoding)
        self.ingest_text(text, **kwargs)

    def dump(self, file: TextIO):
        """Serialize the document as INI to a file.

        Nothing is written unless every section and property can be parsed back unchanged.
        Ingested documents always can; documents built with add_key_val() may not,
        i.e. a value containing '=' or a section name starting with '['.

        Args:
            file: The file to serialize to.

        Raises:
            DumpError: A section or property cannot be represented as INI.
        """

        lines = []

        for name, section in self.data.items():
            lines.append(_format(Section(name)))

            for key, value in section.items():
                lines.append(_format(Property(key, value)))

        for line in lines:
            print(line, file=file)

    def dumps(self) -> str:
        """Serialize the document as INI to a string.

        Returns:
            The INI as a string.

        Raises:
            See dump().
        """

        with io.StringIO() as buf:
            self.dump(buf)
            return buf.getvalue()

    @classmethod
    def from_str(cls, text: str, **kwargs) -> Self:
        """Parse an INI text into a new document.

        Args:
            text: The INI text to parse.
            **kwargs: Passed to ingest().

        Returns:
            The parsed document.
        """

        doc = cls()
        doc.ingest_text(text, **kwargs)
        return doc

    @classmethod
    def from_file(cls, path: str | pathlib.Path, **kwargs) -> Self:
        """Parse an INI file into a new document.

        Args:
            path: The path to the file.
            **kwargs: Passed to load_file().

        Returns:
            The parsed document.
        """

        doc = cls()
        doc.load_file(path, **kwargs)
        return doc


def _format(cfg: Section | Property) -> str:
    match cfg:
        case Section(name):
            line = f"[{name}]"
        case Property(key, value):
            line = f"{key}={value}"

    if RE_NEWLINE.search(line) or parse(line) != cfg:
        raise DumpError(f"cannot be written as INI: {cfg}")

    return line


def loads(text: str, **kwargs) -> Document:
    """Shorthand for Document.from_str()."""

    return Document.from_str(text, **kwargs)


def load(path: str | pathlib.Path, **kwargs) -> Document:
    """Shorthand for Document.from_file()."""

    return Document.from_file(path, **kwargs)
