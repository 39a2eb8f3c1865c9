import dataclasses

from .exceptions import InvalidIdentifier

# Characters that may not appear in section names, keys or values.
FORBIDDEN = frozenset(" ;")


@dataclasses.dataclass(slots=True)
class Section:
    """An INI section, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class Property:
    """An INI property, i.e. key=value."""

    key: str
    value: str


def validate(identifier: str):
    """Check that a section name, key or value is usable.

    Args:
        identifier: The identifier to check.

    Raises:
        InvalidIdentifier: The identifier is empty, or contains a space or semicolon.
    """

    if not identifier or not FORBIDDEN.isdisjoint(identifier):
        raise InvalidIdentifier(identifier)


def is_valid(identifier: str) -> bool:
    """Return True if validate() would accept the identifier."""

    try:
        validate(identifier)
    except InvalidIdentifier:
        return False

    return True


def parse(line: str) -> Section | Property | None:
    """Parse a line of INI.

    The line is stripped of surrounding whitespace first.
    Headers have every leading '[' and trailing ']' removed, so '[[name]]' is the section 'name'.
    Properties must have exactly one '=', and neither side is stripped any further.

    Identifiers are not validated here; see validate().

    Args:
        line: The line to parse.

    Returns:
        A section, property, or None if the line failed to parse.
    """

    line = line.strip()

    if line.startswith("[") and line.endswith("]"):
        return Section(line.lstrip("[").rstrip("]"))

    if line.count("=") == 1:
        key, value = line.split("=")
        return Property(key=key, value=value)

    return None
