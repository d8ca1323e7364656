"""Typed errors raised while parsing SVG attribute strings.

All errors derive from SvgParseError, which itself is a ValueError, so
callers may catch either the specific kind, the family or plain ValueError.
"""

from __future__ import annotations

from typing import Optional


class SvgParseError(ValueError):
    """Base class for all attribute parsing failures.

    Attributes:
        text: The offending text (a token, letter or the whole attribute).
        position: Character offset of the failure inside the parsed string, if known.
    """

    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        super().__init__(message)
        self.text = text
        self.position = position


class MalformedNumber(SvgParseError):
    """A numeric token could not be read."""

    def __init__(self, text: str, position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Malformed number {text!r}{where}", text, position)


class UnsupportedCommand(SvgParseError):
    """A path-data command letter is not part of the grammar."""

    def __init__(self, letter: str, position: Optional[int] = None):
        super().__init__(f"Unsupported path command {letter!r}", letter, position)
        self.letter = letter


class InvalidArcFlag(SvgParseError):
    """An arc flag is not exactly the digit '0' or '1'."""

    def __init__(self, text: str, position: Optional[int] = None):
        super().__init__(f"Arc flag must be '0' or '1', got {text!r}", text, position)


class InvalidPathArity(SvgParseError):
    """A path command got a number of arguments that is not a multiple of its arity."""

    def __init__(self, command: str, count: int, arity: int):
        super().__init__(
            f"Command {command!r} takes groups of {arity} values, got {count}",
            command,
        )
        self.command = command
        self.count = count
        self.arity = arity


class InvalidTransformArity(SvgParseError):
    """A transform function got an unsupported number of arguments."""

    def __init__(self, function: str, count: int):
        super().__init__(f"Transform function {function!r} does not accept {count} arguments", function)
        self.function = function
        self.count = count


class UnknownTransformFunction(SvgParseError):
    """A transform function name is not one of the six SVG transform functions."""

    def __init__(self, function: str):
        super().__init__(f"Unknown transform function {function!r}", function)
        self.function = function


class UnsupportedUnit(SvgParseError):
    """A length carries a unit suffix that cannot be converted to user units."""

    def __init__(self, unit: str):
        super().__init__(f"Unsupported length unit {unit!r}", unit)
        self.unit = unit
