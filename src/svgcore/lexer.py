"""Lexing of SVG numbers, arc flags and lengths"""

from __future__ import annotations

import re
from typing import ClassVar, List, Optional, Tuple

from svgcore import consts
from svgcore.errors import InvalidArcFlag, MalformedNumber, UnsupportedUnit


class NumberLexer:
    """
    This class provides a collection of static methods to read the numbers
    of SVG attribute values.

    Numbers may be separated by whitespace and/or a single comma, or not be
    separated at all where the grammar is unambiguous, e.g. "1-2" or "1.5.5".

    All methods accept an optional _end_ to scan only text[pos:end] in place,
    so that reported positions refer to the whole attribute string.
    """

    # Definition of a number:
    SVG_NUMBER: ClassVar[re.Pattern] = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
    # Definition of the separators between numbers:
    SEPARATORS: ClassVar[re.Pattern] = re.compile(r"[\s,]*")

    @staticmethod
    def skip_separators(text: str, pos: int = 0, end: Optional[int] = None) -> int:
        """Return the position of the first non-separator character at or after _pos_."""
        end = len(text) if end is None else end
        return NumberLexer.SEPARATORS.match(text, pos, end).end()

    @staticmethod
    def at_end(text: str, pos: int = 0, end: Optional[int] = None) -> bool:
        """Return True if only separators remain in _text_ from _pos_ on."""
        end = len(text) if end is None else end
        return NumberLexer.skip_separators(text, pos, end) >= end

    @staticmethod
    def scan_number(text: str, pos: int = 0, end: Optional[int] = None) -> Tuple[float, int]:
        """Read one number from _text_, skipping leading separators.

        Args:
            text (str): the text to read from
            pos (int): position to start reading at
            end (Optional[int]): position to stop reading at, defaults to the end of _text_

        Returns:
            Tuple[float, int]: the number and the position right after it

        Raises:
            MalformedNumber: if no number starts at the (separator-skipped) position
        """
        end = len(text) if end is None else end
        pos = NumberLexer.skip_separators(text, pos, end)
        match = NumberLexer.SVG_NUMBER.match(text, pos, end)
        if match is None:
            raise MalformedNumber(text[pos : min(pos + 10, end)] or text, pos)
        return float(match.group(0)), match.end()

    @staticmethod
    def scan_flag(text: str, pos: int = 0, end: Optional[int] = None) -> Tuple[bool, int]:
        """Read one arc flag, i.e. a single character '0' or '1'.

        Flags may run into the following number ("a1 1 0 0110 10" is valid),
        which is why they are isolated here instead of being read as numbers.
        """
        end = len(text) if end is None else end
        pos = NumberLexer.skip_separators(text, pos, end)
        flag = text[pos : min(pos + 1, end)]
        if flag not in ("0", "1"):
            raise InvalidArcFlag(flag or text, pos)
        return flag == "1", pos + 1

    @staticmethod
    def tokenize(text: str, pos: int = 0, end: Optional[int] = None) -> List[float]:
        """Extract all numbers of the given _text_ in order.

        Args:
            text (str): argument run, e.g. "10,20 -5.5e1.5"
            pos (int): position to start reading at
            end (Optional[int]): position to stop reading at, defaults to the end of _text_

        Returns:
            List[float]: the parsed numbers, empty for empty input

        Raises:
            MalformedNumber: if _text_ contains anything else than numbers and separators
        """
        end = len(text) if end is None else end
        values: List[float] = []
        while not NumberLexer.at_end(text, pos, end):
            value, pos = NumberLexer.scan_number(text, pos, end)
            values.append(value)
        return values


# Conversion factors of absolute units to user units (px)
_ABSOLUTE_UNITS = {
    "": 1.0,
    "px": 1.0,
    "pt": consts.PT_TO_PX,
    "pc": consts.PC_TO_PX,
    "in": consts.INCHES_TO_PX,
    "cm": consts.CM_TO_PX,
    "mm": consts.MM_TO_PX,
}

_LENGTH = re.compile(r"\s*(" + NumberLexer.SVG_NUMBER.pattern + r")\s*([a-zA-Z%]*)\s*")


def parse_length(text: str, font_size: float = consts.DEFAULT_FONT_SIZE) -> float:
    """Convert an SVG length like "2.5mm" or "1em" to user units.

    Args:
        text (str): the length attribute value
        font_size (float): font size in user units used for "em" and "ex"

    Returns:
        float: the length in user units

    Raises:
        MalformedNumber: if the numeric part cannot be read
        UnsupportedUnit: for unknown or relative (percentage) units
    """
    match = _LENGTH.fullmatch(text)
    if match is None:
        raise MalformedNumber(text)
    value = float(match.group(1))
    unit = match.group(2).lower()
    if unit in _ABSOLUTE_UNITS:
        return value * _ABSOLUTE_UNITS[unit]
    if unit == "em":
        return value * font_size
    if unit == "ex":
        return value * font_size * 0.5
    raise UnsupportedUnit(unit)
