"""Handling Paths for SVG"""

from __future__ import annotations

import logging
import re
from typing import Callable, ClassVar, Dict, List, Optional, Sequence

from svgcore.common import Point, SvgPathCmds
from svgcore.errors import InvalidPathArity, SvgParseError, UnsupportedCommand
from svgcore.instructions import (
    ClosePath,
    CurveTo,
    EllipticalArc,
    HLineTo,
    LineTo,
    MoveTo,
    PathInstruction,
    QuadraticBezier,
    SmoothCurveTo,
    SmoothQuadraticBezier,
    VLineTo,
)
from svgcore.lexer import NumberLexer

logger = logging.getLogger(__name__)


class _ParserState:
    """Current point and subpath start of a single parse call."""

    __slots__ = ("current_point", "subpath_start")

    def __init__(self) -> None:
        self.current_point: Point = (0.0, 0.0)
        self.subpath_start: Point = (0.0, 0.0)

    def resolve(self, x: float, y: float, relative: bool) -> Point:
        """Return (x, y) as absolute point."""
        if relative:
            return (self.current_point[0] + x, self.current_point[1] + y)
        return (x, y)


class PathDataParser:
    """
    Parser turning the value of an SVG path "d" attribute into resolved PathInstructions.
    Commands (command : number of values per repetition : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc   4: Ss
        QuadraticBezier:  4: Qq   2: Tt
        ArcCurve:         7: Aa
        ClosePath:        0: Zz
    Uppercase letters take absolute coordinates, lowercase letters relative ones.
    A command letter may be omitted for consecutive repetitions of the same command.
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmLlHhVvCcSsQqTtAaZz"
    # A command letter followed by its argument run; "e"/"E" belongs to the run only as exponent of a number:
    COMMAND: ClassVar[re.Pattern] = re.compile(r"([A-Za-z])((?:[^A-Za-z]|(?<=[0-9.])[eE])*)")
    # Number of values per repetition of a command:
    ARITY: ClassVar[Dict[str, int]] = {"M": 2, "L": 2, "T": 2, "H": 1, "V": 1, "S": 4, "Q": 4, "C": 6, "A": 7, "Z": 0}

    @staticmethod
    def parse(text: str) -> List[PathInstruction]:
        """Parse the path data _text_ into a list of resolved PathInstructions.

        Args:
            text (str): SVG path data, e.g. "M10,10 l10,10 Z"

        Returns:
            List[PathInstruction]: instructions with absolute coordinates, empty for empty data

        Raises:
            SvgParseError: (or one of its subclasses) if _text_ is malformed.
                The whole attribute fails, no partial result is returned.
        """
        instructions: List[PathInstruction] = []
        state = _ParserState()

        matches = list(PathDataParser.COMMAND.finditer(text))
        leading = text[: matches[0].start()] if matches else text
        if leading.strip():
            raise SvgParseError(f"Path data must start with a command, got {leading.strip()!r}", text, 0)

        for match in matches:
            letter = match.group(1)
            if letter not in PathDataParser.SVG_CMDS:
                raise UnsupportedCommand(letter, match.start())
            PathDataParser._parse_command(letter, text, match.start(2), match.end(2), state, instructions)

        logger.debug("Parsed path data with %d commands into %d instructions", len(matches), len(instructions))
        return instructions

    @staticmethod
    def _parse_command(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        letter: str,
        text: str,
        start: int,
        end: int,
        state: _ParserState,
        out: List[PathInstruction],
    ) -> None:
        # The argument run is text[start:end], scanned in place to keep error positions absolute
        command = letter.upper()
        relative = letter.islower()
        arity = PathDataParser.ARITY[command]

        if command == "A":
            PathDataParser._parse_arcs(letter, text, start, end, state, out)
            return

        args = NumberLexer.tokenize(text, start, end)
        if command == "Z":
            if args:
                raise InvalidPathArity(letter, len(args), arity)
            out.append(ClosePath())
            state.current_point = state.subpath_start
            return

        if not args or len(args) % arity:
            raise InvalidPathArity(letter, len(args), arity)

        for i in range(0, len(args), arity):
            group = args[i : i + arity]
            if command == "M":
                state.current_point = state.resolve(group[0], group[1], relative)
                if i == 0:
                    state.subpath_start = state.current_point
                    out.append(MoveTo(state.current_point))
                else:
                    # Additional pairs of a MoveTo are implicit LineTos
                    out.append(LineTo(state.current_point))
            elif command == "L":
                state.current_point = state.resolve(group[0], group[1], relative)
                out.append(LineTo(state.current_point))
            elif command == "H":
                x = state.current_point[0] + group[0] if relative else group[0]
                state.current_point = (x, state.current_point[1])
                out.append(LineTo(state.current_point))
            elif command == "V":
                y = state.current_point[1] + group[0] if relative else group[0]
                state.current_point = (state.current_point[0], y)
                out.append(LineTo(state.current_point))
            elif command == "C":
                control_start = state.resolve(group[0], group[1], relative)
                control_end = state.resolve(group[2], group[3], relative)
                state.current_point = state.resolve(group[4], group[5], relative)
                out.append(CurveTo(state.current_point, control_start, control_end))
            elif command == "S":
                control_end = state.resolve(group[0], group[1], relative)
                state.current_point = state.resolve(group[2], group[3], relative)
                out.append(SmoothCurveTo(state.current_point, control_end))
            elif command == "Q":
                control = state.resolve(group[0], group[1], relative)
                state.current_point = state.resolve(group[2], group[3], relative)
                out.append(QuadraticBezier(state.current_point, control))
            elif command == "T":
                state.current_point = state.resolve(group[0], group[1], relative)
                out.append(SmoothQuadraticBezier(state.current_point))

    @staticmethod
    def _parse_arcs(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        letter: str,
        text: str,
        start: int,
        end: int,
        state: _ParserState,
        out: List[PathInstruction],
    ) -> None:
        # The two flags are single characters and may run into the following
        # number, so they are isolated here before the numbers are read.
        relative = letter.islower()
        pos = start
        groups = 0
        while not NumberLexer.at_end(text, pos, end):
            values: List[float] = []
            flags: List[bool] = []
            for slot in range(7):
                if NumberLexer.at_end(text, pos, end):
                    raise InvalidPathArity(letter, groups * 7 + slot, 7)
                if slot in (3, 4):
                    flag, pos = NumberLexer.scan_flag(text, pos, end)
                    flags.append(flag)
                else:
                    value, pos = NumberLexer.scan_number(text, pos, end)
                    values.append(value)
            (radius_x, radius_y, rotation, x, y) = values
            state.current_point = state.resolve(x, y, relative)
            out.append(
                EllipticalArc(
                    to=state.current_point,
                    radius_x=radius_x,
                    radius_y=radius_y,
                    x_axis_rotation=rotation,
                    large_arc=flags[0],
                    sweep=flags[1],
                )
            )
            groups += 1
        if groups == 0:
            raise InvalidPathArity(letter, 0, 7)

    @staticmethod
    def format(instructions: Sequence[PathInstruction], round_func: Optional[Callable] = None) -> str:
        """
        Serialize _instructions_ into SVG path data using absolute commands.

        Args:
            instructions (Sequence[PathInstruction]): resolved instructions
            round_func (Optional[Callable], optional):
                a function that takes a float and returns a float. Defaults to None.

        Returns:
            str: the path data string
        """

        def num(value: float) -> str:
            if round_func:
                value = round_func(value)
            text = repr(float(value))
            return text[:-2] if text.endswith(".0") else text

        def pts(*points: Point) -> str:
            return " ".join(f"{num(p[0])} {num(p[1])}" for p in points)

        ret_commands: List[str] = []
        for instruction in instructions:
            cmd: SvgPathCmds
            if isinstance(instruction, ClosePath):
                ret_commands.append("Z")
                continue
            if isinstance(instruction, MoveTo):
                cmd, args = "M", pts(instruction.point)
            elif isinstance(instruction, LineTo):
                cmd, args = "L", pts(instruction.point)
            elif isinstance(instruction, HLineTo):
                cmd, args = "H", num(instruction.x)
            elif isinstance(instruction, VLineTo):
                cmd, args = "V", num(instruction.y)
            elif isinstance(instruction, CurveTo):
                cmd, args = "C", pts(instruction.control_start, instruction.control_end, instruction.to)
            elif isinstance(instruction, SmoothCurveTo):
                cmd, args = "S", pts(instruction.control_end, instruction.to)
            elif isinstance(instruction, QuadraticBezier):
                cmd, args = "Q", pts(instruction.control, instruction.to)
            elif isinstance(instruction, SmoothQuadraticBezier):
                cmd, args = "T", pts(instruction.to)
            elif isinstance(instruction, EllipticalArc):
                cmd = "A"
                args = (
                    f"{num(instruction.radius_x)} {num(instruction.radius_y)} {num(instruction.x_axis_rotation)} "
                    f"{int(instruction.large_arc)} {int(instruction.sweep)} {pts(instruction.to)}"
                )
            else:
                raise TypeError(f"Not a path instruction: {instruction!r}")
            ret_commands.append(f"{cmd}{args}")

        return " ".join(ret_commands)
