"""Parsing of the SVG transform attribute"""

from __future__ import annotations

import logging
import re
from typing import Callable, ClassVar, Dict, List, Tuple

from svgcore.errors import InvalidTransformArity, SvgParseError, UnknownTransformFunction
from svgcore.lexer import NumberLexer
from svgcore.matrix import SvMatrix

logger = logging.getLogger(__name__)


def _matrix(args: List[float]) -> SvMatrix:
    return SvMatrix.from_coefficients(args)


def _translate(args: List[float]) -> SvMatrix:
    return SvMatrix.translation(args[0], args[1] if len(args) == 2 else 0.0)


def _scale(args: List[float]) -> SvMatrix:
    # A single value scales uniformly
    return SvMatrix.scaling(args[0], args[1] if len(args) == 2 else args[0])


def _rotate(args: List[float]) -> SvMatrix:
    rotation = SvMatrix.rotation(args[0])
    if len(args) == 1:
        return rotation
    (cx, cy) = (args[1], args[2])
    return SvMatrix.translation(cx, cy).multiply(rotation).multiply(SvMatrix.translation(-cx, -cy))


def _skew_x(args: List[float]) -> SvMatrix:
    return SvMatrix.skew_x(args[0])


def _skew_y(args: List[float]) -> SvMatrix:
    return SvMatrix.skew_y(args[0])


class TransformParser:
    """
    Parser for the value of an SVG transform attribute, e.g.
        "translate(10, 20) rotate(45 5 5), scale(2)"

    The functions are composed from left to right by post-multiplication,
    so the leftmost function is applied last to a point:
        translate(5,0) scale(2) maps (1,0) to (7,0).
    """

    # name -> (accepted argument counts, matrix factory)
    FUNCTIONS: ClassVar[Dict[str, Tuple[Tuple[int, ...], Callable[[List[float]], SvMatrix]]]] = {
        "matrix": ((6,), _matrix),
        "translate": ((1, 2), _translate),
        "scale": ((1, 2), _scale),
        "rotate": ((1, 3), _rotate),
        "skewX": ((1,), _skew_x),
        "skewY": ((1,), _skew_y),
    }

    # One function call including its trailing separator
    CALL: ClassVar[re.Pattern] = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)\s*\(([^)]*)\)\s*,?\s*")

    @staticmethod
    def function_matrix(name: str, args: List[float]) -> SvMatrix:
        """Return the matrix of a single transform function.

        Raises:
            UnknownTransformFunction: if _name_ is none of the six SVG functions
            InvalidTransformArity: if the number of _args_ does not fit the function
        """
        if name not in TransformParser.FUNCTIONS:
            raise UnknownTransformFunction(name)
        arities, factory = TransformParser.FUNCTIONS[name]
        if len(args) not in arities:
            raise InvalidTransformArity(name, len(args))
        return factory(args)

    @staticmethod
    def parse(text: str) -> SvMatrix:
        """Parse a transform attribute into one composed matrix.

        Args:
            text (str): the transform attribute value

        Returns:
            SvMatrix: the composed matrix, identity for an empty value

        Raises:
            SvgParseError: (or one of its subclasses) if _text_ is malformed
        """
        current = SvMatrix.identity()
        pos = 0
        if not text.strip():
            return current

        while pos < len(text):
            match = TransformParser.CALL.match(text, pos)
            if match is None:
                raise SvgParseError(f"Malformed transform list at position {pos}: {text[pos:]!r}", text, pos)
            name = match.group(1)
            args = NumberLexer.tokenize(text, match.start(2), match.end(2))
            current = current.multiply(TransformParser.function_matrix(name, args))
            pos = match.end()

        logger.debug("Parsed transform %r into %s", text, current.coefficients)
        return current
