# NumberTypes.py
"""""
Number types the engine can evaluate with.

A NumberType is a strategy object: it parses literals, applies the five binary
operators and renders values. MathEngine is written once against this
interface; the console picks one strategy per session.

    f32, f64              NumPy floating point (inf / nan on division by zero)
    u8, u16, u32, usize   NumPy unsigned integers (wrap around, floor division)
    decimal               FixedPoint.ScaledDecimal (exact, + and - only)
"""""

import operator
import re

import numpy as np

from . import error as E
from .FixedPoint import ScaledDecimal

_FLOAT_LITERAL = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")
_INTEGER_LITERAL = re.compile(r"[0-9]+")


class NumberType:
    """Base strategy. Subclasses provide parse(), operations and format()."""

    operations = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": operator.truediv,
        "^": operator.pow,
    }

    def __init__(self, name):
        self.name = name

    def parse(self, text):
        raise NotImplementedError

    def apply(self, operator_symbol, left, right):
        """Apply a binary operator with the value type's own semantics."""
        return self.operations[operator_symbol](left, right)

    def format(self, value):
        return str(value)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class FloatType(NumberType):
    def __init__(self, name, dtype):
        super().__init__(name)
        self.dtype = dtype

    def parse(self, text):
        if not _FLOAT_LITERAL.fullmatch(text):
            raise E.ValueError(text, self.name)
        return self.dtype(float(text))

    def apply(self, operator_symbol, left, right):
        # Division by zero and overflow produce inf / nan, without RuntimeWarnings.
        # Plain Python floats from the variable table are cast to the dtype first.
        with np.errstate(all="ignore"):
            return self.dtype(super().apply(operator_symbol, self.dtype(left), self.dtype(right)))

    def format(self, value):
        return np.format_float_positional(value, trim="-")


class UnsignedType(NumberType):
    operations = dict(NumberType.operations, **{"/": operator.floordiv})

    def __init__(self, name, dtype):
        super().__init__(name)
        self.dtype = dtype
        self.max_value = int(np.iinfo(dtype).max)

    def parse(self, text):
        if not _INTEGER_LITERAL.fullmatch(text) or int(text) > self.max_value:
            raise E.ValueError(text, self.name)
        return self.dtype(int(text))

    def apply(self, operator_symbol, left, right):
        # Overflow wraps modulo the width and x/0 yields 0, as NumPy defines it
        with np.errstate(all="ignore"):
            return self.dtype(super().apply(operator_symbol, self.dtype(left), self.dtype(right)))

    def format(self, value):
        return str(int(value))


class DecimalType(NumberType):
    def __init__(self):
        super().__init__("decimal")

    def parse(self, text):
        try:
            return ScaledDecimal.parse(text)
        except E.DecimalParseError:
            raise E.ValueError(text, self.name) from None


DATATYPES = {
    "usize": UnsignedType("usize", np.uint64),
    "u8": UnsignedType("u8", np.uint8),
    "u16": UnsignedType("u16", np.uint16),
    "u32": UnsignedType("u32", np.uint32),
    "f32": FloatType("f32", np.float32),
    "f64": FloatType("f64", np.float64),
    "decimal": DecimalType(),
}

F64 = DATATYPES["f64"]
DECIMAL = DATATYPES["decimal"]


def get_number_type(name):
    """Return the registered NumberType for a data type name."""
    try:
        return DATATYPES[name]
    except KeyError:
        raise E.ConfigurationError(E.ERROR_MESSAGES["5000"] + str(name)) from None
