# FixedPoint.py
"""""
Exact fixed-point decimal used by the 'decimal' data type.

A ScaledDecimal stores a signed integer magnitude and a non-negative scale,
the represented quantity is magnitude / 10**scale. Every value returned by an
arithmetic operation is packed (minimal scale, zero always has scale 0).

Only addition and subtraction are implemented; multiplication, division and
powers raise UnsupportedOperationError instead of approximating.
"""""

import re

from . import error as E

# Optional sign, digits with at most one '.', at least one digit somewhere
_LITERAL = re.compile(r"-?[0-9]*\.?[0-9]*")


class ScaledDecimal:
    """Immutable scaled-integer decimal: magnitude * 10^-scale."""

    __slots__ = ("_magnitude", "_scale")

    def __init__(self, magnitude, scale=0):
        if scale < 0:
            raise ValueError(f"scale must not be negative, got {scale}")
        self._magnitude = int(magnitude)
        self._scale = int(scale)

    @property
    def magnitude(self):
        return self._magnitude

    @property
    def scale(self):
        return self._scale

    # -----------------------------
    # Parsing
    # -----------------------------

    @classmethod
    def parse(cls, text):
        """Parse '12', '-1.25', '.5' or '3.' into a ScaledDecimal.

        The scale is the number of digits after the point; the point is not
        normalized away here, so '1.10' keeps scale 2.
        """
        if not _LITERAL.fullmatch(text) or not any(c.isdigit() for c in text):
            raise E.DecimalParseError(text)

        point = text.find(".")
        scale = 0 if point == -1 else len(text) - point - 1

        digits = text.replace(".", "").replace("-", "")
        magnitude = int(digits)
        if text.startswith("-"):
            magnitude = -magnitude
        return cls(magnitude, scale)

    # -----------------------------
    # Scale handling
    # -----------------------------

    def rescale(self, target_scale):
        """Return the same quantity expressed with target_scale digits.

        Increasing the scale is always exact. Decreasing truncates, so only
        do it when the dropped digits are known to be zero.
        """
        delta = target_scale - self._scale
        if delta >= 0:
            return ScaledDecimal(self._magnitude * 10 ** delta, target_scale)
        return ScaledDecimal(_truncating_div(self._magnitude, 10 ** -delta), target_scale)

    def pack(self):
        """Return the canonical form with trailing zero digits removed."""
        if self._magnitude == 0:
            return ScaledDecimal(0, 0)
        magnitude = self._magnitude
        scale = self._scale
        while scale > 0 and magnitude % 10 == 0:
            magnitude //= 10
            scale -= 1
        return ScaledDecimal(magnitude, scale)

    # -----------------------------
    # Arithmetic
    # -----------------------------

    def __add__(self, other):
        if not isinstance(other, ScaledDecimal):
            return NotImplemented
        a, b = align(self, other)
        return ScaledDecimal(a.magnitude + b.magnitude, a.scale).pack()

    def __sub__(self, other):
        if not isinstance(other, ScaledDecimal):
            return NotImplemented
        a, b = align(self, other)
        return ScaledDecimal(a.magnitude - b.magnitude, a.scale).pack()

    def __mul__(self, other):
        raise E.UnsupportedOperationError("multiplication", "decimal")

    def __truediv__(self, other):
        raise E.UnsupportedOperationError("division", "decimal")

    def __floordiv__(self, other):
        raise E.UnsupportedOperationError("division", "decimal")

    def __pow__(self, other):
        raise E.UnsupportedOperationError("power", "decimal")

    # -----------------------------
    # Comparison / display
    # -----------------------------

    def __eq__(self, other):
        if not isinstance(other, ScaledDecimal):
            return NotImplemented
        a, b = align(self, other)
        return a.magnitude == b.magnitude

    def __hash__(self):
        packed = self.pack()
        return hash((packed.magnitude, packed.scale))

    def __str__(self):
        if self._scale == 0:
            return str(self._magnitude)
        sign = "-" if self._magnitude < 0 else ""
        integer_part, fractional_part = divmod(abs(self._magnitude), 10 ** self._scale)
        return f"{sign}{integer_part}.{fractional_part:0{self._scale}d}"

    def __repr__(self):
        return f"ScaledDecimal({self._magnitude}, {self._scale})"


def _truncating_div(value, divisor):
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


def align(a, b):
    """Rescale the operand with the smaller scale so both share one scale."""
    if a.scale < b.scale:
        return a.rescale(b.scale), b
    if b.scale < a.scale:
        return a, b.rescale(a.scale)
    return a, b
