import operator

import numpy as np
import pytest

from calcy import MathEngine
from calcy import NumberTypes
from calcy import error as E
from calcy.FixedPoint import ScaledDecimal

U8 = NumberTypes.get_number_type("u8")
F32 = NumberTypes.get_number_type("f32")


@pytest.mark.parametrize("problem, expected", [
    ("5 + 3", 8.0),
    ("4 + 11", 15.0),
    ("4 - 11", -7.0),
    ("20 - 30", -10.0),
    ("27 * 13", 351.0),
    ("8 * 16", 128.0),
    ("39 / 13", 3.0),
    ("100 / 25", 4.0),
    ("2^3", 8.0),
])
def test_basic_operations(problem, expected):
    assert MathEngine.solve(problem) == expected


def test_non_associative_chains():
    assert MathEngine.solve("10-3-2") == 5.0
    assert MathEngine.solve("8/4/2") == 1.0


def test_precedence():
    assert MathEngine.solve("2+3*4") == 14.0
    assert MathEngine.solve("(2+3)*4") == 20.0
    assert MathEngine.solve("2*3^2") == 18.0


def test_edge_cases():
    assert MathEngine.solve("0*1*2*3*4*5*6*7") == 0.0
    assert MathEngine.solve("0.5-0.5") == 0.0
    assert MathEngine.solve("100-100") == 0.0
    assert MathEngine.solve("0.5*0.5") == 0.25


_OPERATORS = {"+": operator.add, "-": operator.sub, "*": operator.mul, "/": operator.truediv, "^": operator.pow}


@pytest.mark.parametrize("symbol", sorted(_OPERATORS))
@pytest.mark.parametrize("a, b", [("1.5", "2.25"), ("7", "3"), ("0.1", "0.2")])
def test_engine_matches_the_number_type(a, b, symbol):
    expected = _OPERATORS[symbol](np.float64(a), np.float64(b))
    assert MathEngine.solve(f"{a}{symbol}{b}") == expected


def test_implicit_multiplication_with_variables():
    assert MathEngine.solve("ab", {"a": 2.0, "b": 3.0}) == 6.0
    assert MathEngine.solve("2a", {"a": 4.0}) == 8.0
    assert MathEngine.solve('"ab"c', {"ab": 5.0, "c": 2.0}) == 10.0
    assert MathEngine.solve("2(a+1)", {"a": 1.0}) == 4.0


def test_variables_are_case_sensitive():
    with pytest.raises(E.VariableNotFound) as excinfo:
        MathEngine.solve("A+1", {"a": 1.0})
    assert excinfo.value.name == "A"


def test_unbound_variable():
    with pytest.raises(E.VariableNotFound) as excinfo:
        MathEngine.solve("x+1")
    assert excinfo.value.name == "x"
    assert excinfo.value.equation == "x+1"


@pytest.mark.parametrize("problem", [
    "6 /",
    "27*",
    "18+++",
    "39--12-343ü24ü234",
    "25&+1",
    "50--2",
    "8++ß",
    "afk#sdmf",
    "",
    "1@2",
    "(1+2",
])
def test_should_be_err(problem):
    with pytest.raises(E.MathError) as excinfo:
        MathEngine.solve(problem)
    assert excinfo.value.equation == problem


def test_float_addition_is_approximate():
    result = MathEngine.solve("0.1+0.2")
    assert abs(result - 0.3) < 1e-9
    assert result != 0.3


def test_float_division_by_zero_uses_the_type_semantics():
    assert np.isinf(MathEngine.solve("1/0"))
    assert np.isnan(MathEngine.solve("0/0"))


def test_decimal_addition_is_exact():
    result = MathEngine.solve("0.1+0.2", number_type=NumberTypes.DECIMAL)
    assert result == ScaledDecimal(3, 1)
    assert repr(result) == "ScaledDecimal(3, 1)"


def test_decimal_subtraction():
    result = MathEngine.solve("0.25-0.35", number_type=NumberTypes.DECIMAL)
    assert result == ScaledDecimal.parse("-0.1")
    assert str(result) == "-0.1"


def test_decimal_with_variables():
    variables = {"a": ScaledDecimal.parse("1.25")}
    assert MathEngine.solve("a+0.75", variables, NumberTypes.DECIMAL) == ScaledDecimal(2)


@pytest.mark.parametrize("problem", ["2*3", "6/3", "2^2", "2a"])
def test_decimal_multiplicative_operators_are_unsupported(problem):
    with pytest.raises(E.UnsupportedOperationError) as excinfo:
        MathEngine.solve(problem, {"a": ScaledDecimal(1)}, NumberTypes.DECIMAL)
    assert excinfo.value.equation == problem


def test_unsigned_integers():
    assert MathEngine.solve("200+100", number_type=U8) == 44
    assert MathEngine.solve("3-5", number_type=U8) == 254
    assert MathEngine.solve("7/2", number_type=U8) == 3
    assert MathEngine.solve("2^3", number_type=U8) == 8
    with pytest.raises(E.ValueError):
        MathEngine.solve("1.5", number_type=U8)


def test_single_precision_floats():
    result = MathEngine.solve("0.5*0.5", number_type=F32)
    assert result == 0.25
    assert result.dtype == np.float32


def test_calculate_renders_results():
    assert MathEngine.calculate("5+3") == "8"
    assert MathEngine.calculate("0.1+0.2") == "0.30000000000000004"
    assert MathEngine.calculate("1/0") == "inf"
    assert MathEngine.calculate("1.5+1.5", number_type=NumberTypes.DECIMAL) == "3"
    assert MathEngine.calculate("200+100", number_type=U8) == "44"


def test_deep_nesting_is_reported_as_math_error():
    problem = "(" * 1500 + "1" + ")" * 1500
    with pytest.raises(E.MathError) as excinfo:
        MathEngine.solve(problem)
    assert excinfo.value.code == "9999"


def test_evaluate_without_variables():
    tree = MathEngine.build_tree(MathEngine.tokenize("1+1"))
    assert MathEngine.evaluate(tree) == 2.0


def test_float_variables_follow_the_number_type():
    assert np.isinf(MathEngine.solve("a/b", {"a": 1.0, "b": 0.0}))
    assert np.isinf(MathEngine.solve("a^b", {"a": 10.0, "b": 400.0}))

    result = MathEngine.solve("a+b", {"a": 1.0, "b": 2.0}, F32)
    assert result == 3.0
    assert result.dtype == np.float32
