"""Integer expression evaluation: precedence, brackets, abs and 32-bit limits."""

import pytest

from polycalc.errors import (
    DivisionByZero,
    InvalidExponent,
    MalformedExpression,
    NestedAbsoluteValue,
    Overflow,
)
from polycalc.evaluator import evaluate


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("3+4*2", 11),
        ("(3+4)*2", 14),
        ("10/2+3", 8),
        ("5*6-4/2", 28),
        ("10+3^|9-2*(2+4)|", 37),
        ("(((6+6)*6+3)*2+6)*2", 312),
        ("(20+2)*(6/2)", 66),
    ],
)
def test_reference_expressions(expr, expected):
    assert evaluate(expr).value == expected


def test_subtraction_is_left_associative():
    assert evaluate("10-4-3").value == 3


def test_division_is_left_associative():
    assert evaluate("100/10/5").value == 2


def test_power_binds_tighter_than_multiplication():
    assert evaluate("2*3^2").value == 18


def test_power_chain_reduces_left_to_right():
    assert evaluate("2^3^2").value == 64


def test_zero_exponent():
    assert evaluate("7^0").value == 1


# --- Floor division ---

def test_floor_division_of_negative_group():
    assert evaluate("(0-7)/2").value == -4


def test_floor_division_of_negative_literal():
    assert evaluate("-7/2").value == -4


def test_floor_division_by_negative_divisor():
    assert evaluate("7/-2").value == -4


def test_exact_negative_division():
    assert evaluate("-8/2").value == -4


def test_binary_minus_keeps_precedence():
    assert evaluate("0-7/2").value == -3


# --- Unary minus ---

def test_unary_minus_before_group():
    assert evaluate("-(2+3)").value == -5


def test_unary_minus_after_operator_before_group():
    assert evaluate("2*-(3)").value == -6


def test_double_minus():
    assert evaluate("--3").value == 3


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("10/-(3)", -4),
        ("8/-(2+2)", -2),
        ("10/-|3|", -4),
        ("7/-(2)", -4),
        ("2^-(0-2)", 4),
        ("2*-|0-3|", -6),
        ("12/-|0-4|", -3),
        ("2--(3)", 5),
        ("-(2)*-(3)", 6),
    ],
)
def test_unary_minus_negates_only_the_following_operand(expr, expected):
    assert evaluate(expr).value == expected


def test_unary_minus_binds_looser_than_power():
    assert evaluate("-2^2").value == -4
    assert evaluate("-2^2").value == evaluate("-(2)^2").value == evaluate("0-2^2").value


def test_unary_minus_binds_tighter_than_division():
    assert evaluate("-7/2").value == evaluate("(0-7)/2").value == -4
    assert evaluate("-(7)/2").value == -4


def test_negated_power_is_still_a_negative_exponent():
    with pytest.raises(InvalidExponent):
        evaluate("2^-(1)")


def test_negating_int32_min_group_overflows():
    with pytest.raises(Overflow):
        evaluate("-(0-2147483647-1)")


def test_trailing_unary_minus():
    with pytest.raises(MalformedExpression):
        evaluate("3*-")


# --- Absolute value ---

def test_absolute_value_of_negative():
    assert evaluate("|0-5|").value == 5


def test_absolute_value_of_negative_literal():
    assert evaluate("|-5|*2").value == 10


def test_two_separate_absolute_values():
    assert evaluate("|1-4|+|2-9|").value == 10


def test_parentheses_inside_absolute_value():
    assert evaluate("|(1-4)*2|").value == 6


def test_nested_absolute_value():
    with pytest.raises(NestedAbsoluteValue):
        evaluate("|2*|3||")


def test_bar_right_after_opening_bar_is_nested():
    with pytest.raises(NestedAbsoluteValue):
        evaluate("||3||")


def test_unclosed_bar():
    with pytest.raises(MalformedExpression):
        evaluate("|3")


def test_bar_after_operand_outside_abs():
    with pytest.raises(MalformedExpression):
        evaluate("3|")


def test_bar_closing_inside_paren():
    with pytest.raises(MalformedExpression):
        evaluate("|(3|)")


def test_abs_of_int32_min_overflows():
    with pytest.raises(Overflow):
        evaluate("|-2147483648|")


# --- Errors ---

def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        evaluate("1/0")


def test_division_by_zero_from_subexpression():
    with pytest.raises(DivisionByZero):
        evaluate("5/(2-2)")


def test_negative_exponent():
    with pytest.raises(InvalidExponent):
        evaluate("2^(0-1)")


@pytest.mark.parametrize("expr", ["2147483647+1", "0-2147483647-2", "65536*65536", "2^31"])
def test_overflow(expr):
    with pytest.raises(Overflow):
        evaluate(expr)


def test_int32_min_divided_by_minus_one_overflows():
    with pytest.raises(Overflow):
        evaluate("-2147483648/-1")


def test_int32_bounds_are_reachable():
    assert evaluate("2147483647").value == 2147483647
    assert evaluate("0-2147483647-1").value == -2147483648
    assert evaluate("2^30").value == 1073741824


@pytest.mark.parametrize("expr", ["", "   ", "3+", "+3", "(3", "3)", "()", "(1)2", "3 4", "2**3"])
def test_malformed(expr):
    with pytest.raises(MalformedExpression):
        evaluate(expr)


def test_malformed_reports_position():
    with pytest.raises(MalformedExpression) as info:
        evaluate("3)")
    assert info.value.position == 1
