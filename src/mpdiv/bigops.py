# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Multi-digit multiply/add/subtract primitives.

All operands are digit sequences (least significant digit first); every
digit is computed through a 64-bit intermediate so that the carry or
borrow out of it can be detected.
"""

from .digits import DIGIT_WIDTH, to_digit, to_wide


def _check_lengths(a, b):
    if len(a) != len(b):
        raise ValueError(f"operand lengths differ: {len(a)} != {len(b)}")


def multiply_by_digit(multiplicand, multiplier):
    """ Multiply a digit sequence by a single digit.

    :param multiplicand: the digit sequence.
    :param multiplier: the digit.
    :returns list: the product, one digit longer than ``multiplicand``.
    """
    product = []
    carry = 0
    for digit in multiplicand:
        value = to_wide(digit * multiplier + carry)
        product.append(to_digit(value))
        carry = value >> DIGIT_WIDTH
    product.append(carry)
    return product


def add_with_carry(a, b, carry=False):
    """ Ripple-carry addition of two equal-length digit sequences.

    :param a: the first addend.
    :param b: the second addend.
    :param carry: the carry into the least significant digit.
    :returns tuple: ``(sum, carry_out)``; ``sum`` has the same length as
        the operands.
    """
    _check_lengths(a, b)
    result = []
    for lhs, rhs in zip(a, b):
        value = to_wide(lhs + rhs + carry)
        carry = value >> DIGIT_WIDTH != 0
        result.append(to_digit(value))
    return result, carry


def subtract_with_borrow(a, b, borrow=False):
    """ Ripple-borrow subtraction ``a - b`` of equal-length digit sequences.

    :param a: the minuend.
    :param b: the subtrahend.
    :param borrow: the borrow into the least significant digit.
    :returns tuple: ``(difference, borrow_out)``; ``borrow_out`` is True
        when ``a < b + borrow``.
    """
    _check_lengths(a, b)
    result = []
    for lhs, rhs in zip(a, b):
        value = to_wide(lhs - rhs - borrow)
        borrow = value >> DIGIT_WIDTH != 0
        result.append(to_digit(value))
    return result, borrow
