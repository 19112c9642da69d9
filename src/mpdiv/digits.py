# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Digit-level helpers for multi-word division.

A digit is an unsigned 32-bit word, a digit sequence is a list of digits
with the least significant digit at index 0.
"""

from nmigen.hdl.ast import Const

DIGIT_WIDTH = 32
WIDE_WIDTH = DIGIT_WIDTH * 2
BASE = 1 << DIGIT_WIDTH
DIGIT_MAX = BASE - 1
WIDE_MAX = (1 << WIDE_WIDTH) - 1


def to_digit(value):
    """ Wrap ``value`` to an unsigned digit. """
    return Const.normalize(value, (DIGIT_WIDTH, False))


def to_wide(value):
    """ Wrap ``value`` to an unsigned 64-bit value. """
    return Const.normalize(value, (WIDE_WIDTH, False))


def to_signed_wide(value):
    """ Wrap ``value`` to a signed 64-bit value. """
    return Const.normalize(value, (WIDE_WIDTH, True))


def nlz(x):
    """ Count the leading zero bits of a digit.

    :param x: the digit.
    :returns int: the number of leading zeros, 32 if ``x`` is zero.
    """
    x = to_digit(x)
    if x == 0:
        return DIGIT_WIDTH
    n = 0
    # binary search, halving the window each step
    for width in 16, 8, 4, 2, 1:
        if x >> (DIGIT_WIDTH - width) == 0:
            n += width
            x = to_digit(x << width)
    return n


class WideDivRem:
    """ Result of dividing a 64-bit value by a digit.

    :attribute quotient: the quotient digit, ``DIGIT_MAX`` on overflow.
    :attribute remainder: the remainder, 0 on overflow.
    :attribute overflow: True if the true quotient does not fit in a digit.
    """

    def __init__(self, quotient, remainder, overflow):
        """ Create a new WideDivRem.

        :param quotient: the quotient digit.
        :param remainder: the remainder.
        :param overflow: if the division overflowed.
        """
        self.quotient = quotient
        self.remainder = remainder
        self.overflow = overflow

    def __repr__(self):
        """ Get representation."""
        return (f"WideDivRem({self.quotient:#x}, {self.remainder:#x}, "
                f"{self.overflow})")

    def __eq__(self, rhs):
        """ Equal."""
        if not isinstance(rhs, WideDivRem):
            return NotImplemented
        return (self.quotient, self.remainder, self.overflow) == \
            (rhs.quotient, rhs.remainder, rhs.overflow)


def wide_div_rem(numerator, divisor):
    """ Divide a 64-bit numerator by a nonzero digit.

    When the quotient does not fit in a digit the result is flagged as
    overflowed, with ``quotient == DIGIT_MAX`` and ``remainder == 0``; the
    caller has to recompute the remainder as
    ``numerator - quotient * divisor`` using wide arithmetic.

    :param numerator: the 64-bit numerator.
    :param divisor: the divisor digit, must not be zero.
    :returns WideDivRem:
    """
    numerator = to_wide(numerator)
    divisor = to_digit(divisor)
    assert divisor != 0, "division by zero"
    if numerator >> DIGIT_WIDTH >= divisor:
        return WideDivRem(DIGIT_MAX, 0, True)
    return WideDivRem(numerator // divisor, numerator % divisor, False)


def int_to_digits(value, length=None):
    """ Split a non-negative int into a digit sequence.

    :param value: the value to split.
    :param length: the number of digits to produce, by default the minimum
        needed (at least 1).
    :returns list: the digits, least significant first.
    """
    if value < 0:
        raise ValueError("value must be non-negative")
    if length is None:
        length = max(1, (value.bit_length() + DIGIT_WIDTH - 1) // DIGIT_WIDTH)
    if value >> (DIGIT_WIDTH * length):
        raise ValueError(f"value does not fit in {length} digits")
    return [to_digit(value >> (DIGIT_WIDTH * i)) for i in range(length)]


def digits_to_int(digits):
    """ Get the value of a digit sequence. """
    retval = 0
    for digit in reversed(digits):
        retval = (retval << DIGIT_WIDTH) | digit
    return retval


def dump_digits(msg, digits, count=None):
    """ Render a digit sequence for diagnostics.

    The digits are written most significant first, each as a space followed
    by 8 upper-case hex digits.

    :param msg: the label to prefix.
    :param digits: the digit sequence.
    :param count: the number of digits to show, defaults to all of them.
    :returns str:
    """
    if count is None:
        count = len(digits)
    retval = msg
    for i in reversed(range(count)):
        retval += f" {digits[i]:08X}"
    return retval
