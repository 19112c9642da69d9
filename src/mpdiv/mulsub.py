# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Multiply-and-subtract step of long division.

Every function here computes ``window <- window - qhat * vn`` in place,
where ``window`` has ``len(vn) + 1`` digits, and returns True if the result
went negative (a borrow propagated out of the top digit). They differ only
in how the intermediate carries/borrows are threaded through the digits:
as a single running scalar or through split high/low arrays, and through
subtraction or through addition of a complement.
"""

import enum

from .bigops import add_with_carry, multiply_by_digit
from .digits import (DIGIT_WIDTH, to_digit, to_signed_wide, to_wide)


def _divisor_digit(vn, i):
    """ Get ``vn[i]``, with the digit above the top one reading as 0. """
    if i < len(vn):
        return vn[i]
    return 0


def _check_window(vn, window):
    assert len(window) == len(vn) + 1, "window must be one digit longer"


def mul_sub_signed_borrow(qhat, vn, window):
    """ Signed running borrow over the low ``n`` digits.

    The top digit is handled on its own; the result went negative if the
    signed top-digit difference is negative.
    """
    _check_window(vn, window)
    n = len(vn)
    k = 0
    for i in range(n):
        p = qhat * vn[i]
        t = to_signed_wide(window[i] - k - to_digit(p))
        window[i] = to_digit(t)
        k = (p >> DIGIT_WIDTH) - (t >> DIGIT_WIDTH)
    t = to_signed_wide(window[n] - k)
    window[n] = to_digit(t)
    return t < 0


def mul_sub_borrow(qhat, vn, window):
    """ Direct multiply-subtract with the borrow taken from the high half.
    """
    _check_window(vn, window)
    borrow = 0
    for i in range(len(window)):
        value = to_wide(window[i] - qhat * _divisor_digit(vn, i) - borrow)
        # high half is the (negative) borrow, as a wrapped digit
        borrow = to_digit(-(value >> DIGIT_WIDTH))
        window[i] = to_digit(value)
    return borrow != 0


def mul_sub_split(qhat, vn, window):
    """ ``mul_sub_borrow`` as two passes over split high/low arrays.

    The first pass is the per-digit multiply-subtract with no dependency
    between digits; only the second pass threads the borrow.
    """
    _check_window(vn, window)
    size = len(window)
    low = [0] * size
    high = [0] * size
    for i in range(size):
        value = to_wide(window[i] - qhat * _divisor_digit(vn, i))
        low[i] = to_digit(value)
        high[i] = value >> DIGIT_WIDTH
    borrow = 0
    for i in range(size):
        value = to_wide(((high[i] << DIGIT_WIDTH) | low[i]) - borrow)
        borrow = to_digit(~(value >> DIGIT_WIDTH) + 1)
        window[i] = to_digit(value)
    return borrow != 0


def _complement_carry(value, carry):
    """ Get the carry out of one digit of the complement formulation.

    ``carry`` encodes one minus the borrow, wrapped to a digit; a carry in
    above 1 already contributed its extra 1 to the high half of ``value``.
    """
    high = value >> DIGIT_WIDTH
    if carry <= 1:
        high = to_digit(high + 1)
    return high


def mul_sub_complement_carry(qhat, vn, window):
    """ Subtract by adding the 64-bit complement of each product digit.

    A carry of 1 means "no borrow".
    """
    _check_window(vn, window)
    carry = 1
    for i in range(len(window)):
        product = qhat * _divisor_digit(vn, i)
        value = to_wide(window[i] + to_wide(~product) + carry)
        carry = _complement_carry(value, carry)
        window[i] = to_digit(value)
    return carry != 1


def mul_sub_complement_carry_split(qhat, vn, window):
    """ ``mul_sub_complement_carry`` as two passes over split arrays. """
    _check_window(vn, window)
    size = len(window)
    low = [0] * size
    high = [0] * size
    for i in range(size):
        value = to_wide(window[i] + to_wide(~(qhat * _divisor_digit(vn, i))))
        low[i] = to_digit(value)
        high[i] = value >> DIGIT_WIDTH
    carry = 1
    for i in range(size):
        value = to_wide(((high[i] << DIGIT_WIDTH) | low[i]) + carry)
        carry = _complement_carry(value, carry)
        window[i] = to_digit(value)
    return carry != 1


def mul_then_sub(qhat, vn, window):
    """ Full multiply pass, then subtract-from with carry.

    The subtraction is an add of the digit-wise complement of the product
    with a carry in of 1; no carry out means the result went negative.
    """
    _check_window(vn, window)
    product = multiply_by_digit(vn, qhat)
    complement = [to_digit(~digit) for digit in product]
    window[:], carry = add_with_carry(window, complement, True)
    return not carry


class MulSubAlgorithm(enum.Enum):
    """ Formulation used for the multiply-and-subtract step.

    All of them give bit-identical results.

    :attribute SignedBorrow: signed running borrow with the top digit
        handled separately.
    :attribute MulSubBorrow: direct multiply-subtract with a running
        borrow.
    :attribute MulSubSplit: ``MulSubBorrow`` through split high/low arrays.
    :attribute ComplementCarry: add of the product complement with a
        running carry.
    :attribute ComplementCarrySplit: ``ComplementCarry`` through split
        high/low arrays.
    :attribute MulThenSub: separate multiply and subtract-with-carry passes.
    """

    SignedBorrow = 0
    MulSubBorrow = 1
    MulSubSplit = 2
    ComplementCarry = 3
    ComplementCarrySplit = 4
    MulThenSub = 5

    def __call__(self, qhat, vn, window):
        """ Compute ``window -= qhat * vn`` in place.

        :param qhat: the trial quotient digit.
        :param vn: the normalized divisor, ``n`` digits.
        :param window: the ``n + 1`` digits of the dividend to subtract
            from; modified in place.
        :returns bool: True if the result went negative.
        """
        return _MUL_SUB_FUNCTIONS[self](qhat, vn, window)


_MUL_SUB_FUNCTIONS = {
    MulSubAlgorithm.SignedBorrow: mul_sub_signed_borrow,
    MulSubAlgorithm.MulSubBorrow: mul_sub_borrow,
    MulSubAlgorithm.MulSubSplit: mul_sub_split,
    MulSubAlgorithm.ComplementCarry: mul_sub_complement_carry,
    MulSubAlgorithm.ComplementCarrySplit: mul_sub_complement_carry_split,
    MulSubAlgorithm.MulThenSub: mul_then_sub,
}
