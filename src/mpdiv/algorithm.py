# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Multi-word unsigned division.

Knuth's Algorithm D (TAOCP vol. 2, 4.3.1) for base 2**32 digits.

``u``, ``v``, ``q`` and ``r`` are digit sequences with the least significant
digit at index 0. The caller supplies:

1. space ``q`` for the quotient, ``m - n + 1`` digits (at least one).
2. space ``r`` for the remainder, ``n`` digits, or ``None`` if the remainder
   is not wanted.
3. the dividend ``u``, ``m`` digits, ``m >= 1``.
4. the divisor ``v``, ``n`` digits, ``n >= 1``.

The most significant digit of the divisor must be nonzero. The dividend may
have leading zeros; that just makes the algorithm take longer and the
quotient have more leading zeros. ``u`` and ``v`` are never modified. The
quotient and remainder may have leading zeros.
"""

import enum
import logging

from .bigops import add_with_carry
from .digits import (BASE, DIGIT_WIDTH, nlz, to_digit, wide_div_rem)
from .mulsub import MulSubAlgorithm


class DivStatus(enum.Enum):
    """ Result of a multi-word division.

    :attribute Success: the quotient (and remainder) were written.
    :attribute InvalidDivisorLength: ``n <= 0``.
    :attribute DividendShorterThanDivisor: ``m < n``.
    :attribute UnnormalizedDivisor: the top divisor digit is zero.
    """

    Success = 0
    InvalidDivisorLength = 1
    DividendShorterThanDivisor = 2
    UnnormalizedDivisor = 3

    @property
    def succeeded(self):
        """ True if this is ``Success``. """
        return self is DivStatus.Success


class LongDivConfig:
    """ Configuration for multi-word division.

    :attribute mulsub: the ``MulSubAlgorithm`` used for the
        multiply-and-subtract step.
    """

    def __init__(self, mulsub=MulSubAlgorithm.MulSubBorrow):
        """ Create a ``LongDivConfig`` instance. """
        self.mulsub = MulSubAlgorithm(mulsub)
        logging.debug(f"{self}")

    def __repr__(self):
        """ Get repr. """
        return f"LongDivConfig({self.mulsub})"


def check_params(u, v, m, n):
    """ Check the division parameters.

    :returns DivStatus: ``Success`` if the parameters are valid, otherwise
        the first failing condition.
    """
    if n <= 0:
        return DivStatus.InvalidDivisorLength
    if m < n:
        return DivStatus.DividendShorterThanDivisor
    if v[n - 1] == 0:
        return DivStatus.UnnormalizedDivisor
    return DivStatus.Success


def single_digit_div_rem(q, r, u, m, divisor):
    """ Divide ``m`` digits of ``u`` by a single nonzero digit.

    The running remainder is always smaller than ``divisor``, so every
    64-by-32 division fits in a digit.

    :param q: the quotient output, ``m`` digits.
    :param r: the remainder output, 1 digit, or None.
    :param u: the dividend.
    :param m: the number of dividend digits.
    :param divisor: the divisor digit.
    """
    k = 0
    for j in reversed(range(m)):
        qr = wide_div_rem((k << DIGIT_WIDTH) | u[j], divisor)
        assert not qr.overflow
        q[j] = qr.quotient
        k = qr.remainder
    if r is not None:
        r[0] = k


def shift_left(digits, shift, extend):
    """ Shift a digit sequence left by ``shift`` bits (``0 <= shift < 32``).

    :param extend: if True, append a digit receiving the bits shifted out of
        the top digit; otherwise they are dropped.
    :returns list: the shifted digits.
    """
    retval = [to_digit(digit << shift) for digit in digits]
    for i in range(1, len(digits)):
        retval[i] |= digits[i - 1] >> (DIGIT_WIDTH - shift)
    if extend:
        retval.append(digits[-1] >> (DIGIT_WIDTH - shift))
    return retval


def shift_right(digits, shift):
    """ Shift a digit sequence right by ``shift`` bits (``0 <= shift < 32``).
    """
    retval = [digit >> shift for digit in digits]
    for i in range(len(digits) - 1):
        retval[i] |= to_digit(digits[i + 1] << (DIGIT_WIDTH - shift))
    return retval


class KnuthDivRem:
    """ Multi-word unsigned division/remainder, one quotient digit per stage.

    Requires a divisor of at least 2 digits with a nonzero top digit, and a
    dividend at least as long as the divisor.

    :attribute config: the ``LongDivConfig``.
    :attribute dividend_len: ``m``, the number of dividend digits.
    :attribute divisor_len: ``n``, the number of divisor digits.
    :attribute shift: the normalization shift, ``0 <= shift <= 31``.
    :attribute un: the normalized dividend, ``m + 1`` digits. Reduced in
        place as the quotient digits are calculated; after the last stage
        its low ``n`` digits are the normalized remainder.
    :attribute vn: the normalized divisor, ``n`` digits, with the most
        significant bit of its top digit set.
    :attribute quotient: the quotient, ``m - n + 1`` digits.
    :attribute current_index: the index of the next quotient digit to
        calculate, -1 when done.
    :attribute fixup_count: the number of add-back corrections applied.
    """

    def __init__(self, u, v, m, n, config=None):
        """ Create a KnuthDivRem and normalize the operands.

        :param u: the dividend; only its first ``m`` digits are used.
        :param v: the divisor; only its first ``n`` digits are used.
        :param m: the number of dividend digits.
        :param n: the number of divisor digits.
        :param config: the ``LongDivConfig``, or None for the default.
        """
        assert n >= 2, "use single_digit_div_rem for one-digit divisors"
        assert m >= n
        assert v[n - 1] != 0
        if config is None:
            config = LongDivConfig()
        self.config = config
        self.dividend_len = m
        self.divisor_len = n
        self.shift = nlz(v[n - 1])
        self.vn = shift_left(v[:n], self.shift, extend=False)
        self.un = shift_left(u[:m], self.shift, extend=True)
        self.quotient = [0] * (m - n + 1)
        self.current_index = m - n
        self.fixup_count = 0

    def estimate(self, j):
        """ Estimate quotient digit ``j`` from the top of its window.

        The estimate from the top two window digits is refined with the
        third; the result is never below the true quotient digit and at most
        1 above it.

        :returns tuple: ``(qhat, rhat)``.
        """
        n = self.divisor_len
        un = self.un
        vn = self.vn
        dig2 = (un[j + n] << DIGIT_WIDTH) | un[j + n - 1]
        qr = wide_div_rem(dig2, vn[n - 1])
        qhat = qr.quotient
        rhat = qr.remainder
        if qr.overflow:
            # rhat can exceed a digit here, so it is not part of qr
            rhat = dig2 - qhat * vn[n - 1]
        while rhat < BASE and qhat * vn[n - 2] > BASE * rhat + un[j + n - 2]:
            qhat -= 1
            rhat += vn[n - 1]
        return qhat, rhat

    def calculate_stage(self):
        """ Calculate the next quotient digit.

        :returns bool: True if all quotient digits are done.
        """
        j = self.current_index
        if j < 0:
            return True
        n = self.divisor_len
        qhat, _ = self.estimate(j)
        window = self.un[j:j + n + 1]
        need_fixup = self.config.mulsub(qhat, self.vn, window)
        if need_fixup:
            logging.debug(f"KnuthDivRem: add back at j={j}, qhat={qhat:#x}")
            qhat -= 1
            # the carry out cancels the borrow from the subtract
            window, _ = add_with_carry(window, self.vn + [0])
            self.fixup_count += 1
        self.un[j:j + n + 1] = window
        self.quotient[j] = qhat
        self.current_index = j - 1
        return self.current_index < 0

    def calculate(self):
        """ Calculate all remaining quotient digits.

        :returns: self
        """
        while not self.calculate_stage():
            pass
        return self

    @property
    def remainder(self):
        """ Get the denormalized remainder, ``n`` digits.

        Only meaningful once all stages are done.
        """
        return shift_right(self.un[:self.divisor_len], self.shift)


def divmnu(q, r, u, v, m, n, config=None):
    """ Divide the ``m``-digit ``u`` by the ``n``-digit ``v``.

    Invalid parameters are reported through the returned status, in which
    case ``q`` and ``r`` are left untouched.

    :param q: the quotient output, at least ``m - n + 1`` digits.
    :param r: the remainder output, at least ``n`` digits, or None if the
        remainder is not wanted.
    :param u: the dividend.
    :param v: the divisor.
    :param m: the number of dividend digits.
    :param n: the number of divisor digits.
    :param config: the ``LongDivConfig``, or None for the default.
    :returns DivStatus:
    """
    status = check_params(u, v, m, n)
    if not status.succeeded:
        logging.debug(f"divmnu: m={m}, n={n}: {status}")
        return status
    if n == 1:
        single_digit_div_rem(q, r, u, m, v[0])
        return status
    divider = KnuthDivRem(u, v, m, n, config).calculate()
    q[:m - n + 1] = divider.quotient
    if r is not None:
        r[:n] = divider.remainder
    return status


def divide(q, r, u, v, m, n, config=None):
    """ Divide the ``m``-digit ``u`` by the ``n``-digit ``v``.

    Same as ``divmnu`` but only reports success or failure.

    :returns bool: True on success, False for invalid parameters.
    """
    return divmnu(q, r, u, v, m, n, config).succeeded


def div_rem_digits(u, v, config=None):
    """ Divide digit sequence ``u`` by digit sequence ``v``.

    :param u: the dividend, all of its digits are used.
    :param v: the divisor, all of its digits are used.
    :param config: the ``LongDivConfig``, or None for the default.
    :returns tuple: ``(quotient, remainder)``, of ``len(u) - len(v) + 1``
        and ``len(v)`` digits.
    :raises ValueError: if the parameters are invalid.
    """
    m = len(u)
    n = len(v)
    q = [0] * max(m - n + 1, 1)
    r = [0] * max(n, 1)
    status = divmnu(q, r, u, v, m, n, config)
    if not status.succeeded:
        raise ValueError(f"can't divide: {status.name}")
    return q, r
