# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

from mpdiv.digits import (BASE, DIGIT_MAX, WIDE_MAX, WideDivRem,
                          digits_to_int, dump_digits, int_to_digits, nlz,
                          to_digit, to_signed_wide, to_wide, wide_div_rem)
import unittest
import random


class TestWidth(unittest.TestCase):
    def test_to_digit(self):
        self.assertEqual(to_digit(0), 0)
        self.assertEqual(to_digit(DIGIT_MAX), DIGIT_MAX)
        self.assertEqual(to_digit(BASE), 0)
        self.assertEqual(to_digit(BASE + 5), 5)
        self.assertEqual(to_digit(-1), DIGIT_MAX)

    def test_to_wide(self):
        self.assertEqual(to_wide(WIDE_MAX + 1), 0)
        self.assertEqual(to_wide(-1), WIDE_MAX)
        self.assertEqual(to_wide(BASE * 3 + 1), BASE * 3 + 1)

    def test_to_signed_wide(self):
        self.assertEqual(to_signed_wide(-5), -5)
        self.assertEqual(to_signed_wide(WIDE_MAX), -1)
        self.assertEqual(to_signed_wide(1 << 63), -(1 << 63))
        self.assertEqual(to_signed_wide((1 << 63) - 1), (1 << 63) - 1)


class TestNlz(unittest.TestCase):
    def test_zero(self):
        self.assertEqual(nlz(0), 32)

    def test_powers_of_2(self):
        for i in range(32):
            with self.subTest(i=i):
                self.assertEqual(nlz(1 << i), 31 - i)
                self.assertEqual(nlz((2 << i) - 1), 31 - i)

    def test_misc_cases(self):
        self.assertEqual(nlz(DIGIT_MAX), 0)
        self.assertEqual(nlz(0x0000FFFF), 16)
        self.assertEqual(nlz(0x00010000), 15)
        self.assertEqual(nlz(0x40000001), 1)
        self.assertEqual(nlz(0x00008000), 16)

    def test_random(self):
        rand = random.Random(1)
        for _ in range(1000):
            x = rand.getrandbits(rand.randint(1, 32))
            with self.subTest(x=hex(x)):
                self.assertEqual(nlz(x), 32 - x.bit_length())


class TestWideDivRem(unittest.TestCase):
    def test_no_overflow(self):
        self.assertEqual(wide_div_rem(10, 3), WideDivRem(3, 1, False))
        self.assertEqual(wide_div_rem(DIGIT_MAX, 3),
                         WideDivRem(0x55555555, 0, False))
        self.assertEqual(wide_div_rem(1 << 32, 2),
                         WideDivRem(0x80000000, 0, False))
        # largest numerator that still fits
        self.assertEqual(wide_div_rem((7 << 32) - 1, 7),
                         WideDivRem(DIGIT_MAX, 6, False))

    def test_overflow(self):
        self.assertEqual(wide_div_rem(2 << 32, 2),
                         WideDivRem(DIGIT_MAX, 0, True))
        self.assertEqual(wide_div_rem(WIDE_MAX, DIGIT_MAX),
                         WideDivRem(DIGIT_MAX, 0, True))
        self.assertEqual(wide_div_rem(1 << 32, 1),
                         WideDivRem(DIGIT_MAX, 0, True))

    def test_overflow_remainder_recompute(self):
        numerator = 0x80000000 << 32
        qr = wide_div_rem(numerator, 0x80000000)
        self.assertTrue(qr.overflow)
        rhat = numerator - qr.quotient * 0x80000000
        self.assertEqual(rhat, 0x80000000)
        self.assertGreaterEqual(rhat, 0)

    def test_random(self):
        rand = random.Random(2)
        for _ in range(1000):
            divisor = rand.randint(1, DIGIT_MAX)
            numerator = rand.getrandbits(64)
            qr = wide_div_rem(numerator, divisor)
            with self.subTest(numerator=hex(numerator),
                              divisor=hex(divisor)):
                if numerator // divisor > DIGIT_MAX:
                    self.assertEqual(qr, WideDivRem(DIGIT_MAX, 0, True))
                else:
                    self.assertEqual(qr, WideDivRem(numerator // divisor,
                                                    numerator % divisor,
                                                    False))

    def test_zero_divisor(self):
        with self.assertRaises(AssertionError):
            wide_div_rem(1, 0)

    def test_repr(self):
        self.assertEqual(repr(WideDivRem(0x10, 0x2, False)),
                         "WideDivRem(0x10, 0x2, False)")


class TestConversion(unittest.TestCase):
    def test_int_to_digits(self):
        self.assertEqual(int_to_digits(0), [0])
        self.assertEqual(int_to_digits(DIGIT_MAX), [DIGIT_MAX])
        self.assertEqual(int_to_digits(BASE), [0, 1])
        self.assertEqual(int_to_digits(5, 3), [5, 0, 0])
        self.assertEqual(int_to_digits(0x123456789abcdef0),
                         [0x9abcdef0, 0x12345678])

    def test_int_to_digits_invalid(self):
        with self.assertRaises(ValueError):
            int_to_digits(-1)
        with self.assertRaises(ValueError):
            int_to_digits(BASE, 1)

    def test_digits_to_int(self):
        self.assertEqual(digits_to_int([0]), 0)
        self.assertEqual(digits_to_int([0, 1]), BASE)
        self.assertEqual(digits_to_int([0x9abcdef0, 0x12345678, 0]),
                         0x123456789abcdef0)


class TestDumpDigits(unittest.TestCase):
    def test_most_significant_first(self):
        self.assertEqual(dump_digits("u =", [1, 0xabcdef]),
                         "u = 00ABCDEF 00000001")

    def test_count(self):
        self.assertEqual(dump_digits("q =", [0xffffffff, 7, 9], 2),
                         "q = 00000007 FFFFFFFF")

    def test_empty(self):
        self.assertEqual(dump_digits("r =", []), "r =")


if __name__ == "__main__":
    unittest.main()
