# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

from mpdiv.bigops import (add_with_carry, multiply_by_digit,
                          subtract_with_borrow)
from mpdiv.digits import DIGIT_MAX, digits_to_int, int_to_digits
import unittest
import random

M = DIGIT_MAX


class TestMultiplyByDigit(unittest.TestCase):
    def test_simple(self):
        self.assertEqual(multiply_by_digit([1, 2, 3], 2), [2, 4, 6, 0])
        self.assertEqual(multiply_by_digit([5], 0), [0, 0])
        self.assertEqual(multiply_by_digit([], 7), [0])

    def test_carry(self):
        self.assertEqual(multiply_by_digit([M], M), [1, M - 1])
        self.assertEqual(multiply_by_digit([M, M], M), [1, M, M - 1])
        self.assertEqual(multiply_by_digit([0x80000000, 0], 2), [0, 1, 0])

    def test_random(self):
        rand = random.Random(3)
        for _ in range(200):
            size = rand.randint(1, 8)
            value = rand.getrandbits(32 * size)
            multiplier = rand.getrandbits(32)
            product = multiply_by_digit(int_to_digits(value, size),
                                        multiplier)
            self.assertEqual(len(product), size + 1)
            self.assertEqual(digits_to_int(product), value * multiplier)


class TestAddWithCarry(unittest.TestCase):
    def test_no_carry(self):
        self.assertEqual(add_with_carry([1, 2], [3, 4]), ([4, 6], False))

    def test_ripple(self):
        self.assertEqual(add_with_carry([M, M, 0], [1, 0, 0]),
                         ([0, 0, 1], False))
        self.assertEqual(add_with_carry([M, M], [1, 0]), ([0, 0], True))
        self.assertEqual(add_with_carry([M, M], [M, M]), ([M - 1, M], True))

    def test_carry_in(self):
        self.assertEqual(add_with_carry([M], [0], True), ([0], True))
        self.assertEqual(add_with_carry([1, 0], [1, 0], True),
                         ([3, 0], False))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            add_with_carry([1, 2], [1])

    def test_random(self):
        rand = random.Random(4)
        for _ in range(200):
            size = rand.randint(1, 8)
            a = rand.getrandbits(32 * size)
            b = rand.getrandbits(32 * size)
            carry = rand.random() < 0.5
            total, carry_out = add_with_carry(int_to_digits(a, size),
                                              int_to_digits(b, size),
                                              carry)
            expected = a + b + carry
            self.assertEqual(digits_to_int(total),
                             expected % (1 << (32 * size)))
            self.assertEqual(carry_out, expected >> (32 * size) != 0)


class TestSubtractWithBorrow(unittest.TestCase):
    def test_no_borrow(self):
        self.assertEqual(subtract_with_borrow([5, 6], [3, 4]),
                         ([2, 2], False))

    def test_ripple(self):
        self.assertEqual(subtract_with_borrow([0, 0, 1], [1, 0, 0]),
                         ([M, M, 0], False))
        self.assertEqual(subtract_with_borrow([0, 0], [1, 0]),
                         ([M, M], True))

    def test_borrow_in(self):
        self.assertEqual(subtract_with_borrow([0], [0], True), ([M], True))
        self.assertEqual(subtract_with_borrow([2], [1], True), ([0], False))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            subtract_with_borrow([1], [1, 2])

    def test_random(self):
        rand = random.Random(5)
        for _ in range(200):
            size = rand.randint(1, 8)
            a = rand.getrandbits(32 * size)
            b = rand.getrandbits(32 * size)
            borrow = rand.random() < 0.5
            difference, borrow_out = subtract_with_borrow(
                int_to_digits(a, size), int_to_digits(b, size), borrow)
            expected = a - b - borrow
            self.assertEqual(digits_to_int(difference),
                             expected % (1 << (32 * size)))
            self.assertEqual(borrow_out, expected < 0)


if __name__ == "__main__":
    unittest.main()
