# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Self-check of the multi-word division against a table of known cases.

run with ``python -m mpdiv.selftest``; the exit code is the number of
failures.
"""

import argparse
import logging
import sys

from .algorithm import LongDivConfig, divmnu
from .digits import dump_digits
from .mulsub import MulSubAlgorithm


class DivTestCase:
    """ A division with its expected result.

    :attribute u: the dividend.
    :attribute v: the divisor.
    :attribute m: the number of dividend digits passed to the division.
    :attribute n: the number of divisor digits passed to the division.
    :attribute cq: the expected quotient.
    :attribute cr: the expected remainder.
    :attribute error: True if the parameters must be rejected.
    """

    def __init__(self, u, v, cq=(), cr=(), error=False, m=None, n=None):
        self.u = list(u)
        self.v = list(v)
        self.m = len(self.u) if m is None else m
        self.n = len(self.v) if n is None else n
        self.cq = list(cq)
        self.cr = list(cr)
        self.error = error

    def __repr__(self):
        return (f"DivTestCase({self.u!r}, {self.v!r}, {self.cq!r}, "
                f"{self.cr!r}, {self.error!r}, {self.m!r}, {self.n!r})")


TEST_CASES = [
    # parameter errors
    DivTestCase([3, 0, 0], [0], error=True),
    DivTestCase([7], [1, 3], error=True),
    DivTestCase([0, 0], [1, 0], error=True),
    # single digit divisors
    DivTestCase([3], [2], [1], [1]),
    DivTestCase([3], [3], [1], [0]),
    DivTestCase([3], [4], [0], [3]),
    DivTestCase([0], [0xffffffff], [0], [0]),
    DivTestCase([0xffffffff], [1], [0xffffffff], [0]),
    DivTestCase([0xffffffff], [0xffffffff], [1], [0]),
    DivTestCase([0xffffffff], [3], [0x55555555], [0]),
    DivTestCase([0xffffffff, 0xffffffff], [1],
                [0xffffffff, 0xffffffff], [0]),
    DivTestCase([0xffffffff, 0xffffffff], [0xffffffff], [1, 1], [0]),
    DivTestCase([0xffffffff, 0xfffffffe], [0xffffffff],
                [0xffffffff, 0], [0xfffffffe]),
    DivTestCase([0x00005678, 0x00001234], [0x00009abc],
                [0x1e1dba76, 0], [0x6bd0]),
    # multi digit divisors
    DivTestCase([0, 0], [0, 1], [0], [0, 0]),
    DivTestCase([0, 7], [0, 3], [2], [0, 1]),
    DivTestCase([5, 7], [0, 3], [2], [5, 1]),
    DivTestCase([0, 6], [0, 2], [3], [0, 0]),
    DivTestCase([0x80000000], [0x40000001], [0x00000001], [0x3fffffff]),
    DivTestCase([0x00000000, 0x80000000], [0x40000001],
                [0xfffffff8, 0x00000001], [0x00000008]),
    DivTestCase([0x00000000, 0x80000000], [0x00000001, 0x40000000],
                [0x00000001], [0xffffffff, 0x3fffffff]),
    DivTestCase([0x0000789a, 0x0000bcde], [0x0000789a, 0x0000bcde],
                [1], [0, 0]),
    DivTestCase([0x0000789b, 0x0000bcde], [0x0000789a, 0x0000bcde],
                [1], [1, 0]),
    DivTestCase([0x00007899, 0x0000bcde], [0x0000789a, 0x0000bcde],
                [0], [0x00007899, 0x0000bcde]),
    DivTestCase([0x0000ffff, 0x0000ffff], [0x0000ffff, 0x0000ffff],
                [1], [0, 0]),
    DivTestCase([0x0000ffff, 0x0000ffff], [0x00000000, 0x00000001],
                [0x0000ffff], [0x0000ffff, 0]),
    DivTestCase([0x000089ab, 0x00004567, 0x00000123],
                [0x00000000, 0x00000001],
                [0x00004567, 0x00000123], [0x000089ab, 0]),
    DivTestCase([0x00000000, 0x0000fffe, 0x00008000],
                [0x0000ffff, 0x00008000],
                [0xffffffff, 0x00000000], [0x0000ffff, 0x00007fff]),
    DivTestCase([0x00000003, 0x00000000, 0x80000000],
                [0x00000001, 0x00000000, 0x20000000],
                [0x00000003], [0, 0, 0x20000000]),
    DivTestCase([0x00000003, 0x00000000, 0x00008000],
                [0x00000001, 0x00000000, 0x00002000],
                [0x00000003], [0, 0, 0x00002000]),
    DivTestCase([0, 0, 0x00008000, 0x00007fff],
                [1, 0, 0x00008000],
                [0xfffe0000, 0], [0x00020000, 0xffffffff, 0x00007fff]),
    DivTestCase([0, 0xfffffffe, 0, 0x80000000],
                [0x0000ffff, 0, 0x80000000],
                [0x00000000, 1], [0x00000000, 0xfffeffff, 0x00000000]),
    # these two need the add-back correction
    DivTestCase([0, 0x0000fffe, 0, 0x00008000],
                [0x0000ffff, 0, 0x00008000],
                [0xffffffff, 0], [0x0000ffff, 0xffffffff, 0x00007fff]),
    DivTestCase([0, 0xfffffffe, 0, 0x80000000],
                [0xffffffff, 0, 0x80000000],
                [0xffffffff, 0], [0xffffffff, 0xffffffff, 0x7fffffff]),
]


def _report(errors, lines):
    message = "\n".join(lines)
    logging.error(message)
    errors.append(message)


def check_case(case, errors, config=None):
    """ Run one case, appending a report for each mismatch to ``errors``.

    :param case: the ``DivTestCase``.
    :param errors: caller-owned list collecting the failure reports.
    :param config: the ``LongDivConfig``, or None for the default.
    :returns bool: True if the case passed.
    """
    m, n = case.m, case.n
    q = [0] * max(m - n + 1, 1)
    r = [0] * max(n, 1)
    status = divmnu(q, r, case.u, case.v, m, n, config)
    if not status.succeeded:
        if case.error:
            return True
        _report(errors, [
            dump_digits(f"FATAL: Unexpected {status.name} for dividend u =",
                        case.u, m),
            dump_digits("                              divisor  v =",
                        case.v, n),
        ])
        return False
    if case.error:
        _report(errors, [
            dump_digits("FATAL: Unexpected success for dividend u =",
                        case.u, m),
            dump_digits("                              divisor  v =",
                        case.v, n),
        ])
        return False
    szq = m - n + 1
    if q[:szq] != case.cq[:szq]:
        _report(errors, [
            dump_digits("FATAL ERROR: dividend u =", case.u, m),
            dump_digits("             divisor  v =", case.v, n),
            dump_digits("               quotient =", q, szq),
            dump_digits("              should be =", case.cq, szq),
        ])
        return False
    if r[:n] != case.cr[:n]:
        _report(errors, [
            dump_digits("FATAL ERROR: dividend u =", case.u, m),
            dump_digits("             divisor  v =", case.v, n),
            dump_digits("              remainder =", r, n),
            dump_digits("              should be =", case.cr, n),
        ])
        return False
    return True


def run_cases(cases=None, loops=1, config=None):
    """ Run every case ``loops`` times.

    :param cases: the ``DivTestCase`` list, defaults to ``TEST_CASES``.
    :param loops: the number of passes over the table.
    :param config: the ``LongDivConfig``, or None for the default.
    :returns list: the failure reports, empty if everything passed.
    """
    if cases is None:
        cases = TEST_CASES
    errors = []
    for _ in range(loops):
        for case in cases:
            check_case(case, errors, config)
    return errors


def main(argv=None):
    """ Run the self-check.

    :returns int: the number of failures, capped at 255.
    """
    parser = argparse.ArgumentParser(
        prog="python -m mpdiv.selftest",
        description="check multi-word division against known results")
    parser.add_argument("--loops", type=int, default=1,
                        help="number of passes over the case table")
    parser.add_argument("--mulsub", action="append",
                        choices=[alg.name for alg in MulSubAlgorithm],
                        help="multiply-subtract formulation to check; "
                             "may be repeated, defaults to all of them")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose
                        else logging.WARNING)
    if args.mulsub:
        algorithms = [MulSubAlgorithm[name] for name in args.mulsub]
    else:
        algorithms = list(MulSubAlgorithm)
    errors = []
    for mulsub in algorithms:
        found = run_cases(loops=args.loops, config=LongDivConfig(mulsub))
        print(f"{mulsub.name}: {len(TEST_CASES)} cases x {args.loops}: "
              f"{len(found)} failures")
        errors.extend(found)
    return min(len(errors), 255)


if __name__ == "__main__":
    sys.exit(main())
