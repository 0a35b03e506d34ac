"""Counterexample search: finds gaps in the implementation or the tests.

This module runs independently of the test suite.  For every operation
in ``contract.build_contract`` it samples the operation's domain (edge
values first, then seeded random values) and searches for:

1. Postcondition violations: inputs where the implementation disagrees
   with the oracle, or raises when it should not.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import random
import sys
from dataclasses import dataclass, field
from typing import Any

from bit_ops import MAX_VALUE, MIN_VALUE
from contract import CODEC, TEXT, CodecContract, build_contract
from immutable_text import Text
from int32 import Int32
from int_format import to_string
from settings import SearchConfig

IMPLEMENTATIONS: dict[str, Any] = {CODEC: Int32, TEXT: Text}

INVALID_RADIXES = (-1, 0, 1, 37, 64)

EDGE_INTS = (
    MIN_VALUE, MIN_VALUE + 1, -65537, -65536, -100, -1,
    0, 1, 9, 10, 99, 100, 65535, 65536, MAX_VALUE - 1, MAX_VALUE,
)

EDGE_DISTANCES = (-33, -32, -1, 0, 1, 16, 31, 32, 33)

EDGE_NUMERALS = (
    "", "-", "+", "0", "-0", "+0", "00", "1", "-1", "+1",
    "2147483647", "2147483648", "-2147483648", "-2147483649",
    "4294967295", "4294967296", "9223372036854775807", "99999999999999999999",
    "7fffffff", "80000000", "ffffffff", "100000000", "zik0zj", "-zik0zk",
    "+-1", "-+1", "--1", "1_0", "0x10", " 1", "1 ", "12a", "Z",
    "١٠", "１０",
)

EDGE_LITERALS = (
    "", "0", "-0", "00", "07", "08", "0x", "0X", "#", "-", "+",
    "0x7fffffff", "0x80000000", "-0x80000000", "-0x80000001", "#ffffffff",
    "-#80000000", "010", "-010", "0x-1", "+-1", "-+1", "--1", "0xg",
    "2147483647", "2147483648", "-2147483648", "+2147483647",
)

EDGE_TEXT_SEARCHES = (
    ("", "", 0), ("", "", 5), ("", "a", 0), ("abc", "", -1), ("abc", "", 3),
    ("abc", "", 9), ("abcabc", "bc", 0), ("abcabc", "bc", 2), ("abcabc", "bc", 9),
    ("aaa", "aa", 0), ("aaa", "aa", 1), ("abc", "abcd", 0), ("abab", "abb", 0),
    ("a\U0001f600b", "\U0001f600", 0), ("a\U0001f600b", "b", -5),
)

EDGE_TEXT_REGIONS = (
    ("K", 0, "k", 0, 1, True), ("K", 0, "k", 0, 1, False),
    ("MÜNCHEN", 0, "münchen", 0, 7, True), ("abc", 0, "ABC", 0, 3, True),
    ("abc", -1, "abc", 0, 1, False), ("abc", 0, "abc", 0, 4, False),
    ("abc", 3, "", 0, 0, False), ("abc", 1, "xbc", 1, 2, False),
    ("abc", 0, "abc", 0, -1, False), ("ß", 0, "SS", 0, 1, True),
)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs!r}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found, all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Sampling
# ---------------------------------------------------------------------------

class Sampler:
    """Edge values plus seeded random values for each contract domain."""

    def __init__(self, config: SearchConfig) -> None:
        self.config = config
        self.rng = random.Random(config.seed)
        self.radixes = list(config.radixes)
        if config.probe_invalid_radixes:
            self.radixes.extend(INVALID_RADIXES)

    def arguments(self, domain: str) -> list[tuple]:
        edges = getattr(self, f"_edge_{domain}")()
        fill = getattr(self, f"_random_{domain}")
        return edges + [fill() for _ in range(self.config.samples)]

    # -- integers ---------------------------------------------------------

    def _int32(self) -> int:
        # Mix small magnitudes in so both decimal loops are reached.
        if self.rng.random() < 0.3:
            return self.rng.randint(-70_000, 70_000)
        return self.rng.randint(MIN_VALUE, MAX_VALUE)

    def _edge_int32(self) -> list[tuple]:
        return [(v,) for v in EDGE_INTS]

    def _random_int32(self) -> tuple:
        return (self._int32(),)

    def _edge_int32_radix(self) -> list[tuple]:
        return list(itertools.product(EDGE_INTS, self.radixes))

    def _random_int32_radix(self) -> tuple:
        return (self._int32(), self.rng.choice(self.radixes))

    def _edge_int32_distance(self) -> list[tuple]:
        return list(itertools.product(EDGE_INTS, EDGE_DISTANCES))

    def _random_int32_distance(self) -> tuple:
        return (self._int32(), self.rng.randint(-70, 70))

    def _edge_int32_pair(self) -> list[tuple]:
        return list(itertools.product(EDGE_INTS, repeat=2))

    def _random_int32_pair(self) -> tuple:
        return (self._int32(), self._int32())

    # -- numerals ---------------------------------------------------------

    def _edge_numeral(self) -> list[tuple]:
        return list(itertools.product(EDGE_NUMERALS, (2, 8, 10, 16, 36, 1, 37)))

    def _random_numeral(self) -> tuple:
        radix = self.rng.choice(self.radixes)
        s = to_string(self._int32(), radix)
        roll = self.rng.random()
        if roll < 0.2:
            # Corrupt one position with a character that is rarely a digit.
            pos = self.rng.randint(0, len(s))
            s = s[:pos] + self.rng.choice("+-9azZ_ .") + s[pos:]
        elif roll < 0.4:
            # Widen past 32 bits.
            s = s + self.rng.choice("0123456789abcdef")
        return (s, radix)

    def _edge_literal(self) -> list[tuple]:
        return [(s,) for s in EDGE_LITERALS]

    def _random_literal(self) -> tuple:
        v = self._int32()
        sign = "-" if v < 0 else self.rng.choice(("", "+"))
        magnitude = abs(v)
        prefix, spec = self.rng.choice((("", "d"), ("0x", "x"), ("0X", "X"), ("#", "x"), ("0", "o")))
        return (sign + prefix + format(magnitude, spec),)

    # -- texts ------------------------------------------------------------

    def _text(self, max_length: int | None = None) -> Text:
        limit = self.config.max_text_length if max_length is None else max_length
        n = self.rng.randint(0, limit)
        return Text("".join(self.rng.choice(self.config.text_alphabet) for _ in range(n)))

    def _edge_text_search(self) -> list[tuple]:
        return [(Text(s), Text(t), f) for s, t, f in EDGE_TEXT_SEARCHES]

    def _random_text_search(self) -> tuple:
        source = self._text()
        if len(source) and self.rng.random() < 0.5:
            begin = self.rng.randint(0, len(source))
            end = self.rng.randint(begin, len(source))
            target = source.substring(begin, end)
        else:
            target = self._text(3)
        return (source, target, self.rng.randint(-2, len(source) + 2))

    def _edge_text_region(self) -> list[tuple]:
        return [
            (Text(ta), to, Text(pa), po, n, ic)
            for ta, to, pa, po, n, ic in EDGE_TEXT_REGIONS
        ]

    def _random_text_region(self) -> tuple:
        ta = self._text()
        pa = self._text()
        return (
            ta,
            self.rng.randint(-1, len(ta) + 1),
            pa,
            self.rng.randint(-1, len(pa) + 1),
            self.rng.randint(-1, self.config.max_text_length),
            self.rng.random() < 0.5,
        )


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    contract: CodecContract,
    sampler: Sampler,
) -> tuple[list[Counterexample], int]:
    """Verify postconditions wherever no error condition applies."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        op = getattr(IMPLEMENTATIONS[op_contract.subject], op_name)
        for args in sampler.arguments(op_contract.domain):
            checks += 1
            if any(ec.trigger(*args) for ec in op_contract.error_conditions):
                continue

            try:
                result = op(*args)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=args,
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_contract.postconditions:
                if not post.check(*args, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=args,
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    contract: CodecContract,
    sampler: Sampler,
) -> tuple[list[Counterexample], int]:
    """Verify every error condition raises the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        if not op_contract.error_conditions:
            continue
        op = getattr(IMPLEMENTATIONS[op_contract.subject], op_name)
        for args in sampler.arguments(op_contract.domain):
            for ec in op_contract.error_conditions:
                if not ec.trigger(*args):
                    continue
                checks += 1
                try:
                    result = op(*args)
                    cxs.append(Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=args,
                        expected=ec.exception.__name__,
                        actual=f"result={result!r}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))
                except ec.exception:
                    pass  # expected
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=args,
                        expected=ec.exception.__name__,
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))

    return cxs, checks


def search_property_violations(
    contract: CodecContract,
    sampler: Sampler,
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over its domain's samples."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contract.all_properties:
        impl = IMPLEMENTATIONS[contract.subject_of(op_name)]
        for args in sampler.arguments(prop.domain):
            checks += 1
            try:
                ok = prop.check(impl, *args)
                actual = "property does not hold"
            except Exception as e:
                ok = False
                actual = f"{type(e).__name__}: {e}"
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=args,
                    expected=prop.description,
                    actual=actual,
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(config: SearchConfig | None = None) -> SearchReport:
    """Run the complete counterexample search for one configuration."""
    config = config or SearchConfig()
    contract = build_contract()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        # Each search starts from the same seed so its samples are reproducible.
        cxs, checks = search_fn(contract, Sampler(config))
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run the counterexample search across several configurations."""
    configs = [
        ("seed 0, all radixes", SearchConfig()),
        ("seed 1, power-of-two radixes", SearchConfig(seed=1, radixes=[2, 4, 8, 16, 32])),
        ("seed 2, valid radixes only", SearchConfig(seed=2, probe_invalid_radixes=False)),
        ("seed 3, ASCII texts", SearchConfig(seed=3, text_alphabet="ab", max_text_length=12)),
    ]

    all_passed = True
    for name, config in configs:
        print(f"\n--- Configuration: {name} ---")
        report = run_search(config)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL CONFIGURATIONS PASSED")
    else:
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
