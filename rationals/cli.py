"""Evaluate rational arithmetic checks and report whether each one holds."""

import argparse
import operator
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .rational import Rational, div_by, to_rational

_ARITHMETIC = {
    "+": Rational.add,
    "-": Rational.subtract,
    "*": Rational.multiply,
    "/": Rational.divide,
}

_RELATIONS = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
}

_UNARY = ("neg", "str")


@dataclass
class Check:
    left: str
    op: str
    expected: Any
    right: Optional[str] = None

    def describe(self) -> str:
        if self.op in _UNARY:
            return f"{self.op}({self.left})"
        return f"{self.left} {self.op} {self.right}"


@dataclass
class CheckResult:
    check: Check
    actual: Any
    passed: bool


BUILTIN_CHECKS: List[Check] = [
    Check("1/2", "+", "5/6", "1/3"),
    Check("1/2", "-", "1/6", "1/3"),
    Check("1/2", "*", "1/6", "1/3"),
    Check("1/2", "/", "3/2", "1/3"),
    Check("1/2", "neg", "-1/2"),
    Check("2/1", "str", "2"),
    Check("-2/4", "str", "-1/2"),
    Check("117/1098", "str", "13/122"),
    Check("1/2", "<", True, "2/3"),
    Check("1/2", "within", True, "1/3..2/3"),
    Check("2000000000/4000000000", "==", True, "1/2"),
    Check(
        "912016490186296920119201192141970416029/"
        "1824032980372593840238402384283940832058",
        "==",
        True,
        "1/2",
    ),
]


def load_checks(parfile: Path) -> List[Check]:
    """Read the ``[[check]]`` tables of a TOML parfile."""
    with parfile.open("rb") as pf:
        params = tomllib.load(pf)

    entries = params.get("check")
    if not entries:
        raise ValueError(f"No [[check]] tables found in {parfile}")

    checks: List[Check] = []
    for index, entry in enumerate(entries):
        missing = [key for key in ("left", "op", "expected") if key not in entry]
        if missing:
            raise ValueError(f"check #{index} in {parfile} is missing {', '.join(missing)}")
        op = entry["op"]
        if op not in _ARITHMETIC and op not in _RELATIONS and op not in _UNARY and op != "within":
            raise ValueError(f"check #{index} in {parfile} has unknown op {op!r}")
        if op not in _UNARY and "right" not in entry:
            raise ValueError(f"check #{index} in {parfile} needs a right operand for {op!r}")
        if (op in _RELATIONS or op == "within") and not isinstance(entry["expected"], bool):
            raise ValueError(f"check #{index} in {parfile} needs a boolean expected value for {op!r}")
        checks.append(
            Check(
                left=str(entry["left"]),
                op=op,
                expected=entry["expected"],
                right=None if op in _UNARY else str(entry["right"]),
            )
        )
    return checks


def _parse_range(text: str) -> Dict[str, Rational]:
    lower, sep, upper = text.partition("..")
    if not sep:
        raise ValueError(f"range {text!r} must look like 'low..high'")
    return {"lower": to_rational(lower), "upper": to_rational(upper)}


def evaluate(check: Check) -> CheckResult:
    left = to_rational(check.left)

    if check.op in _ARITHMETIC:
        actual = _ARITHMETIC[check.op](left, to_rational(check.right))
        return CheckResult(check, actual, actual == to_rational(str(check.expected)))
    if check.op == "neg":
        actual = left.negate()
        return CheckResult(check, actual, actual == to_rational(str(check.expected)))
    if check.op == "str":
        actual = str(left)
        return CheckResult(check, actual, actual == str(check.expected))
    if check.op == "within":
        actual = left.within(**_parse_range(check.right))
    else:
        actual = _RELATIONS[check.op](left, to_rational(check.right))
    return CheckResult(check, actual, actual == check.expected)


def run_checks(checks: List[Check]) -> List[CheckResult]:
    return [evaluate(check) for check in checks]


def report(results: List[CheckResult]) -> None:
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        print(f"{status} {result.check.describe()} -> {result.actual} (expected {result.check.expected})")
    passed = sum(result.passed for result in results)
    print(f"{passed}/{len(results)} checks passed")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evaluate rational arithmetic checks and report the outcome.",
    )
    parser.add_argument("--parfile", dest="parfile", help="TOML file with [[check]] tables")
    parser.add_argument(
        "--half",
        nargs=2,
        type=int,
        metavar=("N", "D"),
        help="Also check whether N/D equals 1/2",
    )
    args = parser.parse_args(argv)

    if args.parfile is not None:
        parfile = Path(args.parfile).expanduser().resolve()
        if not parfile.exists():
            raise FileNotFoundError(f"Parfile not found: {parfile}")
        checks = load_checks(parfile)
    else:
        checks = list(BUILTIN_CHECKS)

    if args.half is not None:
        checks.append(Check(str(div_by(*args.half)), "==", True, "1/2"))

    results = run_checks(checks)
    report(results)
    return 0 if all(result.passed for result in results) else 1


def run() -> None:
    try:
        sys.exit(main())
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

