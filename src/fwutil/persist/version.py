"""
Package version comparison.

Compares the loosely formatted version strings reported by package
managers ("1.0.4+deb9u1", "0.5.3ubuntu1") without requiring PEP 440.
"""

import re

_TOKEN = re.compile(r"[-.]|\d+|[^-.\d]+")


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def versioncmp(version_a: str, version_b: str) -> int:
    """Compare two version strings.

    Versions are split into separators, digit runs and other runs. Digit
    runs compare numerically unless either has a leading zero; "-" sorts
    before ".", which sorts before anything else.

    Returns:
        -1, 0 or 1
    """
    ax = _TOKEN.findall(version_a)
    bx = _TOKEN.findall(version_b)

    for a, b in zip(ax, bx):
        if a == b:
            continue
        if a == "-":
            return -1
        if b == "-":
            return 1
        if a == ".":
            return -1
        if b == ".":
            return 1
        if a.isdecimal() and b.isdecimal():
            if a.startswith("0") or b.startswith("0"):
                return _cmp(a.upper(), b.upper())
            return _cmp(int(a), int(b))
        return _cmp(a.upper(), b.upper())

    return _cmp(version_a, version_b)
