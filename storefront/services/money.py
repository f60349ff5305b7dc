"""Money helpers.

Centralized so pricing and currency conversion use identical arithmetic.
Values go through Decimal(str(x)) so table prices add up exactly
(16.95 + 5 + 10 == 31.95) and 100 * 0.68 == 68.0.
"""

from __future__ import annotations
from decimal import Decimal


def _d(value: float) -> Decimal:
    return Decimal(str(value))


def add(*values: float) -> float:
    return float(sum((_d(v) for v in values), Decimal("0")))


def multiply(amount: float, rate: float) -> float:
    return float(_d(amount) * _d(rate))
