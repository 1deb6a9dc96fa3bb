# MIT License
# Copyright (c) 2025 Hashborn

"""
Wide unsigned integer helpers for balance accumulation.

Python ints never wrap, so the ceiling is enforced explicitly: an
accumulator that would leave the unsigned range of `bits` raises
BalanceOverflowError instead of silently holding an impossible balance.
"""

from ...protocol.types.common import BalanceOverflowError
from ...protocol.config.params import BALANCE_BITS

U128_MAX = (1 << 128) - 1


def unsigned_max(bits: int = BALANCE_BITS) -> int:
    return (1 << bits) - 1


def max_balance(a: int, b: int) -> int:
    return a if a > b else b


def checked_add(a: int, b: int, bits: int = BALANCE_BITS) -> int:
    """
    Add two unsigned balances, refusing results outside [0, 2**bits - 1].

    Raises:
        BalanceOverflowError: If either operand is negative or the sum overflows
    """
    if a < 0 or b < 0:
        raise BalanceOverflowError(f"Negative operand in unsigned addition: {a} + {b}")
    result = a + b
    if result > unsigned_max(bits):
        raise BalanceOverflowError(f"u{bits} overflow: {a} + {b}")
    return result
