"""
Core math modules

Арифметика 64-битных знаковых целых с проверкой переполнения.
"""

from src.core.math.checked_int import (
    # Range
    INT_BITS,
    INT_MAX,
    INT_MIN,
    # Exceptions
    FractionOverflowError,
    # Checked arithmetic
    checked_abs,
    checked_add,
    checked_div,
    checked_mul,
    checked_neg,
    checked_sub,
    # Utilities
    gcd,
    is_representable,
)

__all__ = [
    # Checked Integers — Range
    "INT_BITS",
    "INT_MAX",
    "INT_MIN",
    # Checked Integers — Exceptions
    "FractionOverflowError",
    # Checked Integers — Arithmetic
    "checked_abs",
    "checked_add",
    "checked_div",
    "checked_mul",
    "checked_neg",
    "checked_sub",
    # Checked Integers — Utilities
    "gcd",
    "is_representable",
]
