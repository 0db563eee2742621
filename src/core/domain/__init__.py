"""
Domain models and value objects.

Contains the Fraction value type, its error taxonomy and constants.
"""

from src.core.domain.fraction import (
    DEFAULT_SIGNIFICANT_DIGITS,
    MAX_SIGNIFICANT_DIGITS,
    ONE,
    ZERO,
    Fraction,
    FractionDecodingError,
    FractionError,
    FractionInvariantError,
    IllegalDenominator,
    IllegalDivision,
    IllegalNumerator,
    parse_fraction,
    validate_components,
)

__all__ = [
    # Fraction model
    "Fraction",
    "ZERO",
    "ONE",
    "DEFAULT_SIGNIFICANT_DIGITS",
    "MAX_SIGNIFICANT_DIGITS",
    "parse_fraction",
    "validate_components",
    # Errors
    "FractionError",
    "IllegalNumerator",
    "IllegalDenominator",
    "IllegalDivision",
    "FractionDecodingError",
    "FractionInvariantError",
]
