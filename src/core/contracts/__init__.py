"""
Contract Validation Module

Модуль для валидации JSON контрактов структурированного представления дробей.
"""

from .validators import (
    ContractValidator,
    FractionValidator,
    SchemaLoader,
    validate_fraction_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FractionValidator",
    # Functions
    "validate_fraction_payload",
]
