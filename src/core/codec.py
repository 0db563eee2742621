"""
Fraction Codec — структурированная сериализация дробей

Формы входа:
- запись {"numerator": int, "denominator": int} (Pydantic модель)
- голое число (int/float) → Fraction.from_decimal

Выход всегда в форме записи {"numerator", "denominator"}, без сокращения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. numerator == INT_MIN → IllegalNumerator
2. denominator == 0 или INT_MIN → IllegalDenominator
3. Любая другая форма → FractionDecodingError
4. Точность десятичной конверсии задаётся конфигом, глобального состояния нет
"""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jsonschema import ValidationError as ContractValidationError
from pydantic import BaseModel, Field, ValidationError

from src.core.contracts import FractionValidator
from src.core.domain.fraction import (
    DEFAULT_SIGNIFICANT_DIGITS,
    MAX_SIGNIFICANT_DIGITS,
    Fraction,
    FractionDecodingError,
    IllegalNumerator,
    validate_components,
)
from src.core.math.checked_int import INT_MAX

logger = logging.getLogger(__name__)


# =============================================================================
# PAYLOAD
# =============================================================================


class FractionPayload(BaseModel):
    """
    Структурированное представление дроби.

    Immutable модель (frozen=True). strict=True: bool и float с нулевой
    дробной частью не принимаются как целые. Лишние поля игнорируются.
    """

    numerator: int = Field(..., description="Числитель (64-битное знаковое целое)")
    denominator: int = Field(..., description="Знаменатель (64-битное знаковое целое)")

    model_config = {"frozen": True, "strict": True}


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FractionCodecConfig:
    """Конфигурация codec.

    significant_digits — число десятичных знаков для голых чисел.
    validate_contract — предварительно проверять вход по fraction.json.
    """

    significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    validate_contract: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.significant_digits <= MAX_SIGNIFICANT_DIGITS:
            raise ValueError(
                f"significant_digits must be in [0, {MAX_SIGNIFICANT_DIGITS}], "
                f"got {self.significant_digits}"
            )


# =============================================================================
# CODEC
# =============================================================================


class FractionCodec:
    """Codec между Fraction и JSON-совместимыми данными."""

    def __init__(self, config: FractionCodecConfig | None = None):
        """
        Args:
            config: конфигурация codec (опционально, используется default)
        """
        self.config = config or FractionCodecConfig()
        self._contract = FractionValidator() if self.config.validate_contract else None

    def decode(self, data: Any) -> Fraction:
        """
        Декодирование дроби из dict или числа.

        Args:
            data: {"numerator": n, "denominator": d} или число

        Returns:
            Fraction (запись — без сокращения; число — сокращённая дробь)

        Raises:
            IllegalNumerator: numerator == INT_MIN или число вне диапазона
            IllegalDenominator: denominator == 0 или INT_MIN
            FractionDecodingError: Данные не являются дробью
        """
        if self._contract is not None:
            try:
                self._contract.validate(data)
            except ContractValidationError as e:
                raise FractionDecodingError(f"fraction contract violated: {e.message}") from e

        if isinstance(data, Mapping):
            return self._decode_record(data)

        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise FractionDecodingError(
                f"cannot decode fraction from {type(data).__name__}: {data!r}"
            )

        logger.debug("decoding fraction from bare number %r", data)
        if isinstance(data, int):
            return self._decode_integer(data)
        return self._decode_number(data)

    def encode(self, fraction: Fraction) -> dict[str, int]:
        """Кодирование в запись {"numerator", "denominator"} как есть."""
        return FractionPayload(
            numerator=fraction.numerator, denominator=fraction.denominator
        ).model_dump()

    def loads(self, text: str | bytes) -> Fraction:
        """
        Декодирование из JSON текста.

        Raises:
            FractionDecodingError: Если текст не является JSON
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FractionDecodingError(f"invalid JSON: {e.msg}") from e
        return self.decode(data)

    def dumps(self, fraction: Fraction) -> str:
        return FractionPayload(
            numerator=fraction.numerator, denominator=fraction.denominator
        ).model_dump_json()

    def _decode_record(self, data: Mapping) -> Fraction:
        try:
            payload = FractionPayload.model_validate(dict(data))
        except ValidationError as e:
            raise FractionDecodingError(
                f"cannot decode fraction record ({e.error_count()} errors): {e}"
            ) from e

        validate_components(payload.numerator, payload.denominator)
        return Fraction(payload.numerator, payload.denominator)

    def _decode_integer(self, value: int) -> Fraction:
        fraction = Fraction.try_from_integer(value)
        if fraction is None:
            raise IllegalNumerator(f"integer {value} out of range for numerator")
        return fraction

    def _decode_number(self, value: float) -> Fraction:
        if not math.isfinite(value):
            raise FractionDecodingError(f"cannot decode fraction from {value}")

        # whole * 10**digits должно поместиться в числитель
        limit = INT_MAX // 10**self.config.significant_digits
        if abs(int(value)) >= limit:
            raise IllegalNumerator(
                f"decimal {value} out of range for "
                f"{self.config.significant_digits} significant digits"
            )

        return Fraction.from_decimal(value, self.config.significant_digits)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def decode_fraction(
    data: Any, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
) -> Fraction:
    """
    Декодирование дроби из dict или числа.

    Raises:
        IllegalNumerator, IllegalDenominator, FractionDecodingError
    """
    return FractionCodec(FractionCodecConfig(significant_digits=significant_digits)).decode(data)


def encode_fraction(fraction: Fraction) -> dict[str, int]:
    return FractionCodec().encode(fraction)


def loads_fraction(
    text: str | bytes, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
) -> Fraction:
    """Декодирование дроби из JSON текста."""
    return FractionCodec(FractionCodecConfig(significant_digits=significant_digits)).loads(text)


def dumps_fraction(fraction: Fraction) -> str:
    return FractionCodec().dumps(fraction)
