"""
Fraction — точная рациональная дробь на 64-битных целых

Immutable value type: числитель и знаменатель хранятся как есть (без
неявного сокращения и нормализации при создании). Все операции возвращают
новый экземпляр.

Два пути создания:
- try_create / try_from_integer — возвращают None на невалидном входе
- trusted / from_integer — для заранее проверенных значений, нарушение
  инварианта фатально (FractionInvariantError)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator != 0
2. numerator != INT_MIN и denominator != INT_MIN (INT_MIN нельзя инвертировать
   по знаку, а это требуется при нормализации и сокращении)
3. Overflow в любой операции → FractionOverflowError (фатально)
4. Арифметика по умолчанию сокращает результат (reducing=True)
"""

from __future__ import annotations

import functools
import math
import struct
from dataclasses import dataclass
from typing import Final, Optional, Union

from src.core.math.checked_int import (
    INT_MIN,
    checked_abs,
    checked_add,
    checked_div,
    checked_mul,
    checked_neg,
    checked_sub,
    gcd,
    is_representable,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Количество десятичных знаков дробной части по умолчанию для from_decimal
DEFAULT_SIGNIFICANT_DIGITS: Final[int] = 4

# 10**18 — максимальная степень десяти, представимая в 64 битах
MAX_SIGNIFICANT_DIGITS: Final[int] = 18


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FractionError(ValueError):
    """Базовый класс восстановимых ошибок Fraction."""

    pass


class IllegalNumerator(FractionError):
    """Числитель равен INT_MIN или не представим в 64 битах."""

    pass


class IllegalDenominator(FractionError):
    """Знаменатель равен 0, INT_MIN или не представим в 64 битах."""

    pass


class IllegalDivision(FractionError, ZeroDivisionError):
    """Деление на дробь (или целое) с нулевым значением."""

    pass


class FractionDecodingError(FractionError):
    """Структурированные данные не соответствуют ни одной поддерживаемой форме."""

    pass


class FractionInvariantError(AssertionError):
    """
    Нарушение инварианта на trusted пути создания.

    Фатальная ошибка: вызывающий код обещал валидные значения и нарушил
    обещание. В отличие от FractionError не предназначена для обработки.
    """

    pass


Operand = Union["Fraction", int]


# =============================================================================
# VALIDATION
# =============================================================================


def _require_int(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def validate_components(numerator: int, denominator: int) -> None:
    """
    Валидация компонент дроби.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Raises:
        TypeError: Если компонента не int
        IllegalNumerator: Если числитель INT_MIN или вне диапазона
        IllegalDenominator: Если знаменатель 0, INT_MIN или вне диапазона
    """
    _require_int(numerator, "numerator")
    _require_int(denominator, "denominator")

    if not is_representable(numerator) or numerator == INT_MIN:
        raise IllegalNumerator(f"illegal numerator {numerator}")

    if denominator == 0:
        raise IllegalDenominator("denominator must not be 0")

    if not is_representable(denominator) or denominator == INT_MIN:
        raise IllegalDenominator(f"illegal denominator {denominator}")


def _assert_components(numerator: int, denominator: int) -> None:
    try:
        validate_components(numerator, denominator)
    except FractionError as e:
        raise FractionInvariantError(
            f"trusted fraction {numerator}/{denominator} violates invariants: {e}"
        ) from e


def _fold_wholes(numerator: int, denominator: int, wholes: int) -> int:
    # numerator + denominator * wholes
    _require_int(wholes, "wholes")
    if wholes == 0:
        return numerator
    return checked_add(numerator, checked_mul(denominator, wholes))


# =============================================================================
# FRACTION
# =============================================================================


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Fraction:
    """
    Точная дробь numerator/denominator.

    Прямой вызов Fraction(n, d) эквивалентен trusted(n, d): инварианты
    проверяются, нарушение фатально. Для непроверенного входа используйте
    try_create.

    Examples:
        >>> Fraction(1, 4) + Fraction(2, 4)
        Fraction(numerator=3, denominator=4)
        >>> str(Fraction(-1, -4))
        '-1/-4'
        >>> Fraction(-1, 4) == Fraction(1, -4)
        True
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        _assert_components(self.numerator, self.denominator)

    # -------------------------------------------------------------------------
    # Создание
    # -------------------------------------------------------------------------

    @classmethod
    def try_create(
        cls, numerator: int, denominator: int, wholes: int = 0
    ) -> Optional[Fraction]:
        """
        Создание дроби с валидацией.

        Целая часть складывается в числитель: numerator + denominator * wholes.

        Args:
            numerator: Числитель
            denominator: Знаменатель
            wholes: Целая часть (default: 0)

        Returns:
            Fraction или None, если denominator == 0 либо одна из компонент
            равна INT_MIN

        Raises:
            FractionOverflowError: Если свёртка целой части переполняется
        """
        try:
            validate_components(numerator, denominator)
        except FractionError:
            return None

        folded = _fold_wholes(numerator, denominator, wholes)
        if folded == INT_MIN:
            return None

        return cls(folded, denominator)

    @classmethod
    def try_from_integer(cls, integer: int) -> Optional[Fraction]:
        """Дробь integer/1 или None для INT_MIN."""
        return cls.try_create(integer, 1)

    @classmethod
    def trusted(cls, numerator: int, denominator: int = 1, wholes: int = 0) -> Fraction:
        """
        Создание дроби из заранее проверенных значений.

        Raises:
            FractionInvariantError: Если denominator == 0 или компонента INT_MIN
        """
        _assert_components(numerator, denominator)
        return cls(_fold_wholes(numerator, denominator, wholes), denominator)

    @classmethod
    def from_integer(cls, integer: int) -> Fraction:
        return cls.trusted(integer)

    @classmethod
    def from_decimal(
        cls, value: float, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    ) -> Fraction:
        """
        Конверсия float в дробь с фиксированным числом десятичных знаков.

        Алгоритм:
            whole = int(value)  (отбрасывание дробной части)
            numerator = round((value - whole) * 10**significant_digits)
            result = trusted(numerator, 10**significant_digits, wholes=whole)
            return result.reduced()

        Округление — стандартное round() (half-to-even). Знаки за пределами
        significant_digits теряются.

        Args:
            value: Исходное значение
            significant_digits: Число десятичных знаков (0..18, default: 4)

        Returns:
            Сокращённая дробь

        Raises:
            ValueError: Если value NaN/Inf или significant_digits вне диапазона
            FractionOverflowError: Если целая часть не помещается в 64 бита

        Examples:
            >>> Fraction.from_decimal(0.75)
            Fraction(numerator=3, denominator=4)
            >>> Fraction.from_decimal(-1.25)
            Fraction(numerator=-5, denominator=4)
        """
        if not math.isfinite(value):
            raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")

        _require_int(significant_digits, "significant_digits")
        if not 0 <= significant_digits <= MAX_SIGNIFICANT_DIGITS:
            raise ValueError(
                f"significant_digits must be in [0, {MAX_SIGNIFICANT_DIGITS}], "
                f"got {significant_digits}"
            )

        whole = int(value)
        remainder = value - whole
        scale = 10**significant_digits
        numerator = int(round(remainder * scale))

        return cls.trusted(numerator, scale, wholes=whole).reduced()

    # -------------------------------------------------------------------------
    # Сокращение и нормализация
    # -------------------------------------------------------------------------

    def reduced(self) -> Fraction:
        """
        Сокращение на НОД(|numerator|, |denominator|).

        Знак каждой компоненты сохраняется: -2/-4 → -1/-2. Нормализация
        не выполняется.
        """
        abs_numerator = checked_abs(self.numerator)
        abs_denominator = checked_abs(self.denominator)

        divisor = gcd(abs_numerator, abs_denominator)

        numerator = checked_div(abs_numerator, divisor)
        denominator = checked_div(abs_denominator, divisor)

        if self.numerator < 0:
            numerator = checked_neg(numerator)
        if self.denominator < 0:
            denominator = checked_neg(denominator)

        return Fraction(numerator, denominator)

    def normalized(self) -> Fraction:
        """
        Перенос знака в числитель.

        Отрицательный знаменатель → знаки обеих компонент меняются:
        1/-4 → -1/4, -1/-4 → 1/4. Сокращение не выполняется.
        """
        if self.denominator > 0:
            return self
        return Fraction(checked_neg(self.numerator), checked_neg(self.denominator))

    def absoluted(self) -> Fraction:
        """Снятие знака с каждой компоненты независимо."""
        return Fraction(checked_abs(self.numerator), checked_abs(self.denominator))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: Operand, reducing: bool = True) -> Fraction:
        """
        Сложение с дробью или целым.

        Оба операнда нормализуются. При равных знаменателях складываются
        числители, иначе — перекрёстное умножение.

        Args:
            other: Fraction или int
            reducing: Сокращать результат (default: True)

        Returns:
            Новая дробь

        Raises:
            FractionOverflowError: При переполнении
        """
        lhs = self.normalized()

        if isinstance(other, int) and not isinstance(other, bool):
            numerator = checked_add(lhs.numerator, checked_mul(other, lhs.denominator))
            return _finish(numerator, lhs.denominator, reducing)

        rhs = _as_fraction(other).normalized()

        if lhs.denominator == rhs.denominator:
            numerator = checked_add(lhs.numerator, rhs.numerator)
            denominator = lhs.denominator
        else:
            numerator = checked_add(
                checked_mul(lhs.numerator, rhs.denominator),
                checked_mul(rhs.numerator, lhs.denominator),
            )
            denominator = checked_mul(lhs.denominator, rhs.denominator)

        return _finish(numerator, denominator, reducing)

    def subtract(self, other: Operand, reducing: bool = True) -> Fraction:
        """
        Вычитание дроби или целого.

        Нормализация операндов такая же, как в add.
        """
        lhs = self.normalized()

        if isinstance(other, int) and not isinstance(other, bool):
            numerator = checked_sub(lhs.numerator, checked_mul(other, lhs.denominator))
            return _finish(numerator, lhs.denominator, reducing)

        rhs = _as_fraction(other).normalized()

        if lhs.denominator == rhs.denominator:
            numerator = checked_sub(lhs.numerator, rhs.numerator)
            denominator = lhs.denominator
        else:
            numerator = checked_sub(
                checked_mul(lhs.numerator, rhs.denominator),
                checked_mul(rhs.numerator, lhs.denominator),
            )
            denominator = checked_mul(lhs.denominator, rhs.denominator)

        return _finish(numerator, denominator, reducing)

    def multiply(self, other: Operand, reducing: bool = True) -> Fraction:
        """Умножение; целый множитель умножает только числитель."""
        if isinstance(other, int) and not isinstance(other, bool):
            return _finish(checked_mul(self.numerator, other), self.denominator, reducing)

        rhs = _as_fraction(other)
        return _finish(
            checked_mul(self.numerator, rhs.numerator),
            checked_mul(self.denominator, rhs.denominator),
            reducing,
        )

    def divide(self, other: Operand, reducing: bool = True) -> Fraction:
        """
        Деление на дробь или целое.

        Args:
            other: Делитель (Fraction или int)
            reducing: Сокращать результат (default: True)

        Returns:
            Новая дробь: (n * d') / (d * n')

        Raises:
            IllegalDivision: Если делитель равен нулю
            FractionOverflowError: При переполнении
        """
        if isinstance(other, int) and not isinstance(other, bool):
            if other == 0:
                raise IllegalDivision(f"cannot divide {self} by integer 0")
            return _finish(self.numerator, checked_mul(self.denominator, other), reducing)

        rhs = _as_fraction(other)
        if rhs.numerator == 0:
            raise IllegalDivision(f"cannot divide {self} by zero-valued fraction {rhs}")

        return self.divide_trusted(rhs, reducing=reducing)

    def divide_trusted(self, other: Fraction, reducing: bool = True) -> Fraction:
        """
        Деление без проверки делителя на ноль.

        Только для вызовов, где ненулевой делитель уже установлен. Нулевой
        делитель даёт нулевой знаменатель → FractionInvariantError.
        """
        return _finish(
            checked_mul(self.numerator, other.denominator),
            checked_mul(self.denominator, other.numerator),
            reducing,
        )

    def power(self, exponent: int, reducing: bool = True) -> Fraction:
        """
        Целая степень.

        - exponent == 0 → ONE
        - нулевое основание, exponent > 0 → ZERO
        - нулевое основание, exponent < 0 → IllegalDivision
        - exponent > 0 → exponent умножений начиная с ONE
        - exponent < 0 → -exponent делений ONE на основание

        Args:
            exponent: Показатель степени
            reducing: Сокращать промежуточные результаты (default: True)

        Raises:
            IllegalDivision: Ноль в отрицательной степени
            FractionOverflowError: При переполнении

        Examples:
            >>> Fraction(2).power(-3)
            Fraction(numerator=1, denominator=8)
        """
        _require_int(exponent, "exponent")

        if exponent == 0:
            return ONE

        if self.numerator == 0:
            if exponent > 0:
                return ZERO
            raise IllegalDivision(f"cannot raise zero-valued fraction {self} to power {exponent}")

        result = ONE
        if exponent > 0:
            for _ in range(exponent):
                result = result.multiply(self, reducing=reducing)
        else:
            # основание ненулевое, проверка делителя не нужна
            for _ in range(-exponent):
                result = result.divide_trusted(self, reducing=reducing)

        return result

    # -------------------------------------------------------------------------
    # Конверсия
    # -------------------------------------------------------------------------

    @property
    def double_value(self) -> float:
        """
        Значение как float (double precision).

        ВНИМАНИЕ: результат может представлять дробь неточно.
        """
        return self.numerator / self.denominator

    @property
    def float_value(self) -> float:
        """Значение, округлённое до single precision (IEEE-754 binary32)."""
        return struct.unpack("f", struct.pack("f", self.double_value))[0]

    @property
    def is_zero(self) -> bool:
        return self.numerator == 0

    def __float__(self) -> float:
        return self.double_value

    def __bool__(self) -> bool:
        return self.numerator != 0

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _canonical(self) -> Fraction:
        return self.reduced().normalized()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            if not is_representable(other) or other == INT_MIN:
                return False
            other = Fraction(other)
        if not isinstance(other, Fraction):
            return NotImplemented

        lhs = self._canonical()
        rhs = other._canonical()
        return lhs.numerator == rhs.numerator and lhs.denominator == rhs.denominator

    def __lt__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            if not is_representable(other) or other == INT_MIN:
                # Вне диапазона компонент: сравнение без ограничения разрядности
                lhs = self._canonical()
                return lhs.numerator < other * lhs.denominator
            other = Fraction(other)
        if not isinstance(other, Fraction):
            return NotImplemented

        lhs = self._canonical()
        rhs = other._canonical()
        # Перекрёстное умножение может переполниться (фатально)
        return checked_mul(lhs.numerator, rhs.denominator) < checked_mul(
            rhs.numerator, lhs.denominator
        )

    def __hash__(self) -> int:
        canonical = self._canonical()
        # Целые значения хэшируются как int (согласовано с == int)
        if canonical.denominator == 1:
            return hash(canonical.numerator)
        return hash((canonical.numerator, canonical.denominator))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return Fraction.from_integer(other).subtract(self)

    def __mul__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: object) -> Fraction:
        if not _is_operand(other):
            return NotImplemented
        return Fraction.from_integer(other).divide(self)

    def __pow__(self, exponent: object) -> Fraction:
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __neg__(self) -> Fraction:
        return Fraction(checked_neg(self.numerator), self.denominator)

    def __abs__(self) -> Fraction:
        return self.absoluted()


# =============================================================================
# HELPERS
# =============================================================================


def _is_operand(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (Fraction, int))


def _as_fraction(value: object) -> Fraction:
    if isinstance(value, Fraction):
        return value
    raise TypeError(f"expected Fraction or int operand, got {type(value).__name__}")


def _finish(numerator: int, denominator: int, reducing: bool) -> Fraction:
    result = Fraction(numerator, denominator)
    return result.reduced() if reducing else result


ZERO: Final[Fraction] = Fraction(0, 1)
ONE: Final[Fraction] = Fraction(1, 1)


# =============================================================================
# TEXT
# =============================================================================


def parse_fraction(text: str) -> Fraction:
    """
    Разбор текстового представления "numerator/denominator" или "integer".

    Обратная операция к str(fraction): знаки сохраняются как есть.

    Args:
        text: Строка вида "3/4", "-1/-4" или "7"

    Returns:
        Fraction

    Raises:
        FractionDecodingError: Если строка не является дробью
        IllegalNumerator: Если числитель INT_MIN или вне диапазона
        IllegalDenominator: Если знаменатель 0, INT_MIN или вне диапазона
    """
    parts = text.strip().split("/")
    if len(parts) > 2:
        raise FractionDecodingError(f"cannot parse fraction from {text!r}")

    try:
        numerator = int(parts[0])
        denominator = int(parts[1]) if len(parts) == 2 else 1
    except ValueError as e:
        raise FractionDecodingError(f"cannot parse fraction from {text!r}") from e

    validate_components(numerator, denominator)
    return Fraction(numerator, denominator)
