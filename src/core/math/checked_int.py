"""
Checked Integers — арифметика фиксированной ширины

Модуль моделирует знаковые 64-битные целые поверх неограниченных int Python:
- Границы INT_MIN / INT_MAX
- Checked операции (add/sub/mul/neg/abs/div), которые не "заворачивают"
  результат и не продвигают его в bignum
- Алгоритм Евклида для НОД

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [INT_MIN, INT_MAX], иначе
   FractionOverflowError
2. Overflow — фатальное состояние (ошибка использования), не control flow
3. Все операции детерминированы и не имеют состояния
"""

from typing import Final

# =============================================================================
# ГРАНИЦЫ ДИАПАЗОНА
# =============================================================================

# Ширина целого (бит)
INT_BITS: Final[int] = 64

# Минимальное представимое значение; -INT_MIN не представимо
INT_MIN: Final[int] = -(2 ** (INT_BITS - 1))

# Максимальное представимое значение
INT_MAX: Final[int] = 2 ** (INT_BITS - 1) - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FractionOverflowError(OverflowError):
    """
    Фатальный overflow/underflow 64-битной арифметики.

    Означает, что операнды слишком велики для точного представления
    результата. Не должен перехватываться и игнорироваться: исправлять
    нужно вызывающий код, а не результат.
    """

    pass


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_representable(value: object) -> bool:
    """
    Проверка, что значение — int (не bool) в диапазоне [INT_MIN, INT_MAX].

    Args:
        value: Проверяемое значение

    Returns:
        True если value представимо как 64-битное знаковое целое
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return INT_MIN <= value <= INT_MAX


def _checked(result: int, operation: str) -> int:
    if result < INT_MIN or result > INT_MAX:
        raise FractionOverflowError(
            f"{INT_BITS}-bit integer overflow in {operation}: result {result} "
            f"outside [{INT_MIN}, {INT_MAX}]"
        )
    return result


# =============================================================================
# CHECKED ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        FractionOverflowError: Если a + b вне диапазона

    Examples:
        >>> checked_add(1, 2)
        3
        >>> checked_add(INT_MAX, 1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        FractionOverflowError: ...
    """
    return _checked(a + b, f"{a} + {b}")


def checked_sub(a: int, b: int) -> int:
    """Вычитание с проверкой переполнения."""
    return _checked(a - b, f"{a} - {b}")


def checked_mul(a: int, b: int) -> int:
    """
    Умножение с проверкой переполнения.

    Raises:
        FractionOverflowError: Если a * b вне диапазона
    """
    return _checked(a * b, f"{a} * {b}")


def checked_neg(a: int) -> int:
    """
    Смена знака с проверкой переполнения.

    -INT_MIN не представимо, поэтому checked_neg(INT_MIN) фатален.
    """
    return _checked(-a, f"-({a})")


def checked_abs(a: int) -> int:
    """Модуль с проверкой переполнения (abs(INT_MIN) фатален)."""
    return checked_neg(a) if a < 0 else a


def checked_div(a: int, b: int) -> int:
    """
    Целочисленное деление с округлением к нулю.

    Используется при сокращении дробей, где деление всегда точное.
    Единственный случай переполнения: INT_MIN / -1.

    Raises:
        ZeroDivisionError: Если b == 0
        FractionOverflowError: Если результат вне диапазона
    """
    if b == 0:
        raise ZeroDivisionError(f"integer division by zero: {a} / 0")

    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient

    return _checked(quotient, f"{a} / {b}")


# =============================================================================
# НОД
# =============================================================================


def gcd(a: int, b: int) -> int:
    """
    Наибольший общий делитель по алгоритму Евклида.

    Итеративная перестановка остатков: (u, v) -> (v, u % v) до v == 0.
    Операнды должны быть неотрицательными; gcd(0, 0) == 0.

    Args:
        a: Первый операнд (>= 0)
        b: Второй операнд (>= 0)

    Returns:
        НОД(a, b)

    Raises:
        ValueError: Если один из операндов отрицательный

    Examples:
        >>> gcd(12, 18)
        6
        >>> gcd(0, 5)
        5
        >>> gcd(INT_MAX, INT_MAX) == INT_MAX
        True
    """
    if a < 0 or b < 0:
        raise ValueError(f"gcd operands must be non-negative, got ({a}, {b})")

    u, v = a, b
    while v != 0:
        u, v = v, u % v

    return u
