"""
Тесты для модели Fraction: создание, сокращение, нормализация, конверсия

Проверяет:
1. Fallible создание (try_create) и trusted создание
2. Свёртку целой части (wholes)
3. Конверсию из десятичной дроби
4. Сокращение и нормализацию (идемпотентность, знаки)
5. abs, float конверсию, текстовое представление
6. Immutability (frozen=True)
"""

import dataclasses
import math

import pytest

from src.core.domain import (
    ONE,
    ZERO,
    Fraction,
    FractionDecodingError,
    FractionError,
    FractionInvariantError,
    IllegalDenominator,
    IllegalNumerator,
    parse_fraction,
    validate_components,
)
from src.core.math import INT_MAX, INT_MIN, FractionOverflowError, gcd


# =============================================================================
# FIXTURES
# =============================================================================


SAMPLE_COMPONENTS = [
    (1, 4),
    (2, 8),
    (-6, 8),
    (6, -8),
    (-9, -18),
    (0, 5),
    (0, -3),
    (17, 5),
    (INT_MAX, INT_MAX),
    (INT_MAX, 3),
    (INT_MIN + 1, 2),
    (1, INT_MIN + 1),
]


# =============================================================================
# СОЗДАНИЕ
# =============================================================================


class TestTryCreate:
    """Тесты для try_create / try_from_integer"""

    @pytest.mark.parametrize(
        "numerator, denominator",
        [
            (0, 0),
            (INT_MIN, 1),
            (0, INT_MIN),
            (INT_MIN, INT_MIN),
            (INT_MAX + 1, 1),
            (1, INT_MIN - 1),
        ],
    )
    def test_illegal_components_return_none(self, numerator: int, denominator: int) -> None:
        """Нулевой знаменатель и INT_MIN дают None"""
        assert Fraction.try_create(numerator, denominator) is None

    @pytest.mark.parametrize(
        "numerator, denominator",
        [(0, 1), (0, -1), (-1, -1), (1, -1), (-1, 1), (1, 1)],
    )
    def test_legal_components_any_sign(self, numerator: int, denominator: int) -> None:
        """Любые знаки допустимы"""
        assert Fraction.try_create(numerator, denominator) is not None

    @pytest.mark.parametrize("numerator, denominator", SAMPLE_COMPONENTS)
    def test_fields_stored_exactly(self, numerator: int, denominator: int) -> None:
        """Компоненты сохраняются без сокращения и нормализации"""
        fraction = Fraction.try_create(numerator, denominator)
        assert fraction is not None
        assert fraction.numerator == numerator
        assert fraction.denominator == denominator

    def test_boundary_values_legal(self) -> None:
        """INT_MIN + 1 и INT_MAX допустимы"""
        assert Fraction.try_create(INT_MIN + 1, 1) is not None
        assert Fraction.try_create(INT_MAX, 1) is not None
        assert Fraction.try_from_integer(INT_MAX) is not None

    def test_integer(self) -> None:
        """Создание из целого"""
        fraction = Fraction.try_from_integer(7)
        assert fraction is not None
        assert (fraction.numerator, fraction.denominator) == (7, 1)
        assert Fraction.try_from_integer(INT_MIN) is None

    def test_wholes_folded_into_numerator(self) -> None:
        """numerator + denominator * wholes"""
        fraction = Fraction.try_create(1, 4, wholes=2)
        assert fraction is not None
        assert (fraction.numerator, fraction.denominator) == (9, 4)

        negative = Fraction.try_create(-1, 4, wholes=-1)
        assert negative is not None
        assert (negative.numerator, negative.denominator) == (-5, 4)

    def test_wholes_folding_to_int_min_returns_none(self) -> None:
        """Свёртка, дающая INT_MIN, отклоняется"""
        assert Fraction.try_create(INT_MIN + 1, 1, wholes=-1) is None

    def test_wholes_overflow_is_fatal(self) -> None:
        """Переполнение при свёртке — фатальная ошибка, не None"""
        with pytest.raises(FractionOverflowError):
            Fraction.try_create(1, 1, wholes=INT_MAX)

    def test_non_int_raises_type_error(self) -> None:
        """Не целые компоненты — ошибка программиста"""
        with pytest.raises(TypeError, match="numerator must be an int"):
            Fraction.try_create(1.5, 2)  # type: ignore
        with pytest.raises(TypeError, match="denominator must be an int"):
            Fraction.try_create(1, True)  # type: ignore


class TestValidateComponents:
    """Тесты для validate_components"""

    def test_valid(self) -> None:
        """Валидные компоненты не вызывают ошибку"""
        validate_components(1, -1)
        validate_components(INT_MAX, INT_MIN + 1)

    def test_illegal_numerator(self) -> None:
        """INT_MIN в числителе"""
        with pytest.raises(IllegalNumerator):
            validate_components(INT_MIN, 1)

    def test_illegal_denominator(self) -> None:
        """Ноль и INT_MIN в знаменателе"""
        with pytest.raises(IllegalDenominator, match="must not be 0"):
            validate_components(1, 0)
        with pytest.raises(IllegalDenominator):
            validate_components(1, INT_MIN)

    def test_errors_are_recoverable(self) -> None:
        """Ошибки валидации — FractionError (ValueError)"""
        assert issubclass(IllegalNumerator, FractionError)
        assert issubclass(IllegalDenominator, FractionError)
        assert issubclass(FractionError, ValueError)


class TestTrusted:
    """Тесты для trusted создания"""

    def test_valid(self) -> None:
        """Валидные значения"""
        fraction = Fraction.trusted(3, 4)
        assert (fraction.numerator, fraction.denominator) == (3, 4)
        assert Fraction.trusted(5).denominator == 1
        assert Fraction.trusted(INT_MAX).numerator == INT_MAX

    def test_wholes(self) -> None:
        """Свёртка целой части"""
        fraction = Fraction.trusted(1, 2, wholes=3)
        assert (fraction.numerator, fraction.denominator) == (7, 2)

    @pytest.mark.parametrize(
        "numerator, denominator",
        [(1, 0), (INT_MIN, 1), (1, INT_MIN)],
    )
    def test_invalid_is_fatal(self, numerator: int, denominator: int) -> None:
        """Нарушение инварианта — FractionInvariantError"""
        with pytest.raises(FractionInvariantError):
            Fraction.trusted(numerator, denominator)

    def test_direct_constructor_checks_invariants(self) -> None:
        """Прямой вызов конструктора эквивалентен trusted"""
        with pytest.raises(FractionInvariantError):
            Fraction(0, 0)
        with pytest.raises(FractionInvariantError):
            Fraction.from_integer(INT_MIN)

    def test_invariant_error_not_recoverable(self) -> None:
        """FractionInvariantError не входит в иерархию FractionError"""
        assert issubclass(FractionInvariantError, AssertionError)
        assert not issubclass(FractionInvariantError, FractionError)


class TestFromDecimal:
    """Тесты для from_decimal"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.75, (3, 4)),
            (1.5, (3, 2)),
            (-1.25, (-5, 4)),
            (2.0, (2, 1)),
            (0.1, (1, 10)),
            (0.33333, (3333, 10000)),
            (0.0, (0, 1)),
        ],
    )
    def test_default_precision(self, value: float, expected: tuple[int, int]) -> None:
        """4 десятичных знака по умолчанию, результат сокращён"""
        fraction = Fraction.from_decimal(value)
        assert (fraction.numerator, fraction.denominator) == expected

    def test_digits_beyond_precision_dropped(self) -> None:
        """Знаки за пределами significant_digits теряются"""
        assert Fraction.from_decimal(0.123456) == Fraction(1235, 10000)
        assert Fraction.from_decimal(0.123456, significant_digits=6) == Fraction(123456, 1000000)

    def test_round_half_to_even(self) -> None:
        """Округление остатка — стандартное round() (half-to-even)"""
        # 0.125 * 100 == 12.5 → 12
        assert Fraction.from_decimal(0.125, significant_digits=2) == Fraction(3, 25)
        # 0.375 * 100 == 37.5 → 38
        assert Fraction.from_decimal(0.375, significant_digits=2) == Fraction(19, 50)

    def test_zero_digits(self) -> None:
        """significant_digits=0 округляет до целого"""
        assert Fraction.from_decimal(3.7, significant_digits=0) == 4
        assert Fraction.from_decimal(3.2, significant_digits=0) == 3

    def test_integer_input(self) -> None:
        """Целое значение принимается"""
        assert Fraction.from_decimal(3) == Fraction(3)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_raises(self, value: float) -> None:
        """NaN/Inf отклоняются"""
        with pytest.raises(ValueError, match="NaN/Inf"):
            Fraction.from_decimal(value)

    @pytest.mark.parametrize("digits", [-1, 19])
    def test_invalid_digits_raise(self, digits: int) -> None:
        """significant_digits вне [0, 18]"""
        with pytest.raises(ValueError, match="significant_digits"):
            Fraction.from_decimal(0.5, significant_digits=digits)

    def test_whole_part_overflow_is_fatal(self) -> None:
        """Целая часть, не помещающаяся в 64 бита"""
        with pytest.raises(FractionOverflowError):
            Fraction.from_decimal(1e20)


# =============================================================================
# СОКРАЩЕНИЕ И НОРМАЛИЗАЦИЯ
# =============================================================================


class TestReduced:
    """Тесты для reduced"""

    @pytest.mark.parametrize(
        "components, expected",
        [
            ((2, 4), (1, 2)),
            ((-2, 4), (-1, 2)),
            ((2, -4), (1, -2)),
            ((-2, -4), (-1, -2)),
            ((0, 5), (0, 1)),
            ((0, -5), (0, -1)),
            ((17, 5), (17, 5)),
            ((40, 32), (5, 4)),
        ],
    )
    def test_signs_preserved(self, components, expected) -> None:
        """Знак каждой компоненты сохраняется"""
        reduced = Fraction(*components).reduced()
        assert (reduced.numerator, reduced.denominator) == expected

    def test_int_max_boundary(self) -> None:
        """(INT_MAX, INT_MAX) → (1, 1) без переполнения"""
        reduced = Fraction(INT_MAX, INT_MAX).reduced()
        assert (reduced.numerator, reduced.denominator) == (1, 1)

    def test_near_int_min_boundary(self) -> None:
        """INT_MIN + 1 сокращается без переполнения"""
        reduced = Fraction(INT_MIN + 1, INT_MIN + 1).reduced()
        assert (reduced.numerator, reduced.denominator) == (-1, -1)

    @pytest.mark.parametrize("numerator, denominator", SAMPLE_COMPONENTS)
    def test_idempotent(self, numerator: int, denominator: int) -> None:
        """reduced(reduced(f)) == reduced(f) покомпонентно"""
        once = Fraction(numerator, denominator).reduced()
        twice = once.reduced()
        assert (twice.numerator, twice.denominator) == (once.numerator, once.denominator)

    @pytest.mark.parametrize("numerator, denominator", SAMPLE_COMPONENTS)
    def test_lowest_terms(self, numerator: int, denominator: int) -> None:
        """После сокращения НОД == 1 (или 0/±1)"""
        reduced = Fraction(numerator, denominator).reduced()
        if reduced.numerator == 0:
            assert abs(reduced.denominator) == 1
        else:
            assert gcd(abs(reduced.numerator), abs(reduced.denominator)) == 1

    def test_does_not_normalize(self) -> None:
        """Сокращение не переносит знак"""
        reduced = Fraction(1, -4).reduced()
        assert reduced.denominator == -4


class TestNormalized:
    """Тесты для normalized"""

    @pytest.mark.parametrize(
        "components, expected",
        [
            ((1, -4), (-1, 4)),
            ((-1, -4), (1, 4)),
            ((-1, 4), (-1, 4)),
            ((1, 4), (1, 4)),
            ((0, -1), (0, 1)),
        ],
    )
    def test_sign_moves_to_numerator(self, components, expected) -> None:
        """Отрицательный знаменатель становится положительным"""
        normalized = Fraction(*components).normalized()
        assert (normalized.numerator, normalized.denominator) == expected

    def test_does_not_reduce(self) -> None:
        """Нормализация не сокращает"""
        normalized = Fraction(6, -8).normalized()
        assert (normalized.numerator, normalized.denominator) == (-6, 8)

    def test_receiver_unchanged(self) -> None:
        """Исходный экземпляр не меняется"""
        fraction = Fraction(1, -4)
        fraction.normalized()
        assert (fraction.numerator, fraction.denominator) == (1, -4)


class TestAbsoluted:
    """Тесты для absoluted / abs()"""

    @pytest.mark.parametrize(
        "components",
        [(1, -1), (-1, 1), (-1, -1), (1, 1)],
    )
    def test_unit_values(self, components) -> None:
        """Все комбинации знаков дают 1/1"""
        absoluted = Fraction(*components).absoluted()
        assert (absoluted.numerator, absoluted.denominator) == (1, 1)

    def test_each_component_independent(self) -> None:
        """Знак снимается с каждой компоненты, без сокращения"""
        absoluted = abs(Fraction(-6, -8))
        assert (absoluted.numerator, absoluted.denominator) == (6, 8)
        assert abs(Fraction(3, -4)) == Fraction(3, 4)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


class TestConversion:
    """Тесты для float конверсии и текста"""

    def test_double_value(self) -> None:
        """Деление числителя на знаменатель"""
        assert Fraction(1, 4).double_value == 0.25
        assert Fraction(-1, -4).double_value == 0.25
        assert Fraction(1, -4).double_value == -0.25
        assert float(Fraction(1, 2)) == 0.5

    def test_float_value_single_precision(self) -> None:
        """float_value округлён до single precision"""
        value = Fraction(1, 3).float_value
        assert value == pytest.approx(1 / 3, rel=1e-7)
        assert value != 1 / 3
        assert Fraction(1, 4).float_value == 0.25

    def test_str_literal(self) -> None:
        """Текст без нормализации и сокращения"""
        assert str(Fraction(3, 4)) == "3/4"
        assert str(Fraction(-1, -4)) == "-1/-4"
        assert str(Fraction(2, 8)) == "2/8"

    def test_constants(self) -> None:
        """ZERO == 0/1, ONE == 1/1"""
        assert (ZERO.numerator, ZERO.denominator) == (0, 1)
        assert (ONE.numerator, ONE.denominator) == (1, 1)

    def test_bool(self) -> None:
        """Нулевая дробь ложна"""
        assert not ZERO
        assert not Fraction(0, -7)
        assert Fraction(1, 7)
        assert Fraction(0, 3).is_zero

    def test_float_of_large_values_is_finite(self) -> None:
        """Конверсия граничных значений"""
        assert math.isfinite(Fraction(INT_MAX, 1).double_value)


class TestParseFraction:
    """Тесты для parse_fraction"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3/4", (3, 4)),
            ("-1/-4", (-1, -4)),
            ("7", (7, 1)),
            (" 5/6 ", (5, 6)),
        ],
    )
    def test_valid(self, text: str, expected: tuple[int, int]) -> None:
        """Разбор "n/d" и "n" без изменения знаков"""
        fraction = parse_fraction(text)
        assert (fraction.numerator, fraction.denominator) == expected

    def test_inverse_of_str(self) -> None:
        """parse_fraction(str(f)) покомпонентно равен f"""
        fraction = Fraction(-6, 8)
        parsed = parse_fraction(str(fraction))
        assert (parsed.numerator, parsed.denominator) == (-6, 8)

    @pytest.mark.parametrize("text", ["a/b", "1/2/3", "", "1.5/2"])
    def test_malformed(self, text: str) -> None:
        """Некорректный текст"""
        with pytest.raises(FractionDecodingError):
            parse_fraction(text)

    def test_illegal_components(self) -> None:
        """Типизированные ошибки для недопустимых компонент"""
        with pytest.raises(IllegalDenominator):
            parse_fraction("1/0")
        with pytest.raises(IllegalNumerator):
            parse_fraction(f"{INT_MIN}/1")


class TestImmutability:
    """Тесты для immutability"""

    def test_frozen(self) -> None:
        """Fraction immutable (frozen=True)"""
        fraction = Fraction(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            fraction.numerator = 3  # type: ignore

    def test_repr(self) -> None:
        """repr содержит компоненты"""
        assert repr(Fraction(1, 2)) == "Fraction(numerator=1, denominator=2)"
