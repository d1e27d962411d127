
import pytest

from gavel.checks import (NumType,
                          NumLimit,
                          to_number,
                          check_range,
                          check_choice,
                          format_bounds,
                          format_choices)


def test_to_number():
    assert to_number('5', NumType.INT) == 5
    assert to_number(NumLimit.INT64_MIN, NumType.INT) == -2 ** 63
    assert to_number(NumLimit.UINT64_MAX, NumType.UINT) == 2 ** 64 - 1
    assert to_number('1.5', NumType.DOUBLE) == 1.5

    for text, num_type in [(NumLimit.UINT64_MAX, NumType.INT),
                           ('-1', NumType.UINT),
                           ('1.5', NumType.INT),
                           ('abc', NumType.DOUBLE),
                           ('1_0', NumType.INT),
                           ('\u0667', NumType.UINT),
                           (' 7 ', NumType.INT),
                           ('1_0.5', NumType.DOUBLE),
                           ('5', 'long')]:
        with pytest.raises(ValueError):
            to_number(text, num_type)


def test_check_range_inclusivity():
    assert check_range('5', NumType.INT, '5', '10')
    assert check_range('10', NumType.INT, '5', '10')
    assert not check_range('4', NumType.INT, '5', '10')
    assert not check_range('11', NumType.INT, '5', '10')

    assert not check_range('5', NumType.INT, '5', '10', include_left=False)
    assert check_range('6', NumType.INT, '5', '10', include_left=False)
    assert not check_range('10', NumType.INT, '5', '10', include_right=False)
    assert check_range('9', NumType.INT, '5', '10', include_right=False)


def test_check_range_domains():
    assert check_range(NumLimit.INT32_MAX, NumType.INT, '0', NumLimit.INT32_MAX)
    assert not check_range('2147483648', NumType.INT, '0', NumLimit.INT32_MAX)
    assert check_range('2147483648', NumType.INT, '2147483648', NumLimit.INT64_MAX)

    assert not check_range('-1', NumType.UINT, '0', NumLimit.UINT64_MAX)
    assert check_range(NumLimit.UINT64_MAX, NumType.UINT, '0', NumLimit.UINT64_MAX)

    # beyond 64 bits, or not a number at all, is never in range
    assert not check_range('18446744073709551616', NumType.UINT, '0', NumLimit.UINT64_MAX)
    assert not check_range('abc', NumType.INT, NumLimit.INT64_MIN, NumLimit.INT64_MAX)

    assert check_range('0.75', NumType.DOUBLE, '0.5', '1')
    assert not check_range('0.5', NumType.DOUBLE, '0.5', '1', include_left=False)


def test_check_choice():
    choices = frozenset(['1', '2', '3'])
    assert check_choice('2', choices)
    assert not check_choice('01', choices)
    assert not check_choice('4', choices)


def test_formatting():
    assert format_bounds('5', '10') == '[5, 10]'
    assert format_bounds('5', '10', include_left=False) == '(5, 10]'
    assert format_bounds('5', '10', include_right=False) == '[5, 10)'
    assert format_choices(['1', '2', '2', '3']) == '[1, 2, 3]'
