
import pytest

from gavel.errors import UnknownOption, MissingOptionValue, UnexpectedOptionValue
from gavel.scanner import OptionSpec, OptionTable, TokenScanner, ScanEvent


def get_table():
    table = OptionTable()
    table.add(OptionSpec(-2, long='count', short='c', takes_value=True))
    table.add(OptionSpec(-3, long='verbose', short='v'))
    table.add(OptionSpec(-4, long='aa', takes_value=True))
    table.add(OptionSpec(-5, short='a', takes_value=True))
    return table


def scan(tokens):
    scanner = TokenScanner(get_table(), tokens, cmd_name='scan')
    return list(scanner.scan()), scanner.remaining


def test_table():
    table = get_table()
    assert len(table) == 4
    assert table.by_long('count') is table.by_short('c')
    assert table.by_long('nope') is None

    with pytest.raises(ValueError, match='duplicate long option'):
        table.add(OptionSpec(-6, long='count'))
    with pytest.raises(ValueError, match='duplicate short option'):
        table.add(OptionSpec(-6, short='v'))
    with pytest.raises(ValueError, match='expected a long or short name'):
        OptionSpec(-6)

    assert repr(table.by_short('v')) == "<OptionSpec key=-3 long='verbose' short='v'>"


def test_value_forms():
    for tokens in (['--count', '5'], ['--count=5'], ['-c', '5'], ['-c5'],
                   ['-count', '5'], ['-count=5']):
        events, remaining = scan(tokens)
        assert events == [ScanEvent(-2, '5')]
        assert remaining == []

    assert scan(['--count='])[0] == [(-2, '')]
    # the next token is taken as the value, dash or not
    assert scan(['-c', '-v'])[0] == [(-2, '-v')]


def test_long_before_short():
    assert scan(['-aa', '1'])[0] == [(-4, '1')]
    assert scan(['-a', '1'])[0] == [(-5, '1')]
    assert scan(['-ab'])[0] == [(-5, 'b')]


def test_permutation():
    events, remaining = scan(['x', '-v', 'y', '--count', '1', 'z', '-'])
    assert events == [(-3, None), (-2, '1')]
    assert remaining == ['x', 'y', 'z', '-']


def test_double_dash():
    events, remaining = scan(['-v', '--', '-v', '--count'])
    assert events == [(-3, None)]
    assert remaining == ['-v', '--count']


def test_scan_errors():
    with pytest.raises(UnknownOption, match='scan: unrecognized option "--nope"'):
        scan(['--nope'])
    with pytest.raises(UnknownOption, match='"-x"'):
        scan(['-x'])
    with pytest.raises(UnknownOption, match='"--="'):
        scan(['--='])
    # no clustering of flags
    with pytest.raises(UnknownOption, match='"-vv"'):
        scan(['-vv'])

    with pytest.raises(MissingOptionValue, match='option --count requires a value'):
        scan(['--count'])
    with pytest.raises(MissingOptionValue, match='option -a requires a value'):
        scan(['-v', '-a'])

    with pytest.raises(UnexpectedOptionValue, match='option --verbose does not take a value'):
        scan(['--verbose=1'])
    with pytest.raises(UnexpectedOptionValue):
        scan(['-verbose=yes'])
