
import pytest

from gavel import Arg, ArgKind, Command, NumType, RangeViolation, HelpRequested
from gavel.testing import CommandChecker


def get_calc_cmd():
    cmd = Command('calc', usage=['usage: calc [--precision N] X Y'])
    cmd.arg(Arg(ArgKind.OPTIONAL).long_name('precision').short_name('p')
            .range(NumType.INT, '0', '12').default_value('2'))
    cmd.arg(Arg(ArgKind.POSITION).range(NumType.DOUBLE, '-1e9', '1e9'))
    cmd.arg(Arg(ArgKind.POSITION).range(NumType.DOUBLE, '-1e9', '1e9'))
    return cmd


def test_success():
    cmd = get_calc_cmd()
    cc = CommandChecker(cmd)

    res = cc.invoke('calc -p 4 1.5 2')
    assert res.exit_code == 0
    assert res.exception is None
    assert res.stdout == ''
    assert res.stderr == ''
    assert repr(res) == '<Result exit_code=0>'
    assert cmd.get_one('precision', int) == 4
    assert cmd.get_all_positions(float) == [1.5, 2.0]


def test_error_exit():
    cc = CommandChecker(get_calc_cmd())

    res = cc.invoke(['calc', '--precision', '13', '1', '2'])
    assert res.exit_code == 1
    assert res.stdout == ''
    assert res.stderr == ("error: calc: the value of --precision is not within"
                          " the range of [0, 12], not: '13'\n")
    assert isinstance(res.exception, SystemExit)
    assert isinstance(res.exception.__cause__, RangeViolation)

    res = cc.invoke('calc 1')
    assert res.exit_code == 1
    assert 'expected 2, got 1' in res.stderr


def test_help_exit():
    cc = CommandChecker(get_calc_cmd())

    res = cc.invoke('calc --help')
    assert res.exit_code == 0
    assert res.stdout == 'usage: calc [--precision N] X Y\n'
    assert res.stderr == ''


def test_mix_stderr():
    cc = CommandChecker(get_calc_cmd(), mix_stderr=True)

    res = cc.invoke('calc --bogus')
    assert res.exit_code == 1
    assert res.stdout == 'error: calc: unrecognized option "--bogus"\n'
    with pytest.raises(ValueError, match='not separately captured'):
        res.stderr


def test_raising_policy():
    cc = CommandChecker(get_calc_cmd(), exit_on_error=False)
    with pytest.raises(RangeViolation):
        cc.invoke('calc 1 2e9')

    cc = CommandChecker(get_calc_cmd(), exit_on_error=False, reraise=False)
    res = cc.invoke('calc 1 2e9')
    assert res.exit_code == 1
    assert isinstance(res.exception, RangeViolation)
    # nothing printed under the raising policy
    assert res.stderr == ''

    res = cc.invoke('calc -h')
    assert res.exit_code == 0
    assert isinstance(res.exception, HelpRequested)
    assert res.stdout == 'usage: calc [--precision N] X Y\n'
