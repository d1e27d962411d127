
import pytest

from gavel import errors
from gavel import (Arg,
                   ArgKind,
                   Command,
                   ErrorChannel,
                   GavelException,
                   DeclarationError,
                   ArgumentParseError,
                   ScanError,
                   UnknownOption,
                   RangeViolation,
                   QueryError,
                   UnknownArgument,
                   CommandLineError)


def test_hierarchy():
    assert issubclass(DeclarationError, ValueError)
    assert issubclass(UnknownOption, ScanError)
    assert issubclass(ScanError, ArgumentParseError)
    assert issubclass(UnknownArgument, QueryError)
    assert issubclass(QueryError, LookupError)
    assert issubclass(CommandLineError, SystemExit)
    for exc_type in (DeclarationError, ArgumentParseError, QueryError, CommandLineError):
        assert issubclass(exc_type, GavelException)

    assert GavelException().message == ''
    assert RangeViolation.from_parse('', '--aa', '11', '[5, 10]').message == \
        "the value of --aa is not within the range of [5, 10], not: '11'"


def test_channel_raising():
    channel = ErrorChannel(exit_on_error=False)
    assert repr(channel) == '<ErrorChannel exit_on_error=False messages=[]>'

    channel.add('first').add('').add('second')
    assert channel.messages == ['first', 'second']
    assert channel.message == 'first\nsecond'
    channel.clear()
    assert channel.message == ''

    exc = UnknownOption.from_parse('cmd', '--nope')
    assert channel.finalize(exc) is exc
    assert channel.messages == []


def test_channel_exiting():
    printed = []
    channel = ErrorChannel(exit_on_error=True, print_error=printed.append)

    exc = UnknownOption.from_parse('cmd', '--nope')
    cle = channel.finalize(exc)
    assert isinstance(cle, CommandLineError)
    assert cle.code == 1
    assert cle.__cause__ is exc
    assert printed == ['error: cmd: unrecognized option "--nope"']

    # caller context is printed ahead of the error, then dropped
    channel.add('while checking config.ini:')
    channel.finalize(RangeViolation.from_parse('cmd', '--aa', '11', '[5, 10]'))
    assert printed[-1] == ('error: while checking config.ini:\ncmd: the value of --aa'
                           " is not within the range of [5, 10], not: '11'")
    assert channel.messages == []

    with pytest.raises(TypeError, match='expected callable for print_error'):
        ErrorChannel(print_error='stderr')
    with pytest.raises(TypeError, match='expected callable for print_usage'):
        ErrorChannel(print_usage=5)


def test_env_flag(monkeypatch):
    monkeypatch.delenv('GAVEL_TEST_FLAG', raising=False)
    assert errors._get_env_flag('GAVEL_TEST_FLAG') is False
    assert errors._get_env_flag('GAVEL_TEST_FLAG', default=True) is True

    for val, expected in [('1', True), (' Yes ', True), ('on', True),
                          ('0', False), ('no', False), ('', False)]:
        monkeypatch.setenv('GAVEL_TEST_FLAG', val)
        assert errors._get_env_flag('GAVEL_TEST_FLAG') is expected


def test_process_policy(monkeypatch, capsys):
    monkeypatch.setattr(errors, 'EXIT_ON_ERROR', True)

    assert ErrorChannel().exit_on_error is True
    assert ErrorChannel(exit_on_error=False).exit_on_error is False

    # declaration errors follow the process-wide policy, too
    with pytest.raises(CommandLineError) as excinfo:
        Arg(ArgKind.FLAG).long_name('help')
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith('error: the options --help and -h')

    cmd = Command('cmd')
    with pytest.raises(SystemExit):
        cmd.parse(['cmd', '--nope'])
    assert capsys.readouterr().err == 'error: cmd: unrecognized option "--nope"\n'

    cmd.parse(['cmd'])
    with pytest.raises(SystemExit):
        cmd.get_one('nope')
    assert 'no argument named --nope' in capsys.readouterr().err
