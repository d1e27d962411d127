"""Exception types raised by gavel, and the ErrorChannel which applies
the termination policy to them.

Every failure, whether raised while declaring a command, while parsing
argv, or while querying parsed values, goes through
:meth:`ErrorChannel.finalize`. Depending on the policy, the channel
either hands the exception back to be raised, or prints the message
and turns it into a :class:`CommandLineError`, which exits the process
when uncaught.
"""

import os
import sys
import logging


log = logging.getLogger(__name__)

_TRUTHY = ('1', 'true', 'yes', 'on')


def _get_env_flag(name, default=False):
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


# Process-wide termination policy, fixed when gavel is first imported.
EXIT_ON_ERROR = _get_env_flag('GAVEL_EXIT_ON_ERROR')


def _with_cmd(cmd_name, msg):
    return '%s: %s' % (cmd_name, msg) if cmd_name else msg


class GavelException(Exception):
    """The basest base exception gavel has. Rarely directly
    instantiated if ever, but useful for catching.
    """
    @property
    def message(self):
        try:
            return self.args[0]
        except IndexError:
            return ''


class DeclarationError(GavelException, ValueError):
    """Raised while building a Command or Arg, when the declaration
    itself is malformed: reserved or invalid names, a constraint set on
    the wrong kind of argument, conflicting constraints, empty default
    or choice sets.
    """
    pass


class ArgumentParseError(GavelException):
    """A base exception used for all errors raised during argument
    parsing.

    Many subtypes have a ".from_parse()" classmethod that creates an
    exception message from the values available during the parse
    process.
    """
    pass


class ScanError(ArgumentParseError):
    """Raised when argv does not follow the option syntax, regardless
    of what the options mean.
    """
    pass


class UnknownOption(ScanError):
    """
    Raised when an unrecognized option is passed.
    """
    @classmethod
    def from_parse(cls, cmd_name, token):
        return cls('%s: unrecognized option "%s"' % (cmd_name, token))


class MissingOptionValue(ScanError):
    """
    Raised when an option which takes a value is last on the line.
    """
    @classmethod
    def from_parse(cls, cmd_name, label):
        return cls('%s: option %s requires a value' % (cmd_name, label))


class UnexpectedOptionValue(ScanError):
    """Raised when a value is attached (``--flag=value``) to an
    option which takes none.
    """
    @classmethod
    def from_parse(cls, cmd_name, label, value):
        return cls('%s: option %s does not take a value, not: %r'
                   % (cmd_name, label, value))


class MissingRequiredArgument(ArgumentParseError):
    """
    Raised when a required argument is not passed.
    """
    @classmethod
    def from_parse(cls, cmd_name, label):
        return cls('%s: missing required option: %s' % (cmd_name, label))


class MissingPositionalArgument(ArgumentParseError):
    """Raised when fewer positional arguments are passed than the
    command declares.
    """
    @classmethod
    def from_parse(cls, cmd_name, expected, got):
        return cls('%s: missing required position arguments, expected %s, got %s'
                   % (cmd_name, expected, got))


class RangeViolation(ArgumentParseError):
    """
    Raised when a value falls outside its argument's declared range.
    """
    @classmethod
    def from_parse(cls, cmd_name, label, value, bounds_desc):
        return cls(_with_cmd(cmd_name, 'the value of %s is not within the range of %s, not: %r'
                             % (label, bounds_desc, value)))


class ChoiceViolation(ArgumentParseError):
    """
    Raised when a value is not one of its argument's declared choices.
    """
    @classmethod
    def from_parse(cls, cmd_name, label, value, choices_desc):
        return cls(_with_cmd(cmd_name, 'the value of %s is not within %s, not: %r'
                             % (label, choices_desc, value)))


class ConflictsWithAllViolation(ArgumentParseError):
    """Raised when an argument marked ``conflicts_with_all()`` is passed
    together with any other argument.
    """
    @classmethod
    def from_parse(cls, cmd_name, label, others):
        return cls('%s: option %s conflicts with all other options, but got: %s'
                   % (cmd_name, label, ', '.join(others)))


class RelatedGroupViolation(ArgumentParseError):
    """Raised when some, but not all, members of a related group are
    passed.
    """
    @classmethod
    def from_parse(cls, cmd_name, group_desc):
        return cls('%s: the options %s must be passed together, or not at all'
                   % (cmd_name, group_desc))


class ConflictGroupViolation(ArgumentParseError):
    """
    Raised when more than one member of a conflict group is passed.
    """
    @classmethod
    def from_parse(cls, cmd_name, group_desc):
        return cls('%s: the options %s conflict with each other, pass at most one'
                   % (cmd_name, group_desc))


class OneRequiredGroupViolation(ArgumentParseError):
    """
    Raised when no member of a one-required group is passed.
    """
    @classmethod
    def from_parse(cls, cmd_name, group_desc):
        return cls('%s: at least one of the options %s is required'
                   % (cmd_name, group_desc))


class UnknownGroupMember(ArgumentParseError):
    """Raised when a group refers to a name which no argument of the
    command carries. Groups are checked lazily, so this surfaces at
    parse time.
    """
    @classmethod
    def from_parse(cls, cmd_name, label):
        return cls('%s: can not find option %s' % (cmd_name, label))


class MissingSubcommand(ArgumentParseError):
    """
    Raised when a command with subcommands is invoked without one.
    """
    @classmethod
    def from_parse(cls, cmd_name, subcmd_names):
        return cls('%s: missing subcommand, choose from: %s'
                   % (cmd_name, ', '.join(subcmd_names)))


class QueryError(GavelException, LookupError):
    """A base exception for caller mistakes made while reading values
    back out of a parsed Command.
    """
    pass


class UnknownArgument(QueryError):
    pass


class MissingValue(QueryError):
    pass


class PositionOutOfRange(QueryError):
    pass


class NoSubcommand(QueryError):
    pass


class HelpRequested(GavelException):
    """Raised (under the raising policy) after the usage text was
    printed because ``--help`` or ``-h`` was passed. Not an error, but
    the parse does not complete, so no values are available.
    """
    def __init__(self, usage_text):
        super(HelpRequested, self).__init__(usage_text)
        self.usage_text = usage_text


class CommandLineError(GavelException, SystemExit):
    def __init__(self, msg, code=1):
        SystemExit.__init__(self, msg)
        self.code = code


def default_print_error(msg):
    return sys.stderr.write(msg + '\n')


def default_print_usage(text):
    return sys.stdout.write(text + '\n')


class ErrorChannel(object):
    """Collects error text for a single parse (or a single declaration
    or query), and finalizes it according to the termination policy.

    Args:
       exit_on_error (bool): Pass True to print errors and raise
          CommandLineError (a SystemExit), False to raise the original
          exception. Defaults to the process-wide ``EXIT_ON_ERROR``.
       print_error (callable): Writes error messages under the exit
          policy. Defaults to writing a line to stderr.
       print_usage (callable): Writes usage text when help is
          requested. Defaults to writing to stdout.
    """
    def __init__(self, exit_on_error=None, print_error=None, print_usage=None):
        self.exit_on_error = EXIT_ON_ERROR if exit_on_error is None else bool(exit_on_error)
        self.print_error = print_error or default_print_error
        self.print_usage = print_usage or default_print_usage
        if not callable(self.print_error):
            raise TypeError('expected callable for print_error, not %r' % print_error)
        if not callable(self.print_usage):
            raise TypeError('expected callable for print_usage, not %r' % print_usage)
        self.messages = []

    @property
    def message(self):
        return '\n'.join(self.messages)

    def add(self, text):
        """Buffer extra text, for callers finalizing their own errors
        (e.g., checks run after a successful parse) which want context
        printed ahead of the message. finalize() adds the error's own
        message last. Command.parse() starts from an empty buffer.
        """
        if text:
            self.messages.append(text)
        return self

    def clear(self):
        self.messages = []

    def finalize(self, exc):
        """Returns the exception which should be raised for *exc*. The
        buffer is emptied either way.
        """
        self.add(exc.message)
        msg = self.message
        self.clear()
        log.debug('finalizing %s: %s', exc.__class__.__name__, msg)
        if not self.exit_on_error:
            return exc
        if msg:
            self.print_error('error: ' + msg)
        cle = CommandLineError(msg)
        cle.__cause__ = exc
        return cle

    def finalize_usage(self, hr):
        """Prints the usage text carried by the HelpRequested *hr*, and
        returns the exception to raise.
        """
        self.clear()
        self.print_usage(hr.usage_text)
        if not self.exit_on_error:
            return hr
        return CommandLineError(hr.usage_text, code=0)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s exit_on_error=%r messages=%r>' % (cn, self.exit_on_error, self.messages)


def finalize(exc):
    "Finalize *exc* through a fresh channel using the process-wide policy."
    return ErrorChannel().finalize(exc)
