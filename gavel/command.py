
import sys
import logging
from collections import OrderedDict

from boltons.iterutils import first

from gavel.argument import Arg, ArgKind, FLAG_ON, new_help_arg
from gavel.errors import (ErrorChannel,
                          DeclarationError,
                          ArgumentParseError,
                          MissingRequiredArgument,
                          MissingPositionalArgument,
                          ConflictsWithAllViolation,
                          RelatedGroupViolation,
                          ConflictGroupViolation,
                          OneRequiredGroupViolation,
                          UnknownGroupMember,
                          MissingSubcommand,
                          HelpRequested,
                          UnknownArgument,
                          MissingValue,
                          PositionOutOfRange,
                          NoSubcommand,
                          finalize)
from gavel.scanner import OptionSpec, OptionTable, TokenScanner
from gavel.values import to_value
from gavel.utils import (process_command_name,
                         format_arg_label,
                         format_member_label,
                         format_group,
                         format_nonexp_repr)


log = logging.getLogger(__name__)

_FIRST_ARG_ID = -2


def _process_group(names):
    if isinstance(names, str):
        raise finalize(DeclarationError('expected a list of argument names for group,'
                                        ' not a single string: %r' % names))
    names = list(names or [])
    if not names:
        raise finalize(DeclarationError('expected at least one argument name for group'))
    for name in names:
        if not name or not isinstance(name, str):
            raise finalize(DeclarationError('expected argument names in group as'
                                            ' non-empty strings, not: %r' % (name,)))
    return names


class Command(object):
    """The Command is the central type of gavel, holding the arguments
    and constraints of one command or subcommand, and, after a parse,
    the values which were passed.

    Args:
       name (str): The name of the command. For subcommands, this is
          the word which selects it on the command line.
       usage (str): Optional text printed when ``--help`` or ``-h``
          is passed, either one string or a list of lines. Printed as
          is, gavel does not generate help text.

    A Command is declared once, with chainable methods::

      cmd = Command('mycmd')
      cmd.arg(Arg(ArgKind.REQUIRED).long_name('count').short_name('c'))
      cmd.arg(Arg(ArgKind.FLAG).long_name('verbose'))

    and can then be parsed any number of times. Each call to
    :meth:`parse` forgets the values of the previous one.
    """
    def __init__(self, name, usage=None):
        self.name = process_command_name(name)

        self.long_map = OrderedDict()
        self.short_map = OrderedDict()
        self.id_map = OrderedDict()
        self.position_args = []
        self.option_table = OptionTable()
        self._next_arg_id = _FIRST_ARG_ID

        self.related_groups = []
        self.conflict_groups = []
        self.one_required_groups = []

        self.subcmd_map = OrderedDict()

        self.usage_text = None
        if usage is not None:
            self.usage(usage)
        self.help_arg = None

        # per-parse state
        self.position_values = []
        self.subcmd_name = None

    @property
    def conflicts_all_args(self):
        return [arg for arg in self.id_map.values() if arg.is_conflicts_with_all]

    def arg(self, arg):
        """Add an :class:`Arg` to this Command. The Arg should be fully
        configured (names, constraints, defaults) before it is added.

        Returns the Command, for chaining.
        """
        if not isinstance(arg, Arg):
            raise finalize(DeclarationError('expected Arg instance, not: %r' % (arg,)))
        if arg.command is not None:
            raise finalize(DeclarationError('%s: argument %s was already added to command %r'
                                            % (self.name, format_arg_label(arg),
                                               arg.command.name)))
        if arg.kind == ArgKind.POSITION:
            if arg.name or arg.char:
                raise finalize(DeclarationError('%s: position arguments cannot have names'
                                                % self.name))
        else:
            if not (arg.name or arg.char):
                raise finalize(DeclarationError('%s: expected a long or short name for'
                                                ' %s argument' % (self.name, arg.kind)))
            if arg.name in self.long_map:
                raise finalize(DeclarationError('%s: duplicate argument name --%s'
                                                % (self.name, arg.name)))
            if arg.char in self.short_map:
                raise finalize(DeclarationError('%s: duplicate argument name -%s'
                                                % (self.name, arg.char)))

        arg.arg_id = self._next_arg_id
        self._next_arg_id -= 1
        arg.command = self
        self.id_map[arg.arg_id] = arg

        if arg.kind == ArgKind.POSITION:
            arg.position_id = len(self.position_args)
            self.position_args.append(arg)
            return self

        if arg.name:
            self.long_map[arg.name] = arg
        if arg.char:
            self.short_map[arg.char] = arg
        self.option_table.add(OptionSpec(arg.arg_id, long=arg.name, short=arg.char,
                                         takes_value=arg.kind != ArgKind.FLAG))
        return self

    def related_group(self, names):
        "Members must be passed together, or not at all."
        self.related_groups.append(_process_group(names))
        return self

    def conflict_group(self, names):
        "At most one of the members may be passed."
        self.conflict_groups.append(_process_group(names))
        return self

    def one_required_group(self, names):
        "At least one of the members must be passed."
        self.one_required_groups.append(_process_group(names))
        return self

    def subcommand(self, subcmd):
        """Add a child Command, selected when its name appears on the
        command line. Everything before the name is parsed by this
        Command, everything from the name onward by the child.
        """
        if not isinstance(subcmd, Command):
            raise finalize(DeclarationError('expected Command instance for subcommand,'
                                            ' not: %r' % (subcmd,)))
        if subcmd is self:
            raise finalize(DeclarationError('%s: a command cannot be its own subcommand'
                                            % self.name))
        if subcmd.name in self.subcmd_map:
            raise finalize(DeclarationError('%s: conflicting subcommand name: %r'
                                            % (self.name, subcmd.name)))
        self.subcmd_map[subcmd.name] = subcmd
        return self

    def usage(self, text):
        if isinstance(text, str):
            self.usage_text = text
        else:
            lines = list(text or [])
            for line in lines:
                if not isinstance(line, str):
                    raise finalize(DeclarationError('expected usage text as a string or a'
                                                    ' list of strings, not: %r' % (line,)))
            self.usage_text = '\n'.join(lines)
        return self

    def get_usage_text(self):
        if self.usage_text is None:
            return 'usage: %s' % self.name
        return self.usage_text

    def _ensure_help_arg(self):
        if self.help_arg is None:
            self.help_arg = new_help_arg()
            self.arg(self.help_arg)
        for subcmd in self.subcmd_map.values():
            subcmd._ensure_help_arg()

    def reset(self):
        "Forget the results of the last parse, in this Command and all subcommands."
        for arg in self.id_map.values():
            arg.reset()
        self.position_values = []
        self.subcmd_name = None
        for subcmd in self.subcmd_map.values():
            subcmd.reset()

    def parse(self, argv=None, channel=None):
        """Parse and validate a list of strings, in the style of
        ``sys.argv``, the first item of which is taken to be the
        program name and otherwise ignored.

        Args:
           argv (list): A sequence of strings representing the
              command-line arguments. Defaults to ``sys.argv``.
           channel (ErrorChannel): Decides what happens on errors and
              on help. Defaults to a new ErrorChannel, which follows
              the process-wide policy (see ``gavel.errors.EXIT_ON_ERROR``).

        On success, returns the Command itself, ready to be queried
        with :meth:`get_one` and friends. On failure, raises the
        ArgumentParseError, or, under the exit policy, prints it and
        raises CommandLineError, exiting the process if uncaught.
        """
        if argv is None:
            argv = sys.argv
        if channel is None:
            channel = ErrorChannel()
        argv = list(argv)

        self.reset()
        channel.clear()
        self._ensure_help_arg()
        log.debug('%s: parsing %r', self.name, argv)
        try:
            if not argv:
                raise ArgumentParseError('%s: expected non-empty sequence of arguments,'
                                         ' starting with the program name' % self.name)
            self._parse(argv)
        except HelpRequested as hr:
            raise channel.finalize_usage(hr)
        except ArgumentParseError as ape:
            raise channel.finalize(ape)
        return self

    def _parse(self, argv):
        if not self.subcmd_map:
            self._parse_own(argv)
            return

        idx = first(range(1, len(argv)), key=lambda i: argv[i] in self.subcmd_map)
        self._parse_own(argv if idx is None else argv[:idx])
        if idx is None:
            raise MissingSubcommand.from_parse(self.name, list(self.subcmd_map))
        self.subcmd_name = argv[idx]
        log.debug('%s: dispatching to subcommand %r', self.name, self.subcmd_name)
        self.subcmd_map[self.subcmd_name]._parse(argv[idx:])

    def _parse_own(self, argv):
        scanner = TokenScanner(self.option_table, argv[1:], cmd_name=self.name)
        for event in scanner.scan():
            arg = self.id_map[event.key]
            if arg is self.help_arg:
                raise HelpRequested(self.get_usage_text())
            arg.hit = True
            arg.set_value(FLAG_ON if event.value is None else event.value)

        for arg in self.id_map.values():
            if arg.kind == ArgKind.REQUIRED and not arg.hit:
                raise MissingRequiredArgument.from_parse(self.name, format_arg_label(arg))

        remaining = scanner.remaining
        if len(remaining) < len(self.position_args):
            raise MissingPositionalArgument.from_parse(self.name, len(self.position_args),
                                                       len(remaining))
        # tokens past the declared position args are kept, but not checked
        self.position_values = list(remaining)
        for arg, raw in zip(self.position_args, remaining):
            arg.set_value(raw)

        self._check_groups()

    def _resolve_member(self, ref):
        arg_map = self.short_map if len(ref) == 1 else self.long_map
        try:
            return arg_map[ref]
        except KeyError:
            raise UnknownGroupMember.from_parse(self.name, format_member_label(ref))

    def _count_hits(self, group):
        return len([ref for ref in group if self._resolve_member(ref).hit])

    def _check_groups(self):
        for arg in self.conflicts_all_args:
            if not arg.hit:
                continue
            others = [format_arg_label(a) for a in self.id_map.values()
                      if a.hit and a is not arg]
            if others:
                raise ConflictsWithAllViolation.from_parse(self.name, format_arg_label(arg),
                                                           others)

        for group in self.related_groups:
            if self._count_hits(group) not in (0, len(group)):
                raise RelatedGroupViolation.from_parse(self.name, format_group(group))

        for group in self.conflict_groups:
            if self._count_hits(group) > 1:
                raise ConflictGroupViolation.from_parse(self.name, format_group(group))

        for group in self.one_required_groups:
            if self._count_hits(group) < 1:
                raise OneRequiredGroupViolation.from_parse(self.name, format_group(group))

    def _lookup(self, name):
        if not name or not isinstance(name, str):
            return None
        arg_map = self.short_map if len(name) == 1 else self.long_map
        return arg_map.get(name)

    def get_arg(self, name):
        """Get the Arg registered under *name*, a short name if one
        character long, otherwise a long name.
        """
        arg = self._lookup(name)
        if arg is None:
            raise finalize(UnknownArgument('%s: no argument named %s'
                                           % (self.name, format_member_label(str(name)))))
        return arg

    def has(self, name):
        "Whether the flag or option *name* was passed. False for unknown names."
        arg = self._lookup(name)
        return arg is not None and arg.hit

    def get_one(self, name, as_type=str):
        arg = self.get_arg(name)
        if not arg.values:
            raise finalize(MissingValue('%s: no value for %s'
                                        % (self.name, format_arg_label(arg))))
        return arg.store.get_one(as_type)

    def get_many(self, name, as_type=str):
        """Get every value of *name*, in the order passed, or the
        defaults, in the order declared. Empty if neither exist.
        """
        return self.get_arg(name).store.get_many(as_type)

    def get_one_position(self, index, as_type=str):
        try:
            if index < 0:
                raise IndexError(index)
            raw = self.position_values[index]
        except (IndexError, TypeError):
            raise finalize(PositionOutOfRange('%s: no position argument at index %r, got %s'
                                              % (self.name, index, len(self.position_values))))
        return to_value(raw, as_type)

    def get_all_positions(self, as_type=str):
        return [to_value(raw, as_type) for raw in self.position_values]

    def get_subcommand(self):
        """Get the child Command selected by the last parse, itself
        ready for querying.
        """
        if self.subcmd_name is None:
            raise finalize(NoSubcommand('%s: no subcommand was parsed' % self.name))
        return self.subcmd_map[self.subcmd_name]

    def __repr__(self):
        return format_nonexp_repr(self, ['name'], ['subcmd_name'])
