"""A small find-and-grep style program, to show off declaring options,
positional arguments, groups, and subcommands with gavel.

  python find_grep.py -v mydirfind --name src --type d
  python find_grep.py --depth 3 mygrep -m 5 TODO README.md
  python find_grep.py mygrep --help

"""
import sys

from gavel import Arg, ArgKind, Command, NumType, NumLimit, ErrorChannel


FIND_USAGE = ['usage: myfind [-v] [--depth N] (mydirfind | mygrep) ...',
              '',
              '  -v, --verbose  print what is being searched',
              '  --depth N      how many directories deep to search (default: 1)']

DIRFIND_USAGE = ['usage: myfind mydirfind (--name NAME | --regex REGEX) [--type f|d]']

GREP_USAGE = ['usage: myfind mygrep [-m MAX] [-i] PATTERN [PATH ...]']


def get_command():
    cmd = Command('myfind', usage=FIND_USAGE)
    cmd.arg(Arg(ArgKind.FLAG).long_name('verbose').short_name('v'))
    cmd.arg(Arg(ArgKind.OPTIONAL).long_name('depth')
            .range(NumType.UINT, '0', NumLimit.UINT32_MAX)
            .default_value('1'))

    dirfind = Command('mydirfind', usage=DIRFIND_USAGE)
    dirfind.arg(Arg(ArgKind.OPTIONAL).long_name('name').short_name('n'))
    dirfind.arg(Arg(ArgKind.OPTIONAL).long_name('regex'))
    dirfind.arg(Arg(ArgKind.OPTIONAL).long_name('type').choices(['f', 'd']).default_value('f'))
    dirfind.conflict_group(['name', 'regex'])
    dirfind.one_required_group(['name', 'regex'])

    grep = Command('mygrep', usage=GREP_USAGE)
    grep.arg(Arg(ArgKind.POSITION))
    grep.arg(Arg(ArgKind.OPTIONAL).short_name('m').range(NumType.INT, '1', NumLimit.INT32_MAX))
    grep.arg(Arg(ArgKind.FLAG).short_name('i'))

    cmd.subcommand(dirfind).subcommand(grep)
    return cmd


def main(argv=None):
    cmd = get_command()
    cmd.parse(argv, channel=ErrorChannel(exit_on_error=True))

    if cmd.has('verbose'):
        print('searching %s level(s) deep' % cmd.get_one('depth', int))

    subcmd = cmd.get_subcommand()
    if subcmd.name == 'mydirfind':
        pattern = subcmd.get_one('name') if subcmd.has('name') else subcmd.get_one('regex')
        print('finding %s matching %r' % ('directories' if subcmd.get_one('type') == 'd'
                                          else 'files', pattern))
    else:
        positions = subcmd.get_all_positions()
        paths = positions[1:] or ['.']
        print('grepping %s for %r (case %s)' % (', '.join(paths), positions[0],
                                                'insensitive' if subcmd.has('i') else 'sensitive'))
        if subcmd.has('m'):
            print('stopping after %s matches' % subcmd.get_one('m', int))
    return 0


if __name__ == '__main__':
    sys.exit(main())
