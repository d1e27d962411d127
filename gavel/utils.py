
from boltons.iterutils import unique

from gavel.errors import DeclarationError, finalize


HELP_NAME = 'help'
HELP_CHAR = 'h'


def validate_long_name(name):
    """Validate an argument's long name, as given without dashes
    (e.g., "file_path" for ``--file_path``).

    Must be a string of at least two characters, must not begin with a
    dash, and must not contain spaces or "=", which would make it
    impossible to pass with ``--name=value``. "help" is reserved.
    """
    if not isinstance(name, str):
        raise finalize(DeclarationError('expected string for long name, not: %r' % (name,)))
    if name == HELP_NAME:
        raise finalize(DeclarationError('the options --help and -h are added automatically'
                                        ' and cannot be redefined'))
    if len(name) < 2:
        raise finalize(DeclarationError('expected long name of at least two characters,'
                                        ' not: %r' % name))
    if name.startswith('-'):
        raise finalize(DeclarationError('expected long name without leading dashes'
                                        ' (e.g., "name", not "--name"), not: %r' % name))
    if any(c.isspace() for c in name) or '=' in name:
        raise finalize(DeclarationError('expected long name without spaces or "=",'
                                        ' not: %r' % name))
    return name


def validate_short_name(char):
    """Validate an argument's short name, a single character given
    without the dash. "h" is reserved.
    """
    if not isinstance(char, str) or len(char) != 1:
        raise finalize(DeclarationError('expected exactly one character for short name,'
                                        ' not: %r' % (char,)))
    if char == HELP_CHAR:
        raise finalize(DeclarationError('the options --help and -h are added automatically'
                                        ' and cannot be redefined'))
    if char.isspace() or char in '-=':
        raise finalize(DeclarationError('expected short name to be a letter, digit, or'
                                        ' punctuation other than "-" and "=", not: %r' % char))
    return char


def process_command_name(name):
    """Validate a Command's name, generally on construction. Since
    subcommands are found by comparing argv tokens to their names, the
    name must look like a plain word: non-empty, no leading dash, no
    whitespace.
    """
    if not name or not isinstance(name, str):
        raise finalize(DeclarationError('expected non-zero length string for command'
                                        ' name, not: %r' % (name,)))
    if name.startswith('-'):
        raise finalize(DeclarationError('expected command name without leading dashes,'
                                        ' not: %r' % name))
    if any(c.isspace() for c in name):
        raise finalize(DeclarationError('expected command name without whitespace,'
                                        ' not: %r' % name))
    return name


def format_member_label(ref):
    "Group members are referenced by short name if one character long, else long name."
    return ('-' if len(ref) == 1 else '--') + ref


def format_arg_label(arg):
    """The default argument label formatter, used in error messages.
    Positional arguments are named by index, others by long name if
    they have one, else by short name.
    """
    if arg.position_id is not None:
        return 'position argument (index %s)' % arg.position_id
    if arg.name:
        return '--' + arg.name
    if arg.char:
        return '-' + arg.char
    return repr(arg)


def format_group(group):
    """
    >>> format_group(['aa', 'b'])
    '[--aa, -b]'
    """
    return '[%s]' % ', '.join([format_member_label(ref) for ref in group])


def format_nonexp_repr(obj, req_names=None, opt_names=None, opt_key=None):
    """Format a non-expression-style repr

    Some object reprs look like object instantiation, e.g., App(r=[], mw=[]).

    This makes sense for smaller, lower-level objects whose state
    roundtrips. But a lot of objects contain values that don't
    roundtrip, like back-references and mutable parse state.

    For those objects, there is the non-expression style repr, which
    mimic's Python's default style to make a repr like this:

    <Arg name='abc' kind='optional'>
    """
    cn = obj.__class__.__name__
    req_names = req_names or []
    opt_names = opt_names or []
    all_names = unique(req_names + opt_names)

    if opt_key is None:
        opt_key = lambda v: v is None
    assert callable(opt_key)

    items = [(name, getattr(obj, name, None)) for name in all_names]
    labels = ['%s=%r' % (name, val) for name, val in items
              if not (name in opt_names and opt_key(val))]
    if not labels:
        labels = ['id=%s' % id(obj)]
    ret = '<%s %s>' % (cn, ' '.join(labels))
    return ret
