
from gavel.errors import (DeclarationError,
                          RangeViolation,
                          ChoiceViolation,
                          finalize)
from gavel.checks import (NumType,
                          to_number,
                          check_range,
                          check_choice,
                          format_bounds,
                          format_choices)
from gavel.utils import (validate_long_name,
                         validate_short_name,
                         format_arg_label,
                         format_nonexp_repr,
                         HELP_NAME,
                         HELP_CHAR)
from gavel.values import ValueStore


class ArgKind(object):
    FLAG = 'flag'          # presence only, e.g., --verbose
    REQUIRED = 'required'  # must be passed, with a value
    OPTIONAL = 'optional'  # may be passed, with a value, may have defaults
    POSITION = 'position'  # matched by order among the non-option tokens

    ALL = (FLAG, REQUIRED, OPTIONAL, POSITION)


FLAG_OFF, FLAG_ON = '0', '1'


class Arg(object):
    """The Arg object represents all there is to know about one
    parameter of a Command: how it is named on the command line, what
    it requires, and which values it accepts. After a parse, it also
    holds what was passed.

    Args:
       kind (str): One of the :class:`ArgKind` values.

    Arg is configured through chainable methods, each of which returns
    the Arg itself::

      Arg(ArgKind.OPTIONAL).long_name('count').short_name('c').range(NumType.INT, '1', '10')

    Declaration mistakes raise a DeclarationError immediately.
    """
    def __init__(self, kind):
        if kind not in ArgKind.ALL:
            raise finalize(DeclarationError('expected one of %r for argument kind, not: %r'
                                            % (ArgKind.ALL, kind)))
        self.kind = kind
        self.name = None
        self.char = None
        self.arg_id = None
        self.position_id = None
        self.command = None  # set when added to a Command, not owned

        self.store = ValueStore(FLAG_OFF) if kind == ArgKind.FLAG else ValueStore()
        self.hit = False
        self.is_conflicts_with_all = False

        self.num_type = None
        self.left = self.right = None
        self.include_left = self.include_right = True
        self.choice_set = None

    @property
    def values(self):
        return self.store.values

    @property
    def has_range(self):
        return self.num_type is not None

    @property
    def has_choices(self):
        return self.choice_set is not None

    def _fail(self, msg):
        return finalize(DeclarationError('%s: %s' % (format_arg_label(self), msg)))

    def long_name(self, name):
        if self.kind == ArgKind.POSITION:
            raise self._fail('position arguments cannot have a long name')
        self.name = validate_long_name(name)
        return self

    def short_name(self, char):
        if self.kind == ArgKind.POSITION:
            raise self._fail('position arguments cannot have a short name')
        self.char = validate_short_name(char)
        return self

    def conflicts_with_all(self):
        """Make this argument exclusive: when it is passed, no other
        argument of the same Command may be passed. Only flags and
        optional arguments can be exclusive.
        """
        if self.kind not in (ArgKind.FLAG, ArgKind.OPTIONAL):
            raise self._fail('only flag and optional arguments can conflict with all others')
        self.is_conflicts_with_all = True
        return self

    def default_value(self, raw):
        return self.default_values([raw])

    def default_values(self, raws):
        """Set the values an optional argument has when it is not
        passed. Passing the argument one or more times replaces the
        defaults entirely.
        """
        if self.kind != ArgKind.OPTIONAL:
            raise self._fail('only optional arguments can have default values')
        if isinstance(raws, str):
            raws = [raws]
        raws = list(raws or [])
        if not raws:
            raise self._fail('expected at least one default value')
        for raw in raws:
            if not isinstance(raw, str):
                raise self._fail('expected default values as strings, not: %r' % (raw,))
        self.store.set_defaults(raws)
        self._check_default()
        return self

    def range(self, num_type, left, right, include_left=True, include_right=True):
        """Limit the values of this argument to a numeric range. Bounds
        are given as text, so the extremes of 64-bit ranges can be
        written exactly (see NumLimit), and are inclusive by default.
        """
        if self.kind == ArgKind.FLAG:
            raise self._fail('flag arguments cannot have a range')
        if self.has_choices:
            raise self._fail('choices are already set, cannot also set a range')
        if num_type not in NumType.ALL:
            raise self._fail('expected one of %r for range type, not: %r'
                             % (NumType.ALL, num_type))
        left, right = str(left), str(right)
        for bound in (left, right):
            try:
                to_number(bound, num_type)
            except ValueError:
                raise self._fail('expected %s range bound, not: %r' % (num_type, bound))
        self.num_type = num_type
        self.left, self.right = left, right
        self.include_left, self.include_right = bool(include_left), bool(include_right)
        self._check_default()
        return self

    def choices(self, values):
        if self.kind == ArgKind.FLAG:
            raise self._fail('flag arguments cannot have choices')
        if self.has_range:
            raise self._fail('a range is already set, cannot also set choices')
        if isinstance(values, str):
            values = [values]
        values = list(values or [])
        if not values:
            raise self._fail('expected at least one choice')
        self.choice_set = frozenset([str(v) for v in values])
        self._check_default()
        return self

    def get_violation(self, raw):
        """Returns an ArgumentParseError describing why *raw* is not an
        acceptable value, or None if it is.
        """
        cmd_name = self.command.name if self.command is not None else ''
        if self.has_range and not check_range(raw, self.num_type, self.left, self.right,
                                              self.include_left, self.include_right):
            return RangeViolation.from_parse(cmd_name, format_arg_label(self), raw,
                                             self.get_bounds_desc())
        if self.has_choices and not check_choice(raw, self.choice_set):
            return ChoiceViolation.from_parse(cmd_name, format_arg_label(self), raw,
                                              self.get_choices_desc())
        return None

    def get_bounds_desc(self):
        return format_bounds(self.left, self.right, self.include_left, self.include_right)

    def get_choices_desc(self):
        return format_choices(sorted(self.choice_set))

    def _check_default(self):
        if not self.store.has_default:
            return
        violation = self.get_violation(self.store.defaults[-1])
        if violation is not None:
            raise self._fail('default value does not satisfy its own constraint (%s)'
                             % violation.message)

    def set_value(self, raw):
        """Store a value passed on the command line. Flags always
        overwrite their single value. Other kinds accumulate, after
        clearing any defaults on the first call, and check the new
        value against the declared range or choices.
        """
        if self.kind == ArgKind.FLAG:
            self.store.overwrite(raw)
            return
        self.store.put(raw)
        violation = self.get_violation(raw)
        if violation is not None:
            raise violation

    def reset(self):
        "Forget everything from the previous parse, restoring defaults."
        self.hit = False
        self.store.reset()

    def __repr__(self):
        return format_nonexp_repr(self, ['kind'], ['name', 'char', 'position_id'])


def new_help_arg():
    ret = Arg(ArgKind.FLAG)
    # assigned directly, as the validators reserve these names
    ret.name, ret.char = HELP_NAME, HELP_CHAR
    return ret.conflicts_with_all()
