"""Raw argument value storage and typed extraction.

Values are always stored as the text found on the command line (or
given as a default), and converted only when they are read back. The
sized types below mirror the widths commonly used by CLI programs, so
that a value which would not fit is rejected at read time.
"""

import re
import struct

from boltons.typeutils import make_sentinel


_UNSET = make_sentinel('_UNSET')

# plain ASCII numerals only, int() and float() would also take "1_0" and " 7 "
_INT_RE = re.compile(r'[+-]?[0-9]+')
_FLOAT_RE = re.compile(r'[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?')


def text_to_int(text):
    if not isinstance(text, str) or not _INT_RE.fullmatch(text):
        raise ValueError('expected integer text, not: %r' % (text,))
    return int(text)


def text_to_float(text):
    if not isinstance(text, str) or not _FLOAT_RE.fullmatch(text):
        raise ValueError('expected floating point text, not: %r' % (text,))
    return float(text)


class SizedInt(object):
    """A converter from text to a bounded integer. Instances are used
    like ``int``, as the *as_type* of the getters on Command.
    """
    def __init__(self, name, min_value, max_value):
        self.name = name
        self.min_value = min_value
        self.max_value = max_value

    def __call__(self, text):
        ret = text_to_int(text)
        if not self.min_value <= ret <= self.max_value:
            raise ValueError('value out of range for %s [%s, %s], not: %r'
                             % (self.name, self.min_value, self.max_value, text))
        return ret

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.name)


class SizedFloat(object):
    """A converter from text to a float, narrowed to a given struct
    format. ``'f'`` rounds to single precision, ``'d'`` is a plain
    Python float.
    """
    def __init__(self, name, fmt):
        self.name = name
        self.fmt = fmt

    def __call__(self, text):
        ret = text_to_float(text)
        try:
            return struct.unpack(self.fmt, struct.pack(self.fmt, ret))[0]
        except (OverflowError, struct.error):
            raise ValueError('value out of range for %s, not: %r' % (self.name, text))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.name)


INT32 = SizedInt('int32', -2 ** 31, 2 ** 31 - 1)
UINT32 = SizedInt('uint32', 0, 2 ** 32 - 1)
INT64 = SizedInt('int64', -2 ** 63, 2 ** 63 - 1)
UINT64 = SizedInt('uint64', 0, 2 ** 64 - 1)
FLOAT32 = SizedFloat('float32', 'f')
FLOAT64 = SizedFloat('float64', 'd')
TEXT = str


def to_value(raw, as_type=str):
    """Convert the stored text *raw* with *as_type*, which may be any of
    the types above, a builtin like ``int``, or any callable taking a
    single string.

    Conversion errors (generally ValueError) are not caught. Booleans
    are not supported: whether "true", "xxx" or "2" are True is a
    decision left to the caller. Convert to ``int`` first and apply
    your own rule.
    """
    if as_type is bool:
        raise TypeError('boolean conversion is not supported, get the value'
                        ' as int and test it instead')
    if as_type is str:
        return raw
    if not callable(as_type):
        raise TypeError('expected callable for as_type, not %r' % (as_type,))
    return as_type(raw)


class ValueStore(object):
    """Holds the raw values of one argument, along with its defaults.

    Repeated occurrences accumulate, in order. When defaults are set,
    they are the initial values, and the first put() after a reset
    replaces them rather than appending to them.
    """
    def __init__(self, initial=_UNSET):
        self.values = []
        self.defaults = []
        self.default_cleared = False
        self._initial = initial
        if initial is not _UNSET:
            self.values.append(initial)

    @property
    def has_default(self):
        return bool(self.defaults)

    def set_defaults(self, raws):
        self.defaults = list(raws)
        self.values = list(raws)
        self.default_cleared = False

    def put(self, raw):
        if self.defaults and not self.default_cleared:
            self.values = []
            self.default_cleared = True
        self.values.append(raw)

    def overwrite(self, raw):
        "Replace the first value, used for flags, which hold exactly one."
        if not self.values:
            self.values.append(raw)
        else:
            self.values[0] = raw

    def reset(self):
        if self.defaults:
            self.values = list(self.defaults)
            self.default_cleared = False
        elif self._initial is not _UNSET:
            self.values = [self._initial]
        else:
            self.values = []

    def get_one(self, as_type=str):
        return to_value(self.values[0], as_type)

    def get_many(self, as_type=str):
        return [to_value(v, as_type) for v in self.values]

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s values=%r defaults=%r>' % (cn, self.values, self.defaults)
