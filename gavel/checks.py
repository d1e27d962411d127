"""Range and choice predicates, usable by anything holding raw text
values. These functions only answer questions; raising is up to the
caller, which knows how to name the argument in the message.
"""

import operator

from boltons.iterutils import unique

from gavel.values import text_to_int, text_to_float


class NumType(object):
    """The numeric domain a range is checked in. Values and bounds are
    converted to the domain before comparing.
    """
    INT = 'int'        # signed 64-bit
    UINT = 'uint'      # unsigned 64-bit
    DOUBLE = 'double'  # double-precision float

    ALL = (INT, UINT, DOUBLE)


class NumLimit(object):
    "Textual limits, for ranges which should be open on one side."
    INT32_MIN = '-2147483648'
    INT32_MAX = '2147483647'
    UINT32_MAX = '4294967295'

    INT64_MIN = '-9223372036854775808'
    INT64_MAX = '9223372036854775807'
    UINT64_MAX = '18446744073709551615'


_INT_DOMAINS = {NumType.INT: (-2 ** 63, 2 ** 63 - 1),
                NumType.UINT: (0, 2 ** 64 - 1)}


def to_number(text, num_type):
    """Convert *text* into the *num_type* domain. Raises ValueError on
    text which is not a number, or doesn't fit the domain.
    """
    if num_type == NumType.DOUBLE:
        return text_to_float(text)
    try:
        lo, hi = _INT_DOMAINS[num_type]
    except KeyError:
        raise ValueError('unknown range type: %r' % (num_type,))
    ret = text_to_int(text)
    if not lo <= ret <= hi:
        raise ValueError('%r does not fit the %s domain' % (text, num_type))
    return ret


def check_range(value, num_type, left, right, include_left=True, include_right=True):
    """Returns True if the text *value* lies between the textual bounds
    *left* and *right*. Malformed or out-of-domain text is never in
    range.
    """
    try:
        num = to_number(value, num_type)
    except ValueError:
        return False
    left_num, right_num = to_number(left, num_type), to_number(right, num_type)
    left_op = operator.le if include_left else operator.lt
    right_op = operator.le if include_right else operator.lt
    return left_op(left_num, num) and right_op(num, right_num)


def check_choice(value, choices):
    "Exact text membership, no numeric normalization ('1' != '01')."
    return value in choices


def format_bounds(left, right, include_left=True, include_right=True):
    """
    >>> format_bounds('5', '10', include_right=False)
    '[5, 10)'
    """
    return '%s%s, %s%s' % ('[' if include_left else '(', left,
                           right, ']' if include_right else ')')


def format_choices(choices):
    return '[%s]' % ', '.join(unique(choices))
