"""Splits an argv-style token list into option events and the
remaining (positional) tokens.

The scanner knows nothing about argument kinds or constraints. It is
driven by an OptionTable, which only says which names exist and
whether they take a value, and it reports what it finds as ScanEvents
keyed by whatever key the table was built with.

Accepted forms::

  --name value    --name=value
  -name value     -name=value      (long names work with one dash, too)
  -n value        -nvalue

A single-dash token is first looked up as a long name, then as a short
name. Options and positionals may be interleaved; positionals are set
aside in order. Everything after ``--`` is positional, and ``-`` alone
is a positional (conventionally, stdin).
"""

import logging
from collections import namedtuple, OrderedDict

from gavel.errors import UnknownOption, MissingOptionValue, UnexpectedOptionValue
from gavel.utils import format_nonexp_repr


log = logging.getLogger(__name__)

ScanEvent = namedtuple('ScanEvent', 'key value')


class OptionSpec(object):
    def __init__(self, key, long=None, short=None, takes_value=False):
        if not (long or short):
            raise ValueError('expected a long or short name for option %r' % (key,))
        self.key = key
        self.long = long
        self.short = short
        self.takes_value = bool(takes_value)

    @property
    def label(self):
        return '--' + self.long if self.long else '-' + self.short

    def __repr__(self):
        return format_nonexp_repr(self, ['key'], ['long', 'short', 'takes_value'],
                                  opt_key=lambda v: not v)


class OptionTable(object):
    """The options a TokenScanner recognizes, indexed by long and short
    name. Adding a name twice raises ValueError, since the scanner
    could not tell the two apart.
    """
    def __init__(self):
        self._long_map = OrderedDict()
        self._short_map = OrderedDict()

    def add(self, spec):
        if spec.long and spec.long in self._long_map:
            raise ValueError('duplicate long option name: %r' % spec.long)
        if spec.short and spec.short in self._short_map:
            raise ValueError('duplicate short option name: %r' % spec.short)
        if spec.long:
            self._long_map[spec.long] = spec
        if spec.short:
            self._short_map[spec.short] = spec
        return spec

    def by_long(self, name):
        return self._long_map.get(name)

    def by_short(self, char):
        return self._short_map.get(char)

    def get_specs(self):
        return list(self._long_map.values()) + [s for s in self._short_map.values()
                                                if not s.long]

    def __len__(self):
        return len(self.get_specs())


class TokenScanner(object):
    """A one-shot scanner over *tokens*, which should not include the
    program name. Call :meth:`scan` and iterate it to the end; the
    non-option tokens are then available as ``remaining``.

    *cmd_name* is only used to prefix error messages.
    """
    def __init__(self, table, tokens, cmd_name=''):
        self.table = table
        self.tokens = list(tokens)
        self.cmd_name = cmd_name
        self.remaining = []

    def scan(self):
        tokens, idx = self.tokens, 0
        while idx < len(tokens):
            token = tokens[idx]
            idx += 1
            if token == '--':
                self.remaining.extend(tokens[idx:])
                break
            if not token.startswith('-') or token == '-':
                self.remaining.append(token)
                continue
            if token.startswith('--'):
                spec, value, attached = self._match_long(token, token[2:])
            else:
                spec, value, attached = self._match_single_dash(token)

            if not spec.takes_value:
                if attached:
                    raise UnexpectedOptionValue.from_parse(self.cmd_name, spec.label, value)
                yield ScanEvent(spec.key, None)
                continue
            if not attached:
                try:
                    value = tokens[idx]
                except IndexError:
                    raise MissingOptionValue.from_parse(self.cmd_name, spec.label)
                idx += 1  # the next token is the value, even if it starts with a dash
            yield ScanEvent(spec.key, value)
        log.debug('scanned %r, remaining: %r', self.tokens, self.remaining)

    def _match_long(self, token, body, fallback=None):
        name, sep, value = body.partition('=')
        spec = self.table.by_long(name) if name else None
        if spec is None:
            if fallback is not None:
                return fallback()
            raise UnknownOption.from_parse(self.cmd_name, token)
        return spec, value, bool(sep)

    def _match_single_dash(self, token):
        body = token[1:]

        def _as_short():
            spec = self.table.by_short(body[0])
            if spec is None:
                raise UnknownOption.from_parse(self.cmd_name, token)
            rest = body[1:]
            if not rest:
                return spec, None, False
            if not spec.takes_value:
                # no clustering of flags, "-ab" is not "-a -b"
                raise UnknownOption.from_parse(self.cmd_name, token)
            return spec, rest, True

        if len(body) < 2:
            return _as_short()
        return self._match_long(token, body, fallback=_as_short)
