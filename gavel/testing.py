"""Helpers for testing programs built with gavel, without leaving the
process.

A CommandChecker parses argv with a given Command while capturing
stdout and stderr, and turns the outcome, whether success, an error
exit, or help, into a Result::

  cc = CommandChecker(cmd)
  res = cc.invoke('mycmd --count 11')
  assert res.exit_code == 1
  assert 'not within the range' in res.stderr
"""

import io
import sys
import shlex
import contextlib

from gavel.errors import ErrorChannel, HelpRequested


class Result(object):
    """Holds the captured result of one parse."""

    def __init__(self, checker, stdout_bytes, stderr_bytes, exit_code, exc_info):
        self.checker = checker
        self.stdout_bytes = stdout_bytes
        self.stderr_bytes = stderr_bytes
        self.exit_code = exit_code  # integer

        # if an exception occurred:
        self.exc_info = exc_info

    @property
    def exception(self):
        return self.exc_info[1] if self.exc_info else None

    @property
    def stdout(self):
        """The standard output as a string."""
        return self.stdout_bytes.decode(self.checker.encoding, 'replace') \
            .replace('\r\n', '\n')

    @property
    def stderr(self):
        """The standard error as a string."""
        if self.stderr_bytes is None:
            raise ValueError("stderr not separately captured")
        return self.stderr_bytes.decode(self.checker.encoding, 'replace') \
            .replace('\r\n', '\n')

    def __repr__(self):
        return '<%s %s>' % (
            self.__class__.__name__,
            repr(self.exception) if self.exception else ('exit_code=%s' % self.exit_code),
        )


class CommandChecker(object):
    """Runs a Command's parse in isolation.

    Args:
       cmd (Command): The Command to parse with.
       exit_on_error (bool): The policy to parse under. Defaults to
          True, so that errors and help turn into exit codes and
          printed text, as they would for a real program.
       mix_stderr (bool): Capture stderr into stdout, in order.
       reraise (bool): Under the raising policy, whether gavel's
          exceptions propagate out of :meth:`invoke`, or are recorded
          on the Result.
    """
    def __init__(self, cmd, exit_on_error=True, mix_stderr=False, reraise=True):
        self.cmd = cmd
        self.exit_on_error = exit_on_error
        self.mix_stderr = mix_stderr
        self.reraise = reraise
        self.encoding = 'utf8'

    @contextlib.contextmanager
    def isolate(self):
        old_stdout, old_stderr = sys.stdout, sys.stderr

        bytes_output = io.BytesIO()
        bytes_error = None
        sys.stdout = io.TextIOWrapper(bytes_output, encoding=self.encoding)
        if self.mix_stderr:
            sys.stderr = sys.stdout
        else:
            bytes_error = io.BytesIO()
            sys.stderr = io.TextIOWrapper(bytes_error, encoding=self.encoding)

        try:
            yield (bytes_output, bytes_error)
        finally:
            # flush both, or text written to the wrappers may be lost
            sys.stdout.flush()
            sys.stderr.flush()
            sys.stdout = old_stdout
            sys.stderr = old_stderr

    def invoke(self, args):
        """Parse *args*, a list of strings or a single string to be
        split shell-style, with the first item taken as the program
        name. Returns a Result.
        """
        if isinstance(args, str):
            args = shlex.split(args)
        channel = ErrorChannel(exit_on_error=self.exit_on_error)

        with self.isolate() as (stdout, stderr):
            exc_info = None
            exit_code = 0
            try:
                self.cmd.parse(list(args or ()), channel=channel)
            except SystemExit as se:
                exc_info = sys.exc_info()
                exit_code = se.code
                if exit_code is None:
                    exit_code = 0
                if not isinstance(exit_code, int):
                    sys.stdout.write(str(exit_code))
                    sys.stdout.write('\n')
                    exit_code = 1
            except Exception as e:
                if self.reraise:
                    raise
                exit_code = 0 if isinstance(e, HelpRequested) else 1
                exc_info = sys.exc_info()
            finally:
                sys.stdout.flush()
                sys.stderr.flush()
                stdout_bytes = stdout.getvalue()
                stderr_bytes = stderr.getvalue() if not self.mix_stderr else None

        return Result(checker=self,
                      stdout_bytes=stdout_bytes,
                      stderr_bytes=stderr_bytes,
                      exit_code=exit_code,
                      exc_info=exc_info)
