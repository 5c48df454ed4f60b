"""
Plumbing of the ``scidat-units`` command line: environment defaults, output
setup, error reporting and argument parsing.
"""

from . import warnings
from .exceptions import MessageError
from .expression import ExpressionSyntaxError
import stringly
import sys
import os
import inspect
import functools
import contextlib
import textwrap
import traceback
import treelog

# Errors caused by the user's input, reported without traceback.
USER_ERRORS = MessageError, ExpressionSyntaxError


def defaults_from_env(f):
    '''Decorator for changing function defaults based on environment.

    Annotated parameters with a default value are looked up in the environment
    as ``SCIDAT_<NAME>``, e.g. ``SCIDAT_ALIASES`` for ``aliases``. The value
    is deserialized using `Stringly <https://pypi.org/project/stringly/>`_. If
    this fails a warning is emitted and the original default is kept.'''

    sig = inspect.signature(f)
    params = [_env_default(param) for param in sig.parameters.values()]
    if params == list(sig.parameters.values()):
        return f
    sig = sig.replace(parameters=params)
    @functools.wraps(f)
    def defaults_from_env(*args, **kwargs):
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        return f(*bound.args, **bound.kwargs)
    defaults_from_env.__signature__ = sig
    return defaults_from_env


def _env_default(param):
    envname = f'SCIDAT_{param.name.upper()}'
    if envname not in os.environ or param.annotation == param.empty or param.default == param.empty:
        return param
    try:
        value = stringly.loads(param.annotation, os.environ[envname])
    except Exception as e:
        warnings.warn(f'ignoring environment variable {envname}: {e}')
        return param
    return param.replace(default=value)


def in_context(context):
    '''Decorator to run a function in a context.

    The parameters of ``context`` are added to the signature of the decorated
    function as keyword-only arguments and are passed on to the context.'''

    params = []
    for param in inspect.signature(context).parameters.values():
        if param.kind == param.POSITIONAL_OR_KEYWORD:
            param = param.replace(kind=param.KEYWORD_ONLY)
        elif param.kind != param.KEYWORD_ONLY:
            raise Exception(f'context parameter {param.name!r} cannot be specified as keyword argument')
        params.append(param)

    def in_context_wrapper(f):

        @functools.wraps(f)
        def in_context(*args, **kwargs):
            with context(**{param.name: kwargs.pop(param.name) for param in params if param.name in kwargs}):
                return f(*args, **kwargs)

        sig = inspect.signature(f)
        in_context.__signature__ = sig.replace(parameters=(*sig.parameters.values(), *params))
        return in_context

    return in_context_wrapper


def log_arguments(f):
    '''Decorator to log the arguments of a command in the 'arguments' context.'''

    sig = inspect.signature(f)

    @functools.wraps(f)
    def log_arguments(*args, **kwargs):
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        with treelog.context('arguments'):
            for k, v in bound.arguments.items():
                treelog.info(f'{k}={_dumps(sig.parameters[k].annotation, v)}')
        return f(*args, **kwargs)

    return log_arguments


def _dumps(T, value):
    try:
        return stringly.dumps(T, value)
    except Exception:
        return str(value)


@contextlib.contextmanager
@defaults_from_env
def log_traceback(gracefulexit: bool = True):
    '''Context to report an escaping exception to the active logger.

    Invalid input, such as an unknown unit symbol, is logged as a single error
    line. Any other exception is logged with its traceback at debug level,
    followed by its causes. Afterwards ``SystemExit(1)`` is raised to avoid
    reprinting by Python's default error handler.'''

    if not gracefulexit:
        yield
        return

    try:
        yield
    except SystemExit:
        raise
    except USER_ERRORS as e:
        treelog.error(f'{type(e).__name__}: {e}')
        raise SystemExit(1)
    except Exception:
        exc = traceback.TracebackException(*sys.exc_info())
        prefix = ''
        while exc is not None:
            treelog.error(prefix + ''.join(exc.format_exception_only()).rstrip())
            treelog.debug('Traceback (most recent call first):\n' + ''.join(reversed(exc.stack.format())).rstrip())
            if exc.__cause__ is not None:
                exc, prefix = exc.__cause__, '.. caused by '
            elif not exc.__suppress_context__:
                exc, prefix = exc.__context__, '.. while handling '
            else:
                exc = None
        raise SystemExit(1)


@defaults_from_env
def set_stdoutlog(richoutput: bool = sys.stdout.isatty(), verbose: int = 4): # pragma: no cover
    '''Context to replace the active logger with a StdoutLog or RichOutputLog.

    Verbosity 1 shows only errors, 2 adds warnings, 3 adds the command output
    and 4 adds informational messages. Any other value shows everything.'''

    levels = treelog.proto.Level.error, treelog.proto.Level.warning, treelog.proto.Level.user, treelog.proto.Level.info
    stdoutlog = treelog.RichOutputLog() if richoutput else treelog.StdoutLog()
    if 0 <= verbose-1 < len(levels):
        stdoutlog = treelog.FilterLog(stdoutlog, minlevel=levels[verbose-1])
    return treelog.set(stdoutlog)


class _Argument:
    'command line argument with its stringly serializer'

    def __init__(self, param, doc):
        T = param.annotation
        if T == param.empty and param.default != param.empty:
            T = type(param.default)
        if T == param.empty:
            raise Exception(f'cannot determine type for argument {param.name!r}')
        if param.kind not in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY):
            raise Exception(f'argument {param.name!r} is positional-only')
        try:
            self.serializer = stringly.serializer.get(T)
        except Exception as e:
            raise Exception(f'stringly cannot deserialize argument {param.name!r} of type {T}') from e
        self.name = param.name
        self.isflag = T == bool
        self.mandatory = param.default is param.empty and param.name not in doc.defaults
        self.default = doc.defaults.get(param.name)
        self.help = doc.argdocs.get(param.name)

    def __str__(self):
        s = f'{self.name}={self.name[0].upper()}'
        return s if self.mandatory else f'[{s}]'


def _usage(progname, arguments):
    return '\n'.join(textwrap.wrap(' '.join([f'USAGE: {progname}', *map(str, arguments)]), subsequent_indent='  '))


def _help(usage, doc, arguments):
    lines = [usage]
    if doc.text:
        lines.extend(('', inspect.cleandoc(doc.text)))
    documented = [arg for arg in arguments if arg.help]
    if documented:
        lines.append('')
    for arg in documented:
        lines.append(arg.name if arg.default is None else f'{arg.name} (default: {arg.default})')
        lines.extend(textwrap.wrap(arg.help, initial_indent='    ', subsequent_indent='    '))
    return '\n'.join(lines)


def _parse_args(args, arguments):
    byname = {arg.name: arg for arg in arguments}
    strings = {arg.name: arg.default for arg in arguments if arg.default is not None}
    for s in args:
        name, sep, value = s.partition('=')
        if name not in byname:
            raise ValueError(f'invalid argument {name!r}')
        if not sep and not byname[name].isflag:
            raise ValueError(f'argument {name!r} requires a value')
        strings[name] = value if sep else 'yes'
    kwargs = {}
    for name, s in strings.items():
        try:
            kwargs[name] = byname[name].serializer.loads(s)
        except Exception as e:
            raise ValueError(f'invalid value {s!r} for {name}: {e}') from e
    for arg in arguments:
        if arg.mandatory and arg.name not in kwargs:
            raise ValueError(f'missing argument {arg.name}')
    return kwargs


def cli(f, *, argv=None):
    '''Call a function with keyword arguments ``name=value`` from the command line.

    Values are deserialized with stringly according to the annotations of
    ``f``. Defaults documented in the docstring take precedence over the
    defaults in the signature. ``-h`` or ``--help`` exits with the usage and
    the documentation of ``f``, invalid arguments exit with the usage and an
    error message.'''

    progname, *args = argv or sys.argv
    doc = stringly.util.DocString(f)
    arguments = [_Argument(param, doc) for param in inspect.signature(f).parameters.values()]
    usage = _usage(progname, arguments)
    if '-h' in args or '--help' in args:
        sys.exit(_help(usage, doc, arguments))
    try:
        kwargs = _parse_args(args, arguments)
    except ValueError as e:
        sys.exit(f'{usage}\n\nError: {e}')
    return f(**kwargs)


# vim:sw=4:sts=4:et
