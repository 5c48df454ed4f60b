'''
Exception types raised by scidat.

Most errors in this package only need to carry a message. They derive from
:class:`MessageError`, which stores the message as ``msg`` and prints it
prefixed by the type name. New types of this kind can be created in one line
with :func:`msgexc`:

>>> MyError = msgexc('MyError')
>>> raise MyError('something bad happened')
Traceback (most recent call last):
     ...
scidat.exceptions.MyError: something bad happened
'''

import types


class MessageError(Exception):
    'Base class for exceptions that carry a single message.'

    def __init__(self, msg, *args):
        super().__init__(msg, *args)
        self.msg = msg

    def __str__(self):
        return str(self.msg)


def msgexc(name, base=MessageError, *, module=None):
    '''Create a new exception type deriving from :class:`MessageError`.

    Args
    ----
    name : :class:`str`
        Name of the new exception type.
    base : :class:`type` or :class:`tuple` of types
        Base class(es); all must derive from :class:`MessageError`.
    module : :class:`str`
        Value for ``__module__``; defaults to this module.

    Returns
    -------
    :class:`type`
        The new exception type.
    '''

    bases = base if isinstance(base, tuple) else (base,)
    if not bases or not all(isinstance(b, type) and issubclass(b, MessageError) for b in bases):
        raise TypeError('base must derive from MessageError, got {!r}'.format(base))
    cls = types.new_class(name, bases)
    cls.__module__ = module or __name__
    cls.__qualname__ = name
    return cls


class InputException(MessageError, ValueError):
    'Raised when the input to a function is incorrect.'


class ConfigFormatError(MessageError, ValueError):
    'Raised for a malformed line in a unit alias configuration resource.'

    def __init__(self, msg, *, source=None, lineno=None, line=None):
        if source is not None and lineno is not None:
            msg = '{}, line {}: {}'.format(source, lineno, msg)
        super().__init__(msg)
        self.source = source
        self.lineno = lineno
        self.line = line


class UnitParsingError(MessageError, ValueError):
    '''Raised when a unit string cannot be converted into a unit.

    The ``original`` attribute holds the string as passed in by the caller,
    ``corrected`` the last corrected string that was attempted (or ``None`` if
    no correction was tried).'''

    def __init__(self, msg, *, original=None, corrected=None):
        super().__init__(msg)
        self.original = original
        self.corrected = corrected


class UnrecognizedSymbolError(UnitParsingError):
    '''Raised when a symbol in a unit expression is not a known unit.

    Besides the message, the error carries the offending ``token``, its
    ``position`` in the evaluated ``expression`` and the ``original`` string
    from which the expression was sanitized.'''

    def __init__(self, token, *, position=None, expression=None, original=None):
        if original is None:
            original = expression
        msg = 'unknown unit symbol {!r}'.format(token)
        if original is not None:
            msg += ' in {!r}'.format(original)
        if expression is not None and expression != original:
            msg += ' (sanitized {!r})'.format(expression)
        super().__init__(msg, original=original)
        self.token = token
        self.position = position
        self.expression = expression


# vim:sw=4:sts=4:et
