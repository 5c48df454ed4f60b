'''
Parsing of unit strings from data files.

Unit strings in data file headers rarely follow a single convention: the same
unit may be written as ``degrees``, ``deg`` or ``°``, products are separated
by spaces (``m s-1``) and exponents are appended without operator. This
module converts such strings into :class:`pint.Unit` values of the
:mod:`scidat.quantities` registry:

>>> from scidat import units
>>> units.sanitize_raw_unit_strings('m s-1')
'm * s^-1'
>>> units.parse_unit_string('m s-1')
<Unit('meter / second')>

Data files are usually ASCII encoded, so the micro prefix is mostly written
as ``u``. Since replacing every ``u`` by ``μ`` would break units such as
``unitless``, :func:`parse_unit_string` only does so for symbols that turn
out to be unknown, one at a time:

>>> units.parse_unit_string('ug/m3')
<Unit('microgram / meter ** 3')>
'''

from . import aliases as _aliases, expression, quantities
from .exceptions import InputException, UnitParsingError, UnrecognizedSymbolError
import functools
import itertools
import numpy
import re
import treelog

MAX_MICRO_RETRIES = 8

_ascii_micro = re.compile('u[a-zA-Z]')
_implicit_product = re.compile(r'(?<=[a-zA-Z0-9])\s+(?=[a-zA-Z])')
_implicit_power = re.compile(r'(?<=[a-zA-Z])(?=[+\-]?[0-9])')


@functools.lru_cache(maxsize=32)
def _substitution_rules(entries):
    # An alias only matches a whole unit, optionally prefixed: it must be
    # preceded by the start of the string or whitespace, possibly followed by
    # a metric prefix, and succeeded by a non-letter or the end of the string.
    # Python's re does not support variable width look-behind, so the context
    # is captured and written back upon substitution. The empty prefix is
    # part of METRIC_PREFIXES and sorts last.
    prefixes = '|'.join(map(re.escape, sorted(quantities.METRIC_PREFIXES, key=len, reverse=True)))
    rules = []
    for canonical, aliases in entries:
        if not aliases:
            continue
        # Longest first so that e.g. `degrees` is not matched as `deg`.
        alternatives = '|'.join(map(re.escape, sorted(aliases, key=len, reverse=True)))
        pattern = re.compile(r'(\A|\s)({})(?:{})(?=[^a-zA-Z]|\Z)'.format(prefixes, alternatives))
        rules.append((pattern, canonical))
    return tuple(rules)


def sanitize_raw_unit_strings(ustr, aliases=None):
    '''Preprocess a unit string into a form that :func:`parse_unit_string`
    understands.

    Three substitutions are made, in order:

    1.  Aliases defined by ``aliases`` are replaced by their canonical symbol.
        Aliases only match whole units, optionally preceded by a metric
        prefix.
    2.  Whitespace between an alphanumeric character and a letter is replaced
        by `` * ``, so ``m s-1`` becomes ``m * s-1``.
    3.  A ``^`` is inserted between a letter and a directly following number,
        optionally signed, so ``m * s-1`` becomes ``m * s^-1``. This assumes
        that units never contain digits.

    Args
    ----
    ustr : :class:`str`
        The raw unit string.
    aliases : :class:`scidat.aliases.AliasTable`
        The alias table; defaults to :data:`scidat.aliases.DEFAULT_ALIASES`.

    Returns
    -------
    :class:`str`
        The sanitized unit string.
    '''

    if not isinstance(ustr, str):
        raise InputException('expected a str, got {}'.format(type(ustr).__name__))
    if aliases is None:
        aliases = _aliases.DEFAULT_ALIASES
    elif not isinstance(aliases, _aliases.AliasTable):
        aliases = _aliases.AliasTable(aliases)
    for pattern, canonical in _substitution_rules(aliases.all_entries()):
        ustr = pattern.sub(lambda match: match.group(1) + match.group(2) + canonical, ustr)
    ustr = _implicit_product.sub(' * ', ustr)
    ustr = _implicit_power.sub('^', ustr)
    return ustr


class _PintOps:
    'evaluate unit expressions to units of the scidat registry'

    def __init__(self, expression, original):
        self.expression = expression
        self.original = original

    def get_unit(self, name, position):
        return quantities.lookup(name, position, self.expression, self.original)

    def from_number(self, value):
        return quantities.registry.dimensionless if value == 1 else None

    def multiply(self, left, right):
        return left * right

    def divide(self, numerator, denominator):
        return numerator / denominator

    def power(self, base, exponent):
        return base ** exponent


def parse_unit_string(ustr, aliases=None):
    '''Convert a string describing a unit or combination of units into a
    :class:`pint.Unit`.

    The string is first passed through :func:`sanitize_raw_unit_strings`. If
    the result contains a symbol that is not a known unit but starts with
    ``u``, the ``u`` is assumed to stand for the micro prefix: it is replaced
    by ``μ`` and parsing is retried. Only the leftmost unknown symbol is
    corrected per attempt, for at most :data:`MAX_MICRO_RETRIES` attempts.

    Args
    ----
    ustr : :class:`str`
        The unit string.
    aliases : :class:`scidat.aliases.AliasTable`
        Passed through to :func:`sanitize_raw_unit_strings`.

    Returns
    -------
    :class:`pint.Unit`

    Raises
    ------
    :class:`scidat.exceptions.UnitParsingError`
        If a symbol is not recognized, also not after the micro correction.
        The error names ``ustr`` as ``original`` and the last corrected
        string as ``corrected``. Unrecognized symbols for which no correction
        was attempted raise the :class:`UnrecognizedSymbolError` subclass.
    :class:`scidat.expression.ExpressionSyntaxError`
        If the sanitized string is not a valid unit expression.
    '''

    current = ustr
    corrected = None
    for ncorrections in itertools.count():
        sanitized = sanitize_raw_unit_strings(current, aliases)
        try:
            return expression.evaluate(sanitized, _PintOps(sanitized, ustr))
        except UnrecognizedSymbolError as e:
            if e.position is None or not _ascii_micro.match(e.token):
                if corrected is None:
                    raise
                raise UnitParsingError("Tried replacing 'u' prefix with 'μ' ({!r} -> {!r}) but this failed: {}".format(ustr, corrected, e), original=ustr, corrected=corrected) from e
            if ncorrections >= MAX_MICRO_RETRIES:
                raise UnitParsingError('Giving up on {!r} after {} micro prefix corrections, last tried {!r}'.format(ustr, ncorrections, corrected), original=ustr, corrected=corrected) from e
            current = corrected = sanitized[:e.position] + quantities.MICRO + sanitized[e.position+1:]
            treelog.debug('unknown unit {!r}, retrying {!r} as {!r}'.format(e.token, sanitized, corrected))


def strip_units(data, final_units=None):
    '''Remove the units from a quantity or an array of quantities.

    Returns the underlying values. Optionally, provide a unit to convert the
    values to before stripping; the unit may be a string, which is parsed by
    :func:`parse_unit_string`.

    >>> from scidat.quantities import registry
    >>> x = registry.Quantity(numpy.array([1., 2., 3.]), 'm')
    >>> strip_units(x)
    array([1., 2., 3.])
    >>> strip_units(x, 'cm')
    array([100., 200., 300.])

    This also works for scalar quantities and for lists or object arrays of
    scalar quantities.

    >>> strip_units(1. * registry.m, 'cm')
    100.0
    '''

    if isinstance(final_units, str):
        final_units = parse_unit_string(final_units)
    if quantities.is_quantity(data):
        return quantities.to_magnitude(data, final_units)
    if isinstance(data, numpy.ndarray):
        values = [strip_units(item, final_units) for item in data.flat]
        return numpy.array(values).reshape(data.shape)
    if isinstance(data, (list, tuple)):
        return numpy.array([strip_units(item, final_units) for item in data])
    raise InputException('expected a quantity or array of quantities, got {}'.format(type(data).__name__))


# vim:sw=4:sts=4:et
