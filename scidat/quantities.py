'''
Thin adapter over the :mod:`pint` units library.

The module holds the unit registry that scidat evaluates unit expressions
against. On top of pint's default definitions it registers the units that
commonly occur in airborne and atmospheric chemistry data files, such as
mixing ratios (``ppm``, ``ppbv``, ...), Dobson units and molecule counts.

Symbols are resolved strictly: a token is either a unit name or symbol known
to the registry, or one of :data:`METRIC_PREFIXES` followed by such a name.
Contrary to pint's own lookup the ASCII ``u`` is *not* accepted as a micro
prefix, as that would make e.g. ``unitless`` ambiguous; see
:func:`scidat.units.parse_unit_string` for how ``u`` prefixes are handled.
'''

import pint
from .exceptions import UnrecognizedSymbolError


registry = pint.UnitRegistry(on_redefinition='ignore')

# Unitless implies a physical quantity without dimension, none implies that
# the value is not a physical quantity at all, e.g. an index. Mach numbers are
# relative to the local speed of sound and therefore unitless too.
_definitions = (
    'unitless = 1',
    'no_units = 1 = none',
    'mach = 1',
    'molec = mole / avogadro_number',
    'dobson_unit = 0.4462 * millimole = DU',
    'parts_per_million = micromole / mole = ppm',
    'parts_per_million_volume = microliter / liter = ppmv',
    'parts_per_billion = nanomole / mole = ppb',
    'parts_per_billion_volume = nanoliter / liter = ppbv',
    'parts_per_trillion = picomole / mole = ppt',
    'parts_per_trillion_volume = picoliter / liter = pptv',
    'days = 24 * hour',
    'std_m = meter',
)

for _definition in _definitions:
    registry.define(_definition)

# Glyph to pint prefix name. The empty prefix is included so that the keys
# can directly be used as alternatives in a pattern.
METRIC_PREFIXES = {
    'Y': 'yotta', 'Z': 'zetta', 'E': 'exa', 'P': 'peta', 'T': 'tera', 'G': 'giga',
    'M': 'mega', 'k': 'kilo', 'h': 'hecto', 'da': 'deca', '': '',
    'd': 'deci', 'c': 'centi', 'm': 'milli', 'μ': 'micro', 'µ': 'micro', 'n': 'nano',
    'p': 'pico', 'f': 'femto', 'a': 'atto', 'z': 'zepto', 'y': 'yocto',
}

MICRO = 'μ'

# longest first, unprefixed before the single character prefixes
_prefix_order = sorted(METRIC_PREFIXES, key=lambda glyph: (glyph != '', -len(glyph)))


def _unprefixed_name(name):
    'canonical name of a unit that is defined without prefix or plural suffix'

    if not name:
        return None
    for prefix, unit, suffix in registry.parse_unit_name(name, case_sensitive=True):
        if not prefix and not suffix:
            return unit
    return None


def lookup(token, position=None, expression=None, original=None):
    '''Resolve a single unit symbol to a :class:`pint.Unit`.

    Args
    ----
    token : :class:`str`
        The unit symbol, optionally preceded by a metric prefix.
    position : :class:`int`
        Offset of the token in ``expression``, stored in the error.
    expression : :class:`str`
        The expression the token is part of, stored in the error.
    original : :class:`str`
        The unsanitized string the expression derives from, stored in the
        error.

    Returns
    -------
    :class:`pint.Unit`

    Raises
    ------
    :class:`scidat.exceptions.UnrecognizedSymbolError`
        If the token is not a (prefixed) unit.
    '''

    for glyph in _prefix_order:
        if not token.startswith(glyph):
            continue
        name = _unprefixed_name(token[len(glyph):])
        if name is not None:
            return registry.Unit(METRIC_PREFIXES[glyph] + name)
    raise UnrecognizedSymbolError(token, position=position, expression=expression, original=original)


def is_quantity(value):
    return isinstance(value, pint.Quantity)


def to_magnitude(value, unit=None):
    'strip the unit from a quantity, optionally converting to ``unit`` first'

    if not is_quantity(value):
        raise TypeError('expected a quantity, got {}'.format(type(value).__name__))
    return value.magnitude if unit is None else value.to(unit).magnitude


def unit_of(value):
    'unit of a quantity or of the first quantity in an array of quantities'

    if is_quantity(value):
        return value.units
    for item in value:
        return unit_of(item)
    raise ValueError('cannot determine the unit of an empty sequence')


# vim:sw=4:sts=4:et
