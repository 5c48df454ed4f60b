'''
Command line interface to the unit parser, installed as ``scidat-units``::

    scidat-units parse unit='ug m-3'
    scidat-units sanitize unit='degrees'
    scidat-units aliases aliases=extra_aliases.txt

Each command takes an optional ``aliases`` argument naming an alias resource
that is merged into a copy of the default alias table.
'''

from . import aliases as _aliases, cli, units, _util
import treelog


def _table(aliases):
    table = _aliases.DEFAULT_ALIASES.copy()
    if aliases:
        table.read(aliases)
    return table


def parse(unit: str, aliases: str = ''):
    '''Parse a unit string

    Sanitizes the unit string and converts it into a unit of the scidat unit
    registry.

    Parameters
    ----------
    unit
        The raw unit string, e.g. `m s-1`.
    aliases
        Path of an additional alias resource.
    '''

    table = _table(aliases)
    treelog.user('sanitized: {}'.format(units.sanitize_raw_unit_strings(unit, table)))
    result = units.parse_unit_string(unit, table)
    treelog.user('unit: {} ({:~P})'.format(result, result))
    return result


def sanitize(unit: str, aliases: str = ''):
    '''Sanitize a unit string

    Substitutes aliases and makes implicit products and powers explicit,
    without parsing the result.

    Parameters
    ----------
    unit
        The raw unit string.
    aliases
        Path of an additional alias resource.
    '''

    sanitized = units.sanitize_raw_unit_strings(unit, _table(aliases))
    treelog.user(sanitized)
    return sanitized


def aliases(aliases: str = ''):
    '''List unit aliases

    Parameters
    ----------
    aliases
        Path of an additional alias resource.
    '''

    table = _table(aliases)
    for line in table.describe():
        treelog.user(line)
    return table


def main(argv=None):
    return cli.choose(*map(_util.defaults_from_env, (parse, sanitize, aliases)), argv=argv)


if __name__ == '__main__':
    main()


# vim:sw=4:sts=4:et
