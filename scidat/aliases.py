'''
Unit alias tables.

An alias table maps a canonical unit symbol, as understood by
:mod:`scidat.quantities`, onto the alternative spellings that the unit may
go by in data files. Tables are read from plain text resources with one
directive per line::

    <canonical>: <alias1>, <alias2>, ... [: append|replace]

The optional mode defaults to ``append``, which adds the aliases to those
already known for the canonical symbol. ``replace`` overwrites them, and logs
a warning if that discards aliases defined before. Blank lines and lines
starting with ``#`` are ignored. For example::

    deg: degree, degrees, °: replace

The order of the aliases is retained; at substitution time the aliases of a
symbol are tried longest first, regardless of the configured order.

A default table is read from the bundled ``standard_unit_aliases.txt`` upon
import and is available as :data:`DEFAULT_ALIASES`.
'''

from typing import Iterable, NamedTuple, Tuple
from .exceptions import ConfigFormatError
import collections.abc
import threading
import treelog
import os

MODES = 'append', 'replace'


class Directive(NamedTuple):
    'single parsed line of an alias resource'

    canonical: str
    aliases: Tuple[str, ...]
    mode: str = 'append'
    lineno: int = 0
    source: str = '<string>'


def parse_config(lines: Iterable[str], source: str = '<string>'):
    '''Parse the lines of an alias resource into directives.

    Args
    ----
    lines : iterable of :class:`str`
        The lines of the resource, with or without line endings.
    source : :class:`str`
        Name of the resource, used in error and warning messages.

    Returns
    -------
    :class:`list` of :class:`Directive`

    Raises
    ------
    :class:`scidat.exceptions.ConfigFormatError`
        If a line has fewer than two or more than three ``:`` separated
        fields, an empty canonical symbol or an unknown mode.
    '''

    directives = []
    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        chunks = line.split(':')
        if len(chunks) < 2:
            raise ConfigFormatError('expected "<canonical>: <aliases>[: <mode>]", got {!r}'.format(stripped), source=source, lineno=lineno, line=line)
        if len(chunks) > 3:
            raise ConfigFormatError('too many ":" separated fields in {!r}'.format(stripped), source=source, lineno=lineno, line=line)
        canonical = chunks[0].strip()
        if not canonical:
            raise ConfigFormatError('missing canonical unit symbol in {!r}'.format(stripped), source=source, lineno=lineno, line=line)
        aliases = tuple(alias for alias in map(str.strip, chunks[1].split(',')) if alias)
        mode = chunks[2].strip().lower() if len(chunks) > 2 else 'append'
        if mode not in MODES:
            raise ConfigFormatError('invalid mode {!r}, expected one of {}'.format(mode, ', '.join(MODES)), source=source, lineno=lineno, line=line)
        directives.append(Directive(canonical, aliases, mode, lineno, source))
    return directives


def _read_lines(resource):
    'returns the lines of a resource together with its name'

    if isinstance(resource, (str, os.PathLike)):
        with open(resource, encoding='utf-8') as f:
            return f.read().splitlines(), os.fspath(resource)
    if isinstance(resource, collections.abc.Iterable):
        return list(resource), getattr(resource, 'name', '<string>')
    raise TypeError('expected a path or an iterable of lines, got {}'.format(type(resource).__name__))


class AliasTable:
    '''Mapping of canonical unit symbol to its aliases.

    Tables are mutable through :meth:`read` and :func:`merge_into` only, which
    hold a lock so that a table can be shared between threads. Readers get
    immutable snapshots via :meth:`all_entries`.

    Args
    ----
    entries : mapping or iterable of pairs
        Initial canonical symbol, aliases pairs.
    '''

    def __init__(self, entries=()):
        self._lock = threading.RLock()
        self._entries = {}
        if isinstance(entries, collections.abc.Mapping):
            entries = entries.items()
        for canonical, aliases in entries:
            if isinstance(aliases, str):
                aliases = aliases,
            self._entries.setdefault(canonical, []).extend(aliases)

    @classmethod
    def load(cls, resource, *, verbose: int = 0):
        '''Create a table from an alias resource, either a path or an iterable
        of lines.'''

        return cls().read(resource, verbose=verbose)

    def read(self, resource, *, verbose: int = 0):
        '''Merge an alias resource into this table. Returns the table.'''

        lines, source = _read_lines(resource)
        merge_into(self, parse_config(lines, source), verbose=verbose)
        return self

    def aliases_for(self, canonical: str) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._entries.get(canonical, ()))

    def all_entries(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        with self._lock:
            return tuple((canonical, tuple(aliases)) for canonical, aliases in self._entries.items())

    def describe(self):
        'one human readable line per canonical symbol'

        return ['"{}" will be substituted for: "{}"'.format(canonical, '", "'.join(aliases)) for canonical, aliases in self.all_entries()]

    def copy(self):
        return AliasTable(self.all_entries())

    def __contains__(self, canonical):
        with self._lock:
            return canonical in self._entries

    def __iter__(self):
        return iter([canonical for canonical, aliases in self.all_entries()])

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, AliasTable):
            return NotImplemented
        return self.all_entries() == other.all_entries()

    def __repr__(self):
        return 'AliasTable({!r})'.format(dict(self.all_entries()))


def merge_into(existing: AliasTable, incoming, *, verbose: int = 0):
    '''Apply alias directives onto an existing table.

    Args
    ----
    existing : :class:`AliasTable`
        The table to modify in place.
    incoming : iterable of :class:`Directive`, :class:`AliasTable` or mapping
        The entries to merge. Tables and mappings are merged in append mode.
    verbose : :class:`int`
        Set to a negative value to suppress the warning that is logged when a
        ``replace`` directive discards existing aliases.

    Returns
    -------
    :class:`AliasTable`
        The modified ``existing`` table.
    '''

    if isinstance(incoming, AliasTable):
        incoming = incoming.all_entries()
    elif isinstance(incoming, collections.abc.Mapping):
        incoming = incoming.items()
    directives = [item if isinstance(item, Directive) else Directive(item[0], (item[1],) if isinstance(item[1], str) else tuple(item[1])) for item in incoming]
    with existing._lock:
        entries = existing._entries
        for directive in directives:
            if directive.mode == 'replace':
                old = entries.get(directive.canonical)
                if old and verbose >= 0:
                    treelog.warning('Replacing existing aliases for unit "{}" ({}) with those defined on line {} of {} ({})'.format(
                        directive.canonical, ', '.join(old), directive.lineno, directive.source, ', '.join(directive.aliases)))
                entries[directive.canonical] = list(directive.aliases)
            elif directive.canonical not in entries:
                entries[directive.canonical] = list(directive.aliases)
            else:
                entries[directive.canonical].extend(directive.aliases)
    return existing


DEFAULT_RESOURCE = os.path.join(os.path.dirname(__file__), 'standard_unit_aliases.txt')

DEFAULT_ALIASES = AliasTable.load(DEFAULT_RESOURCE)


def list_default_unit_aliases():
    'log the substitutions made by the default alias table'

    for line in DEFAULT_ALIASES.describe():
        treelog.user(line)


# vim:sw=4:sts=4:et
