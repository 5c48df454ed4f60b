'Unit parsing and numeric utilities for scientific data files'

__version__ = version = '1.0'

__all__ = [
    'aliases',
    'arrays',
    'cli',
    'datemath',
    'exceptions',
    'expression',
    'plotting',
    'quantities',
    'stats',
    'testing',
    'units',
    'warnings',
]

# vim:sw=4:sts=4:et
