'''
Warnings issued by scidat, and routing of Python warnings to the log of the
``scidat-units`` command line.
'''

import warnings, contextlib


class ScidatWarning(Warning):
    'Base class for warnings from scidat, such as normalizing constant data.'


def warn(message, category=ScidatWarning, stacklevel=1):
    warnings.warn(message, category, stacklevel=stacklevel+1)


@contextlib.contextmanager
def via(print):
    '''context manager to show warnings through ``print`` instead of stderr'''

    oldshowwarning = warnings.showwarning
    warnings.showwarning = lambda message, category, filename, lineno, *args: print(f'{category.__name__}: {message}\n  In {filename}:{lineno}')
    try:
        yield
    finally:
        warnings.showwarning = oldshowwarning


# vim:sw=4:sts=4:et
