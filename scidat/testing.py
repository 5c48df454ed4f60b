'''
Extensions of the :mod:`unittest` module.
'''

import unittest
import treelog
import importlib
import warnings as _builtin_warnings
import logging
import numpy
from scidat import warnings


class PrintHandler(logging.Handler):
    'print log records of the scidat logger to the current sys.stdout'

    def emit(self, record):
        print(record.msg)


def _not_has_module(module):
    try:
        importlib.import_module(module)
    except ImportError:
        return True
    else:
        return False


def requires(*modules):
    'skip the decorated test or test case if any of ``modules`` is missing'

    missing = tuple(filter(_not_has_module, modules))
    if missing:
        return unittest.skip('missing module{}: {}'.format('s' if len(missing) > 1 else '', ','.join(missing)))
    else:
        return lambda func: func


class TestCase(unittest.TestCase):
    '''A class whose instances are single test cases.

    All :class:`scidat.warnings.ScidatWarning` are turned into an exception by
    default. Use

    ::

      def test(self):
        with self.assertWarns(...):
          ...

    to assert expected warnings. Log messages of level INFO and up are printed
    through the ``scidat`` logger, so that :meth:`assertLogs` can be used to
    test for them.
    '''

    maxDiff = None

    def enter_context(self, ctx):
        retval = ctx.__enter__()
        self.addCleanup(ctx.__exit__, None, None, None)
        return retval

    def setUp(self):
        super().setUp()
        print_handler = PrintHandler()
        scidat_logger = logging.getLogger('scidat')
        scidat_logger.setLevel('INFO')
        scidat_logger.addHandler(print_handler)
        self.addCleanup(scidat_logger.removeHandler, print_handler)
        self.enter_context(treelog.set(treelog.LoggingLog('scidat')))
        self.enter_context(_builtin_warnings.catch_warnings())
        _builtin_warnings.simplefilter('error', warnings.ScidatWarning)

    def assertAllEqual(self, actual, desired):
        actual = numpy.asarray(actual)
        desired = numpy.asarray(desired)
        self.assertEqual(actual.shape, desired.shape)
        for args in numpy.broadcast(actual, desired):
            self.assertEqual(*args)

    def assertAllAlmostEqual(self, actual, desired, **kwargs):
        actual = numpy.asarray(actual)
        desired = numpy.asarray(desired)
        self.assertEqual(actual.shape, desired.shape)
        for args in numpy.broadcast(actual, desired):
            self.assertAlmostEqual(*args, **kwargs)

    def assertUnitEqual(self, actual, desired):
        '''Assert that ``actual`` is the unit ``desired``, given as a unit or as a
        pint unit expression such as ``'meter / second'``.'''

        from scidat.quantities import registry
        if isinstance(desired, str):
            desired = registry.Unit(desired)
        self.assertEqual(actual, desired)

# vim:sw=4:sts=4:et
