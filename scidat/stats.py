"""
The stats module provides NaN aware statistics and normalization of arrays.
"""

from . import arrays, quantities, warnings
from .exceptions import InputException
import itertools
import numpy


def nanmean(x, axis=None, count_nans=False):
    '''Average an array excluding NaNs.

    By default the average is the sum of all non-NaN values divided by the
    number of non-NaN values. With ``count_nans=True`` the sum is divided by
    the total number of elements instead, NaNs included.

    If ``axis`` is given, ``x`` is averaged along that axis only. Like
    ``numpy.sum(..., keepdims=True)`` the axis is retained in the output with
    length one.

    Quantities are averaged by magnitude; the result carries the same units.

    >>> nanmean([1., numpy.nan, 3.])
    2.0
    >>> nanmean([1., numpy.nan, 3.], count_nans=True)
    1.3333333333333333
    '''

    if not isinstance(count_nans, bool):
        raise InputException('count_nans must be a bool, got {!r}'.format(count_nans))
    if quantities.is_quantity(x):
        return nanmean(x.magnitude, axis=axis, count_nans=count_nans) * x.units
    x = numpy.asarray(x, dtype=float)
    notnans = ~numpy.isnan(x)
    values = numpy.where(notnans, x, 0.)
    if axis is None:
        n = x.size if count_nans else notnans.sum()
        return float(values.sum() / n)
    axis = arrays.normdim(x.ndim, axis, 'axis')
    n = x.shape[axis] if count_nans else notnans.sum(axis=axis, keepdims=True)
    return values.sum(axis=axis, keepdims=True) / n


def combinations(*options):
    '''Return all combinations of the given one dimensional option lists.

    The first option varies fastest:

    >>> combinations([1., 2.], ['a', 'b'])
    [[1.0, 'a'], [2.0, 'a'], [1.0, 'b'], [2.0, 'b']]
    '''

    return [list(reversed(combo)) for combo in itertools.product(*reversed(options))]


def normalize_to(data, range=(0., 1.)):
    '''Return a copy of ``data`` normalized to the specified range.

    Integer input is converted to floats. The original ``data`` is not
    affected. ``range`` may be any object where ``range[0]`` is the bottom
    and ``range[1]`` the top of the range.

    >>> normalize_to([1, 2, 3, 4, 5])
    array([0.  , 0.25, 0.5 , 0.75, 1.  ])
    >>> normalize_to([1, 2, 3, 4, 5], (50, 100))
    array([ 50. ,  62.5,  75. ,  87.5, 100. ])
    '''

    data = numpy.array(data, dtype=float)
    normalize_to_in_place(data, range)
    return data


def normalize_to_in_place(data, range=(0., 1.)):
    '''In-place version of :func:`normalize_to`.

    Overwrites ``data``, which must therefore be a :class:`numpy.ndarray` of
    floats.'''

    if not isinstance(data, numpy.ndarray) or not numpy.issubdtype(data.dtype, numpy.floating):
        raise InputException('normalize_to_in_place requires an array of floats')
    if not data.size:
        return
    lower, upper = data.min(), data.max()
    if lower == upper:
        warnings.warn('cannot normalize constant data')
    with numpy.errstate(invalid='ignore', divide='ignore'):
        data -= lower
        data /= upper - lower
    data *= range[1] - range[0]
    data += range[0]


# vim:sw=4:sts=4:et
