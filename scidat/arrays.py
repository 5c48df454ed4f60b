"""
The arrays module provides dimension manipulations lacking from numpy.
"""

from .exceptions import InputException
import numbers
import numpy


def normdim(ndim: int, n: int, name: str = 'dim') -> int:
    'check bounds and make positive'

    if not isinstance(n, numbers.Integral):
        raise InputException('{} must be an integer, got {!r}'.format(name, n))
    if n < 0:
        n += ndim
    if n < 0 or n >= ndim:
        raise InputException('{} must be between 0 and ndim-1 ({}), got {}'.format(name, ndim-1, n))
    return n


def _compute_perm_vec(ndim, dim, pos):
    dim = normdim(ndim, dim, 'dim')
    pos = normdim(ndim, pos, 'pos')
    perm = [i for i in range(ndim) if i != dim]
    perm.insert(pos, dim)
    return tuple(perm)


def move_dim(A, dim, pos=0, isview=True):
    '''Permute ``A`` so that axis ``dim`` ends up at position ``pos``.

    >>> A = numpy.zeros((4, 3, 2))
    >>> move_dim(A, 1).shape
    (3, 4, 2)
    >>> move_dim(A, 1, 2).shape
    (4, 2, 3)

    By default the returned array is a view into ``A``, so that changes to
    values in one affect the other. Set ``isview=False`` to return a copy.
    '''

    A = numpy.asarray(A)
    B = A.transpose(_compute_perm_vec(A.ndim, dim, pos))
    return B if isview else B.copy()


def seq_mat(*dims, dtype=float):
    '''Create an array with shape ``dims`` in which every element equals its
    one-based linear (row major) index.

    >>> seq_mat(2, 3)
    array([[1., 2., 3.],
           [4., 5., 6.]])
    '''

    if len(dims) == 1 and isinstance(dims[0], (tuple, list)):
        dims, = dims
    return numpy.arange(1, int(numpy.prod(dims, dtype=int))+1).astype(dtype).reshape(dims)


# vim:sw=4:sts=4:et
