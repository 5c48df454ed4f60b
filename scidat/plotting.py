'''
Convenience wrappers for plotting quantities with matplotlib.

The values are plotted in their native units unless a unit is specified, in
which case they are converted first. The unit ends up in parentheses in the
axis label:

>>> from scidat.quantities import registry
>>> x = registry.Quantity(numpy.arange(1, 11), 'm')
>>> y = registry.Quantity(numpy.arange(1000, 11000, 1000), 'm')
>>> with mplfigure('altitude.png') as fig:
...     ax = plot_as(x, y, y_unit='km', x_label='Distance', y_label='Altitude', ax=fig.add_subplot(111))
>>> ax.get_ylabel()
'Altitude (km)'

The units of the plotted values are not stored. When adding series with
:func:`plot_as_add` it is the responsibility of the caller to convert them to
the same units.

.. requires:: matplotlib
'''

from . import arrays, quantities, units as _units
from .exceptions import InputException
import contextlib
import numpy
import os
import treelog as log


@contextlib.contextmanager
def mplfigure(name, /, **kwargs):
    '''Matplotlib figure context, convenience function.

    Returns a :class:`matplotlib.figure.Figure` object suitable for
    object-oriented plotting. Upon exit the result is written to the currently
    active logger.

    Args
    ----
    name : :class:`str`
        The filename of the resulting figure.
    **kwargs :
        Keyword arguments are passed on unchanged to the constructor of the
        :class:`matplotlib.figure.Figure` object.
    '''

    import matplotlib.figure
    import matplotlib.backends.backend_agg
    fig = matplotlib.figure.Figure(**kwargs)
    with log.userfile(name, 'wb') as f:
        yield fig
        if f:
            matplotlib.backends.backend_agg.FigureCanvas(fig)  # sets reference via fig.set_canvas
            try:
                fig.savefig(f, format=os.path.splitext(name)[1][1:])
            finally:
                fig.set_canvas(None)  # break circular reference


def _has_units(values):
    if quantities.is_quantity(values):
        return True
    if isinstance(values, numpy.ndarray):
        return values.dtype == object and values.size > 0 and quantities.is_quantity(values.flat[0])
    if isinstance(values, (list, tuple)):
        return len(values) > 0 and _has_units(values[0])
    return False


def _shape(values):
    if quantities.is_quantity(values):
        return numpy.shape(values.magnitude)
    if isinstance(values, (list, tuple)):
        return (len(values), *(_shape(values[0]) if values else ()))
    return numpy.shape(values)


def _convert(values, unit):
    'magnitudes of values, converted to unit if given, and the unit'

    if isinstance(unit, str):
        unit = _units.parse_unit_string(unit)
    if _has_units(values):
        if unit is None:
            unit = quantities.unit_of(values)
        return _units.strip_units(values, unit), unit
    if unit is not None:
        raise InputException('cannot convert values without units to {}'.format(unit))
    return numpy.asarray(values), None


def _label(label, unit):
    if unit is None:
        return label
    return '{} ({:~P})'.format(label, unit).strip()


def _new_axes():
    import matplotlib.figure
    return matplotlib.figure.Figure().add_subplot(111)


def plot_as(x, y=None, *, unit=None, x_unit=None, y_unit=None, x_label='', y_label='', ax=None, **kwargs):
    '''Plot quantities ``y`` against ``x``, or ``y`` against its index.

    Args
    ----
    x, y : quantities or arrays of quantities
        The data. If only one is given it is plotted against a sequence
        ``1, 2, ...`` of the same shape.
    unit : :class:`pint.Unit` or :class:`str`
        Unit to convert both ``x`` and ``y`` to before plotting.
    x_unit, y_unit : :class:`pint.Unit` or :class:`str`
        Unit for ``x`` and ``y`` respectively, overriding ``unit``.
    x_label, y_label : :class:`str`
        Axis labels, to which the unit is appended in parentheses.
    ax : :class:`matplotlib.axes.Axes`
        Axes to plot into; defaults to the axes of a new figure.
    **kwargs :
        Passed on unchanged to :meth:`matplotlib.axes.Axes.plot`.

    Returns
    -------
    :class:`matplotlib.axes.Axes`
    '''

    if y is None:
        x, y = arrays.seq_mat(*_shape(x)), x
        x_unit = None
    elif x_unit is None:
        x_unit = unit
    xvalues, xunit = _convert(x, x_unit)
    yvalues, yunit = _convert(y, unit if y_unit is None else y_unit)
    if ax is None:
        ax = _new_axes()
    ax.plot(xvalues, yvalues, **kwargs)
    ax.set_xlabel(_label(x_label, xunit))
    ax.set_ylabel(_label(y_label, yunit))
    return ax


def plot_as_add(ax, x, y, *, unit=None, x_unit=None, y_unit=None, **kwargs):
    '''Add a series to existing axes, converting units like :func:`plot_as`
    but leaving the axis labels untouched.'''

    xvalues, _ = _convert(x, unit if x_unit is None else x_unit)
    yvalues, _ = _convert(y, unit if y_unit is None else y_unit)
    ax.plot(xvalues, yvalues, **kwargs)
    return ax


# vim:sw=4:sts=4:et
