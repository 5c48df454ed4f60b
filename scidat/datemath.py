import datetime
import numpy

_epoch = datetime.datetime(1970, 1, 1)


def unix2datetime(unix_timestamp):
    '''Convert a Unix timestamp (seconds since midnight, Jan 1 1970, UTC) into
    a naive :class:`datetime.datetime`.

    Arrays of timestamps are converted into a ``datetime64[ms]`` array.'''

    if numpy.ndim(unix_timestamp) == 0:
        return _epoch + datetime.timedelta(seconds=float(unix_timestamp))
    milliseconds = numpy.round(numpy.asarray(unix_timestamp, dtype=float) * 1000)
    return numpy.datetime64(_epoch, 'ms') + milliseconds.astype('timedelta64[ms]')


# vim:sw=4:sts=4:et
