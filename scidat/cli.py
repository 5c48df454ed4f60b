"""
The cli (command line interface) module provides the `cli.run` function that
sets up an output environment and executes a python function with arguments
specified on the command line, and `cli.choose` that does the same for one of
several functions, such as the commands of ``scidat-units``.
"""

import sys
import treelog
from . import _util as util, warnings


def run(f, *, argv=None):
    '''Command line interface for a single function.

    Besides the arguments of ``f``, the command line accepts ``richoutput``
    and ``verbose`` for the output log and ``gracefulexit`` to report errors
    through the log rather than with a traceback.'''

    decorators = (
        util.in_context(util.set_stdoutlog),
        util.in_context(util.log_traceback),
        warnings.via(treelog.warning),
        util.log_arguments,
    )

    for decorator in reversed(decorators):
        f = decorator(f)

    return util.cli(f, argv=argv)


def choose(*functions, argv=None):
    '''Command line interface for multiple functions, selected by name.'''

    progname, *args = argv or sys.argv
    fmap = {f.__name__: f for f in functions}
    if not args or args[0] not in fmap:
        sys.exit(f'USAGE: {progname} {"|".join(fmap)} [...]')
    choice = args.pop(0)
    return run(fmap[choice], argv=(f'{progname} {choice}', *args))


# vim:sw=4:sts=4:et
