""" Process-wide defaults, taken from the environment. These are read each
    time a socket is opened; changes to the environment take effect for
    sockets opened afterwards.

    ``NNGKIT_SEND_TIMEOUT``
        Default *send-timeout* for new sockets, in milliseconds.

    ``NNGKIT_RECV_TIMEOUT``
        Default *recv-timeout* for new sockets, in milliseconds.

    A value of -1 means wait forever, which is also the native default.
"""

import os


# Environment variable -> socket option it supplies.

variables = {
    'NNGKIT_SEND_TIMEOUT': 'send-timeout',
    'NNGKIT_RECV_TIMEOUT': 'recv-timeout',
}


def defaults():
    """ Return a dictionary mapping socket option names to the default
        values found in the environment. Variables that are unset or empty
        are omitted. A value that is not an integer raises ValueError.
    """

    found = dict()

    for variable, name in variables.items():
        try:
            value = os.environ[variable]
        except KeyError:
            continue

        value = value.strip()
        if value == '':
            continue

        try:
            value = int(value)
        except ValueError:
            raise ValueError('%s must be an integer number of milliseconds, not %r' % (variable, value))

        if value < -1:
            raise ValueError('%s must be -1 or greater, not %d' % (variable, value))

        found[name] = value

    return found


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
