""" Access to the native NNG library. The compiled library is provided by
    the cffi extension shipped with the pynng distribution; only its raw
    ``lib`` and ``ffi`` objects are used here, everything above them is
    implemented by this package.

    Other modules always reach the library as ``native.lib`` rather than
    importing ``lib`` directly, so that there is exactly one place where
    the native entry points are looked up.
"""

import enum

from pynng._nng import ffi, lib


class Flag(enum.IntFlag):
    """ Flags accepted by the blocking send and receive calls.
    """

    NONE = 0
    ALLOC = 1
    NONBLOCK = 2


# Special duration values, in milliseconds.

INFINITE = -1
DEFAULT = -2


def version():
    """ Return the version string reported by the native library.
    """

    return ffi.string(lib.nng_version()).decode()


def strerror(code):
    """ Return the human-readable description of a native result code.
    """

    return ffi.string(lib.nng_strerror(code)).decode(errors='replace')


def to_char(value):
    """ Convert a str or bytes *value* into a newly allocated ``char[]``
        suitable for passing as a ``const char *`` argument.
    """

    if isinstance(value, ffi.CData):
        return value

    if isinstance(value, str):
        value = value.encode()

    return ffi.new('char[]', value)


def to_bytes(value):
    """ Interpret *value* as a byte sequence for transmission. Strings are
        encoded as UTF-8; anything else must support the buffer protocol.
    """

    if isinstance(value, str):
        return value.encode()

    if isinstance(value, bytes):
        return value

    return memoryview(value).tobytes()


def read(pointer, length):
    """ Copy *length* bytes starting at the native *pointer* into a new
        bytes object.
    """

    if length == 0:
        return b''

    return ffi.unpack(ffi.cast('char *', pointer), length)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
