""" Typed marshaling of option values. The native library has one getter
    and one setter per value type for each kind of handle, named
    ``nng_<kind>_<get|set>_<suffix>``; this module picks the right one for
    a requested (or inferred) :class:`OptionType` and converts values to and
    from their native representation.

    Whether the native library agrees with the chosen type for a given
    option name is only discovered at the native call, and surfaces as an
    :class:`nngkit.error.Error` like any other native failure.
"""

import datetime
import enum
import types

from . import error
from . import native
from .handle import Address


class OptionType(enum.Enum):

    BOOL = 'bool'
    INT = 'int'
    UINT64 = 'uint64'
    SIZE = 'size'
    MS = 'ms'
    STRING = 'string'
    ADDR = 'addr'


aliases = types.MappingProxyType({
    'bool': OptionType.BOOL,
    'boolean': OptionType.BOOL,
    'int': OptionType.INT,
    'signed-int': OptionType.INT,
    'int32': OptionType.INT,
    'uint64': OptionType.UINT64,
    'unsigned-64': OptionType.UINT64,
    'size': OptionType.SIZE,
    'ms': OptionType.MS,
    'duration': OptionType.MS,
    'duration-ms': OptionType.MS,
    'string': OptionType.STRING,
    'str': OptionType.STRING,
    'addr': OptionType.ADDR,
    'address': OptionType.ADDR,
})


# Native pointer types used to receive a value from a getter.

ctypes = types.MappingProxyType({
    OptionType.BOOL: 'bool *',
    OptionType.INT: 'int *',
    OptionType.UINT64: 'uint64_t *',
    OptionType.SIZE: 'size_t *',
    OptionType.MS: 'nng_duration *',
    OptionType.STRING: 'char **',
    OptionType.ADDR: 'nng_sockaddr *',
})


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1
UINT64_MAX = 2 ** 64 - 1

# Kinds of handle that have option accessors. Pipes are read-only.

kinds = frozenset(('socket', 'dialer', 'listener', 'ctx', 'pipe'))


def resolve(type):
    """ Return the :class:`OptionType` named by *type*, which may be an
        :class:`OptionType` or one of the strings in :data:`aliases`.
    """

    if isinstance(type, OptionType):
        return type

    try:
        return aliases[type.lower()]
    except (AttributeError, KeyError):
        raise error.InvalidArgument('Resolve option type', 'unknown option type: %r' % (type,))


def infer(value):
    """ Choose the :class:`OptionType` for a host *value* when the caller
        did not name one:

        ==========================  ========
        host value                  type
        ==========================  ========
        bool                        bool
        int, signed 32-bit range    int
        int, above that, < 2**64    uint64
        datetime.timedelta          ms
        str, bytes                  string
        ==========================  ========

        Anything else is rejected with :class:`nngkit.error.InvalidArgument`.
    """

    # bool is a subclass of int, it must be checked first.

    if isinstance(value, bool):
        return OptionType.BOOL

    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            return OptionType.INT
        if INT_MAX < value <= UINT64_MAX:
            return OptionType.UINT64
        raise error.InvalidArgument('Infer option type', 'integer out of range: %d' % (value))

    if isinstance(value, datetime.timedelta):
        return OptionType.MS

    if isinstance(value, (str, bytes)):
        return OptionType.STRING

    raise error.InvalidArgument('Infer option type', 'unsupported option value type: ' + type(value).__name__)


def encode(value, type):
    """ Convert the host *value* to the argument passed to the native
        setter for *type*, validating its range.
    """

    def rejected():
        message = 'cannot encode %r as %s' % (value, type.value)
        return error.InvalidArgument('Encode option', message)

    if type == OptionType.BOOL:
        if isinstance(value, bool):
            return value
        raise rejected()

    if type == OptionType.STRING:
        if isinstance(value, (str, bytes)):
            return native.to_char(value)
        raise rejected()

    if type == OptionType.ADDR:
        raise error.InvalidArgument('Encode option', 'address options are read-only')

    if type == OptionType.MS and isinstance(value, datetime.timedelta):
        value = round(value.total_seconds() * 1000)

    if isinstance(value, bool) or not isinstance(value, int):
        raise rejected()

    if type == OptionType.INT or type == OptionType.MS:
        low = INT_MIN
        high = INT_MAX
    elif type == OptionType.SIZE:
        low = 0
        high = 2 ** (8 * native.ffi.sizeof('size_t')) - 1
    else:
        low = 0
        high = UINT64_MAX

    if low <= value <= high:
        return value

    raise rejected()


def decode(pointer, type):
    """ Convert the value a native getter stored at *pointer*. String values
        are copied and the native copy is released immediately.
    """

    if type == OptionType.STRING:
        string = pointer[0]
        try:
            return native.ffi.string(string).decode(errors='replace')
        finally:
            native.lib.nng_strfree(string)

    if type == OptionType.ADDR:
        return Address.from_native(pointer)

    if type == OptionType.BOOL:
        return bool(pointer[0])

    return int(pointer[0])


def check_name(name):

    if not isinstance(name, (str, bytes)):
        raise error.InvalidArgument('Check option name', 'option names are strings, not ' + type(name).__name__)


def label(name):
    """ Render the option *name* for error messages.
    """

    if isinstance(name, bytes):
        return name.decode(errors='replace')

    return str(name)


def accessor(kind, direction, type):

    if kind not in kinds:
        raise error.InvalidArgument('Find option accessor', 'no options for ' + repr(kind))

    if kind == 'pipe' and direction == 'set':
        raise error.InvalidArgument('Find option accessor', 'pipe options are read-only')

    name = 'nng_%s_%s_%s' % (kind, direction, type.value)

    try:
        return getattr(native.lib, name)
    except AttributeError:
        raise error.NotSupported('Find option accessor', 'native library lacks ' + name)


def get(kind, handle, name, type='int'):
    """ Retrieve the option *name* from *handle* (a
        :class:`nngkit.handle.Handle` of the given *kind*), interpreting
        it as *type*.
    """

    check_name(name)
    type = resolve(type)
    getter = accessor(kind, 'get', type)
    pointer = native.ffi.new(ctypes[type])

    result = getter(handle.struct(), native.to_char(name), pointer)
    error.check(result, 'Get option ' + label(name))

    return decode(pointer, type)


def set(kind, handle, name, value, type=None):
    """ Set the option *name* on *handle* to *value*. The native setter is
        chosen by *type* if given, otherwise by :func:`infer`. All type and
        range checks happen before any native call.
    """

    check_name(name)

    if type is None:
        type = infer(value)
    else:
        type = resolve(type)

    argument = encode(value, type)
    setter = accessor(kind, 'set', type)

    result = setter(handle.struct(), native.to_char(name), argument)
    error.check(result, 'Set option ' + label(name))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
