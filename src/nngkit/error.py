""" Translation of native result codes into exceptions. Every native call
    made by this package has its result checked immediately by :func:`check`,
    which raises an :class:`Error` (or one of its subclasses) carrying the
    kind of failure, the native code and description, and a description of
    the operation that was attempted.

    Nothing here retries; whether a failure is worth retrying is decided by
    the caller, typically by looking at :attr:`Error.kind`.
"""

import enum
import types

from . import native


class ErrorKind(enum.Enum):
    """ The kinds of failure that can be reported.
    """

    INTERRUPTED = 'interrupted'
    OUT_OF_MEMORY = 'out-of-memory'
    INVALID_ARGUMENT = 'invalid-argument'
    BUSY = 'busy'
    TIMED_OUT = 'timed-out'
    CONNECTION_REFUSED = 'connection-refused'
    CLOSED = 'closed'
    WOULD_BLOCK = 'would-block'
    NOT_SUPPORTED = 'not-supported'
    ADDRESS_IN_USE = 'address-in-use'
    BAD_STATE = 'bad-state'
    NO_SUCH_ENTRY = 'no-such-entry'
    PROTOCOL_ERROR = 'protocol-error'
    UNREACHABLE = 'unreachable'
    ADDRESS_INVALID = 'address-invalid'
    PERMISSION_DENIED = 'permission-denied'
    MESSAGE_TOO_LARGE = 'message-too-large'
    CONNECTION_ABORTED = 'connection-aborted'
    CONNECTION_RESET = 'connection-reset'
    CANCELED = 'canceled'
    OUT_OF_FILES = 'out-of-files'
    OUT_OF_SPACE = 'out-of-space'
    EXISTS = 'exists'
    READ_ONLY = 'read-only'
    WRITE_ONLY = 'write-only'
    CRYPTO_ERROR = 'crypto-error'
    PEER_AUTH_FAILURE = 'peer-auth-failure'
    NO_ARGUMENT = 'no-argument'
    AMBIGUOUS = 'ambiguous'
    BAD_TYPE = 'bad-type'
    CONNECTION_SHUT = 'connection-shut'
    INTERNAL = 'internal'
    UNKNOWN = 'unknown'
    USE_AFTER_FREE = 'use-after-free'


# Native result codes, as defined by nng.h.

OK = 0
EINTR = 1
ENOMEM = 2
EINVAL = 3
EBUSY = 4
ETIMEDOUT = 5
ECONNREFUSED = 6
ECLOSED = 7
EAGAIN = 8
ENOTSUP = 9
EADDRINUSE = 10
ESTATE = 11
ENOENT = 12
EPROTO = 13
EUNREACHABLE = 14
EADDRINVAL = 15
EPERM = 16
EMSGSIZE = 17
ECONNABORTED = 18
ECONNRESET = 19
ECANCELED = 20
ENOFILES = 21
ENOSPC = 22
EEXIST = 23
EREADONLY = 24
EWRITEONLY = 25
ECRYPTO = 26
EPEERAUTH = 27
ENOARG = 28
EAMBIGUOUS = 29
EBADTYPE = 30
ECONNSHUT = 31
EINTERNAL = 1000

# Flag bits the native library sets on codes that wrap an operating system
# or transport specific error number.

ESYSERR = 0x10000000
ETRANERR = 0x20000000


kinds = types.MappingProxyType({
    EINTR: ErrorKind.INTERRUPTED,
    ENOMEM: ErrorKind.OUT_OF_MEMORY,
    EINVAL: ErrorKind.INVALID_ARGUMENT,
    EBUSY: ErrorKind.BUSY,
    ETIMEDOUT: ErrorKind.TIMED_OUT,
    ECONNREFUSED: ErrorKind.CONNECTION_REFUSED,
    ECLOSED: ErrorKind.CLOSED,
    EAGAIN: ErrorKind.WOULD_BLOCK,
    ENOTSUP: ErrorKind.NOT_SUPPORTED,
    EADDRINUSE: ErrorKind.ADDRESS_IN_USE,
    ESTATE: ErrorKind.BAD_STATE,
    ENOENT: ErrorKind.NO_SUCH_ENTRY,
    EPROTO: ErrorKind.PROTOCOL_ERROR,
    EUNREACHABLE: ErrorKind.UNREACHABLE,
    EADDRINVAL: ErrorKind.ADDRESS_INVALID,
    EPERM: ErrorKind.PERMISSION_DENIED,
    EMSGSIZE: ErrorKind.MESSAGE_TOO_LARGE,
    ECONNABORTED: ErrorKind.CONNECTION_ABORTED,
    ECONNRESET: ErrorKind.CONNECTION_RESET,
    ECANCELED: ErrorKind.CANCELED,
    ENOFILES: ErrorKind.OUT_OF_FILES,
    ENOSPC: ErrorKind.OUT_OF_SPACE,
    EEXIST: ErrorKind.EXISTS,
    EREADONLY: ErrorKind.READ_ONLY,
    EWRITEONLY: ErrorKind.WRITE_ONLY,
    ECRYPTO: ErrorKind.CRYPTO_ERROR,
    EPEERAUTH: ErrorKind.PEER_AUTH_FAILURE,
    ENOARG: ErrorKind.NO_ARGUMENT,
    EAMBIGUOUS: ErrorKind.AMBIGUOUS,
    EBADTYPE: ErrorKind.BAD_TYPE,
    ECONNSHUT: ErrorKind.CONNECTION_SHUT,
    EINTERNAL: ErrorKind.INTERNAL,
})


def classify(code):
    """ Return the :class:`ErrorKind` for the native result *code*. Codes
        wrapping a system or transport error number are reported as
        unknown; any other code not in the table is reported as internal.
    """

    try:
        return kinds[code]
    except KeyError:
        pass

    if code & (ESYSERR | ETRANERR):
        return ErrorKind.UNKNOWN

    return ErrorKind.INTERNAL



class Error(Exception):
    """ Base class for all failures raised by this package.

        :ivar kind: the :class:`ErrorKind` of this failure.
        :ivar native_code: the native result code, or None if the failure
                           was detected before any native call was made.
        :ivar native_message: the native description of *native_code*, or
                              a description supplied by the binding.
        :ivar operation: a description of what was being attempted.
    """

    kind = ErrorKind.UNKNOWN

    def __init__(self, operation, native_message, native_code=None, kind=None):

        if kind is not None:
            self.kind = kind

        self.operation = operation
        self.native_code = native_code
        self.native_message = native_message

        Exception.__init__(self, str(self))


    def __str__(self):

        if self.native_code is None:
            return '%s failed: %s' % (self.operation, self.native_message)

        return '%s failed: %s (code: %d)' % (self.operation, self.native_message, self.native_code)


    def __reduce__(self):
        arguments = (self.operation, self.native_message, self.native_code, self.kind)
        return (self.__class__, arguments)



class InvalidArgument(Error, ValueError):
    """ An argument was rejected, either by the binding before any native
        call, or by the native library. Also raised for option names,
        types and values the native library does not accept.
    """
    kind = ErrorKind.INVALID_ARGUMENT


class Closed(Error):
    """ The socket, context, dialer or listener has been closed.
    """
    kind = ErrorKind.CLOSED


class UseAfterFree(Error):
    """ A message or asynchronous I/O handle was used after being freed,
        or after its ownership passed to the native library.
    """
    kind = ErrorKind.USE_AFTER_FREE


class WouldBlock(Error):
    kind = ErrorKind.WOULD_BLOCK


class Timeout(Error):
    kind = ErrorKind.TIMED_OUT


class Canceled(Error):
    kind = ErrorKind.CANCELED


class BadState(Error):
    """ The operation is not valid in the current protocol state; for
        example, a reply on a rep socket with no request outstanding.
    """
    kind = ErrorKind.BAD_STATE


class ConnectionFailure(Error):
    """ Refused, aborted, reset or shut down connections.
    """
    kind = ErrorKind.CONNECTION_REFUSED


class AddressError(Error):
    """ The address is in use or invalid.
    """
    kind = ErrorKind.ADDRESS_IN_USE


class NotSupported(Error):
    kind = ErrorKind.NOT_SUPPORTED


class Busy(Error):
    kind = ErrorKind.BUSY


class NoSuchEntry(Error):
    kind = ErrorKind.NO_SUCH_ENTRY


class ProtocolError(Error):
    kind = ErrorKind.PROTOCOL_ERROR


class Unreachable(Error):
    kind = ErrorKind.UNREACHABLE


class PermissionDenied(Error):
    """ Permission was denied, or an option is read-only or write-only.
    """
    kind = ErrorKind.PERMISSION_DENIED


class MessageTooLarge(Error):
    kind = ErrorKind.MESSAGE_TOO_LARGE


class ResourceExhausted(Error):
    """ Out of memory, file descriptors or storage space.
    """
    kind = ErrorKind.OUT_OF_MEMORY


class Exists(Error):
    kind = ErrorKind.EXISTS


class SecurityError(Error):
    """ Cryptographic or peer authentication failures.
    """
    kind = ErrorKind.CRYPTO_ERROR


classes = types.MappingProxyType({
    ErrorKind.INVALID_ARGUMENT: InvalidArgument,
    ErrorKind.NO_ARGUMENT: InvalidArgument,
    ErrorKind.AMBIGUOUS: InvalidArgument,
    ErrorKind.BAD_TYPE: InvalidArgument,
    ErrorKind.CLOSED: Closed,
    ErrorKind.USE_AFTER_FREE: UseAfterFree,
    ErrorKind.WOULD_BLOCK: WouldBlock,
    ErrorKind.TIMED_OUT: Timeout,
    ErrorKind.CANCELED: Canceled,
    ErrorKind.BAD_STATE: BadState,
    ErrorKind.CONNECTION_REFUSED: ConnectionFailure,
    ErrorKind.CONNECTION_ABORTED: ConnectionFailure,
    ErrorKind.CONNECTION_RESET: ConnectionFailure,
    ErrorKind.CONNECTION_SHUT: ConnectionFailure,
    ErrorKind.ADDRESS_IN_USE: AddressError,
    ErrorKind.ADDRESS_INVALID: AddressError,
    ErrorKind.NOT_SUPPORTED: NotSupported,
    ErrorKind.BUSY: Busy,
    ErrorKind.NO_SUCH_ENTRY: NoSuchEntry,
    ErrorKind.PROTOCOL_ERROR: ProtocolError,
    ErrorKind.UNREACHABLE: Unreachable,
    ErrorKind.PERMISSION_DENIED: PermissionDenied,
    ErrorKind.READ_ONLY: PermissionDenied,
    ErrorKind.WRITE_ONLY: PermissionDenied,
    ErrorKind.MESSAGE_TOO_LARGE: MessageTooLarge,
    ErrorKind.OUT_OF_MEMORY: ResourceExhausted,
    ErrorKind.OUT_OF_FILES: ResourceExhausted,
    ErrorKind.OUT_OF_SPACE: ResourceExhausted,
    ErrorKind.EXISTS: Exists,
    ErrorKind.CRYPTO_ERROR: SecurityError,
    ErrorKind.PEER_AUTH_FAILURE: SecurityError,
})


def translate(code, operation):
    """ Build, but do not raise, the exception corresponding to the native
        result *code* for the described *operation*.
    """

    kind = classify(code)
    exception = classes.get(kind, Error)
    return exception(operation, native.strerror(code), code, kind)


def check(code, operation):
    """ Raise the appropriate :class:`Error` if *code* is a failure.
    """

    if code != OK:
        raise translate(code, operation)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
