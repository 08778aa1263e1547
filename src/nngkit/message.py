""" The :class:`Message` owns a single native message: a buffer with
    separate header and body regions. The native message is released
    exactly once, either by :func:`Message.free` or by handing the message
    to a send operation, after which the native library owns it.
"""

import logging

from . import error
from . import native
from .handle import PipeHandle

logger = logging.getLogger(__name__)


def to_bytes(data, operation):

    try:
        return native.to_bytes(data)
    except TypeError:
        raise error.InvalidArgument(operation, 'cannot use ' + type(data).__name__ + ' as message data')


class Message:
    """ A native message buffer. A new, empty message is allocated with an
        optional initial body *size*; messages produced by a receive
        operation are instead built with :func:`adopt`, which takes over an
        existing native message without copying it.

        A :class:`Message` is not safe for concurrent use from multiple
        threads; callers are responsible for any locking.
    """

    def __init__(self, size=0):

        pointer = native.ffi.new('nng_msg **')
        result = native.lib.nng_msg_alloc(pointer, size)
        error.check(result, 'Allocate message')

        self._msg = pointer[0]
        self._freed = False
        self._lent = False


    @classmethod
    def adopt(cls, msg):
        """ Wrap the native message *msg*, taking ownership of it. The caller
            must not free *msg* afterwards.
        """

        instance = cls.__new__(cls)
        instance._msg = msg
        instance._freed = False
        instance._lent = False
        return instance


    def __del__(self):
        self.free()


    def __repr__(self):

        if self._freed:
            return '<Message freed>'

        if self._lent:
            return '<Message in flight>'

        return '<Message header=%d body=%d>' % (self.header_length, self.length)


    def _check_freed(self, operation):
        if self._freed:
            raise error.UseAfterFree(operation, 'message has been freed')

        if self._lent:
            raise error.UseAfterFree(operation, 'message is held by a pending send')


    @property
    def freed(self):
        return self._freed


    def free(self):
        """ Release the native message. Calling this more than once, on a
            message that has been sent, or on one held by a pending
            asynchronous send, does nothing.
        """

        # __del__ may run on a partially constructed instance.

        if getattr(self, '_freed', True) or getattr(self, '_lent', True):
            return

        msg = self._msg
        self._msg = None
        self._freed = True

        native.lib.nng_msg_free(msg)
        logger.debug('freed message %s', msg)


    def _release(self):
        """ Surrender the native message to the native library, which now
            owns it. This :class:`Message` behaves as if freed afterwards.
        """

        msg = self._msg
        self._msg = None
        self._freed = True
        self._lent = False
        return msg


    def _lend(self, operation):
        """ Hand the native message to a pending operation without giving
            up ownership yet. Until :func:`_reclaim` or :func:`_release`,
            every accessor raises :class:`nngkit.error.UseAfterFree` and
            :func:`free` does nothing.
        """

        self._check_freed(operation)
        self._lent = True
        return self._msg


    def _reclaim(self):
        """ Take the native message back from an operation that did not
            consume it.
        """

        self._lent = False


    def pointer(self, operation='Access message'):
        """ Return the native message pointer, for use with native calls.
        """

        self._check_freed(operation)
        return self._msg


    # Body.

    @property
    def body(self):
        self._check_freed('Read message body')
        length = native.lib.nng_msg_len(self._msg)
        return native.read(native.lib.nng_msg_body(self._msg), length)


    @body.setter
    def body(self, data):
        self.clear()
        self.append(data)


    @property
    def length(self):
        self._check_freed('Read message length')
        return native.lib.nng_msg_len(self._msg)


    def append(self, data):
        """ Append *data* to the end of the body.
        """

        self._check_freed('Append to message')
        data = to_bytes(data, 'Append to message')
        result = native.lib.nng_msg_append(self._msg, data, len(data))
        error.check(result, 'Append to message')
        return self


    def insert(self, data):
        """ Insert *data* at the beginning of the body.
        """

        self._check_freed('Insert to message')
        data = to_bytes(data, 'Insert to message')
        result = native.lib.nng_msg_insert(self._msg, data, len(data))
        error.check(result, 'Insert to message')
        return self


    def trim(self, count):
        """ Remove *count* bytes from the beginning of the body.
        """

        self._check_freed('Trim message')
        result = native.lib.nng_msg_trim(self._msg, count)
        error.check(result, 'Trim message')
        return self


    def chop(self, count):
        """ Remove *count* bytes from the end of the body.
        """

        self._check_freed('Chop message')
        result = native.lib.nng_msg_chop(self._msg, count)
        error.check(result, 'Chop message')
        return self


    def clear(self):
        self._check_freed('Clear message')
        native.lib.nng_msg_clear(self._msg)
        return self


    # Header.

    @property
    def header(self):
        self._check_freed('Read message header')
        length = native.lib.nng_msg_header_len(self._msg)
        return native.read(native.lib.nng_msg_header(self._msg), length)


    @header.setter
    def header(self, data):
        self.header_clear()
        self.header_append(data)


    @property
    def header_length(self):
        self._check_freed('Read message header length')
        return native.lib.nng_msg_header_len(self._msg)


    def header_append(self, data):
        self._check_freed('Append to message header')
        data = to_bytes(data, 'Append to message header')
        result = native.lib.nng_msg_header_append(self._msg, data, len(data))
        error.check(result, 'Append to message header')
        return self


    def header_insert(self, data):
        self._check_freed('Insert to message header')
        data = to_bytes(data, 'Insert to message header')
        result = native.lib.nng_msg_header_insert(self._msg, data, len(data))
        error.check(result, 'Insert to message header')
        return self


    def header_trim(self, count):
        self._check_freed('Trim message header')
        result = native.lib.nng_msg_header_trim(self._msg, count)
        error.check(result, 'Trim message header')
        return self


    def header_chop(self, count):
        self._check_freed('Chop message header')
        result = native.lib.nng_msg_header_chop(self._msg, count)
        error.check(result, 'Chop message header')
        return self


    def header_clear(self):
        self._check_freed('Clear message header')
        native.lib.nng_msg_header_clear(self._msg)
        return self


    # Everything else.

    def duplicate(self):
        """ Return a new :class:`Message` with an independent native copy of
            this message's header and body.
        """

        self._check_freed('Duplicate message')

        pointer = native.ffi.new('nng_msg **')
        result = native.lib.nng_msg_dup(pointer, self._msg)
        error.check(result, 'Duplicate message')

        return self.adopt(pointer[0])


    @property
    def pipe(self):
        """ The :class:`nngkit.handle.PipeHandle` of the connection this
            message arrived on; the handle id is 0 for messages that did not
            come from a receive operation.
        """

        self._check_freed('Read message pipe')
        return PipeHandle.from_native(native.lib.nng_msg_get_pipe(self._msg))


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
