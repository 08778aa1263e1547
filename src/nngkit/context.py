""" Contexts allow several independent conversations over one socket; for
    example, a rep socket can have one context per outstanding request,
    each with its own request/reply state. Context operations are carried
    out with an :class:`nngkit.aio.AIO`, as the native library requires.
"""

import logging

from . import aio
from . import error
from . import native
from . import option
from .handle import ContextHandle
from .message import Message

logger = logging.getLogger(__name__)


class Context:
    """ A context opened on *socket*. Contexts belong to their socket and
        are closed along with it. Send and receive honor the context's own
        *send-timeout* and *recv-timeout* options.
    """

    kind = 'ctx'

    def __init__(self, socket):

        socket._check_closed('Open context')

        pointer = ContextHandle.pointer()
        result = native.lib.nng_ctx_open(pointer, socket.handle.struct())
        error.check(result, 'Open context')

        self.socket = socket
        self.handle = ContextHandle.from_native(pointer)
        self._closed = False

        logger.debug('opened context %d on socket %d', self.handle.id, socket.handle.id)


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __del__(self):
        self.close()


    def _check_closed(self, operation):

        if self._closed:
            raise error.Closed(operation, 'context is closed')

        if self.socket.closed:
            raise error.Closed(operation, 'socket is closed')


    @property
    def closed(self):
        return self._closed or self.socket.closed


    @property
    def id(self):
        return native.lib.nng_ctx_id(self.handle.struct())


    def close(self):
        """ Close the context. Safe to call more than once; never raises.
        """

        if getattr(self, '_closed', True):
            return

        self._closed = True

        # The native context went away with its socket.

        if self.socket.closed:
            return

        result = native.lib.nng_ctx_close(self.handle.struct())

        if result != error.OK:
            logger.debug('closing context %d: %s', self.handle.id, native.strerror(result))


    def send_message(self, message):
        """ Send *message*; on success the native library owns it, as with
            :func:`nngkit.Socket.send_message`.
        """

        self._check_closed('Send message')

        with aio.AIO() as handle:
            handle.begin_send(self, message)
            handle.wait()

        return self


    def send(self, data):
        message = Message()

        try:
            message.append(data)
            self.send_message(message)
        finally:
            message.free()

        return self


    def recv_message(self):
        self._check_closed('Receive message')

        with aio.AIO() as handle:
            handle.begin_recv(self)
            return handle.wait()


    def recv(self):
        message = self.recv_message()

        try:
            return message.body
        finally:
            message.free()


    def set_option(self, name, value, type=None):
        self._check_closed('Set option ' + option.label(name))
        option.set(self.kind, self.handle, name, value, type)
        return self


    def get_option(self, name, type='int'):
        self._check_closed('Get option ' + option.label(name))
        return option.get(self.kind, self.handle, name, type)


# end of class Context


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
