""" The :class:`Socket` owns a single native socket handle. Sockets are
    created by :func:`nngkit.protocol.open`, which selects the scalability
    protocol; everything after that is common to all protocols.
"""

import logging

from . import error
from . import native
from . import option
from .handle import DialerHandle, ListenerHandle
from .message import Message
from .native import Flag

logger = logging.getLogger(__name__)


class Socket:
    """ A protocol endpoint. All send and receive calls block the calling
        thread, subject to the *send-timeout* and *recv-timeout* options,
        unless :data:`nngkit.Flag.NONBLOCK` is passed, in which case they
        raise :class:`nngkit.error.WouldBlock` instead of waiting.

        Once :func:`close` is called, every operation other than
        :func:`close` and :attr:`closed` raises
        :class:`nngkit.error.Closed`. Closing a socket while another thread
        is blocked on it causes that call to fail rather than hang.

        A :class:`Socket` is not safe for concurrent use from multiple
        threads without external locking.

        :ivar handle: the :class:`nngkit.handle.SocketHandle` owned by this
                      socket.
        :ivar protocol: the protocol name the socket was opened with.
        :ivar raw: whether the socket was opened in raw mode.
        :ivar listeners: handles of the listeners created by :func:`listen`.
        :ivar dialers: handles of the dialers created by :func:`dial`.
    """

    kind = 'socket'

    def __init__(self, handle, protocol=None, raw=False):

        self.handle = handle
        self.protocol = protocol
        self.raw = raw
        self.listeners = list()
        self.dialers = list()
        self._closed = False


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __del__(self):
        self.close()


    def __repr__(self):

        state = 'closed' if self._closed else 'open'
        return '<Socket %s #%d %s>' % (self.protocol, self.handle.id, state)


    def _check_closed(self, operation):
        if self._closed:
            raise error.Closed(operation, 'socket is closed')


    @property
    def closed(self):
        return self._closed


    def close(self):
        """ Release the native socket. Safe to call more than once; never
            raises.
        """

        # __del__ may run on a partially constructed instance.

        if getattr(self, '_closed', True):
            return

        self._closed = True
        result = native.lib.nng_close(self.handle.struct())

        if result == error.OK:
            logger.debug('closed socket %d', self.handle.id)
        else:
            logger.debug('closing socket %d: %s', self.handle.id, native.strerror(result))


    @property
    def id(self):
        return native.lib.nng_socket_id(self.handle.struct())


    def listen(self, url, flags=0):
        """ Accept connections at *url*, for example ``tcp://0.0.0.0:5555``
            or ``ipc:///tmp/socket``. The url is passed to the native library
            as-is.
        """

        operation = 'Listen on ' + str(url)
        self._check_closed(operation)

        pointer = ListenerHandle.pointer()
        result = native.lib.nng_listen(self.handle.struct(), native.to_char(url), pointer, flags)
        error.check(result, operation)

        self.listeners.append(ListenerHandle.from_native(pointer))
        return self


    def dial(self, url, flags=0):
        """ Connect to *url*. With :data:`nngkit.Flag.NONBLOCK` the call
            returns as soon as the dial is accepted, and the connection is
            established in the background; without it, the first connection
            attempt must succeed. Either way, reconnection after a lost
            connection happens in the background.
        """

        operation = 'Dial to ' + str(url)
        self._check_closed(operation)

        pointer = DialerHandle.pointer()
        result = native.lib.nng_dial(self.handle.struct(), native.to_char(url), pointer, flags)
        error.check(result, operation)

        self.dialers.append(DialerHandle.from_native(pointer))
        return self


    def send(self, data, flags=0):
        """ Send *data*, which may be bytes, any object supporting the
            buffer protocol, or a str (sent UTF-8 encoded).
        """

        self._check_closed('Send data')

        try:
            data = native.to_bytes(data)
        except TypeError:
            raise error.InvalidArgument('Send data', 'cannot send ' + type(data).__name__)

        result = native.lib.nng_send(self.handle.struct(), data, len(data), flags)
        error.check(result, 'Send data')
        return self


    def send_message(self, message, flags=0):
        """ Send the :class:`nngkit.Message` *message*. On success the native
            library owns the message; *message* is marked as freed and may
            not be used again. On failure the caller still owns it.
        """

        self._check_closed('Send message')
        msg = message.pointer('Send message')

        result = native.lib.nng_sendmsg(self.handle.struct(), msg, flags)
        error.check(result, 'Send message')

        message._release()
        return self


    def recv(self, flags=Flag.ALLOC):
        """ Receive and return the next message body as bytes.
        """

        self._check_closed('Receive data')

        ffi = native.ffi
        buffer = ffi.new('char **')
        size = ffi.new('size_t *')

        result = native.lib.nng_recv(self.handle.struct(), buffer, size, flags | Flag.ALLOC)
        error.check(result, 'Receive data')

        try:
            return native.read(buffer[0], size[0])
        finally:
            native.lib.nng_free(buffer[0], size[0])


    def recv_message(self, flags=0):
        """ Receive the next message as a :class:`nngkit.Message`, owned by
            the caller.
        """

        self._check_closed('Receive message')

        pointer = native.ffi.new('nng_msg **')
        result = native.lib.nng_recvmsg(self.handle.struct(), pointer, flags)
        error.check(result, 'Receive message')

        return Message.adopt(pointer[0])


    def set_option(self, name, value, type=None):
        """ Set the socket option *name* to *value*. See
            :func:`nngkit.option.set` for how the native type is chosen.
        """

        self._check_closed('Set option ' + option.label(name))
        option.set('socket', self.handle, name, value, type)
        return self


    def get_option(self, name, type='int'):
        """ Return the value of the socket option *name*, read as *type*:
            one of ``bool``, ``int``, ``uint64``, ``size``, ``ms``,
            ``string`` or ``addr``.
        """

        self._check_closed('Get option ' + option.label(name))
        return option.get('socket', self.handle, name, type)


    def set_option_ms(self, name, ms):
        return self.set_option(name, ms, option.OptionType.MS)


    @property
    def send_timeout(self):
        return self.get_option('send-timeout', option.OptionType.MS)


    @send_timeout.setter
    def send_timeout(self, ms):
        self.set_option_ms('send-timeout', ms)


    @property
    def recv_timeout(self):
        return self.get_option('recv-timeout', option.OptionType.MS)


    @recv_timeout.setter
    def recv_timeout(self, ms):
        self.set_option_ms('recv-timeout', ms)


    @property
    def name(self):
        return self.get_option('socket-name', option.OptionType.STRING)


    @name.setter
    def name(self, name):
        self.set_option('socket-name', name, option.OptionType.STRING)


# end of class Socket


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
