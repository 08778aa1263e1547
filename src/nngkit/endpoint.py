""" Explicit dialers and listeners. :func:`nngkit.Socket.dial` and
    :func:`nngkit.Socket.listen` create and start an endpoint in one step;
    the classes here split creation from starting, so that endpoint options
    (reconnect times, TLS settings, and so on) can be set in between.

    Endpoints belong to their socket: closing the socket closes them too.
"""

import logging

from . import error
from . import native
from . import option
from .handle import DialerHandle, ListenerHandle

logger = logging.getLogger(__name__)


class Endpoint:
    """ Common behavior for :class:`Dialer` and :class:`Listener`. The
        endpoint is created, but not started, when instantiated.
    """

    kind = None
    handle_type = None

    def __init__(self, socket, url):

        operation = 'Create %s for %s' % (self.kind, url)
        socket._check_closed(operation)

        pointer = self.handle_type.pointer()
        create = getattr(native.lib, 'nng_%s_create' % (self.kind))
        result = create(pointer, socket.handle.struct(), native.to_char(url))
        error.check(result, operation)

        self.socket = socket
        self.url = url
        self.handle = self.handle_type.from_native(pointer)
        self._closed = False


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __repr__(self):
        return '<%s #%d %s>' % (self.__class__.__name__, self.handle.id, self.url)


    def _check_closed(self, operation):

        if self._closed:
            raise error.Closed(operation, self.kind + ' is closed')

        if self.socket.closed:
            raise error.Closed(operation, 'socket is closed')


    @property
    def closed(self):
        return self._closed or self.socket.closed


    @property
    def id(self):
        function = getattr(native.lib, 'nng_%s_id' % (self.kind))
        return function(self.handle.struct())


    def start(self, flags=0):
        """ Start the endpoint. A dialer started with
            :data:`nngkit.Flag.NONBLOCK` connects in the background.
        """

        operation = 'Start %s for %s' % (self.kind, self.url)
        self._check_closed(operation)

        function = getattr(native.lib, 'nng_%s_start' % (self.kind))
        result = function(self.handle.struct(), flags)
        error.check(result, operation)
        return self


    def close(self):
        """ Close the endpoint. Safe to call more than once; never raises.
        """

        if self._closed:
            return

        self._closed = True

        function = getattr(native.lib, 'nng_%s_close' % (self.kind))
        result = function(self.handle.struct())

        if result != error.OK:
            logger.debug('closing %s %d: %s', self.kind, self.handle.id, native.strerror(result))


    def set_option(self, name, value, type=None):
        self._check_closed('Set option ' + option.label(name))
        option.set(self.kind, self.handle, name, value, type)
        return self


    def get_option(self, name, type='int'):
        self._check_closed('Get option ' + option.label(name))
        return option.get(self.kind, self.handle, name, type)


# end of class Endpoint



class Dialer(Endpoint):
    kind = 'dialer'
    handle_type = DialerHandle


class Listener(Endpoint):

    kind = 'listener'
    handle_type = ListenerHandle

    @property
    def address(self):
        """ The :class:`nngkit.handle.Address` the listener is bound to. For
            TCP listeners started with port 0 this reveals the chosen port.
        """

        return self.get_option('local-address', option.OptionType.ADDR)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
