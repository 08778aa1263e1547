""" Asynchronous I/O handles. This is an optional capability next to the
    blocking calls of :class:`nngkit.Socket`: an :class:`AIO` owns one
    native aio object, which is used to begin a send or receive and later
    wait for (or cancel) its completion.

    :func:`submit_send` and :func:`submit_recv` wrap that sequence in an
    :class:`Operation`, which exposes the outcome as a
    :class:`concurrent.futures.Future` and can be canceled.
"""

import atexit
import concurrent.futures
import datetime
import logging
import threading

from . import error
from . import native
from .message import Message

logger = logging.getLogger(__name__)


# (target kind, direction) -> native function that begins the operation.

functions = {
    ('socket', 'send'): 'nng_send_aio',
    ('socket', 'recv'): 'nng_recv_aio',
    ('ctx', 'send'): 'nng_ctx_send',
    ('ctx', 'recv'): 'nng_ctx_recv',
}


class AIO:
    """ A native asynchronous I/O handle. Only one operation may be in
        progress at a time. The *timeout*, in milliseconds, applies to each
        operation begun afterwards; None defers to the socket or context
        timeout options.

        Like a :class:`nngkit.Message`, an :class:`AIO` must be freed exactly
        once, and raises :class:`nngkit.error.UseAfterFree` if used after.
    """

    def __init__(self, timeout=None):

        pointer = native.ffi.new('nng_aio **')
        result = native.lib.nng_aio_alloc(pointer, native.ffi.NULL, native.ffi.NULL)
        error.check(result, 'Allocate aio')

        self._aio = pointer[0]
        self._freed = False
        self._timeout = None
        self._direction = None
        self._message = None

        self.timeout = timeout


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.free()


    def __del__(self):
        self.free()


    def _check_freed(self, operation):
        if self._freed:
            raise error.UseAfterFree(operation, 'aio has been freed')


    @property
    def freed(self):
        return self._freed


    def free(self):
        """ Release the native aio, first stopping any operation in
            progress. A message held by a stopped send goes back to its
            caller; a message that was received but never collected with
            :func:`wait` is freed. Safe to call more than once; never raises.
        """

        if getattr(self, '_freed', True):
            return

        aio = self._aio

        if self._direction is not None:
            native.lib.nng_aio_stop(aio)
            received = self._settle(native.lib.nng_aio_result(aio))

            if received is not None:
                received.free()

        self._aio = None
        self._freed = True

        native.lib.nng_aio_free(aio)
        logger.debug('freed aio %s', aio)


    @property
    def timeout(self):
        return self._timeout


    @timeout.setter
    def timeout(self, timeout):

        self._check_freed('Set aio timeout')

        if timeout is None:
            ms = native.DEFAULT
        elif isinstance(timeout, datetime.timedelta):
            ms = round(timeout.total_seconds() * 1000)
        else:
            ms = int(timeout)

        native.lib.nng_aio_set_timeout(self._aio, ms)
        self._timeout = timeout


    def _check_idle(self, operation):

        if self._direction is not None:
            raise error.Busy(operation, 'aio already has an operation in progress')


    def _begin(self, target, direction):

        operation = 'Begin %s on %s' % (direction, target.kind)
        self._check_idle(operation)
        target._check_closed(operation)

        function = getattr(native.lib, functions[(target.kind, direction)])
        function(target.handle.struct(), self._aio)
        self._direction = direction


    def _settle(self, result):
        """ Resolve message ownership once the operation in progress has
            completed with *result*. Returns the received message, if any.
        """

        direction = self._direction
        message = self._message
        self._direction = None
        self._message = None

        if direction == 'send':
            native.lib.nng_aio_set_msg(self._aio, native.ffi.NULL)

            if result == error.OK:
                # The native library owns the message now.
                message._release()
            else:
                message._reclaim()

            return None

        if direction == 'recv' and result == error.OK:
            msg = native.lib.nng_aio_get_msg(self._aio)
            native.lib.nng_aio_set_msg(self._aio, native.ffi.NULL)
            return Message.adopt(msg)

        return None


    def begin_send(self, target, message):
        """ Begin sending the :class:`nngkit.Message` *message* on *target*,
            a :class:`nngkit.Socket` or :class:`nngkit.Context`. Until
            :func:`wait` reports the outcome the message cannot be used or
            freed; a failed or canceled send returns it to the caller.
        """

        self._check_freed('Begin send')
        self._check_idle('Begin send')
        msg = message._lend('Begin send')

        native.lib.nng_aio_set_msg(self._aio, msg)
        self._message = message

        try:
            self._begin(target, 'send')
        except error.Error:
            native.lib.nng_aio_set_msg(self._aio, native.ffi.NULL)
            self._message = None
            message._reclaim()
            raise

        return self


    def begin_recv(self, target):
        """ Begin receiving a message from *target*.
        """

        self._check_freed('Begin receive')
        self._begin(target, 'recv')
        return self


    def wait(self):
        """ Block until the operation in progress completes. Returns the
            received :class:`nngkit.Message` for a receive, None for a send;
            raises the translated native error if the operation failed,
            including :class:`nngkit.error.Canceled` after :func:`cancel`.
        """

        self._check_freed('Wait for aio')

        native.lib.nng_aio_wait(self._aio)
        result = native.lib.nng_aio_result(self._aio)

        if self._direction == 'send':
            operation = 'Send message'
        else:
            operation = 'Receive message'

        received = self._settle(result)
        error.check(result, operation)

        return received


    def cancel(self):
        """ Cancel the operation in progress, if any; it completes with
            :class:`nngkit.error.Canceled`. Never raises.
        """

        if self._freed:
            return

        native.lib.nng_aio_cancel(self._aio)


# end of class AIO



pending = set()
pending_lock = threading.Lock()


class Operation:
    """ An :class:`AIO` operation in progress. A background thread waits
        for completion and resolves :attr:`future` with the outcome; the
        :class:`AIO` is freed once the operation completes.

        :ivar future: a :class:`concurrent.futures.Future` that resolves to
                      the received :class:`nngkit.Message`, or None for a
                      send, or raises the translated native error.
    """

    def __init__(self, aio):

        self.aio = aio
        self.future = concurrent.futures.Future()
        self._lock = threading.Lock()
        self._done = False

        # Cancellation goes through cancel(), which cancels the native
        # operation; the future itself cannot be canceled.

        self.future.set_running_or_notify_cancel()

        with pending_lock:
            pending.add(self)

        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()


    def run(self):

        try:
            message = self.aio.wait()
        except Exception as e:
            self.future.set_exception(e)
        else:
            self.future.set_result(message)
        finally:
            with self._lock:
                self._done = True
                self.aio.free()

            with pending_lock:
                pending.discard(self)


    def cancel(self):
        """ Cancel the native operation. The future then resolves with
            :class:`nngkit.error.Canceled`, unless the operation completed
            first. Never raises.
        """

        with self._lock:
            if self._done:
                return
            self.aio.cancel()


    def done(self):
        return self.future.done()


    def result(self, timeout=None):
        """ Wait up to *timeout* seconds for the outcome; see :attr:`future`.
        """

        return self.future.result(timeout)


# end of class Operation



def submit_send(target, message, timeout=None):
    """ Begin sending *message* on *target* and return an
        :class:`Operation` tracking it.
    """

    aio = AIO(timeout)

    try:
        aio.begin_send(target, message)
    except Exception:
        aio.free()
        raise

    return Operation(aio)


def submit_recv(target, timeout=None):
    """ Begin receiving from *target* and return an :class:`Operation`
        tracking it.
    """

    aio = AIO(timeout)

    try:
        aio.begin_recv(target)
    except Exception:
        aio.free()
        raise

    return Operation(aio)


def _cleanup():

    with pending_lock:
        operations = list(pending)

    for operation in operations:
        operation.cancel()

    for operation in operations:
        operation.thread.join(1)


atexit.register(_cleanup)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
