""" Opening sockets. Each scalability protocol has its own native opener,
    plus a raw-mode variant; :func:`open` selects one by protocol name and
    wraps the resulting native handle in a :class:`nngkit.Socket`.
"""

import enum
import logging
import types

from . import config
from . import error
from . import native
from .handle import SocketHandle
from .socket import Socket

logger = logging.getLogger(__name__)


class Protocol(enum.Enum):

    PAIR0 = 'pair0'
    PAIR1 = 'pair1'
    PUSH = 'push'
    PULL = 'pull'
    PUB = 'pub'
    SUB = 'sub'
    REQ = 'req'
    REP = 'rep'
    SURVEYOR = 'surveyor'
    RESPONDENT = 'respondent'
    BUS = 'bus'


# Protocol -> name of the native opener, minus any _raw suffix.

openers = types.MappingProxyType({
    Protocol.PAIR0: 'nng_pair0_open',
    Protocol.PAIR1: 'nng_pair1_open',
    Protocol.PUSH: 'nng_push0_open',
    Protocol.PULL: 'nng_pull0_open',
    Protocol.PUB: 'nng_pub0_open',
    Protocol.SUB: 'nng_sub0_open',
    Protocol.REQ: 'nng_req0_open',
    Protocol.REP: 'nng_rep0_open',
    Protocol.SURVEYOR: 'nng_surveyor0_open',
    Protocol.RESPONDENT: 'nng_respondent0_open',
    Protocol.BUS: 'nng_bus0_open',
})


# Versioned spellings accepted as synonyms.

aliases = types.MappingProxyType({
    'push0': Protocol.PUSH,
    'pull0': Protocol.PULL,
    'pub0': Protocol.PUB,
    'sub0': Protocol.SUB,
    'req0': Protocol.REQ,
    'rep0': Protocol.REP,
    'surveyor0': Protocol.SURVEYOR,
    'respondent0': Protocol.RESPONDENT,
    'bus0': Protocol.BUS,
})


def resolve(protocol):
    """ Return the :class:`Protocol` named by *protocol*, which may be a
        :class:`Protocol` or a case-insensitive name. Unknown names raise
        :class:`nngkit.error.InvalidArgument`.
    """

    if isinstance(protocol, Protocol):
        return protocol

    try:
        name = protocol.lower()
    except AttributeError:
        name = None

    try:
        return Protocol(name)
    except ValueError:
        pass

    try:
        return aliases[name]
    except KeyError:
        raise error.InvalidArgument('Open socket', 'unknown protocol: %r' % (protocol,))


def opener(protocol, raw=False):
    """ Return the native function that opens a socket for *protocol*.
    """

    name = openers[resolve(protocol)]

    if raw:
        name += '_raw'

    return getattr(native.lib, name)


def open(protocol, raw=False):
    """ Open and return a new :class:`nngkit.Socket` speaking *protocol*,
        one of pair0, pair1, push, pull, pub, sub, req, rep, surveyor,
        respondent or bus. A raw-mode socket is opened if *raw* is True.

        Default timeouts from :func:`nngkit.config.defaults` are applied to
        the new socket.
    """

    protocol = resolve(protocol)
    defaults = config.defaults()
    function = opener(protocol, raw)

    pointer = SocketHandle.pointer()
    mode = ' (raw)' if raw else ''
    result = function(pointer)
    error.check(result, 'Open ' + protocol.value + mode + ' socket')

    socket = Socket(SocketHandle.from_native(pointer), protocol.value, raw)
    logger.debug('opened %s%s socket %d', protocol.value, mode, socket.handle.id)

    try:
        for name, value in defaults.items():
            socket.set_option_ms(name, value)
    except Exception:
        socket.close()
        raise

    return socket


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
