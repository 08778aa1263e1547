""" Value types for the native handles. A handle is nothing more than the
    numeric identifier the native library assigned to a resource; it does
    not own anything, and copying one does not copy the resource. Ownership
    belongs to the wrapper objects (:class:`nngkit.Socket`, etc.) that hold
    a handle.
"""

from __future__ import annotations

import dataclasses
import enum
import ipaddress
import socket as pysocket
from typing import Optional

from . import native


@dataclasses.dataclass(frozen=True)
class Handle:
    """ Base class for the native handle types. Equality is by id; id 0 is
        the value the native library uses for an unset handle.
    """

    id: int = 0
    _pointer: object = dataclasses.field(default=None, init=False, repr=False, compare=False)

    ctype = None

    def __post_init__(self):

        # The struct is kept alive for as long as the handle, so that
        # struct() can hand out a by-value view of it.

        if self.ctype is not None:
            pointer = native.ffi.new(self.ctype + ' *', {'id': self.id})
            object.__setattr__(self, '_pointer', pointer)


    @property
    def valid(self) -> bool:
        return self.id > 0


    def struct(self):
        """ Return a native struct, by value, suitable for passing to the
            native library.
        """

        return self._pointer[0]


    @classmethod
    def from_native(cls, struct):
        """ Build a handle from a native struct, or a pointer to one.
        """

        if native.ffi.typeof(struct).kind == 'pointer':
            struct = struct[0]

        return cls(int(struct.id))


    @classmethod
    def pointer(cls):
        """ Return a newly allocated, zeroed native struct pointer to be
            filled in by a native call.
        """

        return native.ffi.new(cls.ctype + ' *')



@dataclasses.dataclass(frozen=True)
class SocketHandle(Handle):
    ctype = 'nng_socket'


@dataclasses.dataclass(frozen=True)
class DialerHandle(Handle):
    ctype = 'nng_dialer'


@dataclasses.dataclass(frozen=True)
class ListenerHandle(Handle):
    ctype = 'nng_listener'


@dataclasses.dataclass(frozen=True)
class ContextHandle(Handle):
    ctype = 'nng_ctx'


@dataclasses.dataclass(frozen=True)
class PipeHandle(Handle):
    ctype = 'nng_pipe'



class Family(enum.IntEnum):
    """ Socket address families, as numbered by the native library.
    """

    UNSPEC = 0
    INPROC = 1
    IPC = 2
    INET = 3
    INET6 = 4
    ZT = 5
    ABSTRACT = 6


@dataclasses.dataclass(frozen=True)
class Address:
    """ A family-qualified socket address, as reported by the address
        options of pipes, dialers and listeners.
    """

    family: Family
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    scope: Optional[int] = None

    def __str__(self):

        family = self.family

        if family == Family.INET:
            return 'tcp://%s:%d' % (self.host, self.port)
        if family == Family.INET6:
            return 'tcp://[%s]:%d' % (self.host, self.port)
        if family == Family.IPC:
            return 'ipc://' + self.path
        if family == Family.INPROC:
            return 'inproc://' + self.path
        if family == Family.ABSTRACT:
            return 'abstract://' + self.path

        return '<%s address>' % (family.name.lower())


    @classmethod
    def from_native(cls, sockaddr):
        """ Interpret a native ``nng_sockaddr`` union. Ports and IP addresses
            arrive in network byte order.
        """

        ffi = native.ffi

        if ffi.typeof(sockaddr).kind == 'pointer':
            sockaddr = sockaddr[0]

        try:
            family = Family(sockaddr.s_family)
        except ValueError:
            return cls(Family.UNSPEC)

        if family == Family.INET:
            raw = sockaddr.s_in
            port = pysocket.ntohs(raw.sa_port)
            packed = bytes(ffi.buffer(ffi.addressof(raw, 'sa_addr'), 4))
            host = str(ipaddress.IPv4Address(packed))
            return cls(family, host=host, port=port)

        if family == Family.INET6:
            raw = sockaddr.s_in6
            port = pysocket.ntohs(raw.sa_port)
            host = str(ipaddress.IPv6Address(bytes(ffi.buffer(raw.sa_addr))))
            return cls(family, host=host, port=port, scope=int(raw.sa_scope))

        if family == Family.IPC:
            path = ffi.string(sockaddr.s_ipc.sa_path).decode(errors='replace')
            return cls(family, path=path)

        if family == Family.INPROC:
            path = ffi.string(sockaddr.s_inproc.sa_name).decode(errors='replace')
            return cls(family, path=path)

        if family == Family.ABSTRACT:
            raw = sockaddr.s_abstract
            path = native.read(raw.sa_name, raw.sa_len).decode(errors='replace')
            return cls(family, path=path)

        return cls(family)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
