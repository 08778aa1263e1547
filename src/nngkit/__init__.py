""" Python binding for the NNG messaging library. This includes opening
    sockets for the scalability protocols (pair, push/pull, pub/sub,
    req/rep, surveyor/respondent, bus), sending and receiving bytes or
    messages over them, typed socket options, and translation of native
    failures into exceptions.
"""

# Utility components.

from . import native
from . import config
from . import error
from . import handle

# Native resources.

from . import option
from . import message
from . import socket
from . import protocol
from . import endpoint
from . import aio
from . import context

# Primary public-facing interfaces.

open = protocol.open
version = native.version

from .native import Flag
from .error import Error, ErrorKind
from .message import Message
from .socket import Socket
from .protocol import Protocol
from .endpoint import Dialer, Listener
from .context import Context
from .aio import AIO

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
