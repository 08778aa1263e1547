import pytest
import socket as pysocket

import nngkit


class Recorder:
    """ Stand-in for the native library that records the name of every
        native function looked up, and otherwise defers to the real one.
    """

    def __init__(self, lib):
        self.lib = lib
        self.calls = list()

    def __getattr__(self, name):
        self.calls.append(name)
        return getattr(self.lib, name)


@pytest.fixture
def recorder(monkeypatch):

    recorder = Recorder(nngkit.native.lib)
    monkeypatch.setattr(nngkit.native, 'lib', recorder)

    yield recorder


@pytest.fixture
def address():
    """ A tcp:// address on the loopback interface with a port that was
        free a moment ago.
    """

    finder = pysocket.socket(pysocket.AF_INET, pysocket.SOCK_STREAM)
    finder.bind(('127.0.0.1', 0))
    port = finder.getsockname()[1]
    finder.close()

    return 'tcp://127.0.0.1:%d' % (port)


@pytest.fixture
def clean_environment(monkeypatch):

    for variable in nngkit.config.variables:
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def pair(address, clean_environment):
    """ Two connected pair1 sockets, with receive timeouts so that a broken
        test fails instead of hanging.
    """

    server = nngkit.open('pair1')
    client = nngkit.open('pair1')

    server.recv_timeout = 5000
    client.recv_timeout = 5000

    server.listen(address)
    client.dial(address)

    yield server, client

    client.close()
    server.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
