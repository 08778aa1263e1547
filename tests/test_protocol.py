import pytest

import nngkit
from nngkit import error


names = ('pair0', 'pair1', 'push', 'pull', 'pub', 'sub', 'req', 'rep', 'surveyor', 'respondent', 'bus')


def test_open_every_protocol(clean_environment):

    for name in names:
        socket = nngkit.open(name)
        assert socket.closed == False
        assert socket.protocol == name
        assert socket.raw == False
        assert socket.handle.valid
        assert socket.id == socket.handle.id
        socket.close()


def test_open_spellings(clean_environment):

    for protocol in ('REQ', 'req0', nngkit.Protocol.REP, 'Bus0'):
        socket = nngkit.open(protocol)
        assert socket.closed == False
        socket.close()


def test_open_raw(clean_environment):

    socket = nngkit.open('pair1', raw=True)
    assert socket.raw == True
    assert socket.closed == False
    assert socket.get_option('raw', 'bool') == True
    socket.close()

    socket = nngkit.open('pair1')
    assert socket.get_option('raw', 'bool') == False
    socket.close()


def test_open_unknown(recorder):

    for name in ('pair2', 'router', '', 'pair', None, 5, b'pair1'):
        with pytest.raises(error.InvalidArgument) as caught:
            nngkit.open(name)

        assert caught.value.kind == error.ErrorKind.INVALID_ARGUMENT
        assert caught.value.native_code is None

    assert recorder.calls == []


def test_distinct_handles(clean_environment):

    first = nngkit.open('bus')
    second = nngkit.open('bus')

    assert first.handle != second.handle

    first.close()
    second.close()


def test_configured_defaults(monkeypatch):

    monkeypatch.setenv('NNGKIT_RECV_TIMEOUT', '250')
    monkeypatch.setenv('NNGKIT_SEND_TIMEOUT', '-1')

    socket = nngkit.open('pair1')
    assert socket.recv_timeout == 250
    assert socket.send_timeout == -1
    socket.close()


def test_invalid_defaults(monkeypatch, recorder):

    monkeypatch.setenv('NNGKIT_RECV_TIMEOUT', 'soon')

    with pytest.raises(ValueError):
        nngkit.open('pair1')

    assert 'nng_pair1_open' not in recorder.calls


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
