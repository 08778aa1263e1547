import threading
import time
import pytest

import nngkit
from nngkit import error
from nngkit import Flag
from nngkit.handle import Family


def test_close_is_idempotent(clean_environment):

    socket = nngkit.open('pair1')
    assert socket.closed == False

    socket.close()
    assert socket.closed == True

    socket.close()
    socket.close()
    assert socket.closed == True


def test_context_manager(clean_environment):

    with nngkit.open('pair0') as socket:
        assert socket.closed == False

    assert socket.closed == True


def test_closed_operations(clean_environment, recorder, address):

    socket = nngkit.open('pair1')
    message = nngkit.Message()
    socket.close()

    recorder.calls.clear()

    operations = (
        lambda: socket.listen(address),
        lambda: socket.dial(address),
        lambda: socket.send(b'data'),
        lambda: socket.send_message(message),
        lambda: socket.recv(),
        lambda: socket.recv_message(),
        lambda: socket.set_option('send-timeout', 1000, 'ms'),
        lambda: socket.get_option('send-timeout', 'ms'),
        lambda: socket.get_option('send-timeout', 'no-such-type'),
        lambda: socket.set_option_ms('recv-timeout', 10),
        lambda: socket.send_timeout,
        lambda: nngkit.Context(socket),
        lambda: nngkit.Dialer(socket, address),
        lambda: nngkit.Listener(socket, address),
    )

    for operation in operations:
        with pytest.raises(error.Closed) as caught:
            operation()
        assert caught.value.kind == error.ErrorKind.CLOSED

    assert recorder.calls == []

    # The message was never handed over, so it is still ours.

    assert message.freed == False
    message.free()


def test_nonblocking_recv(clean_environment):

    socket = nngkit.open('pair1')

    begin = time.monotonic()

    with pytest.raises(error.WouldBlock) as caught:
        socket.recv(Flag.NONBLOCK)

    with pytest.raises(error.WouldBlock):
        socket.recv_message(Flag.NONBLOCK)

    elapsed = time.monotonic() - begin
    assert elapsed < 1
    assert caught.value.kind == error.ErrorKind.WOULD_BLOCK
    assert caught.value.native_code == error.EAGAIN

    socket.close()


def test_recv_timeout(clean_environment):

    socket = nngkit.open('pair1')
    socket.recv_timeout = 50

    with pytest.raises(error.Timeout):
        socket.recv()

    socket.close()


def test_close_while_blocked(clean_environment):

    socket = nngkit.open('pull')
    caught = list()

    def receive():
        try:
            socket.recv()
        except nngkit.Error as e:
            caught.append(e)

    thread = threading.Thread(target=receive, daemon=True)
    thread.start()

    time.sleep(0.1)
    socket.close()
    thread.join(5)

    assert thread.is_alive() == False
    assert len(caught) == 1
    assert caught[0].kind in (error.ErrorKind.CLOSED, error.ErrorKind.CANCELED)


def test_pair_exchange(pair):

    server, client = pair
    time.sleep(0.1)

    server.send(b'ping')
    assert client.recv() == b'ping'

    client.send(b'pong')
    assert server.recv() == b'pong'

    server.send('text')
    assert client.recv() == b'text'

    server.send(bytearray(b'buffer'))
    assert client.recv() == b'buffer'

    server.close()
    client.close()
    server.close()


def test_send_rejects_integers(pair):

    server, client = pair

    with pytest.raises(error.InvalidArgument):
        server.send(5)


def test_message_exchange(pair):

    server, client = pair
    time.sleep(0.1)

    message = nngkit.Message()
    message.body = b'hello'
    server.send_message(message)

    # Ownership passed to the native library with the send.

    assert message.freed == True
    with pytest.raises(error.UseAfterFree):
        message.body
    message.free()

    received = client.recv_message()
    assert received.body == b'hello'
    assert received.pipe.valid == True

    remote = nngkit.option.get('pipe', received.pipe, 'remote-address', 'addr')
    assert remote.family == Family.INET
    assert remote.host == '127.0.0.1'

    received.free()


def test_request_reply(address, clean_environment):

    rep = nngkit.open('rep')
    req = nngkit.open('req')
    rep.recv_timeout = 5000
    req.recv_timeout = 5000

    rep.listen(address)
    req.dial(address)
    time.sleep(0.1)

    req.send(b'Q')
    assert rep.recv() == b'Q'

    rep.send(b'A')
    assert req.recv() == b'A'

    rep.close()
    req.close()


def test_request_reply_bad_state(address, clean_environment):

    rep = nngkit.open('rep')
    req = nngkit.open('req')

    rep.listen(address)
    req.dial(address)

    # A reply with no request outstanding, and a receive on the requester
    # with no request sent, both violate the protocol.

    with pytest.raises(error.BadState) as caught:
        rep.send(b'unsolicited')
    assert caught.value.kind == error.ErrorKind.BAD_STATE

    with pytest.raises(error.BadState):
        req.recv()

    rep.close()
    req.close()


def test_second_request_does_not_hang(address, clean_environment):

    rep = nngkit.open('rep')
    req = nngkit.open('req')
    rep.recv_timeout = 5000
    req.recv_timeout = 5000

    rep.listen(address)
    req.dial(address)
    time.sleep(0.1)

    req.send(b'first')

    begin = time.monotonic()
    req.send(b'second')
    elapsed = time.monotonic() - begin
    assert elapsed < 1

    # The second request replaces the first; a reply to the first, if it
    # was delivered at all, is discarded by the requester.

    received = rep.recv()
    if received == b'first':
        rep.send(b'stale')
        received = rep.recv()

    assert received == b'second'

    rep.send(b'answer')
    assert req.recv() == b'answer'

    rep.close()
    req.close()


def test_push_pull(address, clean_environment):

    push = nngkit.open('push')
    pull = nngkit.open('pull')
    pull.recv_timeout = 5000

    push.listen(address)
    pull.dial(address)
    time.sleep(0.1)

    push.send(b'Task 1')
    assert pull.recv() == b'Task 1'

    push.close()
    pull.close()


def test_endpoint_handles(address, clean_environment):

    server = nngkit.open('pair1')
    client = nngkit.open('pair1')

    server.listen(address)
    client.dial(address)

    assert len(server.listeners) == 1
    assert server.listeners[0].valid
    assert len(client.dialers) == 1
    assert client.dialers[0].valid

    client.close()
    server.close()


def test_address_in_use(address, clean_environment):

    first = nngkit.open('pair1')
    second = nngkit.open('pair1')

    first.listen(address)

    with pytest.raises(error.AddressError) as caught:
        second.listen(address)

    assert caught.value.kind == error.ErrorKind.ADDRESS_IN_USE
    assert caught.value.operation == 'Listen on ' + address

    first.close()
    second.close()


def test_dial_refused(address, clean_environment):

    socket = nngkit.open('pair1')

    with pytest.raises(error.ConnectionFailure) as caught:
        socket.dial(address)

    assert caught.value.kind == error.ErrorKind.CONNECTION_REFUSED

    # Without blocking, the dial is accepted and retried in the background.

    socket.dial(address, Flag.NONBLOCK)
    socket.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
