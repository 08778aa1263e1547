import datetime
import pytest

import nngkit
from nngkit import error
from nngkit.option import OptionType, encode, infer, resolve


def test_infer():

    assert infer(True) == OptionType.BOOL
    assert infer(False) == OptionType.BOOL
    assert infer(0) == OptionType.INT
    assert infer(-1) == OptionType.INT
    assert infer(2 ** 31 - 1) == OptionType.INT
    assert infer(-2 ** 31) == OptionType.INT
    assert infer(2 ** 31) == OptionType.UINT64
    assert infer(2 ** 64 - 1) == OptionType.UINT64
    assert infer(datetime.timedelta(seconds=1)) == OptionType.MS
    assert infer('name') == OptionType.STRING
    assert infer(b'name') == OptionType.STRING


def test_infer_rejected():

    for value in (1.5, None, [1], 2 ** 64, -2 ** 31 - 1, object()):
        with pytest.raises(error.InvalidArgument):
            infer(value)


def test_resolve():

    assert resolve('ms') == OptionType.MS
    assert resolve('duration-ms') == OptionType.MS
    assert resolve('signed-int') == OptionType.INT
    assert resolve('unsigned-64') == OptionType.UINT64
    assert resolve('STRING') == OptionType.STRING
    assert resolve(OptionType.SIZE) == OptionType.SIZE

    for type in ('float', '', None, 3):
        with pytest.raises(error.InvalidArgument):
            resolve(type)


def test_encode_ranges():

    assert encode(5, OptionType.INT) == 5
    assert encode(datetime.timedelta(milliseconds=1500), OptionType.MS) == 1500
    assert encode(2 ** 40, OptionType.UINT64) == 2 ** 40
    assert encode(True, OptionType.BOOL) is True

    with pytest.raises(error.InvalidArgument):
        encode(2 ** 31, OptionType.INT)

    with pytest.raises(error.InvalidArgument):
        encode(-1, OptionType.UINT64)

    with pytest.raises(error.InvalidArgument):
        encode(-1, OptionType.SIZE)

    with pytest.raises(error.InvalidArgument):
        encode(1, OptionType.BOOL)

    with pytest.raises(error.InvalidArgument):
        encode(True, OptionType.INT)

    with pytest.raises(error.InvalidArgument):
        encode('text', OptionType.MS)

    with pytest.raises(error.InvalidArgument):
        encode(5, OptionType.STRING)


def test_send_timeout_round_trip(clean_environment):

    socket = nngkit.open('pair1')

    socket.set_option('send-timeout', 1000, 'ms')
    assert socket.get_option('send-timeout', 'duration-ms') == 1000

    socket.send_timeout = 250
    assert socket.send_timeout == 250

    socket.recv_timeout = datetime.timedelta(seconds=2)
    assert socket.recv_timeout == 2000

    socket.close()


def test_size_round_trip(clean_environment):

    socket = nngkit.open('pair1')

    socket.set_option('recv-size-max', 4096, 'size')
    assert socket.get_option('recv-size-max', 'size') == 4096

    socket.close()


def test_string_round_trip(clean_environment):

    socket = nngkit.open('pair1')

    socket.name = 'unittest'
    assert socket.name == 'unittest'

    socket.set_option('socket-name', 'inferred')
    assert socket.get_option('socket-name', 'string') == 'inferred'

    socket.close()


def test_unsupported_value_before_native_call(clean_environment, recorder):

    socket = nngkit.open('pair1')
    recorder.calls.clear()

    with pytest.raises(error.InvalidArgument):
        socket.set_option('send-timeout', 1.5)

    with pytest.raises(error.InvalidArgument):
        socket.set_option('send-timeout', None)

    with pytest.raises(error.InvalidArgument):
        socket.set_option('send-timeout', 1000, 'float')

    with pytest.raises(error.InvalidArgument):
        socket.get_option('send-timeout', 'float')

    with pytest.raises(error.InvalidArgument):
        socket.set_option(5, 1000)

    assert recorder.calls == []

    socket.close()


def test_unknown_option(clean_environment):

    socket = nngkit.open('pair1')

    with pytest.raises(nngkit.Error) as caught:
        socket.get_option('no-such-option', 'int')

    assert caught.value.native_code is not None
    assert caught.value.operation == 'Get option no-such-option'

    socket.close()


def test_bytes_name_in_errors(clean_environment):

    socket = nngkit.open('pair1')

    with pytest.raises(nngkit.Error) as caught:
        socket.get_option(b'no-such-option', 'int')
    assert caught.value.operation == 'Get option no-such-option'

    with pytest.raises(nngkit.Error) as caught:
        socket.set_option(b'no-such-option', 5)
    assert caught.value.operation == 'Set option no-such-option'

    socket.close()

    with pytest.raises(error.Closed) as caught:
        socket.get_option(b'recv-timeout', 'ms')
    assert caught.value.operation == 'Get option recv-timeout'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
