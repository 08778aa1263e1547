import pytest

import nngkit


def test_empty(clean_environment):
    assert nngkit.config.defaults() == dict()


def test_values(clean_environment, monkeypatch):

    monkeypatch.setenv('NNGKIT_SEND_TIMEOUT', ' 1000 ')
    monkeypatch.setenv('NNGKIT_RECV_TIMEOUT', '')

    defaults = nngkit.config.defaults()
    assert defaults == {'send-timeout': 1000}


def test_invalid(clean_environment, monkeypatch):

    monkeypatch.setenv('NNGKIT_SEND_TIMEOUT', '1.5')

    with pytest.raises(ValueError) as caught:
        nngkit.config.defaults()

    assert 'NNGKIT_SEND_TIMEOUT' in str(caught.value)

    monkeypatch.setenv('NNGKIT_SEND_TIMEOUT', '-2')

    with pytest.raises(ValueError):
        nngkit.config.defaults()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
