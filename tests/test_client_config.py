#!/usr/bin/env python3
''' test BraviaClientConfig defaults, environment overrides and JSON round trips '''

import pytest

from bravia_control.client import BraviaClientConfig
from bravia_control.constants import (
    DEFAULT_COMMAND_INTERVAL,
    DEFAULT_DISCOVERY_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_PSK,
    DEFAULT_TIMEOUT,
)
from bravia_control.exceptions import BraviaConfigError


def test_defaults_without_environment():
    config = BraviaClientConfig()
    assert config.default_host == 'ssdp://'
    assert config.default_port == DEFAULT_PORT
    assert config.psk == DEFAULT_PSK
    assert config.timeout_secs == DEFAULT_TIMEOUT
    assert config.command_interval_secs == DEFAULT_COMMAND_INTERVAL
    assert config.discovery_timeout_secs == DEFAULT_DISCOVERY_TIMEOUT


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv('BRAVIA_HOST', '192.168.1.20')
    monkeypatch.setenv('BRAVIA_PORT', '8080')
    monkeypatch.setenv('BRAVIA_PSK', 'sony')
    monkeypatch.setenv('BRAVIA_TIMEOUT', '2.5')
    config = BraviaClientConfig()
    assert config.default_host == '192.168.1.20'
    assert config.default_port == 8080
    assert config.psk == 'sony'
    assert config.timeout_secs == 2.5


def test_arguments_override_environment(monkeypatch):
    monkeypatch.setenv('BRAVIA_HOST', '192.168.1.20')
    monkeypatch.setenv('BRAVIA_PSK', 'sony')
    config = BraviaClientConfig('tv.local', psk='1234', default_port=50001)
    assert config.default_host == 'tv.local'
    assert config.psk == '1234'
    assert config.default_port == 50001


@pytest.mark.parametrize('name,value', [('BRAVIA_PORT', 'eighty'), ('BRAVIA_TIMEOUT', 'soon')])
def test_invalid_environment_is_config_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(BraviaConfigError):
        BraviaClientConfig()


def test_base_config_is_inherited():
    base = BraviaClientConfig('192.168.1.20', psk='1234', command_interval_secs=0.1)
    config = BraviaClientConfig(timeout_secs=9.0, base_config=base)
    assert config.default_host == '192.168.1.20'
    assert config.psk == '1234'
    assert config.command_interval_secs == 0.1
    assert config.timeout_secs == 9.0
    assert base.timeout_secs == DEFAULT_TIMEOUT


def test_from_jsonable():
    config = BraviaClientConfig.from_jsonable(
        {'host': '192.168.1.20', 'port': '8080', 'psk': '1234', 'command_interval_secs': 0})
    assert config.default_host == '192.168.1.20'
    assert config.default_port == 8080
    assert config.psk == '1234'
    assert config.command_interval_secs == 0.0
    assert config.timeout_secs == DEFAULT_TIMEOUT


def test_from_jsonable_rejects_unknown_keys():
    with pytest.raises(BraviaConfigError) as excinfo:
        BraviaClientConfig.from_jsonable({'host': '192.168.1.20', 'pin': '1234'})
    assert 'pin' in str(excinfo.value)


def test_from_jsonable_rejects_bad_values():
    with pytest.raises(BraviaConfigError):
        BraviaClientConfig.from_jsonable({'timeout_secs': 'forever'})


def test_to_jsonable_is_accepted_by_from_jsonable():
    config = BraviaClientConfig('192.168.1.20', psk='1234', default_port=8080)
    data = config.to_jsonable()
    assert data['host'] == '192.168.1.20'
    assert data['psk'] == '1234'
    copy = BraviaClientConfig.from_jsonable(data)
    assert copy.to_jsonable() == data
