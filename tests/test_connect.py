#!/usr/bin/env python3
''' test the connector and convenience connect functions '''

import json

import pytest
from fastapi.testclient import TestClient

from bravia_control.client import (
    BraviaClient,
    BraviaClientConfig,
    HttpBraviaClientTransport,
    HttpBraviaConnector,
    bravia_connect,
)
from bravia_control.exceptions import BraviaConfigError
from bravia_control.rest_server import app as rest_app


@pytest.mark.asyncio
async def test_bravia_connect_with_literal_host():
    client = await bravia_connect('192.168.1.20:8080', psk='1234')
    try:
        assert isinstance(client, BraviaClient)
        transport = client.transport
        assert isinstance(transport, HttpBraviaClientTransport)
        assert (transport.host, transport.port, transport.psk) == ('192.168.1.20', 8080, '1234')
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_client_create_takes_psk_and_timeout_from_environment(monkeypatch):
    monkeypatch.setenv('BRAVIA_PSK', 'sony')
    monkeypatch.setenv('BRAVIA_TIMEOUT', '2.5')
    client = await BraviaClient.create('192.168.1.20')
    try:
        transport = client.transport
        assert (transport.host, transport.psk, transport.timeout_secs) == ('192.168.1.20', 'sony', 2.5)
        assert client.config.psk == 'sony'
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_client_create_arguments_override_environment(monkeypatch):
    monkeypatch.setenv('BRAVIA_PSK', 'sony')
    monkeypatch.setenv('BRAVIA_TIMEOUT', '2.5')
    client = await BraviaClient.create('192.168.1.20', psk='1234', timeout_secs=1.0)
    try:
        assert (client.transport.psk, client.transport.timeout_secs) == ('1234', 1.0)
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_connector_takes_settings_from_config():
    config = BraviaClientConfig('http://192.168.1.20', psk='1234', timeout_secs=1.5, command_interval_secs=0.1)
    transport = await HttpBraviaConnector(config=config).connect()
    try:
        assert (transport.host, transport.port, transport.timeout_secs) == ('192.168.1.20', 80, 1.5)
    finally:
        await transport.aclose()
    client = BraviaClient(transport, config=config)
    assert client.command_interval_secs == 0.1


def test_connector_rejects_unsupported_scheme():
    with pytest.raises(BraviaConfigError):
        HttpBraviaConnector('https://192.168.1.20')


def test_load_raw_config_from_file(monkeypatch, tmp_path):
    config_file = tmp_path / 'bravia_config.json'
    config_file.write_text(json.dumps({'host': '192.168.1.20', 'psk': '1234'}))
    monkeypatch.setenv('BRAVIA_CONFIG', str(config_file))
    assert rest_app.load_raw_config() == {'host': '192.168.1.20', 'psk': '1234'}


def test_load_raw_config_without_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert rest_app.load_raw_config() == {}


def test_load_raw_config_rejects_non_object(monkeypatch, tmp_path):
    config_file = tmp_path / 'bravia_config.json'
    config_file.write_text('[1, 2, 3]')
    monkeypatch.setenv('BRAVIA_CONFIG', str(config_file))
    with pytest.raises(BraviaConfigError):
        rest_app.load_raw_config()


def test_server_lifespan_connects_and_closes(monkeypatch, tmp_path, transport):
    ''' the server connects with the file config at startup and closes the client at shutdown '''
    config_file = tmp_path / 'bravia_config.json'
    config_file.write_text(json.dumps({'host': '192.168.1.20', 'psk': '1234', 'command_interval_secs': 0}))
    monkeypatch.setenv('BRAVIA_CONFIG', str(config_file))
    configs = []

    async def fake_connect(config=None):
        configs.append(config)
        return BraviaClient(transport, config=config)

    monkeypatch.setattr(rest_app, 'bravia_connect', fake_connect)
    with TestClient(rest_app.bravia_api) as api:
        response = api.get('/config')
        assert response.status_code == 200
        assert response.json()['host'] == '192.168.1.20'
        assert not transport.closed
    assert transport.closed
    assert configs[0].psk == '1234'
