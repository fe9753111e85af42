#!/usr/bin/env python3
''' test the aiohttp transport's wire format and failure classification '''

import asyncio
import json

import aiohttp
import pytest
import pytest_asyncio
from aioresponses import aioresponses

from bravia_control.client import HttpBraviaClientTransport
from bravia_control.exceptions import (
    ErrorKind,
    ApplicationError,
    HttpStatusError,
    MalformedResponseError,
    TransportError,
)
from bravia_control.protocol import ScalarRequest

IRCC_URL = 'http://192.168.1.20:80/sony/IRCC'
SYSTEM_URL = 'http://192.168.1.20:80/sony/system'

FAULT_BODY = '''<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
  <s:Body>
    <s:Fault>
      <faultcode>s:Client</faultcode>
      <faultstring>UPnPError</faultstring>
      <detail>
        <UPnPError xmlns="urn:schemas-upnp-org:control-1-0">
          <errorCode>401</errorCode>
          <errorDescription>Invalid Action</errorDescription>
        </UPnPError>
      </detail>
    </s:Fault>
  </s:Body>
</s:Envelope>'''


@pytest_asyncio.fixture
async def http_transport():
    ''' a transport with its own lazily created session '''
    transport = HttpBraviaClientTransport('192.168.1.20', psk='1234', timeout_secs=2.0)
    yield transport
    await transport.aclose()


def only_request(mock):
    ''' the single request recorded by aioresponses '''
    calls = [call for calls in mock.requests.values() for call in calls]
    assert len(calls) == 1
    return calls[0]


@pytest.mark.asyncio
async def test_ircc_request_format(http_transport):  # pylint: disable=redefined-outer-name
    ''' IRCC codes are POSTed as SOAP with the action and PSK headers '''
    with aioresponses() as mock:
        mock.post(IRCC_URL, status=200, body='')
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
        assert result.is_ok
        call = only_request(mock)
        headers = call.kwargs['headers']
        assert headers['Content-Type'] == 'text/xml; charset=UTF-8'
        assert headers['SOAPACTION'] == '"urn:schemas-sony-com:service:IRCC:1#X_SendIRCC"'
        assert headers['X-Auth-PSK'] == '1234'
        assert b'<IRCCCode>AAAAAQAAAAEAAAAvAw==</IRCCCode>' in call.kwargs['data']


@pytest.mark.asyncio
async def test_ircc_fault_is_application_error(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(IRCC_URL, status=500, body=FAULT_BODY)
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
    assert not result.is_ok
    assert result.kind == ErrorKind.APPLICATION
    error = result.error
    assert isinstance(error, ApplicationError)
    assert error.code == 401
    assert error.message == 'Invalid Action'
    assert error.status == 500
    assert str(error) == 'Invalid Action'


@pytest.mark.asyncio
async def test_ircc_fault_with_200_is_application_error(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(IRCC_URL, status=200, body=FAULT_BODY)
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
    assert result.kind == ErrorKind.APPLICATION


@pytest.mark.asyncio
async def test_ircc_error_without_body_is_http_status(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(IRCC_URL, status=403, body='')
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
    assert isinstance(result.error, HttpStatusError)
    assert result.error.status == 403


@pytest.mark.asyncio
async def test_ircc_undecodable_error_is_malformed(http_transport):  # pylint: disable=redefined-outer-name
    ''' an error body that is not a SOAP fault is reported with the raw body '''
    with aioresponses() as mock:
        mock.post(IRCC_URL, status=500, body='<html>oops')
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
    error = result.error
    assert isinstance(error, MalformedResponseError)
    assert error.raw_body == '<html>oops'
    assert error.status == 500


@pytest.mark.asyncio
async def test_call_request_format(http_transport):  # pylint: disable=redefined-outer-name
    ''' structured calls are POSTed as JSON to the namespace endpoint '''
    body = {'result': [{'status': 'active'}], 'id': 1337}
    with aioresponses() as mock:
        mock.post(SYSTEM_URL, status=200, payload=body)
        result = await http_transport.call(ScalarRequest('system', 'getPowerStatus'))
        call = only_request(mock)
    assert result.is_ok
    response = result.unwrap()
    assert response.first_result() == {'status': 'active'}
    assert call.kwargs['headers']['Content-Type'] == 'application/json; charset=UTF-8'
    assert call.kwargs['headers']['X-Auth-PSK'] == '1234'
    assert json.loads(call.kwargs['data']) == {
        'method': 'getPowerStatus', 'id': 1337, 'params': [], 'version': '1.0'}


@pytest.mark.asyncio
async def test_call_http_500_names_method_and_status(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(SYSTEM_URL, status=500, body='{"result": [{"status": "active"}]}')
        result = await http_transport.call(ScalarRequest('system', 'getPowerStatus'))
    error = result.error
    assert isinstance(error, HttpStatusError)
    assert error.method == 'getPowerStatus'
    assert error.status == 500
    assert str(error) == 'getPowerStatus. Response error, status code: 500.'


@pytest.mark.asyncio
async def test_call_error_pair_is_application_error(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(SYSTEM_URL, status=200, payload={'error': [7, 'Illegal State'], 'id': 1337})
        result = await http_transport.call(ScalarRequest('system', 'setPowerStatus', [{'status': True}]))
    error = result.error
    assert isinstance(error, ApplicationError)
    assert error.code == 7
    assert error.message == 'Illegal State'


@pytest.mark.asyncio
async def test_call_bad_json_is_malformed(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(SYSTEM_URL, status=200, body='not json')
        result = await http_transport.call(ScalarRequest('system', 'getPowerStatus'))
    assert isinstance(result.error, MalformedResponseError)
    assert result.error.raw_body == 'not json'


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(SYSTEM_URL, exception=aiohttp.ClientConnectionError('Connection refused'))
        result = await http_transport.call(ScalarRequest('system', 'getPowerStatus'))
    error = result.error
    assert isinstance(error, TransportError)
    assert isinstance(error.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_timeout_is_transport_error(http_transport):  # pylint: disable=redefined-outer-name
    with aioresponses() as mock:
        mock.post(IRCC_URL, exception=asyncio.TimeoutError())
        result = await http_transport.send_ircc('AAAAAQAAAAEAAAAvAw==')
    assert result.kind == ErrorKind.TRANSPORT


@pytest.mark.asyncio
async def test_caller_owned_session_is_not_closed():
    session = aiohttp.ClientSession()
    try:
        transport = HttpBraviaClientTransport('192.168.1.20', session=session)
        await transport.aclose()
        assert not session.closed
    finally:
        await session.close()


@pytest.mark.asyncio
async def test_ipv6_host_is_bracketed():
    transport = HttpBraviaClientTransport('fe80::1', port=8080)
    assert transport.base_url == 'http://[fe80::1]:8080'
    await transport.aclose()
