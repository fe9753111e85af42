#!/usr/bin/env python3
''' shared fixtures and fakes for bravia_control tests '''

import json

import pytest

from bravia_control.client import BraviaClient, BraviaClientTransport
from bravia_control.exceptions import ApplicationError
from bravia_control.protocol import Ok, Err, ScalarResponse

REMOTE_CONTROLLER_INFO = {
    "result": [
        {"bundled": True, "type": "RM-J1100"},
        [
            {"name": "PowerOff", "value": "AAAAAQAAAAEAAAAvAw=="},
            {"name": "VolumeUp", "value": "AAAAAQAAAAEAAAASAw=="},
            {"name": "VolumeDown", "value": "AAAAAQAAAAEAAAATAw=="},
            {"name": "Mute", "value": "AAAAAQAAAAEAAAAUAw=="},
            {"name": "Home", "value": "AAAAAQAAAAEAAABgAw=="},
        ],
    ],
    "id": 1337,
}


class FakeTransport(BraviaClientTransport):
    ''' in-memory transport that answers Scalar calls from canned bodies '''

    def __init__(self):
        self.calls = []
        self.sent = []
        self.bodies = {}
        self.call_errors = {}
        self.ircc_errors = {}
        self.closed = False

    def respond(self, namespace, method, body):
        ''' answer namespace/method with a decoded JSON body '''
        self.bodies[(namespace, method)] = body

    def fail_call(self, namespace, method, error):
        ''' answer namespace/method with a classified error '''
        self.call_errors[(namespace, method)] = error

    def fail_ircc(self, code, error):
        self.ircc_errors[code] = error

    def count(self, method):
        return len([call for call in self.calls if call.method == method])

    async def send_ircc(self, code):
        self.sent.append(code)
        error = self.ircc_errors.get(code)
        if error is not None:
            return Err(error)
        return Ok('')

    async def call(self, request):
        self.calls.append(request)
        key = (request.namespace.value, request.method)
        if key in self.call_errors:
            return Err(self.call_errors[key])
        if key not in self.bodies:
            raise AssertionError(f'unexpected call {request}')
        body = self.bodies[key]
        if 'error' in body:
            code, message = body['error'][0], body['error'][1]
            return Err(ApplicationError(request.method, code, message, status=200))
        return Ok(ScalarResponse(request.method, body, raw_body=json.dumps(body)))

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_bravia_environment(monkeypatch):
    ''' keep the developer's BRAVIA_* settings out of the tests '''
    for name in ('BRAVIA_HOST', 'BRAVIA_PORT', 'BRAVIA_PSK', 'BRAVIA_TIMEOUT', 'BRAVIA_CONFIG'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def transport():
    ''' a fake transport that knows the remote controller table '''
    fake = FakeTransport()
    fake.respond('system', 'getRemoteControllerInfo', REMOTE_CONTROLLER_INFO)
    return fake


@pytest.fixture
def client(transport):  # pylint: disable=redefined-outer-name
    ''' a client over the fake transport with no pause between commands '''
    return BraviaClient(transport, command_interval_secs=0)
